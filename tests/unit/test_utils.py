"""Tests for shared helpers."""

import pytest

from authgate.utils import normalize_ip, parse_duration, redact_email


class TestParseDuration:
    @pytest.mark.parametrize(
        ("value", "seconds"),
        [
            ("30s", 30),
            ("15m", 900),
            ("12h", 43200),
            ("1d", 86400),
            ("30d", 2592000),
            ("2w", 1209600),
            ("1y", 31536000),
            ("3600", 3600),
            (" 1D ", 86400),
            (45, 45),
        ],
    )
    def test_valid(self, value, seconds):
        assert parse_duration(value) == seconds

    @pytest.mark.parametrize("value", ["", "d", "1.5h", "10 days", "-1d"])
    def test_invalid(self, value):
        with pytest.raises(ValueError, match="Invalid duration"):
            parse_duration(value)


class TestNormalizeIp:
    def test_strips_ipv4_mapped_prefix(self):
        assert normalize_ip("::ffff:127.0.0.1") == "127.0.0.1"

    def test_keeps_plain_ipv4(self):
        assert normalize_ip("10.1.2.3") == "10.1.2.3"

    def test_keeps_real_ipv6(self):
        assert normalize_ip("2001:db8::1") == "2001:db8::1"

    def test_none(self):
        assert normalize_ip(None) is None


def test_redact_email():
    assert redact_email("alice@example.com") == "al***@example.com"
    assert redact_email("no-at-sign") == "redacted"
