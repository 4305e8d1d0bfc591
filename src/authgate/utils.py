import re
from datetime import UTC, datetime

DURATION_RE = re.compile(r"^\s*(\d+)\s*(s|m|h|d|w|y)?\s*$")

DURATION_UNITS = {
    "s": 1,
    "m": 60,
    "h": 60 * 60,
    "d": 24 * 60 * 60,
    "w": 7 * 24 * 60 * 60,
    "y": 365 * 24 * 60 * 60,
}

IPV4_MAPPED_PREFIX = "::ffff:"


def now() -> datetime:
    return datetime.now(UTC)


def parse_duration(value: str | int) -> int:
    """Convert a duration like "15m", "1d" or "3600" to seconds."""
    if isinstance(value, int):
        return value
    match = DURATION_RE.fullmatch(value.lower())
    if match is None:
        raise ValueError(f"Invalid duration: '{value}'")
    amount, unit = match.groups()
    return int(amount) * DURATION_UNITS[unit or "s"]


def normalize_ip(ip_address: str | None) -> str | None:
    """Strip the IPv4-mapped IPv6 prefix, so ::ffff:10.0.0.1 is stored as 10.0.0.1."""
    if ip_address is None:
        return None
    if ip_address.lower().startswith(IPV4_MAPPED_PREFIX):
        return ip_address[len(IPV4_MAPPED_PREFIX) :]
    return ip_address


def redact_email(email: str) -> str:
    """Mask the local part of an email address for logging."""
    if "@" not in email:
        return "redacted"
    local, domain = email.split("@", 1)
    return f"{local[:2]}***@{domain}"
