"""Tests for User-Agent parsing."""

import pytest

from authgate.web.user_agent import current_device, current_platform

CHROME_WINDOWS = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.6099.109 Safari/537.36"
)
EDGE_WINDOWS = CHROME_WINDOWS + " Edg/120.0.2210.77"
SAFARI_IPHONE = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_1 like Mac OS X) AppleWebKit/605.1.15 (KHTML, like Gecko) "
    "Version/17.1 Mobile/15E148 Safari/604.1"
)
FIREFOX_LINUX = "Mozilla/5.0 (X11; Linux x86_64; rv:121.0) Gecko/20100101 Firefox/121.0"
CHROME_ANDROID = (
    "Mozilla/5.0 (Linux; Android 14; Pixel 8) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Mobile Safari/537.36"
)


@pytest.mark.parametrize(
    ("user_agent", "device", "platform"),
    [
        (CHROME_WINDOWS, "Chrome 120", "Windows"),
        (EDGE_WINDOWS, "Edge 120", "Windows"),
        (SAFARI_IPHONE, "Safari 17", "iOS"),
        (FIREFOX_LINUX, "Firefox 121", "Linux"),
        (CHROME_ANDROID, "Chrome 120", "Android"),
        ("curl/8.4.0", "curl 8", "unknown"),
    ],
)
def test_known_agents(user_agent, device, platform):
    assert current_device(user_agent) == device
    assert current_platform(user_agent) == platform


@pytest.mark.parametrize("user_agent", [None, "", "SomeBot"])
def test_unknown_agents(user_agent):
    assert current_device(user_agent) == "unknown"
    assert current_platform(user_agent) == "unknown"
