"""Derive device and platform descriptors from a User-Agent header."""

import re

UNKNOWN = "unknown"

# Order matters: Edge and Opera also advertise Chrome, Chrome also advertises Safari
BROWSER_PATTERNS = [
    ("Edge", re.compile(r"Edg(?:e|A|iOS)?/(\d+)")),
    ("Opera", re.compile(r"OPR/(\d+)")),
    ("Firefox", re.compile(r"(?:Firefox|FxiOS)/(\d+)")),
    ("Chrome", re.compile(r"(?:Chrome|CriOS)/(\d+)")),
    ("Safari", re.compile(r"Version/(\d+)(?:\.\d+)*.*Safari/")),
    ("curl", re.compile(r"^curl/(\d+)")),
    ("python-httpx", re.compile(r"^python-httpx/(\d+)")),
]

PLATFORM_PATTERNS = [
    ("Android", re.compile(r"Android")),
    ("iOS", re.compile(r"iPhone|iPad|iPod")),
    ("Windows", re.compile(r"Windows")),
    ("macOS", re.compile(r"Mac OS X|Macintosh")),
    ("ChromeOS", re.compile(r"CrOS")),
    ("Linux", re.compile(r"Linux|X11")),
]


def current_device(user_agent: str | None) -> str:
    """Browser family and major version, e.g. "Chrome 120"."""
    if not user_agent:
        return UNKNOWN
    for name, pattern in BROWSER_PATTERNS:
        match = pattern.search(user_agent)
        if match:
            return f"{name} {match.group(1)}"
    return UNKNOWN


def current_platform(user_agent: str | None) -> str:
    """Operating system family, e.g. "Windows"."""
    if not user_agent:
        return UNKNOWN
    for name, pattern in PLATFORM_PATTERNS:
        if pattern.search(user_agent):
            return name
    return UNKNOWN
