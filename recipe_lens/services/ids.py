# recipe_lens/services/ids.py
from urllib.parse import urlparse

from .types import Platform

# Checked in order, first match wins
_PLATFORM_MARKERS: tuple[tuple[Platform, tuple[str, ...]], ...] = (
    (Platform.TIKTOK, ("tiktok.com",)),
    (Platform.YOUTUBE, ("youtube.com", "youtu.be")),
    (Platform.INSTAGRAM, ("instagram.com",)),
)


def _looks_like_http_url(url: str) -> bool:
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def detect_platform(url: str, strict: bool = False) -> Platform:
    """Return the platform tag for a URL. Never raises."""
    if strict and not _looks_like_http_url(url):
        return Platform.UNKNOWN

    for platform, markers in _PLATFORM_MARKERS:
        if any(marker in url for marker in markers):
            return platform
    return Platform.WEBSITE
