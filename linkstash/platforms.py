
import re
from enum import Enum
from urllib.parse import urlparse


class Platform(str, Enum):
    VIDEO = "video"
    MICROBLOG = "microblog"
    PROFESSIONAL = "professional"
    OTHER = "other"


VIDEO_RE = re.compile(
    r"(?:https?://)?(?:www\.)?"
    r"(?:youtube\.com/(?:[^/\n\s]+/\S+/|(?:v|e(?:mbed)?)/|\S*?[?&]v=)|youtu\.be/)"
    r"([a-zA-Z0-9_-]{11})"
)
MICROBLOG_RE = re.compile(
    r"(?:https?://)?(?:www\.)?(?:twitter\.com|x\.com)/([a-zA-Z0-9_]+)/status/([0-9]+)"
)
PROFESSIONAL_RE = re.compile(
    r"(?:https?://)?(?:www\.)?linkedin\.com/(?:posts|pulse)/([a-zA-Z0-9_-]+)"
)

# Checked in order, first match wins
PLATFORM_PATTERNS = [
    (Platform.VIDEO, VIDEO_RE),
    (Platform.MICROBLOG, MICROBLOG_RE),
    (Platform.PROFESSIONAL, PROFESSIONAL_RE),
]


def is_valid_url(url: str) -> bool:
    """
    Basic syntactic check used before anything is saved:
    - must have a scheme (https:, ftp:, ...)
    - must have a network location (host)
    """
    if not isinstance(url, str):
        return False
    try:
        parsed = urlparse(url.strip())
    except ValueError:
        return False
    return bool(parsed.scheme) and bool(parsed.netloc)


def detect_platform(url: str) -> Platform:
    for platform, pattern in PLATFORM_PATTERNS:
        if pattern.search(url):
            return platform
    return Platform.OTHER


def extract_video_id(url: str) -> str | None:
    match = VIDEO_RE.search(url)
    if not match:
        return None
    return match.group(1)


def extract_post_author(url: str) -> str | None:
    match = MICROBLOG_RE.search(url)
    if not match:
        return None
    return match.group(1)


def extract_post_slug(url: str) -> str | None:
    match = PROFESSIONAL_RE.search(url)
    if not match:
        return None
    return match.group(1)


def extract_hostname(url: str) -> str:
    if not isinstance(url, str):
        return ""
    try:
        return (urlparse(url.strip()).hostname or "").lower()
    except ValueError:
        return ""
