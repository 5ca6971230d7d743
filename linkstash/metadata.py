
import logging
from typing import Optional, Dict, Any

import requests

from .config import (
    FAVICON_URL,
    OEMBED_ENDPOINT,
    OEMBED_TIMEOUT,
    SOCIAL_ICON_URL,
    VIDEO_PLACEHOLDER_THUMBNAIL,
    VIDEO_THUMBNAIL_URL,
    VIDEO_WATCH_URL,
)
from .models import LinkMetadata, LinkPreview, Resolution
from .platforms import (
    Platform,
    extract_hostname,
    extract_post_author,
    extract_post_slug,
    extract_video_id,
)

logger = logging.getLogger(__name__)

VIDEO_METADATA = {"duration": "Video", "views": "YouTube"}


def fetch_oembed(video_id: str) -> Optional[Dict[str, Any]]:
    """Single best-effort oEmbed lookup. Returns None on any failure."""
    url = VIDEO_WATCH_URL.format(video_id=video_id)
    try:
        resp = requests.get(
            OEMBED_ENDPOINT,
            params={"url": url, "format": "json"},
            timeout=OEMBED_TIMEOUT,
        )
        if resp.status_code != 200:
            logger.debug("oEmbed returned %s for %s", resp.status_code, video_id)
            return None
        data = resp.json()
    except (requests.RequestException, ValueError) as exc:
        logger.debug("oEmbed lookup failed for %s: %s", video_id, exc)
        return None
    if not isinstance(data, dict):
        return None
    return data


def _text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value
    return None


def resolve_video(url: str) -> Resolution:
    video_id = extract_video_id(url)
    if not video_id:
        return Resolution(preview=fallback_preview(url, Platform.VIDEO))

    thumbnail = VIDEO_THUMBNAIL_URL.format(video_id=video_id)
    data = fetch_oembed(video_id)
    if data is not None:
        title = _text(data.get("title"))
        return Resolution(
            source="live",
            preview=LinkPreview(
                title=title or "YouTube Video",
                description="Watch this video on YouTube" if title else "YouTube video content",
                thumbnail=_text(data.get("thumbnail_url")) or thumbnail,
                author=_text(data.get("author_name")) or "YouTube",
                platform=Platform.VIDEO,
                metadata=LinkMetadata(**VIDEO_METADATA),
            ),
        )

    # real thumbnail, generic title
    return Resolution(
        preview=LinkPreview(
            title="YouTube Video",
            description="Watch this video on YouTube",
            thumbnail=thumbnail,
            author="YouTube",
            platform=Platform.VIDEO,
            metadata=LinkMetadata(**VIDEO_METADATA),
        )
    )


def resolve_microblog(url: str) -> Resolution:
    username = extract_post_author(url)
    return Resolution(
        preview=LinkPreview(
            title=f"Post by @{username}" if username else "Twitter Post",
            description="View this post on Twitter/X",
            thumbnail=SOCIAL_ICON_URL,
            author=f"@{username}" if username else "Twitter",
            platform=Platform.MICROBLOG,
            metadata=LinkMetadata(reactions="Twitter Post"),
        )
    )


def resolve_professional(url: str) -> Resolution:
    slug = extract_post_slug(url)
    return Resolution(
        preview=LinkPreview(
            title="LinkedIn Professional Post" if slug else "LinkedIn Post",
            description="View this post on LinkedIn",
            thumbnail=SOCIAL_ICON_URL,
            author="LinkedIn",
            platform=Platform.PROFESSIONAL,
            metadata=LinkMetadata(reactions="LinkedIn Post"),
        )
    )


def resolve_generic(url: str) -> Resolution:
    hostname = extract_hostname(url)
    if not hostname:
        return Resolution(preview=fallback_preview(url, Platform.OTHER))
    domain = hostname.replace("www.", "", 1)
    return Resolution(
        preview=LinkPreview(
            title=f"{domain[:1].upper()}{domain[1:]} Link",
            description=f"Content from {hostname}",
            thumbnail=FAVICON_URL.format(domain=hostname),
            author=hostname,
            platform=Platform.OTHER,
        )
    )


RESOLVERS = {
    Platform.VIDEO: resolve_video,
    Platform.MICROBLOG: resolve_microblog,
    Platform.PROFESSIONAL: resolve_professional,
    Platform.OTHER: resolve_generic,
}


def resolve_preview(url: str, platform: Platform) -> Resolution:
    """
    Build a preview for an already classified URL.
    Never raises: anything unexpected degrades to the static fallback.
    """
    try:
        return RESOLVERS[platform](url)
    except Exception:
        logger.exception("Preview resolution failed for %s, using fallback", url)
        return Resolution(preview=fallback_preview(url, platform))


def fallback_preview(url: str, platform: Platform) -> LinkPreview:
    platform = Platform(platform)
    if platform is Platform.VIDEO:
        title, thumbnail, author = "YouTube Video", VIDEO_PLACEHOLDER_THUMBNAIL, "YouTube"
    elif platform is Platform.MICROBLOG:
        title, thumbnail, author = "Twitter Post", SOCIAL_ICON_URL, "Twitter"
    elif platform is Platform.PROFESSIONAL:
        title, thumbnail, author = "LinkedIn Post", SOCIAL_ICON_URL, "LinkedIn"
    else:
        hostname = extract_hostname(url) or "web"
        title, thumbnail, author = "Web Link", FAVICON_URL.format(domain=hostname), hostname

    return LinkPreview(
        title=title,
        description=f"Saved {platform.value} content",
        thumbnail=thumbnail,
        author=author,
        platform=platform,
    )
