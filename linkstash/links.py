import logging
from datetime import datetime, timezone
from typing import Optional

from .metadata import resolve_preview
from .models import SavedLink, new_link_id, utcnow
from .platforms import detect_platform, is_valid_url
from .tagging import generate_tags

logger = logging.getLogger(__name__)


class InvalidURLError(ValueError):
    def __init__(self, url: str, message: str = "Please enter a valid URL"):
        super().__init__(message)
        self.url = url
        self.message = message


def create_link(url: str) -> SavedLink:
    """
    Classify, preview and tag `url` into a new SavedLink.
    Raises InvalidURLError before any work if the URL is malformed.
    """
    if not is_valid_url(url):
        raise InvalidURLError(url)
    url = url.strip()

    platform = detect_platform(url)
    resolution = resolve_preview(url, platform)
    preview = resolution.preview
    if not resolution.live:
        logger.debug("Using fallback preview for %s (%s)", url, platform.value)

    return SavedLink(
        id=new_link_id(),
        url=url,
        title=preview.title,
        description=preview.description,
        thumbnail=preview.thumbnail,
        author=preview.author,
        platform=preview.platform,
        tags=generate_tags(preview.title, preview.description, preview.platform),
        created_at=utcnow(),
        metadata=preview.metadata,
    )


def format_saved_date(created_at: datetime, now: Optional[datetime] = None) -> str:
    """Relative label shown on a link card: Today, Yesterday, 3 days ago, ..."""
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    now = now or utcnow()
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    elapsed = abs((now - created_at).total_seconds())
    days = int(elapsed // 86400) + 1
    if days == 1:
        return "Today"
    if days == 2:
        return "Yesterday"
    if days <= 7:
        return f"{days - 1} days ago"
    return created_at.date().isoformat()
