
from datetime import datetime, timezone
from typing import Literal, Optional, Tuple
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from .platforms import Platform


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_link_id() -> str:
    return uuid4().hex


class LinkMetadata(BaseModel):
    duration: Optional[str] = None
    likes: Optional[str] = None
    reactions: Optional[str] = None
    views: Optional[str] = None


class LinkPreview(BaseModel):
    title: str
    description: str
    thumbnail: str
    author: str
    platform: Platform
    metadata: Optional[LinkMetadata] = None


class Resolution(BaseModel):
    """Outcome of preview resolution: the preview plus where it came from."""

    preview: LinkPreview
    source: Literal["live", "fallback"] = "fallback"

    @property
    def live(self) -> bool:
        return self.source == "live"


class SavedLink(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default_factory=new_link_id)
    url: str
    title: str
    description: str
    thumbnail: str
    author: str
    platform: Platform
    tags: Tuple[str, ...] = ()
    created_at: datetime = Field(default_factory=utcnow, alias="createdAt")
    metadata: Optional[LinkMetadata] = None


class Preferences(BaseModel):
    dark_mode: bool = True
