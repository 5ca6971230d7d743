import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Iterator, List, Optional

from pydantic import TypeAdapter

from .config import LINKS_FILE, PREFERENCES_FILE
from .models import Preferences, SavedLink

logger = logging.getLogger(__name__)

ALL_TAGS = "All"

_links_adapter = TypeAdapter(List[SavedLink])


def _write_json(path: Path, data: Any):
    """Write to a sibling temp file, then swap it over `path`."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        os.replace(tmp, path)
    except BaseException:
        os.unlink(tmp)
        raise


def load_links(path: Path = LINKS_FILE) -> List[SavedLink]:
    path = Path(path)
    if not path.exists():
        return []
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return _links_adapter.validate_python(data)


def save_links(links: List[SavedLink], path: Path = LINKS_FILE):
    _write_json(Path(path), _links_adapter.dump_python(links, mode="json", by_alias=True))


def load_preferences(path: Path = PREFERENCES_FILE) -> Preferences:
    path = Path(path)
    if not path.exists():
        return Preferences()
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return Preferences.model_validate(data)
    except ValueError:
        logger.exception("Unreadable preferences in %s, using defaults", path)
        return Preferences()


def save_preferences(prefs: Preferences, path: Path = PREFERENCES_FILE):
    _write_json(Path(path), prefs.model_dump(mode="json"))


def display_tag(tag: str) -> str:
    return tag[:1].upper() + tag[1:]


class LinkStore:
    """
    Ordered collection of saved links, most recent first.
    Every mutation is written straight through to `path`.
    """

    def __init__(self, path: Path = LINKS_FILE, links: Optional[List[SavedLink]] = None):
        self.path = Path(path)
        self._links: List[SavedLink] = list(links or [])

    @classmethod
    def load(cls, path: Path = LINKS_FILE) -> "LinkStore":
        try:
            links = load_links(path)
        except ValueError:
            # JSONDecodeError and ValidationError both land here
            logger.exception("Unreadable links file %s, starting empty", path)
            links = []
        logger.info("Loaded %d saved links from %s", len(links), path)
        return cls(path, links)

    def __len__(self) -> int:
        return len(self._links)

    def __iter__(self) -> Iterator[SavedLink]:
        return iter(list(self._links))

    @property
    def links(self) -> List[SavedLink]:
        return list(self._links)

    def save(self):
        save_links(self._links, self.path)

    def get(self, link_id: str) -> Optional[SavedLink]:
        return next((l for l in self._links if l.id == link_id), None)

    def add(self, link: SavedLink) -> SavedLink:
        self._links.insert(0, link)
        self.save()
        return link

    def remove(self, link_id: str) -> bool:
        before = len(self._links)
        self._links = [l for l in self._links if l.id != link_id]
        if len(self._links) == before:
            return False
        self.save()
        return True

    def filter(self, query: str = "", tag: str = ALL_TAGS) -> List[SavedLink]:
        q = (query or "").lower()
        wanted = (tag or ALL_TAGS).lower()
        res = []
        for l in self._links:
            matches_search = (
                q in l.title.lower()
                or q in l.description.lower()
                or q in l.author.lower()
            )
            matches_tag = tag == ALL_TAGS or not tag or wanted in l.tags
            if matches_search and matches_tag:
                res.append(l)
        return res

    def tags(self) -> List[str]:
        seen = dict.fromkeys(t for l in self._links for t in l.tags)
        return [ALL_TAGS] + [display_tag(t) for t in seen]
