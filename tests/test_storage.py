import json
from datetime import datetime, timezone

import pytest

from linkstash.models import Preferences, SavedLink
from linkstash.platforms import Platform
from linkstash.storage import (
    LinkStore,
    load_links,
    load_preferences,
    save_links,
    save_preferences,
)


def _link(i, *, title=None, description=None, author="someone", tags=("web",), platform=Platform.OTHER):
    return SavedLink(
        id=f"id-{i}",
        url=f"https://example.com/{i}",
        title=title or f"Title {i}",
        description=description or f"Description {i}",
        thumbnail="https://example.com/favicon.ico",
        author=author,
        platform=platform,
        tags=list(tags),
        created_at=datetime(2024, 5, i, 12, 30, 15, 123456, tzinfo=timezone.utc),
    )


def test_missing_file_loads_empty(links_path):
    assert load_links(links_path) == []
    assert len(LinkStore.load(links_path)) == 0


def test_round_trip_preserves_records(links_path):
    links = [
        _link(1, tags=("video", "tutorial"), platform=Platform.VIDEO),
        _link(2, tags=("social",), platform=Platform.MICROBLOG),
    ]
    save_links(links, links_path)
    loaded = load_links(links_path)

    assert [l.id for l in loaded] == ["id-1", "id-2"]
    for before, after in zip(links, loaded):
        assert after.url == before.url
        assert after.platform is before.platform
        assert after.tags == before.tags
        assert after.created_at == before.created_at
        assert isinstance(after.created_at, datetime)


def test_persisted_format_is_a_plain_array(links_path):
    save_links([_link(1)], links_path)
    data = json.loads(links_path.read_text())

    assert isinstance(data, list)
    assert data[0]["createdAt"].startswith("2024-05-01T12:30:15")
    assert data[0]["platform"] == "other"


def test_add_prepends_and_flushes(store, links_path):
    store.add(_link(1))
    store.add(_link(2))

    assert [l.id for l in store.links] == ["id-2", "id-1"]
    assert [l.id for l in load_links(links_path)] == ["id-2", "id-1"]


def test_remove_middle_keeps_relative_order(store, links_path):
    for i in (1, 2, 3):
        store.add(_link(i))

    assert store.remove("id-2") is True
    assert [l.id for l in store.links] == ["id-3", "id-1"]
    assert [l.id for l in LinkStore.load(links_path).links] == ["id-3", "id-1"]


def test_remove_missing_is_noop(store, links_path):
    store.add(_link(1))
    assert store.remove("nope") is False
    assert [l.id for l in store.links] == ["id-1"]


def test_get(store):
    store.add(_link(1))
    assert store.get("id-1").title == "Title 1"
    assert store.get("id-9") is None


def _populated(store):
    store.add(_link(1, title="Intro to Python", tags=("web", "development")))
    store.add(_link(2, title="Design systems", author="Jane", tags=("web", "design")))
    store.add(_link(3, title="Cooking", description="Pasta recipes", tags=("video",)))
    return store


def test_filter_by_query_over_title_description_author(store):
    _populated(store)

    assert [l.id for l in store.filter("python")] == ["id-1"]
    assert [l.id for l in store.filter("PASTA")] == ["id-3"]
    assert [l.id for l in store.filter("jane")] == ["id-2"]
    assert [l.id for l in store.filter("")] == ["id-3", "id-2", "id-1"]


def test_filter_by_tag_uses_lowercased_tag(store):
    _populated(store)

    assert [l.id for l in store.filter("", "Design")] == ["id-2"]
    assert [l.id for l in store.filter("", "Web")] == ["id-2", "id-1"]
    assert [l.id for l in store.filter("", "All")] == ["id-3", "id-2", "id-1"]
    assert [l.id for l in store.filter("design", "Development")] == []


def test_filter_is_idempotent(store):
    _populated(store)

    once = store.filter("o", "Web")
    twice = LinkStore(store.path, once).filter("o", "Web")
    assert once == twice


def test_tag_universe_is_deduplicated_and_capitalized(store):
    _populated(store)
    assert store.tags() == ["All", "Video", "Web", "Design", "Development"]


def test_preferences_round_trip(tmp_path):
    path = tmp_path / "prefs.json"
    assert load_preferences(path).dark_mode is True

    save_preferences(Preferences(dark_mode=False), path)
    assert load_preferences(path).dark_mode is False


def test_truncated_links_file_starts_empty(links_path):
    links_path.parent.mkdir(parents=True)
    links_path.write_text('[{"id": "a", "url"', encoding="utf-8")

    store = LinkStore.load(links_path)
    assert len(store) == 0

    store.add(_link(1))
    assert [l.id for l in load_links(links_path)] == ["id-1"]


def test_links_file_with_bad_records_starts_empty(links_path):
    links_path.parent.mkdir(parents=True)
    links_path.write_text('[{"id": "a"}]', encoding="utf-8")

    assert len(LinkStore.load(links_path)) == 0


def test_save_replaces_file_without_leftovers(links_path):
    save_links([_link(1)], links_path)
    save_links([_link(2), _link(1)], links_path)

    assert [p.name for p in links_path.parent.iterdir()] == [links_path.name]
    assert [l.id for l in load_links(links_path)] == ["id-2", "id-1"]


def test_failed_save_keeps_previous_file(links_path, monkeypatch):
    save_links([_link(1)], links_path)

    def broken_dump(*args, **kwargs):
        raise OSError("disk full")

    monkeypatch.setattr(json, "dump", broken_dump)
    with pytest.raises(OSError):
        save_links([_link(2)], links_path)
    monkeypatch.undo()

    assert [l.id for l in load_links(links_path)] == ["id-1"]
    assert [p.name for p in links_path.parent.iterdir()] == [links_path.name]


def test_unreadable_preferences_fall_back_to_defaults(tmp_path):
    path = tmp_path / "prefs.json"
    path.write_text("{not json", encoding="utf-8")

    assert load_preferences(path).dark_mode is True
