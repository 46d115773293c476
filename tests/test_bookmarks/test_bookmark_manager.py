"""Тесты BookmarkManager."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from nasboard.bookmarks.exceptions import BookmarkValidationError
from nasboard.bookmarks.manager import BookmarkManager


@pytest.fixture
def manager(tmp_path: Path) -> BookmarkManager:
    return BookmarkManager(tmp_path / "bookmarks.json")


def test_missing_file_is_created(tmp_path: Path) -> None:
    path = tmp_path / "data" / "bookmarks.json"
    BookmarkManager(path)
    assert json.loads(path.read_text(encoding="utf-8")) == {"bookmarks": []}


def test_create_assigns_order_and_defaults(manager: BookmarkManager) -> None:
    first = manager.create_bookmark({"title": "Router", "url": "http://192.168.1.1"})
    second = manager.create_bookmark({"title": "NAS", "url": "https://nas.local", "category": "media"})
    assert (first.order, second.order) == (1, 2)
    assert first.category == "default"
    assert second.category == "media"
    assert first.created_at == first.updated_at
    assert [item.identifier for item in manager.list_bookmarks()] == [first.identifier, second.identifier]


def test_create_sanitizes_text(manager: BookmarkManager) -> None:
    bookmark = manager.create_bookmark({"title": "  <script>x</script> ", "url": "http://nas"})
    assert bookmark.title == "&lt;script&gt;x&lt;/script&gt;"


def test_create_requires_title_and_url(manager: BookmarkManager) -> None:
    with pytest.raises(BookmarkValidationError) as excinfo:
        manager.create_bookmark({"url": "http://nas"})
    assert excinfo.value.field == "title"
    with pytest.raises(BookmarkValidationError) as excinfo:
        manager.create_bookmark({"title": "NAS"})
    assert excinfo.value.field == "url"


def test_create_rejects_bad_url(manager: BookmarkManager) -> None:
    with pytest.raises(BookmarkValidationError):
        manager.create_bookmark({"title": "x", "url": "javascript:alert(1)"})
    assert manager.list_bookmarks() == []


def test_update_changes_only_given_fields(manager: BookmarkManager) -> None:
    bookmark = manager.create_bookmark({"title": "NAS", "url": "http://nas", "icon": "server"})
    updated = manager.update_bookmark(bookmark.identifier, {"url": "https://nas", "order": 7})
    assert updated.title == "NAS"
    assert updated.icon == "server"
    assert updated.url == "https://nas"
    assert updated.order == 7


def test_update_rejects_empty_title(manager: BookmarkManager) -> None:
    bookmark = manager.create_bookmark({"title": "NAS", "url": "http://nas"})
    with pytest.raises(BookmarkValidationError):
        manager.update_bookmark(bookmark.identifier, {"title": "  "})


def test_update_and_delete_unknown(manager: BookmarkManager) -> None:
    with pytest.raises(KeyError):
        manager.update_bookmark("missing", {"title": "x"})
    with pytest.raises(KeyError):
        manager.delete_bookmark("missing")


def test_changes_persist(tmp_path: Path) -> None:
    path = tmp_path / "bookmarks.json"
    manager = BookmarkManager(path, default_category="services")
    keep = manager.create_bookmark({"title": "Keep", "url": "http://a"})
    drop = manager.create_bookmark({"title": "Drop", "url": "http://b"})
    manager.delete_bookmark(drop.identifier)

    reloaded = BookmarkManager(path)
    items = reloaded.list_bookmarks()
    assert [item.identifier for item in items] == [keep.identifier]
    assert items[0].category == "services"
