from pathlib import Path

import pytest

from domain.bookmarks import BookmarkStore
from domain.exceptions import PersistenceFailure
from domain.models import recipe_from_payload
from domain.repository import FileBlobStore, MemoryBlobStore

from conftest import raw_recipe


def test_add_then_remove_restores_bookmarks(blobs: MemoryBlobStore) -> None:
    bookmarks = BookmarkStore(blobs)
    bookmarks.add(recipe_from_payload(raw_recipe("r1")))
    before = list(bookmarks)
    blob_before = blobs.get("bookmarks")

    bookmarks.add(recipe_from_payload(raw_recipe("r2")))
    bookmarks.remove("r2")

    assert list(bookmarks) == before
    assert blobs.get("bookmarks") == blob_before


def test_remove_missing_is_silent(blobs: MemoryBlobStore) -> None:
    bookmarks = BookmarkStore(blobs)
    bookmarks.add(recipe_from_payload(raw_recipe("r1")))
    bookmarks.remove("r1")
    blob = blobs.get("bookmarks")

    bookmarks.remove("r1")

    assert len(bookmarks) == 0
    assert blobs.get("bookmarks") == blob


def test_bookmarking_flags_open_recipe(blobs: MemoryBlobStore) -> None:
    bookmarks = BookmarkStore(blobs)
    current = recipe_from_payload(raw_recipe("r1"))

    bookmarks.add(current, current=current)
    assert current.bookmarked
    assert bookmarks.contains("r1")

    bookmarks.remove("r1", current=current)
    assert not current.bookmarked


def test_bookmarking_other_recipe_leaves_open_recipe(blobs: MemoryBlobStore) -> None:
    bookmarks = BookmarkStore(blobs)
    current = recipe_from_payload(raw_recipe("r1"))

    bookmarks.add(recipe_from_payload(raw_recipe("r2")), current=current)

    assert not current.bookmarked


def test_bookmarks_round_trip(blobs: MemoryBlobStore) -> None:
    bookmarks = BookmarkStore(blobs)
    for id in ("b", "a", "c"):
        bookmarks.add(recipe_from_payload(raw_recipe(id, key="k" if id == "a" else None)))

    reloaded = BookmarkStore(blobs)
    reloaded.load()

    assert [r.id for r in reloaded] == ["b", "a", "c"]
    assert list(reloaded) == list(bookmarks)
    assert reloaded.items[1].key == "k"
    assert reloaded.items[0].ingredients[2].quantity is None


def test_load_without_blob_is_empty() -> None:
    bookmarks = BookmarkStore(MemoryBlobStore())
    bookmarks.load()
    assert len(bookmarks) == 0


@pytest.mark.parametrize("blob", ("not json", '{"id": "r1"}', '[{"id": "r1"}]'))
def test_load_malformed_blob_fails(blob: str) -> None:
    bookmarks = BookmarkStore(MemoryBlobStore({"bookmarks": blob}))
    with pytest.raises(PersistenceFailure):
        bookmarks.load()


def test_clear_drops_blob(blobs: MemoryBlobStore) -> None:
    bookmarks = BookmarkStore(blobs)
    bookmarks.add(recipe_from_payload(raw_recipe("r1")))

    bookmarks.clear()

    assert len(bookmarks) == 0
    assert blobs.get("bookmarks") is None


def test_file_blob_store(tmp_path: Path) -> None:
    store = FileBlobStore(tmp_path / "storage")
    assert store.get("bookmarks") is None

    bookmarks = BookmarkStore(store)
    bookmarks.add(recipe_from_payload(raw_recipe("r1")))

    reloaded = BookmarkStore(FileBlobStore(tmp_path / "storage"))
    reloaded.load()
    assert [r.id for r in reloaded] == ["r1"]

    store.clear("bookmarks")
    store.clear("bookmarks")
    assert store.get("bookmarks") is None
