import logging
from typing import Iterator, Sequence

from pydantic import TypeAdapter, ValidationError

from domain.exceptions import PersistenceFailure
from domain.models import Recipe
from domain.repository import BlobStore


logger = logging.getLogger(__name__)


BOOKMARKS_KEY = "bookmarks"


_RECIPES = TypeAdapter(list[Recipe])


class BookmarkStore:
    """Bookmarked recipes in insertion order, mirrored to a blob store.

    Every mutation rewrites the whole blob.
    """

    def __init__(self, store: BlobStore, *, key: str = BOOKMARKS_KEY) -> None:
        self.store = store
        self.key = key
        self._bookmarks: list[Recipe] = []

    def __iter__(self) -> Iterator[Recipe]:
        return iter(self._bookmarks)

    def __len__(self) -> int:
        return len(self._bookmarks)

    def __repr__(self) -> str:
        return f"<BookmarkStore(key={self.key}, n={len(self)})>"

    @property
    def items(self) -> Sequence[Recipe]:
        return tuple(self._bookmarks)

    def contains(self, id: str) -> bool:
        return any(bookmark.id == id for bookmark in self._bookmarks)

    def add(self, recipe: Recipe, current: Recipe | None = None) -> None:
        # Callers check `contains` first, duplicates are not rejected here.
        self._bookmarks.append(recipe)
        if current is not None and recipe.id == current.id:
            current.bookmarked = True
        self.persist()

    def remove(self, id: str, current: Recipe | None = None) -> None:
        index = next(
            (i for i, bookmark in enumerate(self._bookmarks) if bookmark.id == id),
            None,
        )
        if index is None:
            logger.debug("No bookmark %s to remove", id)
            return
        del self._bookmarks[index]
        if current is not None and id == current.id:
            current.bookmarked = False
        self.persist()

    def persist(self) -> None:
        self.store.set(self.key, _RECIPES.dump_json(self._bookmarks).decode("utf-8"))

    def load(self) -> None:
        blob = self.store.get(self.key)
        if not blob:
            return
        try:
            self._bookmarks = _RECIPES.validate_json(blob)
        except ValidationError as e:
            raise PersistenceFailure(f"Unreadable bookmarks blob {self.key!r}") from e
        logger.info("Loaded %d bookmark(s)", len(self._bookmarks))

    def clear(self) -> None:
        self.store.clear(self.key)
        self._bookmarks = []
