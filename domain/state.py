from typing import Any, Iterable, Mapping

from domain.bookmarks import BookmarkStore
from domain.models import (
    Recipe,
    SearchState,
    recipe_from_payload,
    result_from_payload,
)


RES_PER_PAGE = 10


class ApplicationState:
    """Everything the views read: the open recipe, the search and bookmarks.

    One instance is built at startup and passed to whatever needs it.
    """

    def __init__(
        self,
        *,
        bookmarks: BookmarkStore,
        results_per_page: int = RES_PER_PAGE,
    ) -> None:
        self.recipe: Recipe | None = None
        self.search = SearchState(results_per_page=results_per_page)
        self.bookmarks = bookmarks
        self._generations: dict[str, int] = {}

    def __repr__(self) -> str:
        return (
            f"<ApplicationState(recipe={self.recipe!r}, "
            f"query={self.search.query!r}, bookmarks={len(self.bookmarks)})>"
        )

    def begin(self, slot: str) -> int:
        """Start a request that will write `slot`. Returns its generation."""
        generation = self._generations.get(slot, 0) + 1
        self._generations[slot] = generation
        return generation

    def is_latest(self, slot: str, generation: int) -> bool:
        return self._generations.get(slot, 0) == generation

    def store_recipe(self, payload: Mapping[str, Any]) -> Recipe:
        recipe = recipe_from_payload(payload)
        recipe.bookmarked = self.bookmarks.contains(recipe.id)
        self.recipe = recipe
        return recipe

    def store_search_results(
        self,
        query: str,
        payloads: Iterable[Mapping[str, Any]],
    ) -> None:
        self.search.query = query
        self.search.result = [result_from_payload(p) for p in payloads]
        self.search.page = 1

    def add_bookmark(self, recipe: Recipe) -> None:
        self.bookmarks.add(recipe, current=self.recipe)

    def delete_bookmark(self, id: str) -> None:
        self.bookmarks.remove(id, current=self.recipe)
