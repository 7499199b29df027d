"""Connects the views to the state.

Every flow awaits the state change first and renders after.
"""

import asyncio
import logging
from typing import Mapping

from jinja2 import Environment

from domain.exceptions import UpstreamFailure, ValidationFailure
from domain.pagination import get_search_result_page
from domain.servings import update_servings
from domain.services import (
    RecipeSource,
    load_recipe,
    load_search_results,
    upload_recipe,
)
from domain.state import ApplicationState

from app.html.add_recipe import AddRecipeView
from app.html.document import Document
from app.html.pagination import PaginationView
from app.html.preview import PreviewView
from app.html.recipe import RecipeView
from app.html.results import BookmarksView, ResultsView
from app.html.search import SearchView
from app.html.view import Event


logger = logging.getLogger(__name__)


class Controller:
    def __init__(
        self,
        *,
        state: ApplicationState,
        source: RecipeSource,
        document: Document,
        environment: Environment,
        default_recipe_id: str | None = None,
        close_upload_after_sec: float = 2,
    ) -> None:
        self.state = state
        self.source = source
        self.document = document
        self.default_recipe_id = default_recipe_id
        self.close_upload_after_sec = close_upload_after_sec

        env = environment
        self.preview_view = PreviewView(None, environment=env)
        self.recipe_view = RecipeView(document.mount(".recipe"), environment=env)
        self.search_view = SearchView(document.mount(".search"))
        self.results_view = ResultsView(
            document.mount(".results"), environment=env, preview=self.preview_view
        )
        self.bookmarks_view = BookmarksView(
            document.mount(".bookmarks__list"),
            environment=env,
            preview=self.preview_view,
        )
        self.pagination_view = PaginationView(
            document.mount(".pagination"), environment=env
        )
        self.add_recipe_view = AddRecipeView(
            document.mount(".upload"),
            environment=env,
            overlay=document.mount(".overlay"),
            window=document.mount(".add-recipe-window"),
        )

    def __str__(self) -> str:
        return str(self.document)

    async def control_recipes(self, id: str | None = None) -> None:
        id = id or self.default_recipe_id
        if not id:
            return
        self.preview_view.active_id = id

        self.recipe_view.spinner()
        # Highlight the selected recipe without rebuilding the lists.
        self.results_view.update(get_search_result_page(self.state.search))
        self.bookmarks_view.update(list(self.state.bookmarks))

        try:
            if not await load_recipe(id, state=self.state, source=self.source):
                return
        except UpstreamFailure:
            logger.exception("Could not load recipe %s", id)
            self.recipe_view.render_error()
            return
        self.recipe_view.render(self.state.recipe)

    async def control_search_results(self) -> None:
        self.results_view.spinner()
        query = self.search_view.get_query()
        if not query:
            self.results_view.render_error()
            return

        try:
            if not await load_search_results(
                query, state=self.state, source=self.source
            ):
                return
        except UpstreamFailure:
            logger.exception("Search for %r failed", query)
            self.results_view.render_error()
            return

        self.results_view.render(get_search_result_page(self.state.search, 1))
        self.pagination_view.render(self.state.search)

    def control_pagination(self, goto: int) -> None:
        self.results_view.render(get_search_result_page(self.state.search, goto))
        self.pagination_view.render(self.state.search)

    def control_servings(self, servings: int) -> None:
        if self.state.recipe is None:
            return
        update_servings(self.state.recipe, servings)
        self.recipe_view.update(self.state.recipe)

    def control_add_bookmark(self) -> None:
        recipe = self.state.recipe
        if recipe is None:
            return
        if recipe.bookmarked:
            self.state.delete_bookmark(recipe.id)
        else:
            self.state.add_bookmark(recipe)

        self.recipe_view.update(recipe)
        self.bookmarks_view.render(list(self.state.bookmarks))

    def control_bookmarks(self) -> None:
        self.bookmarks_view.render(list(self.state.bookmarks))

    async def control_add_recipe(self, fields: Mapping[str, str]) -> None:
        self.add_recipe_view.spinner()
        try:
            opened = await upload_recipe(fields, state=self.state, source=self.source)
        except (ValidationFailure, UpstreamFailure) as e:
            logger.warning("Upload failed: %s", e)
            self.add_recipe_view.render_error(str(e))
            return

        if opened and self.state.recipe is not None:
            self.preview_view.active_id = self.state.recipe.id
            self.recipe_view.render(self.state.recipe)
        self.add_recipe_view.render_message()
        self.bookmarks_view.render(list(self.state.bookmarks))
        self._close_upload_later()

    def _close_upload_later(self) -> None:
        if self.close_upload_after_sec <= 0:
            self.add_recipe_view.close_window()
            return
        asyncio.get_running_loop().call_later(
            self.close_upload_after_sec, self.add_recipe_view.close_window
        )

    def init(self) -> None:
        self.recipe_view.add_handler(Event.render, self.control_recipes)
        self.search_view.add_handler(Event.search, self.control_search_results)
        self.recipe_view.add_handler(Event.update_servings, self.control_servings)
        self.recipe_view.add_handler(Event.add_bookmark, self.control_add_bookmark)
        self.bookmarks_view.add_handler(Event.render, self.control_bookmarks)
        self.add_recipe_view.add_handler(Event.upload, self.control_add_recipe)
        self.pagination_view.add_handler(Event.page_click, self.control_pagination)
