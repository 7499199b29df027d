import logging
from typing import Any, Mapping, Protocol

from domain.exceptions import UpstreamFailure
from domain.models import recipe_from_payload
from domain.state import ApplicationState
from domain.upload import build_upload_payload


logger = logging.getLogger(__name__)


type RawRecipe = dict[str, Any]


class RecipeSource(Protocol):
    async def fetch_recipe(self, id: str) -> RawRecipe:
        ...

    async def search_recipes(self, query: str) -> list[RawRecipe]:
        ...

    async def upload_recipe(self, payload: Mapping[str, Any]) -> RawRecipe:
        ...


async def load_recipe(
    id: str,
    *,
    state: ApplicationState,
    source: RecipeSource,
) -> bool:
    generation = state.begin("recipe")
    try:
        payload = await source.fetch_recipe(id)
    except UpstreamFailure:
        if not state.is_latest("recipe", generation):
            logger.info("Dropping failed load of %s, a newer load started", id)
            return False
        raise
    if not state.is_latest("recipe", generation):
        logger.info("Dropping recipe %s, a newer load finished first", id)
        return False
    state.store_recipe(payload)
    return True


async def load_search_results(
    query: str,
    *,
    state: ApplicationState,
    source: RecipeSource,
) -> bool:
    generation = state.begin("search")
    try:
        payloads = await source.search_recipes(query)
    except UpstreamFailure:
        if not state.is_latest("search", generation):
            logger.info("Dropping failed search %r, a newer one started", query)
            return False
        raise
    if not state.is_latest("search", generation):
        logger.info("Dropping results for %r, a newer search finished first", query)
        return False
    state.store_search_results(query, payloads)
    logger.info("%d result(s) for %r", len(state.search.result), query)
    return True


async def upload_recipe(
    fields: Mapping[str, str],
    *,
    state: ApplicationState,
    source: RecipeSource,
) -> bool:
    """Post a new recipe, open it and bookmark it.

    The form is validated before anything is sent. The upload is always
    bookmarked, but it only replaces the open recipe when no other load
    started meanwhile.
    """
    payload = build_upload_payload(fields)
    generation = state.begin("recipe")
    data = await source.upload_recipe(payload)
    if not state.is_latest("recipe", generation):
        recipe = recipe_from_payload(data)
        logger.info("Uploaded %s but a newer recipe is open", recipe.id)
        state.add_bookmark(recipe)
        return False
    recipe = state.store_recipe(data)
    state.add_bookmark(recipe)
    return True
