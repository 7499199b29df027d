from typing import Any, Mapping

from pydantic import BaseModel, Field, ValidationError

from domain.exceptions import UpstreamFailure


class Ingredient(BaseModel):
    quantity: float | None = None
    unit: str = ""
    description: str


class Recipe(BaseModel):
    id: str
    title: str
    publisher: str
    source: str
    image: str
    ingredients: list[Ingredient] = Field(default_factory=list)
    servings: int = Field(gt=0)
    time: int
    key: str | None = None
    bookmarked: bool = False

    def __repr__(self) -> str:
        return f"<Recipe(id={self.id}, title={self.title})>"


class SearchResultItem(BaseModel):
    id: str
    title: str
    publisher: str
    image: str
    source: str = ""
    key: str | None = None


class SearchState(BaseModel):
    query: str = ""
    result: list[SearchResultItem] = Field(default_factory=list)
    results_per_page: int = Field(default=10, gt=0)
    page: int = Field(default=1, gt=0)


def recipe_from_payload(payload: Mapping[str, Any]) -> Recipe:
    """Normalize a raw API recipe into the shape the views use.

    A payload missing fields or carrying bad values raises `UpstreamFailure`.
    """
    try:
        recipe = Recipe(
            id=payload["id"],
            title=payload["title"],
            publisher=payload["publisher"],
            source=payload["source_url"],
            image=payload["image_url"],
            ingredients=payload["ingredients"],
            servings=payload["servings"],
            time=payload["cooking_time"],
        )
    except (KeyError, TypeError, ValidationError) as e:
        raise UpstreamFailure(f"Malformed recipe: {e!r}") from e
    if payload.get("key"):
        recipe.key = payload["key"]
    return recipe


def result_from_payload(payload: Mapping[str, Any]) -> SearchResultItem:
    try:
        return SearchResultItem(
            id=payload["id"],
            title=payload["title"],
            publisher=payload["publisher"],
            image=payload["image_url"],
            source=payload.get("source_url", ""),
            key=payload.get("key") or None,
        )
    except (KeyError, TypeError, ValidationError) as e:
        raise UpstreamFailure(f"Malformed search result: {e!r}") from e
