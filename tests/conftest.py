import asyncio
from typing import Any, Mapping

from jinja2 import Environment
import pytest

from app.config import Config
from app.html import template_environment
from domain.bookmarks import BookmarkStore
from domain.exceptions import UpstreamFailure
from domain.repository import MemoryBlobStore
from domain.state import ApplicationState


def raw_recipe(id: str = "r1", **kwargs: Any) -> dict[str, Any]:
    recipe = {
        "id": id,
        "title": f"Recipe {id}",
        "publisher": "Pinch of Yum",
        "source_url": f"https://example.com/{id}",
        "image_url": f"https://example.com/{id}.jpg",
        "servings": 2,
        "cooking_time": 45,
        "ingredients": [
            {"quantity": 4, "unit": "", "description": "eggs"},
            {"quantity": 0.5, "unit": "cup", "description": "milk"},
            {"quantity": None, "unit": "", "description": "salt"},
        ],
    }
    recipe.update(kwargs)
    return recipe


UPLOAD_FORM = {
    "title": "Toast",
    "sourceUrl": "https://example.com/toast",
    "image": "https://example.com/toast.jpg",
    "publisher": "Me",
    "cookingTime": "5",
    "servings": "1",
    "ingredient-1": "2,slices,bread",
    "ingredient-2": ",,butter",
    "ingredient-3": "",
}


def raw_results(n: int) -> list[dict[str, Any]]:
    return [
        {
            "id": f"r{i}",
            "title": f"Pizza {i}",
            "publisher": "Closet Cooking",
            "image_url": f"https://example.com/r{i}.jpg",
        }
        for i in range(n)
    ]


class FakeSource:
    def __init__(
        self,
        recipes: Mapping[str, dict[str, Any]] | None = None,
        results: Mapping[str, list[dict[str, Any]]] | None = None,
    ) -> None:
        self.recipes = dict(recipes or {"r1": raw_recipe("r1")})
        self.results = dict(results or {"pizza": raw_results(23)})
        self.uploads: list[Mapping[str, Any]] = []
        self.gates: dict[str, asyncio.Event] = {}

    async def fetch_recipe(self, id: str) -> dict[str, Any]:
        if id in self.gates:
            await self.gates[id].wait()
        try:
            return self.recipes[id]
        except KeyError:
            raise UpstreamFailure(f"Failed to fetch data for {id}") from None

    async def search_recipes(self, query: str) -> list[dict[str, Any]]:
        if query in self.gates:
            await self.gates[query].wait()
        return self.results.get(query, [])

    async def upload_recipe(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        self.uploads.append(payload)
        if "upload" in self.gates:
            await self.gates["upload"].wait()
        return {**payload, "id": f"up{len(self.uploads)}", "key": "secret"}


@pytest.fixture
def source() -> FakeSource:
    return FakeSource()


@pytest.fixture
def blobs() -> MemoryBlobStore:
    return MemoryBlobStore()


@pytest.fixture
def state(blobs: MemoryBlobStore) -> ApplicationState:
    return ApplicationState(bookmarks=BookmarkStore(blobs), results_per_page=10)


@pytest.fixture
def env() -> Environment:
    return template_environment(Config().html_dir, icons="icons.svg")
