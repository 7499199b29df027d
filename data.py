import asyncio
import logging
from typing import Any, Mapping

import httpx

from domain.exceptions import RequestTimeout, UpstreamFailure


logger = logging.getLogger(__name__)


API_URL = "https://forkify-api.jonas.io/api/v2/recipes/"
TIMEOUT_SEC = 120


class ForkifyClient:
    """The Forkify recipe API. Implements `domain.services.RecipeSource`."""

    def __init__(
        self,
        *,
        api_url: str = API_URL,
        key: str | None = None,
        timeout: float = TIMEOUT_SEC,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.key = key
        self.timeout = timeout
        self.http_client = (
            httpx.AsyncClient(base_url=api_url, timeout=timeout)
            if http_client is None
            else http_client
        )

    @property
    def params(self) -> dict[str, str]:
        return {} if self.key is None else {"key": self.key}

    async def ajax(
        self,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
        upload: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """GET `url`, or POST `upload` to it as JSON, and return the body."""
        params = {**self.params, **(params or {})}
        try:
            async with asyncio.timeout(self.timeout):
                if upload is None:
                    resp = await self.http_client.get(url, params=params)
                else:
                    resp = await self.http_client.post(url, params=params, json=upload)
        except (TimeoutError, httpx.TimeoutException) as e:
            raise RequestTimeout(
                f"Request took too long! Timeout after {self.timeout:g} second"
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamFailure(f"Failed to fetch data from {url}: {e!r}") from e

        logger.info("%s %s %s", resp.request.method, resp.url, resp.status_code)
        if not resp.is_success:
            raise UpstreamFailure(
                f"Failed to fetch data from {resp.url} Error Code = {resp.status_code}"
            )
        try:
            return resp.json()
        except ValueError as e:
            raise UpstreamFailure(f"{resp.url} did not answer with JSON") from e

    def unwrap(self, body: Mapping[str, Any], field: str) -> Any:
        """Pull `field` out of the API's `{"data": {...}}` envelope."""
        try:
            return body["data"][field]
        except (KeyError, TypeError) as e:
            raise UpstreamFailure(f"No {field!r} in the API response") from e

    async def fetch_recipe(self, id: str) -> dict[str, Any]:
        data = await self.ajax(id)
        return self.unwrap(data, "recipe")

    async def search_recipes(self, query: str) -> list[dict[str, Any]]:
        data = await self.ajax("", params={"search": query})
        return self.unwrap(data, "recipes")

    async def upload_recipe(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        data = await self.ajax("", upload=payload)
        return self.unwrap(data, "recipe")

    async def aclose(self) -> None:
        await self.http_client.aclose()
