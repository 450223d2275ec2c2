"""Edamam Recipe Search API client."""

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

_TOO_MANY_REQUESTS = 429

_logger = logging.getLogger(__name__)


class RecipeSearchRateLimitedError(RuntimeError):
    """Raised when the recipe API refuses a query because of rate limiting."""

    def __init__(self, query: str) -> None:
        super().__init__(f"Recipe search rate limited: query={query}")
        self.query = query


class RecipeSource(Protocol):
    """Interface for recipe search collaborators."""

    async def search_recipes(self, query: str) -> dict[str, object]:
        """Search recipes by free-text query and return raw API data.

        Raises ``RecipeSearchRateLimitedError`` when the query is throttled.
        """


@dataclass
class HttpxEdamamRecipeClient(RecipeSource):
    """HTTPX-backed Edamam recipe client."""

    app_id: str
    app_key: str
    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(
        cls, app_id: str, app_key: str, base_url: str
    ) -> "HttpxEdamamRecipeClient":
        """Create a recipe client with a managed httpx session."""
        return cls(
            app_id=app_id,
            app_key=app_key,
            base_url=base_url,
            http_client=httpx.AsyncClient(),
        )

    async def search_recipes(self, query: str) -> dict[str, object]:
        """Search public recipes."""
        url = f"{self.base_url}/api/recipes/v2"
        response = await self.http_client.get(
            url,
            params={
                "type": "public",
                "app_id": self.app_id,
                "app_key": self.app_key,
                "q": query,
            },
            timeout=15,
        )
        if response.status_code == _TOO_MANY_REQUESTS:
            _logger.warning("Recipe search rate limited: query=%s", query)
            raise RecipeSearchRateLimitedError(query)
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
