"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from pantry_tracker.adapters.edamam_recipe_client import (
    RecipeSearchRateLimitedError,
    RecipeSource,
)
from pantry_tracker.config import Settings
from pantry_tracker.domain.inventory import (
    InventoryItem,
    ShelfLifeEstimate,
    StorageLocation,
)
from pantry_tracker.domain.recipes import RecipeCandidate, RecipeIngredient
from pantry_tracker.services.cache import InMemoryCache
from pantry_tracker.services.recipes import RecipeService

NOW = datetime(2026, 3, 14, 12, 0, tzinfo=UTC)


def make_item(  # noqa: PLR0913
    name: str,
    *,
    location: StorageLocation = StorageLocation.FRIDGE,
    acquired_days_ago: float = 0,
    expires_in_days: float = 10,
    shelf_life: ShelfLifeEstimate | None = None,
    generic_name: str | None = None,
    now: datetime = NOW,
) -> InventoryItem:
    """Build an inventory item relative to ``now``."""
    return InventoryItem(
        id=uuid4(),
        name=name,
        storage_location=location,
        acquired_at=now - timedelta(days=acquired_days_ago),
        shelf_life=shelf_life
        or ShelfLifeEstimate(fridge_days=7, freezer_days=30, shelf_days=7),
        current_expires_at=now + timedelta(days=expires_in_days),
        generic_name=generic_name,
    )


def make_recipe(title: str, ingredients: list[str], **kwargs) -> RecipeCandidate:
    """Build a recipe candidate from ingredient names."""
    return RecipeCandidate(
        id=title.lower().replace(" ", "-"),
        title=title,
        ingredients=[RecipeIngredient(name=name) for name in ingredients],
        **kwargs,
    )


def edamam_hit(label: str, foods: list[str], url: str | None = None) -> dict:
    """Raw Edamam hit with structured ingredients."""
    return {
        "recipe": {
            "uri": f"http://www.edamam.com/ontologies/edamam.owl#recipe_{label}",
            "label": label,
            "url": url or f"https://recipes.test/{label.lower().replace(' ', '-')}",
            "image": None,
            "yield": 4.0,
            "totalTime": 30.0,
            "ingredientLines": [f"1 cup {food}" for food in foods],
            "ingredients": [
                {"text": f"1 cup {food}", "food": food, "quantity": 1.0}
                for food in foods
            ],
        }
    }


@dataclass
class FakeRecipeSource(RecipeSource):
    """Fake recipe source returning canned payloads per query."""

    payloads: dict[str, dict[str, object]] = field(default_factory=dict)
    default_payload: dict[str, object] = field(default_factory=lambda: {"hits": []})
    failures: int = 0
    rate_limited: set[str] = field(default_factory=set)
    queries: list[str] = field(default_factory=list)

    async def search_recipes(self, query: str) -> dict[str, object]:
        self.queries.append(query)
        if self.failures > 0:
            self.failures -= 1
            raise RuntimeError("recipe search unavailable")
        if query in self.rate_limited:
            raise RecipeSearchRateLimitedError(query)
        return self.payloads.get(query, self.default_payload)


@pytest.fixture
def settings() -> Settings:
    return Settings(edamam_app_id="app-id", edamam_app_key="app-key")


@pytest.fixture
def recipe_source() -> FakeRecipeSource:
    return FakeRecipeSource()


@pytest.fixture
def recipe_service(recipe_source: FakeRecipeSource) -> RecipeService:
    return RecipeService(
        recipe_source=recipe_source,
        cache=InMemoryCache(),
        retry_delay_seconds=0,
    )
