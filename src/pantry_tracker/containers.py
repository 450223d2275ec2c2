"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from pantry_tracker.adapters.edamam_recipe_client import (
    HttpxEdamamRecipeClient,
    RecipeSource,
)
from pantry_tracker.config import Settings
from pantry_tracker.services.cache import InMemoryCache
from pantry_tracker.services.estimates import default_shelf_life
from pantry_tracker.services.inventory import InventoryService
from pantry_tracker.services.recipes import RecipeService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    recipe_source: RecipeSource
    inventory_service: InventoryService
    recipe_service: RecipeService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    recipe_client = HttpxEdamamRecipeClient.create(
        app_id=resolved_settings.edamam_app_id,
        app_key=resolved_settings.edamam_app_key,
        base_url=resolved_settings.edamam_base_url,
    )
    recipe_service = RecipeService(
        recipe_source=recipe_client,
        cache=InMemoryCache(),
        expiring_threshold_days=resolved_settings.expiring_threshold_days,
        max_missing_ingredients=resolved_settings.max_missing_ingredients,
        result_limit=resolved_settings.recipe_result_limit,
        max_search_queries=resolved_settings.max_search_queries,
        search_ttl_seconds=resolved_settings.recipe_search_ttl_seconds,
    )

    async def close_resources() -> None:
        await recipe_client.close()

    return AppContainer(
        settings=resolved_settings,
        recipe_source=recipe_client,
        inventory_service=InventoryService(
            fallback_shelf_life=default_shelf_life(resolved_settings)
        ),
        recipe_service=recipe_service,
        close_resources=close_resources,
    )
