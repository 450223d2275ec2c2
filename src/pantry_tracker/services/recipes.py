"""Recipe suggestions built from expiring inventory."""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime
from itertools import combinations
from typing import TYPE_CHECKING

from pantry_tracker.adapters.edamam_recipe_client import (
    RecipeSearchRateLimitedError,
    RecipeSource,
)
from pantry_tracker.domain.inventory import InventoryItem
from pantry_tracker.domain.recipes import (
    RecipeCandidate,
    RecipeIngredient,
    ScoredRecipe,
)
from pantry_tracker.services.cache import Cache
from pantry_tracker.services.matching import expiring_items, match_recipes

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

_MAX_TRIPLE_TERMS = 4
_MIN_TRIPLE_TERMS = 3

_logger = logging.getLogger(__name__)


def search_terms_for(
    inventory: Sequence[InventoryItem], now: datetime, threshold_days: int
) -> list[str]:
    """Return deduplicated search terms, preferring items about to expire."""
    source = expiring_items(inventory, now, threshold_days) or list(inventory)
    terms: list[str] = []
    for item in source:
        term = item.search_term.strip()
        if term and term not in terms:
            terms.append(term)
    return terms


def build_search_queries(terms: Sequence[str], max_queries: int = 6) -> list[str]:
    """Combine terms into search queries: singles, pairs, then small triples."""
    unique: list[str] = []
    for term in terms:
        cleaned = term.strip().lower()
        if cleaned and cleaned not in unique:
            unique.append(cleaned)

    queries = list(unique)
    queries.extend(" ".join(pair) for pair in combinations(unique, 2))
    if _MIN_TRIPLE_TERMS <= len(unique) <= _MAX_TRIPLE_TERMS:
        queries.extend(" ".join(triple) for triple in combinations(unique, 3))
    return queries[:max_queries]


def dedupe_candidates(candidates: Sequence[RecipeCandidate]) -> list[RecipeCandidate]:
    """Drop repeated recipes by title and source URL, keeping the first."""
    seen: set[str] = set()
    unique: list[RecipeCandidate] = []
    for candidate in candidates:
        key = f"{candidate.title.lower()}|{candidate.source_url or ''}"
        if key in seen:
            continue
        seen.add(key)
        unique.append(candidate)
    return unique


def parse_edamam_hits(payload: dict[str, object]) -> list[RecipeCandidate]:
    """Map raw Edamam search hits to recipe candidates."""
    candidates: list[RecipeCandidate] = []
    for hit in payload.get("hits") or []:
        recipe = hit.get("recipe") or {}
        label = recipe.get("label")
        if not label:
            continue
        candidates.append(
            RecipeCandidate(
                id=recipe.get("uri") or recipe.get("url") or label,
                title=label,
                ingredients=_parse_ingredients(recipe),
                source_url=recipe.get("url"),
                image_url=recipe.get("image"),
                total_time_minutes=_optional_int(recipe.get("totalTime")),
                servings=_optional_int(recipe.get("yield")),
            )
        )
    return candidates


def needs_refresh(previous_terms: frozenset[str] | None, terms: Sequence[str]) -> bool:
    """Return whether the search terms differ from the last completed search."""
    return previous_terms is None or frozenset(terms) != previous_terms


def prune_suggestions(
    suggestions: Sequence[ScoredRecipe], remaining: Sequence[InventoryItem]
) -> list[ScoredRecipe]:
    """Drop suggestions that rely on an item no longer in the inventory."""
    remaining_ids = {item.id for item in remaining}
    return [
        suggestion
        for suggestion in suggestions
        if set(suggestion.expiring_used) <= remaining_ids
    ]


@dataclass
class RecipeService:
    """Fetches recipe candidates for the inventory and ranks them.

    A search round is skipped when the search terms match the last completed
    round; the previous candidates are re-scored against the new inventory.
    """

    recipe_source: RecipeSource
    cache: Cache
    expiring_threshold_days: int = 3
    max_missing_ingredients: int = 3
    result_limit: int = 15
    max_search_queries: int = 6
    search_ttl_seconds: int = 3600
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3
    debug: bool = False
    last_terms: frozenset[str] | None = None
    last_candidates: list[RecipeCandidate] = field(default_factory=list)

    async def suggest(
        self, inventory: Sequence[InventoryItem], now: datetime
    ) -> list[ScoredRecipe]:
        """Return ranked recipes that use the current inventory."""
        terms = search_terms_for(inventory, now, self.expiring_threshold_days)
        if not terms:
            return []
        if needs_refresh(self.last_terms, terms):
            candidates = await self._gather_candidates(terms)
        else:
            _logger.info("Recipe search skipped, terms unchanged: %s", sorted(terms))
            candidates = self.last_candidates
        ranked = match_recipes(
            inventory,
            candidates,
            now,
            expiring_threshold_days=self.expiring_threshold_days,
            max_missing=self.max_missing_ingredients,
            limit=self.result_limit,
        )
        _logger.info(
            "Recipe suggestions: candidates=%s ranked=%s", len(candidates), len(ranked)
        )
        return ranked

    def force_refresh(self) -> None:
        """Forget the last search round and cached query results."""
        self.last_terms = None
        self.last_candidates = []
        self.cache.clear()

    async def search(self, query: str) -> list[RecipeCandidate]:
        """Search a single query with caching; a rate-limited query yields []."""
        return await self._search(query) or []

    async def _gather_candidates(self, terms: list[str]) -> list[RecipeCandidate]:
        queries = build_search_queries(terms, self.max_search_queries)
        results = await asyncio.gather(*(self._search(query) for query in queries))
        candidates = dedupe_candidates(
            [candidate for batch in results if batch for candidate in batch]
        )
        if any(batch is None for batch in results):
            _logger.info("Recipe search incomplete, not remembering terms")
            self.last_terms = None
        else:
            self.last_terms = frozenset(terms)
            self.last_candidates = candidates
        return candidates

    async def _search(self, query: str) -> list[RecipeCandidate] | None:
        """Search with caching; ``None`` when the query was rate limited."""
        cache_key = f"recipes:search:{query.lower()}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return cached

        try:
            payload = await self._call_with_retry(
                lambda: self.recipe_source.search_recipes(query), query=query
            )
        except RecipeSearchRateLimitedError:
            _logger.warning("Recipe search skipped after rate limit: query=%s", query)
            return None
        candidates = parse_edamam_hits(payload)
        self.cache.set(cache_key, candidates, ttl_seconds=self.search_ttl_seconds)
        if self.debug:
            _logger.info("Recipe search: query=%s results=%s", query, len(candidates))
        return candidates

    async def _call_with_retry(
        self, func: "Callable[[], Awaitable[dict[str, object]]]", *, query: str
    ) -> dict[str, object]:
        attempt = 0
        while True:
            try:
                return await func()
            except RecipeSearchRateLimitedError:
                raise
            except Exception as exc:
                attempt += 1
                _logger.warning(
                    "Recipe search failed (attempt %s/%s) query=%s: %s",
                    attempt,
                    self.retry_attempts + 1,
                    query,
                    exc,
                )
                if attempt > self.retry_attempts:
                    raise
                await asyncio.sleep(self.retry_delay_seconds)


def _parse_ingredients(recipe: dict[str, object]) -> list[RecipeIngredient]:
    structured = recipe.get("ingredients")
    if structured:
        ingredients = []
        for entry in structured:
            name = entry.get("food") or entry.get("text")
            if name:
                ingredients.append(RecipeIngredient(name=name, text=entry.get("text")))
        return ingredients
    return [
        RecipeIngredient(name=line, text=line)
        for line in recipe.get("ingredientLines") or []
        if line
    ]


def _optional_int(value: object) -> int | None:
    if isinstance(value, int | float) and not isinstance(value, bool):
        return int(value)
    return None
