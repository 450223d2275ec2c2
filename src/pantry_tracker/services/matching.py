"""Recipe scoring against the current inventory."""

from collections.abc import Callable, Sequence
from datetime import datetime

from pantry_tracker.domain.inventory import InventoryItem, days_until
from pantry_tracker.domain.recipes import RecipeCandidate, ScoredRecipe

AvailabilityCheck = Callable[[str, Sequence[str]], bool]

FULL_MATCH_POINTS = 100
EXPIRING_ITEM_BONUS = 25
MISSING_INGREDIENT_PENALTY = 5


def names_overlap(first: str, second: str) -> bool:
    """Case-insensitive substring containment in either direction."""
    a = first.strip().lower()
    b = second.strip().lower()
    if not a or not b:
        return False
    return a in b or b in a


def is_available(ingredient_name: str, inventory_names: Sequence[str]) -> bool:
    """Return whether an ingredient overlaps lexically with any inventory name."""
    return any(names_overlap(ingredient_name, name) for name in inventory_names)


def expiring_items(
    inventory: Sequence[InventoryItem], now: datetime, threshold_days: int
) -> list[InventoryItem]:
    """Return items expiring within ``threshold_days`` of ``now``.

    Items that are already past expiry are included; dropping them is up to
    the caller.
    """
    return [
        item
        for item in inventory
        if days_until(item.current_expires_at, now) <= threshold_days
    ]


def score_recipe(
    candidate: RecipeCandidate,
    inventory_names: Sequence[str],
    expiring: Sequence[InventoryItem],
    is_available: AvailabilityCheck = is_available,
) -> ScoredRecipe:
    """Compute match statistics and the ranking score for one candidate."""
    available_count = 0
    missing_names: list[str] = []
    for ingredient in candidate.ingredients:
        if is_available(ingredient.name, inventory_names):
            available_count += 1
        else:
            missing_names.append(ingredient.name)

    ingredient_names = [ingredient.name for ingredient in candidate.ingredients]
    expiring_used = [
        item.id for item in expiring if is_available(item.name, ingredient_names)
    ]

    missing_count = len(missing_names)
    total_count = available_count + missing_count
    match_fraction = available_count / total_count if total_count else 0.0
    score = (
        match_fraction * FULL_MATCH_POINTS
        + EXPIRING_ITEM_BONUS * len(expiring_used)
        - MISSING_INGREDIENT_PENALTY * missing_count
    )
    return ScoredRecipe(
        recipe=candidate,
        available_count=available_count,
        missing_count=missing_count,
        missing_names=missing_names,
        expiring_used=expiring_used,
        match_fraction=match_fraction,
        score=score,
    )


def match_recipes(  # noqa: PLR0913
    inventory: Sequence[InventoryItem],
    candidates: Sequence[RecipeCandidate],
    now: datetime,
    *,
    expiring_threshold_days: int = 3,
    max_missing: int = 3,
    limit: int = 15,
    is_available: AvailabilityCheck = is_available,
) -> list[ScoredRecipe]:
    """Score, filter and rank recipe candidates against the inventory.

    Candidates without ingredients or with more than ``max_missing`` missing
    ingredients are dropped. The rest are ordered by score, then by match
    fraction, keeping the input order for exact ties.
    """
    inventory_names = [item.name for item in inventory]
    expiring = expiring_items(inventory, now, expiring_threshold_days)

    scored = [
        score_recipe(candidate, inventory_names, expiring, is_available)
        for candidate in candidates
    ]
    kept = [
        result
        for result in scored
        if result.total_count > 0 and result.missing_count <= max_missing
    ]
    ranked = sorted(
        kept, key=lambda result: (result.score, result.match_fraction), reverse=True
    )
    return ranked[: max(limit, 0)]
