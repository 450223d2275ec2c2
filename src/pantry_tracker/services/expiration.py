"""Expiration recalculation for storage location changes."""

from datetime import datetime, timedelta

from pantry_tracker.domain.inventory import InventoryItem, StorageLocation

_MIN_REMAINING_DAYS = 1


def recalculate_expiration(
    item: InventoryItem, target: StorageLocation, now: datetime
) -> datetime:
    """Return the expiry date an item gets when moved to ``target`` at ``now``.

    Freezing always applies the full freezer estimate. Thawing applies the
    full estimate of the new location, ignoring time spent frozen. Moves
    between fridge and shelf (or to the same location) subtract the whole days
    elapsed since acquisition from the target estimate, never going below one
    day.
    """
    shelf_life = item.shelf_life
    if target == StorageLocation.FREEZER:
        return now + timedelta(days=shelf_life.freezer_days)

    if item.storage_location == StorageLocation.FREEZER:
        return now + timedelta(days=shelf_life.days_for(target))

    elapsed = max(0, (now - item.acquired_at) // timedelta(days=1))
    remaining = max(_MIN_REMAINING_DAYS, shelf_life.days_for(target) - elapsed)
    return now + timedelta(days=remaining)
