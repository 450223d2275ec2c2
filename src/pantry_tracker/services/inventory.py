"""Inventory item lifecycle operations."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace
from datetime import datetime
from uuid import uuid4

from pantry_tracker.domain.inventory import (
    InventoryItem,
    ShelfLifeEstimate,
    StorageLocation,
    is_expired,
)
from pantry_tracker.services.estimates import (
    initial_expiration,
    recommended_location,
    resolve_shelf_life,
)
from pantry_tracker.services.expiration import recalculate_expiration

_logger = logging.getLogger(__name__)


@dataclass
class InventoryService:
    """Creates items and applies location changes and overrides.

    Items are returned as new values; persisting them is up to the caller.
    """

    fallback_shelf_life: ShelfLifeEstimate | None = None
    debug: bool = False

    def create_item(
        self,
        name: str,
        location: StorageLocation,
        shelf_life: ShelfLifeEstimate,
        now: datetime,
        generic_name: str | None = None,
    ) -> InventoryItem:
        """Create an item acquired at ``now`` with its initial expiry."""
        location = StorageLocation(location)
        return InventoryItem(
            id=uuid4(),
            name=name,
            storage_location=location,
            acquired_at=now,
            shelf_life=shelf_life,
            current_expires_at=initial_expiration(shelf_life, location, now),
            generic_name=generic_name,
        )

    def ingest(
        self,
        name: str,
        raw_estimate: dict[str, object],
        now: datetime,
        generic_name: str | None = None,
    ) -> InventoryItem:
        """Create an item from raw estimator output.

        Missing estimates are filled from ``fallback_shelf_life``; the item is
        placed in the estimator's recommended location.
        """
        shelf_life = resolve_shelf_life(raw_estimate, fallback=self.fallback_shelf_life)
        location = recommended_location(raw_estimate)
        item = self.create_item(name, location, shelf_life, now, generic_name)
        if self.debug:
            _logger.info(
                "Inventory ingest: id=%s name=%s location=%s expires_at=%s",
                item.id,
                item.name,
                item.storage_location,
                item.current_expires_at.isoformat(),
            )
        return item

    def move_item(
        self, item: InventoryItem, target: StorageLocation, now: datetime
    ) -> InventoryItem:
        """Move an item and recalculate its expiry."""
        target = StorageLocation(target)
        if is_expired(item, now):
            _logger.info(
                "Moving already expired item: id=%s name=%s", item.id, item.name
            )
        expires_at = recalculate_expiration(item, target, now)
        if self.debug:
            _logger.info(
                "Inventory move: id=%s %s->%s expires_at=%s",
                item.id,
                item.storage_location,
                target,
                expires_at.isoformat(),
            )
        return replace(
            item,
            storage_location=target,
            current_expires_at=expires_at,
            expiration_overridden=False,
        )

    def move_items(
        self, items: Sequence[InventoryItem], target: StorageLocation, now: datetime
    ) -> list[InventoryItem]:
        """Move several items using the same ``now``."""
        return [self.move_item(item, target, now) for item in items]

    def override_expiration(
        self, item: InventoryItem, expires_at: datetime
    ) -> InventoryItem:
        """Apply a user-entered expiry date."""
        return replace(item, current_expires_at=expires_at, expiration_overridden=True)
