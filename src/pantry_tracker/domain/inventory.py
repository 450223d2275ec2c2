"""Domain models for pantry inventory."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import StrEnum
from uuid import UUID

_DISPLAY_NAMES = {
    "fridge": "Refrigerator",
    "freezer": "Freezer",
    "shelf": "Pantry/Shelf",
}


class InvalidShelfLifeEstimate(ValueError):
    """Raised when a per-location shelf-life day count is missing or negative."""


class StorageLocation(StrEnum):
    """Where an item is stored."""

    FRIDGE = "fridge"
    FREEZER = "freezer"
    SHELF = "shelf"

    @property
    def display_name(self) -> str:
        """Human readable location name."""
        return _DISPLAY_NAMES[self.value]


@dataclass(frozen=True)
class ShelfLifeEstimate:
    """Days until expiry for each storage location."""

    fridge_days: int
    freezer_days: int
    shelf_days: int

    def __post_init__(self) -> None:
        for location in StorageLocation:
            value = getattr(self, f"{location.value}_days")
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidShelfLifeEstimate(
                    f"{location.value} shelf life must be an integer, got {value!r}"
                )
            if value < 0:
                raise InvalidShelfLifeEstimate(
                    f"{location.value} shelf life must be non-negative, got {value}"
                )

    def days_for(self, location: StorageLocation) -> int:
        """Return the estimate for a storage location."""
        return getattr(self, f"{StorageLocation(location).value}_days")


@dataclass(frozen=True)
class InventoryItem:
    """Perishable item held in the pantry."""

    id: UUID
    name: str
    storage_location: StorageLocation
    acquired_at: datetime
    shelf_life: ShelfLifeEstimate
    current_expires_at: datetime
    generic_name: str | None = None
    expiration_overridden: bool = False

    @property
    def search_term(self) -> str:
        """Name used when searching for recipes."""
        return (self.generic_name or self.name).lower()


def days_until(expires_at: datetime, now: datetime) -> int:
    """Whole days from now until expiry, rounded down."""
    return (expires_at - now) // timedelta(days=1)


def is_expired(item: InventoryItem, now: datetime) -> bool:
    """Return whether the item's current expiry is in the past."""
    return item.current_expires_at < now
