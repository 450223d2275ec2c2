"""Shelf-life estimate validation and ingestion-time expiry."""

from datetime import datetime, timedelta

from pydantic import BaseModel, Field, ValidationError

from pantry_tracker.config import Settings
from pantry_tracker.domain.inventory import (
    InvalidShelfLifeEstimate,
    ShelfLifeEstimate,
    StorageLocation,
)


class ShelfLifePayload(BaseModel):
    """Raw per-location estimates as returned by an external estimator."""

    fridge_days: int | None = Field(default=None, ge=0)
    freezer_days: int | None = Field(default=None, ge=0)
    shelf_days: int | None = Field(default=None, ge=0)
    recommended_storage: StorageLocation | None = None


def default_shelf_life(settings: Settings) -> ShelfLifeEstimate:
    """Conservative estimate used when an estimator leaves values out."""
    return ShelfLifeEstimate(
        fridge_days=settings.default_fridge_days,
        freezer_days=settings.default_freezer_days,
        shelf_days=settings.default_shelf_days,
    )


def resolve_shelf_life(
    raw: dict[str, object], fallback: ShelfLifeEstimate | None = None
) -> ShelfLifeEstimate:
    """Validate raw estimates, filling missing values from ``fallback``.

    Negative or non-integer values always raise. Missing values raise when no
    fallback is given.
    """
    try:
        payload = ShelfLifePayload.model_validate(raw)
    except ValidationError as exc:
        raise InvalidShelfLifeEstimate(str(exc)) from exc

    values: dict[str, int] = {}
    for location in StorageLocation:
        key = f"{location.value}_days"
        value = getattr(payload, key)
        if value is None:
            if fallback is None:
                raise InvalidShelfLifeEstimate(f"missing {key}")
            value = fallback.days_for(location)
        values[key] = value
    return ShelfLifeEstimate(**values)


def recommended_location(
    raw: dict[str, object], default: StorageLocation = StorageLocation.FRIDGE
) -> StorageLocation:
    """Return the estimator's recommended storage, or ``default``."""
    try:
        payload = ShelfLifePayload.model_validate(raw)
    except ValidationError as exc:
        raise InvalidShelfLifeEstimate(str(exc)) from exc
    return payload.recommended_storage or default


def initial_expiration(
    shelf_life: ShelfLifeEstimate, location: StorageLocation, acquired_at: datetime
) -> datetime:
    """Expiry assigned when an item first enters the pantry."""
    return acquired_at + timedelta(days=shelf_life.days_for(location))
