"""Tests for inventory service."""

from datetime import timedelta

import pytest

from pantry_tracker.domain.inventory import (
    InvalidShelfLifeEstimate,
    ShelfLifeEstimate,
    StorageLocation,
    days_until,
    is_expired,
)
from pantry_tracker.services.inventory import InventoryService
from tests.conftest import NOW, make_item


def test_create_item_sets_initial_expiry() -> None:
    service = InventoryService()
    estimate = ShelfLifeEstimate(fridge_days=2, freezer_days=90, shelf_days=0)

    item = service.create_item(
        "Organic Chicken Breast", StorageLocation.FRIDGE, estimate, NOW, "chicken"
    )

    assert item.acquired_at == NOW
    assert item.current_expires_at == NOW + timedelta(days=2)
    assert item.search_term == "chicken"


def test_move_item_returns_updated_copy() -> None:
    service = InventoryService(debug=True)
    item = make_item("Chicken", acquired_days_ago=1)

    moved = service.move_item(item, StorageLocation.FREEZER, NOW)

    assert moved.storage_location == StorageLocation.FREEZER
    assert moved.current_expires_at == NOW + timedelta(days=30)
    assert moved.acquired_at == item.acquired_at
    assert item.storage_location == StorageLocation.FRIDGE


def test_move_expired_item_still_recalculates() -> None:
    service = InventoryService()
    item = make_item("Milk", acquired_days_ago=9, expires_in_days=-2)

    moved = service.move_item(item, StorageLocation.SHELF, NOW)

    assert moved.current_expires_at == NOW + timedelta(days=1)


def test_override_then_move_clears_flag() -> None:
    service = InventoryService()
    item = make_item("Cheese")

    overridden = service.override_expiration(item, NOW + timedelta(days=21))
    moved = service.move_item(overridden, StorageLocation.FRIDGE, NOW)

    assert overridden.expiration_overridden
    assert overridden.current_expires_at == NOW + timedelta(days=21)
    assert not moved.expiration_overridden


def test_move_items_shares_now() -> None:
    service = InventoryService()
    items = [make_item("Peas"), make_item("Corn", location=StorageLocation.SHELF)]

    moved = service.move_items(items, StorageLocation.FREEZER, NOW)

    assert {m.current_expires_at for m in moved} == {NOW + timedelta(days=30)}


def test_days_until_and_expired() -> None:
    item = make_item("Lettuce", expires_in_days=-0.5)

    assert days_until(item.current_expires_at, NOW) == -1
    assert days_until(NOW + timedelta(days=2, hours=5), NOW) == 2
    assert is_expired(item, NOW)


def test_ingest_fills_missing_estimates_from_fallback() -> None:
    fallback = ShelfLifeEstimate(fridge_days=7, freezer_days=30, shelf_days=7)
    service = InventoryService(fallback_shelf_life=fallback)

    item = service.ingest(
        "Sourdough", {"shelf_days": 4, "recommended_storage": "shelf"}, NOW
    )

    assert item.storage_location == StorageLocation.SHELF
    assert item.shelf_life == ShelfLifeEstimate(
        fridge_days=7, freezer_days=30, shelf_days=4
    )
    assert item.current_expires_at == NOW + timedelta(days=4)


def test_ingest_without_fallback_rejects_missing_estimates() -> None:
    service = InventoryService()

    with pytest.raises(InvalidShelfLifeEstimate):
        service.ingest("Sourdough", {"shelf_days": 4}, NOW)


def test_ingest_defaults_to_fridge() -> None:
    service = InventoryService(debug=True)

    item = service.ingest(
        "Spinach", {"fridge_days": 5, "freezer_days": 240, "shelf_days": 0}, NOW
    )

    assert item.storage_location == StorageLocation.FRIDGE
    assert item.current_expires_at == NOW + timedelta(days=5)
