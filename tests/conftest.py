"""Pytest fixtures for immo_edl tests."""

import os
import sys
from datetime import date
from decimal import Decimal

import pytest

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from immo_edl.domain.models.inventory import (  # noqa: E402
    Element,
    ElementCategory,
    InventorySnapshot,
    InventoryStatus,
    InventoryType,
    KeyRecord,
    LeaseReference,
    LeaseType,
    MeterChannel,
    Room,
)

EXIT_DATE = date(2024, 6, 30)


def make_element(**overrides):
    data = {
        "element_type": "parquet",
        "element_name": "Parquet salon",
        "category": ElementCategory.FLOORING,
        "rating": 4,
    }
    data.update(overrides)
    return Element(**data)


def make_snapshot(**overrides):
    data = {
        "id": "edl-entry-1",
        "lease_id": "lease-1",
        "type": InventoryType.ENTRY,
        "inventory_date": date(2019, 6, 30),
    }
    data.update(overrides)
    return InventorySnapshot(**data)


@pytest.fixture
def lease():
    return LeaseReference(
        id="lease-1",
        deposit_amount=Decimal("1200"),
        rent_amount=Decimal("1200"),
        lease_type=LeaseType.UNFURNISHED,
    )


@pytest.fixture
def entry_snapshot():
    """Signed entry inventory: living room, kitchen and a cellar."""
    return make_snapshot(
        status=InventoryStatus.SIGNED,
        landlord_signature="sig-landlord",
        tenant_signature="sig-tenant",
        meter_readings={MeterChannel.WATER_COLD: 120, MeterChannel.ELECTRICITY_PEAK: 15000},
        keys=(
            KeyRecord(key_type="porte_entree", quantity=2),
            KeyRecord(key_type="boite_lettres", quantity=1),
        ),
        rooms=(
            Room(room_type="living_room", room_name="Salon", elements=(
                make_element(rating=5),
                make_element(element_type="peinture", element_name="Murs salon",
                             category=ElementCategory.WALLS, rating=5),
            )),
            Room(room_type="kitchen", room_name="Cuisine", elements=(
                make_element(element_type="evier", element_name="Évier",
                             category=ElementCategory.PLUMBING, rating=4),
            )),
            Room(room_type="cellar", room_name="Cave", elements=(
                make_element(element_type="floor", element_name="Sol cave", rating=3),
            )),
        ),
    )


@pytest.fixture
def exit_snapshot():
    """Draft exit inventory of the same lease, five years later."""
    return make_snapshot(
        id="edl-exit-1",
        type=InventoryType.EXIT,
        inventory_date=EXIT_DATE,
        entry_inventory_id="edl-entry-1",
        meter_readings={MeterChannel.WATER_COLD: 480, MeterChannel.GAS: 900},
        keys=(
            KeyRecord(key_type="porte_entree", quantity=1),
            KeyRecord(key_type="boite_lettres", quantity=1),
            KeyRecord(key_type="badge", quantity=1),
        ),
        rooms=(
            Room(room_type="living_room", room_name="Salon", elements=(
                # Installed 60 months before exit, flagged: charged
                make_element(rating=2, installation_date=date(2019, 6, 30), is_degradation=True,
                             estimated_repair_cost=Decimal("1000")),
                # Worse rating, not flagged: shown only
                make_element(element_type="peinture", element_name="Murs salon",
                             category=ElementCategory.WALLS, rating=3),
            )),
            Room(room_type="kitchen", room_name="Cuisine", elements=(
                make_element(element_type="evier", element_name="Évier",
                             category=ElementCategory.PLUMBING, rating=4),
            )),
            Room(room_type="bedroom", room_name="Chambre", elements=(
                make_element(element_type="floor", element_name="Moquette", rating=2),
            )),
        ),
    )


@pytest.fixture
def element_factory():
    """Build an Element from defaults plus overrides."""
    return make_element


@pytest.fixture
def snapshot_factory():
    """Build an InventorySnapshot from defaults plus overrides."""
    return make_snapshot
