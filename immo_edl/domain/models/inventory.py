"""Inventory (état des lieux) data models.

A snapshot captures one inspection event, at entry or at exit of a lease:
rooms with their elements, keys handed over, meter indexes and signatures.
All models are frozen; workflow functions return updated copies.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field, field_serializer, field_validator, model_validator

from immo_edl.domain.models.ledger import DeductionLedger


def freeze_mapping(mapping: Mapping) -> Mapping:
    """Read-only view over a private copy of ``mapping``."""
    return MappingProxyType(dict(mapping))


class InventoryType(str, Enum):
    ENTRY = "entry"
    EXIT = "exit"


class InventoryStatus(str, Enum):
    DRAFT = "draft"
    COMPLETED = "completed"
    SIGNED = "signed"


class ElementCategory(str, Enum):
    """Element categories of the wear grid."""

    FLOORING = "floor"
    WALLS = "wall"
    CEILING = "ceiling"
    JOINERY = "door"
    WINDOWS = "window"
    SHUTTERS = "shutter"
    ELECTRICAL = "electrical"
    HEATING = "heating"
    PLUMBING = "plumbing"
    APPLIANCES = "appliance"
    FURNITURE = "furniture"
    OTHER = "other"


class MeterChannel(str, Enum):
    WATER_COLD = "water_cold"
    WATER_HOT = "water_hot"
    ELECTRICITY_PEAK = "electricity_hp"
    ELECTRICITY_OFF_PEAK = "electricity_hc"
    GAS = "gas"


class SignatureParty(str, Enum):
    LANDLORD = "landlord"
    TENANT = "tenant"


@dataclass(frozen=True)
class MatchKey:
    """Identity used to pair rooms and elements across two snapshots.

    Two keys match only when both parts are exactly equal (case-sensitive,
    no trimming). Rooms use (room_type, room_name), elements use
    (element_type, element_name).
    """

    category_tag: str
    qualifier_text: str

    def matches(self, other: MatchKey) -> bool:
        return self == other

    def __str__(self) -> str:
        return self.qualifier_text or self.category_tag


class Element(BaseModel):
    """One inspected element of a room (floor covering, tap, window...)."""

    # Identity within the room
    element_type: str = Field(..., min_length=1, description="Catalogue type, e.g. 'parquet'")
    element_name: str = Field(default="", description="Free label, e.g. 'Parquet salon'")

    category: ElementCategory = Field(..., description="Wear grid category")
    rating: int = Field(..., ge=1, le=5, description="Condition 1 (bad) to 5 (new)")
    material: Optional[str] = Field(None, description="Material id of the wear grid")
    installation_date: Optional[date] = Field(None, description="Installation or last renewal")

    condition_notes: str = Field(default="", description="Inspector notes")
    photos: tuple[str, ...] = Field(default_factory=tuple, description="Photo references")

    # Inspector flags
    is_degradation: bool = Field(default=False, description="Damage attributable to the tenant")
    repair_needed: bool = Field(default=False, description="Repair required")
    estimated_repair_cost: Optional[Decimal] = Field(None, ge=0, description="Repair cost in €")

    model_config = {
        "frozen": True,
    }

    @field_validator("rating", mode="before")
    @classmethod
    def reject_bool_rating(cls, v):
        if isinstance(v, bool):
            raise ValueError("rating must be an integer between 1 and 5")
        return v

    @property
    def key(self) -> MatchKey:
        return MatchKey(self.element_type, self.element_name)


class Room(BaseModel):
    """A room of the dwelling and its ordered elements."""

    room_type: str = Field(..., min_length=1, description="Room type, e.g. 'bedroom'")
    room_name: str = Field(default="", description="Free label, e.g. 'Chambre 2'")
    elements: tuple[Element, ...] = Field(default_factory=tuple)
    photos: tuple[str, ...] = Field(default_factory=tuple)
    observations: str = Field(default="")

    model_config = {
        "frozen": True,
    }

    @property
    def key(self) -> MatchKey:
        return MatchKey(self.room_type, self.room_name)


class KeyRecord(BaseModel):
    """Keys, badges or remotes of one type handed over."""

    key_type: str = Field(..., min_length=1)
    quantity: int = Field(default=0, ge=0)
    notes: str = Field(default="")

    model_config = {
        "frozen": True,
    }


class InventorySnapshot(BaseModel):
    """One état des lieux (entry or exit) of a lease."""

    id: str = Field(..., min_length=1)
    lease_id: str = Field(..., min_length=1)
    type: InventoryType
    inventory_date: date
    status: InventoryStatus = InventoryStatus.DRAFT

    # Read-only once validated
    meter_readings: dict[MeterChannel, int] = Field(default_factory=dict, validate_default=True)
    keys: tuple[KeyRecord, ...] = Field(default_factory=tuple)
    rooms: tuple[Room, ...] = Field(default_factory=tuple)
    general_observations: str = Field(default="")

    # Signatures are opaque blobs (base64 images)
    landlord_signature: Optional[str] = None
    tenant_signature: Optional[str] = None
    landlord_signed_at: Optional[datetime] = None
    tenant_signed_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    # Exit only
    entry_inventory_id: Optional[str] = None
    deposit_deductions: Optional[DeductionLedger] = None

    model_config = {
        "frozen": True,
    }

    @field_validator("meter_readings", mode="after")
    @classmethod
    def validate_meter_values(cls, v: dict[MeterChannel, int]) -> Mapping[MeterChannel, int]:
        for channel, value in v.items():
            if value < 0:
                raise ValueError(f"meter '{channel.value}' index must be >= 0")
        return freeze_mapping(v)

    @field_serializer("meter_readings")
    def serialize_meter_readings(self, v: Mapping[MeterChannel, int]) -> dict[MeterChannel, int]:
        return dict(v)

    @model_validator(mode="after")
    def check_exit_only_fields(self) -> InventorySnapshot:
        if self.type == InventoryType.ENTRY:
            if self.entry_inventory_id is not None:
                raise ValueError("an entry inventory cannot reference another entry inventory")
            if self.deposit_deductions is not None:
                raise ValueError("deposit deductions belong to exit inventories")
        return self

    @property
    def is_signed(self) -> bool:
        return self.status == InventoryStatus.SIGNED

    @property
    def element_count(self) -> int:
        return sum(len(room.elements) for room in self.rooms)

    @property
    def has_both_signatures(self) -> bool:
        return bool(self.landlord_signature) and bool(self.tenant_signature)

    def key_quantities(self) -> dict[str, int]:
        """Quantity per key type (duplicate lines are summed)."""
        quantities: dict[str, int] = {}
        for record in self.keys:
            quantities[record.key_type] = quantities.get(record.key_type, 0) + record.quantity
        return quantities


class LeaseType(str, Enum):
    UNFURNISHED = "unfurnished"
    FURNISHED = "furnished"
    STUDENT = "student"
    MOBILITY = "mobility"


class LeaseReference(BaseModel):
    """Lease fields the comparison needs.

    ``deposit_amount`` is None when the deposit has not been recorded, which
    is not the same thing as a zero deposit.
    """

    id: str = Field(..., min_length=1)
    deposit_amount: Optional[Decimal] = Field(None, ge=0, description="Dépôt de garantie in €")
    rent_amount: Optional[Decimal] = Field(None, ge=0, description="Monthly rent excl. charges in €")
    lease_type: Optional[LeaseType] = None
    lot: dict[str, Any] = Field(default_factory=dict, validate_default=True)
    tenant: dict[str, Any] = Field(default_factory=dict, validate_default=True)

    model_config = {
        "frozen": True,
    }

    @field_validator("lot", "tenant", mode="after")
    @classmethod
    def freeze_details(cls, v: dict[str, Any]) -> Mapping[str, Any]:
        return freeze_mapping(v)

    @field_serializer("lot", "tenant")
    def serialize_details(self, v: Mapping[str, Any]) -> dict[str, Any]:
        return dict(v)
