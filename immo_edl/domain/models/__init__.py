"""Data models for immo_edl."""

from .comparison import (
    ComparisonResult,
    ComparisonWarning,
    Difference,
    ElementComparison,
    ElementStatus,
    KeyDifference,
    MeterConsumption,
    RoomComparison,
)
from .inventory import (
    Element,
    ElementCategory,
    InventorySnapshot,
    InventoryStatus,
    InventoryType,
    KeyRecord,
    LeaseReference,
    LeaseType,
    MatchKey,
    MeterChannel,
    Room,
    SignatureParty,
)
from .ledger import DeductionLedger, DeductionLine, LedgerStatus

__all__ = [
    "ComparisonResult",
    "ComparisonWarning",
    "DeductionLedger",
    "DeductionLine",
    "Difference",
    "Element",
    "ElementCategory",
    "ElementComparison",
    "ElementStatus",
    "InventorySnapshot",
    "InventoryStatus",
    "InventoryType",
    "KeyDifference",
    "KeyRecord",
    "LeaseReference",
    "LeaseType",
    "LedgerStatus",
    "MatchKey",
    "MeterChannel",
    "MeterConsumption",
    "Room",
    "RoomComparison",
    "SignatureParty",
]
