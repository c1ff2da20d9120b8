"""Application services."""

from .exporter import ResultExporter, differences_frame, keys_frame, ledger_frame, meters_frame, room_summary_frame
from .inventory_service import InventoryService
from .repository import InMemoryInventoryRepository, InventoryRepository

__all__ = [
    "InventoryService",
    "InventoryRepository",
    "InMemoryInventoryRepository",
    "ResultExporter",
    "differences_frame",
    "keys_frame",
    "ledger_frame",
    "meters_frame",
    "room_summary_frame",
]
