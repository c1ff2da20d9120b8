"""Persistence port for inventories, leases and deduction ledgers.

The hosted backend is not part of this package; services depend on the
``InventoryRepository`` protocol. ``InMemoryInventoryRepository`` backs the
tests and local tooling. Writes are last-write-wins.
"""

from __future__ import annotations

from typing import Optional, Protocol

from immo_edl.core.exceptions import RecordNotFoundError
from immo_edl.domain.models.inventory import (
    InventorySnapshot,
    InventoryStatus,
    InventoryType,
    LeaseReference,
)
from immo_edl.domain.models.ledger import DeductionLedger
from immo_edl.domain.workflow.snapshot import attach_deductions


class InventoryRepository(Protocol):
    def get_inventory_by_id(self, inventory_id: str) -> InventorySnapshot: ...

    def save_inventory(self, snapshot: InventorySnapshot) -> InventorySnapshot: ...

    def list_inventories(
        self,
        *,
        type: Optional[InventoryType] = None,
        status: Optional[InventoryStatus] = None,
        lease_id: Optional[str] = None,
    ) -> list[InventorySnapshot]: ...

    def get_entry_inventory_for_lease(self, lease_id: str) -> Optional[InventorySnapshot]: ...

    def get_lease(self, lease_id: str) -> LeaseReference: ...

    def save_lease(self, lease: LeaseReference) -> LeaseReference: ...

    def save_deposit_deductions(self, inventory_id: str, ledger: DeductionLedger) -> None: ...

    def load_deposit_deductions(self, inventory_id: str) -> Optional[DeductionLedger]: ...


class InMemoryInventoryRepository:
    """Dict-backed repository. Stored records are immutable values."""

    def __init__(self):
        self._inventories: dict[str, InventorySnapshot] = {}
        self._leases: dict[str, LeaseReference] = {}

    def get_inventory_by_id(self, inventory_id: str) -> InventorySnapshot:
        try:
            return self._inventories[inventory_id]
        except KeyError:
            raise RecordNotFoundError("inventory", inventory_id) from None

    def save_inventory(self, snapshot: InventorySnapshot) -> InventorySnapshot:
        self._inventories[snapshot.id] = snapshot
        return snapshot

    def list_inventories(
        self,
        *,
        type: Optional[InventoryType] = None,
        status: Optional[InventoryStatus] = None,
        lease_id: Optional[str] = None,
    ) -> list[InventorySnapshot]:
        results = [
            s for s in self._inventories.values()
            if (type is None or s.type == type)
            and (status is None or s.status == status)
            and (lease_id is None or s.lease_id == lease_id)
        ]
        # Most recent first
        return sorted(results, key=lambda s: (s.inventory_date, s.id), reverse=True)

    def get_entry_inventory_for_lease(self, lease_id: str) -> Optional[InventorySnapshot]:
        entries = self.list_inventories(type=InventoryType.ENTRY, lease_id=lease_id)
        return entries[0] if entries else None

    def get_lease(self, lease_id: str) -> LeaseReference:
        try:
            return self._leases[lease_id]
        except KeyError:
            raise RecordNotFoundError("lease", lease_id) from None

    def save_lease(self, lease: LeaseReference) -> LeaseReference:
        self._leases[lease.id] = lease
        return lease

    def save_deposit_deductions(self, inventory_id: str, ledger: DeductionLedger) -> None:
        snapshot = self.get_inventory_by_id(inventory_id)
        self._inventories[inventory_id] = attach_deductions(snapshot, ledger)

    def load_deposit_deductions(self, inventory_id: str) -> Optional[DeductionLedger]:
        return self.get_inventory_by_id(inventory_id).deposit_deductions
