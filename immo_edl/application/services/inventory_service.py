"""Inventory application service.

Loads records from the repository, runs the pure domain operations and
saves the results. This is the only layer that logs.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Optional

from immo_edl.core.exceptions import (
    FrozenRecordError,
    ImmoEdlError,
    InvalidTransitionError,
    MismatchedLeaseError,
    RecordNotFoundError,
)
from immo_edl.core.inventory_constants import DEFAULT_KEYS
from immo_edl.core.logging import get_logger
from immo_edl.core.settings import AppSettings, get_settings
from immo_edl.domain.calculator.comparator import compare
from immo_edl.domain.calculator.vetuste import WearTable, WearTableRegistry, default_registry
from immo_edl.domain.models.comparison import ComparisonResult
from immo_edl.domain.models.inventory import (
    InventorySnapshot,
    InventoryStatus,
    InventoryType,
    KeyRecord,
    SignatureParty,
)
from immo_edl.domain.models.ledger import DeductionLedger
from immo_edl.domain.workflow import ledger as ledger_ops
from immo_edl.domain.workflow import snapshot as snapshot_ops

from .exporter import ResultExporter
from .repository import InventoryRepository

log = get_logger(__name__)


class InventoryService:
    """Orchestrates inventories, comparisons and deposit deductions."""

    def __init__(
        self,
        repository: InventoryRepository,
        settings: Optional[AppSettings] = None,
        wear_table: Optional[WearTable] = None,
        registry: Optional[WearTableRegistry] = None,
    ):
        """Initialize the service.

        Args:
            repository: Persistence port.
            settings: Application settings, defaults to get_settings().
            wear_table: Explicit grid; otherwise the configured version is used.
            registry: Grid versions to pick from, defaults to default_registry().
        """
        self.repository = repository
        self.settings = settings or get_settings()
        self.registry = registry or default_registry()
        self.wear_table = wear_table or self.registry.get(self.settings.wear_table_version)
        self.log = log.bind(wear_table=self.wear_table.version)

    # --- Inventories ---

    def create_inventory(
        self,
        inventory_id: str,
        lease_id: str,
        type: InventoryType,
        inventory_date: date,
        **fields: Any,
    ) -> InventorySnapshot:
        """Create a draft inventory, pre-filling the usual keys if none are given."""
        self.repository.get_lease(lease_id)
        if "keys" not in fields:
            fields["keys"] = tuple(KeyRecord(**k) for k in DEFAULT_KEYS)

        snapshot = InventorySnapshot(
            id=inventory_id,
            lease_id=lease_id,
            type=type,
            inventory_date=inventory_date,
            **fields,
        )
        self.repository.save_inventory(snapshot)
        self.log.info("inventory_created", inventory_id=inventory_id, lease_id=lease_id, type=snapshot.type.value)
        return snapshot

    def create_exit_inventory(self, inventory_id: str, lease_id: str, inventory_date: date, **fields: Any) -> InventorySnapshot:
        """Create an exit inventory linked to the lease's entry inventory, if any."""
        entry = self.repository.get_entry_inventory_for_lease(lease_id)
        if entry is not None:
            fields.setdefault("entry_inventory_id", entry.id)
        else:
            self.log.warning("entry_inventory_not_found", lease_id=lease_id)
        return self.create_inventory(inventory_id, lease_id, InventoryType.EXIT, inventory_date, **fields)

    def update_inventory(self, snapshot: InventorySnapshot) -> InventorySnapshot:
        """Persist an edited snapshot.

        Signed inventories cannot be overwritten; status changes and the entry
        link go through their dedicated operations.
        """
        current = self.repository.get_inventory_by_id(snapshot.id)
        snapshot_ops.ensure_mutable(current)
        if snapshot.status != current.status:
            raise InvalidTransitionError(current.status.value, snapshot.status.value, "use complete or sign")
        if current.entry_inventory_id is not None and snapshot.entry_inventory_id != current.entry_inventory_id:
            raise FrozenRecordError(f"Inventory '{current.id}' entry link cannot change")
        return self.repository.save_inventory(snapshot)

    def complete_inventory(self, inventory_id: str) -> InventorySnapshot:
        snapshot = self.repository.get_inventory_by_id(inventory_id)
        try:
            completed = snapshot_ops.complete(snapshot)
        except ImmoEdlError as e:
            self.log.warning("inventory_completion_rejected", inventory_id=inventory_id, error=str(e))
            raise
        self.repository.save_inventory(completed)
        self.log.info("inventory_completed", inventory_id=inventory_id, elements=completed.element_count)
        return completed

    def sign_inventory(self, inventory_id: str, party: SignatureParty, signature: str) -> InventorySnapshot:
        snapshot = self.repository.get_inventory_by_id(inventory_id)
        try:
            signed = snapshot_ops.sign(snapshot, party, signature)
        except ImmoEdlError as e:
            self.log.warning("inventory_signature_rejected", inventory_id=inventory_id, party=str(party), error=str(e))
            raise
        self.repository.save_inventory(signed)
        self.log.info("inventory_signed", inventory_id=inventory_id, party=SignatureParty(party).value, status=signed.status.value)
        return signed

    # --- Comparison ---

    def compare_inventories(self, entry_inventory_id: str, exit_inventory_id: str) -> ComparisonResult:
        entry = self.repository.get_inventory_by_id(entry_inventory_id)
        exit_ = self.repository.get_inventory_by_id(exit_inventory_id)
        try:
            lease = self.repository.get_lease(exit_.lease_id)
        except RecordNotFoundError:
            self.log.warning("lease_not_found", lease_id=exit_.lease_id)
            lease = None

        try:
            result = compare(entry, exit_, lease, table=self.wear_table)
        except MismatchedLeaseError as e:
            self.log.error("inventory_comparison_rejected", entry_id=entry_inventory_id, exit_id=exit_inventory_id, error=str(e))
            raise

        for warning in result.warnings:
            self.log.warning("comparison_warning", exit_id=exit_inventory_id, code=warning.code, detail=warning.message)
        self.log.info(
            "inventories_compared",
            entry_id=entry_inventory_id,
            exit_id=exit_inventory_id,
            differences=len(result.differences),
            total_deductions=str(result.total_deductions),
        )
        return result

    def compare_with_entry(self, exit_inventory_id: str) -> ComparisonResult:
        """Compare an exit inventory with its linked (or the lease's) entry inventory."""
        exit_ = self.repository.get_inventory_by_id(exit_inventory_id)
        entry_id = exit_.entry_inventory_id
        if entry_id is None:
            entry = self.repository.get_entry_inventory_for_lease(exit_.lease_id)
            if entry is None:
                raise RecordNotFoundError("entry inventory for lease", exit_.lease_id)
            entry_id = entry.id
        return self.compare_inventories(entry_id, exit_inventory_id)

    # --- Deductions ---

    def prepare_deductions(self, exit_inventory_id: str) -> DeductionLedger:
        """Saved ledger if there is one, otherwise a fresh one from the comparison."""
        saved = self.repository.load_deposit_deductions(exit_inventory_id)
        if saved is not None:
            return saved
        return ledger_ops.initialize_from_comparison(self.compare_with_entry(exit_inventory_id))

    def recompute_deductions(self, exit_inventory_id: str) -> DeductionLedger:
        """Fresh draft ledger from a new comparison, ignoring any saved one.

        Validating it replaces the stored ledger wholesale.
        """
        return ledger_ops.initialize_from_comparison(self.compare_with_entry(exit_inventory_id))

    def validate_deductions(self, ledger: DeductionLedger) -> DeductionLedger:
        """Validate the ledger against its signed exit inventory and store it.

        A previously validated ledger is replaced.
        """
        snapshot = self.repository.get_inventory_by_id(ledger.exit_inventory_id)
        try:
            validated = ledger_ops.validate(ledger, snapshot)
        except ImmoEdlError as e:
            self.log.warning("deductions_validation_rejected", exit_id=ledger.exit_inventory_id, error=str(e))
            raise

        replaced = snapshot.deposit_deductions is not None
        self.repository.save_deposit_deductions(ledger.exit_inventory_id, validated)
        self.log.info(
            "deductions_validated",
            exit_id=ledger.exit_inventory_id,
            total=str(validated.total),
            manual_lines=len(validated.manual_lines),
            replaced=replaced,
        )
        return validated

    # --- Export ---

    def export_comparison(self, result: ComparisonResult) -> Optional[str]:
        """Archive a comparison as JSON. Returns None when export is disabled."""
        if not self.settings.enable_export:
            self.log.info("export_disabled", exit_id=result.exit_inventory_id)
            return None
        return ResultExporter(self.settings.export_dir).save_comparison(
            result, metadata={"lease_id": result.lease_id}
        )

    def export_deductions(self, ledger: DeductionLedger) -> Optional[str]:
        if not self.settings.enable_export:
            self.log.info("export_disabled", exit_id=ledger.exit_inventory_id)
            return None
        return ResultExporter(self.settings.export_dir).save_ledger(ledger)

    # --- Stats ---

    def get_inventory_stats(self) -> dict[str, int]:
        inventories = self.repository.list_inventories()
        return {
            "total": len(inventories),
            "entry": sum(1 for s in inventories if s.type == InventoryType.ENTRY),
            "exit": sum(1 for s in inventories if s.type == InventoryType.EXIT),
            "draft": sum(1 for s in inventories if s.status == InventoryStatus.DRAFT),
            "completed": sum(1 for s in inventories if s.status == InventoryStatus.COMPLETED),
            "signed": sum(1 for s in inventories if s.status == InventoryStatus.SIGNED),
        }
