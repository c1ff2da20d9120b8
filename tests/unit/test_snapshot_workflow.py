"""Unit tests for the inventory snapshot state machine."""

from datetime import datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError as PydanticValidationError

from immo_edl.core.exceptions import (
    FrozenRecordError,
    InvalidTransitionError,
    RecordNotFoundError,
    ValidationError,
)
from immo_edl.domain.models.inventory import (
    ElementCategory,
    InventoryStatus,
    InventoryType,
    MeterChannel,
    Room,
    SignatureParty,
)
from immo_edl.domain.models.ledger import DeductionLedger, LedgerStatus
from immo_edl.domain.workflow import snapshot as snapshot_ops

STAMP = datetime(2024, 6, 30, 18, 0)


@pytest.fixture
def draft(exit_snapshot):
    return exit_snapshot


@pytest.fixture
def completed(draft):
    return snapshot_ops.complete(draft, now=STAMP)


@pytest.fixture
def signed(completed):
    half = snapshot_ops.sign(completed, SignatureParty.LANDLORD, "sig-landlord", now=STAMP)
    return snapshot_ops.sign(half, SignatureParty.TENANT, "sig-tenant", now=STAMP)


class TestTransitions:
    """draft -> completed -> signed."""

    def test_complete(self, draft, completed):
        assert completed.status == InventoryStatus.COMPLETED
        assert completed.completed_at == STAMP
        assert draft.status == InventoryStatus.DRAFT

    def test_complete_needs_an_element(self, snapshot_factory):
        empty = snapshot_factory(rooms=(Room(room_type="kitchen"),))
        with pytest.raises(InvalidTransitionError):
            snapshot_ops.complete(empty)

    def test_complete_twice(self, completed):
        with pytest.raises(InvalidTransitionError):
            snapshot_ops.complete(completed)

    def test_one_signature_keeps_completed(self, completed):
        half = snapshot_ops.sign(completed, SignatureParty.TENANT, "sig-tenant", now=STAMP)
        assert half.status == InventoryStatus.COMPLETED
        assert half.tenant_signed_at == STAMP
        assert half.landlord_signature is None

    def test_both_signatures_sign(self, signed):
        assert signed.status == InventoryStatus.SIGNED
        assert signed.is_signed

    def test_signing_a_draft_does_not_advance(self, draft):
        once = snapshot_ops.sign(draft, "landlord", "a")
        twice = snapshot_ops.sign(once, "tenant", "b")
        assert twice.status == InventoryStatus.DRAFT
        assert twice.has_both_signatures

    def test_empty_signature(self, completed):
        with pytest.raises(ValidationError):
            snapshot_ops.sign(completed, SignatureParty.TENANT, "")

    def test_mark_signed(self, completed):
        both = completed.model_copy(update={"landlord_signature": "a", "tenant_signature": "b"})
        done = snapshot_ops.mark_signed(both)
        assert done.status == InventoryStatus.SIGNED

    def test_mark_signed_without_signatures(self, completed):
        with pytest.raises(InvalidTransitionError):
            snapshot_ops.mark_signed(completed)

    def test_mark_signed_from_draft(self, draft):
        with pytest.raises(InvalidTransitionError):
            snapshot_ops.mark_signed(draft)


class TestFrozenAfterSigning:
    """Signed content can no longer change."""

    @pytest.mark.parametrize("edit", [
        lambda s: snapshot_ops.add_room(s, Room(room_type="bathroom")),
        lambda s: snapshot_ops.remove_room(s, 0),
        lambda s: snapshot_ops.update_room(s, 0, observations="x"),
        lambda s: snapshot_ops.update_element(s, 0, 0, rating=1),
        lambda s: snapshot_ops.remove_element(s, 0, 0),
        lambda s: snapshot_ops.set_meter_reading(s, MeterChannel.GAS, 1000),
        lambda s: snapshot_ops.set_key(s, "porte_entree", 3),
        lambda s: snapshot_ops.set_general_observations(s, "x"),
        lambda s: snapshot_ops.sign(s, SignatureParty.TENANT, "other"),
        lambda s: snapshot_ops.reorder_rooms(s, [2, 1, 0]),
    ])
    def test_edit_rejected(self, signed, edit):
        before = signed.model_dump()
        with pytest.raises(FrozenRecordError):
            edit(signed)
        assert signed.model_dump() == before


class TestRoomsAndElements:
    """Copy-on-write edits."""

    def test_default_room(self):
        room = snapshot_ops.default_room("bathroom", "Salle de bain")
        categories = [e.category for e in room.elements]
        assert ElementCategory.PLUMBING in categories
        assert all(e.rating == 3 for e in room.elements)

    def test_default_room_unknown_type(self):
        room = snapshot_ops.default_room("veranda")
        assert [e.category for e in room.elements] == [
            ElementCategory.FLOORING, ElementCategory.WALLS, ElementCategory.CEILING,
        ]

    def test_add_room_returns_new_snapshot(self, draft):
        updated = snapshot_ops.add_room(draft, snapshot_ops.default_room("office", "Bureau"))
        assert len(updated.rooms) == len(draft.rooms) + 1
        assert updated.rooms[-1].room_name == "Bureau"

    def test_remove_room(self, draft):
        updated = snapshot_ops.remove_room(draft, 1)
        assert [r.room_name for r in updated.rooms] == ["Salon", "Chambre"]

    def test_unknown_room_index(self, draft):
        with pytest.raises(RecordNotFoundError):
            snapshot_ops.remove_room(draft, 9)

    def test_reorder_rooms(self, draft):
        updated = snapshot_ops.reorder_rooms(draft, [2, 0, 1])
        assert [r.room_name for r in updated.rooms] == ["Chambre", "Salon", "Cuisine"]

    def test_reorder_needs_permutation(self, draft):
        with pytest.raises(ValidationError):
            snapshot_ops.reorder_rooms(draft, [0, 0, 1])

    def test_add_and_update_element(self, draft, element_factory):
        updated = snapshot_ops.add_element(draft, 1, element_factory(element_type="four", element_name="Four",
                                                                     category=ElementCategory.APPLIANCES))
        updated = snapshot_ops.update_element(updated, 1, 1, rating=2, estimated_repair_cost=Decimal("90"))
        oven = updated.rooms[1].elements[1]
        assert oven.rating == 2
        assert oven.estimated_repair_cost == Decimal("90")

    def test_update_element_validates_rating(self, draft):
        with pytest.raises(PydanticValidationError):
            snapshot_ops.update_element(draft, 0, 0, rating=7)

    def test_remove_unknown_element(self, draft):
        with pytest.raises(RecordNotFoundError):
            snapshot_ops.remove_element(draft, 0, 5)


class TestMetersKeysLinks:
    """Meters, keys, observations and the entry link."""

    def test_set_meter_reading(self, draft):
        updated = snapshot_ops.set_meter_reading(draft, MeterChannel.WATER_HOT, 42)
        assert updated.meter_readings[MeterChannel.WATER_HOT] == 42
        assert MeterChannel.WATER_HOT not in draft.meter_readings

    @pytest.mark.parametrize("value", [-1, 1.5, True, "12"])
    def test_invalid_meter_reading(self, draft, value):
        with pytest.raises(ValidationError):
            snapshot_ops.set_meter_reading(draft, MeterChannel.GAS, value)

    def test_set_key_replaces_in_place(self, draft):
        updated = snapshot_ops.set_key(draft, "porte_entree", 2, notes="retrouvée")
        assert [k.key_type for k in updated.keys] == ["porte_entree", "boite_lettres", "badge"]
        assert updated.key_quantities()["porte_entree"] == 2

    def test_set_new_key_appends(self, draft):
        updated = snapshot_ops.set_key(draft, "garage", 1)
        assert updated.keys[-1].key_type == "garage"

    def test_general_observations(self, draft):
        assert snapshot_ops.set_general_observations(draft, "RAS").general_observations == "RAS"

    def test_link_is_immutable(self, draft):
        assert snapshot_ops.link_entry_inventory(draft, "edl-entry-1") is draft
        with pytest.raises(FrozenRecordError):
            snapshot_ops.link_entry_inventory(draft, "edl-entry-2")

    def test_link_unlinked_exit(self, draft):
        unlinked = draft.model_copy(update={"entry_inventory_id": None})
        assert snapshot_ops.link_entry_inventory(unlinked, "edl-entry-1").entry_inventory_id == "edl-entry-1"

    def test_entry_cannot_link(self, entry_snapshot):
        with pytest.raises(ValidationError):
            snapshot_ops.link_entry_inventory(entry_snapshot, "edl-entry-0")


class TestAttachDeductions:
    """Validated ledgers stored on the signed exit inventory."""

    def test_attach(self, signed):
        ledger = DeductionLedger(exit_inventory_id=signed.id, status=LedgerStatus.VALIDATED)
        stored = snapshot_ops.attach_deductions(signed, ledger)
        assert stored.deposit_deductions == ledger
        assert stored.type == InventoryType.EXIT

    def test_draft_ledger_rejected(self, signed):
        with pytest.raises(ValidationError):
            snapshot_ops.attach_deductions(signed, DeductionLedger(exit_inventory_id=signed.id))

    def test_unsigned_inventory_rejected(self, completed):
        ledger = DeductionLedger(exit_inventory_id=completed.id, status=LedgerStatus.VALIDATED)
        with pytest.raises(InvalidTransitionError):
            snapshot_ops.attach_deductions(completed, ledger)

    def test_other_inventory_rejected(self, signed):
        ledger = DeductionLedger(exit_inventory_id="edl-exit-9", status=LedgerStatus.VALIDATED)
        with pytest.raises(ValidationError):
            snapshot_ops.attach_deductions(signed, ledger)
