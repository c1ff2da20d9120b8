"""Inventory snapshot state machine and copy-on-write edits.

Statuses: draft -> completed -> signed. Every function takes the full
snapshot and returns a new one; the input is never modified. Once signed,
the inspected content (rooms, elements, meters, keys, observations,
signatures) is frozen.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable, Optional, Sequence

from immo_edl.core.exceptions import (
    FrozenRecordError,
    InvalidTransitionError,
    RecordNotFoundError,
    ValidationError,
)
from immo_edl.core.inventory_constants import FALLBACK_ROOM_ELEMENTS, ROOM_TYPES
from immo_edl.domain.models.inventory import (
    Element,
    ElementCategory,
    InventorySnapshot,
    InventoryStatus,
    InventoryType,
    KeyRecord,
    MeterChannel,
    Room,
    SignatureParty,
)
from immo_edl.domain.models.ledger import DeductionLedger


def _now() -> datetime:
    return datetime.now().astimezone()


def ensure_mutable(snapshot: InventorySnapshot) -> None:
    """Raise FrozenRecordError if the snapshot is signed."""
    if snapshot.is_signed:
        raise FrozenRecordError(f"Inventory '{snapshot.id}' is signed and can no longer be modified")


def _update(snapshot: InventorySnapshot, **changes: Any) -> InventorySnapshot:
    ensure_mutable(snapshot)
    # model_validate re-runs field validation, model_copy would not
    return InventorySnapshot.model_validate({**snapshot.model_dump(), **changes})


def _room_at(snapshot: InventorySnapshot, room_index: int) -> Room:
    if not 0 <= room_index < len(snapshot.rooms):
        raise RecordNotFoundError("room", room_index)
    return snapshot.rooms[room_index]


def _replace_room(snapshot: InventorySnapshot, room_index: int, room: Room) -> InventorySnapshot:
    rooms = list(snapshot.rooms)
    rooms[room_index] = room
    return _update(snapshot, rooms=tuple(rooms))


# =====================================================
# ROOMS
# =====================================================

def default_room(room_type: str, room_name: str = "", rating: int = 3) -> Room:
    """Room pre-filled with one element per default category of its type."""
    categories = ROOM_TYPES.get(room_type, {}).get("default_elements", FALLBACK_ROOM_ELEMENTS)
    elements = tuple(
        Element(element_type=category, element_name="", category=ElementCategory(category), rating=rating)
        for category in categories
    )
    return Room(room_type=room_type, room_name=room_name, elements=elements)


def add_room(snapshot: InventorySnapshot, room: Room) -> InventorySnapshot:
    ensure_mutable(snapshot)
    return _update(snapshot, rooms=snapshot.rooms + (room,))


def update_room(snapshot: InventorySnapshot, room_index: int, **changes: Any) -> InventorySnapshot:
    ensure_mutable(snapshot)
    room = _room_at(snapshot, room_index)
    updated = Room.model_validate({**room.model_dump(), **changes})
    return _replace_room(snapshot, room_index, updated)


def remove_room(snapshot: InventorySnapshot, room_index: int) -> InventorySnapshot:
    ensure_mutable(snapshot)
    _room_at(snapshot, room_index)
    rooms = snapshot.rooms[:room_index] + snapshot.rooms[room_index + 1:]
    return _update(snapshot, rooms=rooms)


def reorder_rooms(snapshot: InventorySnapshot, order: Sequence[int]) -> InventorySnapshot:
    """Reorder rooms; ``order`` lists the current indexes in their new order."""
    ensure_mutable(snapshot)
    if sorted(order) != list(range(len(snapshot.rooms))):
        raise ValidationError("order", list(order), "must be a permutation of the room indexes")
    return _update(snapshot, rooms=tuple(snapshot.rooms[i] for i in order))


# =====================================================
# ELEMENTS
# =====================================================

def add_element(snapshot: InventorySnapshot, room_index: int, element: Element) -> InventorySnapshot:
    return add_elements(snapshot, room_index, [element])


def add_elements(snapshot: InventorySnapshot, room_index: int, elements: Iterable[Element]) -> InventorySnapshot:
    ensure_mutable(snapshot)
    room = _room_at(snapshot, room_index)
    updated = room.model_copy(update={"elements": room.elements + tuple(elements)})
    return _replace_room(snapshot, room_index, updated)


def update_element(
    snapshot: InventorySnapshot,
    room_index: int,
    element_index: int,
    **changes: Any,
) -> InventorySnapshot:
    ensure_mutable(snapshot)
    room = _room_at(snapshot, room_index)
    if not 0 <= element_index < len(room.elements):
        raise RecordNotFoundError("element", element_index)

    element = Element.model_validate({**room.elements[element_index].model_dump(), **changes})
    elements = list(room.elements)
    elements[element_index] = element
    return _replace_room(snapshot, room_index, room.model_copy(update={"elements": tuple(elements)}))


def remove_element(snapshot: InventorySnapshot, room_index: int, element_index: int) -> InventorySnapshot:
    ensure_mutable(snapshot)
    room = _room_at(snapshot, room_index)
    if not 0 <= element_index < len(room.elements):
        raise RecordNotFoundError("element", element_index)
    elements = room.elements[:element_index] + room.elements[element_index + 1:]
    return _replace_room(snapshot, room_index, room.model_copy(update={"elements": elements}))


# =====================================================
# METERS, KEYS, OBSERVATIONS
# =====================================================

def set_meter_reading(snapshot: InventorySnapshot, channel: MeterChannel, value: int) -> InventorySnapshot:
    ensure_mutable(snapshot)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValidationError("meter_readings", value, "meter index must be a non-negative integer")
    readings = dict(snapshot.meter_readings)
    readings[MeterChannel(channel)] = value
    return _update(snapshot, meter_readings=readings)


def set_key(snapshot: InventorySnapshot, key_type: str, quantity: int, notes: str = "") -> InventorySnapshot:
    """Set the count of a key type, replacing any existing line of that type."""
    ensure_mutable(snapshot)
    record = KeyRecord(key_type=key_type, quantity=quantity, notes=notes)
    keys = [k for k in snapshot.keys if k.key_type != key_type]
    position = next((i for i, k in enumerate(snapshot.keys) if k.key_type == key_type), len(keys))
    keys.insert(position, record)
    return _update(snapshot, keys=tuple(keys))


def set_general_observations(snapshot: InventorySnapshot, text: str) -> InventorySnapshot:
    return _update(snapshot, general_observations=text)


def link_entry_inventory(snapshot: InventorySnapshot, entry_inventory_id: str) -> InventorySnapshot:
    """Link an exit inventory to its entry inventory. The link cannot change afterwards."""
    if snapshot.type != InventoryType.EXIT:
        raise ValidationError("entry_inventory_id", entry_inventory_id, "only exit inventories reference an entry")
    if snapshot.entry_inventory_id is not None:
        if snapshot.entry_inventory_id == entry_inventory_id:
            return snapshot
        raise FrozenRecordError(
            f"Inventory '{snapshot.id}' is already linked to entry '{snapshot.entry_inventory_id}'"
        )
    return _update(snapshot, entry_inventory_id=entry_inventory_id)


# =====================================================
# TRANSITIONS
# =====================================================

def complete(snapshot: InventorySnapshot, now: Optional[datetime] = None) -> InventorySnapshot:
    """draft -> completed. Needs at least one room with at least one element."""
    ensure_mutable(snapshot)
    if snapshot.status != InventoryStatus.DRAFT:
        raise InvalidTransitionError(snapshot.status.value, InventoryStatus.COMPLETED.value)
    if not any(room.elements for room in snapshot.rooms):
        raise InvalidTransitionError(
            snapshot.status.value,
            InventoryStatus.COMPLETED.value,
            "at least one room with one documented element is required",
        )
    return _update(snapshot, status=InventoryStatus.COMPLETED, completed_at=now or _now())


def sign(
    snapshot: InventorySnapshot,
    party: SignatureParty,
    signature: str,
    now: Optional[datetime] = None,
) -> InventorySnapshot:
    """Record one party's signature.

    A completed inventory becomes signed as soon as both parties have signed.
    """
    ensure_mutable(snapshot)
    if not signature:
        raise ValidationError("signature", signature, "signature must not be empty")

    party = SignatureParty(party)
    stamp = now or _now()
    if party == SignatureParty.LANDLORD:
        changes: dict[str, Any] = {"landlord_signature": signature, "landlord_signed_at": stamp}
    else:
        changes = {"tenant_signature": signature, "tenant_signed_at": stamp}

    updated = _update(snapshot, **changes)
    if updated.status == InventoryStatus.COMPLETED and updated.has_both_signatures:
        updated = updated.model_copy(update={"status": InventoryStatus.SIGNED})
    return updated


def mark_signed(snapshot: InventorySnapshot) -> InventorySnapshot:
    """completed -> signed. Needs both signatures."""
    ensure_mutable(snapshot)
    if snapshot.status != InventoryStatus.COMPLETED:
        raise InvalidTransitionError(snapshot.status.value, InventoryStatus.SIGNED.value)
    if not snapshot.has_both_signatures:
        raise InvalidTransitionError(
            snapshot.status.value,
            InventoryStatus.SIGNED.value,
            "landlord and tenant signatures are both required",
        )
    return _update(snapshot, status=InventoryStatus.SIGNED)


def attach_deductions(snapshot: InventorySnapshot, ledger: DeductionLedger) -> InventorySnapshot:
    """Store a validated ledger on its signed exit inventory."""
    if snapshot.type != InventoryType.EXIT or ledger.exit_inventory_id != snapshot.id:
        raise ValidationError("deposit_deductions", ledger.exit_inventory_id, "ledger does not belong to this exit inventory")
    if not snapshot.is_signed:
        raise InvalidTransitionError(snapshot.status.value, "deductions", "the inventory must be signed first")
    if not ledger.is_validated:
        raise ValidationError("deposit_deductions", ledger.status.value, "only validated ledgers are stored")
    return snapshot.model_copy(update={"deposit_deductions": ledger})
