"""Entry/exit inventory comparator.

Pairs the rooms, elements, keys and meters of an entry and an exit snapshot
of the same lease, prices flagged degradations after vétusté and derives the
amount of deposit to return.

Matching rules:

* Rooms pair on (room_type, room_name), elements on (element_type,
  element_name), exact and case-sensitive.
* Rooms only present at exit are listed as informational and never priced.
  Rooms only present at entry are ignored: there is nothing left to compare.
* Within a matched room, the inspector's ``is_degradation`` flag is what
  charges the tenant. A worse rating without the flag is shown but never
  priced, since normal wear is already covered by the vétusté grid.
"""

from __future__ import annotations

from typing import Optional

from immo_edl.core.exceptions import MismatchedLeaseError
from immo_edl.core.money import ZERO, round2
from immo_edl.domain.calculator.deposit import amount_to_return, validate_deposit_amount
from immo_edl.domain.calculator.vetuste import DEFAULT_WEAR_TABLE, WearTable, compute_vetuste
from immo_edl.domain.models.comparison import (
    ComparisonResult,
    ComparisonWarning,
    Difference,
    ElementComparison,
    ElementStatus,
    KeyDifference,
    MeterConsumption,
    RoomComparison,
)
from immo_edl.domain.models.inventory import (
    Element,
    InventorySnapshot,
    InventoryType,
    LeaseReference,
    MatchKey,
    Room,
)


def check_pair(entry: InventorySnapshot, exit_: InventorySnapshot) -> None:
    """Raise MismatchedLeaseError unless the two snapshots form an entry/exit pair."""
    if entry.type != InventoryType.ENTRY:
        raise MismatchedLeaseError(f"Inventory '{entry.id}' is not an entry inventory")
    if exit_.type != InventoryType.EXIT:
        raise MismatchedLeaseError(f"Inventory '{exit_.id}' is not an exit inventory")

    if exit_.entry_inventory_id is not None and exit_.entry_inventory_id != entry.id:
        raise MismatchedLeaseError(
            f"Exit inventory '{exit_.id}' is linked to entry '{exit_.entry_inventory_id}', not '{entry.id}'"
        )
    if exit_.entry_inventory_id is None and entry.lease_id != exit_.lease_id:
        raise MismatchedLeaseError(
            f"Inventories belong to different leases ('{entry.lease_id}' / '{exit_.lease_id}')"
        )


def _index(items, key) -> dict[MatchKey, object]:
    # First occurrence wins on duplicate identities
    index: dict[MatchKey, object] = {}
    for item in items:
        index.setdefault(key(item), item)
    return index


def _room_label(room: Room) -> str:
    return room.room_name or room.room_type


def _element_status(delta: Optional[int]) -> ElementStatus:
    if delta is None:
        return ElementStatus.NEW
    if delta > 0:
        return ElementStatus.DEGRADED
    if delta < 0:
        return ElementStatus.IMPROVED
    return ElementStatus.UNCHANGED


def _price(
    room: Room,
    exit_element: Element,
    entry_element: Optional[Element],
    exit_date,
    table: WearTable,
) -> Difference:
    installation = exit_element.installation_date
    if installation is None and entry_element is not None:
        installation = entry_element.installation_date

    wear = compute_vetuste(
        exit_element.category,
        installation,
        exit_date,
        exit_element.estimated_repair_cost,
        table=table,
        material=exit_element.material,
        is_degradation=exit_element.is_degradation,
    )
    entry_rating = entry_element.rating if entry_element is not None else None
    return Difference(
        room=_room_label(room),
        element=exit_element.element_name or exit_element.element_type,
        element_type=exit_element.element_type,
        category=exit_element.category,
        entry_rating=entry_rating,
        exit_rating=exit_element.rating,
        rating_delta=entry_rating - exit_element.rating if entry_rating is not None else None,
        is_degradation=exit_element.is_degradation,
        repair_cost=round2(exit_element.estimated_repair_cost),
        age_months=wear.age_months,
        vetuste_rate=wear.vetuste_rate,
        tenant_share=wear.tenant_share,
        landlord_share=wear.landlord_share,
        entry_notes=entry_element.condition_notes if entry_element is not None else "",
        exit_notes=exit_element.condition_notes,
    )


def _compare_room(
    exit_room: Room,
    entry_room: Optional[Room],
    exit_date,
    table: WearTable,
    differences: list[Difference],
    warnings: list[ComparisonWarning],
) -> RoomComparison:
    entry_elements = _index(entry_room.elements, lambda e: e.key) if entry_room else {}
    comparisons: list[ElementComparison] = []

    for exit_element in exit_room.elements:
        entry_element = entry_elements.get(exit_element.key)
        delta = entry_element.rating - exit_element.rating if entry_element is not None else None

        has_cost = exit_element.estimated_repair_cost is not None
        charged = entry_room is not None and exit_element.is_degradation and has_cost
        if charged:
            differences.append(_price(exit_room, exit_element, entry_element, exit_date, table))
        elif exit_element.is_degradation:
            if entry_room is None:
                code, message = "unmatched_room_degradation", "Room absent from the entry inventory; degradation not priced"
            else:
                code, message = "degradation_without_cost", "Degradation flagged without an estimated repair cost"
            warnings.append(ComparisonWarning(
                code=code,
                message=message,
                room=_room_label(exit_room),
                element=exit_element.element_name or exit_element.element_type,
            ))

        comparisons.append(ElementComparison(
            element_type=exit_element.element_type,
            element_name=exit_element.element_name,
            status=_element_status(delta),
            entry_rating=entry_element.rating if entry_element is not None else None,
            exit_rating=exit_element.rating,
            rating_delta=delta,
            is_degradation=exit_element.is_degradation,
            generates_deduction=charged,
        ))

    if entry_room is not None:
        exit_keys = {element.key for element in exit_room.elements}
        for key, entry_element in entry_elements.items():
            if key not in exit_keys:
                comparisons.append(ElementComparison(
                    element_type=entry_element.element_type,
                    element_name=entry_element.element_name,
                    status=ElementStatus.MISSING,
                    entry_rating=entry_element.rating,
                ))

    return RoomComparison(
        room_type=exit_room.room_type,
        room_name=exit_room.room_name,
        matched=entry_room is not None,
        elements=tuple(comparisons),
    )


def _compare_keys(entry: InventorySnapshot, exit_: InventorySnapshot) -> tuple[KeyDifference, ...]:
    entry_keys = entry.key_quantities()
    exit_keys = exit_.key_quantities()
    key_types = list(entry_keys) + [k for k in exit_keys if k not in entry_keys]
    return tuple(
        KeyDifference(
            key_type=key_type,
            entry_quantity=entry_keys.get(key_type, 0),
            exit_quantity=exit_keys.get(key_type, 0),
        )
        for key_type in key_types
    )


def _compare_meters(
    entry: InventorySnapshot,
    exit_: InventorySnapshot,
    warnings: list[ComparisonWarning],
) -> tuple[MeterConsumption, ...]:
    meters = []
    # Sorted by channel for a stable output order
    for channel in sorted(entry.meter_readings.keys() & exit_.meter_readings.keys(), key=lambda c: c.value):
        reading = MeterConsumption(
            channel=channel,
            entry_value=entry.meter_readings[channel],
            exit_value=exit_.meter_readings[channel],
        )
        if reading.consumption < 0:
            warnings.append(ComparisonWarning(
                code="negative_meter_consumption",
                message=f"Meter '{channel.value}' index decreased (replaced or reset meter?)",
            ))
        meters.append(reading)
    return tuple(meters)


def _deposit_warnings(lease: Optional[LeaseReference]) -> list[ComparisonWarning]:
    if lease is None or lease.deposit_amount is None:
        return [ComparisonWarning(
            code="missing_deposit_amount",
            message="Deposit amount is not recorded on the lease; amount to return is unknown",
        )]
    if lease.lease_type is not None and lease.rent_amount is not None:
        check = validate_deposit_amount(lease.lease_type, lease.rent_amount, lease.deposit_amount)
        if not check.valid:
            return [ComparisonWarning(code="deposit_above_legal_cap", message=check.message)]
    return []


def compare(
    entry: InventorySnapshot,
    exit_: InventorySnapshot,
    lease: Optional[LeaseReference] = None,
    *,
    table: WearTable = DEFAULT_WEAR_TABLE,
) -> ComparisonResult:
    """Compare an entry and an exit inventory of the same lease.

    Args:
        entry: Entry inventory
        exit_: Exit inventory
        lease: Lease of the exit inventory; only the deposit fields are read
        table: Wear table used to price degradations

    Returns:
        ComparisonResult. When the lease has no deposit amount, the deposit
        and the amount to return are None and a ``missing_deposit_amount``
        warning is attached.

    Raises:
        MismatchedLeaseError: wrong types or snapshots of different leases
    """
    check_pair(entry, exit_)
    if lease is not None and lease.id != exit_.lease_id:
        raise MismatchedLeaseError(f"Lease '{lease.id}' is not the lease of inventory '{exit_.id}'")

    differences: list[Difference] = []
    warnings: list[ComparisonWarning] = []
    rooms: list[RoomComparison] = []
    unmatched: list[MatchKey] = []

    entry_rooms = _index(entry.rooms, lambda r: r.key)
    for exit_room in exit_.rooms:
        entry_room = entry_rooms.get(exit_room.key)
        if entry_room is None:
            unmatched.append(exit_room.key)
        rooms.append(_compare_room(exit_room, entry_room, exit_.inventory_date, table, differences, warnings))

    keys = _compare_keys(entry, exit_)
    meters = _compare_meters(entry, exit_, warnings)
    warnings.extend(_deposit_warnings(lease))

    total = round2(sum((d.tenant_share for d in differences), ZERO))
    deposit = lease.deposit_amount if lease is not None else None

    return ComparisonResult(
        entry_inventory_id=entry.id,
        exit_inventory_id=exit_.id,
        lease_id=exit_.lease_id,
        wear_table_version=table.version,
        differences=tuple(differences),
        rooms=tuple(rooms),
        unmatched_exit_rooms=tuple(unmatched),
        keys=keys,
        meters=meters,
        total_deductions=total,
        deposit_amount=round2(deposit) if deposit is not None else None,
        amount_to_return=amount_to_return(deposit, total) if deposit is not None else None,
        warnings=tuple(warnings),
    )
