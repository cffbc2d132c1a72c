"""
Slot occupancy transitions.

Every function returns a new list and leaves its input untouched, so readers
holding the previous snapshot keep a consistent view.
"""
import logging
from dataclasses import replace
from typing import List, Sequence, Tuple

from conveyor import PlacedComponent, Slot

logger = logging.getLogger(__name__)


def reserve_slot(slots: Sequence[Slot], slot_id: str, component_id: str) -> List[Slot]:
    """Mark slot_id as held by component_id."""
    return [replace(s, occupied_by=component_id) if s.id == slot_id else s for s in slots]


def release_slot(slots: Sequence[Slot], slot_id: str) -> List[Slot]:
    """Clear the occupant of slot_id."""
    return [replace(s, occupied_by=None) if s.id == slot_id else s for s in slots]


def remap_occupancy(
    slots: Sequence[Slot],
    components: Sequence[PlacedComponent],
) -> Tuple[List[Slot], List[PlacedComponent]]:
    """Re-apply placed components to a freshly generated slot list.

    Slot ids are semantic keys (type, side, index), so a component keeps its
    slot across regeneration as long as a slot with the same key still exists
    and is of the same type.

    Returns:
        (slots with occupancy applied, components whose slot disappeared)
    """
    by_id = {s.id: s for s in slots}
    holders = {}
    orphaned: List[PlacedComponent] = []
    for comp in components:
        slot = by_id.get(comp.slot_id)
        if slot is None or slot.type != comp.type or comp.slot_id in holders:
            orphaned.append(comp)
            continue
        holders[comp.slot_id] = comp.id

    remapped = [
        replace(s, occupied_by=holders[s.id]) if s.id in holders else replace(s, occupied_by=None)
        for s in slots
    ]
    if orphaned:
        logger.debug("%d placement(s) lost their slot", len(orphaned))
    return remapped, orphaned
