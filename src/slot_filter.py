"""
Business rules narrowing generated slots to those placeable right now.

Validity depends on params and on what is already placed, so nothing here is
cached: call get_valid_slots again whenever the dragged type, params or
placed components change.
"""
import logging
from typing import Dict, List, Optional, Sequence

from conveyor import (
    ConveyorParams,
    EngineType,
    LinearMeta,
    PlacedComponent,
    RailSide,
    Side,
    Slot,
    SlotType,
    StopButtonEnd,
    StopButtonSide,
)
from dimensions import get_stop_button_limits, is_side_guide_height_valid

logger = logging.getLogger(__name__)

RAIL_FOR_SIDE = {
    "motor": RailSide.LEFT,
    "opposite": RailSide.RIGHT,
}


def get_valid_slots(
    slot_type: SlotType,
    slots: Sequence[Slot],
    params: ConveyorParams,
    placed_components: Sequence[PlacedComponent],
) -> List[Slot]:
    """Return the free slots of slot_type that current rules allow.

    Args:
        slot_type: Component kind being placed.
        slots: Current slot generation.
        params: Current configuration.
        placed_components: Components already placed.

    Returns:
        Legal slots in their original order (possibly empty).
    """
    valid = [s for s in slots if s.type == slot_type and s.is_free]

    if slot_type == SlotType.ENGINE_MOUNT:
        valid = _filter_engine_mounts(valid, params.engine_type)
    elif slot_type == SlotType.STOP_BUTTON:
        valid = _filter_stop_buttons(valid, params, placed_components)
    elif slot_type == SlotType.SIDE_GUIDE_BRACKET:
        valid = _filter_side_guide_brackets(valid, params)
    # SENSOR, WHEEL, FRAME_LEG: occupancy is the only rule

    logger.debug("%d valid %s slots", len(valid), slot_type.value)
    return valid


def _filter_engine_mounts(slots: List[Slot], engine_type: Optional[EngineType]) -> List[Slot]:
    if engine_type is None:
        return []
    if engine_type == EngineType.CENTRAL:
        return [s for s in slots if s.side == Side.CENTER]
    return [s for s in slots if s.side != Side.CENTER]


def count_placed_stop_buttons(placed_components: Sequence[PlacedComponent]) -> Dict[str, int]:
    """Count placed stop buttons per rail from the side encoded in their slot id."""
    counts = {"motor": 0, "opposite": 0}
    for comp in placed_components:
        if comp.type != SlotType.STOP_BUTTON:
            continue
        for rail in counts:
            if f"_{rail}_" in comp.slot_id:
                counts[rail] += 1
    return counts


def _rail_of(slot: Slot) -> Optional[str]:
    if isinstance(slot.meta, LinearMeta):
        for rail, rail_side in RAIL_FOR_SIDE.items():
            if slot.meta.rail_side == rail_side:
                return rail
    return None


def _filter_stop_buttons(
    slots: List[Slot],
    params: ConveyorParams,
    placed_components: Sequence[PlacedComponent],
) -> List[Slot]:
    side = params.stop_button_side
    if side is None:
        return []

    limit = get_stop_button_limits(params.model).max
    existing = count_placed_stop_buttons(placed_components)
    full = {rail for rail, n in existing.items() if n >= limit}

    if side == StopButtonSide.MOTOR:
        allowed = {"motor"}
    elif side == StopButtonSide.OPPOSITE:
        allowed = {"opposite"}
    else:
        allowed = {"motor", "opposite"}
    allowed -= full
    if not allowed:
        logger.debug("Stop button limit %d reached on %s", limit, side.value)
        return []

    filtered = [s for s in slots if _rail_of(s) in allowed]

    end = params.stop_button_end
    if end is not None and end != StopButtonEnd.BOTH:
        wanted = Side(end.value)
        filtered = [s for s in filtered if s.side == wanted]
    return filtered


def _filter_side_guide_brackets(slots: List[Slot], params: ConveyorParams) -> List[Slot]:
    if not params.side_guide_enabled:
        return []
    if not is_side_guide_height_valid(params.side_guide_height):
        return []
    return slots
