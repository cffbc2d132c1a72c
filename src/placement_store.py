"""
Placement state for one conveyor configuration.

PlacementStore holds the current snapshot (params, slots, placed components
and drag/selection state) and replaces its lists wholesale on every change.
The geometry and rule functions it calls stay pure; this is the only place
where state lives.
"""
import logging
import uuid
from dataclasses import replace
from typing import Callable, List, Optional, Sequence

from conveyor import (
    ConveyorParams,
    PlacedComponent,
    Slot,
    SlotOccupiedError,
    SlotType,
    UnknownSlotError,
)
from occupancy import release_slot, remap_occupancy, reserve_slot
from orientation import calculate_orientation
from slot_filter import get_valid_slots
from slot_generator import SlotGeometryConfig, generate_slots
from spatial_matcher import DEFAULT_SNAP_RADIUS, nearest_free_slot

logger = logging.getLogger(__name__)


def _new_component_id() -> str:
    return f"comp_{uuid.uuid4().hex[:12]}"


class PlacementStore:
    """Mutable holder of the current placement snapshot.

    Attributes:
        params: Current configuration
        slots: Current slot generation with occupancy applied
        components: Placed components
        dragging_type: Component kind being dragged, if any
        selected_component_id: Selected component, if any
        hovered_slot_id: Slot under the pointer, if any
        orphaned: Components dropped by the last regeneration
    """

    def __init__(
        self,
        params: Optional[ConveyorParams] = None,
        geometry: Optional[SlotGeometryConfig] = None,
        id_factory: Callable[[], str] = _new_component_id,
    ):
        self.params = params if params is not None else ConveyorParams()
        self.geometry = geometry if geometry is not None else SlotGeometryConfig()
        self._id_factory = id_factory
        self.slots: List[Slot] = generate_slots(self.params, self.geometry)
        self.components: List[PlacedComponent] = []
        self.dragging_type: Optional[SlotType] = None
        self.selected_component_id: Optional[str] = None
        self.hovered_slot_id: Optional[str] = None
        self.orphaned: List[PlacedComponent] = []

    # ─── Params & regeneration ───────────────────────────────────────────

    def update_params(self, **changes) -> List[PlacedComponent]:
        """Apply param edits and regenerate slots.

        Returns:
            Components removed because their slot no longer exists.
        """
        self.params = self.params.with_updates(**changes)
        return self.regenerate_slots()

    def regenerate_slots(self) -> List[PlacedComponent]:
        """Rebuild slots from params, keeping placements whose slot survives.

        Surviving components are moved onto the regenerated slot geometry.
        Components whose slot is gone are removed and returned.
        """
        fresh = generate_slots(self.params, self.geometry)
        slots, orphaned = remap_occupancy(fresh, self.components)

        by_id = {s.id: s for s in slots}
        orphan_ids = {c.id for c in orphaned}
        kept = []
        for comp in self.components:
            if comp.id in orphan_ids:
                continue
            slot = by_id[comp.slot_id]
            kept.append(
                replace(comp, position=slot.position, rotation=calculate_orientation(slot))
            )

        if orphaned:
            logger.warning(
                "Configuration change removed %d placed component(s): %s",
                len(orphaned),
                ", ".join(f"{c.name or c.type.value} on {c.slot_id}" for c in orphaned),
            )
            if self.selected_component_id in orphan_ids:
                self.selected_component_id = None

        self.slots = slots
        self.components = kept
        self.orphaned = list(orphaned)
        if self.hovered_slot_id is not None and self.hovered_slot_id not in by_id:
            self.hovered_slot_id = None
        return self.orphaned

    # ─── Queries ─────────────────────────────────────────────────────────

    def get_slot(self, slot_id: str) -> Optional[Slot]:
        for slot in self.slots:
            if slot.id == slot_id:
                return slot
        return None

    def get_component(self, component_id: str) -> Optional[PlacedComponent]:
        for comp in self.components:
            if comp.id == component_id:
                return comp
        return None

    def valid_slots(self, slot_type: Optional[SlotType] = None) -> List[Slot]:
        """Legal slots for slot_type, or for the dragged type when omitted."""
        if slot_type is None:
            slot_type = self.dragging_type
        if slot_type is None:
            return []
        return get_valid_slots(slot_type, self.slots, self.params, self.components)

    def snap(
        self,
        point: Sequence[float],
        slot_type: Optional[SlotType] = None,
        snap_radius: float = DEFAULT_SNAP_RADIUS,
    ) -> Optional[Slot]:
        """Nearest legal slot to a drag position; updates the hovered slot."""
        slot = nearest_free_slot(point, self.valid_slots(slot_type), snap_radius)
        self.hovered_slot_id = slot.id if slot is not None else None
        return slot

    # ─── Placement ───────────────────────────────────────────────────────

    def place_component(
        self,
        slot_type: SlotType,
        slot_id: str,
        name: str = "",
        model_url: Optional[str] = None,
        strict: bool = False,
        component_id: Optional[str] = None,
    ) -> Optional[PlacedComponent]:
        """Place a component on a free slot.

        Args:
            slot_type: Kind of component.
            slot_id: Target slot.
            name: Display name.
            model_url: GLB model URL.
            strict: Raise instead of returning None on a rejected placement.
            component_id: Reuse an existing id (restoring saved work).

        Returns:
            The new component, or None if the slot is unknown, occupied or of
            another type.

        Raises:
            UnknownSlotError, SlotOccupiedError: only when strict is set.
        """
        slot = self.get_slot(slot_id)
        if slot is None or slot.type != slot_type:
            if strict:
                raise UnknownSlotError(f"No {slot_type.value} slot with id {slot_id!r}")
            logger.warning("Rejected %s placement: unknown slot %s", slot_type.value, slot_id)
            return None
        if not slot.is_free:
            if strict:
                raise SlotOccupiedError(f"Slot {slot_id!r} is held by {slot.occupied_by}")
            logger.warning("Rejected %s placement: slot %s is occupied", slot_type.value, slot_id)
            return None

        component = PlacedComponent(
            id=component_id or self._id_factory(),
            type=slot_type,
            slot_id=slot_id,
            position=slot.position,
            rotation=calculate_orientation(slot),
            name=name,
            model_url=model_url,
        )
        self.slots = reserve_slot(self.slots, slot_id, component.id)
        self.components = self.components + [component]
        self.dragging_type = None
        logger.info("Placed %s %s on %s", slot_type.value, component.id, slot_id)
        return component

    def remove_component(self, component_id: str) -> Optional[PlacedComponent]:
        """Remove a component and free its slot."""
        component = self.get_component(component_id)
        if component is None:
            return None

        self.slots = release_slot(self.slots, component.slot_id)
        self.components = [c for c in self.components if c.id != component_id]
        if self.selected_component_id == component_id:
            self.selected_component_id = None
        logger.info("Removed %s from %s", component_id, component.slot_id)
        return component

    # ─── UI state ────────────────────────────────────────────────────────

    def set_dragging_type(self, slot_type: Optional[SlotType]) -> None:
        self.dragging_type = slot_type

    def set_selected_component(self, component_id: Optional[str]) -> None:
        self.selected_component_id = component_id

    def set_hovered_slot(self, slot_id: Optional[str]) -> None:
        self.hovered_slot_id = slot_id
