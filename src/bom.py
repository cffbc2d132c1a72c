"""
Bill of materials for a configured conveyor.
"""
import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence

from component_catalog import CatalogEntry, conveyor_body_entry, entry_for_component
from conveyor import ConveyorParams, PlacedComponent

logger = logging.getLogger(__name__)


@dataclass
class BOMItem:
    """One line of the bill of materials."""
    part_number: str
    description: str
    quantity: int
    material: str
    unit_cost: float

    @property
    def total_cost(self) -> float:
        return round(self.quantity * self.unit_cost, 2)

    def to_dict(self) -> Dict:
        return {
            "part_number": self.part_number,
            "description": self.description,
            "quantity": int(self.quantity),
            "material": self.material,
            "unit_cost": float(self.unit_cost),
            "total_cost": float(self.total_cost),
        }


def _item_from_entry(entry: CatalogEntry, quantity: int) -> BOMItem:
    return BOMItem(
        part_number=entry.part_number,
        description=entry.description,
        quantity=quantity,
        material=entry.material,
        unit_cost=entry.unit_cost,
    )


def build_bom(
    params: ConveyorParams,
    components: Sequence[PlacedComponent],
    include_body: bool = True,
) -> List[BOMItem]:
    """Group placed components by part number.

    The conveyor body comes first, then accessories in order of first
    placement.
    """
    items: List[BOMItem] = []
    if include_body and params.D > 0:
        items.append(_item_from_entry(conveyor_body_entry(params), 1))

    by_part: Dict[str, BOMItem] = {}
    for comp in components:
        entry = entry_for_component(comp, params)
        item = by_part.get(entry.part_number)
        if item is None:
            item = _item_from_entry(entry, 0)
            by_part[entry.part_number] = item
            items.append(item)
        item.quantity += 1

    logger.debug("BOM has %d lines for %d components", len(items), len(components))
    return items


def bom_total(items: Sequence[BOMItem]) -> float:
    return round(sum(item.total_cost for item in items), 2)
