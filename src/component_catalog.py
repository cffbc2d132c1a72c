"""
Conveyor accessory catalog.

Part numbers, descriptions and unit costs for every kind of component a slot
accepts, plus the conveyor body itself. Used by bom.py and as the source of
GLB model paths for placed components.
"""
from dataclasses import dataclass
from typing import Optional

from conveyor import ConveyorModel, ConveyorParams, EngineType, PlacedComponent, SlotType


@dataclass(frozen=True)
class CatalogEntry:
    """A purchasable component."""

    name: str
    part_number: str
    description: str
    material: str
    unit_cost: float
    model_path: Optional[str] = None  # GLB path under /models


COMPONENT_CATALOG = {
    SlotType.ENGINE_MOUNT: CatalogEntry(
        name="Drive Motor",
        part_number="MTR-2.2-IE3",
        description="Drive Motor 2.2kW IE3",
        material="Steel Housing",
        unit_cost=850.0,
        model_path="/models/motor.glb",
    ),
    SlotType.STOP_BUTTON: CatalogEntry(
        name="Emergency Stop Button",
        part_number="STB-ES-22",
        description="Emergency Stop Push Button 22mm",
        material="Plastic/Metal",
        unit_cost=45.0,
        model_path="/models/stop_button.glb",
    ),
    SlotType.SENSOR: CatalogEntry(
        name="Proximity Sensor",
        part_number="SNS-PX-24V",
        description="Proximity Sensor 24VDC",
        material="Plastic/Metal",
        unit_cost=120.0,
        model_path="/models/sensor.glb",
    ),
    SlotType.SIDE_GUIDE_BRACKET: CatalogEntry(
        name="Side Guide Bracket",
        part_number="SGB-ALU-01",
        description="Side Guide Mounting Bracket",
        material="Aluminum Alloy",
        unit_cost=18.0,
        model_path="/models/side_guide_bracket.glb",
    ),
    SlotType.WHEEL: CatalogEntry(
        name="Swivel Castor",
        part_number="WHL-100-BRK",
        description="Swivel Castor Ø100mm with Brake",
        material="Polyurethane/Steel",
        unit_cost=35.0,
        model_path="/models/wheel.glb",
    ),
    SlotType.FRAME_LEG: CatalogEntry(
        name="Support Leg",
        part_number="LEG-ALU-ADJ",
        description="Adjustable Aluminum Support Leg",
        material="Aluminum Alloy",
        unit_cost=65.0,
        model_path="/models/frame_leg.glb",
    ),
}

# Engine mounts carry a different part depending on the drive variant
ENGINE_CATALOG = {
    EngineType.NORMAL: COMPONENT_CATALOG[SlotType.ENGINE_MOUNT],
    EngineType.CENTRAL: COMPONENT_CATALOG[SlotType.ENGINE_MOUNT],
    EngineType.REDACTOR: CatalogEntry(
        name="Drive Unit",
        part_number="DRV-RED-40",
        description="Gear Reducer Assembly",
        material="Steel",
        unit_cost=560.0,
        model_path="/models/drive_unit.glb",
    ),
}

# Belt cost per metre of total length, by model
BELT_COST_PER_M = {
    ConveyorModel.DPS50: 300.0,
    ConveyorModel.DPS60: 340.0,
    ConveyorModel.DPS96: 420.0,
}


def catalog_entry_for(slot_type: SlotType, params: Optional[ConveyorParams] = None) -> CatalogEntry:
    """Catalog entry for a component kind in the given configuration."""
    if slot_type == SlotType.ENGINE_MOUNT and params is not None and params.engine_type is not None:
        return ENGINE_CATALOG[params.engine_type]
    return COMPONENT_CATALOG[slot_type]


def entry_for_component(component: PlacedComponent, params: Optional[ConveyorParams] = None) -> CatalogEntry:
    return catalog_entry_for(component.type, params)


def conveyor_body_entry(params: ConveyorParams) -> CatalogEntry:
    """The conveyor itself, sized from the derived dimensions."""
    model = params.model.value
    D, R = params.D, params.R
    return CatalogEntry(
        name="Conveyor Belt",
        part_number=f"{model}-{D:.0f}x{R:.0f}",
        description=f"{model} Conveyor Assembly {D:.0f}mm x {R:.0f}mm",
        material="Industrial Rubber",
        unit_cost=round(BELT_COST_PER_M.get(params.model, 0.0) * D / 1000.0, 2),
        model_path="/models/conveyor.glb",
    )
