"""
Core data structures for parametric conveyor configuration and slot placement.
"""
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Tuple, Union

Vec3 = Tuple[float, float, float]


class ConveyorModel(Enum):
    """Conveyor product lines (SKUs)."""
    DPS50 = "DPS50"
    DPS60 = "DPS60"
    DPS96 = "DPS96"


class EngineType(Enum):
    """Drive variants. REDACTOR is the geared (reducer) drive."""
    NORMAL = "NORMAL"
    REDACTOR = "REDACTOR"
    CENTRAL = "CENTRAL"


class SlotType(Enum):
    """Kinds of attachment points a conveyor exposes."""
    ENGINE_MOUNT = "ENGINE_MOUNT"
    STOP_BUTTON = "STOP_BUTTON"
    SENSOR = "SENSOR"
    SIDE_GUIDE_BRACKET = "SIDE_GUIDE_BRACKET"
    WHEEL = "WHEEL"
    FRAME_LEG = "FRAME_LEG"


class Side(Enum):
    """Side/zone tag of a slot."""
    MOTOR = "MOTOR"
    OPPOSITE = "OPPOSITE"
    CENTER = "CENTER"
    START = "START"
    END = "END"
    LEFT = "LEFT"
    RIGHT = "RIGHT"


class StopButtonSide(Enum):
    MOTOR = "MOTOR"
    OPPOSITE = "OPPOSITE"
    BOTH = "BOTH"


class StopButtonEnd(Enum):
    START = "START"
    END = "END"
    BOTH = "BOTH"


class RailSide(Enum):
    LEFT = "LEFT"
    RIGHT = "RIGHT"


class PlacementError(Exception):
    """Base exception for rejected placements."""
    pass


class UnknownSlotError(PlacementError):
    """No slot with the requested id exists in the current generation."""
    pass


class SlotOccupiedError(PlacementError):
    """The requested slot already holds a component."""
    pass


# ─── Slot metadata ───────────────────────────────────────────────────────────
# One small record per slot type so filters know exactly which fields exist.


@dataclass(frozen=True)
class EngineMeta:
    engine_type: EngineType


@dataclass(frozen=True)
class LinearMeta:
    """Position of a stop button along its rail."""
    index: int
    total: int
    rail_side: RailSide


@dataclass(frozen=True)
class SensorMeta:
    zone: Side  # START or END


@dataclass(frozen=True)
class BracketMeta:
    index: int


@dataclass(frozen=True)
class CornerMeta:
    corner: str  # e.g. "front_left"


@dataclass(frozen=True)
class IntermediateLegMeta:
    index: int


SlotMeta = Union[
    EngineMeta, LinearMeta, SensorMeta, BracketMeta, CornerMeta, IntermediateLegMeta
]


@dataclass(frozen=True)
class StopButtonCount:
    """Requested number of stop buttons per rail."""
    motor: int = 0
    opposite: int = 0


@dataclass(frozen=True)
class ConveyorParams:
    """
    Single source of truth for a conveyor configuration.

    Attributes:
        model: Conveyor product line
        L: Axis-to-axis length in mm (user input)
        N: Belt width in mm (user input)
        engine_type: Selected drive, None while not chosen
        side_guide_enabled: Whether side guides are fitted
        side_guide_height: Side guide height in mm (15-250)
        stop_button_side: Rail(s) that carry stop buttons, None for none
        stop_button_end: Preferred end zone for stop buttons
        stop_button_count: Requested stop buttons per rail
        supporting_frame: Whether the conveyor stands on a frame
        frame_height: Frame height in mm
        frame_wheels: Whether the frame has wheels

    D (total length) and R (total width) are derived from L, N and model and
    cannot be set.
    """
    L: float = 1000.0
    N: float = 500.0
    model: ConveyorModel = ConveyorModel.DPS50
    engine_type: Optional[EngineType] = None
    side_guide_enabled: bool = False
    side_guide_height: Optional[float] = 100.0
    stop_button_side: Optional[StopButtonSide] = None
    stop_button_end: Optional[StopButtonEnd] = None
    stop_button_count: StopButtonCount = field(default_factory=StopButtonCount)
    supporting_frame: bool = False
    frame_height: float = 300.0
    frame_wheels: bool = False

    @property
    def D(self) -> float:
        from dimensions import calculate_dimensions
        return calculate_dimensions(self.L, self.N, self.model).D

    @property
    def R(self) -> float:
        from dimensions import calculate_dimensions
        return calculate_dimensions(self.L, self.N, self.model).R

    def with_updates(self, **changes) -> "ConveyorParams":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)


@dataclass(frozen=True)
class Slot:
    """
    A procedurally generated attachment point.

    Attributes:
        id: Stable identifier derived from type, side and index
        type: Kind of component the slot accepts
        position: Scene-space position (1 unit = 100 mm)
        normal: Unit vector the mounted part faces along
        up: Secondary reference axis, not necessarily orthogonal to normal
        side: Side/zone tag used by filters
        meta: Type-specific extras
        occupied_by: Id of the component holding the slot, if any
    """
    id: str
    type: SlotType
    position: Vec3
    normal: Vec3
    up: Vec3
    side: Optional[Side] = None
    meta: Optional[SlotMeta] = None
    occupied_by: Optional[str] = None

    @property
    def is_free(self) -> bool:
        return not self.occupied_by


@dataclass(frozen=True)
class Euler:
    """Rotation as Euler angles in radians, intrinsic axis order."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    order: str = "XYZ"

    def as_tuple(self) -> Vec3:
        return (self.x, self.y, self.z)


@dataclass(frozen=True)
class PlacedComponent:
    """A user-placed component bound to one slot."""
    id: str
    type: SlotType
    slot_id: str
    position: Vec3
    rotation: Euler
    name: str = ""
    model_url: Optional[str] = None
