"""
Procedural slot generation for a parametric conveyor.

Derives every attachment point (engine mounts, stop buttons, sensors,
side-guide brackets, wheels, frame legs) from ConveyorParams. Generation is
pure: identical params always produce identical slots, so callers regenerate
the whole list on every relevant edit instead of diffing.

Scene convention: X runs along the conveyor length, Y is up, Z runs across
the width with the motor side at -Z. 1 scene unit = 100 mm.
"""
import logging
import math
from dataclasses import dataclass
from typing import List, Optional

from conveyor import (
    BracketMeta,
    ConveyorParams,
    CornerMeta,
    EngineMeta,
    EngineType,
    IntermediateLegMeta,
    LinearMeta,
    RailSide,
    SensorMeta,
    Side,
    Slot,
    SlotType,
    StopButtonSide,
    Vec3,
)
from dimensions import is_side_guide_height_valid

logger = logging.getLogger(__name__)

GLOBAL_SCALE_FACTOR = 0.01  # mm -> scene units


@dataclass
class SlotGeometryConfig:
    """Frame geometry used to place slots. All values in mm."""

    profile_height_mm: float = 300.0  # conveyor frame profile height
    rail_height_mm: float = 100.0
    engine_clearance_mm: float = 5.0  # engine mount above the profile
    engine_side_inset_mm: float = 10.0  # engine mount inset from the frame edge
    rail_inset_mm: float = 5.0  # stop buttons / sensors inset from the frame edge
    stop_button_lift_mm: float = 2.0
    sensor_lift_mm: float = 3.0
    sensor_end_inset_mm: float = 20.0  # sensors inset from the frame ends
    bracket_pitch_mm: float = 300.0
    wheel_height_mm: float = 5.0
    leg_pitch_mm: float = 1000.0
    intermediate_leg_threshold_mm: float = 2000.0


def to_scene(value_mm: float) -> float:
    return value_mm * GLOBAL_SCALE_FACTOR


def _vec(x: float, y: float, z: float) -> Vec3:
    return (float(x), float(y), float(z))


UP_Y = _vec(0.0, 1.0, 0.0)
DOWN_Y = _vec(0.0, -1.0, 0.0)
ALONG_X = _vec(1.0, 0.0, 0.0)
ALONG_Z = _vec(0.0, 0.0, 1.0)


def generate_slots(
    params: ConveyorParams,
    config: Optional[SlotGeometryConfig] = None,
) -> List[Slot]:
    """Generate all slots for the current conveyor configuration.

    Args:
        params: Conveyor configuration.
        config: Frame geometry; defaults to SlotGeometryConfig().

    Returns:
        Slots in a stable order: engine mounts, stop buttons, sensors,
        side-guide brackets, wheels, frame legs.
    """
    if config is None:
        config = SlotGeometryConfig()

    slots: List[Slot] = []

    if params.engine_type is not None:
        slots.extend(_engine_mount_slots(params, config))

    if params.stop_button_side is not None:
        slots.extend(_stop_button_slots(params, config))

    slots.extend(_sensor_slots(params, config))

    if params.side_guide_enabled and is_side_guide_height_valid(params.side_guide_height):
        slots.extend(_side_guide_bracket_slots(params, config))

    if params.supporting_frame:
        slots.extend(_wheel_slots(params, config))
        slots.extend(_frame_leg_slots(params, config))

    logger.debug(
        "Generated %d slots for %s L=%g N=%g", len(slots), params.model.value, params.L, params.N
    )
    return slots


# ─── Per-type generators ─────────────────────────────────────────────────────


def _engine_mount_slots(params: ConveyorParams, config: SlotGeometryConfig) -> List[Slot]:
    R = to_scene(params.R)
    y = to_scene(config.profile_height_mm + config.engine_clearance_mm)
    meta = EngineMeta(engine_type=params.engine_type)

    if params.engine_type == EngineType.CENTRAL:
        return [
            Slot(
                id="engine_center_1",
                type=SlotType.ENGINE_MOUNT,
                position=_vec(0.0, y, 0.0),
                normal=UP_Y,
                up=ALONG_Z,
                side=Side.CENTER,
                meta=meta,
            )
        ]

    motor_z = -R / 2 + to_scene(config.engine_side_inset_mm)
    return [
        Slot(
            id="engine_motor_1",
            type=SlotType.ENGINE_MOUNT,
            position=_vec(0.0, y, motor_z),
            normal=UP_Y,
            up=ALONG_Z,
            side=Side.MOTOR,
            meta=meta,
        ),
        Slot(
            id="engine_opposite_1",
            type=SlotType.ENGINE_MOUNT,
            position=_vec(0.0, y, -motor_z),
            normal=UP_Y,
            up=ALONG_Z,
            side=Side.OPPOSITE,
            meta=meta,
        ),
    ]


def _stop_button_slots(params: ConveyorParams, config: SlotGeometryConfig) -> List[Slot]:
    L = to_scene(params.L)
    R = to_scene(params.R)
    y = to_scene(config.rail_height_mm + config.stop_button_lift_mm)
    inset = to_scene(config.rail_inset_mm)
    side = params.stop_button_side
    counts = params.stop_button_count

    slots: List[Slot] = []
    if side in (StopButtonSide.MOTOR, StopButtonSide.BOTH) and counts.motor > 0:
        slots.extend(
            linear_slots(L, y, -R / 2 + inset, counts.motor, "motor", RailSide.LEFT)
        )
    if side in (StopButtonSide.OPPOSITE, StopButtonSide.BOTH) and counts.opposite > 0:
        slots.extend(
            linear_slots(L, y, R / 2 - inset, counts.opposite, "opposite", RailSide.RIGHT)
        )
    return slots


def linear_slots(
    length: float,
    y: float,
    z: float,
    count: int,
    rail: str,
    rail_side: RailSide,
) -> List[Slot]:
    """Evenly spaced stop-button slots along one rail, ends included.

    Slot i sits at -length/2 + i * length / (count - 1); a single slot is
    centred. The first slot is tagged START, the last END, the rest CENTER.
    """
    start_x = -length / 2
    spacing = length / (count - 1) if count > 1 else 0.0
    normal = _vec(0.0, 0.0, -1.0 if z > 0 else 1.0)

    slots = []
    for i in range(count):
        x = 0.0 if count == 1 else start_x + i * spacing
        if i == 0:
            zone = Side.START
        elif i == count - 1:
            zone = Side.END
        else:
            zone = Side.CENTER
        slots.append(
            Slot(
                id=f"stop_button_{rail}_{rail_side.value.lower()}_{i}",
                type=SlotType.STOP_BUTTON,
                position=_vec(x, y, z),
                normal=normal,
                up=UP_Y,
                side=zone,
                meta=LinearMeta(index=i, total=count, rail_side=rail_side),
            )
        )
    return slots


def _sensor_slots(params: ConveyorParams, config: SlotGeometryConfig) -> List[Slot]:
    D = to_scene(params.D)
    R = to_scene(params.R)
    y = to_scene(config.rail_height_mm + config.sensor_lift_mm)
    inset = to_scene(config.rail_inset_mm)
    end_inset = to_scene(config.sensor_end_inset_mm)

    rails = [
        ("motor", Side.MOTOR, -R / 2 + inset, _vec(0.0, 0.0, 1.0)),
        ("opposite", Side.OPPOSITE, R / 2 - inset, _vec(0.0, 0.0, -1.0)),
    ]
    zones = [
        ("start", Side.START, -D / 2 + end_inset),
        ("end", Side.END, D / 2 - end_inset),
    ]

    slots = []
    for rail, side, z, normal in rails:
        for zone_name, zone, x in zones:
            slots.append(
                Slot(
                    id=f"sensor_{rail}_{zone_name}",
                    type=SlotType.SENSOR,
                    position=_vec(x, y, z),
                    normal=normal,
                    up=UP_Y,
                    side=side,
                    meta=SensorMeta(zone=zone),
                )
            )
    return slots


def _side_guide_bracket_slots(params: ConveyorParams, config: SlotGeometryConfig) -> List[Slot]:
    L = to_scene(params.L)
    R = to_scene(params.R)
    y = to_scene(config.rail_height_mm)
    pitch = to_scene(config.bracket_pitch_mm)
    count = int(math.floor(params.L / config.bracket_pitch_mm)) if config.bracket_pitch_mm > 0 else 0

    edges = [
        ("left", Side.LEFT, -R / 2, _vec(0.0, 0.0, 1.0)),
        ("right", Side.RIGHT, R / 2, _vec(0.0, 0.0, -1.0)),
    ]

    slots = []
    for edge, side, z, normal in edges:
        for i in range(count):
            x = -L / 2 + (i + 0.5) * pitch
            slots.append(
                Slot(
                    id=f"sideguide_{edge}_{i}",
                    type=SlotType.SIDE_GUIDE_BRACKET,
                    position=_vec(x, y, z),
                    normal=normal,
                    up=UP_Y,
                    side=side,
                    meta=BracketMeta(index=i),
                )
            )
    return slots


def _corners(params: ConveyorParams):
    half_d = to_scene(params.D) / 2
    half_r = to_scene(params.R) / 2
    return [
        ("front_left", -half_d, -half_r),
        ("back_left", half_d, -half_r),
        ("front_right", -half_d, half_r),
        ("back_right", half_d, half_r),
    ]


def _wheel_slots(params: ConveyorParams, config: SlotGeometryConfig) -> List[Slot]:
    y = to_scene(config.wheel_height_mm)
    return [
        Slot(
            id=f"wheel_{corner}",
            type=SlotType.WHEEL,
            position=_vec(x, y, z),
            normal=UP_Y,
            up=ALONG_X,
            meta=CornerMeta(corner=corner),
        )
        for corner, x, z in _corners(params)
    ]


def _frame_leg_slots(params: ConveyorParams, config: SlotGeometryConfig) -> List[Slot]:
    y = -to_scene(config.profile_height_mm) / 2
    slots = [
        Slot(
            id=f"leg_{corner}",
            type=SlotType.FRAME_LEG,
            position=_vec(x, y, z),
            normal=DOWN_Y,
            up=ALONG_X,
            meta=CornerMeta(corner=corner),
        )
        for corner, x, z in _corners(params)
    ]

    D_mm = params.D
    if D_mm > config.intermediate_leg_threshold_mm and config.leg_pitch_mm > 0:
        count = int(math.floor(D_mm / config.leg_pitch_mm)) - 1
        D = to_scene(D_mm)
        half_r = to_scene(params.R) / 2
        for i in range(1, count + 1):
            x = -D / 2 + (i * D) / (count + 1)
            for edge, z in (("left", -half_r), ("right", half_r)):
                slots.append(
                    Slot(
                        id=f"leg_intermediate_{edge}_{i}",
                        type=SlotType.FRAME_LEG,
                        position=_vec(x, y, z),
                        normal=DOWN_Y,
                        up=ALONG_X,
                        side=Side.LEFT if edge == "left" else Side.RIGHT,
                        meta=IntermediateLegMeta(index=i),
                    )
                )
    return slots
