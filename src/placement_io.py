"""JSON records handed to the persistence backend.

Only the configuration and the final placements are exported; slots are
re-derived from params on load and each record is snapped back onto the slot
with the same id.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from conveyor import (
    ConveyorModel,
    ConveyorParams,
    EngineType,
    Euler,
    PlacedComponent,
    SlotType,
    StopButtonCount,
    StopButtonEnd,
    StopButtonSide,
    Vec3,
)

logger = logging.getLogger(__name__)

SCHEMA_PLACEMENTS_V1 = "conveyor.placements.1"


def _enum_value(value) -> Optional[str]:
    return value.value if value is not None else None


def _vec3(raw: Any, name: str) -> Vec3:
    if not isinstance(raw, (list, tuple)) or len(raw) != 3:
        raise ValueError(f"{name} must be a list of 3 numbers, got: {raw!r}")
    return (float(raw[0]), float(raw[1]), float(raw[2]))


def params_to_dict(params: ConveyorParams) -> Dict[str, Any]:
    return {
        "model": params.model.value,
        "L": float(params.L),
        "N": float(params.N),
        "D": float(params.D),
        "R": float(params.R),
        "engine_type": _enum_value(params.engine_type),
        "side_guide_enabled": bool(params.side_guide_enabled),
        "side_guide_height": params.side_guide_height,
        "stop_button_side": _enum_value(params.stop_button_side),
        "stop_button_end": _enum_value(params.stop_button_end),
        "stop_button_count": {
            "motor": int(params.stop_button_count.motor),
            "opposite": int(params.stop_button_count.opposite),
        },
        "supporting_frame": bool(params.supporting_frame),
        "frame_height": float(params.frame_height),
        "frame_wheels": bool(params.frame_wheels),
    }


def _optional_str(payload: Dict[str, Any], key: str) -> str:
    raw = payload.get(key)
    return "" if raw is None else str(raw)


def params_from_dict(payload: Dict[str, Any]) -> ConveyorParams:
    """Rebuild params; D and R in the payload are ignored and re-derived."""
    defaults = ConveyorParams()

    def optional_enum(enum_cls, key):
        raw = payload.get(key)
        return enum_cls(raw) if raw is not None else None

    try:
        counts = payload.get("stop_button_count") or {}
        height = payload.get("side_guide_height", defaults.side_guide_height)
        return ConveyorParams(
            L=float(payload.get("L", defaults.L)),
            N=float(payload.get("N", defaults.N)),
            model=ConveyorModel(payload.get("model", defaults.model.value)),
            engine_type=optional_enum(EngineType, "engine_type"),
            side_guide_enabled=bool(payload.get("side_guide_enabled", False)),
            side_guide_height=float(height) if height is not None else None,
            stop_button_side=optional_enum(StopButtonSide, "stop_button_side"),
            stop_button_end=optional_enum(StopButtonEnd, "stop_button_end"),
            stop_button_count=StopButtonCount(
                motor=int(counts.get("motor", 0)),
                opposite=int(counts.get("opposite", 0)),
            ),
            supporting_frame=bool(payload.get("supporting_frame", False)),
            frame_height=float(payload.get("frame_height", defaults.frame_height)),
            frame_wheels=bool(payload.get("frame_wheels", False)),
        )
    except (TypeError, ValueError, AttributeError) as exc:
        raise ValueError(f"Invalid conveyor params: {exc}") from exc


@dataclass
class PlacementRecord:
    component_id: str
    slot_id: str
    slot_type: SlotType
    position: Vec3
    rotation: Euler
    name: str = ""
    model_url: Optional[str] = None

    def validate(self) -> None:
        if not self.component_id.strip():
            raise ValueError("PlacementRecord.component_id is required")
        if not self.slot_id.strip():
            raise ValueError("PlacementRecord.slot_id is required")

    def to_dict(self) -> Dict[str, Any]:
        self.validate()
        return {
            "component_id": self.component_id,
            "slot_id": self.slot_id,
            "type": self.slot_type.value,
            "name": self.name,
            "model_url": self.model_url,
            "position": [float(v) for v in self.position],
            "rotation": {
                "x": float(self.rotation.x),
                "y": float(self.rotation.y),
                "z": float(self.rotation.z),
                "order": self.rotation.order,
            },
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "PlacementRecord":
        if not isinstance(payload, dict):
            raise ValueError(f"Placement record must be an object, got: {payload!r}")
        try:
            slot_type = SlotType(payload.get("type"))
        except ValueError as exc:
            raise ValueError(f"Unknown component type: {payload.get('type')!r}") from exc
        try:
            rot = payload.get("rotation") or {}
            rotation = Euler(
                x=float(rot.get("x", 0.0)),
                y=float(rot.get("y", 0.0)),
                z=float(rot.get("z", 0.0)),
                order=str(rot.get("order", "XYZ")),
            )
            position = _vec3(payload.get("position"), "position")
        except (TypeError, ValueError, AttributeError) as exc:
            raise ValueError(f"Invalid placement transform: {exc}") from exc
        rec = cls(
            component_id=_optional_str(payload, "component_id"),
            slot_id=_optional_str(payload, "slot_id"),
            slot_type=slot_type,
            position=position,
            rotation=rotation,
            name=_optional_str(payload, "name"),
            model_url=payload.get("model_url"),
        )
        rec.validate()
        return rec

    @classmethod
    def from_component(cls, component: PlacedComponent) -> "PlacementRecord":
        return cls(
            component_id=component.id,
            slot_id=component.slot_id,
            slot_type=component.type,
            position=component.position,
            rotation=component.rotation,
            name=component.name,
            model_url=component.model_url,
        )


def export_placements(params: ConveyorParams, components: List[PlacedComponent]) -> Dict[str, Any]:
    return {
        "schema_version": SCHEMA_PLACEMENTS_V1,
        "params": params_to_dict(params),
        "components": [PlacementRecord.from_component(c).to_dict() for c in components],
    }


def dumps(payload: Dict[str, Any]) -> str:
    return json.dumps(payload, indent=2, sort_keys=True)


def write_json(path: str | Path, payload: Dict[str, Any]) -> Path:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(dumps(payload) + "\n", encoding="utf-8")
    logger.info("Wrote placements: %s", out)
    return out


def read_json(path: str | Path) -> Dict[str, Any]:
    return json.loads(Path(path).read_text(encoding="utf-8"))


def load_placements(payload: Dict[str, Any]) -> tuple[ConveyorParams, List[PlacementRecord]]:
    """Parse an exported payload into params and placement records."""
    version = payload.get("schema_version")
    if version != SCHEMA_PLACEMENTS_V1:
        raise ValueError(f"Unexpected placements schema version: {version}")
    params = params_from_dict(payload.get("params") or {})
    records = [PlacementRecord.from_dict(item) for item in payload.get("components") or []]
    return params, records


def restore_placements(store, payload: Dict[str, Any]) -> List[PlacementRecord]:
    """Load a payload into a PlacementStore.

    The store takes the saved params, then every record is placed again on
    the slot with its saved id. Transforms are re-derived from the slot, not
    copied from the record.

    Returns:
        Records that could not be placed (slot missing, occupied or of
        another type).
    """
    params, records = load_placements(payload)
    store.params = params
    store.components = []
    store.regenerate_slots()

    skipped: List[PlacementRecord] = []
    for rec in records:
        placed = store.place_component(
            rec.slot_type, rec.slot_id, rec.name, rec.model_url, component_id=rec.component_id
        )
        if placed is None:
            skipped.append(rec)
    if skipped:
        logger.warning("%d saved placement(s) could not be restored", len(skipped))
    return skipped
