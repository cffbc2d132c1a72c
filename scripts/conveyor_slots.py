#!/usr/bin/env python3
"""
Inspect the slots, valid placements and bill of materials of a conveyor.

Usage:
    # Slot table for a 2.5 m DPS60 on a supporting frame
    python scripts/conveyor_slots.py --length 2500 --width 600 --model DPS60 --frame

    # Which stop-button slots can take a button right now
    python scripts/conveyor_slots.py --stop-side BOTH --stop-motor 4 --stop-opposite 3 \
        --valid STOP_BUTTON

    # Fill every valid sensor and leg slot, print the BOM and save placements
    python scripts/conveyor_slots.py --frame --fill SENSOR --fill FRAME_LEG --bom \
        --output output/placements.json
"""
import argparse
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from bom import bom_total, build_bom
from component_catalog import catalog_entry_for
from conveyor import (
    ConveyorModel,
    ConveyorParams,
    EngineType,
    SlotType,
    StopButtonCount,
    StopButtonEnd,
    StopButtonSide,
)
from dimensions import validate_side_guide_height, validate_stop_button_count
from orientation import calculate_orientation
from placement_io import export_placements, write_json
from placement_store import PlacementStore

logger = logging.getLogger("conveyor_slots")

SLOT_TYPES = [t.value for t in SlotType]


def params_from_args(args) -> ConveyorParams:
    return ConveyorParams(
        L=args.length,
        N=args.width,
        model=ConveyorModel(args.model),
        engine_type=EngineType(args.engine) if args.engine else None,
        side_guide_enabled=args.side_guide_height is not None,
        side_guide_height=args.side_guide_height,
        stop_button_side=StopButtonSide(args.stop_side) if args.stop_side else None,
        stop_button_end=StopButtonEnd(args.stop_end) if args.stop_end else None,
        stop_button_count=StopButtonCount(motor=args.stop_motor, opposite=args.stop_opposite),
        supporting_frame=args.frame,
        frame_wheels=args.frame,
    )


def report_validation(params: ConveyorParams) -> None:
    if params.side_guide_enabled:
        result = validate_side_guide_height(params.side_guide_height)
        if not result.valid:
            logger.warning("Side guide: %s", result.error)
    if params.stop_button_side is not None:
        checks = []
        if params.stop_button_side in (StopButtonSide.MOTOR, StopButtonSide.BOTH):
            checks.append(("motor", params.stop_button_count.motor))
        if params.stop_button_side in (StopButtonSide.OPPOSITE, StopButtonSide.BOTH):
            checks.append(("opposite", params.stop_button_count.opposite))
        for side, count in checks:
            result = validate_stop_button_count(count, params.model, side)
            if not result.valid:
                logger.warning("Stop buttons: %s", result.error)


def print_slots(slots) -> None:
    print(f"{'id':32s} {'type':20s} {'side':9s} {'position':>26s}  occupant")
    for slot in slots:
        pos = "(" + ", ".join(f"{v:7.3f}" for v in slot.position) + ")"
        side = slot.side.value if slot.side else "-"
        print(f"{slot.id:32s} {slot.type.value:20s} {side:9s} {pos:>26s}  {slot.occupied_by or ''}")


def slot_to_dict(slot) -> dict:
    rot = calculate_orientation(slot)
    return {
        "id": slot.id,
        "type": slot.type.value,
        "side": slot.side.value if slot.side else None,
        "position": list(slot.position),
        "normal": list(slot.normal),
        "up": list(slot.up),
        "rotation": [rot.x, rot.y, rot.z],
        "occupied_by": slot.occupied_by,
    }


def main():
    parser = argparse.ArgumentParser(
        description="Generate conveyor attachment slots and a bill of materials"
    )

    # Conveyor
    parser.add_argument("--length", type=float, default=1000.0, help="Axis length L in mm (default: 1000)")
    parser.add_argument("--width", type=float, default=500.0, help="Belt width N in mm (default: 500)")
    parser.add_argument(
        "--model", type=str, default="DPS50", choices=[m.value for m in ConveyorModel],
        help="Conveyor model (default: DPS50)",
    )
    parser.add_argument("--engine", type=str, default=None, choices=[e.value for e in EngineType])

    # Accessories
    parser.add_argument(
        "--side-guide-height", type=float, default=None,
        help="Enable side guides with this height in mm (15-250)",
    )
    parser.add_argument("--stop-side", type=str, default=None, choices=[s.value for s in StopButtonSide])
    parser.add_argument("--stop-end", type=str, default=None, choices=[e.value for e in StopButtonEnd])
    parser.add_argument("--stop-motor", type=int, default=0, help="Stop buttons on the motor rail")
    parser.add_argument("--stop-opposite", type=int, default=0, help="Stop buttons on the opposite rail")
    parser.add_argument("--frame", action="store_true", help="Supporting frame with wheels and legs")

    # Output
    parser.add_argument("--valid", type=str, default=None, choices=SLOT_TYPES, help="List valid slots of a type")
    parser.add_argument(
        "--fill", type=str, action="append", default=[], choices=SLOT_TYPES,
        help="Place a component on every valid slot of this type (repeatable)",
    )
    parser.add_argument("--bom", action="store_true", help="Print the bill of materials")
    parser.add_argument("--json", action="store_true", help="Dump slots as JSON")
    parser.add_argument("--output", type=str, default=None, help="Write placements JSON here")
    parser.add_argument("-v", "--verbose", action="store_true")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    params = params_from_args(args)
    report_validation(params)
    store = PlacementStore(params)
    logger.info("%s D=%.0f mm R=%.0f mm, %d slots", params.model.value, params.D, params.R, len(store.slots))

    for type_name in args.fill:
        slot_type = SlotType(type_name)
        entry = catalog_entry_for(slot_type, params)
        # Re-query after each placement: stop-button limits depend on what is placed
        while True:
            valid = store.valid_slots(slot_type)
            if not valid:
                break
            store.place_component(slot_type, valid[0].id, entry.name, entry.model_path)

    if args.json:
        print(json.dumps([slot_to_dict(s) for s in store.slots], indent=2))
    else:
        print_slots(store.slots)

    if args.valid:
        valid = store.valid_slots(SlotType(args.valid))
        print(f"\n{len(valid)} valid {args.valid} slot(s):")
        for slot in valid:
            print(f"  {slot.id}")

    if args.bom:
        items = build_bom(params, store.components)
        print(f"\n{'part':22s} {'qty':>4s} {'unit':>10s} {'total':>10s}  description")
        for item in items:
            print(
                f"{item.part_number:22s} {item.quantity:4d} {item.unit_cost:10.2f} "
                f"{item.total_cost:10.2f}  {item.description}"
            )
        print(f"{'TOTAL':22s} {'':4s} {'':10s} {bom_total(items):10.2f}")

    if args.output:
        write_json(args.output, export_placements(params, store.components))


if __name__ == "__main__":
    main()
