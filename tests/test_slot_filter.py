"""Tests for slot_filter module."""
import pytest

from conveyor import (
    ConveyorModel,
    ConveyorParams,
    Euler,
    EngineType,
    PlacedComponent,
    RailSide,
    Side,
    SlotType,
    StopButtonCount,
    StopButtonEnd,
    StopButtonSide,
)
from occupancy import reserve_slot
from slot_filter import count_placed_stop_buttons, get_valid_slots
from slot_generator import generate_slots


def _stop_button(slot_id, comp_id="c"):
    return PlacedComponent(
        id=comp_id,
        type=SlotType.STOP_BUTTON,
        slot_id=slot_id,
        position=(0.0, 0.0, 0.0),
        rotation=Euler(),
    )


@pytest.fixture
def stop_params():
    return ConveyorParams(
        model=ConveyorModel.DPS50,
        stop_button_side=StopButtonSide.BOTH,
        stop_button_count=StopButtonCount(motor=6, opposite=4),
    )


class TestBaseFilter:
    def test_type_and_occupancy(self, full_params):
        slots = generate_slots(full_params)
        slots = reserve_slot(slots, "sensor_motor_start", "comp_1")
        valid = get_valid_slots(SlotType.SENSOR, slots, full_params, [])
        assert len(valid) == 3
        assert "sensor_motor_start" not in {s.id for s in valid}
        assert all(s.type == SlotType.SENSOR for s in valid)

    @pytest.mark.parametrize("slot_type", [SlotType.WHEEL, SlotType.FRAME_LEG])
    def test_frame_slots_unfiltered(self, full_params, slot_type):
        slots = generate_slots(full_params)
        expected = [s for s in slots if s.type == slot_type]
        assert get_valid_slots(slot_type, slots, full_params, []) == expected


class TestEngineMountFilter:
    def _all_mounts(self):
        side = generate_slots(ConveyorParams(engine_type=EngineType.NORMAL))
        center = generate_slots(ConveyorParams(engine_type=EngineType.CENTRAL))
        return [s for s in side + center if s.type == SlotType.ENGINE_MOUNT]

    def test_central_only_center(self):
        params = ConveyorParams(engine_type=EngineType.CENTRAL)
        valid = get_valid_slots(SlotType.ENGINE_MOUNT, self._all_mounts(), params, [])
        assert [s.side for s in valid] == [Side.CENTER]

    def test_side_engine_excludes_center(self):
        params = ConveyorParams(engine_type=EngineType.REDACTOR)
        valid = get_valid_slots(SlotType.ENGINE_MOUNT, self._all_mounts(), params, [])
        assert [s.side for s in valid] == [Side.MOTOR, Side.OPPOSITE]

    def test_no_engine_type(self):
        valid = get_valid_slots(SlotType.ENGINE_MOUNT, self._all_mounts(), ConveyorParams(), [])
        assert valid == []


class TestStopButtonFilter:
    def test_no_side_preference(self, stop_params):
        slots = generate_slots(stop_params)
        params = stop_params.with_updates(stop_button_side=None)
        assert get_valid_slots(SlotType.STOP_BUTTON, slots, params, []) == []

    def test_side_filter(self, stop_params):
        slots = generate_slots(stop_params)
        params = stop_params.with_updates(stop_button_side=StopButtonSide.OPPOSITE)
        valid = get_valid_slots(SlotType.STOP_BUTTON, slots, params, [])
        assert len(valid) == 4
        assert all(s.meta.rail_side == RailSide.RIGHT for s in valid)

    def test_side_full_rejects_side(self, stop_params):
        slots = generate_slots(stop_params)
        placed = [_stop_button(f"stop_button_motor_left_{i}", f"c{i}") for i in range(6)]
        params = stop_params.with_updates(stop_button_side=StopButtonSide.MOTOR)
        assert get_valid_slots(SlotType.STOP_BUTTON, slots, params, placed) == []

    def test_both_with_one_side_full(self, stop_params):
        slots = generate_slots(stop_params)
        placed = [_stop_button(f"stop_button_motor_left_{i}", f"c{i}") for i in range(6)]
        valid = get_valid_slots(SlotType.STOP_BUTTON, slots, stop_params, placed)
        assert len(valid) == 4
        assert all("opposite" in s.id for s in valid)

    def test_both_sides_full(self):
        params = ConveyorParams(
            model=ConveyorModel.DPS50,
            stop_button_side=StopButtonSide.BOTH,
            stop_button_count=StopButtonCount(motor=8, opposite=8),
        )
        slots = generate_slots(params)
        placed = [_stop_button(f"stop_button_motor_left_{i}", f"m{i}") for i in range(6)]
        placed += [_stop_button(f"stop_button_opposite_right_{i}", f"o{i}") for i in range(6)]
        assert get_valid_slots(SlotType.STOP_BUTTON, slots, params, placed) == []

    def test_larger_model_allows_more(self, stop_params):
        params = stop_params.with_updates(
            model=ConveyorModel.DPS60, stop_button_side=StopButtonSide.MOTOR,
            stop_button_count=StopButtonCount(motor=10, opposite=0),
        )
        slots = generate_slots(params)
        placed = [_stop_button(f"stop_button_motor_left_{i}", f"c{i}") for i in range(6)]
        assert len(get_valid_slots(SlotType.STOP_BUTTON, slots, params, placed)) == 10

    @pytest.mark.parametrize("end, zone", [
        (StopButtonEnd.START, Side.START),
        (StopButtonEnd.END, Side.END),
    ])
    def test_end_preference(self, stop_params, end, zone):
        slots = generate_slots(stop_params)
        params = stop_params.with_updates(stop_button_end=end)
        valid = get_valid_slots(SlotType.STOP_BUTTON, slots, params, [])
        assert len(valid) == 2
        assert all(s.side == zone for s in valid)

    def test_end_both_keeps_all(self, stop_params):
        slots = generate_slots(stop_params)
        params = stop_params.with_updates(stop_button_end=StopButtonEnd.BOTH)
        assert len(get_valid_slots(SlotType.STOP_BUTTON, slots, params, [])) == 10

    def test_count_placed_ignores_other_types(self):
        placed = [
            _stop_button("stop_button_motor_left_0", "a"),
            _stop_button("stop_button_opposite_right_1", "b"),
            PlacedComponent(
                id="s", type=SlotType.SENSOR, slot_id="sensor_motor_start",
                position=(0.0, 0.0, 0.0), rotation=Euler(),
            ),
        ]
        assert count_placed_stop_buttons(placed) == {"motor": 1, "opposite": 1}


class TestSideGuideFilter:
    def test_disabled_returns_empty(self, full_params):
        slots = generate_slots(full_params)
        assert any(s.type == SlotType.SIDE_GUIDE_BRACKET for s in slots)
        params = full_params.with_updates(side_guide_enabled=False)
        assert get_valid_slots(SlotType.SIDE_GUIDE_BRACKET, slots, params, []) == []

    def test_invalid_height_returns_empty(self, full_params):
        slots = generate_slots(full_params)
        params = full_params.with_updates(side_guide_height=300)
        assert get_valid_slots(SlotType.SIDE_GUIDE_BRACKET, slots, params, []) == []

    def test_enabled(self, full_params):
        slots = generate_slots(full_params)
        valid = get_valid_slots(SlotType.SIDE_GUIDE_BRACKET, slots, full_params, [])
        # floor(2500 / 300) = 8 per edge
        assert len(valid) == 16
