"""Tests for bom and component_catalog modules."""
import pytest

from bom import bom_total, build_bom
from component_catalog import COMPONENT_CATALOG, catalog_entry_for, conveyor_body_entry
from conveyor import ConveyorParams, EngineType, SlotType
from placement_store import PlacementStore


class TestCatalog:
    def test_every_slot_type_has_an_entry(self):
        assert set(COMPONENT_CATALOG) == set(SlotType)

    def test_reducer_engine_uses_drive_unit(self):
        params = ConveyorParams(engine_type=EngineType.REDACTOR)
        assert catalog_entry_for(SlotType.ENGINE_MOUNT, params).part_number == "DRV-RED-40"
        params = params.with_updates(engine_type=EngineType.CENTRAL)
        assert catalog_entry_for(SlotType.ENGINE_MOUNT, params).part_number == "MTR-2.2-IE3"

    def test_body_entry_named_from_dimensions(self, default_params):
        entry = conveyor_body_entry(default_params)
        assert entry.part_number == "DPS50-1055x567"
        assert entry.unit_cost == pytest.approx(316.5)


class TestBuildBOM:
    def test_body_only(self, default_params):
        items = build_bom(default_params, [])
        assert [i.part_number for i in items] == ["DPS50-1055x567"]
        assert items[0].quantity == 1

    def test_groups_by_part_number(self, default_params):
        store = PlacementStore(default_params)
        store.place_component(SlotType.SENSOR, "sensor_motor_start")
        store.place_component(SlotType.SENSOR, "sensor_opposite_end")
        items = build_bom(default_params, store.components)
        assert [(i.part_number, i.quantity) for i in items] == [
            ("DPS50-1055x567", 1),
            ("SNS-PX-24V", 2),
        ]
        assert items[1].total_cost == pytest.approx(240.0)
        assert bom_total(items) == pytest.approx(556.5)

    def test_without_body(self, full_store):
        full_store.place_component(SlotType.WHEEL, "wheel_front_left")
        items = build_bom(full_store.params, full_store.components, include_body=False)
        assert [i.to_dict()["part_number"] for i in items] == ["WHL-100-BRK"]
