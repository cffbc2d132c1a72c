"""
Shared test fixtures for the slot placement engine.
"""
import sys
from pathlib import Path

import pytest

# Add src/ to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from conveyor import (
    ConveyorModel,
    ConveyorParams,
    EngineType,
    StopButtonCount,
    StopButtonSide,
)
from placement_store import PlacementStore


@pytest.fixture
def default_params():
    """1000 x 500 mm DPS50 with no accessories."""
    return ConveyorParams()


@pytest.fixture
def full_params():
    """A 2.5 m DPS60 with every accessory enabled."""
    return ConveyorParams(
        L=2500.0,
        N=600.0,
        model=ConveyorModel.DPS60,
        engine_type=EngineType.NORMAL,
        side_guide_enabled=True,
        side_guide_height=100.0,
        stop_button_side=StopButtonSide.BOTH,
        stop_button_count=StopButtonCount(motor=3, opposite=3),
        supporting_frame=True,
        frame_wheels=True,
    )


@pytest.fixture
def sequential_ids():
    """Deterministic component id factory: comp_1, comp_2, ..."""
    counter = {"n": 0}

    def factory():
        counter["n"] += 1
        return f"comp_{counter['n']}"

    return factory


@pytest.fixture
def full_store(full_params, sequential_ids):
    return PlacementStore(full_params, id_factory=sequential_ids)
