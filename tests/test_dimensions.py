"""Tests for dimensions module."""
import pytest

from conveyor import ConveyorModel, ConveyorParams
from dimensions import (
    calculate_dimensions,
    get_stop_button_limits,
    is_side_guide_height_valid,
    validate_side_guide_height,
    validate_stop_button_count,
)


class TestCalculateDimensions:
    @pytest.mark.parametrize("model, expected_d", [
        (ConveyorModel.DPS50, 1055.0),
        (ConveyorModel.DPS60, 1070.0),
        (ConveyorModel.DPS96, 1100.0),
    ])
    def test_reference_values(self, model, expected_d):
        dims = calculate_dimensions(1000, 500, model)
        assert dims.D == pytest.approx(expected_d)
        assert dims.R == pytest.approx(567.0)

    @pytest.mark.parametrize("model", list(ConveyorModel))
    def test_width_offset_same_for_every_model(self, model):
        for n in (200, 433.5, 1200):
            assert calculate_dimensions(800, n, model).R == pytest.approx(n + 67)

    def test_string_model_accepted(self):
        assert calculate_dimensions(1000, 500, "DPS96").D == pytest.approx(1100.0)

    def test_unknown_model_gives_zero_length(self):
        dims = calculate_dimensions(1000, 500, "DPS999")
        assert dims.D == 0.0
        assert dims.R == pytest.approx(567.0)

    def test_params_derive_dimensions(self):
        params = ConveyorParams(L=1500, N=400, model=ConveyorModel.DPS60)
        assert params.D == pytest.approx(1570.0)
        assert params.R == pytest.approx(467.0)
        edited = params.with_updates(model=ConveyorModel.DPS96)
        assert edited.D == pytest.approx(1600.0)

    def test_params_dimensions_cannot_be_set(self):
        params = ConveyorParams()
        with pytest.raises(AttributeError):
            params.D = 5.0


class TestSideGuideHeight:
    @pytest.mark.parametrize("height, valid", [
        (14, False),
        (15, True),
        (100, True),
        (250, True),
        (251, False),
    ])
    def test_bounds_inclusive(self, height, valid):
        assert validate_side_guide_height(height).valid is valid

    def test_error_message_only_when_invalid(self):
        assert validate_side_guide_height(100).error is None
        assert "at least 15" in validate_side_guide_height(5).error
        assert "250" in validate_side_guide_height(300).error

    @pytest.mark.parametrize("height", [float("nan"), float("inf"), float("-inf"), None, "tall"])
    def test_missing_or_non_finite_height_invalid(self, height):
        result = validate_side_guide_height(height)
        assert result.valid is False
        assert "must be a number" in result.error
        assert is_side_guide_height_valid(height) is False


class TestStopButtonLimits:
    def test_limits_per_model(self):
        limits = get_stop_button_limits(ConveyorModel.DPS50)
        assert (limits.min, limits.max) == (1, 6)
        limits = get_stop_button_limits("DPS60")
        assert (limits.min, limits.max) == (1, 12)
        limits = get_stop_button_limits(ConveyorModel.DPS96)
        assert (limits.min, limits.max) == (1, 12)

    def test_count_within_limits(self):
        assert validate_stop_button_count(6, ConveyorModel.DPS50, "motor").valid
        assert validate_stop_button_count(12, ConveyorModel.DPS96, "opposite").valid

    def test_count_above_max(self):
        result = validate_stop_button_count(7, ConveyorModel.DPS50, "motor")
        assert not result.valid
        assert "Max 6" in result.error
        assert "motor" in result.error

    def test_count_below_min(self):
        result = validate_stop_button_count(0, ConveyorModel.DPS60, "opposite")
        assert not result.valid
        assert "Min 1" in result.error

    @pytest.mark.parametrize("count", [float("nan"), float("inf"), None, "many"])
    def test_non_numeric_count_invalid(self, count):
        result = validate_stop_button_count(count, ConveyorModel.DPS50, "motor")
        assert result.valid is False
        assert "must be a number" in result.error
