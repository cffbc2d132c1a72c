"""
Derived conveyor dimensions and accessory parameter validation.

All functions are total: bad input produces a neutral value or an invalid
ValidationResult, never an exception, so they can run on every edit.
"""
import math
from dataclasses import dataclass
from typing import Optional, Union

from conveyor import ConveyorModel

# Total length D = L + offset(model)
MODEL_LENGTH_OFFSET_MM = {
    ConveyorModel.DPS50: 55.0,
    ConveyorModel.DPS60: 70.0,
    ConveyorModel.DPS96: 100.0,
}

# Total width R = N + 67 for every model
WIDTH_OFFSET_MM = 67.0

SIDE_GUIDE_MIN_HEIGHT_MM = 15.0
SIDE_GUIDE_MAX_HEIGHT_MM = 250.0

ModelLike = Union[ConveyorModel, str]


@dataclass(frozen=True)
class Dimensions:
    D: float  # total length, mm
    R: float  # total width, mm


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    error: Optional[str] = None


@dataclass(frozen=True)
class StopButtonLimits:
    min: int
    max: int


def _coerce_model(model: ModelLike) -> Optional[ConveyorModel]:
    if isinstance(model, ConveyorModel):
        return model
    try:
        return ConveyorModel(model)
    except ValueError:
        return None


def calculate_dimensions(L: float, N: float, model: ModelLike) -> Dimensions:
    """Calculate total length D and total width R from user inputs.

    An unrecognised model yields D = 0, which callers treat as
    "not configured yet".
    """
    resolved = _coerce_model(model)
    offset = MODEL_LENGTH_OFFSET_MM.get(resolved) if resolved is not None else None
    D = L + offset if offset is not None else 0.0
    R = N + WIDTH_OFFSET_MM
    return Dimensions(D=D, R=R)


def _finite(value) -> Optional[float]:
    """value as a finite float, or None for missing, non-numeric, NaN or inf."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def is_side_guide_height_valid(height: Optional[float]) -> bool:
    number = _finite(height)
    if number is None:
        return False
    return SIDE_GUIDE_MIN_HEIGHT_MM <= number <= SIDE_GUIDE_MAX_HEIGHT_MM


def validate_side_guide_height(height: Optional[float]) -> ValidationResult:
    """Validate side guide height (15-250 mm, inclusive)."""
    number = _finite(height)
    if number is None:
        return ValidationResult(valid=False, error="Height must be a number in mm")
    if SIDE_GUIDE_MIN_HEIGHT_MM <= number <= SIDE_GUIDE_MAX_HEIGHT_MM:
        return ValidationResult(valid=True)
    if number < SIDE_GUIDE_MIN_HEIGHT_MM:
        return ValidationResult(
            valid=False,
            error=f"Height must be at least {SIDE_GUIDE_MIN_HEIGHT_MM:g} mm",
        )
    return ValidationResult(
        valid=False,
        error=f"Height must not exceed {SIDE_GUIDE_MAX_HEIGHT_MM:g} mm",
    )


def get_stop_button_limits(model: ModelLike) -> StopButtonLimits:
    """Min/max stop buttons per rail for a model."""
    resolved = _coerce_model(model)
    if resolved in (ConveyorModel.DPS60, ConveyorModel.DPS96):
        return StopButtonLimits(min=1, max=12)
    return StopButtonLimits(min=1, max=6)


def validate_stop_button_count(count: int, model: ModelLike, side: str) -> ValidationResult:
    """Check a per-rail stop button count against the model's limits."""
    limits = get_stop_button_limits(model)
    resolved = _coerce_model(model)
    model_name = resolved.value if resolved is not None else str(model)
    side_name = getattr(side, "value", side)
    side_name = str(side_name).lower()

    number = _finite(count)
    if number is None:
        return ValidationResult(
            valid=False,
            error=f"Stop button count on the {side_name} side must be a number",
        )
    if limits.min <= number <= limits.max:
        return ValidationResult(valid=True)

    if number < limits.min:
        plural = "s" if limits.min > 1 else ""
        return ValidationResult(
            valid=False,
            error=f"Min {limits.min} stop button{plural} required on the {side_name} side for {model_name}",
        )
    return ValidationResult(
        valid=False,
        error=(
            f"Max {limits.max} stop buttons allowed on the {side_name} side "
            f"for {model_name} (min {limits.min})"
        ),
    )
