"""Frame generation parameters, configuration and numeric coercion."""

from __future__ import annotations
import math
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, Field, field_validator, model_validator


def number(value: Any, default: float) -> float:
    """Read a finite number, falling back to `default` for anything else."""
    if value is None or isinstance(value, bool):
        return default
    try:
        n = float(value)
    except (TypeError, ValueError):
        return default
    return n if math.isfinite(n) else default


def floor_pos(value: float) -> int:
    """Floor to an integer millimeter, minimum 1."""
    return max(1, math.floor(value))


def floor_non_neg(value: float) -> int:
    """Floor to an integer millimeter, minimum 0."""
    return max(0, math.floor(value))


def _soft_float(value: Any) -> float:
    # Unreadable input is kept as NaN so the engines apply their own default.
    if isinstance(value, str) and value.strip() == "":
        return math.nan
    return number(value, math.nan)


def _soft_optional_float(value: Any) -> Optional[float]:
    # Blank means unset, an explicit 0 stays 0.
    if value is None or (isinstance(value, str) and value.strip() == ""):
        return None
    return number(value, math.nan)


SoftFloat = Annotated[float, BeforeValidator(_soft_float)]
SoftOptionalFloat = Annotated[Optional[float], BeforeValidator(_soft_optional_float)]


class FrameParams(BaseModel):
    """
    Engine constants, in millimeters unless noted.

    Unlike the configuration snapshot these are validated strictly: a
    request carrying a non-positive spacing or sheet size is rejected.
    """
    stud_spacing: int = Field(400, gt=0)            # Continuous wall, stud left edge to left edge
    max_panel_length: int = Field(2400, gt=0)       # Panelized wall, longest prefabricated panel
    corner_clearance: int = Field(50, ge=0)         # Minimum door distance from a wall end
    min_door_gap: int = Field(50, ge=0)             # Minimum distance between two doors
    roof_member_spacing: int = Field(600, gt=0)     # Rafters / trusses
    roof_timber_width: int = Field(50, gt=0)        # Narrow face of roof timber
    roof_timber_depth: int = Field(100, gt=0)       # Wide face of roof timber
    sheet_a: int = Field(1220, gt=0)                # Sheet size along the short plan axis
    sheet_b: int = Field(2440, gt=0)                # Sheet size along the long plan axis
    sheet_thickness: int = Field(18, gt=0)
    gable_rise_ratio: float = Field(0.20, ge=0, allow_inf_nan=False)   # Rise as a fraction of span
    gable_min_rise: int = Field(200, ge=0)
    gable_max_rise: int = Field(900, ge=0)
    purlin_fractions: tuple[float, ...] = (0.25, 0.75)

    @field_validator("purlin_fractions")
    @classmethod
    def _fractions_within_span(cls, v: tuple[float, ...]) -> tuple[float, ...]:
        if any(not 0 <= f <= 1 for f in v):
            raise ValueError("purlin fractions must lie between 0 and 1")
        return v

    @model_validator(mode="after")
    def _rise_range(self) -> FrameParams:
        if self.gable_min_rise > self.gable_max_rise:
            raise ValueError("gable_min_rise must not exceed gable_max_rise")
        return self


DEFAULT_PARAMS = FrameParams()


class GenerationConfig(BaseModel):
    """Controls which rules are applied."""
    enabled_rules: list[str] = []        # Empty = use all registered defaults
    disabled_rules: list[str] = []       # Explicitly disable specific rules
