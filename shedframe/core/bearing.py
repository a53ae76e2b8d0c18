"""Roof bearing heights shared by the wall analysis and the roof rules.

The single-slope bearing plane rises linearly across the frame width, from
the minimum height at x=0 to the maximum at x = frame width. A gable roof
bears level at its eaves height.
"""

from __future__ import annotations

from shedframe.models import BuildingContext, RoofStyle, number, floor_pos

DEFAULT_WALL_HEIGHT_MM = 2400


def wall_height_of(context: BuildingContext) -> int:
    return floor_pos(number(context.config.walls.height_mm, DEFAULT_WALL_HEIGHT_MM))


def single_slope_heights(context: BuildingContext) -> tuple[int, int]:
    """(min, max) bearing heights; unset values fall back to the wall height."""
    wall_h = wall_height_of(context)
    cfg = context.config.roof.single_slope
    return (
        floor_pos(number(cfg.min_height_mm, wall_h)),
        floor_pos(number(cfg.max_height_mm, wall_h)),
    )


def eaves_height_of(context: BuildingContext) -> int:
    return floor_pos(number(context.config.roof.gable.eaves_height_mm, wall_height_of(context)))


def height_at(x_mm: float, frame_width: int, min_h: float, max_h: float) -> float:
    """Analytic bearing height at `x_mm` along the frame width."""
    return min_h + (max_h - min_h) * (x_mm / max(1, frame_width))


def bearing_profile(context: BuildingContext) -> tuple[float, float]:
    """
    Bearing height at x=0 and its rise per millimeter of x.

    Flat (zero rise) for a gable roof.
    """
    if context.config.roof.style is RoofStyle.SINGLE_SLOPE:
        min_h, max_h = single_slope_heights(context)
        return float(min_h), (max_h - min_h) / max(1, context.dims.frame.width_mm)
    return float(eaves_height_of(context)), 0.0
