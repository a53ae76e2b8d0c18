"""Dimension resolver: one canonical frame size behind three views."""

from __future__ import annotations
import logging

from shedframe.models import (
    BuildingConfiguration, DimensionMode, OverhangConfig, Rect,
    ResolvedDimensions, ResolvedOverhang, number, floor_pos, floor_non_neg,
)
from shedframe.models.building import DimensionInputs

logger = logging.getLogger(__name__)

DEFAULT_GAP_MM = 50
DEFAULT_INPUTS = DimensionInputs()


def resolve_overhang(ovh: OverhangConfig) -> ResolvedOverhang:
    """Unset sides fall back to the uniform overhang; an explicit 0 is kept."""
    uniform = floor_non_neg(number(ovh.uniform_mm, 0))

    def side(value: float | None) -> int:
        if value is None:
            return uniform
        return floor_non_neg(number(value, 0))

    return ResolvedOverhang(
        left_mm=side(ovh.left_mm),
        right_mm=side(ovh.right_mm),
        front_mm=side(ovh.front_mm),
        back_mm=side(ovh.back_mm),
    )


def _frame_from_inputs(
    config: BuildingConfiguration, gap: int, ovh: ResolvedOverhang,
) -> tuple[float, float]:
    """Legacy path: derive the frame from the active mode's inputs."""
    inputs = config.dim_inputs

    if config.dim_mode is DimensionMode.FRAME:
        return (
            number(inputs.frame_w_mm, DEFAULT_INPUTS.frame_w_mm),
            number(inputs.frame_d_mm, DEFAULT_INPUTS.frame_d_mm),
        )
    if config.dim_mode is DimensionMode.ROOF:
        roof_w = number(inputs.roof_w_mm, DEFAULT_INPUTS.roof_w_mm)
        roof_d = number(inputs.roof_d_mm, DEFAULT_INPUTS.roof_d_mm)
        return max(1, roof_w - ovh.sum_x), max(1, roof_d - ovh.sum_z)

    base_w = number(inputs.base_w_mm, DEFAULT_INPUTS.base_w_mm)
    base_d = number(inputs.base_d_mm, DEFAULT_INPUTS.base_d_mm)
    return base_w + gap, base_d + gap


def resolve_dimensions(config: BuildingConfiguration) -> ResolvedDimensions:
    """
    Resolve base, frame and roof rectangles plus per-side overhangs.

    Pure and idempotent: the same snapshot always gives the same result.
    """
    gap = floor_non_neg(number(config.dim_gap_mm, DEFAULT_GAP_MM))
    ovh = resolve_overhang(config.overhang)

    frame_w: float | None = None
    frame_d: float | None = None
    canonical = config.dim
    if canonical is not None and canonical.frame_w_mm is not None and canonical.frame_d_mm is not None:
        frame_w = number(canonical.frame_w_mm, None)  # type: ignore[arg-type]
        frame_d = number(canonical.frame_d_mm, None)  # type: ignore[arg-type]

    if frame_w is None or frame_d is None:
        frame_w, frame_d = _frame_from_inputs(config, gap, ovh)

    frame = Rect(width_mm=floor_pos(frame_w), depth_mm=floor_pos(frame_d))
    base = Rect(
        width_mm=floor_pos(frame.width_mm - gap),
        depth_mm=floor_pos(frame.depth_mm - gap),
    )
    roof = Rect(
        width_mm=floor_pos(frame.width_mm + ovh.sum_x),
        depth_mm=floor_pos(frame.depth_mm + ovh.sum_z),
    )

    logger.debug(
        "Resolved dims: base %dx%d, frame %dx%d, roof %dx%d",
        base.width_mm, base.depth_mm, frame.width_mm, frame.depth_mm,
        roof.width_mm, roof.depth_mm,
    )
    return ResolvedDimensions(base=base, frame=frame, roof=roof, overhang=ovh, gap_mm=gap)
