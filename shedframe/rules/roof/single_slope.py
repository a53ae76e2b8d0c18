"""Single-slope roof: rim joists, rafters @600 and no-stagger OSB.

The roof is built flat as one rigid unit (span along local X, rafters
placed along local Z) and then tilted by a single pitch rotation. The
pitch always runs across the building width: the bearing height rises
linearly from `min_height_mm` at the frame's x=0 edge to `max_height_mm`
at x = frame width.
"""

from __future__ import annotations
import logging
import math

from shedframe.core.bearing import height_at, single_slope_heights
from shedframe.rules.base import FramingRule
from shedframe.rules.roof.layout import member_positions, place_unit, tile_plan
from shedframe.models import (
    Axis, BuildingContext, Member, MemberType, Point2D, Point3D, RoofStyle, Size3D,
)

logger = logging.getLogger(__name__)

ASSEMBLY_ID = "roof"


def span_axis_for(plan_w: int, plan_d: int) -> Axis:
    """Rafter span axis; locked to the width so the pitch follows the width."""
    shortest = Axis.X if plan_w <= plan_d else Axis.Z
    if plan_w > plan_d:
        # Depth is shorter, but the pitch must keep running across the width
        return Axis.X
    return shortest


def sloped_length(plan_length: float, frame_width: int, min_h: float, max_h: float) -> int:
    """True length of a member running `plan_length` in the pitch direction."""
    rise = plan_length * (max_h - min_h) / max(1, frame_width)
    return round(math.sqrt(plan_length * plan_length + rise * rise))


class SingleSlopeRoofRule(FramingRule):
    """Rim joists, rafters and OSB for a mono-pitch roof."""

    priority = 80
    dependencies = ["wall.continuous", "wall.panelized"]

    def get_id(self) -> str:
        return "roof.single_slope"

    def get_name(self) -> str:
        return "Single-Slope Roof Framing"

    def applies(self, context: BuildingContext) -> bool:
        return context.config.roof.style is RoofStyle.SINGLE_SLOPE

    def generate(self, context: BuildingContext) -> list[Member]:
        params = context.params
        dims = context.dims
        frame, roof, ovh = dims.frame, dims.roof, dims.overhang
        min_h, max_h = single_slope_heights(context)

        span_axis = span_axis_for(roof.width_mm, roof.depth_mm)
        run_axis = span_axis.other
        pitch_plan = roof.along(span_axis)
        run = roof.along(run_axis)

        # Only members along the pitch direction take the sloped length
        span = sloped_length(pitch_plan, frame.width_mm, min_h, max_h) if span_axis is Axis.X else pitch_plan
        pitch = math.atan2(max_h - min_h, frame.width_mm)

        rafter_w = params.roof_timber_depth   # lies flat: wide face horizontal
        rafter_d = params.roof_timber_width
        members: list[Member] = []

        def add(type_: MemberType, size: Size3D, x: float, y: float, z: float,
                material: str = "timber", **tags: str) -> None:
            members.append(Member(
                type=type_, size=size, position=Point3D(x=x, y=y, z=z),
                material=material, assembly=ASSEMBLY_ID,
                tags={"roof": RoofStyle.SINGLE_SLOPE.value, **tags},
            ))

        # Rim joists at both ends of the span, running the full placement axis
        rim_size = Size3D(x=rafter_w, y=rafter_d, z=run)
        add(MemberType.RIM, rim_size, 0, 0, 0, edge="low")
        add(MemberType.RIM, rim_size, max(0, span - rafter_w), 0, 0, edge="high")

        for i, z0 in enumerate(member_positions(run, rafter_w, params.roof_member_spacing)):
            add(MemberType.RAFTER, Size3D(x=span, y=rafter_d, z=rafter_w), 0, 0, z0,
                index=str(i), spacing=str(params.roof_member_spacing))

        for sheet in tile_plan(span, run, params.sheet_a, params.sheet_b):
            add(
                MemberType.SHEATHING,
                Size3D(x=sheet.x_len_mm, y=params.sheet_thickness, z=sheet.z_len_mm),
                sheet.x0_mm, rafter_d, sheet.z0_mm,
                material="osb", sheet=sheet.kind,
            )

        placement = place_unit(
            ASSEMBLY_ID,
            span_axis,
            footprint=(span, run),
            pitch=pitch,
            corner=Point2D(x=-ovh.left_mm, z=-ovh.front_mm),
            low_edge=Point2D(x=0, z=frame.depth_mm / 2),
            low_height=height_at(0, frame.width_mm, min_h, max_h),
            high_edge=Point2D(x=frame.width_mm, z=frame.depth_mm / 2),
        )
        context.assemblies.append(placement)

        expected_high = height_at(frame.width_mm, frame.width_mm, min_h, max_h)
        if abs(placement.high_edge_height_mm - expected_high) > 1:
            logger.debug(
                "Single-slope high edge sits at %.1fmm, expected %.1fmm",
                placement.high_edge_height_mm, expected_high,
            )
        logger.debug(
            "Single-slope roof: span %dmm (%s), run %dmm, %d members",
            span, span_axis.value, run, len(members),
        )
        return members
