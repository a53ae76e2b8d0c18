"""Gable roof: symmetric trusses @600 along a ridge on the long axis.

Each truss is a bottom chord, two rafters meeting at the ridge and one
king-post web. A ridge beam and two purlins tie the trusses together, and
two sloped OSB panels stand in for the covering. The whole unit is built
with its span along local X and yawed onto the shorter plan axis.
"""

from __future__ import annotations
import logging
import math

from shedframe.core.bearing import eaves_height_of
from shedframe.rules.base import FramingRule
from shedframe.rules.roof.layout import member_positions, place_unit
from shedframe.models import (
    Axis, BuildingContext, FrameParams, Member, MemberType, Point2D, Point3D,
    RoofStyle, Size3D,
)

logger = logging.getLogger(__name__)

ASSEMBLY_ID = "roof"


def gable_rise(span: int, params: FrameParams | None = None) -> int:
    """Ridge rise from the span alone: 20% of span, clamped to 200..900mm."""
    p = params or FrameParams()
    return int(max(p.gable_min_rise, min(p.gable_max_rise, round(p.gable_rise_ratio * span))))


def gable_span_axis(plan_w: int, plan_d: int) -> Axis:
    """Trusses span the shorter plan dimension; the ridge runs along the longer."""
    return Axis.X if plan_w <= plan_d else Axis.Z


class GableRoofRule(FramingRule):
    """Trusses, ridge beam, purlins and sheathing panels for a two-slope roof."""

    priority = 80
    dependencies = ["wall.continuous", "wall.panelized"]

    def get_id(self) -> str:
        return "roof.gable"

    def get_name(self) -> str:
        return "Gable Roof Framing"

    def applies(self, context: BuildingContext) -> bool:
        return context.config.roof.style is RoofStyle.GABLE

    def generate(self, context: BuildingContext) -> list[Member]:
        params = context.params
        frame, roof, ovh = context.dims.frame, context.dims.roof, context.dims.overhang
        eaves = eaves_height_of(context)

        span_axis = gable_span_axis(roof.width_mm, roof.depth_mm)
        span = roof.along(span_axis)
        length = roof.along(span_axis.other)
        rise = gable_rise(span, params)

        tw = params.roof_timber_width
        td = params.roof_timber_depth
        half = span / 2
        slope = math.atan2(rise, half)
        rafter_len = round(math.hypot(half, rise))

        members: list[Member] = []

        def add(type_: MemberType, size: Size3D, x: float, y: float, z: float,
                slope_: float = 0.0, material: str = "timber", **tags: str) -> None:
            members.append(Member(
                type=type_, size=size, position=Point3D(x=x, y=y, z=z), slope=slope_,
                material=material, assembly=ASSEMBLY_ID,
                tags={"roof": RoofStyle.GABLE.value, **tags},
            ))

        for i, z0 in enumerate(member_positions(length, tw, params.roof_member_spacing)):
            truss = str(i)
            add(MemberType.TRUSS_CHORD, Size3D(x=span, y=td, z=tw), 0, 0, z0, truss=truss,
                spacing=str(params.roof_member_spacing))
            add(MemberType.TRUSS_RAFTER, Size3D(x=rafter_len, y=td, z=tw), 0, 0, z0,
                slope_=slope, truss=truss, side="left")
            add(MemberType.TRUSS_RAFTER, Size3D(x=rafter_len, y=td, z=tw), half, rise, z0,
                slope_=-slope, truss=truss, side="right")
            add(MemberType.TRUSS_WEB, Size3D(x=tw, y=max(1, rise - td), z=tw),
                half - tw / 2, td, z0, truss=truss)

        add(MemberType.RIDGE_BEAM, Size3D(x=tw, y=td, z=length), half - tw / 2, rise, 0)

        # Purlins sit on the rafters' top edge
        top_offset = td / math.cos(slope)
        for f in params.purlin_fractions:
            x = f * span
            y = rise * (1 - abs(x - half) / half) + top_offset
            add(MemberType.PURLIN, Size3D(x=tw, y=td, z=length), x - tw / 2, y, 0, fraction=f"{f:g}")

        sheet = Size3D(x=rafter_len, y=params.sheet_thickness, z=length)
        nx, ny = math.sin(slope) * td, math.cos(slope) * td
        add(MemberType.SHEATHING, sheet, -nx, ny, 0, slope_=slope, material="osb",
            side="left", sheet="panel")
        add(MemberType.SHEATHING, sheet, half + nx, rise + ny, 0, slope_=-slope, material="osb",
            side="right", sheet="panel")

        if span_axis is Axis.X:
            low_edge = Point2D(x=0, z=frame.depth_mm / 2)
            high_edge = Point2D(x=frame.width_mm, z=frame.depth_mm / 2)
        else:
            low_edge = Point2D(x=frame.width_mm / 2, z=0)
            high_edge = Point2D(x=frame.width_mm / 2, z=frame.depth_mm)

        placement = place_unit(
            ASSEMBLY_ID,
            span_axis,
            footprint=(span, length),
            pitch=0.0,
            corner=Point2D(x=-ovh.left_mm, z=-ovh.front_mm),
            low_edge=low_edge,
            low_height=eaves,
            high_edge=high_edge,
        )
        context.assemblies.append(placement)

        logger.debug(
            "Gable roof: span %dmm (%s), length %dmm, rise %dmm, %d members",
            span, span_axis.value, length, rise, len(members),
        )
        return members
