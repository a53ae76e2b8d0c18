"""Wall analysis: perimeter wall runs and door snapping per wall."""

from __future__ import annotations
import logging
import math

from shedframe.core.bearing import bearing_profile
from shedframe.core.snapping import snap_doors
from shedframe.models import (
    Axis, BuildingContext, Point3D, WallRun, WallSide, number, floor_pos,
)

logger = logging.getLogger(__name__)


def section_of(context: BuildingContext) -> tuple[int, int]:
    """(narrow, wide) faces of the active wall section."""
    section = context.config.walls.profile.section
    return floor_pos(number(section.w, 50)), floor_pos(number(section.h, 100))


class WallAnalyzer:
    """Derives the four perimeter walls from the frame and places their doors."""

    def analyze(self, context: BuildingContext) -> None:
        """Run all analysis passes and populate the context."""
        context.walls = self._wall_runs(context)
        context.door_layouts = {
            wall.id: snap_doors(
                wall.id,
                wall.length_mm,
                context.config.openings_for(wall.id),
                corner_clearance=context.params.corner_clearance,
                min_gap=context.params.min_door_gap,
            )
            for wall in context.walls
        }

    def _wall_runs(self, context: BuildingContext) -> list[WallRun]:
        """
        Front/back span the full frame width; left/right sit between them,
        offset inward by one wall thickness so corners neither overlap nor gap.

        Wall tops follow the roof bearing plane. Under a single slope the
        front and back walls rake with the pitch; each side wall is level
        at the lower edge of its strip so the roof rests on it without
        cutting in.
        """
        frame = context.dims.frame
        _, t = section_of(context)
        base, rise = bearing_profile(context)
        w, d = frame.width_mm, frame.depth_mm
        side_len = max(1, d - 2 * t)
        slope = math.atan(rise)

        def level(x0: float, x1: float) -> float:
            return min(base + rise * x0, base + rise * x1)

        runs = [
            WallRun(id=WallSide.FRONT, axis=Axis.X, length_mm=w, origin=Point3D(x=0, y=0, z=0),
                    thickness_mm=t, height_mm=base, slope=slope),
            WallRun(id=WallSide.BACK, axis=Axis.X, length_mm=w, origin=Point3D(x=0, y=0, z=d - t),
                    thickness_mm=t, height_mm=base, slope=slope),
            WallRun(id=WallSide.LEFT, axis=Axis.Z, length_mm=side_len, origin=Point3D(x=0, y=0, z=t),
                    thickness_mm=t, height_mm=level(0, t)),
            WallRun(id=WallSide.RIGHT, axis=Axis.Z, length_mm=side_len, origin=Point3D(x=w - t, y=0, z=t),
                    thickness_mm=t, height_mm=level(w - t, w)),
        ]
        logger.debug("Wall runs: %s", ", ".join(f"{r.id.value}={r.length_mm}" for r in runs))
        return runs
