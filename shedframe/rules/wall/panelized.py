"""Panelized wall framing: prefabricated panels, 2400mm nominal limit.

A wall above the panel limit is split at its midpoint. Each panel carries
its own plates, a stud at each end and one mid-span stud. Doors get a
single upright each side and a header. A door that crosses a seam gets a
dedicated panel bracketed at its uprights, so no panel joint falls inside
a door.
"""

from __future__ import annotations
import logging

from pydantic import BaseModel

from shedframe.core.analyzer import section_of
from shedframe.rules.base import FramingRule
from shedframe.rules.wall.framing import WallFramer
from shedframe.models import (
    BuildingContext, DoorLayout, Member, MemberType, PlacedOpening, WallRun,
    WallVariant, overlaps,
)

logger = logging.getLogger(__name__)


class Panel(BaseModel):
    start_mm: int
    end_mm: int
    door_ids: list[str] = []

    @property
    def length_mm(self) -> int:
        return self.end_mm - self.start_mm


def midpoint_seams(length: int, max_panel: int) -> list[int]:
    """A wall over the panel limit splits once, at its midpoint."""
    if length <= max_panel:
        return []
    return [length // 2]


def plan_panels(
    length: int, openings: list[PlacedOpening], max_panel: int, stud_width: int,
) -> list[Panel]:
    """
    Split a wall into panels.

    A seam whose stud zone (seam +/- half a stud) touches a door is replaced
    by a door panel spanning the door's uprights, flanked by what remains.
    """
    half = stud_width // 2
    bounds: set[int] = {0, length}
    brackets: list[tuple[int, int, list[str]]] = []

    for seam in midpoint_seams(length, max_panel):
        hits = [o for o in openings if overlaps(o.x_mm, o.end_mm, seam - half, seam + half)]
        if not hits:
            bounds.add(seam)
            continue
        lo = max(0, min(o.x_mm for o in hits) - stud_width)
        hi = min(length, max(o.end_mm for o in hits) + stud_width)
        brackets.append((lo, hi, sorted(o.id for o in hits)))

    # A bracket swallows any seam inside it
    for lo, hi, _ in brackets:
        bounds = {b for b in bounds if not lo < b < hi}
    for lo, hi, _ in brackets:
        bounds.update((lo, hi))
    # No boundary may fall inside a door
    bounds = {b for b in bounds if not any(o.x_mm < b < o.end_mm for o in openings)}

    # Drop boundaries that would leave a sliver too narrow for two studs
    min_panel = 2 * stud_width
    ordered = sorted(bounds)
    kept = [0]
    for b in ordered[1:-1]:
        if b - kept[-1] >= min_panel and length - b >= min_panel:
            kept.append(b)
    kept.append(length)

    panels: list[Panel] = []
    for a, b in zip(kept, kept[1:]):
        door_ids = sorted({
            i for lo, hi, ids in brackets for i in ids if a <= lo and hi <= b
        })
        panels.append(Panel(start_mm=a, end_mm=b, door_ids=door_ids))
    return panels


class PanelizedWallFramingRule(FramingRule):
    """Per-panel plates and studs; upright + header framing per door."""

    priority = 50

    def get_id(self) -> str:
        return "wall.panelized"

    def get_name(self) -> str:
        return "Panelized Wall Framing"

    def applies(self, context: BuildingContext) -> bool:
        return (
            len(context.walls) > 0
            and context.config.walls.variant is WallVariant.PANELIZED
        )

    def generate(self, context: BuildingContext) -> list[Member]:
        sw, t = section_of(context)
        members: list[Member] = []
        for wall in context.walls:
            members.extend(frame_wall(
                wall, context.doors_on(wall.id), sw, t, context.params.max_panel_length,
            ))
        return members


def frame_wall(wall: WallRun, doors: DoorLayout, sw: int, t: int, max_panel: int) -> list[Member]:
    framer = WallFramer(wall, stud_width=sw, plate_thickness=sw, openings=doors.accepted)
    panels = plan_panels(wall.length_mm, doors.accepted, max_panel, sw)

    for i, p in enumerate(panels):
        tags = {"panel": str(i)}
        if p.door_ids:
            tags["door_panel"] = ",".join(p.door_ids)
        framer.add_plates(p.start_mm, p.end_mm, **tags)

    # Uprights first, so a door panel's end studs double as its uprights
    for o in doors.accepted:
        h = framer.opening_height(o, o.x_mm, o.end_mm, header_depth=t)
        framer.add_stud(o.x_mm - sw, MemberType.UPRIGHT, opening_id=o.id)
        framer.add_stud(o.end_mm, MemberType.UPRIGHT, opening_id=o.id)
        framer.add_header(o.x_mm, o.end_mm, sw + h, t, o.id)

    for i, p in enumerate(panels):
        framer.add_stud(p.start_mm, role="panel_end", panel=str(i))
        framer.add_stud(p.end_mm - sw, role="panel_end", panel=str(i))
        mid = (p.start_mm + p.end_mm) // 2 - sw // 2
        framer.add_stud(mid, role="mid_span", panel=str(i))

    logger.debug(
        "Panelized %s wall (%dmm) into %s",
        wall.id.value, wall.length_mm,
        ", ".join(f"[{p.start_mm},{p.end_mm}]" for p in panels),
    )
    return framer.members
