"""Continuous wall framing: one plate pair per wall, studs at fixed spacing.

Generates full-length bottom and top plates, corner studs, intermediate
studs every 400mm, and king/trimmer/header framing around each door.
"""

from __future__ import annotations
import logging

from shedframe.core.analyzer import section_of
from shedframe.rules.base import FramingRule
from shedframe.rules.wall.framing import WallFramer
from shedframe.models import (
    BuildingContext, DoorLayout, Member, MemberType, PlacedOpening, WallRun, WallVariant,
    number, floor_pos,
)

logger = logging.getLogger(__name__)


class ContinuousWallFramingRule(FramingRule):
    """Plates + corner studs + spaced studs + opening framing per wall."""

    priority = 50  # Walls run before the roof

    def get_id(self) -> str:
        return "wall.continuous"

    def get_name(self) -> str:
        return "Continuous Wall Framing"

    def applies(self, context: BuildingContext) -> bool:
        return (
            len(context.walls) > 0
            and context.config.walls.variant is WallVariant.CONTINUOUS
        )

    def generate(self, context: BuildingContext) -> list[Member]:
        sw, t = section_of(context)
        spacing = floor_pos(number(
            context.config.walls.continuous.spacing, context.params.stud_spacing,
        ))
        members: list[Member] = []
        for wall in context.walls:
            members.extend(frame_wall(wall, context.doors_on(wall.id), sw, t, spacing))
        return members


def header_spans(doors: list[PlacedOpening], sw: int) -> dict[str, tuple[int, int]]:
    """
    Header extents per door, bearing one stud width onto each trimmer.

    Where two doors stand closer than two stud widths their headers would
    collide; both are cut back to the middle of the gap between the doors.
    """
    ordered = sorted(doors, key=lambda o: o.x_mm)
    spans = {o.id: [o.x_mm - sw, o.end_mm + sw] for o in ordered}
    for prev, cur in zip(ordered, ordered[1:]):
        if spans[prev.id][1] > spans[cur.id][0]:
            mid = prev.end_mm + (cur.x_mm - prev.end_mm) // 2
            spans[prev.id][1] = mid
            spans[cur.id][0] = mid
    return {k: (a, b) for k, (a, b) in spans.items()}


def frame_wall(wall: WallRun, doors: DoorLayout, sw: int, t: int, spacing: int) -> list[Member]:
    """Frame one wall run; `sw` is the stud (plate) narrow face, `t` the wall thickness."""
    framer = WallFramer(wall, stud_width=sw, plate_thickness=sw, openings=doors.accepted)
    length = wall.length_mm

    framer.add_plates(0, length)

    # Corner studs
    framer.add_stud(0, role="corner")
    framer.add_stud(length - sw, role="corner")

    # Openings: trimmers beside the opening, kings outside them, header on the trimmers
    framed: list[tuple[int, int]] = []
    spans = header_spans(doors.accepted, sw)
    for o in doors.accepted:
        u0, u1 = spans[o.id]
        h = framer.opening_height(o, o.x_mm - sw, o.end_mm + sw, header_depth=t)
        framer.add_stud(o.x_mm - sw, MemberType.TRIMMER_STUD, height=h, opening_id=o.id)
        framer.add_stud(o.end_mm, MemberType.TRIMMER_STUD, height=h, opening_id=o.id)
        framer.add_stud(o.x_mm - 2 * sw, MemberType.KING_STUD, opening_id=o.id)
        framer.add_stud(o.end_mm + sw, MemberType.KING_STUD, opening_id=o.id)
        framer.add_header(u0, u1, sw + h, t, o.id)
        framed.append((o.x_mm - 2 * sw, o.end_mm + 2 * sw))

    # Intermediate studs, omitted inside any framed opening zone
    u = spacing
    while u < length - sw:
        framer.add_stud(u, blocked=framed, role="intermediate")
        u += spacing

    logger.debug(
        "Framed %s wall (%dmm): %d studs, %d openings",
        wall.id.value, length, len(framer.stud_positions()), len(doors.accepted),
    )
    return framer.members
