"""Shared wall framing helpers: plates, stud footprints, opening heights."""

from __future__ import annotations
import math

from shedframe.models import (
    Member, MemberType, PlacedOpening, WallRun, overlaps,
)


class WallFramer:
    """
    Collects the members of one wall run.

    Tracks stud footprints along the wall so no two studs overlap and no
    stud lands inside an accepted opening. On a raking wall the top plate
    follows the wall top and each stud is cut to the low side of the plate
    above it.
    """

    def __init__(self, wall: WallRun, stud_width: int, plate_thickness: int,
                 openings: list[PlacedOpening]) -> None:
        self.wall = wall
        self.sw = stud_width
        self.plate = plate_thickness
        self.openings = openings
        # Vertical depth of a plate lying at the wall's slope
        self.plate_drop = plate_thickness / math.cos(wall.slope)
        self.members: list[Member] = []
        self._occupied: list[tuple[int, int]] = []

    def _member(self, type_: MemberType, u0: float, y0: float, length: float,
                height: float, opening_id: str = "", slope: float = 0.0, **tags: str) -> Member:
        position, size = self.wall.box(u0, y0, length, height)
        return Member(
            type=type_,
            size=size,
            position=position,
            slope=slope,
            wall_id=self.wall.id.value,
            opening_id=opening_id,
            tags={"axis": self.wall.axis.value, **tags},
        )

    def underside(self, u: float) -> float:
        """Height of the top plate's lower face at `u`."""
        return self.wall.top_at(u) - self.plate_drop

    def stud_length(self, u0: float) -> float:
        return max(1.0, min(self.underside(u0), self.underside(u0 + self.sw)) - self.plate)

    def opening_height(self, opening: PlacedOpening, u0: float, u1: float, header_depth: int) -> int:
        """Door height above the bottom plate, clamped so a header over [u0, u1] fits under the top plate."""
        room = min(self.underside(u0), self.underside(u1)) - self.plate - header_depth
        return max(1, min(opening.height_mm, math.floor(room)))

    def add_plates(self, u0: int, u1: int, **tags: str) -> None:
        """Bottom and top plate over [u0, u1], narrow face vertical."""
        length = u1 - u0
        if length <= 0:
            return
        slope = self.wall.slope
        self.members.append(self._member(MemberType.BOTTOM_PLATE, u0, 0, length, self.plate, **tags))
        self.members.append(self._member(
            MemberType.TOP_PLATE, u0, self.underside(u0), length / math.cos(slope), self.plate,
            slope=slope, **tags,
        ))

    def clear(self, u0: int, blocked: list[tuple[int, int]] | None = None) -> bool:
        """True if a stud with left edge `u0` fits without any conflict."""
        u1 = u0 + self.sw
        if u0 < 0 or u1 > self.wall.length_mm:
            return False
        if any(overlaps(u0, u1, a, b) for a, b in self._occupied):
            return False
        zones = blocked if blocked is not None else [(o.x_mm, o.end_mm) for o in self.openings]
        return not any(overlaps(u0, u1, a, b) for a, b in zones)

    def add_stud(self, u0: int, type_: MemberType = MemberType.STUD, height: int | None = None,
                 opening_id: str = "", blocked: list[tuple[int, int]] | None = None,
                 **tags: str) -> bool:
        """Place a stud from the top of the bottom plate; skipped on conflict."""
        if not self.clear(u0, blocked):
            return False
        self._occupied.append((u0, u0 + self.sw))
        length = self.stud_length(u0) if height is None else height
        self.members.append(self._member(type_, u0, self.plate, self.sw, length, opening_id, **tags))
        return True

    def add_header(self, u0: int, u1: int, y0: int, depth: int, opening_id: str) -> None:
        u0 = max(0, u0)
        u1 = min(self.wall.length_mm, u1)
        if u1 <= u0:
            return
        self.members.append(self._member(MemberType.HEADER, u0, y0, u1 - u0, depth, opening_id))

    def stud_positions(self) -> list[int]:
        return sorted(a for a, _ in self._occupied)
