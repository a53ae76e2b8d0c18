"""Door snapping: repair door placements that break wall constraints.

Given the enabled doors of one wall, produce accepted positions that keep
every door `corner_clearance` away from both wall ends and `min_gap` away
from its neighbours. Infeasible doors are dropped rather than raising:

1. Doors wider than the wall minus both clearances are removed.
2. While the doors cannot fit side by side, the widest is removed
   (ties: larger desired offset, then later declaration).
3. Each desired offset is clamped into the door's own allowed range.
4. Doors are ordered by clamped offset (ties: declaration order) and
   relaxed forward, backward and forward again.

Every change is recorded as a `SnapEvent`.
"""

from __future__ import annotations
import logging
import math
from dataclasses import dataclass

from shedframe.models import (
    DEFAULT_PARAMS, DoorLayout, Opening, PlacedOpening, SnapEvent, WallSide,
    number, floor_pos,
)

logger = logging.getLogger(__name__)


@dataclass
class _Door:
    index: int
    id: str
    desired: int
    width: int
    height: int
    lo: int = 0
    hi: int = 0
    x: int = 0

    def clamp(self, value: int) -> int:
        return max(self.lo, min(self.hi, value))


def snap_doors(
    wall: WallSide,
    wall_length: int,
    openings: list[Opening],
    corner_clearance: int = DEFAULT_PARAMS.corner_clearance,
    min_gap: int = DEFAULT_PARAMS.min_door_gap,
) -> DoorLayout:
    """Place the doors of one wall; never raises."""
    events: list[SnapEvent] = []
    removed: list[str] = []

    def remove(door: _Door, reason: str) -> None:
        removed.append(door.id)
        event = SnapEvent(
            opening_id=door.id, wall=wall, previous_x_mm=door.desired,
            constraint=reason, removed=True,
        )
        events.append(event)
        logger.warning(event.message)

    doors = [
        _Door(
            index=i,
            id=o.id,
            desired=math.floor(number(o.x_mm, 0)),
            width=floor_pos(number(o.width_mm, 1)),
            height=floor_pos(number(o.height_mm, 1)),
        )
        for i, o in enumerate(openings)
    ]

    # 1. Oversized doors
    max_width = wall_length - 2 * corner_clearance
    fitting: list[_Door] = []
    for d in doors:
        if d.width > max_width:
            remove(d, f"width {d.width}mm exceeds {max(0, max_width)}mm available between corner clearances")
        else:
            fitting.append(d)

    # 2. Over-dense walls
    def required(ds: list[_Door]) -> int:
        return sum(d.width for d in ds) + (len(ds) - 1) * min_gap + 2 * corner_clearance

    while fitting and required(fitting) > wall_length:
        need = required(fitting)
        victim = max(fitting, key=lambda d: (d.width, d.desired, d.index))
        fitting.remove(victim)
        remove(victim, f"doors need {need}mm on a {wall_length}mm wall; widest door dropped")

    def move(d: _Door, new_x: int, reason: str) -> None:
        if new_x == d.x:
            return
        event = SnapEvent(
            opening_id=d.id, wall=wall, previous_x_mm=d.x, new_x_mm=new_x,
            constraint=reason,
        )
        events.append(event)
        logger.info(event.message)
        d.x = new_x

    # 3. Clamp into each door's own range
    for d in fitting:
        d.lo = corner_clearance
        d.hi = wall_length - corner_clearance - d.width
        d.x = d.desired
        move(d, d.clamp(d.desired), f"corner clearance {corner_clearance}mm")

    # 4. Order and relax
    ordered = sorted(fitting, key=lambda d: (d.x, d.index))

    for i in range(1, len(ordered)):
        prev, d = ordered[i - 1], ordered[i]
        move(d, d.clamp(max(d.x, prev.x + prev.width + min_gap)), f"min spacing {min_gap}mm (forward)")

    for i in range(len(ordered) - 2, -1, -1):
        d, nxt = ordered[i], ordered[i + 1]
        move(d, d.clamp(min(d.x, nxt.x - min_gap - d.width)), f"min spacing {min_gap}mm (backward)")

    for i in range(1, len(ordered)):
        prev, d = ordered[i - 1], ordered[i]
        move(d, d.clamp(max(d.x, prev.x + prev.width + min_gap)), f"min spacing {min_gap}mm (forward)")

    accepted = [
        PlacedOpening(
            id=d.id, wall=wall, x_mm=d.x, width_mm=d.width,
            height_mm=d.height, desired_x_mm=d.desired,
        )
        for d in ordered
    ]
    return DoorLayout(
        wall=wall,
        wall_length_mm=wall_length,
        accepted=accepted,
        removed=removed,
        events=events,
    )
