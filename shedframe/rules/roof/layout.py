"""Shared roof helpers: member spacing, sheet tiling and unit placement."""

from __future__ import annotations
import logging
import math

from pydantic import BaseModel

from shedframe.models import DEFAULT_PARAMS, AssemblyPlacement, Axis, Point2D, Point3D, floor_pos

logger = logging.getLogger(__name__)


def member_positions(
    run: int, member_width: int, spacing: int = DEFAULT_PARAMS.roof_member_spacing,
) -> list[int]:
    """
    Left-edge offsets of members placed every `spacing` along `run`.

    The last member is always flush with the far end, even when the
    spacing does not divide the run, so both ends have bearing.
    """
    last = max(0, run - member_width)
    step = max(1, spacing)
    positions: list[int] = []
    p = 0
    while p <= last:
        positions.append(p)
        p += step
    if positions[-1] != last:
        positions.append(last)
    return positions


class SheetPiece(BaseModel):
    """A sheet or cut piece in (A, B) plan space; A is the short axis."""
    kind: str           # "std" full sheet | "rip" cut piece
    a0_mm: int
    b0_mm: int
    a_len_mm: int
    b_len_mm: int

    @property
    def area(self) -> int:
        return self.a_len_mm * self.b_len_mm


def tile_ab(
    a_mm: float, b_mm: float,
    sheet_a: int = DEFAULT_PARAMS.sheet_a, sheet_b: int = DEFAULT_PARAMS.sheet_b,
) -> list[SheetPiece]:
    """
    No-stagger tiling of an A x B rectangle.

    Full grid first, then the A-remainder strip across full B rows, the
    B-remainder strip across full A columns, and one corner piece. The
    piece areas always sum to exactly A x B.
    """
    a = floor_pos(a_mm)
    b = floor_pos(b_mm)
    sheet_a = max(1, sheet_a)
    sheet_b = max(1, sheet_b)
    a_full, a_rem = divmod(a, sheet_a)
    b_full, b_rem = divmod(b, sheet_b)

    pieces: list[SheetPiece] = []
    for bi in range(b_full):
        for ai in range(a_full):
            pieces.append(SheetPiece(kind="std", a0_mm=ai * sheet_a, b0_mm=bi * sheet_b,
                                     a_len_mm=sheet_a, b_len_mm=sheet_b))
    if a_rem > 0:
        for bi in range(b_full):
            pieces.append(SheetPiece(kind="rip", a0_mm=a_full * sheet_a, b0_mm=bi * sheet_b,
                                     a_len_mm=a_rem, b_len_mm=sheet_b))
    if b_rem > 0:
        for ai in range(a_full):
            pieces.append(SheetPiece(kind="rip", a0_mm=ai * sheet_a, b0_mm=b_full * sheet_b,
                                     a_len_mm=sheet_a, b_len_mm=b_rem))
    if a_rem > 0 and b_rem > 0:
        pieces.append(SheetPiece(kind="rip", a0_mm=a_full * sheet_a, b0_mm=b_full * sheet_b,
                                 a_len_mm=a_rem, b_len_mm=b_rem))
    return pieces


class PlanSheet(BaseModel):
    """A tiled piece mapped back onto plan X/Z."""
    kind: str
    x0_mm: int
    z0_mm: int
    x_len_mm: int
    z_len_mm: int


def tile_plan(
    x_mm: float, z_mm: float,
    sheet_a: int = DEFAULT_PARAMS.sheet_a, sheet_b: int = DEFAULT_PARAMS.sheet_b,
) -> list[PlanSheet]:
    """Tile an X x Z rectangle with A on the shorter side."""
    x = floor_pos(x_mm)
    z = floor_pos(z_mm)
    a_is_x = x <= z
    a, b = (x, z) if a_is_x else (z, x)
    out: list[PlanSheet] = []
    for p in tile_ab(a, b, sheet_a, sheet_b):
        if a_is_x:
            out.append(PlanSheet(kind=p.kind, x0_mm=p.a0_mm, z0_mm=p.b0_mm,
                                 x_len_mm=p.a_len_mm, z_len_mm=p.b_len_mm))
        else:
            out.append(PlanSheet(kind=p.kind, x0_mm=p.b0_mm, z0_mm=p.a0_mm,
                                 x_len_mm=p.b_len_mm, z_len_mm=p.a_len_mm))
    return out


def bearing_height(placement: AssemblyPlacement, at: Point2D) -> float:
    """Height of the unit's local y=0 plane above world point `at`."""
    normal = Point3D(x=0, y=1, z=0).rotated_z(placement.pitch).rotated_y(placement.yaw)
    o = placement.origin
    return o.y - (normal.x * (at.x - o.x) + normal.z * (at.z - o.z)) / normal.y


def place_unit(
    assembly_id: str,
    span_axis: Axis,
    footprint: tuple[float, float],
    pitch: float,
    corner: Point2D,
    low_edge: Point2D,
    low_height: float,
    high_edge: Point2D,
) -> AssemblyPlacement:
    """
    Place a rigid unit built with its span along local X.

    Rotate first (pitch about local Z, then yaw to the span axis), then
    translate: the rotated footprint's minimum plan corner lands on
    `corner` and the bearing plane passes through `low_height` above
    `low_edge`. The high edge is sampled afterwards for diagnostics only.
    """
    yaw = 0.0 if span_axis is Axis.X else math.pi / 2
    lx, lz = footprint
    rotated = [
        Point3D(x=x, y=0, z=z).rotated_z(pitch).rotated_y(yaw)
        for x in (0.0, lx) for z in (0.0, lz)
    ]
    min_x = min(p.x for p in rotated)
    min_z = min(p.z for p in rotated)
    origin = Point3D(x=_snap(corner.x - min_x), y=0, z=_snap(corner.z - min_z))

    placement = AssemblyPlacement(id=assembly_id, origin=origin, yaw=yaw, pitch=pitch, span_axis=span_axis)
    placement.origin.y = _snap(low_height - bearing_height(placement, low_edge))
    placement.low_edge_height_mm = _snap(bearing_height(placement, low_edge))
    placement.high_edge_height_mm = _snap(bearing_height(placement, high_edge))

    logger.debug(
        "Placed %s: origin=(%.1f, %.1f, %.1f) yaw=%.4f pitch=%.4f low=%.1f high=%.1f",
        assembly_id, origin.x, placement.origin.y, origin.z, yaw, pitch,
        placement.low_edge_height_mm, placement.high_edge_height_mm,
    )
    return placement


def _snap(v: float) -> float:
    # Strip trig noise (cos(pi/2) etc.) from placement values
    return round(v, 6)
