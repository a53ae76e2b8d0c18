"""Wall runs and the door placement overlay produced by snapping."""

from __future__ import annotations
import math

from pydantic import BaseModel, computed_field

from .building import WallSide
from .geometry import Axis, Point3D, Size3D


class WallRun(BaseModel):
    """
    One straight wall on the frame perimeter.

    Positions along the wall are measured from `origin` in the direction of
    `axis`; the wall occupies `thickness_mm` on the positive side of the
    other plan axis. `height_mm` is the top of the wall at u=0; a raking
    wall rises by tan(`slope`) per millimeter along its length.
    """
    id: WallSide
    axis: Axis
    length_mm: int
    origin: Point3D
    thickness_mm: int
    height_mm: float
    slope: float = 0.0

    def top_at(self, u: float) -> float:
        return self.height_mm + math.tan(self.slope) * u

    def box(self, u0: float, y0: float, length: float, height: float) -> tuple[Point3D, Size3D]:
        """Anchor and extents of a piece spanning [u0, u0+length] along the wall."""
        if self.axis is Axis.X:
            return (
                Point3D(x=self.origin.x + u0, y=y0, z=self.origin.z),
                Size3D(x=length, y=height, z=self.thickness_mm),
            )
        return (
            Point3D(x=self.origin.x, y=y0, z=self.origin.z + u0),
            Size3D(x=self.thickness_mm, y=height, z=length),
        )


class PlacedOpening(BaseModel):
    """An accepted door after snapping."""
    id: str
    wall: WallSide
    x_mm: int
    width_mm: int
    height_mm: int
    desired_x_mm: int

    @property
    def end_mm(self) -> int:
        return self.x_mm + self.width_mm


class SnapEvent(BaseModel):
    """A clamp, spacing adjustment or removal applied to one door."""
    opening_id: str
    wall: WallSide
    previous_x_mm: int
    new_x_mm: int | None = None
    constraint: str
    removed: bool = False

    @computed_field  # type: ignore[prop-decorator]
    @property
    def message(self) -> str:
        if self.removed:
            return (
                f"door {self.opening_id} on {self.wall.value} wall removed "
                f"(was at {self.previous_x_mm}mm): {self.constraint}"
            )
        return (
            f"door {self.opening_id} on {self.wall.value} wall moved "
            f"{self.previous_x_mm}mm -> {self.new_x_mm}mm: {self.constraint}"
        )


class DoorLayout(BaseModel):
    """Result of snapping the doors of one wall."""
    wall: WallSide
    wall_length_mm: int
    accepted: list[PlacedOpening] = []
    removed: list[str] = []
    events: list[SnapEvent] = []
