"""Geometric primitives used throughout the generator.

All lengths are integer-valued millimeters; angles are radians.
Axis convention: X = building width, Z = building depth, Y = up.
"""

from __future__ import annotations
import math
from enum import Enum
from pydantic import BaseModel


class Axis(str, Enum):
    X = "x"
    Z = "z"

    @property
    def other(self) -> Axis:
        return Axis.Z if self is Axis.X else Axis.X


class Point2D(BaseModel):
    """Point on the floor plane (X-Z)."""
    x: float
    z: float


class Point3D(BaseModel):
    """Point in 3D space."""
    x: float
    y: float
    z: float

    def rotated_y(self, angle: float) -> Point3D:
        """Yaw: rotation about +Y."""
        c, s = math.cos(angle), math.sin(angle)
        return Point3D(x=self.x * c + self.z * s, y=self.y, z=-self.x * s + self.z * c)

    def rotated_z(self, angle: float) -> Point3D:
        """Pitch: rotation about +Z, a positive angle lifts +X."""
        c, s = math.cos(angle), math.sin(angle)
        return Point3D(x=self.x * c - self.y * s, y=self.x * s + self.y * c, z=self.z)

    def __add__(self, other: Point3D) -> Point3D:
        return Point3D(x=self.x + other.x, y=self.y + other.y, z=self.z + other.z)


class Size3D(BaseModel):
    """Box extents along the local X, Y and Z axes."""
    x: float
    y: float
    z: float

    def sorted_extents(self) -> tuple[float, float, float]:
        """Extents from longest to shortest: (length, width, thickness)."""
        a, b, c = sorted((self.x, self.y, self.z), reverse=True)
        return a, b, c


class Rect(BaseModel):
    """Axis-aligned plan rectangle."""
    width_mm: int
    depth_mm: int

    def along(self, axis: Axis) -> int:
        return self.width_mm if axis is Axis.X else self.depth_mm


def overlaps(a0: float, a1: float, b0: float, b1: float) -> bool:
    """True when the open intervals (a0, a1) and (b0, b1) intersect."""
    return a0 < b1 and b0 < a1
