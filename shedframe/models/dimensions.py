"""Resolved base / frame / roof rectangles."""

from __future__ import annotations
from pydantic import BaseModel

from .geometry import Rect


class ResolvedOverhang(BaseModel):
    left_mm: int = 0
    right_mm: int = 0
    front_mm: int = 0
    back_mm: int = 0

    @property
    def sum_x(self) -> int:
        return self.left_mm + self.right_mm

    @property
    def sum_z(self) -> int:
        return self.front_mm + self.back_mm


class ResolvedDimensions(BaseModel):
    """
    Canonical rectangles for one configuration.

    frame = base + gap per axis, roof = frame + overhang sums per axis,
    every extent >= 1mm.
    """
    base: Rect
    frame: Rect
    roof: Rect
    overhang: ResolvedOverhang
    gap_mm: int
