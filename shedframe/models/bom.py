"""Cutting list rows."""

from __future__ import annotations
from pydantic import BaseModel


class BOMRow(BaseModel):
    item: str
    qty: int
    length_mm: int
    width_mm: int
    notes: str = ""

    def sort_key(self) -> tuple[str, int, int, str]:
        return (self.item, self.length_mm, self.width_mm, self.notes)
