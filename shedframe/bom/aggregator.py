"""Cutting-list aggregation: members and openings to sorted BOM rows.

Timber members become direct count rows ("N studs of length L"). Sheet
goods become grouped rows of physically distinct pieces. Rows sharing
(item, floor(length), floor(width), notes) merge with summed quantity,
and the result is sorted by item, length, width, notes so identical
input always gives identical output.
"""

from __future__ import annotations
import logging
import math
from collections import Counter
from typing import Iterable

from pydantic import BaseModel

from shedframe.models import (
    BOMRow, BuildingFrame, Member, MemberType, PlacedOpening, floor_pos,
)
from shedframe.rules.roof.layout import tile_ab

logger = logging.getLogger(__name__)

ITEM_LABELS: dict[MemberType, str] = {
    MemberType.BOTTOM_PLATE: "Wall Plate (Bottom)",
    MemberType.TOP_PLATE: "Wall Plate (Top)",
    MemberType.STUD: "Wall Stud",
    MemberType.KING_STUD: "Wall King Stud",
    MemberType.TRIMMER_STUD: "Wall Trimmer Stud",
    MemberType.UPRIGHT: "Wall Door Upright",
    MemberType.HEADER: "Wall Door Header",
    MemberType.RIM: "Roof Rim Joist",
    MemberType.RAFTER: "Roof Rafter",
    MemberType.TRUSS_CHORD: "Truss Bottom Chord",
    MemberType.TRUSS_RAFTER: "Truss Rafter",
    MemberType.TRUSS_WEB: "Truss Web",
    MemberType.RIDGE_BEAM: "Roof Ridge Beam",
    MemberType.PURLIN: "Roof Purlin",
    MemberType.SHEATHING: "Roof OSB",
}

SHEET_NOTES = {"std": "standard sheet", "rip": "rip/trim"}


class CutPiece(BaseModel):
    """One physical piece before grouping."""
    item: str
    length_mm: float
    width_mm: float
    notes: str = ""


def sort_rows(rows: Iterable[BOMRow]) -> list[BOMRow]:
    return sorted(rows, key=BOMRow.sort_key)


def group_pieces(pieces: Iterable[CutPiece]) -> list[BOMRow]:
    """Merge pieces with equal (item, floor(L), floor(W), notes)."""
    counts: Counter[tuple[str, int, int, str]] = Counter()
    for p in pieces:
        counts[(p.item, floor_pos(p.length_mm), floor_pos(p.width_mm), p.notes)] += 1
    return sort_rows(
        BOMRow(item=item, qty=qty, length_mm=length, width_mm=width, notes=notes)
        for (item, length, width, notes), qty in counts.items()
    )


def _timber_notes(m: Member) -> str:
    thickness = math.floor(m.thickness_mm)
    if m.wall_id:
        return f"{thickness}mm; {m.wall_id} wall"
    roof = m.tags.get("roof", "").replace("_", "-")
    if "spacing" in m.tags:
        return f"{thickness}mm; {roof} roof; spacing @{m.tags['spacing']}mm"
    return f"{thickness}mm; {roof} roof"


def count_rows(members: Iterable[Member]) -> list[BOMRow]:
    """Direct count rows for uniform timber groups."""
    return group_pieces(
        CutPiece(item=ITEM_LABELS[m.type], length_mm=m.length_mm, width_mm=m.width_mm,
                 notes=_timber_notes(m))
        for m in members
        if m.type is not MemberType.SHEATHING
    )


def sheet_pieces(members: Iterable[Member]) -> list[CutPiece]:
    """
    Physical sheet pieces.

    Tiled pieces map one to one; a representative panel (a whole roof
    slope) is tiled here so the list still counts real sheets.
    """
    pieces: list[CutPiece] = []
    for m in members:
        if m.type is not MemberType.SHEATHING:
            continue
        thickness = math.floor(m.thickness_mm)
        surface = (m.size.x, m.size.z)
        if m.tags.get("sheet") == "panel":
            cuts = [(p.b_len_mm, p.a_len_mm, p.kind) for p in tile_ab(min(surface), max(surface))]
        else:
            cuts = [(max(surface), min(surface), m.tags.get("sheet", "std"))]
        for length, width, kind in cuts:
            pieces.append(CutPiece(
                item=ITEM_LABELS[MemberType.SHEATHING],
                length_mm=length,
                width_mm=width,
                notes=f"{thickness}mm OSB; {SHEET_NOTES.get(kind, kind)}",
            ))
    return pieces


def opening_rows(openings: Iterable[PlacedOpening]) -> list[BOMRow]:
    return group_pieces(
        CutPiece(item="Door Opening", length_mm=o.height_mm, width_mm=o.width_mm,
                 notes=f"{o.wall.value} wall")
        for o in openings
    )


def build_cutting_list(frame: BuildingFrame) -> list[BOMRow]:
    """Complete cutting list for a generated frame."""
    rows = count_rows(frame.members)
    rows += group_pieces(sheet_pieces(frame.members))
    rows += opening_rows(frame.openings)
    rows = sort_rows(rows)
    logger.debug("Cutting list: %d rows, %d pieces", len(rows), sum(r.qty for r in rows))
    return rows
