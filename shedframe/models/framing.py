"""Timber framing output models."""

from __future__ import annotations
from enum import Enum
from pydantic import BaseModel

from .dimensions import ResolvedDimensions
from .geometry import Axis, Point3D, Size3D
from .layout import PlacedOpening


class MemberType(str, Enum):
    BOTTOM_PLATE = "bottom_plate"
    TOP_PLATE = "top_plate"
    STUD = "stud"
    KING_STUD = "king_stud"
    TRIMMER_STUD = "trimmer_stud"
    UPRIGHT = "upright"
    HEADER = "header"
    RIM = "rim"
    RAFTER = "rafter"
    TRUSS_CHORD = "truss_chord"
    TRUSS_RAFTER = "truss_rafter"
    TRUSS_WEB = "truss_web"
    RIDGE_BEAM = "ridge_beam"
    PURLIN = "purlin"
    SHEATHING = "sheathing"


PLATE_TYPES = frozenset({MemberType.BOTTOM_PLATE, MemberType.TOP_PLATE})
STUD_TYPES = frozenset({
    MemberType.STUD, MemberType.KING_STUD, MemberType.TRIMMER_STUD, MemberType.UPRIGHT,
})
ROOF_TYPES = frozenset({
    MemberType.RIM, MemberType.RAFTER, MemberType.TRUSS_CHORD, MemberType.TRUSS_RAFTER,
    MemberType.TRUSS_WEB, MemberType.RIDGE_BEAM, MemberType.PURLIN,
})


class Member(BaseModel):
    """
    A single box-shaped piece in an assembly's local space.

    `position` is the minimum corner of the unrotated box. `slope` rotates
    the box about the local Z axis through that corner (positive lifts +X).
    """
    type: MemberType
    size: Size3D
    position: Point3D
    slope: float = 0.0
    material: str = "timber"
    assembly: str = ""          # "" = world space
    wall_id: str = ""
    opening_id: str = ""
    tags: dict[str, str] = {}   # Extensible metadata (role, panel, sheet kind, ...)

    @property
    def length_mm(self) -> float:
        return self.size.sorted_extents()[0]

    @property
    def width_mm(self) -> float:
        return self.size.sorted_extents()[1]

    @property
    def thickness_mm(self) -> float:
        return self.size.sorted_extents()[2]


class AssemblyPlacement(BaseModel):
    """
    World placement of a rigid unit: world = origin + Ry(yaw) * Rz(pitch) * local.

    The edge heights are diagnostics sampled after placement.
    """
    id: str
    origin: Point3D
    yaw: float = 0.0
    pitch: float = 0.0
    span_axis: Axis = Axis.X
    low_edge_height_mm: float = 0.0
    high_edge_height_mm: float = 0.0

    def to_world(self, local: Point3D) -> Point3D:
        return local.rotated_z(self.pitch).rotated_y(self.yaw) + self.origin


class FrameStats(BaseModel):
    """Summary statistics for a generated frame."""
    total_members: int = 0
    studs: int = 0
    plates: int = 0
    roof_timbers: int = 0
    sheathing: int = 0
    other: int = 0

    @classmethod
    def from_members(cls, members: list[Member]) -> FrameStats:
        studs = sum(1 for m in members if m.type in STUD_TYPES)
        plates = sum(1 for m in members if m.type in PLATE_TYPES)
        roof = sum(1 for m in members if m.type in ROOF_TYPES)
        sheathing = sum(1 for m in members if m.type == MemberType.SHEATHING)
        return cls(
            total_members=len(members),
            studs=studs,
            plates=plates,
            roof_timbers=roof,
            sheathing=sheathing,
            other=len(members) - studs - plates - roof - sheathing,
        )


class BuildingFrame(BaseModel):
    """The complete generated frame for one configuration snapshot."""
    dimensions: ResolvedDimensions
    members: list[Member]
    assemblies: list[AssemblyPlacement] = []
    openings: list[PlacedOpening] = []
    removed_openings: list[str] = []
    events: list[str] = []
    stats: FrameStats = None  # type: ignore[assignment]

    def model_post_init(self, __context: object) -> None:
        if self.stats is None:
            self.stats = FrameStats.from_members(self.members)

    def members_of(self, *types: MemberType) -> list[Member]:
        return [m for m in self.members if m.type in types]

    def assembly(self, assembly_id: str) -> AssemblyPlacement | None:
        for a in self.assemblies:
            if a.id == assembly_id:
                return a
        return None
