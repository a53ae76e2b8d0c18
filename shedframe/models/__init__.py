from .geometry import Axis, Point2D, Point3D, Size3D, Rect, overlaps
from .parameters import DEFAULT_PARAMS, FrameParams, GenerationConfig, number, floor_pos, floor_non_neg
from .building import (
    BuildingConfiguration, DimensionMode, WallSide, WallVariant, RoofStyle,
    Opening, OpeningType, OverhangConfig, SectionProfile,
)
from .dimensions import ResolvedDimensions, ResolvedOverhang
from .layout import WallRun, PlacedOpening, SnapEvent, DoorLayout
from .framing import (
    Member, MemberType, AssemblyPlacement, BuildingFrame, FrameStats,
)
from .bom import BOMRow
from .context import BuildingContext

__all__ = [
    "Axis", "Point2D", "Point3D", "Size3D", "Rect", "overlaps",
    "DEFAULT_PARAMS", "FrameParams", "GenerationConfig", "number", "floor_pos", "floor_non_neg",
    "BuildingConfiguration", "DimensionMode", "WallSide", "WallVariant", "RoofStyle",
    "Opening", "OpeningType", "OverhangConfig", "SectionProfile",
    "ResolvedDimensions", "ResolvedOverhang",
    "WallRun", "PlacedOpening", "SnapEvent", "DoorLayout",
    "Member", "MemberType", "AssemblyPlacement", "BuildingFrame", "FrameStats",
    "BOMRow",
    "BuildingContext",
]
