"""Building configuration models: dimensions, overhangs, walls, openings, roof."""

from __future__ import annotations
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .parameters import SoftFloat, SoftOptionalFloat


class DimensionMode(str, Enum):
    """Which rectangle the legacy width/depth inputs describe."""
    BASE = "base"
    FRAME = "frame"
    ROOF = "roof"


class WallSide(str, Enum):
    FRONT = "front"
    BACK = "back"
    LEFT = "left"
    RIGHT = "right"


class WallVariant(str, Enum):
    CONTINUOUS = "continuous"
    PANELIZED = "panelized"


class RoofStyle(str, Enum):
    SINGLE_SLOPE = "single_slope"
    GABLE = "gable"


class OpeningType(str, Enum):
    DOOR = "door"


_LEGACY_NAMES = {
    "slab": "base",
    "insulated": "continuous",
    "basic": "panelized",
    "pent": "single_slope",
    "apex": "gable",
}


def _enum_value(value: Any, enum_cls: type[Enum], default: Enum) -> Enum:
    """Map legacy names onto the enum; anything unrecognised becomes `default`."""
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        key = value.strip().lower()
        key = _LEGACY_NAMES.get(key, key)
        for member in enum_cls:
            if member.value == key:
                return member
    return default


class _Snapshot(BaseModel):
    model_config = ConfigDict(frozen=True)


class FrameDims(_Snapshot):
    """Canonical frame size; authoritative when both values are present."""
    frame_w_mm: SoftOptionalFloat = 3050
    frame_d_mm: SoftOptionalFloat = 4050


class DimensionInputs(_Snapshot):
    """Legacy per-mode width/depth inputs."""
    base_w_mm: SoftFloat = 3000
    base_d_mm: SoftFloat = 4000
    frame_w_mm: SoftFloat = 3050
    frame_d_mm: SoftFloat = 4050
    roof_w_mm: SoftFloat = 3050
    roof_d_mm: SoftFloat = 4050


class OverhangConfig(_Snapshot):
    """Roof overhang beyond the frame. Unset sides use `uniform_mm`."""
    uniform_mm: SoftFloat = 0
    front_mm: SoftOptionalFloat = None
    back_mm: SoftOptionalFloat = None
    left_mm: SoftOptionalFloat = None
    right_mm: SoftOptionalFloat = None


class SectionProfile(_Snapshot):
    """Timber cross-section: `w` narrow face, `h` wide face."""
    w: SoftFloat = 50
    h: SoftFloat = 100


class WallProfile(_Snapshot):
    section: SectionProfile = SectionProfile()
    spacing: SoftOptionalFloat = None


class Opening(_Snapshot):
    """A door positioned along a wall, offset measured from the wall origin."""
    id: str
    wall: WallSide = WallSide.FRONT
    type: OpeningType = OpeningType.DOOR
    enabled: bool = True
    x_mm: SoftFloat = 0
    width_mm: SoftFloat = 900
    height_mm: SoftFloat = 2000

    @field_validator("id", mode="before")
    @classmethod
    def _str_id(cls, v: Any) -> Any:
        return v if isinstance(v, str) else str(v)

    @field_validator("wall", mode="before")
    @classmethod
    def _known_wall(cls, v: Any) -> Any:
        return _enum_value(v, WallSide, WallSide.FRONT)


class WallsConfig(_Snapshot):
    variant: WallVariant = WallVariant.CONTINUOUS
    height_mm: SoftFloat = 2400
    continuous: WallProfile = WallProfile(section=SectionProfile(w=50, h=100), spacing=400)
    panelized: WallProfile = WallProfile(section=SectionProfile(w=50, h=75))
    openings: list[Opening] = []

    @field_validator("variant", mode="before")
    @classmethod
    def _legacy_variant(cls, v: Any) -> Any:
        return _enum_value(v, WallVariant, WallVariant.CONTINUOUS)

    @property
    def profile(self) -> WallProfile:
        if self.variant is WallVariant.PANELIZED:
            return self.panelized
        return self.continuous


class SingleSlopeConfig(_Snapshot):
    """Bearing heights at the low (x=0) and high (x=frame width) edges."""
    min_height_mm: SoftOptionalFloat = None
    max_height_mm: SoftOptionalFloat = None


class GableConfig(_Snapshot):
    eaves_height_mm: SoftOptionalFloat = None


class RoofConfig(_Snapshot):
    style: RoofStyle = RoofStyle.SINGLE_SLOPE
    single_slope: SingleSlopeConfig = Field(default_factory=SingleSlopeConfig)
    gable: GableConfig = Field(default_factory=GableConfig)

    @field_validator("style", mode="before")
    @classmethod
    def _legacy_style(cls, v: Any) -> Any:
        return _enum_value(v, RoofStyle, RoofStyle.SINGLE_SLOPE)


class BuildingConfiguration(_Snapshot):
    """
    Read-only snapshot of everything the engines need.

    Owned by the caller; every generation pass reads it and never writes it.
    """
    dim_mode: DimensionMode = DimensionMode.BASE
    dim_gap_mm: SoftFloat = 50
    dim: Optional[FrameDims] = FrameDims()
    dim_inputs: DimensionInputs = DimensionInputs()
    overhang: OverhangConfig = OverhangConfig()
    walls: WallsConfig = WallsConfig()
    roof: RoofConfig = RoofConfig()

    @field_validator("dim_mode", mode="before")
    @classmethod
    def _legacy_mode(cls, v: Any) -> Any:
        return _enum_value(v, DimensionMode, DimensionMode.BASE)

    def openings_for(self, wall: WallSide) -> list[Opening]:
        """Enabled openings hosted by `wall`, in declaration order."""
        return [o for o in self.walls.openings if o.enabled and o.wall == wall]
