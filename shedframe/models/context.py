"""Building context: accumulates state during frame generation."""

from __future__ import annotations
from pydantic import BaseModel, Field

from .building import BuildingConfiguration, WallSide
from .dimensions import ResolvedDimensions
from .framing import AssemblyPlacement, Member
from .layout import DoorLayout, WallRun
from .parameters import FrameParams, GenerationConfig


class BuildingContext(BaseModel):
    """
    Holds all state during a single frame generation pass.

    The resolver fills `dims`, the analyzer adds wall runs and door layouts,
    rules add generated members and assembly placements.
    """
    # Input
    config: BuildingConfiguration
    params: FrameParams = Field(default_factory=FrameParams)
    generation: GenerationConfig = Field(default_factory=GenerationConfig)
    dims: ResolvedDimensions

    # Analysis results (populated by analyzers)
    walls: list[WallRun] = []
    door_layouts: dict[WallSide, DoorLayout] = {}

    # Output (populated by rules)
    members: list[Member] = []
    assemblies: list[AssemblyPlacement] = []

    def add_members(self, members: list[Member]) -> None:
        self.members.extend(members)

    def get_wall(self, wall_id: WallSide) -> WallRun | None:
        for w in self.walls:
            if w.id == wall_id:
                return w
        return None

    def doors_on(self, wall_id: WallSide) -> DoorLayout:
        layout = self.door_layouts.get(wall_id)
        if layout is None:
            wall = self.get_wall(wall_id)
            return DoorLayout(wall=wall_id, wall_length_mm=wall.length_mm if wall else 0)
        return layout
