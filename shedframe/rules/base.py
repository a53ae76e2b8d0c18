"""Framing rule interface.

A rule owns one part of the building (the walls of one variant, or one roof
style). The registry decides which rules run; each rule reads the resolved
dimensions and wall layout from the context and returns its members.
"""

from __future__ import annotations
from abc import ABC, abstractmethod

from shedframe.models.context import BuildingContext
from shedframe.models.framing import Member


class FramingRule(ABC):
    """
    Base class for wall and roof rules.

    Rules are stateless; anything that outlives one `generate()` call goes
    on the context.
    """

    # Lower runs first
    priority: int = 100

    # Rules that must run before this one when both apply
    dependencies: list[str] = []

    @abstractmethod
    def get_id(self) -> str:
        """Dotted identifier, e.g. 'wall.continuous' or 'roof.gable'."""
        ...

    @abstractmethod
    def get_name(self) -> str:
        ...

    @property
    def category(self) -> str:
        """Building part the rule frames: the id prefix ('wall', 'roof')."""
        return self.get_id().split(".", 1)[0]

    @abstractmethod
    def applies(self, context: BuildingContext) -> bool:
        """True when the configuration selects this rule's variant or style."""
        ...

    @abstractmethod
    def generate(self, context: BuildingContext) -> list[Member]:
        """
        Members for this part of the building.

        Wall rules return world-space members. Roof rules return members in
        their unit's local space and append the unit's placement to
        `context.assemblies`.
        """
        ...
