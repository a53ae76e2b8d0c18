"""Main frame generator: orchestrates resolution, analysis and rule execution."""

from __future__ import annotations
import logging

from shedframe.models import (
    BuildingConfiguration, BuildingContext, BuildingFrame, FrameParams, GenerationConfig,
)
from shedframe.core.analyzer import WallAnalyzer
from shedframe.core.dimensions import resolve_dimensions
from shedframe.core.registry import RuleRegistry

logger = logging.getLogger(__name__)


class FrameGenerator:
    """
    Stateless frame generator.

    Takes a configuration snapshot, resolves dimensions, runs analysis,
    executes applicable rules, and returns a complete BuildingFrame.
    Nothing is kept between calls.
    """

    def __init__(self, registry: RuleRegistry) -> None:
        self.registry = registry
        self.analyzer = WallAnalyzer()

    def generate(
        self,
        config: BuildingConfiguration,
        params: FrameParams,
        generation: GenerationConfig | None = None,
    ) -> BuildingFrame:
        if generation is None:
            generation = GenerationConfig()

        # Build context
        context = BuildingContext(
            config=config,
            params=params,
            generation=generation,
            dims=resolve_dimensions(config),
        )

        # Analysis phase: wall runs and door snapping
        self.analyzer.analyze(context)

        # Generation phase: run applicable rules
        rules = self.registry.get_applicable_rules(context)
        for rule in rules:
            members = rule.generate(context)
            logger.debug("Rule %s produced %d members", rule.get_id(), len(members))
            context.add_members(members)

        layouts = [context.door_layouts[w.id] for w in context.walls if w.id in context.door_layouts]
        return BuildingFrame(
            dimensions=context.dims,
            members=context.members,
            assemblies=context.assemblies,
            openings=[o for layout in layouts for o in layout.accepted],
            removed_openings=[i for layout in layouts for i in layout.removed],
            events=[e.message for layout in layouts for e in layout.events],
        )
