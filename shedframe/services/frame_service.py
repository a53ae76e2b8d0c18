"""High-level frame generation service: facade for the API layer."""

from __future__ import annotations
import logging
from typing import Any, Mapping, Optional, Union

from shedframe.bom.aggregator import build_cutting_list
from shedframe.models import (
    BOMRow, BuildingConfiguration, BuildingFrame, FrameParams, GenerationConfig,
    ResolvedDimensions,
)
from shedframe.core.dimensions import resolve_dimensions
from shedframe.core.generator import FrameGenerator
from shedframe.core.registry import RuleRegistry, create_default_registry

logger = logging.getLogger(__name__)

ConfigInput = Optional[Union[BuildingConfiguration, Mapping[str, Any]]]


def to_configuration(config: ConfigInput) -> BuildingConfiguration:
    """Accept a validated configuration or a plain snapshot dict."""
    if config is None:
        return BuildingConfiguration()
    if isinstance(config, BuildingConfiguration):
        return config
    return BuildingConfiguration.model_validate(dict(config))


class FrameService:
    """Normalises input, delegates to the generator, post-processes output."""

    def __init__(self, registry: RuleRegistry | None = None) -> None:
        self.registry = registry or create_default_registry()
        self.generator = FrameGenerator(self.registry)

    def generate(
        self,
        config: ConfigInput = None,
        params: FrameParams | None = None,
        generation: GenerationConfig | None = None,
    ) -> BuildingFrame:
        if params is None:
            params = FrameParams()
        if generation is None:
            generation = GenerationConfig()

        frame = self.generator.generate(to_configuration(config), params, generation)
        if frame.removed_openings:
            logger.info("Removed doors: %s", ", ".join(frame.removed_openings))
        return frame

    def dimensions(self, config: ConfigInput = None) -> ResolvedDimensions:
        return resolve_dimensions(to_configuration(config))

    def cutting_list(
        self,
        config: ConfigInput = None,
        params: FrameParams | None = None,
        generation: GenerationConfig | None = None,
    ) -> list[BOMRow]:
        return build_cutting_list(self.generate(config, params, generation))

    def list_rules(self) -> list[dict[str, str]]:
        return [
            {"id": r.get_id(), "name": r.get_name(), "category": r.category}
            for r in self.registry.list_rules()
        ]
