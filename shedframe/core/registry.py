"""Rule registry: holds the wall and roof rules and orders them for a pass."""

from __future__ import annotations
import logging

from shedframe.models.context import BuildingContext
from shedframe.rules.base import FramingRule

logger = logging.getLogger(__name__)


class RuleRegistry:
    """
    Rules keyed by id.

    For each generation pass the registry filters the rules by the
    `GenerationConfig` switches and by `applies()`, then orders them by
    priority with declared dependencies first.
    """

    def __init__(self) -> None:
        self._rules: dict[str, FramingRule] = {}

    def register(self, rule: FramingRule) -> None:
        rule_id = rule.get_id()
        if rule_id in self._rules:
            logger.warning("Replacing registered rule %s", rule_id)
        self._rules[rule_id] = rule

    def unregister(self, rule_id: str) -> None:
        self._rules.pop(rule_id, None)

    def get_rule(self, rule_id: str) -> FramingRule | None:
        return self._rules.get(rule_id)

    def list_rules(self) -> list[FramingRule]:
        """Registered rules in registration order."""
        return list(self._rules.values())

    def get_applicable_rules(self, context: BuildingContext) -> list[FramingRule]:
        generation = context.generation
        for rule_id in [*generation.enabled_rules, *generation.disabled_rules]:
            if rule_id not in self._rules:
                logger.warning("Unknown rule id in generation config: %s", rule_id)

        selected = [
            rule for rule_id, rule in self._rules.items()
            if (not generation.enabled_rules or rule_id in generation.enabled_rules)
            and rule_id not in generation.disabled_rules
        ]
        active = sorted((r for r in selected if r.applies(context)), key=lambda r: r.priority)
        ordered = self._with_dependencies_first(active)
        logger.debug("Active rules: %s", ", ".join(r.get_id() for r in ordered) or "none")
        return ordered

    def _with_dependencies_first(self, rules: list[FramingRule]) -> list[FramingRule]:
        """Depth-first order; dependencies outside `rules` are ignored."""
        by_id = {r.get_id(): r for r in rules}
        seen: set[str] = set()
        ordered: list[FramingRule] = []

        def visit(rule: FramingRule) -> None:
            rule_id = rule.get_id()
            if rule_id in seen:
                return
            seen.add(rule_id)
            for dep in rule.dependencies:
                if dep in by_id:
                    visit(by_id[dep])
            ordered.append(rule)

        for r in rules:
            visit(r)
        return ordered


def create_default_registry() -> RuleRegistry:
    """Both wall variants and both roof styles."""
    from shedframe.rules.wall.continuous import ContinuousWallFramingRule
    from shedframe.rules.wall.panelized import PanelizedWallFramingRule
    from shedframe.rules.roof.single_slope import SingleSlopeRoofRule
    from shedframe.rules.roof.gable import GableRoofRule

    registry = RuleRegistry()
    for rule in (
        ContinuousWallFramingRule(),
        PanelizedWallFramingRule(),
        SingleSlopeRoofRule(),
        GableRoofRule(),
    ):
        registry.register(rule)
    return registry
