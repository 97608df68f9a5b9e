"""Rule registry and discovery."""

from __future__ import annotations

import importlib
import logging
import pkgutil
from typing import Iterator

from catchlint.rules.protocol import Rule, RuleMeta

logger = logging.getLogger(__name__)

PLUGIN_PREFIX = "catchlint"

# Shareable presets, keyed by preset name
CONFIGS: dict[str, dict] = {
    "all": {
        "rules": {
            f"{PLUGIN_PREFIX}/no-unhandled-catch": "error",
        },
    },
}


class RuleRegistry:
    """Registry for lint rules."""

    def __init__(self) -> None:
        self._rules: dict[str, Rule] = {}

    def register(self, rule: Rule) -> None:
        """Register a rule instance."""
        if rule.name in self._rules:
            logger.warning("Rule %s registered twice; keeping the latest", rule.name)
        self._rules[rule.name] = rule

    def get(self, name: str) -> Rule | None:
        """Get a rule by name, with or without the plugin prefix."""
        prefix = f"{PLUGIN_PREFIX}/"
        if name.startswith(prefix):
            name = name[len(prefix):]
        return self._rules.get(name)

    def all_rules(self) -> Iterator[Rule]:
        """Iterate over all registered rules."""
        yield from self._rules.values()

    def names(self) -> list[str]:
        return sorted(self._rules)


# Global registry instance
_registry: RuleRegistry | None = None


def get_registry() -> RuleRegistry:
    """Get the global rule registry, initializing if needed."""
    global _registry
    if _registry is None:
        _registry = RuleRegistry()
        _discover_builtin_rules(_registry)
    return _registry


def reset_registry() -> None:
    """Reset the global registry. Useful for testing."""
    global _registry
    _registry = None


def _discover_builtin_rules(registry: RuleRegistry) -> None:
    """Discover and register all builtin rules."""
    from catchlint.rules import builtin

    for _, module_name, _ in pkgutil.iter_modules(builtin.__path__):
        module = importlib.import_module(f"catchlint.rules.builtin.{module_name}")

        # Look for a create_rule() function or a Rule class
        if hasattr(module, "create_rule"):
            registry.register(module.create_rule())
        elif hasattr(module, "Rule"):
            registry.register(module.Rule())
        else:
            logger.debug("Builtin module %s defines no rule", module_name)


__all__ = [
    "CONFIGS",
    "PLUGIN_PREFIX",
    "Rule",
    "RuleMeta",
    "RuleRegistry",
    "get_registry",
    "reset_registry",
]
