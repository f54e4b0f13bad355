"""
Feature Onboarding Registry

Holds the onboarding plugins known to the process and produces the
dependency-respecting order in which they run. Misconfiguration (duplicate
codes, unknown dependencies, cycles) is logged and tolerated so that one bad
plugin never blocks a tenant registration.
"""

import logging
from typing import Dict, Iterable, List, Optional, Set

from ..entities.protocols import FeatureOnboardingPlugin

logger = logging.getLogger(__name__)


class FeatureOnboardingRegistry:
    """Registry of onboarding plugins keyed by feature code."""

    def __init__(self):
        self._plugins: Dict[str, FeatureOnboardingPlugin] = {}

    def register(self, plugin: FeatureOnboardingPlugin) -> None:
        """Register a plugin, replacing any plugin with the same feature code."""
        if plugin.feature_code in self._plugins:
            logger.warning(
                f"Onboarding plugin for '{plugin.feature_code}' already registered, replacing",
                extra={"feature_code": plugin.feature_code}
            )

        # A replacement keeps the original registration position
        self._plugins[plugin.feature_code] = plugin
        logger.debug(f"Registered onboarding plugin {plugin.name} ({plugin.feature_code})")

    def unregister(self, feature_code: str) -> bool:
        """Remove a plugin. Returns whether one was registered."""
        return self._plugins.pop(feature_code, None) is not None

    def get(self, feature_code: str) -> Optional[FeatureOnboardingPlugin]:
        return self._plugins.get(feature_code)

    def has(self, feature_code: str) -> bool:
        return feature_code in self._plugins

    def get_all(self) -> List[FeatureOnboardingPlugin]:
        """All plugins in registration order."""
        return list(self._plugins.values())

    def get_all_sorted(self) -> List[FeatureOnboardingPlugin]:
        """All plugins in execution order.

        Plugins are ordered by ascending priority, then moved so that every
        plugin comes after the registered plugins it depends on.
        """
        by_priority = sorted(self._plugins.values(), key=lambda p: p.priority)
        return self._topological_sort(by_priority)

    def get_plugins_for_features(self, feature_codes: Iterable[str]) -> List[FeatureOnboardingPlugin]:
        """Plugins whose feature code is in ``feature_codes``, in execution order."""
        wanted = set(feature_codes)
        return [plugin for plugin in self.get_all_sorted() if plugin.feature_code in wanted]

    def clear(self) -> None:
        self._plugins.clear()

    def get_registered_feature_codes(self) -> List[str]:
        return list(self._plugins.keys())

    def _topological_sort(self, plugins: List[FeatureOnboardingPlugin]) -> List[FeatureOnboardingPlugin]:
        """Depth-first sort that breaks cycles at the repeated node."""
        visited: Set[str] = set()
        visiting: Set[str] = set()
        result: List[FeatureOnboardingPlugin] = []

        def visit(plugin: FeatureOnboardingPlugin) -> None:
            code = plugin.feature_code
            if code in visited:
                return
            if code in visiting:
                logger.warning(
                    f"Circular onboarding dependency detected at '{code}'",
                    extra={"feature_code": code}
                )
                return

            visiting.add(code)
            for dependency_code in plugin.dependencies:
                dependency = self._plugins.get(dependency_code)
                # Only follow dependencies that have a registered plugin
                if dependency is not None:
                    visit(dependency)
            visiting.discard(code)

            visited.add(code)
            result.append(plugin)

        for plugin in plugins:
            visit(plugin)

        return result
