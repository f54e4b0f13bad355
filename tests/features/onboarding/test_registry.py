"""Tests for FeatureOnboardingRegistry."""

import logging

import pytest

from flock_commons.features.onboarding.services.registry import FeatureOnboardingRegistry


def codes(plugins):
    return [p.feature_code for p in plugins]


@pytest.fixture
def registry():
    return FeatureOnboardingRegistry()


class TestRegistration:
    """Tests for register/unregister/lookup."""

    def test_register_and_lookup(self, registry, make_plugin):
        plugin = make_plugin("members.core")

        registry.register(plugin)

        assert registry.has("members.core")
        assert registry.get("members.core") is plugin
        assert registry.get("finance.core") is None
        assert registry.get_registered_feature_codes() == ["members.core"]

    def test_get_all_returns_registration_order(self, registry, make_plugin):
        for code, priority in [("c", 1), ("a", 50), ("b", 10)]:
            registry.register(make_plugin(code, priority=priority))

        assert codes(registry.get_all()) == ["c", "a", "b"]

    def test_duplicate_registration_replaces_and_warns(self, registry, make_plugin, caplog):
        first = make_plugin("members.core")
        second = make_plugin("members.core")
        registry.register(make_plugin("events.core"))
        registry.register(first)

        with caplog.at_level(logging.WARNING):
            registry.register(second)

        assert registry.get("members.core") is second
        assert len(registry.get_all()) == 2
        assert "already registered" in caplog.text

    def test_replacement_keeps_original_position(self, registry, make_plugin):
        registry.register(make_plugin("a"))
        registry.register(make_plugin("b"))
        registry.register(make_plugin("a"))

        assert registry.get_registered_feature_codes() == ["a", "b"]

    def test_unregister(self, registry, make_plugin):
        registry.register(make_plugin("members.core"))

        assert registry.unregister("members.core") is True
        assert registry.unregister("members.core") is False
        assert not registry.has("members.core")

    def test_clear(self, registry, make_plugin):
        registry.register(make_plugin("a"))
        registry.register(make_plugin("b"))

        registry.clear()

        assert registry.get_all() == []
        assert registry.get_all_sorted() == []


class TestSorting:
    """Tests for priority and dependency ordering."""

    def test_sorted_by_ascending_priority(self, registry, make_plugin):
        registry.register(make_plugin("low", priority=50))
        registry.register(make_plugin("high", priority=10))
        registry.register(make_plugin("mid", priority=20))

        assert codes(registry.get_all_sorted()) == ["high", "mid", "low"]

    def test_priority_ties_keep_registration_order(self, registry, make_plugin):
        registry.register(make_plugin("second", priority=10))
        registry.register(make_plugin("first", priority=5))
        registry.register(make_plugin("third", priority=10))

        assert codes(registry.get_all_sorted()) == ["first", "second", "third"]

    def test_dependency_runs_before_dependent_regardless_of_priority(self, registry, make_plugin):
        registry.register(make_plugin("finance.core", priority=1, dependencies=["members.core"]))
        registry.register(make_plugin("members.core", priority=99))

        assert codes(registry.get_all_sorted()) == ["members.core", "finance.core"]

    def test_dependency_overrides_lower_priority_value(self, registry, make_plugin):
        registry.register(make_plugin("a", priority=10))
        registry.register(make_plugin("b", priority=5, dependencies=["a"]))

        assert codes(registry.get_all_sorted()) == ["a", "b"]

    def test_transitive_dependencies(self, registry, make_plugin):
        registry.register(make_plugin("c", priority=1, dependencies=["b"]))
        registry.register(make_plugin("b", priority=2, dependencies=["a"]))
        registry.register(make_plugin("a", priority=3))

        assert codes(registry.get_all_sorted()) == ["a", "b", "c"]

    def test_unregistered_dependencies_are_ignored(self, registry, make_plugin):
        registry.register(make_plugin("finance.core", priority=1, dependencies=["not.registered"]))
        registry.register(make_plugin("members.core", priority=2))

        assert codes(registry.get_all_sorted()) == ["finance.core", "members.core"]

    def test_every_plugin_after_its_dependencies(self, registry, make_plugin):
        registry.register(make_plugin("reports", priority=1, dependencies=["finance", "members"]))
        registry.register(make_plugin("finance", priority=5, dependencies=["members"]))
        registry.register(make_plugin("events", priority=3))
        registry.register(make_plugin("members", priority=10))

        order = codes(registry.get_all_sorted())

        assert sorted(order) == ["events", "finance", "members", "reports"]
        for plugin in registry.get_all():
            for dependency in plugin.dependencies:
                assert order.index(dependency) < order.index(plugin.feature_code)

    def test_cycle_terminates_and_includes_each_plugin_once(self, registry, make_plugin, caplog):
        registry.register(make_plugin("a", priority=1, dependencies=["b"]))
        registry.register(make_plugin("b", priority=2, dependencies=["a"]))
        registry.register(make_plugin("c", priority=3))

        with caplog.at_level(logging.WARNING):
            order = codes(registry.get_all_sorted())

        assert sorted(order) == ["a", "b", "c"]
        assert len(order) == 3
        assert "Circular onboarding dependency" in caplog.text

    def test_self_dependency_does_not_loop(self, registry, make_plugin):
        registry.register(make_plugin("a", dependencies=["a"]))

        assert codes(registry.get_all_sorted()) == ["a"]


class TestFeatureFiltering:
    """Tests for get_plugins_for_features."""

    def test_filters_and_preserves_sorted_order(self, registry, make_plugin):
        registry.register(make_plugin("finance.core", priority=1, dependencies=["members.core"]))
        registry.register(make_plugin("members.core", priority=10))
        registry.register(make_plugin("events.core", priority=5))

        selected = registry.get_plugins_for_features(["finance.core", "members.core"])

        assert codes(selected) == ["members.core", "finance.core"]

    def test_unknown_feature_codes_select_nothing(self, registry, make_plugin):
        registry.register(make_plugin("members.core"))

        assert registry.get_plugins_for_features(["unknown"]) == []
        assert registry.get_plugins_for_features([]) == []
