"""
A2UI — Component Registry Tests

Resolution, duplicate-registration priority, overrides, freezing of the
process-wide default and catalog coverage.
"""

import pytest

from engine.a2ui.registry import (
    OVERRIDE_PRIORITY,
    RegistryFrozenError,
    create_registry,
    get_default_registry,
)
from engine.a2ui.schema import NODE_TYPES, BadgeNode
from engine.a2ui.standard import get_configured_registry, initialize, setup_standard_registry
from engine.a2ui.view import Element


def render_a(node, on_action, render_children):
    return Element("a")


def render_b(node, on_action, render_children):
    return Element("b")


def render_c(node, on_action, render_children):
    return Element("c")


# ============================================================================
# Standard registry
# ============================================================================


class TestStandardRegistry:
    def test_every_tag_resolves(self):
        registry = get_default_registry()
        for node_type in NODE_TYPES:
            assert registry.resolve(node_type) is not None, node_type

    def test_has_fallback_and_catalog(self):
        registry = get_default_registry()
        assert registry.fallback is not None
        assert registry.catalog is not None
        assert registry.catalog.version == "0.8.0"

    def test_catalog_coverage_is_exact(self):
        assert get_default_registry().validate_catalog_coverage() == ([], [])

    def test_entries_carry_models(self):
        assert get_default_registry().entry("badge").model is BadgeNode

    def test_unknown_tag_gets_fallback(self):
        registry = get_default_registry()
        assert registry.resolve("sparkline") is None
        assert registry.get("sparkline") is registry.fallback

    def test_initialize_is_idempotent(self):
        assert initialize() is initialize() is get_default_registry()


class TestFrozenDefault:
    def test_default_is_frozen(self):
        registry = get_default_registry()
        assert registry.frozen
        with pytest.raises(RegistryFrozenError):
            registry.register("text", render_a)
        with pytest.raises(RegistryFrozenError):
            registry.unregister("text")
        with pytest.raises(RegistryFrozenError):
            registry.set_fallback(render_a)

    def test_clone_is_mutable_and_independent(self):
        default = get_default_registry()
        cloned = default.clone()
        assert not cloned.frozen
        cloned.register("text", render_a)
        assert cloned.resolve("text") is render_a
        assert default.resolve("text") is not render_a

    def test_configured_registry_is_fresh(self):
        registry = get_configured_registry()
        assert not registry.frozen
        assert len(registry) == len(NODE_TYPES)


# ============================================================================
# Duplicate registration
# ============================================================================


class TestPriority:
    def test_last_registration_wins(self):
        registry = create_registry()
        registry.register("x", render_a)
        registry.register("x", render_b)
        assert registry.resolve("x") is render_b

    def test_lower_priority_is_ignored(self):
        registry = create_registry()
        registry.register("x", render_a, priority=5)
        registry.register("x", render_b)
        assert registry.resolve("x") is render_a

    def test_equal_priority_replaces(self):
        registry = create_registry()
        registry.register("x", render_a, priority=5)
        registry.register("x", render_b, priority=5)
        assert registry.resolve("x") is render_b

    def test_override_beats_plain_registration(self):
        registry = create_registry()
        registry.register("x", render_a)
        registry.override("x", render_b)
        registry.register("x", render_c, source="custom")
        entry = registry.entry("x")
        assert entry.render is render_b
        assert entry.source == "override"
        assert entry.priority == OVERRIDE_PRIORITY

    def test_reregistration_keeps_model(self):
        registry = setup_standard_registry()
        registry.register("badge", render_a, source="custom")
        assert registry.entry("badge").model is BadgeNode

    def test_unknown_source_rejected(self):
        with pytest.raises(ValueError):
            create_registry().register("x", render_a, source="plugin")


# ============================================================================
# Introspection
# ============================================================================


class TestIntrospection:
    def test_unregister(self):
        registry = create_registry().register("x", render_a)
        registry.unregister("x")
        assert "x" not in registry
        assert registry.resolve("x") is None

    def test_info(self):
        registry = create_registry().register("x", render_a, source="custom", priority=3)
        assert registry.info() == [{"type": "x", "source": "custom", "priority": 3}]

    def test_coverage_reports_gaps(self):
        registry = setup_standard_registry()
        registry.unregister("badge")
        registry.register("sparkline", render_a, source="custom")
        missing, extra = registry.validate_catalog_coverage()
        assert missing == ["badge"]
        assert extra == ["sparkline"]

    def test_coverage_without_catalog(self):
        registry = create_registry().register("x", render_a)
        assert registry.validate_catalog_coverage() == ([], [])
