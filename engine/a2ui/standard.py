"""
A2UI — Standard registry setup

Registers every standard component with its schema model, installs the
visible unknown-component fallback and attaches the standard catalog.
"""

from __future__ import annotations

import logging

from engine.a2ui.catalog import create_standard_catalog
from engine.a2ui.components import STANDARD_COMPONENTS, render_unknown
from engine.a2ui.registry import ComponentRegistry, create_registry, get_default_registry
from engine.a2ui.schema import NODE_MODELS

logger = logging.getLogger(__name__)


def setup_standard_registry(registry: ComponentRegistry | None = None) -> ComponentRegistry:
    """Register the standard components into `registry` (a new one if omitted)."""
    registry = registry if registry is not None else create_registry()
    for node_type, render in STANDARD_COMPONENTS.items():
        registry.register(node_type, render, source="standard", model=NODE_MODELS[node_type])
    registry.set_fallback(render_unknown)
    registry.set_catalog(create_standard_catalog())

    missing, extra = registry.validate_catalog_coverage()
    if missing or extra:
        logger.warning("a2ui: catalog coverage mismatch: missing=%s extra=%s", missing, extra)
    return registry


def initialize() -> ComponentRegistry:
    """Build (once) and return the frozen process-wide registry. Safe to call repeatedly."""
    return get_default_registry()


def get_configured_registry() -> ComponentRegistry:
    """A fresh, mutable standard registry for callers that register custom components."""
    return setup_standard_registry()
