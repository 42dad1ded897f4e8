"""
A2UI — Component Registry

Maps node `type` tags to render functions. Resolution is a plain dict
lookup; there is no inheritance between components.

Duplicate registration: the newest registration wins when its priority is
greater than or equal to the existing one (default priority 0, so plain
re-registration replaces). Lower-priority registrations are ignored.
override() registers at priority 100.

The process-wide default registry is built once, frozen, and read-only
afterwards. clone() gives a mutable copy for callers that need a variant.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from engine.a2ui.types import SOURCES, RenderFn

if TYPE_CHECKING:
    from engine.a2ui.catalog import Catalog
    from engine.a2ui.schema import BaseNode

logger = logging.getLogger(__name__)

OVERRIDE_PRIORITY = 100


class RegistryFrozenError(RuntimeError):
    """Raised when a frozen registry is mutated."""


@dataclass(frozen=True)
class RegistryEntry:
    render: RenderFn
    priority: int = 0
    source: str = "standard"
    model: type[BaseNode] | None = None


class ComponentRegistry:
    """Tag → render function table."""

    def __init__(self) -> None:
        self._entries: dict[str, RegistryEntry] = {}
        self._fallback: RenderFn | None = None
        self._catalog: Catalog | None = None
        self._frozen = False

    # -- mutation -------------------------------------------------------

    def register(
        self,
        node_type: str,
        render: RenderFn,
        *,
        priority: int = 0,
        source: str = "standard",
        model: type[BaseNode] | None = None,
    ) -> ComponentRegistry:
        self._check_mutable()
        if source not in SOURCES:
            raise ValueError(f"Unknown registry source: {source!r}. Valid sources: {sorted(SOURCES)}")
        existing = self._entries.get(node_type)
        if existing is not None and priority < existing.priority:
            logger.debug(
                "a2ui: ignoring %s registration for %r (priority %d < %d)",
                source,
                node_type,
                priority,
                existing.priority,
            )
            return self
        if model is None and existing is not None:
            model = existing.model
        self._entries[node_type] = RegistryEntry(render=render, priority=priority, source=source, model=model)
        return self

    def override(self, node_type: str, render: RenderFn, *, model: type[BaseNode] | None = None) -> ComponentRegistry:
        return self.register(node_type, render, priority=OVERRIDE_PRIORITY, source="override", model=model)

    def unregister(self, node_type: str) -> ComponentRegistry:
        self._check_mutable()
        self._entries.pop(node_type, None)
        return self

    def set_fallback(self, render: RenderFn) -> ComponentRegistry:
        self._check_mutable()
        self._fallback = render
        return self

    def set_catalog(self, catalog: Catalog) -> ComponentRegistry:
        self._check_mutable()
        self._catalog = catalog
        return self

    def freeze(self) -> ComponentRegistry:
        self._frozen = True
        return self

    # -- lookup ---------------------------------------------------------

    def resolve(self, node_type: str) -> RenderFn | None:
        """The render function registered for a tag, or None."""
        entry = self._entries.get(node_type)
        return entry.render if entry else None

    def entry(self, node_type: str) -> RegistryEntry | None:
        return self._entries.get(node_type)

    def get(self, node_type: str) -> RenderFn | None:
        """Registered render function, else the fallback."""
        return self.resolve(node_type) or self._fallback

    def has(self, node_type: str) -> bool:
        return node_type in self._entries

    @property
    def fallback(self) -> RenderFn | None:
        return self._fallback

    @property
    def catalog(self) -> Catalog | None:
        return self._catalog

    @property
    def frozen(self) -> bool:
        return self._frozen

    def registered_types(self) -> list[str]:
        return list(self._entries)

    def info(self) -> list[dict[str, Any]]:
        return [
            {"type": node_type, "source": entry.source, "priority": entry.priority}
            for node_type, entry in self._entries.items()
        ]

    def validate_catalog_coverage(self) -> tuple[list[str], list[str]]:
        """(catalog tags with no renderer, registered tags missing from the catalog)."""
        if self._catalog is None:
            return [], []
        catalog_types = self._catalog.types()
        missing = [t for t in catalog_types if not self.has(t)]
        extra = [t for t in self._entries if not self._catalog.has(t)]
        return missing, extra

    def clone(self) -> ComponentRegistry:
        """Unfrozen copy with the same entries, fallback and catalog."""
        cloned = ComponentRegistry()
        cloned._entries = {t: replace(e) for t, e in self._entries.items()}
        cloned._fallback = self._fallback
        cloned._catalog = self._catalog
        return cloned

    def __contains__(self, node_type: object) -> bool:
        return node_type in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def _check_mutable(self) -> None:
        if self._frozen:
            raise RegistryFrozenError("Registry is frozen; clone() it to customise components")


def create_registry() -> ComponentRegistry:
    return ComponentRegistry()


# ---------------------------------------------------------------------------
# Process-wide default
# ---------------------------------------------------------------------------

_default_registry: ComponentRegistry | None = None
_default_lock = threading.Lock()


def get_default_registry() -> ComponentRegistry:
    """The standard registry, built and frozen on first use."""
    global _default_registry
    if _default_registry is None:
        with _default_lock:
            if _default_registry is None:
                from engine.a2ui.standard import setup_standard_registry

                _default_registry = setup_standard_registry().freeze()
                logger.info("a2ui: default registry initialised with %d components", len(_default_registry))
    return _default_registry


def set_default_registry(registry: ComponentRegistry) -> None:
    """Install a registry as the process default. Meant for startup only."""
    global _default_registry
    with _default_lock:
        _default_registry = registry.freeze()
