"""
A2UI — declarative, server-driven UI.

  schema    — node models, lenient parsing, JSON (de)serialisation
  catalog   — component/property definitions and tree linting
  registry  — tag → render function table, frozen process default
  renderer  — tree → Element view tree / HTML page
  view      — Element tree with in-process event dispatch
  actions   — ActionRouter, the usual on_action for a host page
  builders  — shared card / empty / loading layouts
"""

from engine.a2ui.actions import ActionRouter, UnknownActionError
from engine.a2ui.builders import build_standard_card, create_empty_state, create_loading_state
from engine.a2ui.catalog import Catalog, create_catalog, create_standard_catalog, merge_catalogs, validate_node_tree
from engine.a2ui.registry import (
    ComponentRegistry,
    RegistryFrozenError,
    create_registry,
    get_default_registry,
    set_default_registry,
)
from engine.a2ui.renderer import Renderer, render, render_document, render_html
from engine.a2ui.schema import NODE_MODELS, NODE_TYPES, Action, BaseNode, dumps, loads, parse_action, parse_node
from engine.a2ui.standard import get_configured_registry, initialize, setup_standard_registry
from engine.a2ui.types import RenderOptions
from engine.a2ui.view import Element, Event

__all__ = [
    "Action",
    "ActionRouter",
    "BaseNode",
    "Catalog",
    "ComponentRegistry",
    "Element",
    "Event",
    "NODE_MODELS",
    "NODE_TYPES",
    "RegistryFrozenError",
    "RenderOptions",
    "Renderer",
    "UnknownActionError",
    "build_standard_card",
    "create_catalog",
    "create_empty_state",
    "create_loading_state",
    "create_registry",
    "create_standard_catalog",
    "dumps",
    "get_configured_registry",
    "get_default_registry",
    "initialize",
    "loads",
    "merge_catalogs",
    "parse_action",
    "parse_node",
    "render",
    "render_document",
    "render_html",
    "set_default_registry",
    "setup_standard_registry",
    "validate_node_tree",
]
