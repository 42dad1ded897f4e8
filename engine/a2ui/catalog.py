"""
A2UI — Component Catalog

Describes which components exist and what properties each accepts. The
standard catalog is derived from the schema models, so it cannot drift
from what the renderer actually parses.

The catalog is descriptive: the renderer never consults it. It backs the
/api/a2ui/catalog endpoint, registry coverage checks and validate_node_tree,
a lint for server-built trees.
"""

from __future__ import annotations

import types
import typing
from dataclasses import dataclass, field
from typing import Any, Literal, Union, get_args, get_origin

from pydantic import BaseModel

from engine.a2ui.schema import NODE_MODELS, Action, BaseNode, node_type_of, walk

CATALOG_ID = "standard"
CATALOG_NAME = "A2UI Standard Catalog"
CATALOG_VERSION = "0.8.0"

# Wire properties every node accepts.
COMMON_PROPERTIES: set[str] = {"type", "id", "style", "className"}


@dataclass
class PropertyDefinition:
    type: str
    required: bool = False
    description: str = ""
    enum: list[str] | None = None
    default: Any = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"type": self.type}
        if self.required:
            d["required"] = True
        if self.description:
            d["description"] = self.description
        if self.enum is not None:
            d["enum"] = list(self.enum)
        if self.default is not None:
            d["default"] = self.default
        return d


@dataclass
class ComponentDefinition:
    type: str
    description: str
    category: str
    properties: dict[str, PropertyDefinition] = field(default_factory=dict)
    supports_children: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "description": self.description,
            "category": self.category,
            "supportsChildren": self.supports_children,
            "properties": {name: prop.to_dict() for name, prop in self.properties.items()},
        }


@dataclass
class Catalog:
    id: str
    name: str
    version: str = "1.0.0"
    description: str = ""
    components: dict[str, ComponentDefinition] = field(default_factory=dict)

    def add(self, definition: ComponentDefinition) -> Catalog:
        self.components[definition.type] = definition
        return self

    def has(self, node_type: str) -> bool:
        return node_type in self.components

    def get(self, node_type: str) -> ComponentDefinition | None:
        return self.components.get(node_type)

    def types(self) -> list[str]:
        return list(self.components)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "version": self.version,
            "description": self.description,
            "components": [d.to_dict() for d in self.components.values()],
        }


def create_catalog(id: str, name: str, version: str = "1.0.0", description: str = "") -> Catalog:
    return Catalog(id=id, name=name, version=version, description=description)


# ---------------------------------------------------------------------------
# Model → definition
# ---------------------------------------------------------------------------


def _property_type(annotation: Any) -> tuple[str, list[str] | None]:
    origin = get_origin(annotation)
    args = get_args(annotation)

    if origin is typing.Annotated:
        return _property_type(args[0])
    if origin in (Union, types.UnionType):
        members = [a for a in args if a is not type(None)]
        if len(members) == 1:
            return _property_type(members[0])
        kinds = {_property_type(m)[0] for m in members}
        return ("number", None) if kinds == {"number"} else ("string", None)
    if origin is Literal:
        return "string", [str(a) for a in args]
    if origin in (list, tuple, set):
        return "array", None
    if origin is dict:
        return "object", None
    if annotation is bool:
        return "boolean", None
    if annotation in (int, float):
        return "number", None
    if annotation is str:
        return "string", None
    if isinstance(annotation, type) and issubclass(annotation, Action):
        return "action", None
    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return "object", None
    return "object", None


def definition_from_model(node_type: str, model: type[BaseNode]) -> ComponentDefinition:
    """Build a catalog entry from a schema model's fields."""
    properties: dict[str, PropertyDefinition] = {}
    for name, info in model.model_fields.items():
        if name in ("type", "id", "class_name", "children"):
            continue
        wire_name = info.alias or name
        prop_type, enum = _property_type(info.annotation)
        default = None
        if info.default_factory is None and not info.is_required():
            default = info.default
        properties[wire_name] = PropertyDefinition(
            type=prop_type,
            required=wire_name in model.required_props,
            description=info.description or "",
            enum=enum,
            default=default,
        )
    return ComponentDefinition(
        type=node_type,
        description=model.summary,
        category=model.category,
        properties=properties,
        supports_children=model.supports_children,
    )


def create_standard_catalog() -> Catalog:
    catalog = create_catalog(
        CATALOG_ID,
        CATALOG_NAME,
        version=CATALOG_VERSION,
        description="Layout, content, interactive, form, feedback and extension components",
    )
    for node_type, model in NODE_MODELS.items():
        catalog.add(definition_from_model(node_type, model))
    return catalog


def merge_catalogs(base: Catalog, extension: Catalog) -> Catalog:
    """New catalog with base components, overridden/extended by `extension`."""
    merged = create_catalog(extension.id, extension.name, extension.version, extension.description)
    merged.components.update(base.components)
    merged.components.update(extension.components)
    return merged


# ---------------------------------------------------------------------------
# Lint
# ---------------------------------------------------------------------------


def validate_node_tree(tree: Any, catalog: Catalog) -> list[str]:
    """
    Check a raw tree against a catalog. Returns human-readable problems,
    empty when the tree is clean. Never raises.
    """
    problems: list[str] = []
    for index, raw in enumerate(walk(tree)):
        node_type = node_type_of(raw)
        label = f"node[{index}]"
        if raw.get("id"):
            label = f"{label}#{raw['id']}"
        if node_type is None:
            problems.append(f"{label}: missing type")
            continue
        definition = catalog.get(node_type)
        if definition is None:
            problems.append(f"{label}: unknown type {node_type!r}")
            continue
        for prop_name, prop in definition.properties.items():
            if prop.required and prop_name not in raw:
                problems.append(f"{label} ({node_type}): missing required property {prop_name!r}")
        for key, value in raw.items():
            if key in COMMON_PROPERTIES or key == "children":
                continue
            prop = definition.properties.get(key)
            if prop is None:
                problems.append(f"{label} ({node_type}): unknown property {key!r}")
            elif prop.enum is not None and value is not None and str(value) not in prop.enum:
                problems.append(f"{label} ({node_type}): {key}={value!r} not in {prop.enum}")
        if "children" in raw and not definition.supports_children:
            problems.append(f"{label} ({node_type}): does not accept children")
    return problems
