"""Form components: form, form-field."""

from __future__ import annotations

from engine.a2ui.components._helpers import base_attrs, bind_action
from engine.a2ui.schema import FormFieldNode, FormNode
from engine.a2ui.types import ActionHandler, RenderChildren
from engine.a2ui.view import Element


def render_form(node: FormNode, on_action: ActionHandler, render_children: RenderChildren) -> Element:
    el = Element("form", base_attrs(node, "a2ui-form"), render_children(node.children))
    if node.on_submit:
        bind_action(el, "submit", node.on_submit, on_action, prevent_default=True)
    return el


def render_form_field(node: FormFieldNode, on_action: ActionHandler, render_children: RenderChildren) -> Element:
    label: list[Element | str] = [node.label]
    if node.required:
        label.append(Element("span", {"class": "a2ui-required", "aria-hidden": "true"}, ["*"]))
    parts: list[Element] = [Element("label", {"class": "a2ui-label"}, label)]
    parts.extend(render_children(node.children))
    if node.error:
        parts.append(Element("p", {"class": "a2ui-field-error", "role": "alert"}, [node.error]))
    return Element("div", base_attrs(node, "a2ui-form-field", "a2ui-form-field--invalid" if node.error else None), parts)
