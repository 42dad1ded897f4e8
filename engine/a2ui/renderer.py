"""
A2UI — Renderer

(tree, on_action, registry) → Element view tree.

Each node is looked up in the registry by its `type` tag, validated
against the registered model and handed to the render function together
with the page-level on_action callback and a render_children callback.
Containers never recurse on their own; they get their rendered children
from render_children, which is also what isolates failures per node.

Failure handling:
- unknown tag, or no usable `type` → registry fallback (visible box), warning logged
- render function raises → visible error box for that node only, exception logged
- action handler raises during event dispatch → propagates to the caller

render_document wraps the rendered tree in a complete HTML page with the
tree JSON embedded and a small script that posts actions back to the host.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from engine.a2ui.components.fallback import render_error, render_unknown
from engine.a2ui.registry import ComponentRegistry, get_default_registry
from engine.a2ui.schema import BaseNode, node_type_of, parse_node, to_jsonable
from engine.a2ui.types import MISSING_TYPE, ActionHandler, RenderOptions, noop_action
from engine.a2ui.view import Element, escape, fragment

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Renderer
# ---------------------------------------------------------------------------


class Renderer:
    """Renders A2UI trees against one registry and one action handler."""

    def __init__(self, registry: ComponentRegistry | None = None, on_action: ActionHandler | None = None):
        self.registry = registry if registry is not None else get_default_registry()
        self.on_action = on_action or noop_action

    def render(self, tree: Any) -> Element:
        """Render a node, or a list of nodes in document order inside a fragment."""
        if isinstance(tree, (list, tuple)):
            return fragment(self.render_children(tree))
        return self._render_node(tree)

    def render_children(self, children: Any) -> list[Element]:
        if children is None:
            return []
        if isinstance(children, (list, tuple)):
            return [self._render_node(child) for child in children]
        return [self._render_node(children)]

    def _render_node(self, data: Any) -> Element:
        node_type = node_type_of(data)
        if node_type is None:
            logger.warning("a2ui: node without a type: %r", _preview(data))
            return self._render_fallback(BaseNode(type=MISSING_TYPE))

        entry = self.registry.entry(node_type)
        if entry is None:
            logger.warning("a2ui: unknown component type %r", node_type)
            return self._render_fallback(parse_node(data, BaseNode))

        try:
            node = parse_node(data, entry.model)
            return entry.render(node, self.on_action, self.render_children)
        except Exception as exc:
            logger.exception("a2ui: component %r failed to render", node_type)
            return render_error(node_type, str(exc))

    def _render_fallback(self, node: BaseNode) -> Element:
        fallback = self.registry.fallback or render_unknown
        try:
            return fallback(node, self.on_action, self.render_children)
        except Exception as exc:
            logger.exception("a2ui: fallback failed for %r", node.type)
            return render_error(node.type, str(exc))


def _preview(data: Any, limit: int = 80) -> str:
    text = repr(data)
    return text if len(text) <= limit else text[: limit - 3] + "..."


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def render(
    tree: Any,
    on_action: ActionHandler | None = None,
    registry: ComponentRegistry | None = None,
) -> Element:
    """Render a node or list of nodes to an Element tree."""
    return Renderer(registry=registry, on_action=on_action).render(tree)


def render_html(
    tree: Any,
    on_action: ActionHandler | None = None,
    registry: ComponentRegistry | None = None,
) -> str:
    """Render a node or list of nodes to an HTML fragment."""
    return render(tree, on_action=on_action, registry=registry).to_html()


def render_document(
    tree: Any,
    options: RenderOptions | None = None,
    registry: ComponentRegistry | None = None,
) -> str:
    """
    Render a complete HTML page.
    Same input → same output. Actions are posted by the page script to
    options.action_url as {"action", "args"}.
    """
    opts = options or RenderOptions()
    parts: list[str] = []

    parts.append("<!DOCTYPE html>")
    parts.append(f'<html lang="{escape(opts.lang)}">')
    parts.append("<head>")
    parts.append('  <meta charset="utf-8">')
    parts.append('  <meta name="viewport" content="width=device-width, initial-scale=1">')
    parts.append(f"  <title>{escape(opts.title)}</title>")

    if opts.include_state:
        state_json = json.dumps(to_jsonable(tree), sort_keys=True, ensure_ascii=False)
        parts.append('  <script type="application/a2ui+json" id="a2ui-state">')
        parts.append(f"  {_script_safe(state_json)}")
        parts.append("  </script>")

    parts.append("  <style>")
    parts.append(BASE_CSS.strip())
    parts.append("  </style>")
    parts.append("</head>")
    parts.append("<body>")
    parts.append(f'  <main id="a2ui-root" class="a2ui-root" data-action-url="{escape(opts.action_url)}">')

    body_html = render_html(tree, registry=registry)
    if body_html:
        parts.append(body_html)
    else:
        parts.append('    <p class="a2ui-empty">This page is empty.</p>')

    parts.append("  </main>")

    if opts.footer:
        parts.append(f'  <footer class="a2ui-footer">{escape(opts.footer)}</footer>')

    if opts.include_script:
        parts.append("  <script>")
        parts.append(CLIENT_SCRIPT.strip())
        parts.append("  </script>")

    parts.append("</body>")
    parts.append("</html>")

    return "\n".join(parts)


def _script_safe(text: str) -> str:
    """Keep embedded JSON from closing its <script> element or opening a comment in it."""
    return text.replace("<", "\\u003c")


# ---------------------------------------------------------------------------
# Page assets
# ---------------------------------------------------------------------------

BASE_CSS = """
:root {
  --a2ui-font: "IBM Plex Sans", system-ui, sans-serif;
  --a2ui-fg: #1a1a1a;
  --a2ui-muted: #6b7280;
  --a2ui-bg: #fafaf9;
  --a2ui-surface: #ffffff;
  --a2ui-primary: #2d3748;
  --a2ui-destructive: #c53030;
  --a2ui-success: #2f855a;
  --a2ui-warning: #b7791f;
  --a2ui-border: rgba(0,0,0,0.1);
  --a2ui-radius: 10px;
}
*, *::before, *::after { box-sizing: border-box; margin: 0; padding: 0; }
body { font-family: var(--a2ui-font); background: var(--a2ui-bg); color: var(--a2ui-fg); line-height: 1.5; }
.a2ui-root { padding: 24px; }
.a2ui-empty { color: var(--a2ui-muted); font-style: italic; }
.a2ui-footer { margin-top: 48px; padding: 16px; font-size: 12px; color: #aaa; text-align: center; }
/* layout */
.a2ui-page-content { margin: 0 auto; }
.a2ui-max-sm { max-width: 640px; } .a2ui-max-md { max-width: 768px; } .a2ui-max-lg { max-width: 1024px; }
.a2ui-max-xl { max-width: 1280px; } .a2ui-max-2xl { max-width: 1536px; } .a2ui-max-full { max-width: none; }
.a2ui-page-centered { min-height: 100vh; display: flex; flex-direction: column; align-items: center; justify-content: center; }
.a2ui-page-title { font-size: 1.75rem; font-weight: 600; margin-bottom: 16px; }
@media (max-width: 640px) { .a2ui-row--responsive { flex-direction: column !important; } }
.a2ui-card { background: var(--a2ui-surface); border: 1px solid var(--a2ui-border); border-radius: var(--a2ui-radius); overflow: hidden; }
.a2ui-card--hoverable:hover { box-shadow: 0 4px 16px rgba(0,0,0,0.08); }
.a2ui-clickable { cursor: pointer; }
.a2ui-nav { padding: 12px 0; border-bottom: 1px solid var(--a2ui-border); }
.a2ui-nav-bar { display: flex; align-items: center; gap: 16px; }
.a2ui-nav-brand { font-weight: 600; margin-right: auto; }
.a2ui-nav-links { display: flex; gap: 12px; }
/* content */
.a2ui-text--h1 { font-size: 2rem; font-weight: 600; } .a2ui-text--h2 { font-size: 1.5rem; font-weight: 600; }
.a2ui-text--h3 { font-size: 1.2rem; font-weight: 600; } .a2ui-text--h4 { font-size: 1rem; font-weight: 600; }
.a2ui-text--caption { font-size: 12px; } .a2ui-text--label { font-size: 13px; font-weight: 500; }
.a2ui-color--muted { color: var(--a2ui-muted); } .a2ui-color--primary { color: var(--a2ui-primary); }
.a2ui-color--destructive { color: var(--a2ui-destructive); } .a2ui-color--success { color: var(--a2ui-success); }
.a2ui-divider { border: 0; border-top: 1px solid var(--a2ui-border); }
.a2ui-link { color: var(--a2ui-primary); text-decoration: underline; background: none; border: 0; cursor: pointer; font: inherit; }
.a2ui-markdown p { margin-bottom: 8px; }
/* interactive */
.a2ui-button { border-radius: 8px; border: 1px solid transparent; cursor: pointer; font: inherit; }
.a2ui-button--sm { padding: 4px 10px; font-size: 13px; } .a2ui-button--md { padding: 6px 14px; } .a2ui-button--lg { padding: 10px 18px; }
.a2ui-button--primary { background: var(--a2ui-primary); color: #fff; }
.a2ui-button--secondary { background: var(--a2ui-surface); border-color: var(--a2ui-border); color: var(--a2ui-fg); }
.a2ui-button--destructive { background: var(--a2ui-destructive); color: #fff; }
.a2ui-button--ghost, .a2ui-button--text { background: transparent; color: var(--a2ui-fg); }
.a2ui-button:disabled { opacity: 0.5; cursor: not-allowed; }
.a2ui-input { width: 100%; padding: 6px 10px; border: 1px solid var(--a2ui-border); border-radius: 6px; font: inherit; }
.a2ui-editable { border: 1px solid transparent; background: transparent; font: inherit; width: 100%; }
.a2ui-editable--active:hover, .a2ui-editable--active:focus { border-color: var(--a2ui-border); background: var(--a2ui-surface); }
.a2ui-tab-list { display: flex; gap: 4px; border-bottom: 1px solid var(--a2ui-border); }
.a2ui-tab { background: none; border: 0; padding: 8px 12px; cursor: pointer; font: inherit; }
.a2ui-tab--active { border-bottom: 2px solid var(--a2ui-primary); font-weight: 600; }
.a2ui-nav-link--active { font-weight: 600; }
/* forms */
.a2ui-form-field { display: flex; flex-direction: column; gap: 4px; }
.a2ui-required { color: var(--a2ui-destructive); margin-left: 2px; }
.a2ui-field-error { color: var(--a2ui-destructive); font-size: 12px; }
/* feedback */
.a2ui-badge { display: inline-flex; align-items: center; gap: 4px; padding: 2px 8px; border-radius: 999px; font-size: 12px; background: #edf2f7; }
.a2ui-badge--success, .a2ui-badge--completed { background: #c6f6d5; color: #22543d; }
.a2ui-badge--destructive, .a2ui-badge--failed { background: #fed7d7; color: #822727; }
.a2ui-badge--warning, .a2ui-badge--pending { background: #fefcbf; color: #744210; }
.a2ui-badge--info, .a2ui-badge--processing { background: #bee3f8; color: #2a4365; }
.a2ui-badge--cancelled { background: #e2e8f0; color: #4a5568; }
.a2ui-spinner { width: 10px; height: 10px; border: 2px solid currentColor; border-right-color: transparent; border-radius: 50%; animation: a2ui-spin 0.8s linear infinite; }
@keyframes a2ui-spin { to { transform: rotate(360deg); } }
.a2ui-progress { height: 6px; background: #edf2f7; border-radius: 999px; overflow: hidden; }
.a2ui-progress-bar { height: 100%; background: var(--a2ui-primary); }
.a2ui-progress-bar--completed { background: var(--a2ui-success); }
.a2ui-progress-bar--failed { background: var(--a2ui-destructive); }
.a2ui-progress-bar--cancelled { background: var(--a2ui-muted); }
.a2ui-pulse { animation: a2ui-pulse 1.5s ease-in-out infinite; }
@keyframes a2ui-pulse { 50% { opacity: 0.5; } }
.a2ui-modal-backdrop { position: fixed; inset: 0; background: rgba(0,0,0,0.4); display: flex; align-items: center; justify-content: center; z-index: 50; }
.a2ui-modal { background: var(--a2ui-surface); border-radius: var(--a2ui-radius); padding: 20px; min-width: 320px; max-width: 90vw; }
.a2ui-modal-header { display: flex; justify-content: space-between; align-items: center; margin-bottom: 12px; }
.a2ui-modal-close { background: none; border: 0; font-size: 20px; cursor: pointer; }
.a2ui-alert { padding: 10px 14px; border-radius: 8px; border-left: 3px solid var(--a2ui-primary); background: #f7fafc; }
.a2ui-alert--success { border-color: var(--a2ui-success); } .a2ui-alert--warning { border-color: var(--a2ui-warning); }
.a2ui-alert--error { border-color: var(--a2ui-destructive); }
.a2ui-unknown, .a2ui-render-error { padding: 8px 12px; border: 1px dashed var(--a2ui-destructive); color: var(--a2ui-destructive); font-size: 13px; border-radius: 6px; }
/* ext */
.a2ui-stat-card { padding: 16px; }
.a2ui-stat-head { display: flex; justify-content: space-between; color: var(--a2ui-muted); font-size: 13px; }
.a2ui-stat-value { font-size: 1.75rem; font-weight: 600; }
.a2ui-stat-change--up { color: var(--a2ui-success); } .a2ui-stat-change--down { color: var(--a2ui-destructive); }
.a2ui-empty-state { display: flex; flex-direction: column; align-items: center; gap: 8px; padding: 48px 16px; text-align: center; }
.a2ui-empty-icon { font-size: 2rem; }
.a2ui-empty-description { color: var(--a2ui-muted); }
.a2ui-bar-row { display: grid; grid-template-columns: 120px 1fr auto; align-items: center; gap: 8px; margin-bottom: 6px; }
.a2ui-bar-track { background: #edf2f7; height: 10px; border-radius: 999px; overflow: hidden; }
.a2ui-bar-fill { height: 100%; background: var(--a2ui-primary); }
.a2ui-chart-svg { display: block; max-width: 100%; }
.a2ui-chart-axis, .a2ui-chart-legend-text { font-size: 11px; fill: var(--a2ui-muted); }
.a2ui-chart-legend { display: flex; flex-wrap: wrap; gap: 12px; list-style: none; padding: 0; margin: 8px 0 0; font-size: 12px; }
.a2ui-chart-legend-item { display: flex; align-items: center; gap: 6px; }
.a2ui-chart-swatch { width: 10px; height: 10px; border-radius: 999px; display: inline-block; }
.a2ui-word-cloud { display: flex; flex-wrap: wrap; align-items: center; justify-content: center; gap: 8px; padding: 16px; }
.a2ui-word { display: inline-block; cursor: default; }
"""

# Mirrors Element.dispatch for the browser: walk from the event target to
# the root, posting each data-a2ui-<event> action until one carries
# data-a2ui-stop.
CLIENT_SCRIPT = """
(function () {
  var root = document.getElementById("a2ui-root");
  if (!root) { return; }
  var url = root.getAttribute("data-action-url");

  function post(action, args) {
    return fetch(url, {
      method: "POST",
      credentials: "same-origin",
      headers: { "Content-Type": "application/json" },
      body: JSON.stringify({ action: action, args: args || [] })
    }).then(function (res) {
      return res.ok ? res.json() : null;
    }).then(function (body) {
      if (!body) { return; }
      if (body.redirect) { window.location.assign(body.redirect); } else { window.location.reload(); }
    });
  }

  function fire(target, type, value) {
    var node = target;
    while (node && node !== root.parentElement) {
      var raw = node.getAttribute && node.getAttribute("data-a2ui-" + type);
      if (raw) {
        var bound = JSON.parse(raw);
        var args = bound.args || [];
        if (node.hasAttribute("data-a2ui-with-value")) { args = [value].concat(args); }
        post(bound.action, args);
        if (node.hasAttribute("data-a2ui-stop")) { return; }
      }
      node = node.parentElement;
    }
  }

  root.addEventListener("click", function (event) {
    var tab = event.target.closest("[data-a2ui-tab]");
    if (tab) {
      var tabs = tab.closest(".a2ui-tabs");
      var index = tab.getAttribute("data-a2ui-tab");
      tabs.querySelectorAll("[data-a2ui-tab]").forEach(function (b) {
        var on = b.getAttribute("data-a2ui-tab") === index;
        b.classList.toggle("a2ui-tab--active", on);
        b.setAttribute("aria-selected", on ? "true" : "false");
      });
      tabs.querySelectorAll("[data-a2ui-panel]").forEach(function (p) {
        p.hidden = p.getAttribute("data-a2ui-panel") !== index;
      });
      return;
    }
    if (event.target.hasAttribute("data-a2ui-backdrop")) {
      var close = JSON.parse(event.target.getAttribute("data-a2ui-backdrop"));
      post(close.action, close.args);
      return;
    }
    if (event.target.closest("a[href]") && !event.target.closest("[data-a2ui-click]")) { return; }
    fire(event.target, "click");
  });

  root.addEventListener("change", function (event) {
    var el = event.target;
    var original = el.getAttribute("data-a2ui-original");
    if (original !== null && el.value === original) { return; }
    fire(el, "change", el.value);
  });

  root.addEventListener("submit", function (event) {
    event.preventDefault();
    fire(event.target, "submit");
  });
})();
"""
