"""Standard A2UI component render functions, keyed by node tag."""

from __future__ import annotations

from engine.a2ui.components.content import (
    render_divider,
    render_icon,
    render_image,
    render_link,
    render_markdown,
    render_text,
)
from engine.a2ui.components.ext import (
    render_chart_bar,
    render_chart_line,
    render_chart_pie,
    render_chart_radar,
    render_chart_radial_bar,
    render_chart_word_cloud,
    render_empty_state,
    render_stat_card,
)
from engine.a2ui.components.fallback import render_error, render_unknown
from engine.a2ui.components.feedback import render_alert, render_badge, render_modal, render_progress
from engine.a2ui.components.forms import render_form, render_form_field
from engine.a2ui.components.interactive import (
    render_button,
    render_checkbox,
    render_collapsible,
    render_editable_text,
    render_input,
    render_nav_link,
    render_select,
    render_tabs,
    render_textarea,
)
from engine.a2ui.components.layout import (
    render_card,
    render_column,
    render_container,
    render_nav,
    render_page,
    render_row,
    render_spacer,
)
from engine.a2ui.types import RenderFn

STANDARD_COMPONENTS: dict[str, RenderFn] = {
    # layout
    "column": render_column,
    "row": render_row,
    "container": render_container,
    "card": render_card,
    "page": render_page,
    "nav": render_nav,
    "spacer": render_spacer,
    # content
    "text": render_text,
    "image": render_image,
    "icon": render_icon,
    "divider": render_divider,
    "link": render_link,
    "markdown": render_markdown,
    # interactive
    "button": render_button,
    "input": render_input,
    "textarea": render_textarea,
    "editable-text": render_editable_text,
    "select": render_select,
    "checkbox": render_checkbox,
    "tabs": render_tabs,
    "collapsible": render_collapsible,
    "nav-link": render_nav_link,
    # form
    "form": render_form,
    "form-field": render_form_field,
    # feedback
    "badge": render_badge,
    "progress": render_progress,
    "modal": render_modal,
    "alert": render_alert,
    # ext
    "stat-card": render_stat_card,
    "empty-state": render_empty_state,
    "chart-bar": render_chart_bar,
    "chart-pie": render_chart_pie,
    "chart-radar": render_chart_radar,
    "chart-line": render_chart_line,
    "chart-radial-bar": render_chart_radial_bar,
    "chart-word-cloud": render_chart_word_cloud,
}

__all__ = ["STANDARD_COMPONENTS", "render_error", "render_unknown"]
