"""
A2UI — Node Schema Tests

Parsing is lenient: camelCase wire keys map onto snake_case attributes,
malformed fields drop back to their defaults, and children stay raw until
the renderer reaches them.
"""

from engine.a2ui.schema import (
    Action,
    BaseNode,
    ButtonNode,
    ColumnNode,
    TextNode,
    dump_node,
    dumps,
    loads,
    normalize_href,
    normalize_length,
    parse_action,
    parse_node,
    walk,
)

# ============================================================================
# Length normalisation
# ============================================================================


class TestNormalizeLength:
    def test_numbers_become_px(self):
        assert normalize_length(16) == "16px"
        assert normalize_length(1.5) == "1.5px"

    def test_zero_is_unitless(self):
        assert normalize_length(0) == "0"
        assert normalize_length("0") == "0"

    def test_numeric_strings_become_px(self):
        assert normalize_length("12") == "12px"

    def test_css_lengths_pass_through(self):
        for value in ("1rem", "50%", "auto", "calc(100% - 2rem)", "var(--gap)"):
            assert normalize_length(value) == value

    def test_garbage_is_none(self):
        assert normalize_length("twelve") is None
        assert normalize_length(True) is None
        assert normalize_length(["1rem"]) is None


# ============================================================================
# URL normalisation
# ============================================================================


class TestNormalizeHref:
    def test_safe_schemes_pass_through(self):
        for value in ("https://example.com/a?b=1", "http://example.com", "mailto:desk@example.com", "HTTPS://EXAMPLE.COM"):
            assert normalize_href(value) == value

    def test_relative_urls_pass_through(self):
        for value in ("/tasks", "tasks/1", "?page=2", "#top", "//cdn.example.com/x.png", "a/b:c"):
            assert normalize_href(value) == value

    def test_other_schemes_are_none(self):
        for value in ("javascript:alert(1)", "JavaScript:alert(1)", "data:text/html,<b>x</b>", "vbscript:x", "file:///etc/passwd"):
            assert normalize_href(value) is None

    def test_obfuscated_scheme_is_none(self):
        assert normalize_href(" java\tscript:alert(1)") is None
        assert normalize_href("java\nscript:alert(1)") is None
        assert normalize_href("\x01javascript:alert(1)") is None

    def test_non_strings_and_blanks_are_none(self):
        assert normalize_href("  ") is None
        assert normalize_href(42) is None
        assert normalize_href(None) is None

    def test_link_nodes_drop_unsafe_href(self):
        link = parse_node({"type": "link", "text": "src", "href": "javascript:alert(1)"})
        nav_link = parse_node({"type": "nav-link", "text": "n", "href": "javascript:alert(1)"})

        assert link.href is None
        assert nav_link.href is None
        assert link.text == "src"


# ============================================================================
# parse_node
# ============================================================================


class TestParseNode:
    def test_selects_model_by_type(self):
        node = parse_node({"type": "button", "text": "Go"})
        assert isinstance(node, ButtonNode)
        assert node.text == "Go"
        assert node.variant == "primary"

    def test_camel_case_keys(self):
        node = parse_node(
            {
                "type": "button",
                "text": "Delete",
                "className": "danger",
                "onClick": {"action": "delete", "args": ["t1"], "stopPropagation": True},
            }
        )
        assert node.class_name == "danger"
        assert node.on_click == Action(action="delete", args=["t1"], stop_propagation=True)

    def test_unknown_type_parses_as_base_node(self):
        node = parse_node({"type": "sparkline", "points": [1, 2, 3]})
        assert type(node) is BaseNode
        assert node.type == "sparkline"
        assert node.model_extra == {"points": [1, 2, 3]}

    def test_explicit_model_wins(self):
        node = parse_node({"type": "anything", "text": "hi"}, TextNode)
        assert isinstance(node, TextNode)

    def test_parsed_node_passes_through(self):
        node = parse_node({"type": "text", "text": "hi"})
        assert parse_node(node) is node

    def test_numbers_are_stringified_for_text(self):
        node = parse_node({"type": "text", "text": 42})
        assert node.text == "42"

    def test_single_child_is_wrapped(self):
        node = parse_node({"type": "column", "children": {"type": "text", "text": "only"}})
        assert isinstance(node, ColumnNode)
        assert node.children == [{"type": "text", "text": "only"}]

    def test_children_stay_raw(self):
        node = parse_node({"type": "row", "children": [{"type": "mystery"}, "loose string"]})
        assert node.children == [{"type": "mystery"}, "loose string"]


class TestLenientParsing:
    """A malformed field falls back to its default; the rest of the node survives."""

    def test_bad_enum_uses_default(self):
        node = parse_node({"type": "button", "text": "Ok", "variant": "enormous"})
        assert node.variant == "primary"
        assert node.text == "Ok"

    def test_bad_action_is_dropped(self):
        node = parse_node({"type": "button", "text": "Ok", "onClick": "not-an-action"})
        assert node.on_click is None

    def test_action_without_name_is_dropped(self):
        node = parse_node({"type": "button", "text": "Ok", "onClick": {"args": [1]}})
        assert node.on_click is None

    def test_bad_length_is_none(self):
        node = parse_node({"type": "column", "gap": "wide"})
        assert node.gap is None

    def test_out_of_range_number_uses_default(self):
        node = parse_node({"type": "progress", "status": "processing", "value": 250})
        assert node.value is None
        assert node.status == "processing"

    def test_non_dict_style_is_dropped(self):
        node = parse_node({"type": "text", "text": "x", "style": "color: red"})
        assert node.style == {}

    def test_several_bad_fields_at_once(self):
        node = parse_node(
            {"type": "text", "text": "x", "variant": 3, "color": "plaid", "weight": "heavy"}
        )
        assert (node.variant, node.color, node.weight) == ("body", "foreground", None)

    def test_non_object_options_are_skipped(self):
        node = parse_node({"type": "select", "options": ["a", {"label": "B", "value": "b"}]})
        assert [o.value for o in node.options] == ["b"]


# ============================================================================
# Actions
# ============================================================================


class TestParseAction:
    def test_valid(self):
        action = parse_action({"action": "retry", "args": ["t1"]})
        assert action.action == "retry"
        assert action.args == ["t1"]
        assert action.stop_propagation is False

    def test_non_dict(self):
        assert parse_action("retry") is None
        assert parse_action(None) is None

    def test_missing_name(self):
        assert parse_action({"args": [1]}) is None


# ============================================================================
# Serialisation
# ============================================================================


class TestSerialisation:
    def test_dump_uses_wire_names_and_omits_defaults(self):
        node = parse_node({"type": "button", "text": "Go", "onClick": {"action": "go"}})
        data = dump_node(node)
        assert data["type"] == "button"
        assert data["onClick"]["action"] == "go"
        assert "variant" not in data
        assert "on_click" not in data

    def test_dumps_is_stable(self):
        tree = {"type": "text", "text": "héllo", "variant": "h2"}
        assert dumps(tree) == dumps(dict(reversed(list(tree.items()))))
        assert "héllo" in dumps(tree)

    def test_loads_inverts_dumps(self):
        tree = [{"type": "column", "children": [{"type": "text", "text": "a"}]}]
        assert loads(dumps(tree)) == tree


class TestWalk:
    def test_visits_children_and_tab_content(self):
        tree = {
            "type": "column",
            "children": [
                {"type": "text", "text": "a"},
                {
                    "type": "tabs",
                    "tabs": [
                        {"label": "One", "content": {"type": "badge", "text": "1"}},
                        {"label": "Two", "content": [{"type": "alert", "message": "2"}]},
                    ],
                },
            ],
        }
        assert [n["type"] for n in walk(tree)] == ["column", "text", "tabs", "badge", "alert"]

    def test_ignores_non_dicts(self):
        assert list(walk(["x", 1, None])) == []
