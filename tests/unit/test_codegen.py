"""Tests for uimarkup code generation.

Covers:
- Base expressions for every head kind
- Attribute and child folding order
- The deferred wrapper
- Determinism and toolkit naming overrides
"""

from __future__ import annotations

import pytest

from uimarkup.core import ir
from uimarkup.core.codegen import compile_markup, generate
from uimarkup.core.errors import MarkupSyntaxError
from uimarkup.core.markup_parser import parse_markup
from uimarkup.core.toolkit import ToolkitProfile


def chain_links(code: ir.Code) -> tuple[str, list[str]]:
    """Split generated code into its base text and its chained links, in call order."""
    links = []
    while isinstance(code, ir.MethodCall | ir.ChainSplice):
        links.append(str(code).removeprefix(str(code.receiver)))
        code = code.receiver
    return str(code), links[::-1]


class TestScenarios:
    """End-to-end compilation of the reference scenarios."""

    def test_empty_native_element(self) -> None:
        assert compile_markup("div {}") == "div()"

    def test_flags(self) -> None:
        assert compile_markup("div @[flex, flex_col] {}") == "div().flex().flex_col()"

    def test_children_attached_in_order(self) -> None:
        assert (
            compile_markup('div { "First", "Second" }')
            == 'div().child("First").child("Second")'
        )

    def test_spread_is_one_call(self) -> None:
        assert compile_markup("div { ..items }") == "div().children(items)"

    def test_deferred_wraps_erased_child(self) -> None:
        assert (
            compile_markup('deferred { div { "x" } }')
            == 'deferred((div().child("x")).into_any_element())'
        )

    def test_component_gets_constructor(self) -> None:
        assert compile_markup("Header {}") == "Header::new()"

    def test_component_call_is_verbatim(self) -> None:
        assert compile_markup('Header::with_label("x") {}') == 'Header::with_label("x")'


class TestBareElements:
    """An element with no attributes and no children emits only its base."""

    @pytest.mark.parametrize(
        ("markup", "expected"),
        [
            ("div {}", "div()"),
            ("svg {}", "svg()"),
            ("anchored {}", "anchored()"),
            ("Header {}", "Header::new()"),
            ("widgets::Card {}", "widgets::Card::new()"),
            ("::ui::Card {}", "::ui::Card::new()"),
            ("theme::panel {}", "theme::panel"),
            ("self.base() {}", "self.base()"),
            ("(row) {}", "(row)"),
        ],
    )
    def test_base_only(self, markup: str, expected: str) -> None:
        assert compile_markup(markup) == expected


class TestAttributes:
    """Attributes become chained calls in the order written."""

    def test_key_value(self) -> None:
        assert compile_markup("div @[w: px(200.0)] {}") == "div().w(px(200.0))"

    def test_tuple_spreads_into_arguments(self) -> None:
        assert (
            compile_markup("div @[when: (active, |d| d.border_1())] {}")
            == "div().when(active, |d| d.border_1())"
        )

    def test_parenthesized_value_passed_as_one_argument(self) -> None:
        assert compile_markup("div @[w: (a + b)] {}") == "div().w((a + b))"

    def test_closure_value(self) -> None:
        assert (
            compile_markup("div @[on_click: |_, window, cx| go(window, cx)] {}")
            == "div().on_click(|_, window, cx| go(window, cx))"
        )
        assert (
            compile_markup("div @[on_click: move |a, b| go(a, b), flex] {}")
            == "div().on_click(move |a, b| go(a, b)).flex()"
        )

    def test_attributes_before_children(self) -> None:
        assert (
            compile_markup('div @[flex, gap: px(4.0)] { "a" }')
            == 'div().flex().gap(px(4.0)).child("a")'
        )

    def test_attributes_on_expression_head(self) -> None:
        assert compile_markup('div().id("main") @[flex] {}') == 'div().id("main").flex()'


class TestChildren:
    """Children fold left-to-right onto the running expression."""

    def test_nested_elements(self) -> None:
        assert (
            compile_markup('div { Header @[bold] { "Title" }, svg {} }')
            == 'div().child(Header::new().bold().child("Title")).child(svg())'
        )

    def test_method_chain_interleaving(self) -> None:
        assert (
            compile_markup('div { "a", .when(open, |d| d.flex()), "b" }')
            == 'div().child("a").when(open, |d| d.flex()).child("b")'
        )

    def test_method_chain_with_several_calls(self) -> None:
        assert compile_markup("div { .p_2().m_1() }") == "div().p_2().m_1()"

    def test_mixed_kinds(self) -> None:
        assert (
            compile_markup('div { "a", ..rest, label, .hover(|s| s.bg(red())) }')
            == 'div().child("a").children(rest).child(label).hover(|s| s.bg(red()))'
        )

    def test_generic_child(self) -> None:
        assert compile_markup("div { Vec::<A, B>::new() }") == "div().child(Vec::<A, B>::new())"

    def test_closure_child(self) -> None:
        assert compile_markup("div { move |a, b| a + b }") == "div().child(move |a, b| a + b)"

    def test_deferred_literal_child(self) -> None:
        assert compile_markup("deferred { menu }") == "deferred((menu).into_any_element())"

    def test_deferred_nested_in_body(self) -> None:
        assert (
            compile_markup("anchored { deferred { Popover {} } }")
            == "anchored().child(deferred((Popover::new()).into_any_element()))"
        )

    def test_pass_through_root(self) -> None:
        assert compile_markup("(self.row(1))") == "(self.row(1))"


class TestGenerator:
    """Properties of the generator itself."""

    def test_deterministic(self) -> None:
        markup = parse_markup('div @[flex] { "a", ..b, Header {}, .c() }')
        assert str(generate(markup)) == str(generate(markup))
        assert compile_markup('div @[flex] { "a" }') == compile_markup('div @[flex] { "a" }')

    def test_output_tree_shape(self) -> None:
        code = generate(parse_markup("div @[flex] { ..items }"))
        assert isinstance(code, ir.MethodCall)
        assert code.method == "children"
        assert isinstance(code.receiver, ir.MethodCall)
        assert code.receiver.method == "flex"
        assert ir.chain_length(code) == 2

    def test_custom_toolkit_names(self) -> None:
        toolkit = ToolkitProfile(
            constructor="create",
            child_method="add",
            children_method="extend",
            erase_method="boxed",
            deferred_function="lazy",
        )
        assert (
            compile_markup('div { "a", ..b, Card {} }', toolkit)
            == 'div().add("a").extend(b).add(Card::create())'
        )
        assert compile_markup("deferred { x }", toolkit) == "lazy((x).boxed())"

    def test_pretty_output(self) -> None:
        text = 'div @[flex, flex_col, gap: px(8.0)] { "a very long child string", ..more_items }'
        pretty = compile_markup(text, pretty=True)
        assert pretty.splitlines()[0] == "div()"
        assert "    .children(more_items)" in pretty.splitlines()

    def test_failure_yields_no_output(self) -> None:
        with pytest.raises(MarkupSyntaxError):
            compile_markup("div @[] {}")

    @pytest.mark.parametrize(
        ("written", "permuted", "expected"),
        [
            (
                'div @[flex, gap: px(4.0), when: (a, b)] { "x" }',
                'div @[when: (a, b), flex, gap: px(4.0)] { "x" }',
                [".when(a, b)", ".flex()", ".gap(px(4.0))", '.child("x")'],
            ),
            (
                'div @[flex] { "a", ..rest, .p_2(), Card {} }',
                'div @[flex] { Card {}, .p_2(), "a", ..rest }',
                [".flex()", ".child(Card::new())", ".p_2()", '.child("a")', ".children(rest)"],
            ),
        ],
        ids=["attributes", "children"],
    )
    def test_permutation_only_reorders_links(
        self, written: str, permuted: str, expected: list[str]
    ) -> None:
        base, links = chain_links(generate(parse_markup(written)))
        permuted_base, permuted_links = chain_links(generate(parse_markup(permuted)))
        assert permuted_base == base == "div()"
        assert sorted(permuted_links) == sorted(links)
        assert permuted_links == expected
