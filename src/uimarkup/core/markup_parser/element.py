"""
Element parser mixin for uimarkup.

Recognizes elements inside a token region and assembles them from their
head, attribute list and body.

Syntax:

    head [ "@" "[" attributes "]" ] "{" children "}"

The body delimiter is mandatory: it is the only thing that tells a tree node
(`Header {}` → `Header::new()`) apart from a plain expression child
(`header` → `.child(header)`).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import ir
from ..lexer import Group, Token, TokenTree, render_text
from .base import describe, is_group, is_punct


class ElementParserMixin:
    """Parser mixin for elements and the reserved `deferred` wrapper."""

    if TYPE_CHECKING:
        toolkit: Any
        span_of: Any
        syntax_error: Any
        structural_error: Any
        is_head_like: Any
        parse_head: Any
        parse_attribute_list: Any
        parse_body: Any

    def match_element(self, region: list[TokenTree]) -> ir.Element | ir.DeferredElement | None:
        """
        Parse ``region`` as an element if it has element shape.

        Returns:
            The element, or None when the region is a plain expression

        Raises:
            MarkupSyntaxError: If the region has a misplaced `@` marker, or
                trailing tokens after an element body
        """
        marker = next((i for i, tree in enumerate(region) if is_punct(tree, "@")), None)
        if marker is not None:
            return self._parse_marked_element(region, marker)

        for i in range(1, len(region)):
            if is_group(region[i], "{") and self.is_head_like(region[:i]):
                self._expect_end_after_body(region, i)
                body = region[i]
                assert isinstance(body, Group)
                return self.build_element(region[:i], None, body, self.span_of(region))
        return None

    def _parse_marked_element(self, region: list[TokenTree], at: int) -> ir.Element | ir.DeferredElement:
        head = region[:at]
        marker = region[at]

        if not head:
            raise self.syntax_error(
                "Stray attribute marker `@`: attributes must follow an element head and "
                "precede its body, e.g. `div @[flex] { ... }`. The head and the `{}` body "
                "are what mark an element; without them the attributes have nothing to apply to",
                marker.span,
            )

        attrs = region[at + 1] if at + 1 < len(region) else None
        if not is_group(attrs, "["):
            found = describe(attrs) if attrs is not None else "nothing"
            raise self.syntax_error(
                f"Malformed attribute marker: `@` must be followed by `[...]`, found {found}. "
                "The brackets delimit the attribute list so that it cannot be confused with "
                "the head expression or the body",
                marker.span,
            )

        if not self.is_head_like(head):
            raise self.syntax_error(
                f"Attribute marker `@` follows `{render_text(head)}`, which is not an element "
                "head. Only a name, a path or a call chain can carry attributes; wrap other "
                "expressions in parentheses: `(expr) @[...] { ... }`",
                marker.span,
            )

        body = region[at + 2] if at + 2 < len(region) else None
        if not is_group(body, "{"):
            raise self.syntax_error(
                f"Expected an element body `{{ ... }}` after the attributes of "
                f"`{render_text(head)}`. The body delimiter is required: it is what marks "
                "a tree node rather than a plain expression (write `{}` for no children)",
                (body or attrs).span,  # type: ignore[union-attr]
            )

        self._expect_end_after_body(region, at + 2)
        assert isinstance(attrs, Group) and isinstance(body, Group)
        return self.build_element(head, attrs, body, self.span_of(region))

    def _expect_end_after_body(self, region: list[TokenTree], body_index: int) -> None:
        if body_index + 1 < len(region):
            extra = region[body_index + 1]
            raise self.syntax_error(
                f"Unexpected {describe(extra)} after element body; separate children with `,`. "
                "To call methods on an element, put them in its body as `.method()` items",
                extra.span,
            )

    def build_element(
        self,
        head: list[TokenTree],
        attrs: Group | None,
        body: Group,
        span: ir.SourceRange,
    ) -> ir.Element | ir.DeferredElement:
        """Assemble an element from its parts, routing the reserved deferred head."""
        if len(head) == 1 and isinstance(head[0], Token) and head[0].value == self.toolkit.deferred_tag:
            return self.parse_deferred(head[0], attrs, body, span)

        return ir.Element(
            head=self.parse_head(head),
            attributes=self.parse_attribute_list(attrs) if attrs is not None else [],
            children=self.parse_body(body),
            span=span,
        )

    def parse_deferred(
        self,
        name: Token,
        attrs: Group | None,
        body: Group,
        span: ir.SourceRange,
    ) -> ir.DeferredElement:
        """
        Parse the reserved single-child wrapper.

        Raises:
            StructuralError: If attributes are given, the body does not hold
                exactly one child, or the child is a spread or method chain
        """
        if attrs is not None:
            raise self.structural_error(
                f"`{name.value}` does not accept attributes; put them on its child element",
                attrs.span,
            )

        children = self.parse_body(body)
        if len(children) != 1:
            found = "none" if not children else str(len(children))
            raise self.structural_error(
                f"`{name.value}` must have exactly one child, found {found}",
                body.span,
            )

        child = children[0]
        if not isinstance(child, ir.LiteralChild | ir.NestedChild):
            raise self.structural_error(
                f"`{name.value}` child must be an element or an expression, "
                f"not a {child.kind.replace('_', ' ')}",
                child.span,
            )
        return ir.DeferredElement(name=name.value, child=child, span=span)
