"""
Children parser mixin for uimarkup.

Parses the comma-separated items of an element body.

Syntax:

    div {
        "literal text",              // LiteralChild
        format!("Hello {}", name),   // LiteralChild
        ..items,                     // SpreadChild
        .when(cond, |d| d.flex()),   // MethodChainChild
        div @[flex] { "nested" },    // NestedChild
    }

Method chains are captured as one opaque region: only the item boundary is
detected, so chains may contain generics, nested calls and closures.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import ir
from ..lexer import Group, Token, TokenTree, TokenType
from .base import describe, is_group, is_punct


class ChildParserMixin:
    """Parser mixin for element bodies."""

    if TYPE_CHECKING:
        split_items: Any
        host_expr: Any
        span_of: Any
        syntax_error: Any
        match_element: Any

    def parse_body(self, group: Group) -> list[ir.ChildItem]:
        """Parse all items of a `{...}` body; an empty body has no children."""
        return [self.parse_child(region) for region in self.split_items(group.trees)]

    def parse_child(self, region: list[TokenTree]) -> ir.ChildItem:
        """
        Parse one child item.

        Grammar:
            ".." expr       -- spread
            "." chain       -- method chain insertion
            element         -- nested element
            expr            -- literal
        """
        first = region[0]

        if is_punct(first, "..") or is_punct(first, "..=") or is_punct(first, "..."):
            return self.parse_spread(region)

        if is_punct(first, "."):
            return self.parse_method_chain(region)

        element = self.match_element(region)
        if element is not None:
            return ir.NestedChild(element=element)

        if len(region) == 1 and is_group(first, "{") and first.is_empty:  # type: ignore[union-attr]
            raise self.syntax_error(
                "Empty braces `{}` are not allowed as a child: write an element head "
                "before the body (`div {}`) or use `//` for comments",
                first.span,
            )

        self._check_literal(region)
        return ir.LiteralChild(expr=self.host_expr(region))

    def parse_spread(self, region: list[TokenTree]) -> ir.SpreadChild:
        """Parse `..expr`."""
        marker = region[0]
        assert isinstance(marker, Token)
        if marker.value != "..":
            raise self.syntax_error(
                f"Malformed spread: expected `..` followed by an iterable, found `{marker.value}`",
                marker.span,
            )
        rest = region[1:]
        if not rest:
            raise self.syntax_error(
                "Malformed spread: `..` must be followed by an iterable expression, e.g. `..items`",
                marker.span,
            )
        if is_punct(rest[0], ".") or is_punct(rest[0], ".."):
            raise self.syntax_error(
                f"Malformed spread: unexpected {describe(rest[0])} after `..`",
                rest[0].span,
            )
        return ir.SpreadChild(expr=self.host_expr(rest), span=self.span_of(region))

    def parse_method_chain(self, region: list[TokenTree]) -> ir.MethodChainChild:
        """Parse `.method(args)...` as one opaque region."""
        dot = region[0]
        name = region[1] if len(region) > 1 else None
        if not (isinstance(name, Token) and name.type in (TokenType.IDENT, TokenType.NUMBER)):
            raise self.syntax_error(
                "Malformed method chain: `.` must be followed by a method name, "
                "e.g. `.when(cond, |d| d.flex())`",
                (name or dot).span,
            )
        return ir.MethodChainChild(chain=self.host_expr(region))

    def _check_literal(self, region: list[TokenTree]) -> None:
        """Reject a top-level `:` that would otherwise be attached as a child."""
        in_params = False
        prev: TokenTree | None = None
        for i, tree in enumerate(region):
            if is_punct(tree, "|") and (i == 0 or in_params or _is_move(region, i)):
                in_params = not in_params
            elif is_punct(tree, ":") and not in_params:
                if isinstance(prev, Token) and prev.type == TokenType.LIFETIME:
                    prev = tree
                    continue
                raise self.syntax_error(
                    "Unexpected `:` in child expression. Wrap struct literals in parentheses, "
                    "e.g. `(Point { x: 1 })`; element attributes belong in `@[...]`",
                    tree.span,
                )
            prev = tree


def _is_move(region: list[TokenTree], index: int) -> bool:
    return index == 1 and isinstance(region[0], Token) and region[0].is_ident("move")
