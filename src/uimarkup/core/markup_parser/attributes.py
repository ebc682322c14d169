"""
Attribute parser mixin for uimarkup.

Parses the bracketed attribute list that follows the `@` marker.

Syntax:

    div @[flex, w: px(200.0), when: (is_active, |d| d.border_1())] { ... }

- `flex`            → Flag
- `w: px(200.0)`    → KeyValue
- `when: (a, b)`    → KeyMultiValue (tuple elements become call arguments)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import ir
from ..lexer import Group, Token, TokenTree, TokenType
from .base import describe, is_group, is_punct


class AttributeParserMixin:
    """Parser mixin for `@[...]` attribute lists."""

    if TYPE_CHECKING:
        split_items: Any
        host_expr: Any
        span_of: Any
        syntax_error: Any

    def parse_attribute_list(self, group: Group) -> list[ir.Attribute]:
        """
        Parse the contents of an `@[...]` group.

        Raises:
            MarkupSyntaxError: On an empty list or a malformed item
        """
        if group.is_empty:
            raise self.syntax_error(
                "Empty attribute list `@[]`: add attributes or remove the `@[]` marker",
                group.span,
            )
        return [self.parse_attribute(region) for region in self.split_items(group.trees)]

    def parse_attribute(self, region: list[TokenTree]) -> ir.Attribute:
        """
        Parse one attribute item.

        Grammar:
            IDENT
            IDENT ":" expr
            IDENT ":" "(" expr ("," expr)+ [","] ")"
        """
        name_tree = region[0]
        if not (isinstance(name_tree, Token) and name_tree.type == TokenType.IDENT):
            raise self.syntax_error(
                f"Expected an attribute name, found {describe(name_tree)}. "
                "Attributes are method names, optionally followed by `: value`",
                name_tree.span,
            )
        name = name_tree.value
        span = self.span_of(region)

        if len(region) == 1:
            return ir.Flag(name=name, span=span)

        if not is_punct(region[1], ":"):
            raise self.syntax_error(
                f"Expected `:` or `,` after attribute `{name}`, found {describe(region[1])}",
                region[1].span,
            )

        value = region[2:]
        if not value:
            raise self.syntax_error(
                f"Attribute `{name}` is missing a value after `:`",
                region[1].span,
            )

        if len(value) == 1 and is_group(value[0], "("):
            group = value[0]
            assert isinstance(group, Group)
            if group.is_empty:
                raise self.syntax_error(
                    f"Empty argument group `()` for attribute `{name}`: "
                    f"write `{name}` alone for a call without arguments",
                    group.span,
                )
            items = self.split_items(group.trees)
            if len(items) > 1 or is_punct(group.trees[-1], ","):
                values = [self.host_expr(item) for item in items]
                return ir.KeyMultiValue(name=name, values=values, span=span)

        return ir.KeyValue(name=name, value=self.host_expr(value), span=span)
