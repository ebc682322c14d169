"""
uimarkup Markup Parser Package.

This package provides a modular recursive-descent parser for the markup
grammar. The parser is built using mixins to separate parsing logic by
construct, like the rest of the core:

- ElementParserMixin: element shape, `@` marker handling, `deferred`
- ChildParserMixin: body items (literal, spread, method chain, nested)
- AttributeParserMixin: `@[...]` attribute lists
- HeadParserMixin: head recognition and classification

Usage:
    from uimarkup.core.markup_parser import parse_markup

    markup = parse_markup('div @[flex] { "Hello" }')
"""

from __future__ import annotations

import logging
from pathlib import Path

from .. import ir
from ..diagnostics import attach_context
from ..errors import MarkupError
from ..lexer import Token, TokenTree, lex, render_text
from ..toolkit import ToolkitProfile
from .attributes import AttributeParserMixin
from .base import BaseParser, is_group
from .children import ChildParserMixin
from .element import ElementParserMixin
from .head import HeadParserMixin

logger = logging.getLogger(__name__)


class MarkupParser(
    BaseParser,
    HeadParserMixin,
    AttributeParserMixin,
    ChildParserMixin,
    ElementParserMixin,
):
    """
    Complete markup parser.

    Parses the token trees of one invocation into a ``Markup`` tree. Failure
    is fail-fast: the first grammar violation raises.
    """

    def parse(self) -> ir.Markup:
        """
        Parse the root of the invocation.

        Grammar:
            markup := element | "(" expr ")"

        Raises:
            MarkupSyntaxError: On any grammar violation
            StructuralError: On a malformed `deferred` element
        """
        if not self.trees:
            raise self.syntax_error(
                "Empty markup: expected a root element such as `div { ... }`",
                self.eof.span,
            )

        items = self.split_items(self.trees)
        if len(items) > 1:
            raise self.syntax_error(
                "Markup must have exactly one root element; wrap siblings in a parent "
                "element, e.g. `div { a {}, b {} }`",
                self.span_of(items[1]),
            )
        region = items[0]
        span = self.span_of(region)

        if len(region) == 1 and is_group(region[0], "("):
            if region[0].is_empty:  # type: ignore[union-attr]
                raise self.syntax_error(
                    "Empty parentheses `()`: a parenthesized root must contain an expression",
                    region[0].span,
                )
            return ir.Markup(root=ir.PassThrough(expr=self.host_expr(region)), span=span)

        element = self.match_element(region)
        if element is None:
            raise self.syntax_error(
                f"Expected an element body `{{ ... }}` after `{render_text(region)}`. "
                "A markup root must be an element such as `div { ... }` or a parenthesized "
                "expression `(expr)`: the `{}` body is what distinguishes a tree node from "
                "a plain expression",
                span,
            )
        return ir.Markup(root=element, span=span)


def parse_trees(
    trees: list[TokenTree],
    eof: Token,
    toolkit: ToolkitProfile | None = None,
) -> ir.Markup:
    """
    Parse already-lexed token trees of one invocation.

    Spans stay relative to the text the trees were lexed from, so callers
    expanding whole files get file offsets.
    """
    parser = MarkupParser(trees, eof, toolkit)
    return parser.parse()


def parse_markup(
    text: str,
    toolkit: ToolkitProfile | None = None,
    file: Path | None = None,
) -> ir.Markup:
    """
    Convenience function to lex and parse one markup body.

    Args:
        text: Markup source (the inside of a `ui! { ... }` invocation)
        toolkit: Naming rules; defaults to the GPUI-style profile
        file: Optional source file, used only in error messages

    Returns:
        Parsed Markup tree

    Raises:
        MarkupError: With source context attached
    """
    try:
        trees, eof = lex(text)
        markup = parse_trees(trees, eof, toolkit)
    except MarkupError as e:
        raise attach_context(e, text, file) from None
    logger.debug("Parsed markup root %s", markup.root.kind)
    return markup


__all__ = [
    "MarkupParser",
    "parse_markup",
    "parse_trees",
]
