"""
Element head parsing for uimarkup.

Decides whether a token region is head-like (may precede an element body)
and classifies it as a native tag, a component or a verbatim expression.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import ir
from ..lexer import Group, Token, TokenTree, TokenType
from .base import ANGLE_DELTA, is_group, is_punct

# Host keywords that can never start an element head; `if c { a }` and
# friends stay literal expressions.
HEAD_KEYWORDS = {
    "as",
    "async",
    "await",
    "break",
    "const",
    "continue",
    "dyn",
    "else",
    "enum",
    "extern",
    "false",
    "fn",
    "for",
    "if",
    "impl",
    "in",
    "let",
    "loop",
    "match",
    "mod",
    "move",
    "mut",
    "pub",
    "ref",
    "return",
    "static",
    "struct",
    "trait",
    "true",
    "type",
    "unsafe",
    "use",
    "where",
    "while",
    "yield",
}


def skip_generics(trees: list[TokenTree], index: int) -> int | None:
    """
    Skip a `<...>` generic argument list starting at ``trees[index]``.

    Returns:
        Index just past the closing `>`, or None if the list never closes
    """
    depth = 0
    for i in range(index, len(trees)):
        tree = trees[i]
        if isinstance(tree, Token) and tree.type == TokenType.PUNCT:
            depth += ANGLE_DELTA.get(tree.value, 0)
            if depth <= 0:
                return i + 1
    return None


def _is_name(tree: TokenTree | None) -> bool:
    return isinstance(tree, Token) and tree.type == TokenType.IDENT and tree.value not in HEAD_KEYWORDS


class HeadParserMixin:
    """Parser mixin for element heads."""

    if TYPE_CHECKING:
        toolkit: Any
        host_expr: Any

    def is_head_like(self, trees: list[TokenTree]) -> bool:
        """
        Check whether a region is a postfix chain that may head an element.

        A head is a primary (a path or a parenthesized group) followed by any
        mix of `::segment`, `::<generics>`, `.field`, `(args)`, `[index]`,
        `!group` and `?`. Keywords never start a head.
        """
        if not trees:
            return False

        first = trees[0]
        if _is_name(first) or is_group(first, "("):
            i = 1
        elif is_punct(first, "::") and _is_name(trees[1] if len(trees) > 1 else None):
            i = 2
        else:
            return False

        while i < len(trees):
            tree = trees[i]
            nxt = trees[i + 1] if i + 1 < len(trees) else None
            if is_punct(tree, "::"):
                if _is_name(nxt):
                    i += 2
                elif is_punct(nxt, "<"):
                    end = skip_generics(trees, i + 1)
                    if end is None:
                        return False
                    i = end
                else:
                    return False
            elif is_punct(tree, "."):
                if _is_name(nxt) or (isinstance(nxt, Token) and nxt.type == TokenType.NUMBER):
                    i += 2
                elif isinstance(nxt, Token) and nxt.is_ident("await"):
                    i += 2
                else:
                    return False
            elif is_group(tree, "(") or is_group(tree, "["):
                i += 1
            elif is_punct(tree, "!") and isinstance(nxt, Group):
                i += 2
            elif is_punct(tree, "?"):
                i += 1
            else:
                return False
        return True

    def parse_head(self, trees: list[TokenTree]) -> ir.HeadKind:
        """
        Classify a head-like region.

        - a single allow-listed identifier → NativeTag
        - a pure path whose last segment matches the component rule → Component
        - anything else → ExpressionHead, used verbatim
        """
        span = trees[0].span.join(trees[-1].span)

        if len(trees) == 1 and isinstance(trees[0], Token) and self.toolkit.is_native(trees[0].value):
            return ir.NativeTag(name=trees[0].value, span=span)

        segments = _path_segments(trees)
        if segments and self.toolkit.is_component_name(segments[-1]):
            path = "".join(t.value for t in trees if isinstance(t, Token))
            return ir.Component(path=path, span=span)

        return ir.ExpressionHead(expr=self.host_expr(trees))


def _path_segments(trees: list[TokenTree]) -> list[str] | None:
    """Return the identifiers of a pure `a::b::C` path, or None."""
    segments: list[str] = []
    expect_name = True
    for i, tree in enumerate(trees):
        if expect_name:
            if i == 0 and is_punct(tree, "::"):
                continue
            if not _is_name(tree):
                return None
            segments.append(tree.value)  # type: ignore[union-attr]
            expect_name = False
        elif is_punct(tree, "::"):
            expect_name = True
        else:
            return None
    if expect_name:
        return None
    return segments
