"""
Base parser class for uimarkup.

Provides the token-tree helpers shared by all parser mixins: item splitting
at top-level commas, region rendering and error construction.

The parser works on token trees rather than a flat cursor. A delimiter group
is always an atomic tree, so finding the end of an item only requires looking
for a comma at the current level. Host expressions are never parsed; they are
captured as opaque regions and re-rendered as text.
"""

from __future__ import annotations

from ..errors import make_structural_error, make_syntax_error
from ..ir.location import SourceRange
from ..ir.markup import HostExpr
from ..lexer import Group, Token, TokenTree, TokenType, render_text, trees_span
from ..toolkit import DEFAULT_TOOLKIT, ToolkitProfile

# Net nesting change of punctuation inside a turbofish `::<...>` list
ANGLE_DELTA = {"<": 1, "<<": 2, ">": -1, ">>": -2, ">=": -1, ">>=": -2}


def is_punct(tree: TokenTree | None, value: str) -> bool:
    return isinstance(tree, Token) and tree.is_punct(value)


def is_group(tree: TokenTree | None, delimiter: str) -> bool:
    return isinstance(tree, Group) and tree.delimiter == delimiter


def describe(tree: TokenTree) -> str:
    """Short human-readable description of a token tree for messages."""
    if isinstance(tree, Group):
        return f"`{tree.delimiter}...`"
    return f"`{tree.value}`"


class BaseParser:
    """
    Base parser class with token-tree utilities.

    This class provides the foundation for recursive descent parsing over
    token trees: splitting, rendering and error generation.
    """

    def __init__(
        self,
        trees: list[TokenTree],
        eof: Token,
        toolkit: ToolkitProfile | None = None,
    ):
        """
        Initialize parser.

        Args:
            trees: Token trees of one markup invocation
            eof: Token marking the end of the invocation (for error spans)
            toolkit: Naming rules for native tags and components
        """
        self.trees = trees
        self.eof = eof
        self.toolkit = toolkit or DEFAULT_TOOLKIT

    def syntax_error(self, message: str, span: SourceRange):
        return make_syntax_error(message, span)

    def structural_error(self, message: str, span: SourceRange):
        return make_structural_error(message, span)

    def host_expr(self, trees: list[TokenTree]) -> HostExpr:
        """Capture a non-empty region as an opaque host expression."""
        return HostExpr(text=render_text(trees), span=trees_span(trees))

    def span_of(self, trees: list[TokenTree]) -> SourceRange:
        return trees_span(trees)

    def split_items(self, trees: list[TokenTree]) -> list[list[TokenTree]]:
        """
        Split a token-tree sequence at top-level commas.

        Commas inside delimiter groups are invisible at this level. Commas
        inside a turbofish generic list (`::<A, B>`) or inside the parameter
        list of a closure that starts the item or an attribute value
        (`|a, b| ...`, `name: move |a, b| ...`) do not split either. A single
        trailing comma is allowed.

        Raises:
            MarkupSyntaxError: If an item between two commas is empty
        """
        items: list[list[TokenTree]] = []
        current: list[TokenTree] = []
        angle_depth = 0
        in_closure_params = False
        prev: TokenTree | None = None

        for tree in trees:
            if isinstance(tree, Token) and tree.type == TokenType.PUNCT:
                if angle_depth:
                    angle_depth = max(0, angle_depth + ANGLE_DELTA.get(tree.value, 0))
                elif tree.value == "<" and is_punct(prev, "::"):
                    angle_depth = 1
                elif in_closure_params:
                    if tree.value == "|":
                        in_closure_params = False
                elif tree.value == "|" and self._at_item_start(current):
                    in_closure_params = True
                elif tree.value == ",":
                    if not current:
                        raise self.syntax_error(
                            "Empty item: expected a child or attribute before `,`",
                            tree.span,
                        )
                    items.append(current)
                    current = []
                    prev = tree
                    continue
            current.append(tree)
            prev = tree

        if current:
            items.append(current)
        return items

    @staticmethod
    def _at_item_start(current: list[TokenTree]) -> bool:
        """True if a `|` here opens closure params: at item start or after `name:`."""
        head = current
        if len(head) >= 2 and is_punct(head[1], ":"):
            first = head[0]
            if not (isinstance(first, Token) and first.type == TokenType.IDENT):
                return False
            head = head[2:]
        if not head:
            return True
        return len(head) == 1 and isinstance(head[0], Token) and head[0].is_ident("move")
