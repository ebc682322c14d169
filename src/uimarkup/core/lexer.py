"""
Lexer/Tokenizer for uimarkup.

Converts raw host source text (Rust-flavoured syntax) into a stream of tokens
with source location tracking, then groups matched delimiters into token
trees the way a procedural-macro token stream is shaped.

Comments are skipped; every token remembers whether whitespace or a comment
preceded it so that expression regions can be re-rendered as normalized text.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from .errors import make_syntax_error
from .ir.location import SourceRange

logger = logging.getLogger(__name__)


class TokenType(Enum):
    """Token types in the host token stream."""

    IDENT = "identifier"
    LIFETIME = "lifetime"
    STRING = "string"
    CHAR = "char"
    NUMBER = "number"
    PUNCT = "punctuation"
    OPEN = "opening delimiter"
    CLOSE = "closing delimiter"
    EOF = "end of input"


# Longest first so that greedy matching picks e.g. `..=` over `..`
MULTI_CHAR_PUNCT = (
    "<<=",
    ">>=",
    "...",
    "..=",
    "::",
    "..",
    "->",
    "=>",
    "==",
    "!=",
    "<=",
    ">=",
    "&&",
    "||",
    "+=",
    "-=",
    "*=",
    "/=",
    "%=",
    "^=",
    "&=",
    "|=",
    "<<",
    ">>",
)

SINGLE_CHAR_PUNCT = set("+-*/%^!&|=<>@.,;:#$?~")

OPENERS = {"(": ")", "[": "]", "{": "}"}
CLOSERS = {v: k for k, v in OPENERS.items()}

# Prefixes that turn a following quote into a string literal
STRING_PREFIXES = {"b", "r", "br", "c", "cr"}


@dataclass
class Token:
    """
    A single token in the host stream.

    Attributes:
        type: Type of token
        value: Source text of the token
        start: Offset of the first character
        end: Offset one past the last character
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        spaced: True when whitespace or a comment precedes the token
    """

    type: TokenType
    value: str
    start: int
    end: int
    line: int
    column: int
    spaced: bool = False

    def __repr__(self) -> str:
        return f"Token({self.type.value}, {self.value!r}, {self.line}:{self.column})"

    @property
    def span(self) -> SourceRange:
        return SourceRange(start=self.start, end=self.end, line=self.line, column=self.column)

    def is_punct(self, value: str) -> bool:
        return self.type == TokenType.PUNCT and self.value == value

    def is_ident(self, value: str | None = None) -> bool:
        if self.type != TokenType.IDENT:
            return False
        return value is None or self.value == value


@dataclass
class Group:
    """
    A matched delimiter pair and the token trees between them.

    Attributes:
        delimiter: Opening character: "(", "[" or "{"
        open: The opening token
        close: The closing token
        trees: Token trees inside the delimiters
    """

    delimiter: str
    open: Token
    close: Token
    trees: list[TokenTree] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"Group({self.delimiter}{OPENERS[self.delimiter]}, {len(self.trees)} trees, {self.open.line}:{self.open.column})"

    @property
    def span(self) -> SourceRange:
        return SourceRange(
            start=self.open.start,
            end=self.close.end,
            line=self.open.line,
            column=self.open.column,
        )

    @property
    def spaced(self) -> bool:
        return self.open.spaced

    @property
    def is_empty(self) -> bool:
        return not self.trees


TokenTree = Token | Group


class Lexer:
    """
    Lexer for host source text.

    Converts source text into a flat list of tokens ending with EOF.
    """

    def __init__(self, text: str):
        """
        Initialize lexer.

        Args:
            text: Source text to tokenize
        """
        self.text = text
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: list[Token] = []
        self.pending_space = False

    def current_char(self) -> str | None:
        """Get current character or None if at end."""
        if self.pos >= len(self.text):
            return None
        return self.text[self.pos]

    def peek_char(self, offset: int = 1) -> str | None:
        """Peek ahead at character."""
        pos = self.pos + offset
        if pos >= len(self.text):
            return None
        return self.text[pos]

    def advance(self, count: int = 1) -> None:
        """Move forward, updating line/column."""
        for _ in range(count):
            if self.pos < len(self.text):
                if self.text[self.pos] == "\n":
                    self.line += 1
                    self.column = 1
                else:
                    self.column += 1
                self.pos += 1

    def here(self) -> SourceRange:
        return SourceRange(start=self.pos, end=self.pos + 1, line=self.line, column=self.column)

    def skip_whitespace(self) -> None:
        """Skip whitespace characters, including newlines."""
        while (char := self.current_char()) is not None and char.isspace():
            self.pending_space = True
            self.advance()

    def skip_line_comment(self) -> None:
        """Skip comment (from // to end of line)."""
        while self.current_char() and self.current_char() != "\n":
            self.advance()
        self.pending_space = True

    def skip_block_comment(self) -> None:
        """Skip a /* */ comment; block comments nest."""
        start = self.here()
        depth = 0
        while True:
            char = self.current_char()
            if char is None:
                raise make_syntax_error("Unterminated block comment", start)
            if char == "/" and self.peek_char() == "*":
                depth += 1
                self.advance(2)
            elif char == "*" and self.peek_char() == "/":
                depth -= 1
                self.advance(2)
                if depth == 0:
                    break
            else:
                self.advance()
        self.pending_space = True

    def read_quoted(self, start: SourceRange, quote: str, what: str) -> None:
        """Advance past a quoted literal body (opening quote already consumed)."""
        while True:
            char = self.current_char()
            if char is None:
                raise make_syntax_error(f"Unterminated {what} literal", start)
            if char == "\\":
                self.advance(2)
                continue
            self.advance()
            if char == quote:
                return

    def read_raw_string(self, start: SourceRange) -> None:
        """Advance past r#"..."# (prefix letters already consumed)."""
        hashes = 0
        while self.current_char() == "#":
            hashes += 1
            self.advance()
        if self.current_char() != '"':
            raise make_syntax_error("Malformed raw string literal", start)
        self.advance()
        terminator = '"' + "#" * hashes
        end = self.text.find(terminator, self.pos)
        if end < 0:
            raise make_syntax_error("Unterminated raw string literal", start)
        self.advance(end + len(terminator) - self.pos)

    def read_number(self) -> None:
        """
        Read a numeric literal, including suffixes and separators.

        A `.` belongs to the number only when a digit follows it, so ranges
        such as `0..10` and tuple access such as `pair.0` tokenize correctly.
        """
        is_hex = self.current_char() == "0" and self.peek_char() in ("x", "X")
        seen_dot = False
        while (char := self.current_char()) is not None:
            if char.isalnum() or char == "_":
                if not is_hex and char in "eE" and self.peek_char() in ("+", "-"):
                    self.advance(2)
                    continue
                self.advance()
            elif char == "." and not seen_dot and (self.peek_char() or "").isdigit():
                seen_dot = True
                self.advance()
            else:
                break

    def read_identifier(self) -> None:
        """Read an identifier or keyword."""
        while (char := self.current_char()) is not None and (char.isalnum() or char == "_"):
            self.advance()

    def emit(self, token_type: TokenType, start: int, line: int, column: int) -> None:
        self.tokens.append(
            Token(
                type=token_type,
                value=self.text[start : self.pos],
                start=start,
                end=self.pos,
                line=line,
                column=column,
                spaced=self.pending_space,
            )
        )
        self.pending_space = False

    def tokenize(self) -> list[Token]:
        """
        Tokenize the entire source text.

        Returns:
            List of tokens ending with EOF

        Raises:
            MarkupSyntaxError: If an unterminated literal or comment, or an
                unknown character, is encountered
        """
        while True:
            self.skip_whitespace()
            char = self.current_char()
            if char is None:
                break

            start, line, column = self.pos, self.line, self.column
            here = self.here()

            # Comments
            if char == "/" and self.peek_char() == "/":
                self.skip_line_comment()
                continue
            if char == "/" and self.peek_char() == "*":
                self.skip_block_comment()
                continue

            # Identifiers, raw identifiers and prefixed string literals
            if char.isalpha() or char == "_":
                self.read_identifier()
                word = self.text[start : self.pos]
                nxt = self.current_char()
                if word in STRING_PREFIXES and nxt == '"':
                    if "r" in word:
                        self.read_raw_string(here)
                    else:
                        self.advance()
                        self.read_quoted(here, '"', "string")
                    self.emit(TokenType.STRING, start, line, column)
                elif word in ("r", "br", "cr") and nxt == "#":
                    if word == "r" and (self.peek_char() or "").isidentifier():
                        # r#ident
                        self.advance()
                        self.read_identifier()
                        self.emit(TokenType.IDENT, start, line, column)
                    else:
                        self.read_raw_string(here)
                        self.emit(TokenType.STRING, start, line, column)
                elif word == "b" and nxt == "'":
                    self.advance()
                    self.read_quoted(here, "'", "byte")
                    self.emit(TokenType.CHAR, start, line, column)
                else:
                    self.emit(TokenType.IDENT, start, line, column)
                continue

            if char.isdigit():
                self.read_number()
                self.emit(TokenType.NUMBER, start, line, column)
                continue

            if char == '"':
                self.advance()
                self.read_quoted(here, '"', "string")
                self.emit(TokenType.STRING, start, line, column)
                continue

            # Char literal or lifetime
            if char == "'":
                nxt = self.peek_char()
                if nxt == "\\" or (nxt is not None and self.peek_char(2) == "'"):
                    self.advance()
                    self.read_quoted(here, "'", "character")
                    self.emit(TokenType.CHAR, start, line, column)
                elif nxt is not None and (nxt.isalpha() or nxt == "_"):
                    self.advance()
                    self.read_identifier()
                    self.emit(TokenType.LIFETIME, start, line, column)
                else:
                    raise make_syntax_error("Malformed character literal", here)
                continue

            if char in OPENERS:
                self.advance()
                self.emit(TokenType.OPEN, start, line, column)
                continue
            if char in CLOSERS:
                self.advance()
                self.emit(TokenType.CLOSE, start, line, column)
                continue

            for punct in MULTI_CHAR_PUNCT:
                if self.text.startswith(punct, self.pos):
                    self.advance(len(punct))
                    self.emit(TokenType.PUNCT, start, line, column)
                    break
            else:
                if char in SINGLE_CHAR_PUNCT:
                    self.advance()
                    self.emit(TokenType.PUNCT, start, line, column)
                else:
                    raise make_syntax_error(f"Unexpected character {char!r}", here)

        self.tokens.append(
            Token(
                type=TokenType.EOF,
                value="",
                start=self.pos,
                end=self.pos,
                line=self.line,
                column=self.column,
                spaced=self.pending_space,
            )
        )
        return self.tokens


def tokenize(text: str) -> list[Token]:
    """
    Convenience function to tokenize host source text.

    Args:
        text: Source text to tokenize

    Returns:
        List of tokens ending with EOF
    """
    lexer = Lexer(text)
    return lexer.tokenize()


def build_token_trees(tokens: list[Token]) -> list[TokenTree]:
    """
    Group matched delimiters into token trees.

    Args:
        tokens: Flat token list, optionally ending with EOF

    Returns:
        Top-level token trees (EOF excluded)

    Raises:
        MarkupSyntaxError: On an unterminated delimiter group, or a closing
            delimiter that is unexpected or does not match its opener
    """
    root: list[TokenTree] = []
    # Stack of (opening token, trees collected inside it)
    stack: list[tuple[Token, list[TokenTree]]] = []
    current = root

    for token in tokens:
        if token.type == TokenType.EOF:
            break
        if token.type == TokenType.OPEN:
            stack.append((token, current))
            current = []
            continue
        if token.type == TokenType.CLOSE:
            if not stack:
                raise make_syntax_error(
                    f"Unexpected closing delimiter `{token.value}` with no matching "
                    f"`{CLOSERS[token.value]}`",
                    token.span,
                )
            opener, parent = stack.pop()
            if OPENERS[opener.value] != token.value:
                raise make_syntax_error(
                    f"Mismatched closing delimiter: expected `{OPENERS[opener.value]}` to "
                    f"close `{opener.value}` opened at {opener.line}:{opener.column}, "
                    f"found `{token.value}`",
                    token.span,
                )
            parent.append(Group(delimiter=opener.value, open=opener, close=token, trees=current))
            current = parent
            continue
        current.append(token)

    if stack:
        opener, _ = stack[-1]
        raise make_syntax_error(
            f"Unterminated delimiter group: `{opener.value}` is never closed "
            f"(expected `{OPENERS[opener.value]}`)",
            opener.span,
        )

    return root


def lex(text: str) -> tuple[list[TokenTree], Token]:
    """
    Tokenize text and build its token trees.

    Returns:
        Tuple of (top-level token trees, EOF token)
    """
    tokens = tokenize(text)
    trees = build_token_trees(tokens)
    logger.debug("Lexed %d tokens into %d top-level trees", len(tokens) - 1, len(trees))
    return trees, tokens[-1]


def iter_tokens(trees: list[TokenTree]):
    """Yield the flat tokens of a token-tree sequence, delimiters included."""
    for tree in trees:
        if isinstance(tree, Group):
            yield tree.open
            yield from iter_tokens(tree.trees)
            yield tree.close
        else:
            yield tree


def render_text(trees: list[TokenTree]) -> str:
    """
    Render token trees as normalized source text.

    Tokens keep their original text; any whitespace or comment between two
    tokens becomes a single space, and none is added where there was none.
    """
    parts: list[str] = []
    for i, token in enumerate(iter_tokens(trees)):
        if i and token.spaced:
            parts.append(" ")
        parts.append(token.value)
    return "".join(parts)


def trees_span(trees: list[TokenTree]) -> SourceRange:
    """Source range covering a non-empty token-tree sequence."""
    return trees[0].span.join(trees[-1].span)
