"""Tests for the uimarkup lexer and token-tree builder.

Covers:
- Token kinds for identifiers, literals, lifetimes and punctuation
- Comment skipping and whitespace tracking
- Delimiter grouping and its error cases
- Normalized re-rendering of token regions
"""

from __future__ import annotations

import pytest

from uimarkup.core.errors import MarkupSyntaxError
from uimarkup.core.lexer import Group, TokenType, build_token_trees, lex, render_text, tokenize


def kinds(text: str) -> list[TokenType]:
    return [t.type for t in tokenize(text)]


def values(text: str) -> list[str]:
    return [t.value for t in tokenize(text)][:-1]


# ============================================================================
# Tokenizer tests
# ============================================================================


class TestTokenizer:
    """Tokenizer produces correct token sequences."""

    def test_identifiers_and_eof(self) -> None:
        assert kinds("div flex_col") == [TokenType.IDENT, TokenType.IDENT, TokenType.EOF]

    def test_string_with_escapes(self) -> None:
        tokens = tokenize(r'"say \"hi\""')
        assert tokens[0].type == TokenType.STRING
        assert tokens[0].value == r'"say \"hi\""'

    def test_raw_and_byte_strings(self) -> None:
        tokens = tokenize('r#"a "quoted" b"# b"bytes"')
        assert [t.type for t in tokens[:2]] == [TokenType.STRING, TokenType.STRING]
        assert tokens[0].value == 'r#"a "quoted" b"#'

    def test_char_and_lifetime(self) -> None:
        tokens = tokenize("'x' '\\n' 'static")
        assert [t.type for t in tokens[:3]] == [TokenType.CHAR, TokenType.CHAR, TokenType.LIFETIME]

    def test_numbers(self) -> None:
        assert values("200.0 0xFF 1_000u32 1e-3") == ["200.0", "0xFF", "1_000u32", "1e-3"]

    def test_range_is_not_a_float(self) -> None:
        assert values("0..10") == ["0", "..", "10"]

    def test_tuple_field_access(self) -> None:
        assert values("pair.0") == ["pair", ".", "0"]

    def test_multi_char_punct_longest_first(self) -> None:
        assert values("..= .. ... :: ->") == ["..=", "..", "...", "::", "->"]

    def test_line_comment_skipped(self) -> None:
        assert values('"a" // a comment\n"b"') == ['"a"', '"b"']

    def test_nested_block_comment_skipped(self) -> None:
        assert values("a /* outer /* inner */ still */ b") == ["a", "b"]

    def test_spaced_flag(self) -> None:
        tokens = tokenize("a.b c")
        assert [t.spaced for t in tokens[:4]] == [False, False, False, True]

    def test_positions(self) -> None:
        tokens = tokenize("div\n  @[flex]")
        at = tokens[1]
        assert (at.line, at.column, at.start) == (2, 3, 6)

    def test_unterminated_string(self) -> None:
        with pytest.raises(MarkupSyntaxError, match="Unterminated string"):
            tokenize('"never closed')

    def test_unterminated_block_comment(self) -> None:
        with pytest.raises(MarkupSyntaxError, match="Unterminated block comment"):
            tokenize("/* open")

    def test_unexpected_character(self) -> None:
        with pytest.raises(MarkupSyntaxError, match="Unexpected character"):
            tokenize("div \\ x")


# ============================================================================
# Token tree tests
# ============================================================================


class TestTokenTrees:
    """Delimiters are grouped into nested token trees."""

    def test_groups_nest(self) -> None:
        trees, _ = lex("div { a(1, [2]) }")
        assert len(trees) == 2
        body = trees[1]
        assert isinstance(body, Group) and body.delimiter == "{"
        call = body.trees[1]
        assert isinstance(call, Group) and call.delimiter == "("
        assert isinstance(call.trees[-1], Group) and call.trees[-1].delimiter == "["

    def test_empty_group(self) -> None:
        trees, _ = lex("{}")
        assert isinstance(trees[0], Group) and trees[0].is_empty

    def test_eof_token_returned(self) -> None:
        _, eof = lex("a b")
        assert eof.type == TokenType.EOF and eof.start == 3

    def test_unterminated_group(self) -> None:
        with pytest.raises(MarkupSyntaxError, match="Unterminated delimiter group"):
            lex("div { a")

    def test_mismatched_closer(self) -> None:
        with pytest.raises(MarkupSyntaxError, match="Mismatched closing delimiter"):
            lex("div { a )")

    def test_unexpected_closer(self) -> None:
        with pytest.raises(MarkupSyntaxError, match="Unexpected closing delimiter"):
            build_token_trees(tokenize("a }"))


class TestRenderText:
    """Regions are re-rendered with normalized whitespace."""

    def test_whitespace_collapses_to_one_space(self) -> None:
        trees, _ = lex("format!(\"{}\",\n      name)")
        assert render_text(trees) == 'format!("{}", name)'

    def test_comments_become_spaces(self) -> None:
        trees, _ = lex("a /* c */ + b")
        assert render_text(trees) == "a + b"

    def test_no_space_added(self) -> None:
        trees, _ = lex("px(200.0)")
        assert render_text(trees) == "px(200.0)"
