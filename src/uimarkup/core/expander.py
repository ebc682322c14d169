"""
Host-source expansion for uimarkup.

Finds every ``ui! { ... }`` invocation in a host source file, compiles each
body independently and splices the generated expression in its place:

    let view = ui! { div @[flex] { "Hello" } };

    → let view = div().flex().child("Hello");

A failing invocation is replaced by a ``compile_error!("...")`` call carrying
its diagnostic; the other invocations in the file are still expanded.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from .codegen import generate
from .diagnostics import Diagnostic, compile_error_call, to_diagnostic
from .errors import MarkupError
from .lexer import Group, Token, TokenTree, lex
from .markup_parser import parse_trees
from .toolkit import DEFAULT_TOOLKIT, ToolkitProfile

logger = logging.getLogger(__name__)


@dataclass
class Invocation:
    """One macro invocation found in host source."""

    name: Token
    body: Group

    @property
    def start(self) -> int:
        return self.name.start

    @property
    def end(self) -> int:
        return self.body.close.end


@dataclass
class ExpansionResult:
    """
    Outcome of expanding one host source file.

    Attributes:
        text: Source with every invocation replaced
        diagnostics: One entry per failed invocation (or one for a file that
            cannot be lexed)
        expanded: Number of invocations compiled successfully
    """

    text: str
    diagnostics: list[Diagnostic] = field(default_factory=list)
    expanded: int = 0

    @property
    def ok(self) -> bool:
        return not self.diagnostics


def find_invocations(trees: list[TokenTree], macro_name: str = "ui") -> Iterator[Invocation]:
    """
    Yield ``<macro_name>! <group>`` invocations in source order.

    Bodies of matched invocations are not searched.
    """
    i = 0
    while i < len(trees):
        tree = trees[i]
        if isinstance(tree, Group):
            yield from find_invocations(tree.trees, macro_name)
        elif (
            tree.is_ident(macro_name)
            and i + 2 < len(trees)
            and isinstance(trees[i + 1], Token)
            and trees[i + 1].is_punct("!")  # type: ignore[union-attr]
            and isinstance(trees[i + 2], Group)
        ):
            yield Invocation(name=tree, body=trees[i + 2])  # type: ignore[arg-type]
            i += 3
            continue
        i += 1


def expand_invocation(invocation: Invocation, toolkit: ToolkitProfile) -> str:
    """
    Compile one invocation body to host text.

    Raises:
        MarkupError: If the body does not parse
    """
    markup = parse_trees(invocation.body.trees, invocation.body.close, toolkit)
    return str(generate(markup, toolkit))


def expand_source(
    text: str,
    toolkit: ToolkitProfile | None = None,
    macro_name: str = "ui",
    file: Path | None = None,
) -> ExpansionResult:
    """
    Expand every markup invocation in host source text.

    Args:
        text: Host source text
        toolkit: Names of the toolkit contract
        macro_name: Name of the invocation macro (``ui`` for ``ui! { ... }``)
        file: Optional source path, used only in log messages

    Returns:
        ExpansionResult with the rewritten text and per-invocation diagnostics
    """
    toolkit = toolkit or DEFAULT_TOOLKIT
    try:
        trees, _ = lex(text)
    except MarkupError as e:
        logger.warning("Cannot lex %s: %s", file or "<input>", e.message)
        return ExpansionResult(text=text, diagnostics=[to_diagnostic(e)])

    parts: list[str] = []
    diagnostics: list[Diagnostic] = []
    expanded = 0
    cursor = 0

    for invocation in find_invocations(trees, macro_name):
        parts.append(text[cursor : invocation.start])
        try:
            parts.append(expand_invocation(invocation, toolkit))
            expanded += 1
        except MarkupError as e:
            diagnostic = to_diagnostic(e)
            diagnostics.append(diagnostic)
            parts.append(compile_error_call(diagnostic))
            logger.debug("Invocation at %s failed: %s", invocation.name.span, e.message)
        cursor = invocation.end
    parts.append(text[cursor:])

    logger.info(
        "Expanded %d invocation(s) in %s with %d error(s)",
        expanded,
        file or "<input>",
        len(diagnostics),
    )
    return ExpansionResult(text="".join(parts), diagnostics=diagnostics, expanded=expanded)
