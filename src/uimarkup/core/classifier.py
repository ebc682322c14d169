"""
Head classifier for uimarkup.

Maps an element head to the strategy used to build its base expression.
Pure: no I/O and no state.
"""

from __future__ import annotations

from enum import StrEnum

from . import ir
from .toolkit import DEFAULT_TOOLKIT, ToolkitProfile


class GenerationStrategy(StrEnum):
    """How the base expression of an element is produced."""

    NATIVE_CONSTRUCTOR = "native_constructor"  # div()
    IMPLICIT_CONSTRUCTOR = "implicit_constructor"  # Header::new()
    VERBATIM = "verbatim"  # Header::with_label("x")


def _has_call_syntax(path: str) -> bool:
    return any(c in path for c in "().<>![]")


def classify(head: ir.HeadKind) -> GenerationStrategy:
    """
    Decide the generation strategy for a head.

    The Component/Expression boundary is syntactic: a component path that
    already carries call parentheses or chaining is used verbatim.
    """
    if isinstance(head, ir.NativeTag):
        return GenerationStrategy.NATIVE_CONSTRUCTOR
    if isinstance(head, ir.Component):
        if _has_call_syntax(head.path):
            return GenerationStrategy.VERBATIM
        return GenerationStrategy.IMPLICIT_CONSTRUCTOR
    if isinstance(head, ir.ExpressionHead):
        return GenerationStrategy.VERBATIM
    raise TypeError(f"unknown head kind: {type(head).__name__}")


def resolve_base(head: ir.HeadKind, toolkit: ToolkitProfile = DEFAULT_TOOLKIT) -> ir.Code:
    """Build the base expression of an element from its head."""
    strategy = classify(head)
    if strategy is GenerationStrategy.NATIVE_CONSTRUCTOR:
        assert isinstance(head, ir.NativeTag)
        return ir.Call(callee=head.name)
    if strategy is GenerationStrategy.IMPLICIT_CONSTRUCTOR:
        assert isinstance(head, ir.Component)
        return ir.Call(callee=f"{head.path}::{toolkit.constructor}")
    if isinstance(head, ir.Component):
        return ir.Raw(text=head.path)
    return ir.Raw(text=head.expr.text)
