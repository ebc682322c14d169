"""
Markup tree types for uimarkup.

The parser builds one immutable tree per macro invocation:

    Markup
      └─ Element | DeferredElement | PassThrough
           ├─ head:       NativeTag | Component | ExpressionHead
           ├─ attributes: Flag | KeyValue | KeyMultiValue
           └─ children:   LiteralChild | SpreadChild | NestedChild | MethodChainChild

Each closed variant set is a discriminated union on ``kind``. Host-language
expressions are kept as opaque, normalized text (``HostExpr``); the tree never
interprets them.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from .location import SourceRange


class HostExpr(BaseModel):
    """An opaque host-language expression region."""

    text: str = Field(description="Normalized token text")
    span: SourceRange

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.text


# ---------------------------------------------------------------------------
# Heads
# ---------------------------------------------------------------------------


class NativeTag(BaseModel):
    """An allow-listed toolkit element name, e.g. ``div``."""

    kind: Literal["native"] = "native"
    name: str
    span: SourceRange

    model_config = ConfigDict(frozen=True)


class Component(BaseModel):
    """
    A component path with an uppercase final segment and no call syntax.

    Examples:
        - Component(path="Header") → Header::new()
        - Component(path="widgets::Card") → widgets::Card::new()
    """

    kind: Literal["component"] = "component"
    path: str
    span: SourceRange

    model_config = ConfigDict(frozen=True)

    @property
    def segments(self) -> list[str]:
        return [s for s in self.path.split("::") if s]


class ExpressionHead(BaseModel):
    """Any other head; used verbatim as the base value."""

    kind: Literal["expression"] = "expression"
    expr: HostExpr

    model_config = ConfigDict(frozen=True)

    @property
    def span(self) -> SourceRange:
        return self.expr.span


HeadKind = Annotated[NativeTag | Component | ExpressionHead, Field(discriminator="kind")]


# ---------------------------------------------------------------------------
# Attributes
# ---------------------------------------------------------------------------


class Flag(BaseModel):
    """Bare attribute name: ``flex`` → ``.flex()``."""

    kind: Literal["flag"] = "flag"
    name: str
    span: SourceRange

    model_config = ConfigDict(frozen=True)


class KeyValue(BaseModel):
    """Single-argument attribute: ``w: px(200.0)`` → ``.w(px(200.0))``."""

    kind: Literal["key_value"] = "key_value"
    name: str
    value: HostExpr
    span: SourceRange

    model_config = ConfigDict(frozen=True)


class KeyMultiValue(BaseModel):
    """
    Multi-argument attribute written as a tuple.

    ``when: (cond, |d| d.flex())`` → ``.when(cond, |d| d.flex())``. The tuple
    only groups positional arguments; it is never passed as a value.
    """

    kind: Literal["key_multi_value"] = "key_multi_value"
    name: str
    values: list[HostExpr]
    span: SourceRange

    model_config = ConfigDict(frozen=True)


Attribute = Annotated[Flag | KeyValue | KeyMultiValue, Field(discriminator="kind")]


# ---------------------------------------------------------------------------
# Children
# ---------------------------------------------------------------------------


class LiteralChild(BaseModel):
    """An arbitrary expression attached as one child."""

    kind: Literal["literal"] = "literal"
    expr: HostExpr

    model_config = ConfigDict(frozen=True)

    @property
    def span(self) -> SourceRange:
        return self.expr.span


class SpreadChild(BaseModel):
    """``..items``: an iterable attached in a single call."""

    kind: Literal["spread"] = "spread"
    expr: HostExpr
    span: SourceRange

    model_config = ConfigDict(frozen=True)


class NestedChild(BaseModel):
    """A nested element, generated first and then attached."""

    kind: Literal["nested"] = "nested"
    element: Annotated[Element | DeferredElement, Field(discriminator="kind")]

    model_config = ConfigDict(frozen=True)

    @property
    def span(self) -> SourceRange:
        return self.element.span


class MethodChainChild(BaseModel):
    """``.when(cond, f)``: spliced directly onto the running expression."""

    kind: Literal["method_chain"] = "method_chain"
    chain: HostExpr

    model_config = ConfigDict(frozen=True)

    @property
    def span(self) -> SourceRange:
        return self.chain.span


ChildItem = Annotated[
    LiteralChild | SpreadChild | NestedChild | MethodChainChild,
    Field(discriminator="kind"),
]


# ---------------------------------------------------------------------------
# Elements
# ---------------------------------------------------------------------------


class Element(BaseModel):
    """One markup node: a head, its attributes and its children, in order."""

    kind: Literal["element"] = "element"
    head: HeadKind
    attributes: list[Attribute] = Field(default_factory=list)
    children: list[ChildItem] = Field(default_factory=list)
    span: SourceRange

    model_config = ConfigDict(frozen=True)

    @property
    def is_bare(self) -> bool:
        """True when the element generates only its base expression."""
        return not self.attributes and not self.children


class DeferredElement(BaseModel):
    """The reserved single-child wrapper, e.g. ``deferred { div {} }``."""

    kind: Literal["deferred"] = "deferred"
    name: str
    child: Annotated[LiteralChild | NestedChild, Field(discriminator="kind")]
    span: SourceRange

    model_config = ConfigDict(frozen=True)


class PassThrough(BaseModel):
    """A parenthesized top-level expression, emitted unchanged."""

    kind: Literal["pass_through"] = "pass_through"
    expr: HostExpr

    model_config = ConfigDict(frozen=True)

    @property
    def span(self) -> SourceRange:
        return self.expr.span


class Markup(BaseModel):
    """Root of one parsed macro invocation."""

    root: Annotated[Element | DeferredElement | PassThrough, Field(discriminator="kind")]
    span: SourceRange

    model_config = ConfigDict(frozen=True)


# Rebuild models for recursive forward references
NestedChild.model_rebuild()
Element.model_rebuild()
DeferredElement.model_rebuild()
Markup.model_rebuild()
