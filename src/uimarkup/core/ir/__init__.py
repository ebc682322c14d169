"""
Intermediate representations for uimarkup.

- ``markup``: the parsed markup tree (input side)
- ``output``: the generated call-expression tree (output side)
- ``location``: source ranges shared by both
"""

from .location import SourceRange
from .markup import (
    Attribute,
    ChildItem,
    Component,
    DeferredElement,
    Element,
    ExpressionHead,
    Flag,
    HeadKind,
    HostExpr,
    KeyMultiValue,
    KeyValue,
    LiteralChild,
    Markup,
    MethodChainChild,
    NativeTag,
    NestedChild,
    PassThrough,
    SpreadChild,
)
from .output import Call, ChainSplice, Code, MethodCall, Paren, Raw, chain_length

__all__ = [
    # Location
    "SourceRange",
    # Markup tree
    "Attribute",
    "ChildItem",
    "Component",
    "DeferredElement",
    "Element",
    "ExpressionHead",
    "Flag",
    "HeadKind",
    "HostExpr",
    "KeyMultiValue",
    "KeyValue",
    "LiteralChild",
    "Markup",
    "MethodChainChild",
    "NativeTag",
    "NestedChild",
    "PassThrough",
    "SpreadChild",
    # Generated code
    "Call",
    "ChainSplice",
    "Code",
    "MethodCall",
    "Paren",
    "Raw",
    "chain_length",
]
