"""
Code generation for uimarkup.

Walks a parsed Markup tree bottom-up and produces one nested builder-call
expression per element:

    div @[flex, w: px(200.0)] { "Hello", ..items, .when(c, f) }

    → div().flex().w(px(200.0)).child("Hello").children(items).when(c, f)

Order is always base → attributes (as written) → children and chain
insertions (as written). Generation is deterministic and total over the trees
the parser accepts.
"""

from __future__ import annotations

import logging
from pathlib import Path

from . import ir
from .classifier import resolve_base
from .formatter import format_code
from .markup_parser import parse_markup
from .toolkit import DEFAULT_TOOLKIT, ToolkitProfile

logger = logging.getLogger(__name__)


def generate(markup: ir.Markup, toolkit: ToolkitProfile | None = None) -> ir.Code:
    """
    Generate the call expression for a parsed invocation.

    Args:
        markup: Parsed tree
        toolkit: Names of the toolkit contract; defaults to the GPUI profile

    Returns:
        Generated expression tree
    """
    return _generate_node(markup.root, toolkit or DEFAULT_TOOLKIT)


def _generate_node(
    node: ir.Element | ir.DeferredElement | ir.PassThrough,
    toolkit: ToolkitProfile,
) -> ir.Code:
    if isinstance(node, ir.Element):
        return generate_element(node, toolkit)
    if isinstance(node, ir.DeferredElement):
        return generate_deferred(node, toolkit)
    if isinstance(node, ir.PassThrough):
        return ir.Raw(text=node.expr.text)
    raise TypeError(f"unknown markup node: {type(node).__name__}")


def generate_element(element: ir.Element, toolkit: ToolkitProfile = DEFAULT_TOOLKIT) -> ir.Code:
    """Base expression, then attributes, then children, each folded in order."""
    code = resolve_base(element.head, toolkit)
    code = append_attributes(code, element.attributes)
    code = append_children(code, element.children, toolkit)
    return code


def generate_deferred(element: ir.DeferredElement, toolkit: ToolkitProfile = DEFAULT_TOOLKIT) -> ir.Code:
    """`deferred { x }` → `deferred((x).into_any_element())`."""
    child = element.child
    if isinstance(child, ir.NestedChild):
        inner = _generate_node(child.element, toolkit)
    else:
        inner = ir.Raw(text=child.expr.text)
    erased = ir.MethodCall(receiver=ir.Paren(inner=inner), method=toolkit.erase_method)
    return ir.Call(callee=toolkit.deferred_function, args=[erased])


def append_attributes(code: ir.Code, attributes: list[ir.Attribute]) -> ir.Code:
    """Fold attributes left-to-right into chained calls."""
    for attr in attributes:
        if isinstance(attr, ir.Flag):
            code = ir.MethodCall(receiver=code, method=attr.name)
        elif isinstance(attr, ir.KeyValue):
            code = ir.MethodCall(receiver=code, method=attr.name, args=[ir.Raw(text=attr.value.text)])
        elif isinstance(attr, ir.KeyMultiValue):
            args: list[ir.Code] = [ir.Raw(text=v.text) for v in attr.values]
            code = ir.MethodCall(receiver=code, method=attr.name, args=args)
        else:
            raise TypeError(f"unknown attribute: {type(attr).__name__}")
    return code


def append_children(
    code: ir.Code,
    children: list[ir.ChildItem],
    toolkit: ToolkitProfile = DEFAULT_TOOLKIT,
) -> ir.Code:
    """Fold children left-to-right, threading the running expression."""
    for child in children:
        if isinstance(child, ir.LiteralChild):
            code = ir.MethodCall(
                receiver=code, method=toolkit.child_method, args=[ir.Raw(text=child.expr.text)]
            )
        elif isinstance(child, ir.SpreadChild):
            code = ir.MethodCall(
                receiver=code, method=toolkit.children_method, args=[ir.Raw(text=child.expr.text)]
            )
        elif isinstance(child, ir.NestedChild):
            nested = _generate_node(child.element, toolkit)
            code = ir.MethodCall(receiver=code, method=toolkit.child_method, args=[nested])
        elif isinstance(child, ir.MethodChainChild):
            code = ir.ChainSplice(receiver=code, chain=child.chain.text)
        else:
            raise TypeError(f"unknown child item: {type(child).__name__}")
    return code


def compile_markup(
    text: str,
    toolkit: ToolkitProfile | None = None,
    pretty: bool = False,
    file: Path | None = None,
) -> str:
    """
    Compile one markup body to host source text.

    Args:
        text: Markup source (the inside of a `ui! { ... }` invocation)
        toolkit: Names of the toolkit contract
        pretty: Lay the result out over several lines when it is long
        file: Optional source file, used only in error messages

    Returns:
        Generated expression text

    Raises:
        MarkupError: On the first syntax or structural violation
    """
    markup = parse_markup(text, toolkit, file)
    code = generate(markup, toolkit)
    logger.debug("Generated %d chained calls", ir.chain_length(code))
    return format_code(code) if pretty else str(code)
