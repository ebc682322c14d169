"""
Pretty printer for generated code.

The compact form (``str(code)``) puts a whole tree on one line. Long trees are
laid out with one chained call per line, indented under their base:

    div()
        .flex()
        .child(
            Header::new()
                .title("x"),
        )
        .children(items)

Layout only changes whitespace between tokens; the token sequence is the same
as the compact form.
"""

from __future__ import annotations

from . import ir

DEFAULT_INDENT = 4
DEFAULT_WIDTH = 80


def format_code(code: ir.Code, indent: int = DEFAULT_INDENT, width: int = DEFAULT_WIDTH) -> str:
    """
    Lay out generated code for reading.

    Args:
        code: Generated expression tree
        indent: Spaces per nesting level
        width: Preferred maximum line width

    Returns:
        Formatted source text (no trailing newline)
    """
    return _CodeFormatter(indent, width).format(code, 0)


class _CodeFormatter:
    def __init__(self, indent: int, width: int):
        self.indent = indent
        self.width = width

    def pad(self, level: int) -> str:
        return " " * (self.indent * level)

    def fits(self, text: str, level: int) -> bool:
        return "\n" not in text and len(text) + self.indent * level <= self.width

    def format(self, code: ir.Code, level: int) -> str:
        compact = str(code)
        if self.fits(compact, level):
            return compact

        base, links = _unchain(code)
        head = self.format_base(base, level)
        # Links after a broken paren line up with its closing `)`
        link_level = level if isinstance(base, ir.Paren) and "\n" in head else level + 1
        lines = [head]
        for link in links:
            if isinstance(link, ir.MethodCall):
                args = self.format_args(link.args, link_level, len(link.method) + 1)
                lines.append(f"{self.pad(link_level)}.{link.method}{args}")
            else:
                lines.append(f"{self.pad(link_level)}{link.chain}")
        return "\n".join(lines)

    def format_base(self, base: ir.Code, level: int) -> str:
        if isinstance(base, ir.Call):
            return base.callee + self.format_args(base.args, level, len(base.callee))
        if isinstance(base, ir.Paren):
            compact = str(base)
            if self.fits(compact, level):
                return compact
            inner = self.format(base.inner, level + 1)
            return f"(\n{self.pad(level + 1)}{inner}\n{self.pad(level)})"
        return str(base)

    def format_args(self, args: list[ir.Code], level: int, prefix: int) -> str:
        if not args:
            return "()"
        compact = "(" + ", ".join(str(a) for a in args) + ")"
        if self.fits(compact, level) and len(compact) + prefix + self.indent * level <= self.width:
            return compact
        lines = ["("]
        for arg in args:
            lines.append(f"{self.pad(level + 1)}{self.format(arg, level + 1)},")
        lines.append(f"{self.pad(level)})")
        return "\n".join(lines)


def _unchain(code: ir.Code) -> tuple[ir.Code, list[ir.MethodCall | ir.ChainSplice]]:
    """Split a chain into its base and its links, in call order."""
    links: list[ir.MethodCall | ir.ChainSplice] = []
    while isinstance(code, ir.MethodCall | ir.ChainSplice):
        links.append(code)
        code = code.receiver
    links.reverse()
    return code, links
