"""
Diagnostics for uimarkup.

Converts parser and generator failures into positioned, human-readable
messages. The message text is the only contract; there is no error-code
scheme.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .errors import ErrorContext, ManifestError, MarkupError, StructuralError
from .ir.location import SourceRange

SNIPPET_CONTEXT_LINES = 2


@dataclass(frozen=True)
class Diagnostic:
    """
    One reported problem.

    Attributes:
        message: Human-readable explanation
        span: Source range the message points at (None if unknown)
        severity: "error" for everything the transformer reports today
        category: "syntax", "structure" or "config"
    """

    message: str
    span: SourceRange | None
    severity: str = "error"
    category: str = "syntax"

    def location(self, file: Path | None = None) -> str:
        where = str(file) if file else "<input>"
        if self.span is None:
            return where
        return f"{where}:{self.span.line}:{self.span.column}"


def to_diagnostic(error: MarkupError) -> Diagnostic:
    """Convert a raised MarkupError into a Diagnostic."""
    if isinstance(error, StructuralError):
        category = "structure"
    elif isinstance(error, ManifestError):
        category = "config"
    else:
        category = "syntax"
    return Diagnostic(message=error.message, span=error.span, category=category)


def source_snippet(source: str, span: SourceRange) -> str:
    """Return the lines around ``span`` (up to two before and two after)."""
    lines = source.split("\n")
    first = max(1, span.line - SNIPPET_CONTEXT_LINES)
    last = min(len(lines), span.line + SNIPPET_CONTEXT_LINES)
    return "\n".join(lines[first - 1 : last])


def attach_context(error: MarkupError, source: str, file: Path | None = None) -> MarkupError:
    """
    Return ``error`` with an ErrorContext built from its span.

    Errors without a span, or that already carry context, are returned as-is.
    """
    if error.span is None or error.context is not None:
        return error
    context = ErrorContext(
        file=file,
        line=error.span.line,
        column=error.span.column,
        snippet=source_snippet(source, error.span),
    )
    return error.with_context(context)


def render_diagnostic(diagnostic: Diagnostic, source: str | None = None, file: Path | None = None) -> str:
    """
    Format a diagnostic for terminal output.

    Example:
        view.rs:3:17: error[syntax]: Empty attribute list `@[]`: ...
           1 | fn render() {
           2 |     ui! {
           3 |         div @[] {}
                            ^^^
    """
    label = f"{diagnostic.severity}[{diagnostic.category}]"
    header = f"{diagnostic.location(file)}: {label}: {diagnostic.message}"
    if source is None or diagnostic.span is None:
        return header
    context = ErrorContext(
        file=file,
        line=diagnostic.span.line,
        column=diagnostic.span.column,
        snippet=source_snippet(source, diagnostic.span),
    )
    return f"{header}\n{context.format_snippet()}"


def compile_error_call(diagnostic: Diagnostic) -> str:
    """Render a diagnostic as a host `compile_error!` invocation."""
    escaped = (
        diagnostic.message.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    )
    return f'compile_error!("{escaped}")'
