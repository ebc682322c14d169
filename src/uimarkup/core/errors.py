"""
Error types for uimarkup lexing, parsing, generation and configuration.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .ir.location import SourceRange


class MarkupError(Exception):
    """Base exception for all uimarkup errors."""

    def __init__(
        self,
        message: str,
        span: SourceRange | None = None,
        context: ErrorContext | None = None,
    ):
        self.message = message
        self.span = span
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message

    def with_context(self, context: ErrorContext) -> MarkupError:
        """Return a copy of this error carrying source context."""
        return type(self)(self.message, self.span, context)


class MarkupSyntaxError(MarkupError):
    """
    Raised when markup violates the grammar.

    Examples:
    - Empty body or empty attribute list
    - Attribute marker not followed by a bracket group
    - Unterminated delimiter group or string literal
    - Malformed spread or method-chain item
    - Missing body delimiter after a head
    """

    pass


class StructuralError(MarkupError):
    """
    Raised when syntactically valid markup has an invalid shape.

    Examples:
    - `deferred` with zero or several children
    - `deferred` with attributes
    - `deferred` wrapping a spread or method chain
    """

    pass


class ManifestError(MarkupError):
    """
    Raised when a uimarkup.toml manifest cannot be loaded.

    Examples:
    - Unknown keys in the [toolkit] table
    - Wrong value types
    - Invalid component pattern regex
    """

    pass


@dataclass
class ErrorContext:
    """
    Context information for an error, including source location.

    Attributes:
        file: Path to the source file where error occurred
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        snippet: Optional code snippet showing the error location
    """

    file: Path | None
    line: int
    column: int
    snippet: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "view.rs:10:5"
        """
        location = f"{self.file or '<input>'}:{self.line}:{self.column}"

        if self.snippet:
            return f"{location}\n{self.format_snippet()}"
        return location

    def format_snippet(self) -> str:
        """Format code snippet with line numbers and error marker."""
        if not self.snippet:
            return ""

        lines = self.snippet.split("\n")
        formatted = []

        # Snippet shows up to 2 lines before the error line
        start_line = max(1, self.line - 2)

        for i, line in enumerate(lines):
            line_num = start_line + i
            prefix = f"{line_num:4d} | "
            formatted.append(prefix + line)

            if line_num == self.line:
                marker_pos = len(prefix) + self.column - 1
                formatted.append(" " * marker_pos + "^^^")

        return "\n".join(formatted)


def make_syntax_error(message: str, span: SourceRange | None) -> MarkupSyntaxError:
    """
    Helper to create a MarkupSyntaxError at a span.

    Args:
        message: Error description
        span: Source range of the offending token or group

    Returns:
        MarkupSyntaxError without file context (added by the caller that owns
        the source text)
    """
    return MarkupSyntaxError(message, span)


def make_structural_error(message: str, span: SourceRange | None) -> StructuralError:
    """Helper to create a StructuralError at a span."""
    return StructuralError(message, span)


def make_manifest_error(message: str, file: Path | None = None) -> ManifestError:
    """
    Helper to create a ManifestError with optional file context.

    Args:
        message: Error description
        file: Optional manifest path

    Returns:
        ManifestError with context if a file is given
    """
    if file:
        return ManifestError(message, context=ErrorContext(file=file, line=1, column=1))
    return ManifestError(message)
