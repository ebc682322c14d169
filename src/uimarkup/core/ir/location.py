"""Source range tracking for markup nodes.

Records where a markup construct was written, enabling positioned
diagnostics. Ranges never influence generated code.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class SourceRange(BaseModel):
    """Half-open character range in the source text.

    Attributes:
        start: Offset of the first character
        end: Offset one past the last character
        line: 1-indexed line number of ``start``
        column: 1-indexed column number of ``start``
    """

    start: int
    end: int
    line: int = 1
    column: int = 1

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"

    def join(self, other: SourceRange) -> SourceRange:
        """Smallest range covering both ``self`` and ``other``."""
        first = self if self.start <= other.start else other
        return SourceRange(
            start=first.start,
            end=max(self.end, other.end),
            line=first.line,
            column=first.column,
        )
