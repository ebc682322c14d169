"""
Generated-code types for uimarkup.

The code generator produces a small expression tree rather than a string so
that the same result can be rendered compactly (``str(code)``) or laid out
across lines by ``uimarkup.core.formatter``.

Node shapes:
- Raw("items")                              → items
- Call("div", [])                           → div()
- MethodCall(Call("div", []), "flex", [])   → div().flex()
- ChainSplice(Call("div", []), ".when(c, f)") → div().when(c, f)
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Raw(BaseModel):
    """Host expression text emitted as-is."""

    text: str

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.text


class Call(BaseModel):
    """Free function or associated-function call: ``callee(args)``."""

    callee: str = Field(description="Function path, e.g. 'div' or 'Header::new'")
    args: list[Code] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        args_str = ", ".join(str(a) for a in self.args)
        return f"{self.callee}({args_str})"


class MethodCall(BaseModel):
    """Chained method call: ``receiver.method(args)``."""

    receiver: Code
    method: str
    args: list[Code] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        args_str = ", ".join(str(a) for a in self.args)
        return f"{self.receiver}.{self.method}({args_str})"


class ChainSplice(BaseModel):
    """An opaque chain fragment (starting with ``.``) appended to a receiver."""

    receiver: Code
    chain: str

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.receiver}{self.chain}"


class Paren(BaseModel):
    """Parenthesized expression, used where a method is called on a child."""

    inner: Code

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"({self.inner})"


Code = Raw | Call | MethodCall | ChainSplice | Paren

# Rebuild models for recursive forward references
Call.model_rebuild()
MethodCall.model_rebuild()
ChainSplice.model_rebuild()
Paren.model_rebuild()


def chain_length(code: Code) -> int:
    """Number of chained links (method calls and splices) on ``code``."""
    length = 0
    while isinstance(code, MethodCall | ChainSplice):
        length += 1
        code = code.receiver
    return length
