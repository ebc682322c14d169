"""
uimarkup - declarative UI markup compiled to builder-call chains.

Turns a brace-delimited tree such as

    div @[flex] { "Hello", Header { "x" } }

into the equivalent chained builder expression

    div().flex().child("Hello").child(Header::new().child("x"))
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version

# Re-export commonly used types for convenience
from .core import ir
from .core.codegen import compile_markup, generate
from .core.errors import ManifestError, MarkupError, MarkupSyntaxError, StructuralError
from .core.expander import ExpansionResult, expand_source
from .core.formatter import format_code
from .core.manifest import load_manifest
from .core.markup_parser import parse_markup
from .core.toolkit import ToolkitProfile


def _get_version() -> str:
    """Get version from installed package metadata."""
    try:
        return _metadata_version("uimarkup")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _get_version()

__all__ = [
    "__version__",
    "ir",
    "compile_markup",
    "parse_markup",
    "generate",
    "format_code",
    "expand_source",
    "ExpansionResult",
    "ToolkitProfile",
    "load_manifest",
    "MarkupError",
    "MarkupSyntaxError",
    "StructuralError",
    "ManifestError",
]
