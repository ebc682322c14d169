"""Core uimarkup functionality: lexer, markup parser, code generator, expander, manifest."""

from . import ir
from .codegen import compile_markup, generate
from .diagnostics import Diagnostic, render_diagnostic, to_diagnostic
from .errors import (
    ErrorContext,
    ManifestError,
    MarkupError,
    MarkupSyntaxError,
    StructuralError,
)
from .expander import ExpansionResult, expand_source
from .formatter import format_code
from .manifest import ProjectManifest, find_manifest, load_manifest
from .markup_parser import parse_markup
from .toolkit import DEFAULT_TOOLKIT, ToolkitProfile

__all__ = [
    "ir",
    "MarkupError",
    "MarkupSyntaxError",
    "StructuralError",
    "ManifestError",
    "ErrorContext",
    "Diagnostic",
    "to_diagnostic",
    "render_diagnostic",
    "parse_markup",
    "generate",
    "compile_markup",
    "format_code",
    "expand_source",
    "ExpansionResult",
    "ToolkitProfile",
    "DEFAULT_TOOLKIT",
    "ProjectManifest",
    "load_manifest",
    "find_manifest",
]
