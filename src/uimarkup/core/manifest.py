"""
uimarkup.toml manifest loading.

Example:

    [toolkit]
    native_tags = ["div", "svg", "img", "canvas", "anchored", "span"]
    component_pattern = "^[A-Z]"
    constructor = "new"

    [expand]
    macro_name = "ui"
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .errors import make_manifest_error
from .toolkit import ToolkitProfile

logger = logging.getLogger(__name__)

MANIFEST_NAME = "uimarkup.toml"

_STRING_KEYS = (
    "component_pattern",
    "constructor",
    "child_method",
    "children_method",
    "erase_method",
    "deferred_tag",
    "deferred_function",
)


@dataclass
class ExpandConfig:
    """Host-source expansion configuration."""

    macro_name: str = "ui"


@dataclass
class ProjectManifest:
    """Parsed uimarkup.toml."""

    path: Path | None = None
    toolkit: ToolkitProfile = field(default_factory=ToolkitProfile)
    expand: ExpandConfig = field(default_factory=ExpandConfig)


def _table(data: dict[str, Any], name: str, path: Path) -> dict[str, Any]:
    value = data.get(name, {})
    if not isinstance(value, dict):
        raise make_manifest_error(f"[{name}] must be a table", path)
    return value


def _parse_toolkit(toolkit_data: dict[str, Any], path: Path) -> ToolkitProfile:
    kwargs: dict[str, Any] = {}
    for key, value in toolkit_data.items():
        if key == "native_tags":
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise make_manifest_error("toolkit.native_tags must be a list of strings", path)
            kwargs[key] = tuple(value)
        elif key in _STRING_KEYS:
            if not isinstance(value, str):
                raise make_manifest_error(f"toolkit.{key} must be a string", path)
            kwargs[key] = value
        else:
            raise make_manifest_error(f"Unknown key in [toolkit]: {key!r}", path)

    try:
        return ToolkitProfile(**kwargs)
    except ValidationError as e:
        details = "; ".join(err["msg"] for err in e.errors())
        raise make_manifest_error(f"Invalid [toolkit] table: {details}", path) from e


def _parse_expand(expand_data: dict[str, Any], path: Path) -> ExpandConfig:
    unknown = sorted(set(expand_data) - {"macro_name"})
    if unknown:
        raise make_manifest_error(f"Unknown key in [expand]: {unknown[0]!r}", path)
    macro_name = expand_data.get("macro_name", "ui")
    if not isinstance(macro_name, str) or not macro_name.isidentifier():
        raise make_manifest_error("expand.macro_name must be an identifier string", path)
    return ExpandConfig(macro_name=macro_name)


def load_manifest(path: Path) -> ProjectManifest:
    """
    Load a uimarkup.toml file.

    Missing tables fall back to defaults.

    Raises:
        ManifestError: If the file is not valid TOML or has unknown keys or
            wrongly typed values
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise make_manifest_error(f"Invalid TOML: {e}", path) from e
    except OSError as e:
        raise make_manifest_error(f"Cannot read manifest: {e}", path) from e

    toolkit = _parse_toolkit(_table(data, "toolkit", path), path)
    expand = _parse_expand(_table(data, "expand", path), path)

    logger.info("Loaded manifest %s", path)
    return ProjectManifest(path=path, toolkit=toolkit, expand=expand)


def find_manifest(start: Path) -> Path | None:
    """Find the nearest uimarkup.toml in ``start`` or any parent directory."""
    start = start.resolve()
    directory = start if start.is_dir() else start.parent
    for candidate in (directory, *directory.parents):
        manifest = candidate / MANIFEST_NAME
        if manifest.is_file():
            return manifest
    return None
