"""
Toolkit profile: the names of the UI toolkit collaborator contract.

The transformer never calls the toolkit; it only needs to know which names to
emit. Everything here is data so that the native-tag allow-list and the
component naming rule can evolve without touching the parser or generator.
"""

from __future__ import annotations

import re
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_NATIVE_TAGS = ("div", "svg", "img", "canvas", "anchored")


@lru_cache(maxsize=32)
def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern)


class ToolkitProfile(BaseModel):
    """
    Names used when generating builder calls.

    Attributes:
        native_tags: Heads that map to zero-argument constructors, `div()`
        component_pattern: Regex a path's final segment must match to be a
            component with an implicit constructor
        constructor: Implicit component constructor, `Header::new()`
        child_method: Single-child attach, `.child(x)`
        children_method: Multi-child attach, `.children(items)`
        erase_method: Type erasure applied to the deferred child
        deferred_tag: Reserved head name of the deferred wrapper
        deferred_function: Function wrapping the erased child
    """

    native_tags: tuple[str, ...] = Field(default=DEFAULT_NATIVE_TAGS)
    component_pattern: str = r"^[A-Z]"
    constructor: str = "new"
    child_method: str = "child"
    children_method: str = "children"
    erase_method: str = "into_any_element"
    deferred_tag: str = "deferred"
    deferred_function: str = "deferred"

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("component_pattern")
    @classmethod
    def _check_pattern(cls, value: str) -> str:
        try:
            _compile(value)
        except re.error as e:
            raise ValueError(f"invalid component pattern {value!r}: {e}") from e
        return value

    def is_native(self, name: str) -> bool:
        return name in self.native_tags

    def is_component_name(self, segment: str) -> bool:
        """Check if a path segment names a component (uppercase initial by default)."""
        return _compile(self.component_pattern).search(segment) is not None


DEFAULT_TOOLKIT = ToolkitProfile()
