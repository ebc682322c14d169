"""Shared pytest fixtures for uimarkup tests."""

from pathlib import Path

import pytest

from uimarkup.core.toolkit import ToolkitProfile


@pytest.fixture
def toolkit() -> ToolkitProfile:
    """Return the default GPUI-style toolkit profile."""
    return ToolkitProfile()


@pytest.fixture
def host_source() -> str:
    """Return a host source file with two markup invocations."""
    return """use gpui::*;

fn render(items: Vec<Item>) -> impl IntoElement {
    let header = ui! { Header @[title: "Inbox"] {} };
    ui! {
        div @[flex, flex_col] {
            header,
            ..items,
        }
    }
}
"""


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Create a temporary project with a manifest and a host source file."""
    (tmp_path / "uimarkup.toml").write_text(
        """
[toolkit]
native_tags = ["div", "span"]

[expand]
macro_name = "view"
"""
    )
    src = tmp_path / "src"
    src.mkdir()
    (src / "app.rs").write_text('fn app() -> Div { view! { span { "hi" } } }\n')
    return tmp_path
