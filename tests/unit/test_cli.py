"""Tests for CLI commands."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from uimarkup.cli import app


@pytest.fixture
def cli_runner():
    """Return a CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run every command from an empty directory so no manifest is picked up."""
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    return workdir


class TestCompileCommand:
    """`uimarkup compile`"""

    def test_inline_expression(self, cli_runner: CliRunner):
        result = cli_runner.invoke(app, ["compile", "-e", 'div @[flex] { "Hello" }'])
        assert result.exit_code == 0
        assert result.stdout == 'div().flex().child("Hello")\n'

    def test_source_file(self, cli_runner: CliRunner, tmp_path: Path):
        source = tmp_path / "card.ui"
        source.write_text("Card {\n    ..rows,\n}\n")
        result = cli_runner.invoke(app, ["compile", str(source)])
        assert result.exit_code == 0
        assert result.stdout.strip() == "Card::new().children(rows)"

    def test_stdin(self, cli_runner: CliRunner):
        result = cli_runner.invoke(app, ["compile"], input="svg {}")
        assert result.exit_code == 0
        assert result.stdout.strip() == "svg()"

    def test_pretty(self, cli_runner: CliRunner):
        markup = 'div @[flex, flex_col, gap: px(8.0)] { "a very long child string", ..more_items }'
        result = cli_runner.invoke(app, ["compile", "--pretty", "-e", markup])
        assert result.exit_code == 0
        assert result.stdout.splitlines()[0] == "div()"

    def test_syntax_error(self, cli_runner: CliRunner):
        result = cli_runner.invoke(app, ["compile", "-e", "div @[] {}"])
        assert result.exit_code == 1
        assert "<input>:1:6: error[syntax]: Empty attribute list" in result.output
        assert "^^^" in result.output

    def test_source_and_expression_conflict(self, cli_runner: CliRunner, tmp_path: Path):
        source = tmp_path / "a.ui"
        source.write_text("div {}")
        result = cli_runner.invoke(app, ["compile", str(source), "-e", "div {}"])
        assert result.exit_code == 2

    def test_manifest_option(self, cli_runner: CliRunner, project_dir: Path):
        manifest = project_dir / "uimarkup.toml"
        result = cli_runner.invoke(app, ["compile", "-m", str(manifest), "-e", "span {}"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "span()"

    def test_invalid_manifest(self, cli_runner: CliRunner, tmp_path: Path):
        manifest = tmp_path / "uimarkup.toml"
        manifest.write_text('[toolkit]\nbogus = 1\n')
        result = cli_runner.invoke(app, ["compile", "-m", str(manifest), "-e", "div {}"])
        assert result.exit_code == 2
        assert "Config error" in result.output


class TestExpandCommand:
    """`uimarkup expand`"""

    def test_expand_uses_nearest_manifest(self, cli_runner: CliRunner, project_dir: Path):
        result = cli_runner.invoke(app, ["expand", str(project_dir / "src" / "app.rs")])
        assert result.exit_code == 0
        assert result.stdout == 'fn app() -> Div { span().child("hi") }\n'

    def test_expand_to_file(self, cli_runner: CliRunner, tmp_path: Path):
        source = tmp_path / "view.rs"
        source.write_text("fn v() -> Div { ui! { div {} } }\n")
        out = tmp_path / "out" / "view.rs"
        result = cli_runner.invoke(app, ["expand", str(source), "-o", str(out)])
        assert result.exit_code == 0
        assert out.read_text() == "fn v() -> Div { div() }\n"

    def test_expand_failure(self, cli_runner: CliRunner, tmp_path: Path):
        source = tmp_path / "view.rs"
        source.write_text("fn v() -> Div { ui! { deferred {} } }\n")
        result = cli_runner.invoke(app, ["expand", str(source)])
        assert result.exit_code == 1
        assert "compile_error!" in result.output
        assert "exactly one child" in result.output

    def test_missing_file(self, cli_runner: CliRunner, tmp_path: Path):
        result = cli_runner.invoke(app, ["expand", str(tmp_path / "nope.rs")])
        assert result.exit_code == 2


class TestCheckCommand:
    """`uimarkup check`"""

    def test_clean_file(self, cli_runner: CliRunner, tmp_path: Path, host_source: str):
        source = tmp_path / "view.rs"
        source.write_text(host_source)
        result = cli_runner.invoke(app, ["check", str(source)])
        assert result.exit_code == 0
        assert "OK: 2 invocation(s) in 1 file(s)" in result.output

    def test_vscode_format(self, cli_runner: CliRunner, tmp_path: Path):
        source = tmp_path / "view.rs"
        source.write_text("let a = ui! { div @[] {} };\n")
        result = cli_runner.invoke(app, ["check", "--format", "vscode", str(source)])
        assert result.exit_code == 1
        assert f"{source}:1:20: error: Empty attribute list" in result.output

    def test_human_format_summary(self, cli_runner: CliRunner, tmp_path: Path):
        good = tmp_path / "good.rs"
        good.write_text("ui! { div {} }")
        bad = tmp_path / "bad.rs"
        bad.write_text("ui! { div {} div {} }")
        result = cli_runner.invoke(app, ["check", str(good), str(bad)])
        assert result.exit_code == 1
        assert "Found 1 error(s) in 2 invocation(s)" in result.output

    def test_unknown_format(self, cli_runner: CliRunner, tmp_path: Path):
        source = tmp_path / "view.rs"
        source.write_text("")
        result = cli_runner.invoke(app, ["check", "--format", "json", str(source)])
        assert result.exit_code == 2


def test_version(cli_runner: CliRunner):
    """--version prints the version and exits."""
    result = cli_runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "uimarkup version" in result.stdout
