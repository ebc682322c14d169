"""
uimarkup command-line interface.

Commands:
- compile: compile one markup body and print the generated expression
- expand: expand every `ui! { ... }` invocation in a host source file
- check: report diagnostics for host source files without writing output

Environment Variables:
    LOG_LEVEL - Logging level when --verbose is not given (default: WARNING)
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.text import Text

from uimarkup import __version__
from uimarkup.core.codegen import compile_markup
from uimarkup.core.diagnostics import Diagnostic, render_diagnostic, to_diagnostic
from uimarkup.core.errors import ManifestError, MarkupError
from uimarkup.core.expander import expand_source
from uimarkup.core.manifest import ProjectManifest, find_manifest, load_manifest

logger = logging.getLogger("uimarkup.cli")

console = Console(soft_wrap=True, highlight=False)
err_console = Console(stderr=True, soft_wrap=True, highlight=False)


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"uimarkup version {__version__}")
        typer.echo(f"Python {platform.python_implementation()} {platform.python_version()}")
        raise typer.Exit()


app = typer.Typer(
    help="""uimarkup – declarative UI markup to builder-call chains

  • compile: markup body → expression
  • expand:  host source with ui! { ... } → host source
  • check:   report markup errors in host sources
""",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """uimarkup CLI main callback for global options."""
    log_level = "DEBUG" if verbose else os.getenv("LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


# =============================================================================
# Helpers
# =============================================================================


def _resolve_manifest(manifest: Path | None, near: Path | None) -> ProjectManifest:
    """Load an explicit manifest, else the nearest uimarkup.toml, else defaults."""
    path = manifest
    if path is None:
        path = find_manifest(near if near is not None else Path.cwd())
    if path is None:
        return ProjectManifest()
    logger.debug("Using manifest %s", path)
    try:
        return load_manifest(path)
    except ManifestError as e:
        err_console.print(Text(f"Config error: {e}", style="bold red"))
        raise typer.Exit(code=2) from None


def _read_file(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        err_console.print(Text(f"Cannot read {path}: {e.strerror}", style="bold red"))
        raise typer.Exit(code=2) from None


def _print_human_diagnostic(diagnostic: Diagnostic, source: str | None, file: Path | None) -> None:
    rendered = render_diagnostic(diagnostic, source, file)
    header, _, snippet = rendered.partition("\n")
    err_console.print(Text(header, style="bold red"))
    if snippet:
        err_console.print(Text(snippet))


def _print_vscode_diagnostic(diagnostic: Diagnostic, file: Path | None) -> None:
    """Print a diagnostic in VS Code format: file:line:col: severity: message"""
    typer.echo(f"{diagnostic.location(file)}: {diagnostic.severity}: {diagnostic.message}", err=True)


# =============================================================================
# Commands
# =============================================================================


@app.command(name="compile")
def compile_command(
    source: Path = typer.Argument(  # noqa: B008
        None, help="File containing one markup body (reads stdin if omitted)"
    ),
    expr: str = typer.Option(None, "--expr", "-e", help="Markup text to compile"),
    pretty: bool = typer.Option(False, "--pretty", "-p", help="Lay out long chains over lines"),
    manifest: Path = typer.Option(  # noqa: B008
        None, "--manifest", "-m", help="Path to uimarkup.toml"
    ),
) -> None:
    """
    Compile a single markup body and print the generated expression.
    """
    if source is not None and expr is not None:
        err_console.print(Text("Give either SOURCE or --expr, not both", style="bold red"))
        raise typer.Exit(code=2)

    if expr is not None:
        text, file = expr, None
    elif source is not None:
        text, file = _read_file(source), source
    else:
        text, file = sys.stdin.read(), None

    mf = _resolve_manifest(manifest, source)
    try:
        output = compile_markup(text, mf.toolkit, pretty=pretty, file=file)
    except MarkupError as e:
        _print_human_diagnostic(to_diagnostic(e), text, file)
        raise typer.Exit(code=1) from None
    typer.echo(output)


@app.command(name="expand")
def expand_command(
    file: Path = typer.Argument(..., help="Host source file containing ui! invocations"),  # noqa: B008
    output: Path = typer.Option(  # noqa: B008
        None, "--output", "-o", help="Write expanded source here instead of stdout"
    ),
    manifest: Path = typer.Option(  # noqa: B008
        None, "--manifest", "-m", help="Path to uimarkup.toml"
    ),
) -> None:
    """
    Expand every markup invocation in a host source file.

    Failing invocations are replaced with compile_error!(...) and reported;
    the exit code is 1 if any invocation failed.
    """
    text = _read_file(file)
    mf = _resolve_manifest(manifest, file)
    result = expand_source(text, mf.toolkit, mf.expand.macro_name, file=file)

    for diagnostic in result.diagnostics:
        _print_human_diagnostic(diagnostic, text, file)

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(result.text, encoding="utf-8")
        err_console.print(
            Text(f"Expanded {result.expanded} invocation(s) into {output}", style="green")
        )
    else:
        typer.echo(result.text, nl=False)

    if not result.ok:
        raise typer.Exit(code=1)


@app.command(name="check")
def check_command(
    files: list[Path] = typer.Argument(..., help="Host source files to check"),  # noqa: B008
    format: str = typer.Option(
        "human", "--format", "-f", help="Output format: 'human' or 'vscode'"
    ),
    manifest: Path = typer.Option(  # noqa: B008
        None, "--manifest", "-m", help="Path to uimarkup.toml"
    ),
) -> None:
    """
    Report markup diagnostics for host source files without writing output.
    """
    if format not in ("human", "vscode"):
        err_console.print(
            Text(f"Unknown format {format!r}: use 'human' or 'vscode'", style="bold red")
        )
        raise typer.Exit(code=2)

    errors = 0
    invocations = 0
    for file in files:
        text = _read_file(file)
        mf = _resolve_manifest(manifest, file)
        result = expand_source(text, mf.toolkit, mf.expand.macro_name, file=file)
        invocations += result.expanded + len(result.diagnostics)
        errors += len(result.diagnostics)
        for diagnostic in result.diagnostics:
            if format == "vscode":
                _print_vscode_diagnostic(diagnostic, file)
            else:
                _print_human_diagnostic(diagnostic, text, file)

    if errors:
        if format == "human":
            err_console.print(
                Text(f"Found {errors} error(s) in {invocations} invocation(s)", style="bold red")
            )
        raise typer.Exit(code=1)

    if format == "vscode":
        typer.echo("::notice: Markup check successful")
    else:
        console.print(Text(f"OK: {invocations} invocation(s) in {len(files)} file(s)", style="green"))


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


if __name__ == "__main__":
    main(sys.argv[1:])
