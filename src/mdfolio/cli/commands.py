"""CLI command implementations"""

from pathlib import Path
from typing import Annotated, Optional

import typer

from mdfolio.config import Settings, configure_logging, load_config
from mdfolio.core.models import FolderNode
from mdfolio.core.pipeline import make_cache, run_build, run_watch, site_tree
from mdfolio.core.watch import Change


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling, then set up logging."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    configure_logging(settings.log_level)
    return settings


def _echo_tree(nodes: list, depth: int = 0) -> None:
    for node in nodes:
        indent = "  " * depth
        if isinstance(node, FolderNode):
            typer.echo(f"{indent}{node.name}/")
            _echo_tree(node.children, depth + 1)
        else:
            typer.echo(f"{indent}{node.name} [{node.id}] ({len(node.blocks)} blocks)")


def build_cmd(
    content: Annotated[Optional[str], typer.Option("--content-dir", help="Content root directory")] = None,
    out: Annotated[Optional[str], typer.Option("--out", "-o", help="Output file")] = None,
    fmt: Annotated[Optional[str], typer.Option("--format", help="json or js")] = None,
    root: Annotated[Optional[str], typer.Option("--root-file", help="YAML file of hand-authored root entries")] = None,
    html: Annotated[Optional[bool], typer.Option("--html/--no-html", help="Render text blocks to HTML")] = None,
    ):
    """Compile the content root into the generated tree file."""
    settings = _settings(overrides={
        "content_dir": content, "output_file": out, "output_format": fmt,
        "root_file": root, "render_html": html,
    })
    try:
        tree, path = run_build(settings)
    except (ValueError, RuntimeError, OSError) as e:
        _fail("Build failed", e)
    typer.echo(f"Built {len(tree)} top-level node(s) -> {path}")


def watch_cmd(
    content: Annotated[Optional[str], typer.Option("--content-dir", help="Content root directory")] = None,
    out: Annotated[Optional[str], typer.Option("--out", "-o", help="Output file")] = None,
    fmt: Annotated[Optional[str], typer.Option("--format", help="json or js")] = None,
    interval: Annotated[Optional[float], typer.Option("--interval", help="Poll interval in seconds")] = None,
    ):
    """Build, then rebuild and signal a full reload whenever a content file changes."""
    settings = _settings(overrides={
        "content_dir": content, "output_file": out, "output_format": fmt, "poll_interval": interval,
    })

    def reload(changes: list[Change]) -> None:
        typer.echo(f"full-reload ({len(changes)} change(s))")

    try:
        run_watch(settings, on_reload=reload)
    except (ValueError, RuntimeError, OSError) as e:
        _fail("Watch failed", e)
    except KeyboardInterrupt:
        typer.echo("Stopped watching.")


def list_cmd(
    content: Annotated[Optional[str], typer.Option("--content-dir", help="Content root directory")] = None,
    ):
    """Print the navigation tree as an outline."""
    settings = _settings(overrides={"content_dir": content})
    try:
        tree = site_tree(settings, make_cache(settings))
    except (ValueError, OSError) as e:
        _fail("Could not build tree", e)
    if not tree:
        typer.echo(f"No content found under {Path(settings.content_dir)}.")
        raise typer.Exit(1)
    _echo_tree(tree)
