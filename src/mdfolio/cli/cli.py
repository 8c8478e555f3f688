"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdfolio.cli.commands import build_cmd, list_cmd, watch_cmd


app = typer.Typer(name="mdfolio", no_args_is_help=True, help="Portfolio content compiler")

app.command(name="build")(build_cmd)
app.command(name="watch")(watch_cmd)
app.command(name="list")(list_cmd)
