"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdxfolio.cli.commands import build_cmd, check_cmd, list_cmd, show_cmd


app = typer.Typer(name="mdxfolio", no_args_is_help=True, help="MDX blog content tools")

app.command(name="build")(build_cmd)
app.command(name="check")(check_cmd)
app.command(name="list")(list_cmd)
app.command(name="show")(show_cmd)
