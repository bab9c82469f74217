from __future__ import annotations

import typer

from fdl_parser.cli.commands.check import check_command
from fdl_parser.cli.commands.export import export_command
from fdl_parser.cli.commands.view import view_command

app = typer.Typer(
    name="fdl",
    help="FDL parser, checker, viewer and exporter",
    add_completion=False,
)

app.command("check")(check_command)
app.command("view")(view_command)
app.command("export")(export_command)


def main():
    app()


if __name__ == "__main__":
    main()
