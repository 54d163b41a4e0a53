from __future__ import annotations

import os
from pathlib import Path

import typer

from relkit import __version__
from relkit.cli.commands.build_cmd import build, build_number
from relkit.cli.commands.formula_cmd import formula
from relkit.cli.commands.version_cmd import version_app
from relkit.core.errors import ErrorCode
from relkit.core.project import ROOT_ENV_VAR


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command("build-number")(build_number)
app.command(context_settings={"allow_extra_args": True, "ignore_unknown_options": True})(build)
app.command()(formula)

# Sub-apps
app.add_typer(version_app, name="version")


def _print_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        callback=_print_version,
        is_eager=True,
        help="Show version and exit.",
    ),
    root: Path | None = typer.Option(
        None,
        "--root",
        help="Project root (overrides auto detection)",
    ),
) -> None:
    if root is not None:
        try:
            resolved = root.expanduser().resolve()
        except OSError as e:
            typer.echo(f"error: invalid --root: {e}", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))

        if not resolved.is_dir():
            typer.echo(f"error: --root '{resolved}' is not a directory", err=True)
            raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

        os.environ[ROOT_ENV_VAR] = str(resolved)


def main() -> None:
    app()
