from __future__ import annotations

import typer

from relkit.cli.commands._helpers import fail
from relkit.cli.context import build_context
from relkit.core.result import Err, Ok
from relkit.services.build import BuildService


def build_number() -> None:
    """Increment the persisted build counter and print the new value."""
    ctx = build_context()
    service = BuildService(project=ctx.project, config=ctx.config, console=ctx.console)
    match service.next_build_number():
        case Ok(n):
            ctx.console.print(str(n))
        case Err(error):
            fail(error, ctx.console)


def build(
    args: list[str] | None = typer.Argument(
        None,
        help="Extra arguments for the build command (after --).",
    ),
    number: int | None = typer.Option(
        None,
        "--build-number",
        min=0,
        help="Use this build number instead of $BUILD_NUMBER or the counter.",
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print the command without running it."),
) -> None:
    """Assign a build number and run the build command with it exported."""
    ctx = build_context()
    service = BuildService(project=ctx.project, config=ctx.config, console=ctx.console)
    match service.build(args or [], build_number=number, dry_run=dry_run):
        case Ok(_):
            pass
        case Err(error):
            fail(error, ctx.console)
