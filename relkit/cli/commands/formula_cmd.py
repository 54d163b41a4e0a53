from __future__ import annotations

import typer

from relkit.cli.commands._helpers import fail
from relkit.cli.context import build_context
from relkit.core.result import Err, Ok
from relkit.services.formula import FormulaService


def formula(
    version: str = typer.Argument(..., help="Released version (tag v<version> must exist)"),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Print the formula instead of writing it."
    ),
) -> None:
    """Generate the Homebrew formula for a tagged release."""
    ctx = build_context()
    service = FormulaService(project=ctx.project, config=ctx.config, console=ctx.console)
    match service.generate(version, dry_run=dry_run):
        case Ok(out) if out.written:
            shown = out.path
            if shown.is_relative_to(ctx.project.root):
                shown = shown.relative_to(ctx.project.root)
            ctx.console.success(f"Wrote {shown}")
        case Ok(out):
            ctx.console.print(out.content.rstrip("\n"))
        case Err(error):
            fail(error, ctx.console)
