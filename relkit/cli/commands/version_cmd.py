from __future__ import annotations

import typer

from relkit.cli.commands._helpers import fail
from relkit.cli.context import build_context
from relkit.core.result import Err, Ok
from relkit.services.version import VersionService

version_app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Read or change the package version in the manifest.",
)


@version_app.command("show")
def show() -> None:
    """Print the current package version."""
    ctx = build_context()
    service = VersionService(project=ctx.project, config=ctx.config)
    match service.show():
        case Ok(version):
            ctx.console.print(version)
        case Err(error):
            fail(error, ctx.console)


@version_app.command("set")
def set_version(
    version: str = typer.Argument(..., help="Exact semver, e.g. 0.2.3"),
) -> None:
    """Set the manifest version to an exact value."""
    ctx = build_context()
    service = VersionService(project=ctx.project, config=ctx.config)
    match service.set(version):
        case Ok(change):
            if change.changed:
                ctx.console.success(f"Set {service.manifest_path.name} version to {change.current}")
            else:
                ctx.console.success(f"{service.manifest_path.name} already at {change.current}")
        case Err(error):
            fail(error, ctx.console)


@version_app.command("bump")
def bump(
    kind: str = typer.Argument(..., help="patch|minor|major"),
) -> None:
    """Bump the manifest version (drops any prerelease/build suffix)."""
    ctx = build_context()
    service = VersionService(project=ctx.project, config=ctx.config)
    match service.bump(kind):
        case Ok(change):
            ctx.console.print(f"{change.previous} -> {change.current}")
        case Err(error):
            fail(error, ctx.console)
