from __future__ import annotations

from dataclasses import dataclass

import typer

from relkit.core.config import Config, load_config_or_default
from relkit.core.errors import ErrorCode
from relkit.core.project import Project, detect_project
from relkit.core.result import Err
from relkit.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    project: Project
    config: Config
    console: ConsoleProtocol


def build_context() -> CLIContext:
    project_result = detect_project()
    if isinstance(project_result, Err):
        typer.echo(f"error: {project_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    project = project_result.value
    config_result = load_config_or_default(project.config_path)
    if isinstance(config_result, Err):
        typer.echo(f"error: {config_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    return CLIContext(project=project, config=config_result.value, console=RichConsole())
