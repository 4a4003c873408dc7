"""Command-line interface for critpath."""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from .config import EngineConfig, discover_config, set_config_path
from .exceptions import CritpathError
from .logger import setup_logger
from .models import ProjectData
from .parser import ProjectParser, write_project_file
from .report import render_dot, render_text
from .service import PertService
from .store import InMemoryTaskStore

app = typer.Typer(
    name="critpath",
    help="PERT/CPM critical path analysis for project task lists",
    add_completion=False,
)


class OutputFormat(Enum):
    """Output formats of the schedule command."""

    JSON = "json"
    TEXT = "text"
    DOT = "dot"


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbosity level: 0=silent (default), 1=stage summaries, 2=per-task values, 3=debug",
            min=0,
            max=3,
        ),
    ] = 0,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to engine config file (default: critpath_config.yaml)",
        ),
    ] = None,
) -> None:
    """Global options for critpath commands."""
    setup_logger(verbose)
    set_config_path(config)


def _load(file: Path) -> tuple[ProjectData, PertService]:
    """Parse a project file and build a service around it, exiting on errors."""
    try:
        project = ProjectParser().parse_file(file)
        config: EngineConfig = discover_config(file)
    except (CritpathError, FileNotFoundError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e
    return project, PertService(InMemoryTaskStore([project]), config)


def _emit(text: str, output: Path | None, what: str) -> None:
    if output:
        output.write_text(text, encoding="utf-8")
        typer.echo(f"{what} written to {output}")
    else:
        typer.echo(text, nl=False)


@app.command()
def schedule(
    file: Annotated[Path, typer.Argument(help="Path to the project YAML/JSON file")],
    *,
    output_format: Annotated[
        OutputFormat, typer.Option("--format", "-f", help="Output format")
    ] = OutputFormat.JSON,
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Output file path")] = None,
) -> None:
    """Compute early/late times, slack and the critical path."""
    project, service = _load(file)
    response = service.generate(project.project_id)

    if not response.ok:
        typer.echo(f"Error: {response.error}", err=True)
        if output_format == OutputFormat.JSON:
            typer.echo(json.dumps(response.to_dict(), indent=2))
        raise typer.Exit(1)

    if output_format == OutputFormat.TEXT:
        rendered = render_text(response)
    elif output_format == OutputFormat.DOT:
        rendered = render_dot(response)
    else:
        rendered = json.dumps(response.to_dict(), indent=2) + "\n"

    _emit(rendered, output, "Schedule")


@app.command()
def debug(
    file: Annotated[Path, typer.Argument(help="Path to the project YAML/JSON file")],
) -> None:
    """Show raw and cleaned duration fields of every task."""
    project, service = _load(file)
    report = service.debug(project.project_id)
    typer.echo(report.model_dump_json(indent=2))


@app.command("fix-durations")
def fix_durations(
    file: Annotated[Path, typer.Argument(help="Path to the project YAML/JSON file")],
    *,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write here instead of updating the file in place"),
    ] = None,
) -> None:
    """Replace placeholder three-point estimates with the task duration."""
    project, service = _load(file)
    tasks, fixed = service.fix_durations(project.project_id)

    updated = ProjectData(
        project_id=project.project_id,
        title=project.title,
        tasks=tasks,
        dependencies=project.dependencies,
    )
    target = output or file
    write_project_file(updated, target)
    typer.echo(f"Fixed {fixed} tasks, written to {target}")


@app.command("check-dependency")
def check_dependency(
    file: Annotated[Path, typer.Argument(help="Path to the project YAML/JSON file")],
    predecessor: Annotated[str, typer.Argument(help="ID of the task that must finish first")],
    successor: Annotated[str, typer.Argument(help="ID of the task that waits for it")],
) -> None:
    """Check whether a new dependency can be added to the project."""
    project, service = _load(file)
    try:
        dependency = service.check_dependency(project.project_id, predecessor, successor)
    except CritpathError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e
    typer.echo(f"OK: {dependency} can be added")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
