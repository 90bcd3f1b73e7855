"""CLI commands for the TeamCity REST client."""

import sys
from typing import Iterable, List, Optional

import structlog
import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .core.config import settings
from .core.exceptions import TeamCityError
from .core.logging import setup_logging
from .models import Build, BuildType, FilterSpec
from .services.teamcity import TeamCity

app = typer.Typer(
    name="teamcity-rest-client",
    help="Query projects, build configurations and builds on a TeamCity server",
    add_completion=False,
)

console = Console()
logger = structlog.get_logger(__name__)


def build_client() -> TeamCity:
    """Client configured from TEAMCITY_* settings."""
    return TeamCity.from_settings(settings)


def _filter_spec(include: Optional[List[str]], exclude: Optional[List[str]]) -> FilterSpec:
    spec = {}
    if include:
        spec["include"] = include
    if exclude:
        spec["exclude"] = exclude
    return spec


def _build_type_table(build_types: Iterable[BuildType], title: str) -> Table:
    table = Table(title=title)
    table.add_column("Id", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Project")
    table.add_column("Web URL")
    for bt in build_types:
        table.add_row(bt.id, bt.name, bt.project_name, bt.web_url)
    return table


def _build_table(builds: Iterable[Build], title: str) -> Table:
    table = Table(title=title)
    table.add_column("Id", style="cyan")
    table.add_column("Build Type")
    table.add_column("Number")
    table.add_column("Status")
    table.add_column("Started")
    table.add_column("Finished")
    for build in builds:
        status = build.status.value
        status_text = f"[green]{status}[/green]" if build.success else f"[red]{status}[/red]"
        table.add_row(
            build.id,
            build.build_type_id,
            build.number,
            status_text,
            build.start_date,
            build.finish_date,
        )
    return table


def _run(command):
    """Run a command against the server, turning client errors into exit code 1."""
    setup_logging()
    try:
        with build_client() as teamcity:
            command(teamcity)
    except TeamCityError as e:
        logger.debug("Command failed", error_code=e.error_code, details=e.details)
        console.print(f"❌ {e.message}", markup=False)
        sys.exit(1)


@app.command()
def version():
    """Show client version."""
    console.print(f"TeamCity REST client v{__version__}")


@app.command()
def config():
    """Show current configuration."""
    table = Table(title="TeamCity REST Client Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Server", f"{settings.scheme}://{settings.host}:{settings.port}")
    table.add_row("User", settings.user or "(anonymous)")
    table.add_row("Password", "***" if settings.password else "")
    table.add_row("Timeout", f"{settings.timeout}s")
    table.add_row("Verify SSL", str(settings.verify_ssl))
    table.add_row("Log Level", settings.log_level)

    console.print(table)


@app.command()
def projects():
    """List projects."""
    def _projects(teamcity: TeamCity):
        table = Table(title=str(teamcity))
        table.add_column("Id", style="cyan")
        table.add_column("Name", style="green")
        table.add_column("Href")
        for project in teamcity.projects():
            table.add_row(project.id, project.name, project.href)
        console.print(table)

    _run(_projects)


@app.command()
def build_types(
    project: str = typer.Argument(..., help="Project id or name"),
    include: Optional[List[str]] = typer.Option(None, "--include", "-i", help="Build type id or name to keep"),
    exclude: Optional[List[str]] = typer.Option(None, "--exclude", "-x", help="Build type id or name to drop"),
):
    """List a project's build configurations."""
    def _build_types(teamcity: TeamCity):
        selected = teamcity.project(project).build_types(_filter_spec(include, exclude))
        console.print(_build_type_table(selected, f"Build types of {project}"))

    _run(_build_types)


@app.command()
def latest_builds(
    project: str = typer.Argument(..., help="Project id or name"),
    include: Optional[List[str]] = typer.Option(None, "--include", "-i", help="Build type id or name to keep"),
    exclude: Optional[List[str]] = typer.Option(None, "--exclude", "-x", help="Build type id or name to drop"),
):
    """Show the most recent build of each of a project's build configurations."""
    def _latest_builds(teamcity: TeamCity):
        latest = teamcity.project(project).latest_builds(_filter_spec(include, exclude))
        console.print(_build_table(latest, f"Latest builds of {project}"))
        if any(not build.success for build in latest):
            sys.exit(2)

    _run(_latest_builds)


@app.command()
def builds(
    project: str = typer.Argument(..., help="Project id or name"),
    status: Optional[str] = typer.Option(None, "--status", "-s", help="Only builds with this status"),
    count: Optional[int] = typer.Option(None, "--count", "-n", help="Maximum number of the project's builds to show"),
):
    """List builds of a project."""
    options = {}
    if status:
        options["status"] = status

    def _builds(teamcity: TeamCity):
        # the server-side count would cap the listing before it is narrowed to the project
        found = teamcity.project(project).builds(**options)[:count]
        console.print(_build_table(found, f"Builds of {project}"))

    _run(_builds)


@app.command()
def build(build_id: str = typer.Argument(..., help="Build id")):
    """Show one build."""
    def _build(teamcity: TeamCity):
        console.print(_build_table([teamcity.build(build_id)], f"Build {build_id}"))

    _run(_build)


def main():
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
