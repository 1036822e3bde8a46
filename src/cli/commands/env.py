"""Environment CLI commands.

This module provides commands for keeping several named sets of kw config
files in one project and switching between them.

Commands:
    list    - List the environments of this project
    create  - Create an environment from the current config files
    use     - Make an environment active
    exit    - Leave environment mode
    destroy - Remove an environment and its cache directory
    current - Print the active environment

The older flag interface is also accepted on the group itself,
e.g. ``kw env --create arm`` or ``kw env -u arm``.
"""

from typing import Annotated

import typer

from src.cli.context import get_cli_context
from src.cli.shared.console import console, with_error_handling
from src.envs.manager import EnvironmentManager
from src.utils.paths import display_path

# ---------------------------------------------------------------------------
# Typer App
# ---------------------------------------------------------------------------

app = typer.Typer(
    name="env",
    help="🗂️  Manage kw config environments for this project",
)


def _get_manager(assume_yes: bool = False) -> EnvironmentManager:
    """Create an EnvironmentManager for the current directory."""
    return get_cli_context().env_manager(assume_yes=assume_yes)


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def _list_envs() -> None:
    listing = _get_manager().list_environments()

    if listing.is_empty:
        console.info(
            "kw did not find any environment. You can create a new one with "
            "'kw env create <NAME>'."
        )
        console.print("[dim]See kw env --help[/dim]")
        return

    if listing.current:
        console.print("[bold]Current env:[/bold]")
        console.print(f" -> [green]{listing.current}[/green]")

    console.print("[bold]All kw environments set for your local folder:[/bold]")
    for name in listing.names:
        marker = "[green]*[/green]" if name == listing.current else " "
        console.print(f" {marker} {name}")


def _create_env(name: str) -> None:
    manager = _get_manager()
    env_dir = manager.create(name)
    project_root = manager.paths.project_root
    console.ok(f"Created the '{name}' environment in {display_path(env_dir, project_root)}")


def _use_env(name: str) -> None:
    _get_manager().use(name)
    console.ok(f"Now using the '{name}' environment.")


def _exit_env(yes: bool) -> None:
    if _get_manager(assume_yes=yes).exit():
        console.ok("You left the environment feature.")


def _destroy_env(name: str, yes: bool) -> None:
    _get_manager(assume_yes=yes).destroy(name)
    console.ok(f'The "{name}" environment has been destroyed.')


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.callback(invoke_without_command=True)
@with_error_handling
def env(
    ctx: typer.Context,
    list_envs: Annotated[
        bool,
        typer.Option("--list", "-l", help="List all environments available"),
    ] = False,
    create_name: Annotated[
        str | None,
        typer.Option("--create", "-c", metavar="NAME", help="Create a new environment"),
    ] = None,
    use_name: Annotated[
        str | None,
        typer.Option("--use", "-u", metavar="NAME", help="Use some specific env"),
    ] = None,
    exit_env: Annotated[
        bool,
        typer.Option("--exit-env", "-e", help="Exit environment mode"),
    ] = False,
    destroy_name: Annotated[
        str | None,
        typer.Option("--destroy", "-d", metavar="NAME", help="Destroy an environment"),
    ] = None,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompts"),
    ] = False,
) -> None:
    """🗂️  Manage kw config environments for this project.

    Examples:
        kw env create arm64
        kw env use arm64
        kw env --list
    """
    if ctx.invoked_subcommand is not None:
        return

    # Only the first requested action runs
    if create_name is not None:
        _create_env(create_name)
    elif use_name is not None:
        _use_env(use_name)
    elif destroy_name is not None:
        _destroy_env(destroy_name, yes)
    elif list_envs:
        _list_envs()
    elif exit_env:
        _exit_env(yes)
    else:
        typer.echo(ctx.get_help())


@app.command(name="list")
@with_error_handling
def list_command() -> None:
    """📋 List all environments available.

    Examples:
        kw env list
    """
    _list_envs()


@app.command()
@with_error_handling
def create(
    name: Annotated[str, typer.Argument(help="Environment name (no spaces or !@#$%^&()+)")],
) -> None:
    """➕ Create a new environment from the current config files.

    Config files missing from .kw are created from the default templates.
    The build configuration (.config) is taken from the active environment,
    the project directory, or the running kernel, in that order.

    Examples:
        kw env create arm64
    """
    _create_env(name)


@app.command()
@with_error_handling
def use(
    name: Annotated[str, typer.Argument(help="Environment to activate")],
) -> None:
    """🔀 Use some specific env.

    Config files under .kw become links into the environment. Plain config
    files that are not part of an environment are moved out of the way.

    Examples:
        kw env use arm64
    """
    _use_env(name)


@app.command(name="exit")
@with_error_handling
def exit_command(
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt"),
    ] = False,
) -> None:
    """⏏️  Exit environment mode.

    The active environment's config files are copied back into .kw as plain
    files.

    Examples:
        kw env exit
        kw env exit --yes
    """
    _exit_env(yes)


@app.command()
@with_error_handling
def destroy(
    name: Annotated[str, typer.Argument(help="Environment to remove")],
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt"),
    ] = False,
) -> None:
    """🗑️  Destroy an environment.

    Removes the environment directory and its cache directory. If it is the
    active environment, kw leaves environment mode first.

    Examples:
        kw env destroy arm64
    """
    _destroy_env(name, yes)


@app.command()
@with_error_handling
def current() -> None:
    """📍 Print the active environment.

    Examples:
        kw env current
    """
    name = _get_manager().current()
    if name is None:
        console.info("You are not using any env at the moment.")
        return
    console.print(name)
