"""Main CLI application module.

This module provides the main entry point for the kw CLI. The environment
manager is the only command group: it keeps several named sets of kw config
files in one project and switches which one is active.

Command Groups:
- env: Create, use, exit, destroy and list config environments
"""

import sys
from typing import Annotated

import typer
from loguru import logger

from src.envs.constants import DEFAULT_CONSTANTS

from .commands import env_app

# Click reports usage errors with this status
CLICK_USAGE_ERROR = 2

# Create the main CLI application
app = typer.Typer(
    help="🛠️  kw - Kernel development workflow tool",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(env_app, name="env")


def configure_logging(verbose: bool = False) -> None:
    """Route loguru output to stderr, debug records only when verbose."""
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "WARNING",
        format="<level>{level: <8}</level> | {message}",
    )


@app.callback()
def root(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logs on stderr"),
    ] = False,
) -> None:
    """🛠️  kw - Kernel development workflow tool."""
    configure_logging(verbose)


def main() -> None:
    """Main entry point for the CLI.

    Usage errors (unknown options, missing arguments) exit with EINVAL.
    """
    try:
        app()
    except SystemExit as exc:
        if exc.code == CLICK_USAGE_ERROR:
            raise SystemExit(DEFAULT_CONSTANTS.EXIT_INVALID) from None
        raise


if __name__ == "__main__":
    main()
