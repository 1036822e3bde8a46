"""CLI context and dependency container."""

from __future__ import annotations

from dataclasses import dataclass

import click
import typer

from src.cli.shared.console import CLIConsole, console
from src.envs.constants import EnvironmentConstants, EnvironmentPaths
from src.envs.manager import EnvironmentManager
from src.envs.settings import KwSettings
from src.utils.paths import get_project_root


@dataclass(frozen=True)
class CLIContext:
    """Runtime dependencies for CLI commands."""

    console: CLIConsole
    settings: KwSettings
    constants: EnvironmentConstants
    paths: EnvironmentPaths

    def env_manager(self, *, assume_yes: bool = False) -> EnvironmentManager:
        """Build an EnvironmentManager that asks through the CLI console.

        Args:
            assume_yes: Answer every confirmation with yes
        """

        def confirm(question: str) -> bool:
            return self.console.confirm_action(question, force=assume_yes)

        return EnvironmentManager(
            self.settings,
            confirm=confirm,
            console=self.console,
            constants=self.constants,
        )


def build_cli_context() -> CLIContext:
    """Build a fresh CLIContext."""
    settings = KwSettings.from_env(get_project_root())
    constants = EnvironmentConstants()
    paths = EnvironmentPaths(settings.project_root, settings.cache_root, constants)

    return CLIContext(
        console=console,
        settings=settings,
        constants=constants,
        paths=paths,
    )


def get_cli_context(ctx: typer.Context | None = None) -> CLIContext:
    """Return the CLIContext from Typer, falling back to a new instance."""
    context = ctx or click.get_current_context(silent=True)
    if context and isinstance(context.obj, CLIContext):
        return context.obj
    return build_cli_context()
