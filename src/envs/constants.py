"""Environment manager constants and path resolution.

This module centralizes the file names, directory names and other fixed
values that make up the on-disk layout of a kw project.
"""

from __future__ import annotations

import errno
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class EnvironmentConstants:
    """Constants for the ``.kw`` layout and environment handling.

    All attributes are class-level and immutable.
    """

    # Managed config files, one ``<name>.config`` per entry
    CONFIG_NAMES: tuple[str, ...] = (
        "build",
        "deploy",
        "kworkflow",
        "mail",
        "notification",
        "remote",
        "vm",
    )
    CONFIG_SUFFIX: str = ".config"

    # Files that must exist for a project to count as initialized
    REQUIRED_CONFIG_NAMES: tuple[str, ...] = ("build", "deploy")

    # Relative path fragments for project structure
    KW_DIR: str = ".kw"
    ENV_DIR: str = "environments"
    ENV_CURRENT_FILE: str = "env.current"

    # Build-configuration artifact kept in the cache root per environment
    CACHE_CONFIG_FILE: str = ".config"

    # Characters that may not appear in an environment name
    INVALID_NAME_CHARS: frozenset[str] = frozenset("!@#$%^&()+")

    # Exit codes
    EXIT_INVALID: int = errno.EINVAL
    EXIT_FAILURE: int = 1
    EXIT_INTERRUPTED: int = 130

    def config_filename(self, name: str) -> str:
        """Get the file name for a logical config name."""
        return f"{name}{self.CONFIG_SUFFIX}"


class EnvironmentPaths:
    """Path resolver for a project's ``.kw`` tree and its cache directories.

    Every path is derived from the two roots given at construction time, so
    the manager never looks at the process working directory on its own.
    """

    def __init__(
        self,
        project_root: Path,
        cache_root: Path,
        constants: EnvironmentConstants | None = None,
    ) -> None:
        """Initialize environment paths.

        Args:
            project_root: Directory that holds the ``.kw`` folder
            cache_root: Directory that holds per-environment cache artifacts
            constants: Layout constants (defaults to DEFAULT_CONSTANTS)
        """
        self._project_root = project_root
        self._cache_root = cache_root
        self._constants = constants or DEFAULT_CONSTANTS

        # Build derived paths
        self.kw_dir = project_root / self._constants.KW_DIR
        self.environments = self.kw_dir / self._constants.ENV_DIR
        self.env_current = self.kw_dir / self._constants.ENV_CURRENT_FILE
        self.cache_environments = cache_root / self._constants.ENV_DIR

    @property
    def project_root(self) -> Path:
        """Get path to project root."""
        return self._project_root

    @property
    def cache_root(self) -> Path:
        """Get path to the cache root."""
        return self._cache_root

    @property
    def loose_build_config(self) -> Path:
        """Get path to a build configuration left in the project directory."""
        return self._project_root / self._constants.CACHE_CONFIG_FILE

    def root_config(self, name: str) -> Path:
        """Get the working config slot for ``name`` at the top of ``.kw``."""
        return self.kw_dir / self._constants.config_filename(name)

    def env_dir(self, env_name: str) -> Path:
        """Get the directory that stores environment ``env_name``."""
        return self.environments / env_name

    def env_config(self, env_name: str, name: str) -> Path:
        """Get the copy of config ``name`` owned by environment ``env_name``."""
        return self.env_dir(env_name) / self._constants.config_filename(name)

    def cache_dir(self, env_name: str) -> Path:
        """Get the cache directory paired with environment ``env_name``."""
        return self.cache_environments / env_name

    def cache_config(self, env_name: str) -> Path:
        """Get the build-configuration artifact for environment ``env_name``."""
        return self.cache_dir(env_name) / self._constants.CACHE_CONFIG_FILE

    def __repr__(self) -> str:
        return f"EnvironmentPaths(project_root={self._project_root!r}, cache_root={self._cache_root!r})"


# Default constants instance for convenience
DEFAULT_CONSTANTS = EnvironmentConstants()
