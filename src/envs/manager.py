"""Environment manager: create, use, exit, destroy and list environments.

A project is either *unmanaged* (no ``env.current``; the config files at the
top of ``.kw`` are plain files) or *active* (``env.current`` names an
environment and every managed config slot is a symlink into
``.kw/environments/<name>/``).

None of the operations is transactional across the whole config set. An
interrupted ``use`` leaves a mix of links that the next ``use`` repairs.
"""

from __future__ import annotations

import shutil
import tempfile
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from loguru import logger

from src.utils.console_like import ConsoleLike, coalesce_console

from .cache import CacheSeeder
from .constants import DEFAULT_CONSTANTS, EnvironmentConstants, EnvironmentPaths
from .errors import (
    CacheSeedError,
    ConfirmationDeclinedError,
    EnvironmentExistsError,
    EnvironmentNotFoundError,
    ProjectNotInitializedError,
)
from .settings import KwSettings
from .validation import validate_env_name

ConfirmFn = Callable[[str], bool]


def _deny(_: str) -> bool:
    return False


@dataclass(frozen=True)
class EnvironmentListing:
    """Result of listing a project's environments."""

    names: list[str] = field(default_factory=list)
    current: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.names


class EnvironmentManager:
    """Manages named config environments for a single project.

    Attributes:
        settings: Resolved runtime settings
        paths: Path resolver for the project and cache roots
        constants: Layout constants
        console: Output sink for user-facing messages
        confirm: Callback asked before exit and destroy mutate anything
    """

    def __init__(
        self,
        settings: KwSettings,
        *,
        confirm: ConfirmFn | None = None,
        console: ConsoleLike | None = None,
        constants: EnvironmentConstants = DEFAULT_CONSTANTS,
    ) -> None:
        self.settings = settings
        self.constants = constants
        self.paths = EnvironmentPaths(
            settings.project_root, settings.cache_root, constants
        )
        self.console = coalesce_console(console)
        # Without a confirmation strategy destructive operations are declined
        self.confirm = confirm or _deny
        self.cache = CacheSeeder(self.paths, settings)

    # =========================================================================
    # State
    # =========================================================================

    def is_initialized(self) -> bool:
        """Check whether ``.kw`` holds the config files required to create envs."""
        return self.paths.kw_dir.is_dir() and all(
            self.paths.root_config(name).is_file()
            for name in self.constants.REQUIRED_CONFIG_NAMES
        )

    def current(self) -> str | None:
        """Get the name of the active environment, or None when unmanaged."""
        try:
            name = self.paths.env_current.read_text().strip()
        except FileNotFoundError:
            return None
        return name or None

    def exists(self, name: str) -> bool:
        if not name or name in (".", "..") or "/" in name:
            return False
        return self.paths.env_dir(name).is_dir()

    # =========================================================================
    # Operations
    # =========================================================================

    def create(self, name: str) -> Path:
        """Create environment ``name`` from the current project configuration.

        Root config files are copied into the new environment; missing ones
        come from the default templates. The paired cache artifact is seeded
        from the first available source (see ``src.envs.cache``).

        Returns:
            Path of the new environment directory

        Raises:
            InvalidEnvironmentNameError: If ``name`` fails validation
            ProjectNotInitializedError: If build/deploy configs are missing
            EnvironmentExistsError: If the environment already exists
            CacheSeedError: If no build configuration source exists. The
                environment directories are kept.
        """
        validate_env_name(name, self.constants)

        if not self.is_initialized():
            raise ProjectNotInitializedError()

        env_dir = self.paths.env_dir(name)
        if env_dir.exists():
            raise EnvironmentExistsError(name)

        env_dir.mkdir(parents=True)
        logger.debug(f"Created environment directory {env_dir}")

        for config in self.constants.CONFIG_NAMES:
            source = self.paths.root_config(config)
            if not source.exists():
                filename = self.constants.config_filename(config)
                self.console.info(f"{filename} does not exist. Creating a default one.")
                source = self.settings.etc_dir / filename
            shutil.copyfile(source, self.paths.env_config(name, config))

        cache_dir = self.paths.cache_dir(name)
        cache_dir.mkdir(parents=True, exist_ok=True)

        seed = self.cache.resolve(name, self.current())
        if seed is None:
            self.console.warn(
                "You don't have a config file and none was found in the default paths."
            )
            raise CacheSeedError(
                f"kw was not able to find any valid config file for the '{name}' env.",
                details=(
                    f"The environment was created without {cache_dir / self.constants.CACHE_CONFIG_FILE}.\n"
                    "Copy a kernel .config there before building."
                ),
            )

        if seed.from_host:
            self.console.warn(
                f"You don't have a config file, using the {seed.description}."
            )
        self.cache.seed(name, seed)
        logger.debug(f"Environment '{name}' build configuration from {seed.description}")
        return env_dir

    def use(self, name: str) -> None:
        """Make environment ``name`` active.

        Every managed config slot becomes a symlink into the environment. A
        plain file found in a slot is abandoned: it is moved into a discard
        directory under the system temp dir, never merged into the env.

        Raises:
            EnvironmentNotFoundError: If the environment does not exist
        """
        if not self.exists(name):
            raise EnvironmentNotFoundError(name)

        discard_dir: Path | None = None

        for config in self.constants.CONFIG_NAMES:
            slot = self.paths.root_config(config)
            target = self.paths.env_config(name, config).absolute()

            if not slot.is_symlink() and slot.exists():
                if discard_dir is None:
                    discard_dir = Path(tempfile.mkdtemp(prefix="kw-env-"))
                shutil.move(str(slot), str(discard_dir / slot.name))
                logger.debug(f"Moved {slot} to {discard_dir / slot.name}")

            if slot.is_symlink():
                slot.unlink()
            slot.symlink_to(target)
            logger.debug(f"Linked {slot} -> {target}")

        if discard_dir is not None:
            self.console.info(
                f"Config files that did not belong to an env were moved to {discard_dir}"
            )

        self.paths.env_current.write_text(f"{name}\n")

    def exit(self) -> bool:
        """Leave environment mode, keeping the active env's files as plain files.

        Returns:
            True if the project left environment mode, False if there was no
            active environment or the operator declined
        """
        if not self.paths.env_current.exists():
            self.console.info("You are not using any env at the moment.")
            return False

        current = self.current()
        self.console.warn(
            f"You are about to leave the env setup, and {current or 'the current'} "
            "config files will be used as a default."
        )
        if not self.confirm("Do you really want to proceed?"):
            return False

        self._materialize(current)
        return True

    def destroy(self, name: str) -> None:
        """Remove environment ``name`` and its cache directory.

        If ``name`` is active, the project leaves environment mode first so
        the working config files stay usable.

        Raises:
            ProjectNotInitializedError: If there is no ``.kw`` directory
            EnvironmentNotFoundError: If the environment does not exist
            ConfirmationDeclinedError: If the operator declines
        """
        if not self.paths.kw_dir.is_dir():
            raise ProjectNotInitializedError()

        if not self.exists(name):
            raise EnvironmentNotFoundError(name)

        if not self.confirm(f"Are you sure you want to delete the '{name}' environment?"):
            raise ConfirmationDeclinedError(f"The '{name}' environment was not destroyed.")

        if self.current() == name:
            self._materialize(name)

        shutil.rmtree(self.paths.env_dir(name))
        logger.debug(f"Removed {self.paths.env_dir(name)}")

        cache_dir = self.paths.cache_dir(name)
        if cache_dir.exists():
            shutil.rmtree(cache_dir)
            logger.debug(f"Removed {cache_dir}")

    def list_environments(self) -> EnvironmentListing:
        """List the environments of this project.

        Raises:
            ProjectNotInitializedError: If there is no ``.kw`` directory
        """
        if not self.paths.kw_dir.is_dir():
            raise ProjectNotInitializedError()

        names: list[str] = []
        if self.paths.environments.is_dir():
            names = sorted(
                entry.name for entry in self.paths.environments.iterdir() if entry.is_dir()
            )

        return EnvironmentListing(names=names, current=self.current())

    # =========================================================================
    # Helpers
    # =========================================================================

    def _materialize(self, name: str | None) -> None:
        """Replace config symlinks with plain copies of env ``name``'s files.

        Removes ``env.current`` at the end.
        """
        for config in self.constants.CONFIG_NAMES:
            slot = self.paths.root_config(config)
            if slot.is_symlink():
                slot.unlink()

            if name is None:
                continue

            source = self.paths.env_config(name, config)
            if not source.is_file():
                logger.warning(f"{source} is missing, leaving {slot.name} unset")
                continue
            shutil.copyfile(source, slot)

        self.paths.env_current.unlink(missing_ok=True)
        logger.debug(f"Left environment '{name}'")
