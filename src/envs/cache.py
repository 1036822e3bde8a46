"""Seeding of the per-environment build configuration artifact.

Each environment owns a ``.config`` under ``<cache-root>/environments/<name>/``.
When an environment is created the artifact is taken from the first source
that exists, in this order:

1. the artifact of the active environment, or of the most recently
   modified other environment that has one
2. a ``.config`` left in the project directory
3. the host's compressed live configuration (``/proc/config.gz``)
4. the kernel-release matched file under ``/boot``
"""

from __future__ import annotations

import gzip
import shutil
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from .constants import EnvironmentPaths
from .settings import KwSettings


@dataclass(frozen=True)
class CacheSource:
    """A candidate origin for a new environment's build configuration."""

    path: Path
    description: str
    compressed: bool = False
    from_host: bool = False

    def copy_to(self, dest: Path) -> None:
        """Write this source's content to ``dest``."""
        dest.parent.mkdir(parents=True, exist_ok=True)
        if self.compressed:
            with gzip.open(self.path, "rb") as f_in, open(dest, "wb") as f_out:
                shutil.copyfileobj(f_in, f_out)
        else:
            shutil.copyfile(self.path, dest)


class CacheSeeder:
    """Resolves and copies the build configuration for a new environment."""

    def __init__(self, paths: EnvironmentPaths, settings: KwSettings) -> None:
        self.paths = paths
        self.settings = settings

    def candidates(self, env_name: str, current_env: str | None) -> list[CacheSource]:
        """Get every possible source in priority order, existing or not.

        Args:
            env_name: Environment being created (never used as a source)
            current_env: Name of the active environment, if any
        """
        sources: list[CacheSource] = []

        for other in self._sibling_envs(env_name, current_env):
            sources.append(
                CacheSource(
                    self.paths.cache_config(other),
                    f"build configuration of the '{other}' environment",
                )
            )

        sources.append(
            CacheSource(
                self.paths.loose_build_config,
                "build configuration in the project directory",
            )
        )
        sources.append(
            CacheSource(
                self.settings.proc_config,
                "running kernel configuration",
                compressed=True,
                from_host=True,
            )
        )
        sources.append(
            CacheSource(
                self.settings.boot_config,
                f"kernel configuration for {self.settings.kernel_release}",
                from_host=True,
            )
        )
        return sources

    def resolve(self, env_name: str, current_env: str | None) -> CacheSource | None:
        """Get the first existing source, or None when nothing is available."""
        for source in self.candidates(env_name, current_env):
            if source.path.is_file():
                return source
        return None

    def seed(self, env_name: str, source: CacheSource) -> Path:
        """Copy ``source`` into the cache artifact of ``env_name``.

        Returns:
            Path of the written artifact
        """
        dest = self.paths.cache_config(env_name)
        source.copy_to(dest)
        logger.debug(f"Seeded {dest} from {source.path}")
        return dest

    def _sibling_envs(self, env_name: str, current_env: str | None) -> list[str]:
        """Get this project's other environments that own a cache artifact.

        The active environment comes first, then the rest by artifact
        modification time, newest first.
        """
        if not self.paths.environments.is_dir():
            return []

        names = [
            entry.name
            for entry in self.paths.environments.iterdir()
            if entry.is_dir()
            and entry.name != env_name
            and self.paths.cache_config(entry.name).is_file()
        ]
        names.sort(
            key=lambda name: self.paths.cache_config(name).stat().st_mtime,
            reverse=True,
        )

        if current_env and current_env in names:
            names.remove(current_env)
            names.insert(0, current_env)
        return names
