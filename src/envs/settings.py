"""Runtime settings for the environment manager.

Settings are resolved once per invocation from the process environment and
then passed explicitly to everything that needs a path.
"""

from __future__ import annotations

import os
import platform
from pathlib import Path

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

# Default config templates shipped with the package
DEFAULT_ETC_DIR = Path(__file__).resolve().parent / "etc"


def _default_cache_root() -> Path:
    xdg_cache = os.getenv("XDG_CACHE_HOME")
    base = Path(xdg_cache) if xdg_cache else Path.home() / ".cache"
    return base / "kw"


class KwSettings(BaseModel):
    """Paths and host facts used by the environment manager.

    Attributes:
        project_root: Directory containing the ``.kw`` folder
        cache_root: Root for per-environment build configuration artifacts
        etc_dir: Directory holding the default ``<name>.config`` templates
        proc_config: Compressed live kernel configuration of the host
        boot_dir: Directory holding ``config-<release>`` files
        kernel_release: Release string used to pick the file in ``boot_dir``
    """

    model_config = ConfigDict(frozen=True)

    project_root: Path = Field(default_factory=Path.cwd)
    cache_root: Path = Field(default_factory=_default_cache_root)
    etc_dir: Path = DEFAULT_ETC_DIR
    proc_config: Path = Path("/proc/config.gz")
    boot_dir: Path = Path("/boot")
    kernel_release: str = Field(default_factory=platform.release)

    @property
    def boot_config(self) -> Path:
        """Get the kernel-release matched configuration under ``boot_dir``."""
        return self.boot_dir / f"config-{self.kernel_release}"

    @classmethod
    def from_env(cls, project_root: Path | None = None) -> KwSettings:
        """Build settings from environment variables.

        Recognized variables:
            KW_CACHE_DIR: Overrides the cache root
            KW_ETC_DIR: Overrides the default template directory

        Args:
            project_root: Project directory (default: current working directory)
        """
        overrides: dict[str, Path] = {}

        if project_root is not None:
            overrides["project_root"] = project_root

        cache_dir = os.getenv("KW_CACHE_DIR")
        if cache_dir:
            overrides["cache_root"] = Path(cache_dir)

        etc_dir = os.getenv("KW_ETC_DIR")
        if etc_dir:
            overrides["etc_dir"] = Path(etc_dir)

        settings = cls(**overrides)
        logger.debug(
            f"Loaded settings: project_root={settings.project_root} "
            f"cache_root={settings.cache_root} etc_dir={settings.etc_dir}"
        )
        return settings
