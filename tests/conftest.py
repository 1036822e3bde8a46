"""Shared fixtures for environment manager tests.

Every test gets its own project directory and cache root under tmp_path, and
host kernel configuration paths that point inside tmp_path so the real
/proc and /boot are never consulted.
"""

import gzip
import tempfile
from pathlib import Path

import pytest

from src.envs.constants import DEFAULT_CONSTANTS
from src.envs.manager import EnvironmentManager
from src.envs.settings import KwSettings
from tests.helpers import Confirm, RecordingConsole


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    root = tmp_path / "linux"
    root.mkdir()
    return root


@pytest.fixture
def kw_dir(project_root: Path) -> Path:
    """An initialized .kw directory with every managed config file."""
    kw = project_root / DEFAULT_CONSTANTS.KW_DIR
    kw.mkdir()
    for name in DEFAULT_CONSTANTS.CONFIG_NAMES:
        (kw / f"{name}.config").write_text(f"# project {name}\n")
    return kw


@pytest.fixture
def loose_build_config(project_root: Path) -> Path:
    path = project_root / ".config"
    path.write_text("CONFIG_LOCALVERSION=\"-project\"\n")
    return path


@pytest.fixture
def settings(tmp_path: Path, project_root: Path) -> KwSettings:
    host = tmp_path / "host"
    (host / "boot").mkdir(parents=True)
    return KwSettings(
        project_root=project_root,
        cache_root=tmp_path / "cache",
        proc_config=host / "proc" / "config.gz",
        boot_dir=host / "boot",
        kernel_release="6.1.0-test",
    )


@pytest.fixture
def proc_config(settings: KwSettings) -> Path:
    """A compressed live kernel configuration on the fake host."""
    settings.proc_config.parent.mkdir(parents=True, exist_ok=True)
    with gzip.open(settings.proc_config, "wb") as f:
        f.write(b"CONFIG_LOCALVERSION=\"-proc\"\n")
    return settings.proc_config


@pytest.fixture
def recording_console() -> RecordingConsole:
    return RecordingConsole()


@pytest.fixture
def confirm() -> Confirm:
    return Confirm(answer=True)


@pytest.fixture
def manager(
    settings: KwSettings, recording_console: RecordingConsole, confirm: Confirm
) -> EnvironmentManager:
    return EnvironmentManager(settings, confirm=confirm, console=recording_console)


@pytest.fixture(autouse=True)
def discard_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Send files abandoned by ``use`` to a per-test temp directory."""
    trash = tmp_path / "trash"
    trash.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(trash))
    return trash
