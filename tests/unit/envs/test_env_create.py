"""Tests for EnvironmentManager.create."""

import pytest

from src.envs.constants import DEFAULT_CONSTANTS
from src.envs.errors import (
    CacheSeedError,
    EnvironmentExistsError,
    InvalidEnvironmentNameError,
    ProjectNotInitializedError,
)
from tests.helpers import snapshot


def test_create_copies_project_configs(manager, kw_dir, loose_build_config):
    env_dir = manager.create("arm")

    assert env_dir == kw_dir / "environments" / "arm"
    for name in DEFAULT_CONSTANTS.CONFIG_NAMES:
        copied = env_dir / f"{name}.config"
        assert copied.is_file()
        assert not copied.is_symlink()
        assert copied.read_text() == f"# project {name}\n"


def test_create_then_list_includes_env(manager, kw_dir, loose_build_config):
    manager.create("arm")

    assert "arm" in manager.list_environments().names


def test_create_does_not_change_state(manager, kw_dir, loose_build_config):
    manager.create("arm")

    assert manager.current() is None
    assert not manager.paths.env_current.exists()
    assert not any(path.is_symlink() for path in kw_dir.iterdir())


def test_create_seeds_missing_configs_from_templates(
    manager, kw_dir, loose_build_config, recording_console
):
    (kw_dir / "mail.config").unlink()
    (kw_dir / "vm.config").unlink()

    env_dir = manager.create("arm")

    etc_dir = manager.settings.etc_dir
    assert (env_dir / "mail.config").read_text() == (etc_dir / "mail.config").read_text()
    assert (env_dir / "vm.config").read_text() == (etc_dir / "vm.config").read_text()
    assert "mail.config does not exist" in recording_console.text("info")
    assert "vm.config does not exist" in recording_console.text("info")


def test_create_adopts_loose_build_config(manager, kw_dir, loose_build_config):
    manager.create("arm")

    assert manager.paths.cache_config("arm").read_text() == loose_build_config.read_text()


def test_create_inherits_cache_from_active_env(manager, kw_dir, loose_build_config):
    manager.create("arm")
    manager.paths.cache_config("arm").write_text("CONFIG_ARM=y\n")
    manager.use("arm")

    manager.create("arm-debug")

    assert manager.paths.cache_config("arm-debug").read_text() == "CONFIG_ARM=y\n"


def test_create_while_active_copies_env_files(manager, kw_dir, loose_build_config):
    manager.create("arm")
    (kw_dir / "environments" / "arm" / "build.config").write_text("arch=arm64\n")
    manager.use("arm")

    env_dir = manager.create("arm-copy")

    copied = env_dir / "build.config"
    assert not copied.is_symlink()
    assert copied.read_text() == "arch=arm64\n"


def test_create_uses_host_config_with_warning(
    manager, kw_dir, proc_config, recording_console
):
    manager.create("arm")

    assert manager.paths.cache_config("arm").read_text() == 'CONFIG_LOCALVERSION="-proc"\n'
    assert "running kernel configuration" in recording_console.text("warn")


def test_create_without_any_build_config_keeps_partial_env(manager, kw_dir):
    with pytest.raises(CacheSeedError) as excinfo:
        manager.create("arm")

    assert excinfo.value.exit_code == 22
    # Directories created before the failure are kept
    assert manager.paths.env_dir("arm").is_dir()
    assert manager.paths.cache_dir("arm").is_dir()
    assert not manager.paths.cache_config("arm").exists()


def test_create_duplicate_fails_without_changes(manager, kw_dir, loose_build_config):
    manager.create("arm")
    env_dir = manager.paths.env_dir("arm")
    (env_dir / "build.config").write_text("edited\n")
    before = snapshot(env_dir)

    with pytest.raises(EnvironmentExistsError):
        manager.create("arm")

    assert snapshot(env_dir) == before


@pytest.mark.parametrize("name", ["my env", "env!", "a@b", "x#", "$", "%", "^", "&", "(", ")", "a+b"])
def test_create_invalid_name_creates_nothing(manager, kw_dir, loose_build_config, name):
    with pytest.raises(InvalidEnvironmentNameError):
        manager.create(name)

    assert not manager.paths.environments.exists()
    assert not manager.paths.cache_environments.exists()


def test_create_requires_kw_dir(manager, loose_build_config):
    with pytest.raises(ProjectNotInitializedError) as excinfo:
        manager.create("arm")

    assert "kw init --help" in excinfo.value.details


@pytest.mark.parametrize("missing", ["build", "deploy"])
def test_create_requires_build_and_deploy(manager, kw_dir, loose_build_config, missing):
    (kw_dir / f"{missing}.config").unlink()

    with pytest.raises(ProjectNotInitializedError):
        manager.create("arm")

    assert not manager.paths.environments.exists()
