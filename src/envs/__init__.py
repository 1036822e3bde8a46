"""Environment manager for kw project directories.

An environment is a named copy of the managed config files stored under
``.kw/environments/<name>/``. Making one active replaces the config files at
the root of ``.kw`` with symbolic links into that directory.
"""

from .constants import DEFAULT_CONSTANTS, EnvironmentConstants, EnvironmentPaths
from .errors import (
    CacheSeedError,
    ConfirmationDeclinedError,
    EnvError,
    EnvironmentExistsError,
    EnvironmentNotFoundError,
    InvalidEnvironmentNameError,
    ProjectNotInitializedError,
)
from .manager import EnvironmentListing, EnvironmentManager
from .settings import KwSettings

__all__ = [
    "DEFAULT_CONSTANTS",
    "EnvironmentConstants",
    "EnvironmentPaths",
    "EnvironmentListing",
    "EnvironmentManager",
    "KwSettings",
    "EnvError",
    "InvalidEnvironmentNameError",
    "ProjectNotInitializedError",
    "EnvironmentNotFoundError",
    "EnvironmentExistsError",
    "CacheSeedError",
    "ConfirmationDeclinedError",
]
