"""Errors raised by the environment manager."""

from __future__ import annotations

import errno


class EnvError(Exception):
    """Raised when an environment operation cannot be carried out.

    Every subclass maps to the "invalid argument" exit status.
    """

    exit_code: int = errno.EINVAL

    def __init__(self, message: str, details: str | None = None):
        self.message = message
        self.details = details
        super().__init__(message)


class InvalidEnvironmentNameError(EnvError):
    """Raised when an environment name fails validation."""


class ProjectNotInitializedError(EnvError):
    """Raised when the current directory has no usable ``.kw`` setup."""

    def __init__(self, message: str | None = None):
        super().__init__(
            message or "It looks like you did not set up kw in this repository.",
            details="For the first setup, take a look at: kw init --help",
        )


class EnvironmentNotFoundError(EnvError):
    """Raised when the requested environment directory does not exist."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"The environment '{name}' does not exist.",
            details="Run 'kw env list' to see the available environments.",
        )


class EnvironmentExistsError(EnvError):
    """Raised when creating an environment whose name is already taken."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"It looks like you already have the '{name}' environment.",
            details="Please choose a new environment name.",
        )


class CacheSeedError(EnvError):
    """Raised when no build configuration could be found for a new environment.

    The environment directory and its cache directory are left in place.
    """


class ConfirmationDeclinedError(EnvError):
    """Raised when the operator declines a destructive operation."""
