"""Environment name validation."""

from __future__ import annotations

import os

from .constants import DEFAULT_CONSTANTS, EnvironmentConstants
from .errors import InvalidEnvironmentNameError


def validate_env_name(
    name: str, constants: EnvironmentConstants = DEFAULT_CONSTANTS
) -> str:
    """Check that ``name`` can be used as an environment name.

    Args:
        name: Proposed environment name
        constants: Layout constants holding the disallowed characters

    Returns:
        The name, unchanged

    Raises:
        InvalidEnvironmentNameError: If the name is empty, contains whitespace,
            a disallowed special character or a path separator
    """
    if not name:
        raise InvalidEnvironmentNameError("Please provide a name for the environment.")

    if any(char.isspace() for char in name):
        raise InvalidEnvironmentNameError("Please, do not use spaces in the env name.")

    invalid = sorted(set(name) & constants.INVALID_NAME_CHARS)
    if invalid:
        allowed = ", ".join(sorted(constants.INVALID_NAME_CHARS))
        raise InvalidEnvironmentNameError(
            f"Please, do not use special characters ({allowed}) in the env name.",
            details=f"Found: {' '.join(invalid)}",
        )

    separators = {os.sep, os.altsep} - {None}
    if name in (os.curdir, os.pardir) or any(sep in name for sep in separators):
        raise InvalidEnvironmentNameError(
            f"'{name}' is not a valid env name: it must be a plain directory name."
        )

    return name
