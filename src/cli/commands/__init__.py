"""CLI command modules.

Command Groups:
- env: Named config environments for the current project
"""

from .env import app as env_app

__all__ = [
    "env_app",
]
