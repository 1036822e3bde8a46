from pathlib import Path


def get_project_root() -> Path:
    """Get the project root directory.

    kw commands operate on the directory they are invoked from, which must
    hold the ``.kw`` folder.

    Returns:
        Absolute path of the current working directory
    """
    return Path.cwd().absolute()


def display_path(path: Path, base: Path) -> str:
    """Render ``path`` relative to ``base`` when it lives below it."""
    try:
        return str(path.relative_to(base))
    except ValueError:
        return str(path)
