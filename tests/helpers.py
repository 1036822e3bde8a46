"""Test doubles and helpers shared by the unit tests."""

from pathlib import Path


class RecordingConsole:
    """ConsoleLike implementation that keeps every message."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def _record(self, level: str, msg: object) -> None:
        self.messages.append((level, str(msg)))

    def print(self, msg=None) -> None:
        self._record("print", msg)

    def info(self, msg: str) -> None:
        self._record("info", msg)

    def warn(self, msg: str) -> None:
        self._record("warn", msg)

    def error(self, msg: str) -> None:
        self._record("error", msg)

    def ok(self, msg: str) -> None:
        self._record("ok", msg)

    def text(self, level: str) -> str:
        return "\n".join(msg for lvl, msg in self.messages if lvl == level)


class Confirm:
    """Scripted confirmation callback."""

    def __init__(self, answer: bool = True) -> None:
        self.answer = answer
        self.questions: list[str] = []

    def __call__(self, question: str) -> bool:
        self.questions.append(question)
        return self.answer


def snapshot(root: Path) -> dict[str, tuple[str, str]]:
    """Describe every entry below ``root``: kind plus content or link target."""
    state: dict[str, tuple[str, str]] = {}
    for path in sorted(root.rglob("*")):
        rel = str(path.relative_to(root))
        if path.is_symlink():
            state[rel] = ("link", str(path.readlink()))
        elif path.is_dir():
            state[rel] = ("dir", "")
        else:
            state[rel] = ("file", path.read_text())
    return state
