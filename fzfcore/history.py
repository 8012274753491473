"""Query history kept in a plain text file, one entry per line."""

from __future__ import annotations

import os


class HistoryError(Exception):
    """The history file cannot be read or created."""


def _write(path: str, content: str) -> None:
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w", encoding="utf-8", errors="surrogateescape", newline="") as f:
        f.write(content)


class History:
    """Navigable list of past queries backed by a file.

    The last line is always the entry being edited. Edits to earlier
    entries are remembered in memory but never written to the file.
    """

    def __init__(self, path: str, max_size: int) -> None:
        self.path = path
        self.max_size = max_size
        try:
            with open(path, encoding="utf-8", errors="surrogateescape", newline="") as f:
                data = f.read()
        except FileNotFoundError:
            data = ""
            try:
                _write(path, data)
            except OSError as error:
                raise self._error(error) from error
        except OSError as error:
            raise self._error(error) from error

        lines = data.strip("\n").split("\n")
        if lines[-1]:
            lines.append("")
        self.lines: list[str] = lines
        self.modified: dict[int, str] = {}
        self.cursor = len(lines) - 1

    def _error(self, error: OSError) -> HistoryError:
        if isinstance(error, PermissionError):
            return HistoryError(f"permission denied: {self.path}")
        return HistoryError(f"invalid history file: {error}")

    def append(self, line: str) -> None:
        """Add a non-empty entry, drop the oldest beyond the limit and save."""
        if not line:
            return
        lines = self.lines[:-1] + [line]
        if len(lines) > self.max_size:
            lines = lines[len(lines) - self.max_size:]
        self.lines = lines + [""]
        _write(self.path, "\n".join(self.lines))

    def override(self, text: str) -> None:
        """Replace the entry under the cursor without saving it."""
        last = len(self.lines) - 1
        if self.cursor == last:
            self.lines[self.cursor] = text
        elif self.cursor < last:
            self.modified[self.cursor] = text

    def current(self) -> str:
        return self.modified.get(self.cursor, self.lines[self.cursor])

    def previous(self) -> str:
        """Move to the older entry, if any, and return it."""
        if self.cursor > 0:
            self.cursor -= 1
        return self.current()

    def next(self) -> str:
        """Move to the newer entry, if any, and return it."""
        if self.cursor < len(self.lines) - 1:
            self.cursor += 1
        return self.current()