"""Reading and showing the commit log."""

from __future__ import annotations

import time
from dataclasses import dataclass
from itertools import zip_longest
from pathlib import Path

_RECORD_LINES = 5


@dataclass(frozen=True)
class LogEntry:
    """One commit as recorded in the log file."""

    hash: str
    made_by: str
    timestamp: int
    message: str

    @property
    def date(self) -> str:
        """The commit time in local ``ctime`` form."""
        return time.ctime(self.timestamp)


def read_log(git_dir: str | Path = ".minigit") -> list[LogEntry]:
    """Return the entries of the log file in order; raise FileNotFoundError if absent."""
    text = (Path(git_dir) / "log.txt").read_text(encoding="utf-8")
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    records = zip_longest(*[iter(lines)] * _RECORD_LINES, fillvalue="")
    return [
        LogEntry(commit_hash, made_by, int(timestamp), message)
        for commit_hash, made_by, timestamp, message, _separator in records
    ]


def format_entry(entry: LogEntry) -> str:
    """Render one log entry for display."""
    return (
        f"COMMIT:  {entry.hash}\n"
        f"MADE BY: {entry.made_by}\n"
        f"DATE:    {entry.date}\n"
        f"MESSAGE: {entry.message}\n"
    )


def show_log(git_dir: str | Path = ".minigit") -> None:
    """Print every log entry, or a notice when nothing has been committed."""
    try:
        entries = read_log(git_dir)
    except FileNotFoundError:
        print("No commits found. Please commit something first.")
        return
    for entry in entries:
        print(format_entry(entry))