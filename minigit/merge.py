"""Branch lookup, commit ancestry, three-way line merging and line diffs."""

from __future__ import annotations

from itertools import zip_longest
from pathlib import Path

MERGED_FILE = "merged.txt"
CONFLICT_START = "<<<<<<current branch"
CONFLICT_SEPARATOR = "========"
CONFLICT_END = "<<<<<<target branch"

_HEAD_PREFIX = "ref: refs/heads/"
_PARENT_PREFIX = "parent "


class MergeError(Exception):
    """Raised when a merge or one of its lookups cannot be carried out."""


def _first_line(path: Path) -> str:
    return path.read_text(encoding="utf-8").split("\n", 1)[0]


def current_branch(git_dir: str | Path) -> str:
    """Return the name of the branch that HEAD points to."""
    try:
        line = _first_line(Path(git_dir) / "HEAD")
    except OSError as exc:
        raise MergeError("Could not open HEAD file.") from exc
    if not line.startswith(_HEAD_PREFIX):
        raise MergeError(f"Invalid HEAD format: {line}")
    return line[len(_HEAD_PREFIX):]


def branch_commit(git_dir: str | Path, branch_name: str) -> str:
    """Return the commit id recorded for ``branch_name``."""
    try:
        return _first_line(Path(git_dir) / "refs" / "heads" / branch_name)
    except OSError as exc:
        raise MergeError(f"branch not found: {branch_name}") from exc


def read_lines(path: str | Path) -> list[str]:
    """Return the lines of a file without their newlines; an unreadable file has none."""
    try:
        with open(path, encoding="utf-8", errors="replace", newline="") as handle:
            text = handle.read()
    except OSError:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def _object_lines(git_dir: str | Path, object_id: str | None) -> list[str]:
    if not object_id:
        return []
    return read_lines(Path(git_dir) / "objects" / object_id)


def parent_commit(git_dir: str | Path, commit_id: str) -> str | None:
    """Return the parent recorded in a commit object, or None if it has none."""
    for line in _object_lines(git_dir, commit_id):
        if line.startswith(_PARENT_PREFIX):
            return line[len(_PARENT_PREFIX):] or None
    return None


def least_common_ancestor(git_dir: str | Path, first: str, second: str) -> str | None:
    """Return the nearest commit reachable from both ``first`` and ``second``."""
    ancestors: set[str] = set()
    commit: str | None = first or None
    while commit and commit not in ancestors:
        ancestors.add(commit)
        commit = parent_commit(git_dir, commit)

    visited: set[str] = set()
    commit = second or None
    while commit and commit not in visited:
        if commit in ancestors:
            return commit
        visited.add(commit)
        commit = parent_commit(git_dir, commit)
    return None


def merge_lines(
    base: list[str], current: list[str], target: list[str]
) -> tuple[list[str], int]:
    """Merge three versions line by line; return the merged lines and the conflict count."""
    result: list[str] = []
    conflicts = 0
    for base_line, current_line, target_line in zip_longest(
        base, current, target, fillvalue=""
    ):
        if current_line == target_line:
            result.append(current_line)
        elif base_line == current_line:
            result.append(target_line)
        elif base_line == target_line:
            result.append(current_line)
        else:
            conflicts += 1
            result.extend(
                [CONFLICT_START, current_line, CONFLICT_SEPARATOR, target_line, CONFLICT_END]
            )
    return result, conflicts


def merge(
    git_dir: str | Path, base: str | None, current: str, target: str
) -> int:
    """Merge three objects into the repository's merged file; return the conflict count."""
    git_dir = Path(git_dir)
    lines, conflicts = merge_lines(
        _object_lines(git_dir, base),
        _object_lines(git_dir, current),
        _object_lines(git_dir, target),
    )
    (git_dir / MERGED_FILE).write_text(
        "".join(f"{line}\n" for line in lines), encoding="utf-8", newline="\n"
    )
    return conflicts


def diff_lines(first: list[str], second: list[str]) -> list[str]:
    """Compare two line lists position by position, marking changed lines with -/+."""
    output: list[str] = []
    for old, new in zip_longest(first, second, fillvalue=""):
        if old == new:
            output.append(old)
        else:
            output.extend([f"-{old}", f"+{new}"])
    return output


def diff(git_dir: str | Path, commit1: str, commit2: str) -> list[str]:
    """Return the line diff between two objects of the repository."""
    return diff_lines(_object_lines(git_dir, commit1), _object_lines(git_dir, commit2))