"""Command-line entry point for the repository tool."""

from __future__ import annotations

import sys
import time
from collections.abc import Callable, Sequence

from minigit.branch import Branch, BranchError
from minigit.checkout import CheckoutError, switch_branch
from minigit.history import show_log
from minigit.merge import (
    MergeError,
    branch_commit,
    current_branch,
    diff,
    least_common_ancestor,
    merge,
)
from minigit.repository import DEFAULT_GIT_DIR, Repository, RepositoryError

USAGE = "Usage: minigit <command> [args]"

_ERRORS = (RepositoryError, BranchError, CheckoutError, MergeError, OSError, ValueError)


def _usage(*lines: str) -> int:
    for line in lines:
        print(line, file=sys.stderr)
    return 1


def _read_author() -> str:
    """Read the first line of standard input that is not blank, without leading space."""
    for line in sys.stdin:
        stripped = line.lstrip()
        if stripped:
            return stripped.removesuffix("\n")
    return ""


def _cmd_add(repo: Repository, args: list[str]) -> int:
    if not args:
        return _usage("Usage: minigit add <file>")
    blob_hash = repo.add_file(args[0])
    print(f"Added file: {args[0]} as blob {blob_hash}")
    return 0


def _cmd_commit(repo: Repository, args: list[str]) -> int:
    if len(args) < 2 or args[0] != "-m":
        return _usage("Usage: minigit commit -m <message>")
    print("Enter Made By name: ", end="", flush=True)
    made_by = _read_author()
    commit = repo.commit(args[1], made_by)
    print(f"Created commit: {commit.hash[:8]}")
    print(f"Date:   {time.ctime(commit.timestamp)}")
    print(f"Files:  {len(commit.blob_hashes)}")
    return 0


def _cmd_log(repo: Repository, args: list[str]) -> int:
    show_log(DEFAULT_GIT_DIR)
    return 0


def _cmd_branch(repo: Repository, args: list[str]) -> int:
    branch = Branch(repo.git_dir)
    if not args:
        current = branch.current()
        print("Branches: ")
        for name in branch.list_branches():
            print(f"* {name}" if name == current else f" {name}")
        return 0
    if len(args) == 1:
        branch.create(args[0])
        print(f"Created branch: {args[0]}")
        return 0
    return _usage("Usage: ", " minigit branch", " minigit branch <name>")


def _cmd_checkout(repo: Repository, args: list[str]) -> int:
    if not args:
        return _usage("Usage: MiniGit checkout <branch>")
    switch_branch(repo.git_dir, args[0])
    print(f"Switched to Branch {args[0]}")
    return 0


def _cmd_merge(repo: Repository, args: list[str]) -> int:
    if len(args) != 1:
        return _usage("Usage: MiniGit merge <branch>")
    git_dir = repo.git_dir
    target = args[0]
    current = current_branch(git_dir)
    print(f"Current Branch: {current}")

    base = least_common_ancestor(git_dir, current, target)
    commit_a = branch_commit(git_dir, current)
    commit_b = branch_commit(git_dir, target)
    if not base:
        print("WARNING: No common Ansestor Found")
    conflicts = merge(git_dir, base, commit_a, commit_b)
    for _ in range(conflicts):
        print("CONFLICT: both modified file.txt")
    print(f"Merge completed. Merged content written to {git_dir}/merged.txt")
    return 0


def _cmd_diff(repo: Repository, args: list[str]) -> int:
    if len(args) != 2:
        return _usage("Usage: MiniGit diff <commit1> <commit2>")
    for line in diff(repo.git_dir, args[0], args[1]):
        print(line)
    return 0


def _cmd_default(repo: Repository, args: list[str]) -> int:
    if repo.git_dir.exists():
        print("MiniGit Repository Loaded Successfully")
        return 0
    return _usage("ERROR: No MiniGit repository found. Run 'minigit init' first.")


_COMMANDS: dict[str, Callable[[Repository, list[str]], int]] = {
    "add": _cmd_add,
    "commit": _cmd_commit,
    "log": _cmd_log,
    "branch": _cmd_branch,
    "checkout": _cmd_checkout,
    "merge": _cmd_merge,
    "diff": _cmd_diff,
}


def main(argv: Sequence[str] | None = None) -> int:
    """Run one command and return the process exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        return _usage(USAGE)
    command, rest = args[0], args[1:]
    try:
        if command == "init":
            git_dir = Repository(DEFAULT_GIT_DIR, force=True).init()
            print(f"Initialized empty MiniGit repository in {git_dir}")
            return 0
        repo = Repository()
        return _COMMANDS.get(command, _cmd_default)(repo, rest)
    except _ERRORS as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())