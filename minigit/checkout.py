"""Switching HEAD between branches."""

from __future__ import annotations

from pathlib import Path


class CheckoutError(Exception):
    """Raised when a branch cannot be checked out."""


def switch_branch(git_dir: str | Path, branch_name: str) -> str:
    """Point HEAD at ``branch_name`` and return the new ref."""
    git_dir = Path(git_dir)
    ref = f"refs/heads/{branch_name}"
    if not (git_dir / ref).exists():
        raise CheckoutError(f"Branch {branch_name} does not exist")
    try:
        (git_dir / "HEAD").write_text(f"ref: {ref}\n", encoding="utf-8", newline="\n")
    except OSError as exc:
        raise CheckoutError("Could not open HEAD for writing") from exc
    return ref