"""Creating and listing branches."""

from __future__ import annotations

from pathlib import Path

_HEADS_PREFIX = "refs/heads/"


class BranchError(Exception):
    """Raised when a branch operation cannot be carried out."""


def _first_line(path: Path) -> str:
    return path.read_text(encoding="utf-8").split("\n", 1)[0]


class Branch:
    """Branch operations on the repository in ``git_dir``."""

    def __init__(self, git_dir: str | Path = ".minigit") -> None:
        self.git_dir = Path(git_dir)

    @property
    def _heads_dir(self) -> Path:
        return self.git_dir / "refs" / "heads"

    def create(self, name: str) -> str:
        """Create branch ``name`` at the current branch's commit and return that commit."""
        try:
            ref_line = _first_line(self.git_dir / "HEAD")
        except OSError as exc:
            raise BranchError("HEAD not found; is this a MiniGit repository?") from exc
        if not ref_line.startswith("ref:"):
            raise BranchError("HEAD format is incorrect")

        try:
            last_commit = _first_line(self.git_dir / ref_line[5:])
        except OSError as exc:
            raise BranchError("Current branch is invalid") from exc
        if not last_commit:
            raise BranchError("Current branch has no commits yet; cannot branch from nothing")

        new_branch = self._heads_dir / name
        if new_branch.exists():
            raise BranchError(f"Branch already exists: {name}")
        try:
            new_branch.write_text(f"{last_commit}\n", encoding="utf-8", newline="\n")
        except OSError as exc:
            raise BranchError(f"Could not create branch file for {name}") from exc
        return last_commit

    def current(self) -> str | None:
        """Return the name of the branch HEAD points to, or None."""
        try:
            ref_line = _first_line(self.git_dir / "HEAD")
        except OSError:
            return None
        if not ref_line.startswith("ref: "):
            return None
        ref = ref_line[5:]
        if not ref.startswith(_HEADS_PREFIX):
            return None
        return ref[len(_HEADS_PREFIX):]

    def list_branches(self) -> list[str]:
        """Return the names of all branches, sorted."""
        if not self._heads_dir.exists():
            raise BranchError("No branches found")
        return sorted(entry.name for entry in self._heads_dir.iterdir())