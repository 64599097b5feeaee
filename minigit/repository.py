"""Repository storage: blobs, the staging index, configuration and commits."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_GIT_DIR = ".minigit"
MAIN_BRANCH_REF = "refs/heads/main"
_MASK = 0xFFFFFFFF
_LINE_SPACE = " \t\r\n"
_FIELD_SPACE = " \t"


class RepositoryError(Exception):
    """Raised when a repository operation cannot be carried out."""


def _as_bytes(content: str | bytes) -> bytes:
    return content.encode("utf-8") if isinstance(content, str) else bytes(content)


def custom_hash(content: str | bytes) -> str:
    """Return the 32-bit multiply-by-33 hash of ``content`` as 8 hex digits.

    Bytes are taken as signed characters, so bytes above 127 count negative.
    """
    value = 0
    for byte in _as_bytes(content):
        signed = byte - 256 if byte >= 128 else byte
        value = (value * 33 + signed) & _MASK
    return f"{value:08x}"


@dataclass
class Commit:
    """A commit: its message, author, time, blobs and parent."""

    message: str
    made_by: str
    parent: Commit | None = None
    timestamp: int = field(default_factory=lambda: int(time.time()))
    blob_hashes: list[str] = field(default_factory=list)
    hash: str = ""

    def generate_hash(self) -> str:
        """Compute, store and return this commit's hash."""
        data = self.message + self.made_by + str(self.timestamp)
        data += "".join(self.blob_hashes)
        if self.parent is not None:
            data += self.parent.hash
        self.hash = custom_hash(data)
        return self.hash


class Repository:
    """A repository stored in a directory (``.minigit`` by default)."""

    def __init__(self, git_dir: str | Path = DEFAULT_GIT_DIR, force: bool = False) -> None:
        self.git_dir = Path(git_dir)
        self.objects_dir = self.git_dir / "objects"
        self.config: dict[str, str] = {}
        self.head: Commit | None = None
        self._blobs: dict[str, bytes] = {}

        if not force and not self.git_dir.is_dir():
            raise RepositoryError(f"Not a MiniGit repository: {git_dir}")

        config_path = self.git_dir / "config"
        if config_path.exists():
            self._load_config(config_path)
            self._load_index()
        elif not force:
            raise RepositoryError("Configuration file missing")

        if not force:
            self._check_format_version()

    @property
    def _index_path(self) -> Path:
        return self.git_dir / "index"

    def _check_format_version(self) -> None:
        key = "core.repositoryformatversion"
        if key not in self.config:
            raise RepositoryError(f"Missing '{key}' in config file")
        try:
            version = int(self.config[key])
        except ValueError as exc:
            raise RepositoryError(
                f"Invalid repositoryformatversion: {self.config[key]}"
            ) from exc
        if version != 0:
            raise RepositoryError(f"Unsupported repositoryformatversion: {version}")

    def _load_config(self, path: Path) -> None:
        section = ""
        for raw in path.read_text(encoding="utf-8").split("\n"):
            line = raw.split("#", 1)[0].strip(_LINE_SPACE)
            if not line:
                continue
            if line.startswith("[") and line.endswith("]"):
                section = line[1:-1]
                continue
            key, sep, value = line.partition("=")
            if not sep:
                continue
            name = f"{section}.{key.strip(_FIELD_SPACE)}"
            self.config[name] = value.strip(_FIELD_SPACE)

    def _load_index(self) -> None:
        if not self._index_path.is_file():
            return
        for blob_hash in self._index_path.read_text(encoding="utf-8").splitlines():
            if not blob_hash:
                continue
            blob_path = self.objects_dir / blob_hash
            self._blobs[blob_hash] = blob_path.read_bytes() if blob_path.is_file() else b""

    def _save_index(self) -> None:
        text = "".join(f"{blob_hash}\n" for blob_hash in self._blobs)
        self._index_path.write_text(text, encoding="utf-8", newline="\n")

    def _clear_index(self) -> None:
        self._index_path.write_text("", encoding="utf-8")

    def init(self) -> Path:
        """Create the repository layout on disk and return its directory."""
        if self.git_dir.exists():
            raise RepositoryError(f"{self.git_dir} already exists")

        heads = self.git_dir / "refs" / "heads"
        for directory in (self.git_dir, self.objects_dir, heads):
            directory.mkdir(parents=True, exist_ok=True)

        (self.git_dir / "HEAD").write_text(
            f"ref: {MAIN_BRANCH_REF}\n", encoding="utf-8", newline="\n"
        )
        (self.git_dir / MAIN_BRANCH_REF).write_text("", encoding="utf-8")
        (self.git_dir / "config").write_text(
            "[core]\nrepositoryformatversion = 0\n", encoding="utf-8", newline="\n"
        )
        return self.git_dir

    def create_blob(self, content: str | bytes) -> str:
        """Store ``content`` as a blob object and return its hash."""
        data = _as_bytes(content)
        header = f"blob {len(data)}\0".encode("ascii")
        blob_hash = custom_hash(header + data)
        self._blobs[blob_hash] = data
        self.objects_dir.mkdir(parents=True, exist_ok=True)
        (self.objects_dir / blob_hash).write_bytes(data)
        return blob_hash

    def add_file(self, filepath: str | Path) -> str:
        """Stage a file's content as a blob and return the blob hash."""
        try:
            content = Path(filepath).read_bytes()
        except OSError as exc:
            raise RepositoryError(f"Cannot open file: {filepath}") from exc
        blob_hash = self.create_blob(content)
        self._save_index()
        return blob_hash

    def commit(self, message: str, made_by: str) -> Commit:
        """Record the staged blobs as a new commit on the main branch."""
        if not self._blobs:
            raise RepositoryError("No files added to commit!")

        new_commit = Commit(message, made_by, parent=self.head, blob_hashes=list(self._blobs))
        new_commit.generate_hash()
        self.head = new_commit

        with (self.git_dir / "log.txt").open("a", encoding="utf-8", newline="\n") as log:
            log.write(
                f"{new_commit.hash}\n{new_commit.made_by}\n"
                f"{new_commit.timestamp}\n{new_commit.message}\n---\n"
            )
        (self.git_dir / MAIN_BRANCH_REF).write_text(
            f"{new_commit.hash}\n", encoding="utf-8", newline="\n"
        )
        self._clear_index()
        return new_commit

    def get_blob(self, blob_hash: str) -> bytes:
        """Return the content of a known blob."""
        try:
            return self._blobs[blob_hash]
        except KeyError:
            raise RepositoryError(f"Blob not found: {blob_hash}") from None