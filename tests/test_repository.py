import pytest

from minigit.repository import Commit, Repository, RepositoryError, custom_hash


@pytest.fixture
def git_dir(tmp_path):
    return tmp_path / ".minigit"


@pytest.fixture
def repo(git_dir):
    Repository(git_dir, force=True).init()
    return Repository(git_dir)


def test_custom_hash_of_empty_is_zero():
    assert custom_hash("") == "00000000"


def test_custom_hash_single_character():
    assert custom_hash("a") == "00000061"


def test_custom_hash_treats_high_bytes_as_signed():
    assert custom_hash(b"\xff") == "ffffffff"


def test_custom_hash_str_and_bytes_agree():
    assert custom_hash("héllo") == custom_hash("héllo".encode("utf-8"))


def test_custom_hash_shape_and_order_sensitivity():
    digest = custom_hash("x" * 1000)
    assert len(digest) == 8
    assert set(digest) <= set("0123456789abcdef")
    assert custom_hash("abc") == custom_hash("abc")
    assert custom_hash("abc") != custom_hash("acb")


def test_init_creates_layout(git_dir):
    result = Repository(git_dir, force=True).init()
    assert result == git_dir
    assert (git_dir / "HEAD").read_text() == "ref: refs/heads/main\n"
    assert (git_dir / "objects").is_dir()
    assert (git_dir / "refs" / "heads" / "main").read_text() == ""
    assert (git_dir / "config").read_text() == "[core]\nrepositoryformatversion = 0\n"


def test_init_twice_raises(git_dir):
    Repository(git_dir, force=True).init()
    with pytest.raises(RepositoryError, match="already exists"):
        Repository(git_dir, force=True).init()


def test_open_loads_config(repo):
    assert repo.config == {"core.repositoryformatversion": "0"}


def test_open_missing_directory_raises(tmp_path):
    with pytest.raises(RepositoryError, match="Not a MiniGit repository"):
        Repository(tmp_path / "nowhere")


def test_open_without_config_raises(git_dir):
    git_dir.mkdir()
    with pytest.raises(RepositoryError, match="Configuration file missing"):
        Repository(git_dir)


def test_open_without_version_raises(git_dir):
    git_dir.mkdir()
    (git_dir / "config").write_text("[core]\n# nothing here\n")
    with pytest.raises(RepositoryError, match="repositoryformatversion"):
        Repository(git_dir)


def test_open_with_unsupported_version_raises(git_dir):
    git_dir.mkdir()
    (git_dir / "config").write_text("[core]\nrepositoryformatversion = 1\n")
    with pytest.raises(RepositoryError, match="Unsupported"):
        Repository(git_dir)


def test_config_comments_and_sections(git_dir):
    git_dir.mkdir()
    (git_dir / "config").write_text(
        "[core]\n  repositoryformatversion = 0 # note\n\n[user]\nname = alice\nnoequals\n"
    )
    repo = Repository(git_dir)
    assert repo.config == {"core.repositoryformatversion": "0", "user.name": "alice"}


def test_create_blob_stores_object(repo, git_dir):
    blob_hash = repo.create_blob("hello")
    assert blob_hash == custom_hash(b"blob 5\x00hello")
    assert (git_dir / "objects" / blob_hash).read_bytes() == b"hello"
    assert repo.get_blob(blob_hash) == b"hello"


def test_get_unknown_blob_raises(repo):
    with pytest.raises(RepositoryError, match="Blob not found"):
        repo.get_blob("deadbeef")


def test_add_file_updates_index_and_reloads(repo, git_dir, tmp_path):
    path = tmp_path / "file.txt"
    path.write_bytes(b"line one\nline two\n")
    blob_hash = repo.add_file(path)
    assert (git_dir / "index").read_text() == blob_hash + "\n"
    reopened = Repository(git_dir)
    assert reopened.get_blob(blob_hash) == b"line one\nline two\n"


def test_add_missing_file_raises(repo, tmp_path):
    with pytest.raises(RepositoryError, match="Cannot open file"):
        repo.add_file(tmp_path / "missing.txt")


def test_commit_without_blobs_raises(repo):
    with pytest.raises(RepositoryError, match="No files added"):
        repo.commit("message", "alice")


def test_commit_writes_log_branch_and_clears_index(repo, git_dir, tmp_path):
    path = tmp_path / "a.txt"
    path.write_text("one\n")
    blob_hash = repo.add_file(path)
    commit = repo.commit("first", "alice")
    assert commit.blob_hashes == [blob_hash]
    assert commit.parent is None
    assert repo.head is commit
    assert len(commit.hash) == 8
    assert (git_dir / "refs" / "heads" / "main").read_text() == commit.hash + "\n"
    assert (git_dir / "index").read_text() == ""
    assert (git_dir / "log.txt").read_text() == (
        f"{commit.hash}\nalice\n{commit.timestamp}\nfirst\n---\n"
    )


def test_second_commit_links_parent(repo, git_dir, tmp_path):
    path = tmp_path / "a.txt"
    path.write_text("one\n")
    repo.add_file(path)
    first = repo.commit("first", "alice")
    second = repo.commit("second", "bob")
    assert second.parent is first
    assert repo.head is second
    log_lines = (git_dir / "log.txt").read_text().split("\n")
    assert log_lines[0] == first.hash
    assert log_lines[5] == second.hash
    assert log_lines[9] == "---"


def test_commit_generate_hash_uses_fields():
    commit = Commit("m", "a", timestamp=100, blob_hashes=["x"])
    assert commit.generate_hash() == custom_hash("ma100x")
    assert commit.hash == custom_hash("ma100x")


def test_commit_generate_hash_includes_parent():
    parent = Commit("p", "a", timestamp=1)
    parent.generate_hash()
    child = Commit("m", "a", parent=parent, timestamp=100, blob_hashes=["x"])
    assert child.generate_hash() == custom_hash("ma100x" + parent.hash)