# minigit

A deliberately small version control system. It keeps its state in a
`.minigit` directory in the current working directory: file contents are
stored as blobs under `objects/`, commits are recorded in a plain-text log
(`log.txt`), and branches are reference files under `refs/heads`.

## Installation

```
pip install .
```

## Command line

Every command runs from the directory that contains, or is about to contain,
`.minigit`.

```
minigit init                     # create .minigit with HEAD pointing at "main"
minigit add notes.txt            # store the file as a blob and stage it
minigit commit -m "First notes"  # commit staged blobs; asks for a "Made By" name on stdin
minigit log                      # show the commit history
minigit branch                   # list branches, marking the current one with *
minigit branch feature           # create a branch at the current branch's commit
minigit checkout feature         # make HEAD point at another branch
minigit diff <id1> <id2>         # compare two stored objects line by line
minigit merge feature            # three-way line merge into .minigit/merged.txt
```

`diff` prints the lines of both objects position by position: equal lines
as they are, differing lines as a `-` line followed by a `+` line.

`merge` compares the current branch, the named branch and their common
ancestor line by line. A line changed on only one side takes that side's
version; a line changed differently on both sides is reported with
`CONFLICT: both modified file.txt` and written between the markers
`<<<<<<current branch`, `========` and `<<<<<<target branch`.

Errors are printed to standard error as `ERROR: ...` and the command exits
with status 1; so do usage mistakes.

## Library use

```python
from minigit.repository import Repository, custom_hash
from minigit.branch import Branch
from minigit.checkout import switch_branch
from minigit.history import read_log, format_entry
from minigit.merge import merge_lines, diff_lines

Repository(".minigit", True).init()
repo = Repository(".minigit", False)
blob_hash = repo.add_file("notes.txt")
commit = repo.commit("First notes", "Alice")
print(commit.hash, repo.get_blob(blob_hash))

for entry in read_log(".minigit"):
    print(format_entry(entry))

Branch(".minigit").create("feature")
print(Branch(".minigit").list_branches())   # ['feature', 'main']
switch_branch(".minigit", "feature")

print(merge_lines(["a", "b"], ["a", "B"], ["a", "b"]))  # (['a', 'B'], 0)
print(diff_lines(["a", "b"], ["a", "c"]))                # ['a', '-b', '+c']
print(custom_hash("hello"))                              # 8 hex digits
```

`minigit.merge` also offers `current_branch`, `branch_commit`,
`parent_commit`, `least_common_ancestor`, `read_lines`, `merge` and `diff`,
each taking the repository directory as its first argument.

Failures are raised as `RepositoryError`, `BranchError`, `CheckoutError` or
`MergeError`.

## What it does not do

- `checkout` only moves `HEAD`; it does not change files in the working
  directory.
- `commit` always advances the `main` branch, whichever branch `HEAD` names.
- Commits are recorded only in `log.txt`; no commit objects are written to
  `objects/`, and a commit's parent is known only within one `Repository`
  object, so ancestry lookups used by `merge` find a common ancestor only
  when matching objects exist there.
- A merge is written to `.minigit/merged.txt` and is not committed or applied.
- There is no status, reset, remote or networking support.

## Running the tests

```
pip install ".[test]"
pytest
```