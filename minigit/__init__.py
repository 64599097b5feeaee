"""A small version control system: blobs, commits, branches, checkout, line merge and diff."""

__version__ = "0.1.0"
__all__ = ["branch", "checkout", "cli", "history", "merge", "repository"]