"""Commit history helpers: first-parent walk."""

from __future__ import annotations

from typing import Generator, List

from .objects import Commit
from .repo import Repository


def iter_first_parent(repo: Repository, start_id: str) -> Generator[Commit, None, None]:
    """Walk from start_id following first parents; yields commits newest first.

    Stops at a root commit or an unknown id. Terminates because a parent is
    always appended before its children.
    """
    curr = start_id
    while curr:
        commit = repo.get_commit(curr)
        if commit is None:
            return
        yield commit
        curr = commit.parent_id or ""


def commit_history(repo: Repository, start_id: str) -> List[Commit]:
    """Linear first-parent ancestor chain of start_id, start_id first."""
    return list(iter_first_parent(repo, start_id))
