"""Porcelain commands: init, edit, add, resolve, status, commit, checkout, merge, rebase.

Each function validates first and only then mutates repo, so a raised
SandgitError means nothing changed. Returns the text shown to the user.
"""

from __future__ import annotations

from typing import Callable, List, Optional

from .constants import (
    CONFLICT_FILE,
    DEFAULT_AUTHOR,
    DEFAULT_COMMIT_MESSAGE,
    DEFAULT_EDIT_FILE,
)
from .errors import (
    BranchNotFoundError,
    NothingSpecifiedError,
    NothingToCommitError,
    NothingToResolveError,
)
from .objects import Commit, compute_commit_id
from .repo import Repository
from .util import short_id


def init_repo(repo: Repository) -> str:
    """Throw away all state and start over with an empty repository."""
    repo.reset()
    return "Initialized empty Git repository"


def edit(repo: Repository, path: Optional[str] = None) -> str:
    """Simulate editing a file: it shows up as modified (unless already staged)."""
    name = path or DEFAULT_EDIT_FILE
    if name not in repo.staged_files:
        repo.mark_modified(name)
    return f"Modified file: {name}"


def add(repo: Repository, paths: List[str]) -> str:
    """Stage every modified file. Paths are required but not matched against anything."""
    if not paths:
        raise NothingSpecifiedError("nothing specified, nothing added")
    repo.stage_modified()
    return "Changes added to the staging area"


def resolve(repo: Repository) -> str:
    """Mark the pending conflict resolved and stage the conflicted files."""
    if not repo.has_conflict:
        raise NothingToResolveError("nothing to resolve: no merge conflict in progress")
    repo.has_conflict = False
    repo.stage_modified()
    return "Conflicts resolved; files staged"


def status(repo: Repository) -> str:
    """Compose the status summary. Never mutates."""
    lines = [f"On branch {repo.current_branch}"]
    if repo.has_conflict:
        lines.append("You have unmerged paths.")
        lines.append('  (fix conflicts and run "git resolve")')
        lines.append("Unmerged paths:")
        for p in repo.modified_files or [CONFLICT_FILE]:
            lines.append(f"  both modified:   {p}")
    if repo.staged_files:
        lines.append("Changes to be committed:")
        for p in repo.staged_files:
            lines.append(f"  new file:   {p}")
    if repo.modified_files and not repo.has_conflict:
        lines.append("Changes not staged for commit:")
        for p in repo.modified_files:
            lines.append(f"  modified:   {p}")
    if not repo.staged_files and not repo.modified_files and not repo.has_conflict:
        lines.append("nothing to commit, working tree clean")
    return "\n".join(lines)


def new_commit_id(repo: Repository, parent_ids: List[str], branch: str, message: str, timestamp: int) -> str:
    """Hash the commit fields with the next sequence number, skipping any id already taken."""
    seq = len(repo.commits)
    cid = compute_commit_id(seq, parent_ids, branch, message, timestamp)
    while repo.has_commit(cid):
        seq += 1
        cid = compute_commit_id(seq, parent_ids, branch, message, timestamp)
    return cid


def commit(
    repo: Repository,
    message: Optional[str],
    timestamp: int,
    author: str = DEFAULT_AUTHOR,
) -> str:
    """Record staged files as a new commit on the current branch."""
    if not repo.staged_files:
        raise NothingToCommitError('nothing to commit (use "git add" to stage changes)')
    msg = message or DEFAULT_COMMIT_MESSAGE
    parent = repo.head or None
    cid = new_commit_id(repo, [parent] if parent else [], repo.current_branch, msg, timestamp)
    repo.append_commit(
        Commit(
            id=cid,
            parent_id=parent,
            message=msg,
            author=author,
            timestamp=timestamp,
            branch=repo.current_branch,
        )
    )
    repo.move_head(cid)
    repo.staged_files = []
    return f"[{repo.current_branch} {short_id(cid)}] {msg}"


def checkout(repo: Repository, name: str, create: bool = False) -> str:
    """Switch to branch name; with create, first point a new branch at head."""
    if create:
        repo.branches[name] = repo.head
        repo.current_branch = name
        return f"Switched to a new branch '{name}'"
    if name not in repo.branches:
        raise BranchNotFoundError(f"branch not found: {name}")
    repo.current_branch = name
    repo.head = repo.branches[name]
    return f"Switched to branch '{name}'"


def _branch_target(repo: Repository, name: str, what: str) -> str:
    target = repo.branches.get(name, "")
    if not target:
        raise BranchNotFoundError(f"{what} not found: {name}")
    return target


def merge(
    repo: Repository,
    name: str,
    decide_clean: Callable[[], bool],
    timestamp: int,
    author: str = DEFAULT_AUTHOR,
) -> str:
    """Merge branch name into the current branch.

    decide_clean picks the outcome: True creates a merge commit, False leaves
    the repository in conflict mode with CONFLICT_FILE modified and no commit.
    """
    target = _branch_target(repo, name, "branch")
    if not decide_clean():
        repo.has_conflict = True
        repo.staged_files = [p for p in repo.staged_files if p != CONFLICT_FILE]
        repo.modified_files = [CONFLICT_FILE]
        return (
            f"Auto-merging {CONFLICT_FILE}\n"
            f"CONFLICT (content): Merge conflict in {CONFLICT_FILE}\n"
            "Automatic merge failed; fix conflicts and then commit the result."
        )
    parent = repo.head or None
    msg = f"Merge branch '{name}'"
    parents = [p for p in (parent, target) if p]
    cid = new_commit_id(repo, parents, repo.current_branch, msg, timestamp)
    repo.append_commit(
        Commit(
            id=cid,
            parent_id=parent,
            parent2_id=target,
            message=msg,
            author=author,
            timestamp=timestamp,
            branch=repo.current_branch,
        )
    )
    repo.move_head(cid)
    return "Merge made by the 'recursive' strategy."


def rebase(repo: Repository, name: str) -> str:
    """Move the current branch to name's commit. Fast-forward only: nothing is replayed."""
    target = _branch_target(repo, name, "target branch")
    repo.move_head(target)
    return f"Successfully fast-forwarded to {name}"
