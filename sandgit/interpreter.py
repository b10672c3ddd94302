"""Command interpreter: parse one command line and apply it to the repository."""

from __future__ import annotations

import logging
import random
from typing import Callable, Dict, List, Optional

from . import porcelain
from .constants import (
    CONFLICT_ALLOWED_ACTIONS,
    DEFAULT_AUTHOR,
    DEFAULT_MERGE_CLEAN_PROBABILITY,
    PROGRAM_NAME,
)
from .errors import (
    CommandNotFoundError,
    ConflictBlockedError,
    NothingSpecifiedError,
    SandgitError,
)
from .objects import CommandResult
from .repo import Repository
from .util import MonotonicClock, short_id, split_command

logger = logging.getLogger(__name__)

MergeDecider = Callable[[], bool]


class RandomMergeDecider:
    """Decides merge outcomes at random: True (clean) with clean_probability."""

    def __init__(self, clean_probability: float = DEFAULT_MERGE_CLEAN_PROBABILITY, seed: Optional[int] = None) -> None:
        if not 0.0 <= clean_probability <= 1.0:
            raise SandgitError(f"merge clean probability must be between 0 and 1, got {clean_probability}")
        self.clean_probability = clean_probability
        self._rng = random.Random(seed)

    def __call__(self) -> bool:
        return self._rng.random() < self.clean_probability


def always_clean() -> bool:
    return True


def always_conflict() -> bool:
    return False


def _message_arg(args: List[str]) -> Optional[str]:
    """Value after -m/--message with double quotes stripped, or None."""
    for flag in ("-m", "--message"):
        if flag in args:
            i = args.index(flag)
            if i + 1 < len(args):
                return args[i + 1].replace('"', "") or None
    return None


class Interpreter:
    """Owns a Repository and is the only thing that changes it.

    execute() never raises: failures come back as CommandResult(is_error=True)
    and leave the repository exactly as it was.
    """

    def __init__(
        self,
        repo: Optional[Repository] = None,
        decide_merge: Optional[MergeDecider] = None,
        author: str = DEFAULT_AUTHOR,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        self._repo = repo.copy() if repo is not None else Repository()
        self.decide_merge: MergeDecider = decide_merge or RandomMergeDecider()
        self.author = author
        self.clock = clock or MonotonicClock()
        self._handlers: Dict[str, Callable[[Repository, List[str]], str]] = {
            "init": self._cmd_init,
            "edit": self._cmd_edit,
            "resolve": self._cmd_resolve,
            "add": self._cmd_add,
            "status": self._cmd_status,
            "commit": self._cmd_commit,
            "checkout": self._cmd_checkout,
            "switch": self._cmd_checkout,
            "merge": self._cmd_merge,
            "rebase": self._cmd_rebase,
        }

    @property
    def state(self) -> Repository:
        """Snapshot of the current state."""
        return self._repo.snapshot()

    def load_state(self, repo: Repository) -> None:
        """Replace the whole state (e.g. restored from a saved snapshot)."""
        repo.check_invariants()
        self._repo = repo.copy()

    def execute(self, command_line: str) -> CommandResult:
        """Run one command line. The transition runs on a copy installed only on success."""
        tokens = split_command(command_line)
        work = self._repo.copy()
        try:
            output = self._dispatch(work, tokens)
        except SandgitError as e:
            logger.debug("command failed: %r: %s: %s", command_line, type(e).__name__, e)
            return CommandResult(f"error: {e}", True)
        self._repo = work
        logger.debug(
            "applied %r: branch=%s head=%s conflict=%s",
            command_line,
            work.current_branch,
            short_id(work.head) or "-",
            work.has_conflict,
        )
        return CommandResult(output, False)

    def _dispatch(self, repo: Repository, tokens: List[str]) -> str:
        program = tokens[0] if tokens else ""
        if program != PROGRAM_NAME:
            raise CommandNotFoundError(f"command not found: {program}")
        action = tokens[1] if len(tokens) > 1 else ""
        args = tokens[2:]
        if repo.has_conflict and action not in CONFLICT_ALLOWED_ACTIONS:
            raise ConflictBlockedError("you need to resolve your current merge conflict first")
        handler = self._handlers.get(action)
        if handler is None:
            # Unknown subcommands are accepted so learners can explore freely.
            return f"{PROGRAM_NAME}: '{action}' executed."
        return handler(repo, args)

    def _cmd_init(self, repo: Repository, args: List[str]) -> str:
        return porcelain.init_repo(repo)

    def _cmd_edit(self, repo: Repository, args: List[str]) -> str:
        return porcelain.edit(repo, args[0] if args else None)

    def _cmd_resolve(self, repo: Repository, args: List[str]) -> str:
        return porcelain.resolve(repo)

    def _cmd_add(self, repo: Repository, args: List[str]) -> str:
        return porcelain.add(repo, args)

    def _cmd_status(self, repo: Repository, args: List[str]) -> str:
        return porcelain.status(repo)

    def _cmd_commit(self, repo: Repository, args: List[str]) -> str:
        return porcelain.commit(repo, _message_arg(args), self.clock(), author=self.author)

    def _cmd_checkout(self, repo: Repository, args: List[str]) -> str:
        create = "-b" in args or "-c" in args
        if not args or args[-1].startswith("-"):
            raise NothingSpecifiedError("branch name required")
        return porcelain.checkout(repo, args[-1], create=create)

    def _cmd_merge(self, repo: Repository, args: List[str]) -> str:
        if not args:
            raise NothingSpecifiedError("merge requires a branch name")
        return porcelain.merge(repo, args[0], self.decide_merge, self.clock(), author=self.author)

    def _cmd_rebase(self, repo: Repository, args: List[str]) -> str:
        if not args:
            raise NothingSpecifiedError("rebase requires a target branch")
        return porcelain.rebase(repo, args[0])
