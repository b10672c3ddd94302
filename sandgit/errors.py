"""Custom exceptions for sandgit."""

from __future__ import annotations


class SandgitError(Exception):
    """Base exception for sandgit."""

    pass


class CommandNotFoundError(SandgitError):
    """Raised when a command line does not start with the program name."""

    pass


class BranchNotFoundError(SandgitError):
    """Raised when a branch name is not in the branch table (or has no commit)."""

    pass


class NothingToCommitError(SandgitError):
    """Raised when commit is run with an empty staging area."""

    pass


class NothingToResolveError(SandgitError):
    """Raised when resolve is run without a pending conflict."""

    pass


class NothingSpecifiedError(SandgitError):
    """Raised when a command requires at least one argument and got none."""

    pass


class ConflictBlockedError(SandgitError):
    """Raised when an action is not allowed while a conflict is pending."""

    pass


class InvariantViolationError(SandgitError):
    """Raised when repository state breaks one of its invariants."""

    pass


class InvalidConfigKeyError(SandgitError):
    """Raised when a config key is invalid (e.g. not section.option)."""

    pass


class TaskLoadError(SandgitError):
    """Raised when a task file or built-in scenario cannot be loaded."""

    pass
