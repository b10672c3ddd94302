"""sandgit: a git sandbox (init, edit, add, commit, status, checkout/switch, merge, rebase, resolve) with a commit graph."""

from .errors import SandgitError
from .graph import GraphLayout, project_graph
from .interpreter import Interpreter
from .objects import CommandResult, Commit
from .repo import Repository
from .session import Session

__all__ = [
    "Repository",
    "Interpreter",
    "Session",
    "Commit",
    "CommandResult",
    "GraphLayout",
    "project_graph",
    "SandgitError",
]
