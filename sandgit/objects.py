"""Value objects: Commit, CommandResult, HistoryItem."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .util import sha1_hash


@dataclass(frozen=True)
class Commit:
    """Commit: id, parents, message, author, timestamp (ms) and the branch it was made on.

    branch is only used to pick a lane when drawing; ancestry comes from the parent ids.
    """

    id: str
    parent_id: Optional[str]
    message: str
    author: str
    timestamp: int
    branch: str
    parent2_id: Optional[str] = None

    @property
    def parent_ids(self) -> List[str]:
        """Non-empty parent ids, first parent first."""
        return [p for p in (self.parent_id, self.parent2_id) if p]

    @property
    def is_merge(self) -> bool:
        return self.parent2_id is not None

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "id": self.id,
            "parentId": self.parent_id,
            "message": self.message,
            "author": self.author,
            "timestamp": self.timestamp,
            "branch": self.branch,
        }
        if self.parent2_id is not None:
            d["parent2Id"] = self.parent2_id
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Commit":
        return cls(
            id=str(d["id"]),
            parent_id=d.get("parentId") or None,
            message=str(d.get("message", "")),
            author=str(d.get("author", "")),
            timestamp=int(d.get("timestamp", 0)),
            branch=str(d.get("branch", "")),
            parent2_id=d.get("parent2Id") or None,
        )


def compute_commit_id(
    seq: int,
    parent_ids: List[str],
    branch: str,
    message: str,
    timestamp: int,
) -> str:
    """Hash commit fields plus a sequence number into a 40-char hex id."""
    parts = [str(seq), *parent_ids, branch, message, str(timestamp)]
    return sha1_hash("\0".join(parts).encode())


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one command: text shown to the user and whether it failed."""

    output: str
    is_error: bool = False


@dataclass(frozen=True)
class HistoryItem:
    """One entry of a session transcript."""

    command: str
    output: str
    is_error: bool

    def to_dict(self) -> Dict[str, Any]:
        return {"command": self.command, "output": self.output, "isError": self.is_error}
