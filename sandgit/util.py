"""Helper functions: hashing, short ids, millisecond clock, command tokenizing, atomic writes."""

from __future__ import annotations

import hashlib
import os
import shlex
import tempfile
import time
from pathlib import Path
from typing import Callable, List, Optional

from .constants import SHORT_ID_LEN


def sha1_hash(data: bytes) -> str:
    """Compute SHA-1 hex digest of data."""
    return hashlib.sha1(data).hexdigest()


def short_id(commit_id: str) -> str:
    """Abbreviated commit id for output."""
    return commit_id[:SHORT_ID_LEN]


def now_ms() -> int:
    """Current wall-clock time in milliseconds since the epoch."""
    return int(time.time() * 1000)


class MonotonicClock:
    """Millisecond clock that never goes backwards.

    Commit order doubles as chronological order, so timestamps handed out by
    one clock must be non-decreasing even if the wall clock is adjusted.
    """

    def __init__(self, source: Optional[Callable[[], int]] = None) -> None:
        self._source = source or now_ms
        self._last = 0

    def __call__(self) -> int:
        ts = max(self._source(), self._last)
        self._last = ts
        return ts


def split_command(line: str) -> List[str]:
    """Split a command line into tokens.

    Quotes group words ('-m "two words"' is one message token). On unbalanced
    quotes fall back to plain whitespace splitting with double quotes removed.
    """
    try:
        return shlex.split(line)
    except ValueError:
        return [tok.replace('"', "") for tok in line.split()]


def write_bytes_atomic(path: Path, data: bytes) -> None:
    """Write bytes to file atomically (temp then replace)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=".tmp_")
    try:
        os.write(fd, data)
        os.close(fd)
        os.replace(tmp, path)
    except Exception:
        try:
            os.close(fd)
        except OSError:
            pass
        if os.path.exists(tmp):
            os.unlink(tmp)
        raise


def write_text_atomic(path: Path, text: str) -> None:
    """Write text to file atomically."""
    write_bytes_atomic(path, text.encode("utf-8"))
