"""Session: an interpreter plus its transcript and the task being practiced."""

from __future__ import annotations

import json
import logging
from typing import List, Optional

from .graph import GraphLayout, project_graph
from .interpreter import Interpreter, MergeDecider, always_clean, always_conflict
from .objects import CommandResult, HistoryItem
from .repo import Repository
from .tasks import Task

logger = logging.getLogger(__name__)

INIT_COMMAND = "git init"


class Session:
    """Runs commands one at a time and records each in history.

    Callers must not run commands concurrently; every call completes before
    returning.
    """

    def __init__(self, interpreter: Optional[Interpreter] = None) -> None:
        self.interpreter = interpreter or Interpreter()
        self._decide_merge: MergeDecider = self.interpreter.decide_merge
        self.history: List[HistoryItem] = []
        self.task: Optional[Task] = None

    def run(self, command: str) -> CommandResult:
        """Execute one command and append it to the transcript."""
        result = self.interpreter.execute(command)
        self.history.append(HistoryItem(command, result.output, result.is_error))
        return result

    def replay(self, commands: List[str]) -> List[CommandResult]:
        return [self.run(cmd) for cmd in commands]

    def load_task(self, task: Task) -> List[HistoryItem]:
        """Start task: fresh repository, then its setup commands. Returns the new transcript."""
        self.task = task
        self.history = []
        self.interpreter.decide_merge = self._task_decider(task)
        self.run(INIT_COMMAND)
        for cmd in task.initial_commands:
            result = self.run(cmd)
            if result.is_error:
                logger.debug("setup command for %r failed: %s: %s", task.title, cmd, result.output)
        return list(self.history)

    def _task_decider(self, task: Task) -> MergeDecider:
        """Decider for task: its pinned merge outcome, else the session's own."""
        if task.merge_outcome == "clean":
            return always_clean
        if task.merge_outcome == "conflict":
            return always_conflict
        return self._decide_merge

    def reset_progress(self) -> List[HistoryItem]:
        """Back to the current task's starting state (or an empty repository without a task)."""
        if self.task is None:
            self.history = []
            self.run(INIT_COMMAND)
            return list(self.history)
        return self.load_task(self.task)

    def snapshot(self) -> Repository:
        return self.interpreter.state

    def snapshot_json(self, indent: Optional[int] = 2) -> str:
        """State after the last command as JSON, the shape handed to external judges."""
        return json.dumps(self.interpreter.state.to_dict(), indent=indent, ensure_ascii=False)

    def graph(self) -> GraphLayout:
        return project_graph(self.interpreter.state)
