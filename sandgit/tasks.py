"""Practice tasks: model, JSON loader and built-in scenarios (sandgit/scenarios/)."""

from __future__ import annotations

import importlib.util
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .errors import TaskLoadError

logger = logging.getLogger(__name__)

DIFFICULTIES = ("Beginner", "Intermediate", "Advanced")

# "random" leaves the outcome to the session's decider
MERGE_OUTCOMES = ("random", "clean", "conflict")

SCENARIOS_DIR = Path(__file__).resolve().parent / "scenarios"


@dataclass(frozen=True)
class Task:
    """A practice task: setup commands put the repository in its starting state."""

    title: str
    description: str
    difficulty: str = "Beginner"
    initial_commands: List[str] = field(default_factory=list)
    solution_commands: List[str] = field(default_factory=list)
    goal_description: str = ""
    validation_logic: str = ""
    merge_outcome: str = "random"

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Task":
        """Build from the camelCase JSON shape. Raises TaskLoadError on bad input."""
        if not isinstance(d, dict):
            raise TaskLoadError("task must be a JSON object")
        title = d.get("title")
        if not title or not isinstance(title, str):
            raise TaskLoadError("task is missing a title")
        difficulty = d.get("difficulty", "Beginner")
        if difficulty not in DIFFICULTIES:
            raise TaskLoadError(f"unknown difficulty {difficulty!r} (expected one of {', '.join(DIFFICULTIES)})")
        initial = d.get("initialCommands", [])
        solution = d.get("solutionCommands", [])
        for key, cmds in (("initialCommands", initial), ("solutionCommands", solution)):
            if not isinstance(cmds, list) or not all(isinstance(c, str) for c in cmds):
                raise TaskLoadError(f"{key} must be a list of strings")
        merge_outcome = d.get("mergeOutcome", "random")
        if merge_outcome not in MERGE_OUTCOMES:
            raise TaskLoadError(f"unknown mergeOutcome {merge_outcome!r} (expected one of {', '.join(MERGE_OUTCOMES)})")
        return cls(
            title=title,
            description=str(d.get("description", "")),
            difficulty=difficulty,
            initial_commands=list(initial),
            solution_commands=list(solution),
            goal_description=str(d.get("goalDescription", "")),
            validation_logic=str(d.get("validationLogic", "")),
            merge_outcome=merge_outcome,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "difficulty": self.difficulty,
            "initialCommands": list(self.initial_commands),
            "solutionCommands": list(self.solution_commands),
            "goalDescription": self.goal_description,
            "validationLogic": self.validation_logic,
            "mergeOutcome": self.merge_outcome,
        }


def load_task_file(path: str | Path) -> Task:
    """Load a task from a JSON file."""
    p = Path(path)
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except OSError as e:
        raise TaskLoadError(f"cannot read task file {p}: {e}") from e
    except json.JSONDecodeError as e:
        raise TaskLoadError(f"invalid JSON in {p}: {e}") from e
    logger.debug("loaded task file %s", p)
    return Task.from_dict(data)


def list_builtin() -> List[str]:
    """Names of built-in scenarios, e.g. ['S1_first_commit', ...]."""
    return sorted(p.stem for p in SCENARIOS_DIR.glob("S*.py"))


def _scenario_path(name: str) -> Optional[Path]:
    # name can be "S1_first_commit" or just "S1"
    for stem in (name, name.split("_")[0]):
        path = SCENARIOS_DIR / f"{stem}.py"
        if path.is_file():
            return path
    prefix = name.split("_")[0] + "_"
    for stem in list_builtin():
        if stem.startswith(prefix):
            return SCENARIOS_DIR / f"{stem}.py"
    return None


def load_builtin(name: str) -> Task:
    """Load built-in scenario by name from sandgit/scenarios/."""
    path = _scenario_path(name)
    if path is None:
        raise TaskLoadError(f"scenario not found: {name}")
    spec = importlib.util.spec_from_file_location(f"sandgit.scenarios.{path.stem}", path)
    if spec is None or spec.loader is None:
        raise TaskLoadError(f"cannot load scenario: {name}")
    mod = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(mod)
    data = getattr(mod, "TASK", None)
    if data is None:
        raise TaskLoadError(f"scenario {path.stem} defines no TASK")
    return Task.from_dict(data)


def load_task(ref: str) -> Task:
    """Load a task from a JSON file path, else from a built-in scenario name."""
    if ref.endswith(".json") or Path(ref).is_file():
        return load_task_file(ref)
    return load_builtin(ref)
