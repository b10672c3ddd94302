"""Tests for Session: history, task setup replay, reset and JSON snapshot."""

import json
import unittest

from sandgit.interpreter import Interpreter, always_clean, always_conflict
from sandgit.session import Session
from sandgit.tasks import Task, load_builtin

TASK = Task(
    title="Branch practice",
    description="",
    initial_commands=[
        "git edit README.md",
        "git add README.md",
        'git commit -m "Initial commit"',
        "git checkout -b feature",
    ],
    solution_commands=["git checkout main"],
)


class TestSessionHistory(unittest.TestCase):
    def setUp(self) -> None:
        self.session = Session(Interpreter(decide_merge=always_clean))

    def test_run_records_history(self) -> None:
        self.session.run("git edit a.txt")
        self.session.run("git checkout ghost")
        self.assertEqual([h.command for h in self.session.history], ["git edit a.txt", "git checkout ghost"])
        self.assertFalse(self.session.history[0].is_error)
        self.assertTrue(self.session.history[1].is_error)
        self.assertEqual(self.session.history[1].to_dict()["isError"], True)

    def test_reset_without_task_empties_repo(self) -> None:
        self.session.run("git edit a.txt")
        history = self.session.reset_progress()
        self.assertEqual([h.command for h in history], ["git init"])
        self.assertEqual(self.session.snapshot().modified_files, [])


class TestSessionTask(unittest.TestCase):
    def setUp(self) -> None:
        self.session = Session(Interpreter(decide_merge=always_clean))
        self.session.run("git edit leftover.txt")

    def test_load_task_runs_init_then_setup(self) -> None:
        history = self.session.load_task(TASK)
        self.assertEqual([h.command for h in history], ["git init"] + TASK.initial_commands)
        self.assertFalse(any(h.is_error for h in history))
        state = self.session.snapshot()
        self.assertEqual(len(state.commits), 1)
        self.assertEqual(state.current_branch, "feature")
        self.assertEqual(state.modified_files, [])
        state.check_invariants()

    def test_reset_progress_returns_to_task_start(self) -> None:
        self.session.load_task(TASK)
        start = self.session.snapshot().to_dict()
        self.session.run("git checkout main")
        self.session.run("git edit x")
        self.session.reset_progress()
        after = self.session.snapshot().to_dict()
        self.assertEqual(after["branches"].keys(), start["branches"].keys())
        self.assertEqual(after["currentBranch"], "feature")
        self.assertEqual(after["modifiedFiles"], [])
        self.assertEqual(len(after["commits"]), 1)

    def test_snapshot_json(self) -> None:
        self.session.load_task(TASK)
        data = json.loads(self.session.snapshot_json())
        self.assertEqual(data["currentBranch"], "feature")
        self.assertEqual(data["branches"]["feature"], data["branches"]["main"])
        self.assertFalse(data["hasConflict"])

    def test_graph_reflects_state(self) -> None:
        self.session.load_task(TASK)
        layout = self.session.graph()
        self.assertEqual(len(layout.nodes), 1)
        names = {l.name for l in layout.nodes[0].labels}
        self.assertEqual(names, {"main", "feature"})


class TestBuiltinScenarios(unittest.TestCase):
    def test_first_commit_solution(self) -> None:
        session = Session(Interpreter(decide_merge=always_clean))
        task = load_builtin("S1")
        session.load_task(task)
        results = session.replay(task.solution_commands)
        self.assertFalse(any(r.is_error for r in results))
        state = session.snapshot()
        self.assertEqual(len(state.commits), 1)
        self.assertEqual(state.branches["main"], state.head)

    def test_feature_branch_solution(self) -> None:
        session = Session(Interpreter(decide_merge=always_clean))
        task = load_builtin("S2_feature_branch")
        session.load_task(task)
        session.replay(task.solution_commands)
        state = session.snapshot()
        tip = state.get_commit(state.branches["main"])
        self.assertIsNotNone(tip)
        self.assertEqual(tip.parent2_id, state.branches["feature"])

    def test_merge_conflict_solution(self) -> None:
        session = Session(Interpreter(decide_merge=always_conflict))
        task = load_builtin("S3")
        history = session.load_task(task)
        self.assertFalse(any(h.is_error for h in history))
        results = session.replay(task.solution_commands)
        self.assertFalse(any(r.is_error for r in results))
        self.assertFalse(session.snapshot().has_conflict)

    def test_merge_conflict_solution_with_clean_decider(self) -> None:
        session = Session(Interpreter(decide_merge=always_clean))
        task = load_builtin("S3_merge_conflict")
        session.load_task(task)
        results = session.replay(task.solution_commands)
        self.assertEqual([r.is_error for r in results], [False, False, False])
        self.assertIn("CONFLICT", results[0].output)
        state = session.snapshot()
        self.assertFalse(state.has_conflict)
        self.assertEqual(state.commits[-1].message, "Merge hotfix")

    def test_task_pin_does_not_outlive_task(self) -> None:
        session = Session(Interpreter(decide_merge=always_clean))
        session.load_task(load_builtin("S3"))
        session.load_task(load_builtin("S2"))
        results = session.replay(load_builtin("S2").solution_commands)
        self.assertIn("recursive", results[-1].output)

    def test_rebase_solution(self) -> None:
        session = Session(Interpreter(decide_merge=always_clean))
        task = load_builtin("S4")
        session.load_task(task)
        session.replay(task.solution_commands)
        state = session.snapshot()
        self.assertEqual(state.current_branch, "docs")
        self.assertEqual(state.branches["docs"], state.branches["main"])


if __name__ == "__main__":
    unittest.main()
