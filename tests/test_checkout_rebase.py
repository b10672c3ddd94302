"""Tests for checkout/switch (create and switch) and fast-forward rebase."""

import unittest

from sandgit.interpreter import Interpreter, always_clean


def commit_file(interp: Interpreter, name: str, msg: str) -> str:
    interp.execute(f"git edit {name}")
    interp.execute(f"git add {name}")
    result = interp.execute(f'git commit -m "{msg}"')
    assert not result.is_error, result.output
    return interp.state.head


class TestCheckout(unittest.TestCase):
    def setUp(self) -> None:
        self.interp = Interpreter(decide_merge=always_clean)
        self.hash_a = commit_file(self.interp, "a.txt", "A")

    def test_create_branch_points_at_head(self) -> None:
        result = self.interp.execute("git checkout -b feature")
        self.assertFalse(result.is_error)
        self.assertIn("feature", result.output)
        state = self.interp.state
        self.assertEqual(state.branches["feature"], self.hash_a)
        self.assertEqual(state.current_branch, "feature")
        self.assertEqual(state.head, self.hash_a)
        state.check_invariants()

    def test_switch_c_creates_branch(self) -> None:
        self.interp.execute("git switch -c topic")
        state = self.interp.state
        self.assertEqual(state.current_branch, "topic")
        self.assertEqual(state.branches["topic"], self.hash_a)

    def test_checkout_back_to_main_restores_head(self) -> None:
        main_before = self.interp.state.branches["main"]
        self.interp.execute("git checkout -b feature")
        hash_b = commit_file(self.interp, "b.txt", "B")
        self.assertEqual(self.interp.state.branches["feature"], hash_b)
        result = self.interp.execute("git checkout main")
        self.assertFalse(result.is_error)
        state = self.interp.state
        self.assertEqual(state.current_branch, "main")
        self.assertEqual(state.head, main_before)
        self.assertEqual(state.branches["main"], main_before)

    def test_switch_alias(self) -> None:
        self.interp.execute("git checkout -b feature")
        self.interp.execute("git switch main")
        self.assertEqual(self.interp.state.current_branch, "main")

    def test_checkout_missing_branch_fails(self) -> None:
        before = self.interp.state
        result = self.interp.execute("git checkout nowhere")
        self.assertTrue(result.is_error)
        self.assertIn("branch not found", result.output)
        self.assertEqual(self.interp.state, before)

    def test_checkout_without_name_fails(self) -> None:
        before = self.interp.state
        self.assertTrue(self.interp.execute("git checkout").is_error)
        self.assertTrue(self.interp.execute("git checkout -b").is_error)
        self.assertEqual(self.interp.state, before)

    def test_create_branch_before_first_commit(self) -> None:
        interp = Interpreter(decide_merge=always_clean)
        interp.execute("git checkout -b early")
        state = interp.state
        self.assertEqual(state.branches["early"], "")
        self.assertEqual(state.head, "")
        state.check_invariants()

    def test_commit_on_branch_leaves_main(self) -> None:
        self.interp.execute("git checkout -b feature")
        hash_b = commit_file(self.interp, "b.txt", "B")
        state = self.interp.state
        self.assertEqual(state.branches["main"], self.hash_a)
        self.assertEqual(state.branches["feature"], hash_b)
        self.assertEqual(state.commits[-1].branch, "feature")
        self.assertEqual(state.commits[-1].parent_id, self.hash_a)


class TestRebase(unittest.TestCase):
    def setUp(self) -> None:
        self.interp = Interpreter(decide_merge=always_clean)
        self.hash_a = commit_file(self.interp, "a.txt", "A")
        self.interp.execute("git checkout -b docs")
        self.interp.execute("git checkout main")
        self.hash_b = commit_file(self.interp, "b.txt", "B")
        self.interp.execute("git checkout docs")

    def test_rebase_fast_forwards_current_branch(self) -> None:
        count_before = len(self.interp.state.commits)
        result = self.interp.execute("git rebase main")
        self.assertFalse(result.is_error)
        self.assertIn("fast-forward", result.output.lower())
        state = self.interp.state
        self.assertEqual(state.head, self.hash_b)
        self.assertEqual(state.branches["docs"], self.hash_b)
        self.assertEqual(state.branches["main"], self.hash_b)
        self.assertEqual(state.current_branch, "docs")
        self.assertEqual(len(state.commits), count_before)
        state.check_invariants()

    def test_rebase_does_not_replay_commits(self) -> None:
        hash_c = commit_file(self.interp, "c.txt", "C")
        count_before = len(self.interp.state.commits)
        self.interp.execute("git rebase main")
        state = self.interp.state
        self.assertEqual(state.head, self.hash_b)
        self.assertEqual(len(state.commits), count_before)
        self.assertIsNotNone(state.get_commit(hash_c))

    def test_rebase_missing_target_fails(self) -> None:
        before = self.interp.state
        result = self.interp.execute("git rebase ghost")
        self.assertTrue(result.is_error)
        self.assertIn("target branch not found", result.output)
        self.assertEqual(self.interp.state, before)

    def test_rebase_onto_branch_without_commits_fails(self) -> None:
        interp = Interpreter(decide_merge=always_clean)
        interp.execute("git checkout -b empty")
        self.assertTrue(interp.execute("git rebase main").is_error)


if __name__ == "__main__":
    unittest.main()
