"""Tests for lifecycle hooks."""

from ymlgen.generation.processor import ProcessOutcome
from ymlgen.hooks import run_hooks, select_hooks


class TestSelectHooks:
    def test_success(self):
        outcome = ProcessOutcome(on_success="ok", on_fail="bad", on_done="done")
        assert select_hooks(outcome) == ["ok", "done"]

    def test_failure(self):
        outcome = ProcessOutcome(on_success="ok", on_fail="bad", on_done="done", error=ValueError())
        assert select_hooks(outcome) == ["bad", "done"]

    def test_empty_hooks_skipped(self):
        assert select_hooks(ProcessOutcome()) == []
        assert select_hooks(ProcessOutcome(on_done="done")) == ["done"]


class TestRunHooks:
    def test_runs_in_directory(self, tmp_path):
        outcome = ProcessOutcome(on_success="echo ok > success.txt", on_done="echo fin > done.txt")
        results = run_hooks(outcome, tmp_path)
        assert [r.returncode for r in results] == [0, 0]
        assert (tmp_path / "success.txt").read_text().strip() == "ok"
        assert (tmp_path / "done.txt").read_text().strip() == "fin"

    def test_failed_hook_reported(self, tmp_path):
        results = run_hooks(ProcessOutcome(on_done="exit 3"), tmp_path)
        assert results[0].returncode == 3
