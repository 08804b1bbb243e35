from __future__ import annotations

import unittest
from typing import Any, Dict

from centos_image_builder.pipeline import run_pipeline

from .helpers import make_ctx


class _Recorder:
    def __init__(self, step_id: str, log: list, fail: bool = False) -> None:
        self.step_id = step_id
        self.log = log
        self.fail = fail

    def run(self, ctx, state: Dict[str, Any]) -> Dict[str, Any]:
        self.log.append(self.step_id)
        if self.fail:
            raise RuntimeError(f"{self.step_id} failed")
        return state


class PipelineTests(unittest.TestCase):
    def setUp(self) -> None:
        self.ctx = make_ctx("/data/chroot")

    def test_runs_steps_in_order(self) -> None:
        log: list = []
        steps = [_Recorder("a", log), _Recorder("b", log), _Recorder("c", log)]
        result = run_pipeline(ctx=self.ctx, state={}, steps=steps)
        self.assertEqual(log, ["a", "b", "c"])
        self.assertEqual(result.ran_steps, ["a", "b", "c"])
        self.assertIsNone(result.state["current_step"])

    def test_stop_after(self) -> None:
        log: list = []
        steps = [_Recorder("a", log), _Recorder("b", log), _Recorder("c", log)]
        result = run_pipeline(ctx=self.ctx, state={}, steps=steps, stop_after="b")
        self.assertEqual(result.ran_steps, ["a", "b"])

    def test_unknown_stop_after(self) -> None:
        with self.assertRaises(ValueError):
            run_pipeline(ctx=self.ctx, state={}, steps=[_Recorder("a", [])], stop_after="zz")

    def test_failure_stops_later_steps(self) -> None:
        log: list = []
        state: Dict[str, Any] = {}
        steps = [_Recorder("a", log), _Recorder("b", log, fail=True), _Recorder("c", log)]
        with self.assertRaises(RuntimeError):
            run_pipeline(ctx=self.ctx, state=state, steps=steps)
        self.assertEqual(log, ["a", "b"])
        self.assertEqual(state["current_step"], "b")
        self.assertEqual(state["completed_steps"], ["a"])


if __name__ == "__main__":
    unittest.main()
