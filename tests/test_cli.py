import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout

from pnl_sim.cli import main
from tests.fixtures import BASELINE_PAYLOAD, PARAMS_PAYLOAD


class TestCLI(unittest.TestCase):
    def _write(self, payload) -> str:
        fd, path = tempfile.mkstemp(suffix=".json")
        with os.fdopen(fd, "w") as f:
            json.dump(payload, f)
        self.addCleanup(os.remove, path)
        return path

    def test_prints_projection(self):
        path = self._write({"params": PARAMS_PAYLOAD, "baseline": BASELINE_PAYLOAD})
        out = io.StringIO()
        with redirect_stdout(out):
            main([path])
        body = json.loads(out.getvalue())
        self.assertEqual(body["projection"]["revenue"], 1100.0)
        self.assertEqual(body["params"]["robotizationLevel"], 30.0)
        self.assertNotIn("advisory", body)

    def test_usage_and_invalid_input_exit_2(self):
        err = io.StringIO()
        with redirect_stderr(err), self.assertRaises(SystemExit) as cm:
            main([])
        self.assertEqual(cm.exception.code, 2)
        self.assertIn("Usage", err.getvalue())

        path = self._write({"params": {**PARAMS_PAYLOAD, "robotizationLevel": 150}, "baseline": BASELINE_PAYLOAD})
        err = io.StringIO()
        with redirect_stderr(err), self.assertRaises(SystemExit) as cm:
            main([path])
        self.assertEqual(cm.exception.code, 2)
        self.assertIn("robotizationLevel", err.getvalue())

        path = self._write({"params": PARAMS_PAYLOAD, "baseline": {**BASELINE_PAYLOAD, "revenue": 10**400}})
        err = io.StringIO()
        with redirect_stderr(err), self.assertRaises(SystemExit) as cm:
            main([path])
        self.assertEqual(cm.exception.code, 2)
        self.assertIn("revenue", err.getvalue())


if __name__ == '__main__':
    unittest.main()
