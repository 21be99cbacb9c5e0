"""
Tests for the command-line interface.
"""

import io
import logging
import os
import shutil
import sys
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout

sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src"))

from cdclsat.cli import EXIT_BUDGET_EXHAUSTED, EXIT_INPUT_ERROR, EXIT_SAT, EXIT_UNSAT, main
from cdclsat.solvers.config import reset_config

SAT_CNF = "c example\np cnf 2 2\n1 2 0\n-1 0\n"
UNSAT_CNF = "p cnf 1 2\n1 0\n-1 0\n"
XOR_CNF = "p cnf 2 4\n1 2 0\n1 -2 0\n-1 2 0\n-1 -2 0\n"


class TestCli(unittest.TestCase):
    """Test cases for cdclsat.cli.main."""

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.saved_level = logging.getLogger().level

    def tearDown(self):
        shutil.rmtree(self.test_dir)
        reset_config()
        logging.getLogger().setLevel(self.saved_level)

    def _write(self, content, name="input.cnf"):
        path = os.path.join(self.test_dir, name)
        with open(path, "w") as f:
            f.write(content)
        return path

    def _run(self, *argv):
        out = io.StringIO()
        err = io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = main(list(argv))
        return code, out.getvalue()

    def test_sat(self):
        code, output = self._run(self._write(SAT_CNF))
        self.assertEqual(code, 0)
        self.assertEqual(output, "Formula is SAT with assignments:\n1: False\n2: True\n")

    def test_unsat(self):
        code, output = self._run(self._write(UNSAT_CNF))
        self.assertEqual(code, 0)
        self.assertEqual(
            output,
            "Formula is UNSAT.\nNo satisfying assignment exists for the given formula.\n",
        )

    def test_competition_exit_codes(self):
        self.assertEqual(self._run(self._write(SAT_CNF), "--exit-codes")[0], EXIT_SAT)
        self.assertEqual(self._run(self._write(UNSAT_CNF), "--exit-codes")[0], EXIT_UNSAT)

    def test_missing_argument(self):
        with self.assertRaises(SystemExit) as ctx:
            self._run()
        self.assertEqual(ctx.exception.code, 2)

    def test_too_many_arguments(self):
        path = self._write(SAT_CNF)
        with self.assertRaises(SystemExit) as ctx:
            self._run(path, path)
        self.assertEqual(ctx.exception.code, 2)

    def test_unreadable_file(self):
        missing = os.path.join(self.test_dir, "missing.cnf")
        code, output = self._run(missing)
        self.assertEqual(code, EXIT_INPUT_ERROR)
        self.assertIn("Unable to open the file", output)

    def test_malformed_input(self):
        code, output = self._run(self._write("1 two 0\n"))
        self.assertEqual(code, EXIT_INPUT_ERROR)
        self.assertIn("Unable to parse", output)

    def test_first_uip_proves_unsat(self):
        code, output = self._run(self._write(XOR_CNF), "--learning", "first_uip", "--seed", "3")
        self.assertEqual(code, 0)
        self.assertTrue(output.startswith("Formula is UNSAT."))

    def test_budget_exhausted(self):
        code, output = self._run(
            self._write(XOR_CNF), "--heuristic", "ordered", "--max-conflicts", "3"
        )
        self.assertEqual(code, EXIT_BUDGET_EXHAUSTED)
        self.assertIn("Formula is UNKNOWN", output)

    def test_stats(self):
        code, output = self._run(self._write(SAT_CNF), "--stats")
        self.assertEqual(code, 0)
        self.assertIn("c decisions: 0", output)
        self.assertIn("c conflicts: 0", output)

    def test_config_file(self):
        config_path = self._write("solver:\n  learning: first_uip\n", name="config.yaml")
        code, output = self._run(self._write(XOR_CNF), "--config", config_path)
        self.assertEqual(code, 0)
        self.assertIn("UNSAT", output)

    def test_config_logging_level(self):
        config_path = self._write("logging:\n  level: DEBUG\n", name="debug.yaml")
        code, _ = self._run(self._write(SAT_CNF), "--config", config_path)
        self.assertEqual(code, 0)
        self.assertEqual(logging.getLogger().level, logging.DEBUG)

    def test_verbose_lowers_config_level(self):
        config_path = self._write("logging:\n  level: ERROR\n", name="error.yaml")
        self._run(self._write(SAT_CNF), "--config", config_path)
        self.assertEqual(logging.getLogger().level, logging.ERROR)

        self._run(self._write(SAT_CNF), "--config", config_path, "-v")
        self.assertEqual(logging.getLogger().level, logging.WARNING)

    def test_default_logging_level(self):
        self._run(self._write(SAT_CNF))
        self.assertEqual(logging.getLogger().level, logging.WARNING)

    def test_invalid_logging_level(self):
        config_path = self._write("logging:\n  level: LOUD\n", name="loud.yaml")
        code, _ = self._run(self._write(SAT_CNF), "--config", config_path)
        self.assertEqual(code, EXIT_INPUT_ERROR)

    def test_missing_config_file(self):
        code, _ = self._run(
            self._write(SAT_CNF), "--config", os.path.join(self.test_dir, "none.yaml")
        )
        self.assertEqual(code, EXIT_INPUT_ERROR)

    def test_bundled_examples(self):
        examples = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "examples")

        code, output = self._run(os.path.join(examples, "simple.cnf"))
        self.assertEqual(code, 0)
        self.assertIn("2: True", output)

        code, output = self._run(
            os.path.join(examples, "pigeonhole_4_3.cnf"),
            "--config",
            os.path.join(examples, "config.yaml"),
        )
        self.assertEqual(code, 0)
        self.assertTrue(output.startswith("Formula is UNSAT."))

    def test_trace_dir(self):
        trace_dir = os.path.join(self.test_dir, "trace")
        code, _ = self._run(self._write(SAT_CNF, name="small.cnf"), "--trace-dir", trace_dir)
        self.assertEqual(code, 0)
        self.assertTrue(os.path.exists(os.path.join(trace_dir, "small_result.jsonl")))
        self.assertTrue(os.path.exists(os.path.join(trace_dir, "small_metadata.json")))


if __name__ == "__main__":
    unittest.main()
