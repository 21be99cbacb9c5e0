"""
Unit tests for solver configuration.
"""

import os
import shutil
import sys
import tempfile
import unittest

import yaml

sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src"))

from cdclsat.solvers.config import SolverConfig, get_config, load_config, reset_config


class TestSolverConfig(unittest.TestCase):
    """Test cases for SolverConfig."""

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.test_dir)
        reset_config()

    def _write_yaml(self, data, name="config.yaml"):
        path = os.path.join(self.test_dir, name)
        with open(path, "w") as f:
            yaml.safe_dump(data, f)
        return path

    def test_defaults(self):
        config = SolverConfig()
        self.assertEqual(config.get("solver.name"), "cdcl")
        self.assertEqual(config.get("solver.learning"), "conflict")
        self.assertEqual(config.get("solver.heuristic"), "random")
        self.assertIsNone(config.get("solver.timeout"))
        self.assertEqual(config.get("solver.timeout", 5.0), 5.0)
        self.assertFalse(config.get("trace.enabled"))

    def test_missing_key_returns_default(self):
        config = SolverConfig()
        self.assertIsNone(config.get("solver.nonexistent"))
        self.assertEqual(config.get("nothing.here", 3), 3)

    def test_set_and_item_access(self):
        config = SolverConfig()
        config.set("solver.seed", 0)
        config["solver.timeout"] = 2.5

        self.assertEqual(config.get("solver.seed"), 0)
        self.assertEqual(config["solver.timeout"], 2.5)
        self.assertIn("solver.timeout", config)
        self.assertNotIn("solver.nonexistent", config)
        self.assertNotIn("nothing.here", config)

    def test_contains_unset_key(self):
        config = SolverConfig()
        self.assertIsNone(config.get("solver.max_conflicts"))
        self.assertIn("solver.max_conflicts", config)
        self.assertIn("solver.seed", config)
        self.assertIn("logging.level", config)

    def test_update(self):
        config = SolverConfig()
        config.update({"solver": {"learning": "first_uip"}})
        self.assertEqual(config.get("solver.learning"), "first_uip")
        self.assertEqual(config.get("solver.name"), "cdcl")

    def test_load_yaml_merges_defaults(self):
        path = self._write_yaml({"solver": {"learning": "first_uip", "seed": 7}})
        config = SolverConfig(path)

        self.assertEqual(config.get("solver.learning"), "first_uip")
        self.assertEqual(config.get("solver.seed"), 7)
        self.assertEqual(config.get("solver.heuristic"), "random")

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            SolverConfig(os.path.join(self.test_dir, "absent.yaml"))

    def test_save_and_reload(self):
        config = SolverConfig()
        config.set("solver.max_conflicts", 100)
        path = os.path.join(self.test_dir, "nested", "saved.yaml")
        config.save(path)

        with open(path) as f:
            data = yaml.safe_load(f)
        self.assertEqual(data["solver"]["max_conflicts"], 100)
        self.assertEqual(SolverConfig(path).get("solver.max_conflicts"), 100)

    def test_to_dict(self):
        data = SolverConfig().to_dict()
        self.assertIsInstance(data, dict)
        self.assertEqual(data["solver"]["name"], "cdcl")

    def test_global_instance(self):
        path = self._write_yaml({"solver": {"heuristic": "ordered"}})
        loaded = load_config(path)
        self.assertIs(get_config(), loaded)
        self.assertEqual(get_config().get("solver.heuristic"), "ordered")

        reset_config()
        self.assertEqual(get_config().get("solver.heuristic"), "random")


if __name__ == "__main__":
    unittest.main()
