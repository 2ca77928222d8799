import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from unittest.mock import patch

from ballsort_core import cli
from ballsort_core.settings import deal_limits, env_flag, env_int, log_level, max_steps_default

PUZZLE = {
    "GameConfig": {"NumContainers": 3, "MaxNumBallsPerContainer": 2, "Colors": ["red", "blue"]},
    "GameState": {"Containers": [["red", "blue"], ["blue", "red"], []]},
}


class TestCLI(unittest.TestCase):
    def setUp(self):
        fd, self.path = tempfile.mkstemp(suffix=".json")
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(PUZZLE, f)

    def tearDown(self):
        os.remove(self.path)

    def _run(self, argv):
        buf = io.StringIO()
        with redirect_stdout(buf):
            code = cli.main(argv + ["--log-level", "WARNING"])
        return code, buf.getvalue()

    def test_given_puzzle_file_when_run_then_text_report(self):
        code, out = self._run([self.path, "--verify"])
        self.assertEqual(code, cli.EXIT_OK)
        self.assertIn("Search stats: num visited states", out)
        self.assertIn("Solution found with", out)
        self.assertIn("Step   1: Move", out)

    def test_given_json_flag_when_run_then_json_result(self):
        code, out = self._run([self.path, "--json"])
        self.assertEqual(code, cli.EXIT_OK)
        data = json.loads(out)
        self.assertTrue(data["solved"])
        self.assertIsInstance(data["moves"], list)

    def test_given_stdin_input_when_run_then_read_from_stdin(self):
        with patch("sys.stdin", io.StringIO(json.dumps(PUZZLE))):
            code, out = self._run(["-"])
        self.assertEqual(code, cli.EXIT_OK)
        self.assertIn("Solution found with", out)

    def test_given_bad_json_when_run_then_exit_one(self):
        with open(self.path, "w", encoding="utf-8") as f:
            f.write("{")
        with patch("sys.stderr", io.StringIO()) as err:
            code, _ = self._run([self.path])
        self.assertEqual(code, cli.EXIT_BAD_INPUT)
        self.assertIn("Unable to load puzzle", err.getvalue())

    def test_given_missing_file_when_run_then_exit_one(self):
        with patch("sys.stderr", io.StringIO()):
            code, _ = self._run([self.path + ".missing"])
        self.assertEqual(code, cli.EXIT_BAD_INPUT)

    def test_given_step_budget_when_run_then_aborted(self):
        code, out = self._run([self.path, "--max-steps", "1", "--json"])
        self.assertEqual(code, cli.EXIT_ABORTED)
        data = json.loads(out)
        self.assertTrue(data["aborted"])
        self.assertEqual(data["stats"], {"visited": 3, "explored": 1})

    def test_given_non_integer_step_budget_env_when_run_then_exit_one(self):
        err = io.StringIO()
        with patch.dict(os.environ, {"BALLSORT_MAX_STEPS": "abc"}), patch("sys.stderr", err):
            code, out = self._run([self.path])
        self.assertEqual(code, cli.EXIT_BAD_INPUT)
        self.assertEqual(out, "")
        self.assertIn("BALLSORT_MAX_STEPS", err.getvalue())

    def test_given_dealt_puzzle_with_reordered_revisits_when_verifying_then_replay_succeeds(self):
        code, out = self._run(["--random", "--colors", "3", "--capacity", "3", "--empty", "2",
                               "--seed", "2", "--verify", "--json"])
        self.assertEqual(code, cli.EXIT_OK)
        self.assertTrue(json.loads(out)["solved"])

    def test_given_random_flag_when_run_then_dealt_puzzle_solved_or_reported(self):
        code, out = self._run(["--random", "--colors", "2", "--capacity", "2", "--empty", "1",
                               "--seed", "3", "--show-puzzle", "--json"])
        self.assertEqual(code, cli.EXIT_OK)
        puzzle_line, result_line = out.strip().splitlines()
        self.assertIn("GameConfig", json.loads(puzzle_line))
        self.assertIn("solved", json.loads(result_line))


class TestSettings(unittest.TestCase):
    def test_given_env_when_reading_settings_then_parsed(self):
        with patch.dict(os.environ, {"BALLSORT_DEBUG": "yes", "BALLSORT_MAX_STEPS": "50"}, clear=False):
            os.environ.pop("BALLSORT_LOG_LEVEL", None)
            self.assertTrue(env_flag("BALLSORT_DEBUG"))
            self.assertEqual(log_level(), "DEBUG")
            self.assertEqual(max_steps_default(), 50)
        with patch.dict(os.environ, {"BALLSORT_LOG_LEVEL": "warning", "BALLSORT_MAX_STEPS": "0"}):
            self.assertEqual(log_level(), "WARNING")
            self.assertIsNone(max_steps_default())

    def test_given_deal_limit_env_when_reading_limits_then_overrides_defaults(self):
        with patch.dict(os.environ, {"BALLSORT_MAX_COLORS": "5"}):
            os.environ.pop("BALLSORT_MAX_CAPACITY", None)
            os.environ.pop("BALLSORT_MAX_EMPTY", None)
            self.assertEqual(deal_limits(), (5, 8, 4))

    def test_given_non_integer_env_when_reading_int_then_raises(self):
        with patch.dict(os.environ, {"BALLSORT_MAX_STEPS": "many"}):
            with self.assertRaises(ValueError):
                env_int("BALLSORT_MAX_STEPS", 0)


if __name__ == "__main__":
    unittest.main(verbosity=2)
