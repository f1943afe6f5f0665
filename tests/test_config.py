import logging
import os
import unittest
from unittest.mock import patch

import constants
from config import CustomFormatter, PlannerModes, _PlannerConfig


def _configure(argv, env=None):
    config = _PlannerConfig()
    with patch.dict(os.environ, env or {}, clear=True), patch("config.load_dotenv"):
        config.configure(argv)
    return config


class TestPlannerConfig(unittest.TestCase):
    def test_defaults(self):
        config = _configure(["--player-team", "hoenn_starters", "--enemy-team", "roxanne"])

        self.assertEqual("hoenn_starters", config.player_team)
        self.assertEqual("roxanne", config.enemy_team)
        self.assertEqual(PlannerModes.tiered, config.mode)
        self.assertEqual(constants.DEFAULT_MAX_DEPTH, config.max_depth)
        self.assertEqual(constants.DEFAULT_LOOKAHEAD_DEPTH, config.lookahead_depth)
        self.assertEqual(constants.DEFAULT_SEARCH_TIMEOUT_S, config.search_timeout_s)
        self.assertIsNone(config.seed)
        self.assertFalse(config.log_to_file)

    def test_environment_backs_every_flag(self):
        config = _configure(
            [],
            {
                "PLAYER_TEAM": "hoenn_starters",
                "ENEMY_TEAM": "roxanne",
                "ENEMY_LEAD": "1",
                "PLANNER_MODE": "worst-case",
                "MAX_DEPTH": "8",
                "SEARCH_TIMEOUT_S": "2.5",
                "SEED": "42",
                "LOG_TO_FILE": "true",
            },
        )

        self.assertEqual(1, config.enemy_lead)
        self.assertEqual(PlannerModes.worst_case, config.mode)
        self.assertEqual(8, config.max_depth)
        self.assertEqual(2.5, config.search_timeout_s)
        self.assertEqual(42, config.seed)
        self.assertTrue(config.log_to_file)

    def test_flags_override_environment(self):
        config = _configure(
            ["--mode", "optimal", "--player-team", "mine.json"],
            {"PLAYER_TEAM": "hoenn_starters", "ENEMY_TEAM": "roxanne", "PLANNER_MODE": "lookahead"},
        )
        self.assertEqual(PlannerModes.optimal, config.mode)
        self.assertEqual("mine.json", config.player_team)

    def test_invalid_values_exit(self):
        base = ["--player-team", "a", "--enemy-team", "b"]
        for argv in (
            ["--enemy-team", "b"],
            ["--player-team", "a"],
            base + ["--max-depth", "0"],
            base + ["--lookahead-depth", "0"],
            base + ["--search-timeout-s", "0"],
            base + ["--mode", "greedy"],
        ):
            with self.assertRaises(SystemExit):
                _configure(argv)

    def test_formatter_pads_level_name(self):
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "Turn {}".format(3), None, None)
        self.assertEqual("INFO     Turn 3", CustomFormatter().format(record))
