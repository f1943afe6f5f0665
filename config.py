import argparse
import logging
import os
import sys
from enum import Enum, auto
from logging.handlers import RotatingFileHandler
from typing import Optional

from dotenv import load_dotenv

import constants


class CustomFormatter(logging.Formatter):
    def format(self, record):
        lvl = "{}".format(record.levelname)
        return "{} {}".format(lvl.ljust(8), record.getMessage())


class CustomRotatingFileHandler(RotatingFileHandler):
    def __init__(self, file_name, **kwargs):
        self.base_dir = "logs"
        if not os.path.exists(self.base_dir):
            os.mkdir(self.base_dir)

        super().__init__("{}/{}".format(self.base_dir, file_name), **kwargs)


def init_logging(level, log_to_file):
    # Gets the root logger to set handlers/formatters
    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG)
    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setLevel(level)
    stdout_handler.setFormatter(CustomFormatter())
    logger.addHandler(stdout_handler)
    PlannerConfig.stdout_log_handler = stdout_handler

    if log_to_file:
        file_handler = CustomRotatingFileHandler("planner.log")
        file_handler.setLevel(logging.DEBUG)  # file logs are always debug
        file_handler.setFormatter(CustomFormatter())
        logger.addHandler(file_handler)
        PlannerConfig.file_log_handler = file_handler


class PlannerModes(Enum):
    tiered = auto()
    optimal = auto()
    worst_case = auto()
    lookahead = auto()


def _mode_name(value: str) -> str:
    return value.replace("-", "_")


class _PlannerConfig:
    player_team: str = None
    enemy_team: str = None
    player_lead: int = 0
    enemy_lead: int = 0
    mode: PlannerModes = PlannerModes.tiered
    max_depth: int = constants.DEFAULT_MAX_DEPTH
    lookahead_depth: int = constants.DEFAULT_LOOKAHEAD_DEPTH
    search_timeout_s: float = constants.DEFAULT_SEARCH_TIMEOUT_S
    seed: Optional[int] = None
    log_level: str = "INFO"
    log_to_file: bool = False
    stdout_log_handler: logging.StreamHandler = None
    file_log_handler: Optional[CustomRotatingFileHandler] = None

    def configure(self, argv=None):
        # Load environment variables from .env file
        load_dotenv()

        parser = argparse.ArgumentParser(description="Plan a Run & Bun battle against a known trainer team")
        parser.add_argument(
            "--player-team",
            default=os.getenv("PLAYER_TEAM"),
            help="Your roster. A JSON file path or a name relative to ./teams/teams/",
        )
        parser.add_argument(
            "--enemy-team",
            default=os.getenv("ENEMY_TEAM"),
            help="The opposing trainer's roster. A JSON file path or a name relative to ./teams/teams/",
        )
        parser.add_argument("--player-lead", type=int, default=int(os.getenv("PLAYER_LEAD", "0")))
        parser.add_argument("--enemy-lead", type=int, default=int(os.getenv("ENEMY_LEAD", "0")))
        parser.add_argument(
            "--mode",
            default=os.getenv("PLANNER_MODE", "tiered"),
            choices=[e.name.replace("_", "-") for e in PlannerModes],
            help="Which planner to run",
        )
        parser.add_argument(
            "--max-depth",
            type=int,
            default=int(os.getenv("MAX_DEPTH", str(constants.DEFAULT_MAX_DEPTH))),
            help="Maximum number of turns a plan may take",
        )
        parser.add_argument(
            "--lookahead-depth",
            type=int,
            default=int(os.getenv("LOOKAHEAD_DEPTH", str(constants.DEFAULT_LOOKAHEAD_DEPTH))),
            help="Plies searched by the lookahead planner",
        )
        parser.add_argument(
            "--search-timeout-s",
            type=float,
            default=float(os.getenv("SEARCH_TIMEOUT_S", str(constants.DEFAULT_SEARCH_TIMEOUT_S))),
            help="Wall-clock budget for each tier of the tiered search",
        )
        parser.add_argument(
            "--seed",
            type=int,
            default=int(os.getenv("SEED")) if os.getenv("SEED") else None,
            help="Seed for every random roll, for reproducible plans",
        )
        parser.add_argument("--log-level", default=os.getenv("LOG_LEVEL", "INFO"), help="Python logging level")
        parser.add_argument(
            "--log-to-file",
            action="store_true",
            default=os.getenv("LOG_TO_FILE", "").lower() in ("true", "1", "yes"),
            help="When enabled, DEBUG logs will be written to a file in the logs/ directory",
        )

        args = parser.parse_args(argv)

        if not args.player_team:
            parser.error("--player-team is required (or set PLAYER_TEAM environment variable)")
        if not args.enemy_team:
            parser.error("--enemy-team is required (or set ENEMY_TEAM environment variable)")
        if args.max_depth < 1:
            parser.error("--max-depth must be at least 1")
        if args.lookahead_depth < 1:
            parser.error("--lookahead-depth must be at least 1")
        if args.search_timeout_s <= 0:
            parser.error("--search-timeout-s must be positive")

        self.player_team = args.player_team
        self.enemy_team = args.enemy_team
        self.player_lead = args.player_lead
        self.enemy_lead = args.enemy_lead
        self.mode = PlannerModes[_mode_name(args.mode)]
        self.max_depth = args.max_depth
        self.lookahead_depth = args.lookahead_depth
        self.search_timeout_s = args.search_timeout_s
        self.seed = args.seed
        self.log_level = args.log_level
        self.log_to_file = args.log_to_file


PlannerConfig = _PlannerConfig()
