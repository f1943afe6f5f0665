import json
import os
from pathlib import Path
from typing import List, Tuple

TEAM_DIR = Path(os.path.join(os.path.dirname(os.path.abspath(__file__)), "teams"))


def resolve_team_path(name: str) -> Path:
    """A roster file from an explicit path or a name relative to ./teams/teams/ (``.json`` optional)."""
    if not name:
        raise ValueError("A team name is required")

    candidates = [Path(name), TEAM_DIR / name]
    if not name.endswith(".json"):
        candidates += [Path(name + ".json"), TEAM_DIR / (name + ".json")]

    for candidate in candidates:
        if candidate.is_file():
            return candidate
    raise ValueError("Unknown team path: {}".format(name))


def load_team(name: str) -> Tuple[List[dict], str]:
    """Resolved combatant records of a roster file plus the file's name relative to the team dir.

    The file holds either a list of records or an object with a ``pokemon`` list.
    """
    file_path = resolve_team_path(name)

    with open(file_path, "r", encoding="utf-8") as f:
        team = json.load(f)

    if isinstance(team, dict):
        team = team.get("pokemon", [])
    if not isinstance(team, list) or not team:
        raise ValueError("Team file {} holds no pokemon".format(file_path))

    try:
        relative_name = str(file_path.resolve().relative_to(TEAM_DIR.resolve()))
    except ValueError:
        relative_name = file_path.name

    return team, relative_name
