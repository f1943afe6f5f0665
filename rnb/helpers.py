import math
import random
from typing import Iterable, Optional

from data import BASE_STAT_ALIASES, TYPE_CHART

_default_rng = random.Random()


def resolve_rng(rng: Optional[random.Random]) -> random.Random:
    return rng if rng is not None else _default_rng


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def normalize_name(name: str) -> str:
    if not name:
        return ""
    return (
        str(name)
        .strip()
        .lower()
        .replace(" ", "-")
        .replace("_", "-")
        .replace("'", "")
        .replace(".", "")
    )


def capitalize(text: str) -> str:
    if not text:
        return ""
    return text[0].upper() + text[1:]


def normalize_stat_key(key: str) -> Optional[str]:
    return BASE_STAT_ALIASES.get(str(key).strip().lower())


def type_effectiveness_modifier(attacking_type: str, defending_types: Iterable[str]) -> float:
    """Product of the chart multipliers of ``attacking_type`` against every defending type.

    Chart gaps are neutral, so unknown types (or an empty type list) yield 1.
    """
    matchups = TYPE_CHART.get(normalize_name(attacking_type), {})
    multiplier = 1
    for defending_type in defending_types:
        multiplier *= matchups.get(normalize_name(defending_type), 1)
    return multiplier
