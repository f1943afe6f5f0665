from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

import constants
from rnb.helpers import type_effectiveness_modifier

if TYPE_CHECKING:
    from rnb.battle import Move, Pokemon
    from rnb.stats import Stats

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DamageResult:
    """Damage range of a single move use."""

    min: int
    max: int
    average: int
    effectiveness: float = 1.0
    is_stab: bool = False

    @classmethod
    def zero(cls) -> "DamageResult":
        return cls(min=0, max=0, average=0)

    def kills(self, hp: int) -> bool:
        return self.max >= hp

    def guaranteed_kill(self, hp: int) -> bool:
        return self.min >= hp


def calculate_damage(
    attacker: "Pokemon",
    defender: "Pokemon",
    move: "Move",
    attacker_stats: Optional["Stats"] = None,
    defender_stats: Optional["Stats"] = None,
) -> DamageResult:
    """Min/max/average damage of ``move`` from ``attacker`` into ``defender``.

    The 85% and 100% rolls are floored separately and the average is the floored
    midpoint of the two, not a 92.5% roll.
    """
    if not move.power:
        return DamageResult.zero()

    attacker_stats = attacker_stats or attacker.stats
    defender_stats = defender_stats or defender.stats

    level = attacker.level or constants.DEFAULT_LEVEL
    if move.is_physical:
        attack_stat, defense_stat = attacker_stats.atk, defender_stats.defense
    else:
        attack_stat, defense_stat = attacker_stats.spa, defender_stats.spd

    base_damage = math.floor(
        math.floor(2 * level / 5 + 2) * move.power * attack_stat / max(defense_stat, 1) / 50 + 2
    )

    stab = constants.STAB_MULTIPLIER if move.type in attacker.types else 1
    effectiveness = type_effectiveness_modifier(move.type, defender.types)

    min_damage = math.floor(base_damage * stab * effectiveness * constants.MIN_ROLL)
    max_damage = math.floor(base_damage * stab * effectiveness * constants.MAX_ROLL)

    return DamageResult(
        min=min_damage,
        max=max_damage,
        average=math.floor((min_damage + max_damage) / 2),
        effectiveness=effectiveness,
        is_stab=stab > 1,
    )


def calculate_worst_case_damage(
    attacker: "Pokemon",
    defender: "Pokemon",
    move: "Move",
    attacker_stats: Optional["Stats"] = None,
    defender_stats: Optional["Stats"] = None,
    is_player_attacking: bool = True,
) -> int:
    """Pessimistic damage from the player's point of view.

    The player always gets the minimum roll; the opponent always max-rolls and crits.
    """
    damage = calculate_damage(attacker, defender, move, attacker_stats, defender_stats)
    if is_player_attacking:
        return damage.min
    return crit_damage(damage)


def crit_damage(damage: DamageResult) -> int:
    """Critical hit on the max roll."""
    return math.floor(damage.max * constants.CRIT_MULTIPLIER)
