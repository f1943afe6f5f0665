import logging
from dataclasses import dataclass
from typing import List, Optional

import constants
from rnb.battle import Pokemon
from rnb.strategy.damage import calculate_damage

logger = logging.getLogger(__name__)


@dataclass
class SwitchOption:
    index: int
    score: int
    pokemon: Optional[Pokemon]


def _max_damage(attacker: Pokemon, defender: Pokemon) -> int:
    best = 0
    for move in attacker.moves:
        damage = calculate_damage(attacker, defender, move, attacker.stats, defender.stats)
        best = max(best, damage.max)
    return best


def calculate_switch_in_score(switch_in: Optional[Pokemon], enemy_active: Optional[Pokemon]) -> int:
    """Scores a bench candidate against the opposing active.

    5 faster and OHKOs, 4 faster and 2HKOs, 3 faster and survives while dealing over 30%,
    2 slower but OHKOs, 1 slower and survives while dealing over 20%, -1 slower and
    OHKO'd, otherwise 0. An absent or fainted candidate gets -999.
    """
    if switch_in is None or enemy_active is None or switch_in.fainted:
        return constants.INVALID_SWITCH_SCORE

    is_faster = switch_in.stats.spe > enemy_active.stats.spe

    damage_to_enemy = _max_damage(switch_in, enemy_active)
    damage_from_enemy = _max_damage(enemy_active, switch_in)

    can_ohko = damage_to_enemy >= enemy_active.current_hp
    can_2hko = damage_to_enemy * 2 >= enemy_active.current_hp
    gets_ohkod = damage_from_enemy >= switch_in.current_hp
    survives_hit = not gets_ohkod
    if enemy_active.current_hp > 0:
        damage_percent = damage_to_enemy / enemy_active.current_hp * 100
    else:
        damage_percent = float("inf")

    if is_faster and can_ohko:
        return 5
    if is_faster and can_2hko:
        return 4
    if is_faster and survives_hit and damage_percent > 30:
        return 3
    if not is_faster and can_ohko:
        return 2
    if not is_faster and survives_hit and damage_percent > 20:
        return 1
    if not is_faster and gets_ohkod:
        return -1
    return 0


def find_best_switch_in(team: List[Pokemon], active_index: int, enemy_active: Pokemon) -> SwitchOption:
    """Highest scoring non-active, non-fainted roster member. The first one seen wins ties.

    Returns an option with index -1 when nobody is eligible.
    """
    best = SwitchOption(index=-1, score=constants.INVALID_SWITCH_SCORE, pokemon=None)

    for index, pokemon in enumerate(team):
        if index == active_index or pokemon.fainted:
            continue
        score = calculate_switch_in_score(pokemon, enemy_active)
        if score > best.score:
            best = SwitchOption(index=index, score=score, pokemon=pokemon)

    if best.pokemon is not None:
        logger.debug(
            "Best switch-in against {}: {} (score: {})".format(enemy_active.name, best.pokemon.name, best.score)
        )
    return best
