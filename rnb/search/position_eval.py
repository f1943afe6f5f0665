import logging

import constants
from rnb.battle import BattleState, Pokemon
from rnb.search.switch_logic import calculate_switch_in_score
from rnb.strategy.damage import calculate_damage, crit_damage

logger = logging.getLogger(__name__)


def can_guarantee_ko(attacker: Pokemon, defender: Pokemon) -> bool:
    for move in attacker.damaging_moves:
        if calculate_damage(attacker, defender, move).min >= defender.current_hp:
            return True
    return False


def can_ko_with_crit(attacker: Pokemon, defender: Pokemon) -> bool:
    """True when a max roll, or a critical max roll, of any damaging move would faint the defender."""
    for move in attacker.damaging_moves:
        damage = calculate_damage(attacker, defender, move)
        crit = crit_damage(damage)
        if damage.max >= defender.current_hp or crit >= defender.current_hp:
            return True
    return False


def roster_hp_fraction(team) -> float:
    total_hp = sum(p.current_hp for p in team)
    max_hp = sum(p.stats.hp for p in team)
    return total_hp / max_hp if max_hp > 0 else 0.0


def evaluate_position(state: BattleState) -> float:
    """Scores a battle state from the player's side. Larger is better for the player.

    Terms, by weight: alive-count difference, a guaranteed KO on the opposing active,
    being in KO range of the opposing active, aggregate HP fraction difference and the
    quality of the current matchup.
    """
    player_alive = state.alive_count(True)
    enemy_alive = state.alive_count(False)

    score = (player_alive - enemy_alive) * constants.ALIVE_WEIGHT

    player_active = state.player_active
    enemy_active = state.enemy_active
    both_standing = player_alive > 0 and enemy_alive > 0 and not player_active.fainted and not enemy_active.fainted

    if both_standing:
        if can_guarantee_ko(player_active, enemy_active):
            score += constants.GUARANTEED_KO_BONUS
        if can_ko_with_crit(enemy_active, player_active):
            score -= constants.ENEMY_KO_THREAT_PENALTY

    score += (
        roster_hp_fraction(state.player_team) - roster_hp_fraction(state.enemy_team)
    ) * constants.HP_FRACTION_WEIGHT

    if both_standing:
        score += calculate_switch_in_score(player_active, enemy_active) * constants.MATCHUP_WEIGHT

    return score
