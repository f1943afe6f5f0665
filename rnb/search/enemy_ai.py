"""Run & Bun trainer AI.

Every candidate move is scored the way the game's trainer AI does it:

- status moves start at +6
- the move with the highest rolled damage gets +6 (80%) or +8 (20%)
- a move whose rolled damage kills gets +6 when the AI moves first (faster, or slower
  with priority) and +3 otherwise, plus +1 with a boost-on-KO ability
- a priority move gets +11 when the AI is slower and dies to the player this turn
- a high-crit move that is super effective gets +1 half of the time

The highest score wins and ties are broken at random. The AI never switches voluntarily.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import List, Optional

import constants
from data import BOOST_ON_KO_ABILITIES, HIGH_CRIT_MOVES
from rnb.battle import BattleState, Move, MoveAction, Pokemon
from rnb.helpers import normalize_name, resolve_rng
from rnb.search.actions import generate_possible_actions
from rnb.strategy.damage import DamageResult, calculate_damage

logger = logging.getLogger(__name__)


@dataclass
class MoveScore:
    action: MoveAction
    score: int = 0
    rolled_damage: int = 0
    damage: Optional[DamageResult] = None

    @property
    def move(self) -> Move:
        return self.action.move


def roll_damage(damage: DamageResult, rng: random.Random) -> int:
    """One of the 16 evenly spaced rolls between min and max damage."""
    roll = rng.randrange(constants.DAMAGE_ROLL_STEPS)
    return damage.min + math.floor((damage.max - damage.min) * roll / (constants.DAMAGE_ROLL_STEPS - 1))


def is_high_crit_move(move: Move) -> bool:
    name = normalize_name(move.name)
    return name in HIGH_CRIT_MOVES or "crit" in name


def dies_to(attacker: Pokemon, defender: Pokemon) -> bool:
    """True when any of ``attacker``'s damaging moves kills ``defender`` on an average roll."""
    for move in attacker.damaging_moves:
        if calculate_damage(attacker, defender, move).average >= defender.current_hp:
            return True
    return False


def score_enemy_moves(
    attacker: Pokemon,
    target: Pokemon,
    actions: Optional[List[MoveAction]] = None,
    rng: Optional[random.Random] = None,
) -> List[MoveScore]:
    rng = resolve_rng(rng)
    if actions is None:
        actions = [MoveAction(move_index=i, move=move) for i, move in enumerate(attacker.moves)]

    # the AI counts a speed tie as being faster
    enemy_is_faster = attacker.stats.spe >= target.stats.spe
    ai_dies_to_player = not enemy_is_faster and dies_to(target, attacker)

    scores = []
    for action in actions:
        if action.move.is_status:
            scores.append(MoveScore(action=action, score=constants.AI_STATUS_MOVE_SCORE))
            continue
        damage = calculate_damage(attacker, target, action.move)
        scores.append(MoveScore(action=action, rolled_damage=roll_damage(damage, rng), damage=damage))

    max_rolled = max((s.rolled_damage for s in scores), default=0)
    boost_ability = normalize_name(attacker.ability) in BOOST_ON_KO_ABILITIES

    for move_score in scores:
        if move_score.damage is None:
            continue

        has_priority = move_score.move.priority > 0

        if max_rolled > 0 and move_score.rolled_damage == max_rolled:
            if rng.random() < constants.AI_HIGHEST_DAMAGE_LUCKY_CHANCE:
                move_score.score = constants.AI_HIGHEST_DAMAGE_LUCKY_SCORE
            else:
                move_score.score = constants.AI_HIGHEST_DAMAGE_SCORE

        if move_score.rolled_damage >= target.current_hp:
            if enemy_is_faster or has_priority:
                move_score.score += constants.AI_FAST_KILL_BONUS
            else:
                move_score.score += constants.AI_SLOW_KILL_BONUS
            if boost_ability:
                move_score.score += constants.AI_BOOST_ABILITY_BONUS

        if has_priority and ai_dies_to_player:
            move_score.score += constants.AI_PRIORITY_EMERGENCY_BONUS

        if (
            is_high_crit_move(move_score.move)
            and move_score.damage.effectiveness > 1
            and rng.random() < constants.AI_HIGH_CRIT_CHANCE
        ):
            move_score.score += constants.AI_HIGH_CRIT_BONUS

    return scores


def pick_best_score(scores: List[MoveScore], rng: Optional[random.Random] = None) -> Optional[MoveScore]:
    if not scores:
        return None
    best_score = max(s.score for s in scores)
    return resolve_rng(rng).choice([s for s in scores if s.score == best_score])


def select_enemy_action(state: BattleState, rng: Optional[random.Random] = None) -> Optional[MoveAction]:
    """Picks the opponent's move for this turn, or None when it has no moves."""
    rng = resolve_rng(rng)
    move_actions = [a for a in generate_possible_actions(state, False) if a.type == constants.MOVE_ACTION]
    if not move_actions:
        return None

    scores = score_enemy_moves(state.enemy_active, state.player_active, move_actions, rng)
    selected = pick_best_score(scores, rng)

    logger.debug(
        "Enemy AI scores: {} -> {}".format(
            ", ".join("{}={}".format(s.move.name, s.score) for s in scores), selected.move.name
        )
    )
    return selected.action
