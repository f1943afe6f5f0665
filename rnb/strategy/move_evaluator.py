"""Ranks every action available to one side and grades a chosen action against the best.

Moves are scored from four weighted components (damage 30%, speed 15%, type matchup 20%,
survival 35%), each on a 0-100 scale. Switches start from a baseline of 50 and are adjusted
for danger, matchup, HP and lost tempo. A chosen action is then classified chess-style by
how far it falls behind the top score.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from rnb.battle import Action, BattleState, Move, MoveAction, Pokemon, SwitchAction
from rnb.helpers import round_half_up, type_effectiveness_modifier
from rnb.strategy.damage import calculate_damage

logger = logging.getLogger(__name__)

DAMAGE_WEIGHT = 0.3
SPEED_WEIGHT = 0.15
TYPE_WEIGHT = 0.2
SURVIVAL_WEIGHT = 0.35

SWITCH_BASELINE = 50
SWITCH_TEMPO_PENALTY = 15

# (max score gap, classification, symbol)
CLASSIFICATIONS = (
    (3, "Best Move", "!!"),
    (10, "Excellent Move", "!"),
    (20, "Good Move", ""),
    (35, "Inaccuracy", "?!"),
    (50, "Mistake", "?"),
)
BLUNDER = ("Blunder", "??")


@dataclass
class ComponentScore:
    score: float
    reason: str = ""


@dataclass
class ActionEvaluation:
    action: Action
    score: int
    reasons: List[str] = field(default_factory=list)
    details: Dict[str, ComponentScore] = field(default_factory=dict)


@dataclass
class MoveClassification:
    classification: str
    symbol: str
    score_diff: int
    chosen_score: int
    best_score: int


def _percent_of_hp(damage: float, pokemon: Pokemon) -> float:
    if pokemon.current_hp <= 0:
        return 100.0
    return damage / pokemon.current_hp * 100


def assess_threat(attacker: Pokemon, defender: Pokemon) -> int:
    """How threatening ``attacker`` is to ``defender``, from 30 to 100."""
    max_percent = 0.0
    for move in attacker.damaging_moves:
        damage = calculate_damage(attacker, defender, move)
        max_percent = max(max_percent, _percent_of_hp((damage.min + damage.max) / 2, defender))

    if max_percent >= 100:
        return 100
    if max_percent >= 75:
        return 90
    if max_percent >= 50:
        return 70
    if max_percent >= 30:
        return 50
    return 30


def type_advantage_score(pokemon: Pokemon, opponent: Pokemon) -> int:
    """How well ``pokemon`` resists ``opponent``'s moves on average, from 20 to 90."""
    if not opponent.moves:
        return 50

    average = sum(type_effectiveness_modifier(m.type, pokemon.types) for m in opponent.moves) / len(opponent.moves)
    if average < 0.5:
        return 90
    if average < 1:
        return 70
    if average > 2:
        return 20
    if average > 1:
        return 35
    return 50


def _damage_component(attacker: Pokemon, defender: Pokemon, move: Move) -> ComponentScore:
    if move.is_status:
        return ComponentScore(40, "Status move (utility)")

    damage = calculate_damage(attacker, defender, move)
    average = (damage.min + damage.max) / 2
    percent = _percent_of_hp(average, defender)

    if percent >= 100:
        return ComponentScore(100, "Guaranteed KO ({} damage)".format(round_half_up(average)))
    if percent >= 80:
        return ComponentScore(95, "Near KO ({}% of HP)".format(round_half_up(percent)))
    if percent >= 50:
        return ComponentScore(80, "Heavy damage ({}% of HP)".format(round_half_up(percent)))
    if percent >= 30:
        return ComponentScore(60, "Solid damage ({}% of HP)".format(round_half_up(percent)))
    if percent >= 15:
        return ComponentScore(40, "Moderate damage ({}% of HP)".format(round_half_up(percent)))
    return ComponentScore(20, "Low damage ({}% of HP)".format(round_half_up(percent)))


def _speed_component(attacker: Pokemon, defender: Pokemon) -> ComponentScore:
    attacker_speed = attacker.stats.spe
    defender_speed = defender.stats.spe
    if attacker_speed > defender_speed * 1.1:
        return ComponentScore(80, "Outspeeds opponent")
    if attacker_speed > defender_speed:
        return ComponentScore(65, "Slightly faster")
    if attacker_speed * 1.1 < defender_speed:
        return ComponentScore(20, "Much slower")
    return ComponentScore(35, "Slower")


def _type_component(attacker: Pokemon, defender: Pokemon) -> ComponentScore:
    advantage = type_advantage_score(attacker, defender)
    if advantage > 70:
        return ComponentScore(80, "Favorable type matchup")
    if advantage > 50:
        return ComponentScore(60, "Decent type matchup")
    if advantage < 30:
        return ComponentScore(20, "Poor type matchup")
    return ComponentScore(40, "Neutral type matchup")


def _survival_component(attacker: Pokemon, defender: Pokemon) -> ComponentScore:
    hp_percent = attacker.hp_fraction * 100
    threat = assess_threat(defender, attacker)

    if hp_percent < 25 and threat > 70:
        return ComponentScore(10, "Critical HP - high risk of KO")
    if hp_percent < 50 and threat > 80:
        return ComponentScore(30, "Low HP - vulnerable position")
    if hp_percent > 75 and threat < 50:
        return ComponentScore(90, "Safe position - good HP")
    if threat < 30:
        return ComponentScore(80, "Opponent poses little threat")
    return ComponentScore(50, "Moderate risk")


def evaluate_move(attacker: Pokemon, defender: Pokemon, action: MoveAction) -> ActionEvaluation:
    details = {
        "damage": _damage_component(attacker, defender, action.move),
        "speed": _speed_component(attacker, defender),
        "type": _type_component(attacker, defender),
        "survival": _survival_component(attacker, defender),
    }
    score = (
        details["damage"].score * DAMAGE_WEIGHT
        + details["speed"].score * SPEED_WEIGHT
        + details["type"].score * TYPE_WEIGHT
        + details["survival"].score * SURVIVAL_WEIGHT
    )
    reasons = [component.reason for component in details.values() if component.reason]
    return ActionEvaluation(action=action, score=round_half_up(score), reasons=reasons, details=details)


def evaluate_switch(current: Pokemon, defender: Pokemon, switch_in: Pokemon, action: SwitchAction) -> ActionEvaluation:
    score = SWITCH_BASELINE
    reasons = []

    if assess_threat(defender, current) > 70:
        score += 30
        reasons.append("Current Pokemon is in danger")

    advantage = type_advantage_score(switch_in, defender)
    score += advantage * 0.5
    if advantage > 50:
        reasons.append("Better type matchup")

    target_hp = switch_in.hp_fraction * 100
    if target_hp < 30:
        score -= 40
        reasons.append("Switch target is low on HP")
    elif switch_in.current_hp == switch_in.max_hp:
        score += 10
        reasons.append("Switch target at full HP")

    if current.hp_fraction * 100 > 70:
        score -= 20
        reasons.append("Current Pokemon still healthy")

    score -= SWITCH_TEMPO_PENALTY
    reasons.append("Loses tempo")

    return ActionEvaluation(action=action, score=round_half_up(score), reasons=reasons)


def evaluate_all_actions(state: BattleState, is_player: bool = True) -> List[ActionEvaluation]:
    """Every move and legal switch of one side, best first."""
    attacker = state.active(is_player)
    defender = state.active(not is_player)
    team = state.team(is_player)

    evaluations = []
    for index, move in enumerate(attacker.moves):
        evaluations.append(evaluate_move(attacker, defender, MoveAction(move_index=index, move=move)))

    for index, pokemon in enumerate(team):
        if index == state.active_index(is_player) or pokemon.fainted:
            continue
        action = SwitchAction(switch_to_index=index, pokemon_name=pokemon.name)
        evaluations.append(evaluate_switch(attacker, defender, pokemon, action))

    evaluations.sort(key=lambda e: e.score, reverse=True)
    return evaluations


def classify_move(chosen: ActionEvaluation, evaluations: List[ActionEvaluation]) -> Optional[MoveClassification]:
    if not evaluations:
        return None

    best_score = evaluations[0].score
    score_diff = best_score - chosen.score

    classification, symbol = BLUNDER
    for max_gap, name, mark in CLASSIFICATIONS:
        if score_diff <= max_gap:
            classification, symbol = name, mark
            break

    logger.debug("{} classified as {} ({} behind best)".format(chosen.action.describe(), classification, score_diff))
    return MoveClassification(
        classification=classification,
        symbol=symbol,
        score_diff=score_diff,
        chosen_score=chosen.score,
        best_score=best_score,
    )
