from __future__ import annotations

import logging
import random
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional, TYPE_CHECKING

import constants
from data import BASE_CRIT_CHANCE, HIGH_CRIT_CHANCE, HIGH_CRIT_MOVES
from rnb.helpers import capitalize, normalize_name, resolve_rng, round_half_up
from rnb.search.enemy_ai import pick_best_score, score_enemy_moves
from rnb.strategy.damage import calculate_damage, crit_damage

if TYPE_CHECKING:
    from rnb.battle import Action, BattleState, Move, Pokemon

logger = logging.getLogger(__name__)

# (substrings of the effect text, label, risk weight)
STATUS_EXPOSURE = (
    (("burn",), "Burn risk ({}% chance) - halves attack", 1.0),
    (("paralyze", "paralysis"), "Paralyze risk ({}% chance) - 25% full paralysis", 1.0),
    (("poison",), "Poison risk ({}% chance) - ongoing damage", 0.5),
    (("confus",), "Confusion risk ({}% chance) - 33% self-hit", 1.0),
    (("flinch",), "Flinch risk ({}% chance) - can't move", 1.0),
    (("freeze",), "Freeze risk ({}% chance) - can't move", 1.5),
)


@dataclass
class AIMoveOdds:
    odds: Dict[str, float] = field(default_factory=dict)
    most_likely: Optional[str] = None
    influence: List[str] = field(default_factory=list)


@dataclass
class ActionRisk:
    level: str
    score: float
    probability: float
    reasons: List[str] = field(default_factory=list)
    crit_risks: List[str] = field(default_factory=list)
    status_risks: List[str] = field(default_factory=list)
    ai_move_odds: AIMoveOdds = field(default_factory=AIMoveOdds)

    def summary(self) -> str:
        if not self.reasons and not self.crit_risks and not self.status_risks:
            return "{} risk".format(self.level)
        return "{} risk: {}".format(self.level, "; ".join(self.reasons + self.crit_risks + self.status_risks))


def risk_level(score: float) -> str:
    if score >= 5:
        return constants.HIGH_RISK_LEVEL
    if score >= 3:
        return constants.MEDIUM_RISK
    return constants.LOW_RISK


def calculate_kill_probability(min_damage: int, max_damage: int, threshold: int) -> float:
    """Chance that a uniformly distributed roll between min and max reaches ``threshold``."""
    if min_damage >= threshold:
        return 1.0
    if max_damage < threshold:
        return 0.0
    return (max_damage - threshold) / (max_damage - min_damage)


def _status_exposure(move: "Move", attacker_faster: bool) -> Optional[tuple]:
    if not move.effect_chance or not move.effect:
        return None
    effect = move.effect.lower()
    if "will-o-wisp" in normalize_name(move.name):
        effect += " burn"
    for needles, label, weight in STATUS_EXPOSURE:
        if any(needle in effect for needle in needles):
            # a flinch only matters when the flinching side moves first
            if needles == ("flinch",) and not attacker_faster:
                continue
            return label.format(move.effect_chance), weight
    return None


def calculate_ai_move_odds(
    enemy: "Pokemon",
    target: "Pokemon",
    rng: Optional[random.Random] = None,
    simulations: int = constants.AI_ODDS_SIMULATIONS,
) -> AIMoveOdds:
    """Monte Carlo estimate of how often the trainer AI picks each of ``enemy``'s moves."""
    if not enemy.moves:
        return AIMoveOdds()

    rng = resolve_rng(rng)
    counts = Counter()
    for _ in range(simulations):
        selected = pick_best_score(score_enemy_moves(enemy, target, rng=rng), rng)
        counts[selected.move.name] += 1

    odds = {}
    for move in enemy.moves:
        odds[move.name] = round_half_up(counts[move.name] / simulations * 1000) / 10

    ranked = sorted(odds.items(), key=lambda item: item[1], reverse=True)
    most_likely = ranked[0]

    influence = []
    if most_likely[1] > 70:
        influence.append(
            "{} is highly likely ({}%) - AI sees it as strongest".format(most_likely[0], most_likely[1])
        )
    elif len(ranked) > 1 and abs(ranked[0][1] - ranked[1][1]) < 10:
        influence.append(
            "Close decision between {} and {} due to similar damage rolls".format(ranked[0][0], ranked[1][0])
        )

    for move in enemy.damaging_moves:
        damage = calculate_damage(enemy, target, move)
        if damage.max >= target.current_hp > damage.min:
            influence.append("Staying above {} HP prevents guaranteed {} selection".format(damage.min, move.name))

    return AIMoveOdds(odds=odds, most_likely=most_likely[0], influence=influence)


def _move_risk(risk: ActionRisk, attacker: "Pokemon", defender: "Pokemon", move: "Move") -> None:
    damage = calculate_damage(attacker, defender, move)

    max_retaliation = 0
    retaliation_move = None
    for enemy_move in defender.damaging_moves:
        retaliation = calculate_damage(defender, attacker, enemy_move)
        if retaliation.max > max_retaliation:
            max_retaliation = retaliation.max
            retaliation_move = enemy_move

        crit = crit_damage(retaliation)
        if crit >= attacker.current_hp > retaliation.max:
            high_crit = normalize_name(enemy_move.name) in HIGH_CRIT_MOVES
            chance = HIGH_CRIT_CHANCE if high_crit else BASE_CRIT_CHANCE
            risk.crit_risks.append(
                "{} crit OHKO ({}% chance, {} dmg)".format(capitalize(enemy_move.name), round_half_up(chance * 100), crit)
            )
            risk.score += 2 if high_crit else 1

    retaliation_name = capitalize(retaliation_move.name) if retaliation_move else "counter-attack"
    if max_retaliation >= attacker.current_hp:
        risk.reasons.append("OHKO risk from {} ({} dmg)".format(retaliation_name, max_retaliation))
        risk.score += 3
    elif max_retaliation * 2 >= attacker.current_hp:
        risk.reasons.append("2HKO risk from {} ({} dmg)".format(retaliation_name, max_retaliation))
        risk.score += 2

    defender_faster = defender.stats.spe > attacker.stats.spe
    for enemy_move in defender.moves:
        exposure = _status_exposure(enemy_move, defender_faster)
        if exposure is not None:
            risk.status_risks.append(exposure[0])
            risk.score += exposure[1]

    min_kills = damage.min >= defender.current_hp
    if damage.max >= defender.current_hp and not min_kills:
        kill_chance = calculate_kill_probability(damage.min, damage.max, defender.current_hp)
        risk.reasons.append("Kill depends on damage roll ({}% chance)".format(round_half_up(kill_chance * 100)))
        risk.score += 1

    if 0 < damage.effectiveness < 1:
        risk.reasons.append("Resisted attack")
        risk.score += 1
    elif damage.effectiveness == 0:
        risk.reasons.append("Immune to attack")
        risk.score += 5

    if defender_faster and not min_kills:
        risk.reasons.append("Opponent moves first")
        risk.score += 1

    if move.effect_chance and "flinch" in move.effect.lower() and attacker.stats.spe > defender.stats.spe:
        risk.reasons.append("Flinch chance ({}%) - prevents enemy move".format(move.effect_chance))
        risk.score -= 0.5


def _switch_risk(risk: ActionRisk, switch_in: "Pokemon", defender: "Pokemon") -> None:
    max_damage = 0
    max_damage_move = None
    for enemy_move in defender.damaging_moves:
        damage = calculate_damage(defender, switch_in, enemy_move)
        if damage.max > max_damage:
            max_damage = damage.max
            max_damage_move = enemy_move

        crit = crit_damage(damage)
        if crit >= switch_in.current_hp > damage.max:
            risk.crit_risks.append("{} crit can OHKO switch-in ({} dmg)".format(capitalize(enemy_move.name), crit))
            risk.score += 1

    move_name = capitalize(max_damage_move.name) if max_damage_move else "attack"
    if max_damage >= switch_in.current_hp:
        risk.reasons.append("Switch-in OHKO'd by {} ({} dmg)".format(move_name, max_damage))
        risk.score += 4
    elif max_damage * 2 >= switch_in.current_hp:
        risk.reasons.append("Switch-in 2HKO'd by {} ({} dmg)".format(move_name, max_damage))
        risk.score += 2

    risk.reasons.append("Free attack for opponent")
    risk.score += 1


def calculate_action_risk(
    state: "BattleState",
    action: "Action",
    is_player: bool,
    rng: Optional[random.Random] = None,
    include_ai_odds: bool = True,
) -> ActionRisk:
    """Scores how much can go wrong with ``action`` this turn.

    Status moves carry no risk terms. For player actions the trainer AI's move odds
    against the combatant that will be on the field are estimated as well, unless
    ``include_ai_odds`` is off.
    """
    attacker = state.active(is_player)
    defender = state.active(not is_player)
    risk = ActionRisk(level=constants.LOW_RISK, score=0, probability=1.0)

    if action.type == constants.MOVE_ACTION and not action.move.is_status:
        if is_player and include_ai_odds and defender.moves:
            risk.ai_move_odds = calculate_ai_move_odds(defender, attacker, rng)
        _move_risk(risk, attacker, defender, action.move)
    elif action.type == constants.SWITCH_ACTION:
        switch_in = state.team(is_player)[action.switch_to_index]
        if is_player and include_ai_odds and defender.moves:
            risk.ai_move_odds = calculate_ai_move_odds(defender, switch_in, rng)
        _switch_risk(risk, switch_in, defender)

    risk.level = risk_level(risk.score)
    risk.probability = max(0.0, 1 - risk.score * 0.15)
    return risk
