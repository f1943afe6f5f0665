from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import List, Optional

import constants
from rnb.battle import Action, BattleState
from rnb.search.actions import generate_possible_actions
from rnb.search.position_eval import evaluate_position
from rnb.simulation.switch_handler import ForcedSwitchHandler, resolve_faints
from rnb.simulation.turn import simulate_turn
from rnb.strategy.damage import calculate_damage

logger = logging.getLogger(__name__)


@dataclass
class LookaheadResult:
    action: Optional[Action]
    score: float


def greedy_response(state: BattleState, responder_is_player: bool, actions: List[Action]) -> Action:
    """First damaging move with positive average damage, else the first available action.

    This is a fixed heuristic for the other side, not a search of its options.
    """
    responder = state.active(responder_is_player)
    target = state.active(not responder_is_player)
    for action in actions:
        if action.type != constants.MOVE_ACTION or action.move.is_status:
            continue
        if calculate_damage(responder, target, action.move).average > 0:
            return action
    return actions[0]


def find_best_action_with_lookahead(
    state: BattleState,
    is_player: bool,
    depth: int = constants.DEFAULT_LOOKAHEAD_DEPTH,
    switch_handler: Optional[ForcedSwitchHandler] = None,
    rng: Optional[random.Random] = None,
) -> LookaheadResult:
    """Best action for one side by recursing over its own action sequences.

    Each candidate is paired with a greedy response from the other side, simulated on a
    clone, and scored by recursing ``depth - 1`` plies for the same side. The player
    maximises the evaluation and the opponent minimises it.
    """
    if depth <= 0:
        return LookaheadResult(action=None, score=evaluate_position(state))

    actions = generate_possible_actions(state, is_player)
    if not actions:
        return LookaheadResult(action=None, score=evaluate_position(state))

    best_action = actions[0]
    best_score = float("-inf") if is_player else float("inf")

    for action in actions:
        responses = generate_possible_actions(state, not is_player)
        if not responses:
            continue
        response = greedy_response(state, not is_player, responses)

        cloned = state.clone()
        player_action, enemy_action = (action, response) if is_player else (response, action)
        simulate_turn(cloned, player_action, enemy_action, rng=rng)
        resolve_faints(cloned, switch_handler)

        score = find_best_action_with_lookahead(cloned, is_player, depth - 1, switch_handler, rng).score
        if (is_player and score > best_score) or (not is_player and score < best_score):
            best_score = score
            best_action = action

    logger.debug("Lookahead depth {}: {} (score: {})".format(depth, best_action.describe(), best_score))
    return LookaheadResult(action=best_action, score=best_score)
