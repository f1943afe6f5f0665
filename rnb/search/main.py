import logging
import random
from typing import List, Optional

import constants
from rnb.battle import BattleState
from rnb.helpers import resolve_rng
from rnb.search.enemy_ai import select_enemy_action
from rnb.search.lookahead import find_best_action_with_lookahead
from rnb.search.tiered import StrategyStep
from rnb.simulation.switch_handler import ForcedSwitchHandler, handle_forced_switch, resolve_faints
from rnb.simulation.turn import simulate_turn
from rnb.strategy.explainer import explain_action
from rnb.strategy.risk import calculate_action_risk

logger = logging.getLogger(__name__)


def find_optimal_strategy(
    initial_state: BattleState,
    max_depth: int = constants.DEFAULT_MAX_DEPTH,
    switch_handler: Optional[ForcedSwitchHandler] = None,
    rng: Optional[random.Random] = None,
    lookahead_depth: int = constants.DEFAULT_LOOKAHEAD_DEPTH,
) -> List[StrategyStep]:
    """Plays the battle out greedily: the player follows the lookahead, the opponent its trainer AI.

    Every step carries the risk of the player's action and a line explaining it.
    """
    switch_handler = switch_handler or handle_forced_switch
    rng = resolve_rng(rng)
    state = initial_state.clone()
    steps = []

    for _ in range(max_depth):
        if state.is_over():
            break

        action = find_best_action_with_lookahead(state, True, lookahead_depth, switch_handler, rng).action
        if action is None:
            break
        reasoning = explain_action(state, action, True)

        enemy_action = select_enemy_action(state, rng)
        if enemy_action is None:
            break

        risk = calculate_action_risk(state, action, True, rng=rng)
        player_alive_before = state.alive_count(True)
        enemy_alive_before = state.alive_count(False)

        result = simulate_turn(state, action, enemy_action, rng=rng)
        result.events.extend(resolve_faints(state, switch_handler))

        logger.debug("Turn {}: {} ({})".format(state.turn, action.describe(), risk.level))
        steps.append(
            StrategyStep(
                turn=state.turn,
                action=action,
                enemy_action=enemy_action,
                events=result.events,
                state=state.clone(),
                deaths_this_turn=player_alive_before - state.alive_count(True),
                enemy_deaths_this_turn=enemy_alive_before - state.alive_count(False),
                risk=risk,
                reasoning=reasoning,
            )
        )

    return steps
