import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional

import constants
from rnb.battle import BattleState
from rnb.helpers import resolve_rng
from rnb.search.enemy_ai import select_enemy_action
from rnb.search.lookahead import find_best_action_with_lookahead
from rnb.search.tiered import StrategyStep
from rnb.simulation.switch_handler import ForcedSwitchHandler, handle_forced_switch, resolve_faints
from rnb.simulation.turn import simulate_turn_worst_case

logger = logging.getLogger(__name__)


@dataclass
class WorstCaseReport:
    steps: List[StrategyStep]
    player_deaths: int
    enemy_deaths: int
    we_win: bool
    we_lose: bool
    risk_tier: str
    final_state: BattleState = field(repr=False, default=None)


def worst_case_risk_tier(we_win: bool, we_lose: bool, player_deaths: int) -> str:
    if we_lose:
        return "{} - Can lose the battle in worst case".format(constants.LOSS_RISK)
    if not we_win:
        return "{} - Battle may not complete".format(constants.INCONCLUSIVE)
    if player_deaths == 0:
        return "{} - Zero deaths even with max bad luck".format(constants.RISKLESS)
    plural = player_deaths > 1
    return "{} {} DEATH{} - Guaranteed win, possible {} casualt{}".format(
        constants.RISKY, player_deaths, "S" if plural else "", player_deaths, "ies" if plural else "y"
    )


def calculate_worst_case_strategy(
    initial_state: BattleState,
    max_depth: int = constants.DEFAULT_MAX_DEPTH,
    switch_handler: Optional[ForcedSwitchHandler] = None,
    rng: Optional[random.Random] = None,
    lookahead_depth: int = constants.DEFAULT_LOOKAHEAD_DEPTH,
) -> WorstCaseReport:
    """Plays the lookahead plan out with every roll going against the player."""
    switch_handler = switch_handler or handle_forced_switch
    rng = resolve_rng(rng)
    state = initial_state.clone()
    steps = []
    player_deaths = 0
    enemy_deaths = 0

    for _ in range(max_depth):
        if state.is_over():
            break

        action = find_best_action_with_lookahead(state, True, lookahead_depth, switch_handler, rng).action
        if action is None:
            break
        enemy_action = select_enemy_action(state, rng)
        if enemy_action is None:
            break

        player_alive_before = state.alive_count(True)
        enemy_alive_before = state.alive_count(False)

        result = simulate_turn_worst_case(state, action, enemy_action, rng=rng)

        player_turn_deaths = player_alive_before - state.alive_count(True)
        enemy_turn_deaths = enemy_alive_before - state.alive_count(False)
        player_deaths += player_turn_deaths
        enemy_deaths += enemy_turn_deaths

        result.events.extend(resolve_faints(state, switch_handler))
        steps.append(
            StrategyStep(
                turn=state.turn,
                action=action,
                enemy_action=enemy_action,
                events=result.events,
                state=state.clone(),
                deaths_this_turn=player_turn_deaths,
                enemy_deaths_this_turn=enemy_turn_deaths,
            )
        )

    we_win = state.alive_count(False) == 0 and state.alive_count(True) > 0
    we_lose = state.alive_count(True) == 0
    risk_tier = worst_case_risk_tier(we_win, we_lose, player_deaths)
    logger.info("Worst case playout: {} ({} turns)".format(risk_tier, len(steps)))

    return WorstCaseReport(
        steps=steps,
        player_deaths=player_deaths,
        enemy_deaths=enemy_deaths,
        we_win=we_win,
        we_lose=we_lose,
        risk_tier=risk_tier,
        final_state=state,
    )
