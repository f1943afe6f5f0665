"""Risk-tiered strategy search.

Looks for the shortest winning line for the player, first one that loses nothing even
with the worst luck, then lines that may lose 1, 2, ... up to 5 combatants. Each tier is a
breadth-first search over the player's pruned actions, with the opponent answering
through the trainer AI. A winning line is only accepted after replaying it with average
rolls and with worst-case rolls.
"""

from __future__ import annotations

import logging
import random
from collections import deque
from dataclasses import dataclass, field
from typing import List, Optional

import constants
from rnb.battle import Action, BattleEvent, BattleState, Pokemon
from rnb.helpers import resolve_rng
from rnb.search.actions import generate_possible_actions
from rnb.search.enemy_ai import select_enemy_action
from rnb.simulation.switch_handler import ForcedSwitchHandler, handle_forced_switch
from rnb.simulation.turn import simulate_turn, simulate_turn_worst_case
from rnb.strategy.damage import calculate_damage, crit_damage
from rnb.strategy.explainer import explain_action
from rnb.strategy.risk import ActionRisk, calculate_action_risk
from rnb.strategy.time_manager import TimeManager

logger = logging.getLogger(__name__)


@dataclass
class StrategyStep:
    turn: int
    action: Action
    events: List[BattleEvent]
    state: BattleState
    enemy_action: Optional[Action] = None
    deaths_this_turn: int = 0
    enemy_deaths_this_turn: int = 0
    risk: Optional[ActionRisk] = None
    reasoning: str = ""

    @property
    def player_active(self) -> Pokemon:
        return self.state.player_active

    @property
    def enemy_active(self) -> Pokemon:
        return self.state.enemy_active


@dataclass
class TieredStrategy:
    steps: List[StrategyStep]
    risk_tier: str
    average_deaths: int
    worst_case_deaths: int
    acceptable_losses: Optional[int] = None
    worst_case_steps: List[StrategyStep] = field(default_factory=list)
    turns_to_win: Optional[int] = None

    @property
    def found(self) -> bool:
        """False for the best-effort plan returned when no tier produced a win."""
        return self.acceptable_losses is not None


@dataclass
class PathReplay:
    victory: bool
    deaths: int
    steps: List[StrategyStep]


@dataclass
class PathValidation:
    valid: bool
    risk_tier: str = ""
    average_deaths: int = 0
    worst_case_deaths: int = 0
    steps: List[StrategyStep] = field(default_factory=list)
    worst_case_steps: List[StrategyStep] = field(default_factory=list)


@dataclass
class _SearchNode:
    state: BattleState
    path: list
    depth: int


def risk_tier_label(average_deaths: int, worst_case_deaths: int) -> str:
    if worst_case_deaths == 0:
        return "{} - Zero deaths guaranteed".format(constants.RISKLESS)
    if average_deaths == 0:
        return "{} {} - Might lose {} if unlucky".format(constants.RISKY, worst_case_deaths, worst_case_deaths)
    if average_deaths == worst_case_deaths:
        return "{} {} - Guaranteed to lose {}".format(constants.SACRIFICE, average_deaths, average_deaths)
    return "{} - Average {}, worst {}".format(constants.HIGH_RISK, average_deaths, worst_case_deaths)


def _worst_incoming_percent(enemy: Pokemon, target: Pokemon, crit: bool) -> float:
    worst = 0.0
    for move in enemy.damaging_moves:
        result = calculate_damage(enemy, target, move)
        damage = crit_damage(result) if crit else result.max
        percent = damage / target.current_hp * 100 if target.current_hp > 0 else float("inf")
        worst = max(worst, percent)
    return worst


def _keep_switch(active: Pokemon, enemy: Pokemon, switch_in: Pokemon) -> bool:
    if not enemy.moves:
        return True

    current_worst_percent = _worst_incoming_percent(enemy, active, crit=True)
    worst_percent = _worst_incoming_percent(enemy, switch_in, crit=True)
    best_percent = _worst_incoming_percent(enemy, switch_in, crit=False)

    can_ohko = False
    can_threaten = False
    for move in switch_in.damaging_moves:
        damage = calculate_damage(switch_in, enemy, move)
        if damage.min >= enemy.current_hp:
            can_ohko = True
        if damage.average > enemy.current_hp * constants.THREATEN_FRACTION:
            can_threaten = True

    if can_ohko:
        return True
    if worst_percent < current_worst_percent * constants.DEFENSIVE_SWITCH_RATIO:
        return True
    if worst_percent > constants.RISKY_SWITCH_PERCENT:
        return False
    return best_percent < constants.SAFE_SWITCH_PERCENT or can_threaten


def generate_and_prune_actions(state: BattleState, is_player: bool = True) -> List[Action]:
    """Legal actions minus the ones not worth searching.

    Status moves always stay. Damaging moves stay when within 95% of the best average damage
    or when they guarantee the KO. Switches stay when the switch-in guarantees a KO, takes
    under 70% of what the current active would, or is neither at risk of a worst-case KO
    nor useless.
    """
    actions = generate_possible_actions(state, is_player)
    active = state.active(is_player)
    enemy = state.active(not is_player)

    move_actions = [a for a in actions if a.type == constants.MOVE_ACTION]
    averages = {}
    for action in move_actions:
        if not action.move.is_status:
            averages[action.move_index] = calculate_damage(active, enemy, action.move)
    best_average = max((d.average for d in averages.values()), default=0)

    pruned = []
    for action in move_actions:
        damage = averages.get(action.move_index)
        if damage is None:
            pruned.append(action)
        elif damage.average >= best_average * constants.PRUNE_DAMAGE_RATIO or damage.min >= enemy.current_hp:
            pruned.append(action)

    team = state.team(is_player)
    for action in actions:
        if action.type == constants.SWITCH_ACTION and _keep_switch(active, enemy, team[action.switch_to_index]):
            pruned.append(action)

    return pruned


def simulate_path(
    initial_state: BattleState,
    path: list,
    worst_case: bool,
    switch_handler: Optional[ForcedSwitchHandler] = None,
    rng: Optional[random.Random] = None,
) -> PathReplay:
    """Replays ``(player action, enemy action)`` pairs from a fresh clone, counting player deaths."""
    switch_handler = switch_handler or handle_forced_switch
    simulator = simulate_turn_worst_case if worst_case else simulate_turn
    state = initial_state.clone()
    steps = []
    deaths = 0

    for action, enemy_action in path:
        player_alive_before = state.alive_count(True)
        enemy_alive_before = state.alive_count(False)
        risk = calculate_action_risk(state, action, True, include_ai_odds=False)
        reasoning = explain_action(state, action, True)

        result = simulator(state, action, enemy_action, rng=rng)
        for is_player in (True, False):
            if state.active(is_player).fainted:
                event = switch_handler(state, is_player)
                if event is not None:
                    result.events.append(event)

        turn_deaths = player_alive_before - state.alive_count(True)
        deaths += turn_deaths
        steps.append(
            StrategyStep(
                turn=state.turn,
                action=action,
                enemy_action=enemy_action,
                events=result.events,
                state=state.clone(),
                deaths_this_turn=turn_deaths,
                enemy_deaths_this_turn=enemy_alive_before - state.alive_count(False),
                risk=risk,
                reasoning=reasoning,
            )
        )

    return PathReplay(victory=state.alive_count(False) == 0, deaths=deaths, steps=steps)


def validate_strategy(
    initial_state: BattleState,
    path: list,
    acceptable_losses: int,
    switch_handler: Optional[ForcedSwitchHandler] = None,
    rng: Optional[random.Random] = None,
) -> PathValidation:
    """Accepts a path only if it wins in both replays and the worst case stays within the tier."""
    average = simulate_path(initial_state, path, False, switch_handler, rng)
    worst = simulate_path(initial_state, path, True, switch_handler, rng)

    if not average.victory or not worst.victory:
        return PathValidation(valid=False)
    if worst.deaths > acceptable_losses:
        return PathValidation(valid=False)

    return PathValidation(
        valid=True,
        risk_tier=risk_tier_label(average.deaths, worst.deaths),
        average_deaths=average.deaths,
        worst_case_deaths=worst.deaths,
        steps=average.steps,
        worst_case_steps=worst.steps,
    )


def search_for_strategy(
    initial_state: BattleState,
    max_depth: int,
    acceptable_losses: int,
    switch_handler: Optional[ForcedSwitchHandler] = None,
    rng: Optional[random.Random] = None,
    timeout_s: Optional[float] = None,
) -> Optional[TieredStrategy]:
    switch_handler = switch_handler or handle_forced_switch
    rng = resolve_rng(rng)
    clock = TimeManager() if timeout_s is None else TimeManager(budget_s=timeout_s)
    nodes_explored = 0

    queue = deque([_SearchNode(state=initial_state.clone(), path=[], depth=0)])
    while queue:
        node = queue.popleft()
        nodes_explored += 1

        if clock.expired():
            logger.info("Timeout after exploring {} nodes".format(nodes_explored))
            return None

        if node.state.alive_count(False) == 0:
            validation = validate_strategy(initial_state, node.path, acceptable_losses, switch_handler, rng)
            if validation.valid:
                logger.info(
                    "Found valid strategy in {} nodes ({}ms)".format(nodes_explored, clock.elapsed_ms())
                )
                return TieredStrategy(
                    steps=validation.steps,
                    worst_case_steps=validation.worst_case_steps,
                    risk_tier=validation.risk_tier,
                    average_deaths=validation.average_deaths,
                    worst_case_deaths=validation.worst_case_deaths,
                    acceptable_losses=acceptable_losses,
                    turns_to_win=len(node.path),
                )
            continue

        if node.depth >= max_depth or node.state.alive_count(True) == 0:
            continue

        for action in generate_and_prune_actions(node.state, True):
            enemy_action = select_enemy_action(node.state, rng)
            if enemy_action is None:
                continue

            next_state = node.state.clone()
            simulate_turn(next_state, action, enemy_action, rng=rng)

            if next_state.player_active.fainted and switch_handler(next_state, True) is None:
                continue
            if next_state.enemy_active.fainted:
                switch_handler(next_state, False)

            queue.append(
                _SearchNode(state=next_state, path=node.path + [(action, enemy_action)], depth=node.depth + 1)
            )

    logger.info("No valid strategy found after exploring {} nodes".format(nodes_explored))
    return None


def create_loss_strategy(
    initial_state: BattleState,
    max_depth: int,
    switch_handler: Optional[ForcedSwitchHandler] = None,
    rng: Optional[random.Random] = None,
) -> TieredStrategy:
    """Best-effort line when no tier wins: play the first pruned action every turn."""
    switch_handler = switch_handler or handle_forced_switch
    rng = resolve_rng(rng)
    state = initial_state.clone()
    steps = []

    for _ in range(max_depth):
        if state.is_over():
            break

        actions = generate_and_prune_actions(state, True)
        if not actions:
            break
        action = actions[0]
        enemy_action = select_enemy_action(state, rng)
        if enemy_action is None:
            break

        player_alive_before = state.alive_count(True)
        risk = calculate_action_risk(state, action, True, include_ai_odds=False)
        reasoning = explain_action(state, action, True)
        result = simulate_turn(state, action, enemy_action, rng=rng)

        out_of_pokemon = False
        if state.player_active.fainted:
            event = switch_handler(state, True)
            if event is None:
                out_of_pokemon = True
            else:
                result.events.append(event)
        if not out_of_pokemon and state.enemy_active.fainted:
            event = switch_handler(state, False)
            if event is not None:
                result.events.append(event)

        steps.append(
            StrategyStep(
                turn=state.turn,
                action=action,
                enemy_action=enemy_action,
                events=result.events,
                state=state.clone(),
                deaths_this_turn=player_alive_before - state.alive_count(True),
                risk=risk,
                reasoning=reasoning,
            )
        )
        if out_of_pokemon:
            break

    player_deaths = sum(1 for p in state.player_team if p.fainted)
    if state.alive_count(False) == 0:
        risk_tier = "{} - Requires luck".format(constants.UNLIKELY_WIN)
    else:
        risk_tier = constants.GUARANTEED_LOSS

    return TieredStrategy(
        steps=steps,
        risk_tier=risk_tier,
        average_deaths=player_deaths,
        worst_case_deaths=player_deaths,
    )


def find_tiered_strategy(
    initial_state: BattleState,
    max_depth: int = constants.DEFAULT_MAX_DEPTH,
    switch_handler: Optional[ForcedSwitchHandler] = None,
    rng: Optional[random.Random] = None,
    timeout_s: Optional[float] = None,
) -> TieredStrategy:
    """Lowest-risk winning plan, or a labelled best-effort plan when none is found.

    ``timeout_s`` bounds each tier separately and defaults to the configured search timeout.
    """
    logger.info("Starting tiered strategy search (max depth {})".format(max_depth))

    for acceptable_losses in range(constants.MAX_ACCEPTABLE_LOSSES + 1):
        logger.info("Searching for strategy with max {} acceptable losses".format(acceptable_losses))
        strategy = search_for_strategy(initial_state, max_depth, acceptable_losses, switch_handler, rng, timeout_s)
        if strategy is not None:
            logger.info("Found strategy with risk tier: {}".format(strategy.risk_tier))
            return strategy

    logger.info("No winning strategy found, building a loss mitigation plan")
    return create_loss_strategy(initial_state, max_depth, switch_handler, rng)
