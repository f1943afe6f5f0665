from __future__ import annotations

import logging
import random
from typing import List, Optional

import constants
from data import STATUS_MOVE_EFFECTS
from rnb.battle import Action, BattleEvent, BattleState, Move, TurnResult
from rnb.helpers import capitalize, normalize_name, resolve_rng
from rnb.simulation.status import (
    apply_confusion,
    apply_end_of_turn_status,
    apply_status_effect,
    can_pokemon_move,
)
from rnb.strategy.damage import calculate_damage, calculate_worst_case_damage

logger = logging.getLogger(__name__)


def action_priority(action: Action) -> int:
    if action.type == constants.SWITCH_ACTION:
        return constants.SWITCH_PRIORITY
    return action.move.priority or 0


def order_actions(
    state: BattleState, player_action: Action, enemy_action: Action, worst_case: bool = False
) -> List[tuple]:
    """Returns ``(action, is_player)`` pairs in execution order.

    Switches go before moves, then higher move priority, then higher speed. On an
    exact speed tie the player acts first in the normal simulation (list order is
    kept) while the worst-case simulation always lets the opponent act first.
    """
    entries = [(player_action, True), (enemy_action, False)]

    def sort_key(entry):
        action, is_player = entry
        speed = state.active(is_player).stats.spe
        tie_break = (1 if is_player else 0) if worst_case else 0
        return -action_priority(action), -speed, tie_break

    return sorted(entries, key=sort_key)


def _effectiveness_text(effectiveness: float) -> str:
    if effectiveness == 0:
        return " It doesn't affect the target..."
    if effectiveness > 1:
        return " It's super effective!"
    if effectiveness < 1:
        return " It's not very effective..."
    return ""


def _execute_switch(state: BattleState, action, is_player: bool, events: List[BattleEvent]) -> None:
    team = state.team(is_player)
    side = "You" if is_player else "Enemy"
    index = action.switch_to_index
    if not 0 <= index < len(team) or team[index].fainted or index == state.active_index(is_player):
        events.append(
            BattleEvent(
                type=constants.EVENT_SWITCH_FAIL,
                text="{} could not switch to {}!".format(side, capitalize(action.pokemon_name)),
                is_player=is_player,
                pokemon=action.pokemon_name,
            )
        )
        return

    state.set_active(is_player, index)
    incoming = team[index]
    events.append(
        BattleEvent(
            type=constants.EVENT_SWITCH,
            text="{} switched to {}!".format(side, incoming.display_name),
            is_player=is_player,
            pokemon=incoming.name,
        )
    )


def _execute_status_move(
    move: Move,
    defender,
    is_player: bool,
    events: List[BattleEvent],
    worst_case: bool,
    rng: random.Random,
) -> None:
    effect = STATUS_MOVE_EFFECTS.get(normalize_name(move.name))
    if effect is None:
        return

    if effect == constants.CONFUSION:
        if worst_case:
            turns = 1 if is_player else constants.MAX_CONFUSION_TURNS
        else:
            turns = rng.randint(1, constants.MAX_CONFUSION_TURNS)
        apply_confusion(defender, turns, events)
        return

    sleep_turns = None
    # worst case pins sleep to the shortest length on the opponent and the longest on the player
    if worst_case and effect == constants.SLEEP:
        sleep_turns = 1 if is_player else constants.MAX_SLEEP_TURNS
    apply_status_effect(defender, effect, events, rng=rng, sleep_turns=sleep_turns)


def _execute_damaging_move(
    move: Move,
    attacker,
    defender,
    is_player: bool,
    events: List[BattleEvent],
    worst_case: bool,
) -> None:
    if worst_case and is_player and move.accuracy and move.accuracy < 100:
        events.append(
            BattleEvent(
                type=constants.EVENT_ACCURACY_RISK,
                text="{} has {}% accuracy - risk of missing".format(capitalize(move.name), move.accuracy),
                is_player=True,
                move=move.name,
            )
        )

    attacker_stats = attacker.stats
    if attacker.status == constants.BURN and move.is_physical:
        attacker_stats = attacker_stats.with_halved_attack()

    damage = calculate_damage(attacker, defender, move, attacker_stats, defender.stats)
    if worst_case:
        rolled = calculate_worst_case_damage(
            attacker, defender, move, attacker_stats, defender.stats, is_player_attacking=is_player
        )
    else:
        rolled = damage.average

    dealt = defender.take_damage(rolled)
    events.append(
        BattleEvent(
            type=constants.EVENT_MOVE,
            text="{} damage.{}".format(dealt, _effectiveness_text(damage.effectiveness)),
            is_player=is_player,
            damage=dealt,
            effectiveness=damage.effectiveness,
            move=move.name,
        )
    )

    if defender.fainted:
        events.append(
            BattleEvent(
                type=constants.EVENT_FAINT,
                text="{} fainted!".format(defender.display_name),
                is_player=not is_player,
                pokemon=defender.name,
            )
        )


def _resolve_turn(
    state: BattleState,
    player_action: Action,
    enemy_action: Action,
    worst_case: bool,
    rng: Optional[random.Random],
) -> TurnResult:
    rng = resolve_rng(rng)
    state.turn += 1
    events: List[BattleEvent] = []

    for action, is_player in order_actions(state, player_action, enemy_action, worst_case):
        attacker = state.active(is_player)
        defender = state.active(not is_player)

        if attacker.fainted:
            continue

        if action.type == constants.SWITCH_ACTION:
            _execute_switch(state, action, is_player, events)
            continue

        if defender.fainted:
            continue

        if worst_case:
            luck = constants.WORST_LUCK if is_player else constants.BEST_LUCK
        else:
            luck = constants.NORMAL_LUCK
        if not can_pokemon_move(attacker, events, luck=luck, rng=rng, is_player=is_player):
            continue

        move = action.move
        events.append(
            BattleEvent(
                type=constants.EVENT_MOVE_USE,
                text="{} used {}!".format(attacker.display_name, capitalize(move.name)),
                is_player=is_player,
                move=move.name,
            )
        )

        if move.is_status:
            _execute_status_move(move, defender, is_player, events, worst_case, rng)
        else:
            _execute_damaging_move(move, attacker, defender, is_player, events, worst_case)

    apply_end_of_turn_status(state.player_active, events, is_player=True)
    apply_end_of_turn_status(state.enemy_active, events, is_player=False)

    logger.debug("Turn {} resolved with {} events{}".format(state.turn, len(events), " (worst case)" if worst_case else ""))
    return TurnResult(state=state, events=events)


def simulate_turn(
    state: BattleState,
    player_action: Action,
    enemy_action: Action,
    rng: Optional[random.Random] = None,
) -> TurnResult:
    """Resolves one turn in place using average damage and realistic status odds."""
    return _resolve_turn(state, player_action, enemy_action, False, rng)


def simulate_turn_worst_case(
    state: BattleState,
    player_action: Action,
    enemy_action: Action,
    rng: Optional[random.Random] = None,
) -> TurnResult:
    """Resolves one turn in place with every roll going against the player.

    The player min-rolls and suffers the worst status outcomes. The opponent max-rolls,
    crits, gets the best status outcomes and wins speed ties.
    """
    return _resolve_turn(state, player_action, enemy_action, True, rng)
