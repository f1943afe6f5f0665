import logging
from typing import Callable, Optional

import constants
from rnb.battle import BattleEvent, BattleState
from rnb.search.switch_logic import find_best_switch_in

logger = logging.getLogger(__name__)

# (state, is_player) -> switch event, or None when that side has nobody left
ForcedSwitchHandler = Callable[[BattleState, bool], Optional[BattleEvent]]


def handle_forced_switch(state: BattleState, is_player: bool) -> Optional[BattleEvent]:
    """Replaces a fainted active combatant.

    The player sends in the first healthy bench member while the opponent picks its
    best scoring switch-in against the player's active.
    """
    team = state.team(is_player)
    current_index = state.active_index(is_player)

    next_index = -1
    if is_player:
        for index, pokemon in enumerate(team):
            if index != current_index and not pokemon.fainted:
                next_index = index
                break
    else:
        next_index = find_best_switch_in(team, current_index, state.player_active).index

    if next_index == -1:
        logger.debug("No replacement left for the {} side".format("player" if is_player else "enemy"))
        return None

    state.set_active(is_player, next_index)
    incoming = team[next_index]
    return BattleEvent(
        type=constants.EVENT_SWITCH,
        text="{} sent out {}!".format("You" if is_player else "Enemy", incoming.display_name),
        is_player=is_player,
        pokemon=incoming.name,
    )


def resolve_faints(state: BattleState, switch_handler: Optional[ForcedSwitchHandler] = None) -> list:
    """Runs the forced-switch hook for each side whose active has fainted."""
    switch_handler = switch_handler or handle_forced_switch
    events = []
    for is_player in (True, False):
        if state.active(is_player).fainted:
            event = switch_handler(state, is_player)
            if event is not None:
                events.append(event)
    return events
