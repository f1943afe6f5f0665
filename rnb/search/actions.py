from typing import List

from rnb.battle import Action, BattleState, MoveAction, SwitchAction


def generate_possible_actions(state: BattleState, is_player: bool) -> List[Action]:
    """Every move of the active combatant followed by every legal switch, in roster order."""
    team = state.team(is_player)
    active_index = state.active_index(is_player)
    active = team[active_index]

    actions: List[Action] = [MoveAction(move_index=i, move=move) for i, move in enumerate(active.moves)]
    for index, pokemon in enumerate(team):
        if index != active_index and not pokemon.fainted:
            actions.append(SwitchAction(switch_to_index=index, pokemon_name=pokemon.name))

    return actions
