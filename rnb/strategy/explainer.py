import math

import constants
from data import STATUS_MOVE_EFFECTS
from rnb.battle import Action, BattleState
from rnb.helpers import capitalize, normalize_name
from rnb.search.switch_logic import calculate_switch_in_score
from rnb.strategy.damage import calculate_damage

STATUS_MOVE_REASONS = {
    constants.SLEEP: "Status move - Putting {} to sleep",
    constants.PARALYSIS: "Status move - Paralyzing {} (25% full paralysis chance)",
    constants.BURN: "Status move - Burning {} (halves attack)",
    constants.TOXIC: "Status move - Badly poisoning {} (increasing damage)",
}


def _explain_switch(state: BattleState, action) -> str:
    switch_in = state.player_team[action.switch_to_index]
    name = switch_in.display_name
    matchup = calculate_switch_in_score(switch_in, state.enemy_active)

    if matchup >= 4:
        return "Switching to {} for a favorable matchup (faster and can 2HKO+)".format(name)
    if matchup >= 2:
        return "Switching to {} for better positioning".format(name)
    if matchup <= -1:
        return "Defensive switch to {} to avoid OHKO".format(name)
    return "Switching to {}".format(name)


def _explain_attack(state: BattleState, action) -> str:
    attacker = state.player_active
    defender = state.enemy_active
    damage = calculate_damage(attacker, defender, action.move)
    move_name = capitalize(action.move.name)
    hp = defender.current_hp

    if damage.min >= hp:
        return "GUARANTEED KO - {} deals {}-{} damage vs {} HP".format(move_name, damage.min, damage.max, hp)
    if damage.average >= hp:
        return "LIKELY KO - {} averages {} damage vs {} HP".format(move_name, damage.average, hp)
    if damage.max >= hp:
        return "POSSIBLE KO - {} max rolls {} vs {} HP".format(move_name, damage.max, hp)

    percent = math.floor(damage.average / hp * 100) if hp > 0 else 0
    return "Chip damage - {} deals ~{}% ({} damage)".format(move_name, percent, damage.average)


def explain_action(state: BattleState, action: Action, is_player: bool) -> str:
    """One line of reasoning for a player action. Opponent actions are not explained."""
    if not is_player:
        return ""

    if action.type == constants.SWITCH_ACTION:
        return _explain_switch(state, action)

    if not action.move.is_status:
        return _explain_attack(state, action)

    # poison-inducing moves other than toxic get the plain text
    effect = STATUS_MOVE_EFFECTS.get(normalize_name(action.move.name))
    if effect in STATUS_MOVE_REASONS:
        return STATUS_MOVE_REASONS[effect].format(state.enemy_active.display_name)
    return "Using {}".format(capitalize(action.move.name))
