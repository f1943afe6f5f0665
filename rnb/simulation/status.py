from __future__ import annotations

import logging
import math
import random
from typing import List, Optional, TYPE_CHECKING

import constants
from rnb.battle import BattleEvent
from rnb.helpers import resolve_rng

if TYPE_CHECKING:
    from rnb.battle import Pokemon

logger = logging.getLogger(__name__)

STATUS_MESSAGES = {
    constants.SLEEP: "{} fell asleep!",
    constants.PARALYSIS: "{} was paralyzed!",
    constants.BURN: "{} was burned!",
    constants.POISON: "{} was poisoned!",
    constants.TOXIC: "{} was badly poisoned!",
    constants.FREEZE: "{} was frozen solid!",
}

# chance of each outcome per luck setting
THAW_CHANCE = {
    constants.NORMAL_LUCK: constants.FREEZE_THAW_CHANCE,
    constants.WORST_LUCK: 0.0,
    constants.BEST_LUCK: 1.0,
}
FULL_PARALYSIS_CHANCE = {
    constants.NORMAL_LUCK: constants.FULL_PARALYSIS_CHANCE,
    constants.WORST_LUCK: 1.0,
    constants.BEST_LUCK: 0.0,
}
CONFUSION_HIT_CHANCE = {
    constants.NORMAL_LUCK: constants.CONFUSION_SELF_HIT_CHANCE,
    constants.WORST_LUCK: 1.0,
    constants.BEST_LUCK: 0.0,
}


def _faint_event(pokemon: "Pokemon", is_player: Optional[bool]) -> BattleEvent:
    return BattleEvent(
        type=constants.EVENT_FAINT,
        text="{} fainted!".format(pokemon.display_name),
        is_player=is_player,
        pokemon=pokemon.name,
    )


def apply_status_effect(
    pokemon: "Pokemon",
    status: str,
    events: List[BattleEvent],
    rng: Optional[random.Random] = None,
    sleep_turns: Optional[int] = None,
) -> bool:
    """Inflicts ``status`` unless the target already has one.

    Sleep lasts 1-3 turns (or ``sleep_turns`` when the caller fixes it) and toxic
    starts its counter at 1.
    """
    if pokemon.status:
        events.append(
            BattleEvent(
                type=constants.EVENT_STATUS_FAIL,
                text="{} is already {}!".format(pokemon.display_name, pokemon.status),
                pokemon=pokemon.name,
            )
        )
        return False

    pokemon.status = status
    if status == constants.SLEEP:
        if sleep_turns is None:
            sleep_turns = resolve_rng(rng).randint(1, constants.MAX_SLEEP_TURNS)
        pokemon.status_counter = sleep_turns
    elif status == constants.TOXIC:
        pokemon.status_counter = 1

    message = STATUS_MESSAGES.get(status, "{} is now " + status + "!")
    events.append(
        BattleEvent(type=constants.EVENT_STATUS, text=message.format(pokemon.display_name), pokemon=pokemon.name)
    )
    return True


def apply_confusion(pokemon: "Pokemon", turns: int, events: List[BattleEvent]) -> bool:
    if pokemon.confusion > 0:
        return False
    pokemon.confusion = turns
    events.append(
        BattleEvent(
            type=constants.EVENT_CONFUSION,
            text="{} became confused!".format(pokemon.display_name),
            pokemon=pokemon.name,
        )
    )
    return True


def can_pokemon_move(
    pokemon: "Pokemon",
    events: List[BattleEvent],
    luck: str = constants.NORMAL_LUCK,
    rng: Optional[random.Random] = None,
    is_player: Optional[bool] = None,
) -> bool:
    """Runs the sleep, freeze, paralysis and confusion checks for one action attempt.

    ``luck`` selects the odds: realistic rolls, the worst outcome for this combatant,
    or the best one.
    """
    rng = resolve_rng(rng)
    name = pokemon.display_name

    if pokemon.status == constants.SLEEP and pokemon.status_counter > 0:
        pokemon.status_counter -= 1
        events.append(
            BattleEvent(type=constants.EVENT_STATUS_PREVENT, text="{} is fast asleep!".format(name), pokemon=pokemon.name)
        )
        if pokemon.status_counter == 0:
            # the turn it wakes up is still lost
            pokemon.status = None
            events.append(
                BattleEvent(type=constants.EVENT_STATUS_CURE, text="{} woke up!".format(name), pokemon=pokemon.name)
            )
        return False

    if pokemon.status == constants.FREEZE:
        if rng.random() >= THAW_CHANCE[luck]:
            events.append(
                BattleEvent(
                    type=constants.EVENT_STATUS_PREVENT, text="{} is frozen solid!".format(name), pokemon=pokemon.name
                )
            )
            return False
        pokemon.status = None
        events.append(
            BattleEvent(type=constants.EVENT_STATUS_CURE, text="{} thawed out!".format(name), pokemon=pokemon.name)
        )

    if pokemon.status == constants.PARALYSIS and rng.random() < FULL_PARALYSIS_CHANCE[luck]:
        events.append(
            BattleEvent(
                type=constants.EVENT_STATUS_PREVENT, text="{} is fully paralyzed!".format(name), pokemon=pokemon.name
            )
        )
        return False

    if pokemon.confusion > 0:
        pokemon.confusion -= 1
        events.append(
            BattleEvent(type=constants.EVENT_CONFUSION, text="{} is confused!".format(name), pokemon=pokemon.name)
        )

        if rng.random() < CONFUSION_HIT_CHANCE[luck]:
            confusion_damage = math.floor(pokemon.stats.hp * constants.CONFUSION_SELF_HIT_FRACTION)
            pokemon.take_damage(confusion_damage)
            events.append(
                BattleEvent(
                    type=constants.EVENT_CONFUSION_DAMAGE,
                    text="{} hurt itself in confusion! {} damage.".format(name, confusion_damage),
                    damage=confusion_damage,
                    pokemon=pokemon.name,
                )
            )
            if pokemon.fainted:
                events.append(_faint_event(pokemon, is_player))
            return False

        if pokemon.confusion == 0:
            events.append(
                BattleEvent(
                    type=constants.EVENT_CONFUSION_END,
                    text="{} snapped out of confusion!".format(name),
                    pokemon=pokemon.name,
                )
            )

    return True


def apply_end_of_turn_status(
    pokemon: "Pokemon", events: List[BattleEvent], is_player: Optional[bool] = None
) -> None:
    """Burn, poison and toxic chip damage. Toxic ramps its counter after each hit."""
    if pokemon.fainted:
        return

    name = pokemon.display_name
    max_hp = pokemon.stats.hp
    if pokemon.status == constants.BURN:
        damage = math.floor(max_hp / 16)
        pokemon.take_damage(damage)
        events.append(
            BattleEvent(
                type=constants.EVENT_BURN_DAMAGE,
                text="{} was hurt by its burn! {} damage.".format(name, damage),
                damage=damage,
                is_player=is_player,
                pokemon=pokemon.name,
            )
        )
    elif pokemon.status == constants.POISON:
        damage = math.floor(max_hp / 8)
        pokemon.take_damage(damage)
        events.append(
            BattleEvent(
                type=constants.EVENT_POISON_DAMAGE,
                text="{} was hurt by poison! {} damage.".format(name, damage),
                damage=damage,
                is_player=is_player,
                pokemon=pokemon.name,
            )
        )
    elif pokemon.status == constants.TOXIC:
        damage = math.floor(max_hp / 16 * pokemon.status_counter)
        pokemon.take_damage(damage)
        pokemon.status_counter += 1
        events.append(
            BattleEvent(
                type=constants.EVENT_TOXIC_DAMAGE,
                text="{} was hurt by toxic! {} damage.".format(name, damage),
                damage=damage,
                is_player=is_player,
                pokemon=pokemon.name,
            )
        )

    if pokemon.fainted:
        events.append(_faint_event(pokemon, is_player))
