import math
from dataclasses import dataclass

import constants
from data import NATURES
from rnb.helpers import normalize_name


@dataclass(frozen=True)
class Stats:
    hp: int
    atk: int
    defense: int
    spa: int
    spd: int
    spe: int

    def get(self, key: str) -> int:
        if key == constants.DEFENSE:
            return self.defense
        return getattr(self, key)

    def with_halved_attack(self) -> "Stats":
        return Stats(
            hp=self.hp,
            atk=math.floor(self.atk / 2),
            defense=self.defense,
            spa=self.spa,
            spd=self.spd,
            spe=self.spe,
        )


def calculate_hp(base: int, iv: int, ev: int, level: int) -> int:
    return math.floor(((2 * base + iv + math.floor(ev / 4)) * level) / 100) + level + 10


def calculate_stat(base: int, iv: int, ev: int, level: int, nature_mod: float) -> int:
    raw = math.floor(((2 * base + iv + math.floor(ev / 4)) * level) / 100) + 5
    return math.floor(raw * nature_mod)


def nature_modifiers(nature) -> dict:
    return NATURES.get(normalize_name(nature), NATURES[constants.DEFAULT_NATURE])


def calculate_all_stats(pokemon) -> Stats:
    """Battle stats for a combatant from its base stats, IV/EV spreads, level and nature.

    Missing IVs default to 31 and missing EVs to 0. An unknown nature is neutral.
    """
    level = pokemon.level or constants.DEFAULT_LEVEL
    ivs = pokemon.ivs or {}
    evs = pokemon.evs or {}
    natures = nature_modifiers(pokemon.nature)

    values = {}
    for key in constants.STAT_KEYS:
        base = pokemon.base_stats.get(key, 0)
        iv = ivs.get(key, constants.DEFAULT_IV)
        ev = evs.get(key, constants.DEFAULT_EV)
        if key == constants.HITPOINTS:
            values[key] = calculate_hp(base, iv, ev, level)
        else:
            values[key] = calculate_stat(base, iv, ev, level, natures[key])

    return Stats(
        hp=values[constants.HITPOINTS],
        atk=values[constants.ATTACK],
        defense=values[constants.DEFENSE],
        spa=values[constants.SPECIAL_ATTACK],
        spd=values[constants.SPECIAL_DEFENSE],
        spe=values[constants.SPEED],
    )
