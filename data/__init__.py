import constants

# attacking type -> defending type -> multiplier. Missing entries are neutral.
TYPE_CHART = {
    "normal": {"rock": 0.5, "ghost": 0, "steel": 0.5},
    "fire": {
        "fire": 0.5, "water": 0.5, "grass": 2, "ice": 2, "bug": 2,
        "rock": 0.5, "dragon": 0.5, "steel": 2,
    },
    "water": {"fire": 2, "water": 0.5, "grass": 0.5, "ground": 2, "rock": 2, "dragon": 0.5},
    "electric": {"water": 2, "electric": 0.5, "grass": 0.5, "ground": 0, "flying": 2, "dragon": 0.5},
    "grass": {
        "fire": 0.5, "water": 2, "grass": 0.5, "poison": 0.5, "ground": 2,
        "flying": 0.5, "bug": 0.5, "rock": 2, "dragon": 0.5, "steel": 0.5,
    },
    "ice": {
        "fire": 0.5, "water": 0.5, "grass": 2, "ice": 0.5, "ground": 2,
        "flying": 2, "dragon": 2, "steel": 0.5,
    },
    "fighting": {
        "normal": 2, "ice": 2, "poison": 0.5, "flying": 0.5, "psychic": 0.5, "bug": 0.5,
        "rock": 2, "ghost": 0, "dark": 2, "steel": 2, "fairy": 0.5,
    },
    "poison": {"grass": 2, "poison": 0.5, "ground": 0.5, "rock": 0.5, "ghost": 0.5, "steel": 0, "fairy": 2},
    "ground": {
        "fire": 2, "electric": 2, "grass": 0.5, "poison": 2, "flying": 0,
        "bug": 0.5, "rock": 2, "steel": 2,
    },
    "flying": {"electric": 0.5, "grass": 2, "fighting": 2, "bug": 2, "rock": 0.5, "steel": 0.5},
    "psychic": {"fighting": 2, "poison": 2, "psychic": 0.5, "dark": 0, "steel": 0.5},
    "bug": {
        "fire": 0.5, "grass": 2, "fighting": 0.5, "poison": 0.5, "flying": 0.5,
        "psychic": 2, "ghost": 0.5, "dark": 2, "steel": 0.5, "fairy": 0.5,
    },
    "rock": {"fire": 2, "ice": 2, "fighting": 0.5, "ground": 0.5, "flying": 2, "bug": 2, "steel": 0.5},
    "ghost": {"normal": 0, "psychic": 2, "ghost": 2, "dark": 0.5},
    "dragon": {"dragon": 2, "steel": 0.5, "fairy": 0},
    "dark": {"fighting": 0.5, "psychic": 2, "ghost": 2, "dark": 0.5, "fairy": 0.5},
    "steel": {"fire": 0.5, "water": 0.5, "electric": 0.5, "ice": 2, "rock": 2, "steel": 0.5, "fairy": 2},
    "fairy": {"fire": 0.5, "fighting": 2, "poison": 0.5, "dragon": 2, "dark": 2, "steel": 0.5},
}

ALL_TYPES = tuple(TYPE_CHART.keys())


def _nature(plus=None, minus=None):
    mods = {
        constants.ATTACK: 1.0,
        constants.DEFENSE: 1.0,
        constants.SPECIAL_ATTACK: 1.0,
        constants.SPECIAL_DEFENSE: 1.0,
        constants.SPEED: 1.0,
    }
    if plus is not None and plus != minus:
        mods[plus] = 1.1
        mods[minus] = 0.9
    return mods


NATURES = {
    "hardy": _nature(),
    "lonely": _nature(constants.ATTACK, constants.DEFENSE),
    "brave": _nature(constants.ATTACK, constants.SPEED),
    "adamant": _nature(constants.ATTACK, constants.SPECIAL_ATTACK),
    "naughty": _nature(constants.ATTACK, constants.SPECIAL_DEFENSE),
    "bold": _nature(constants.DEFENSE, constants.ATTACK),
    "docile": _nature(),
    "relaxed": _nature(constants.DEFENSE, constants.SPEED),
    "impish": _nature(constants.DEFENSE, constants.SPECIAL_ATTACK),
    "lax": _nature(constants.DEFENSE, constants.SPECIAL_DEFENSE),
    "timid": _nature(constants.SPEED, constants.ATTACK),
    "hasty": _nature(constants.SPEED, constants.DEFENSE),
    "serious": _nature(),
    "jolly": _nature(constants.SPEED, constants.SPECIAL_ATTACK),
    "naive": _nature(constants.SPEED, constants.SPECIAL_DEFENSE),
    "modest": _nature(constants.SPECIAL_ATTACK, constants.ATTACK),
    "mild": _nature(constants.SPECIAL_ATTACK, constants.DEFENSE),
    "quiet": _nature(constants.SPECIAL_ATTACK, constants.SPEED),
    "bashful": _nature(),
    "rash": _nature(constants.SPECIAL_ATTACK, constants.SPECIAL_DEFENSE),
    "calm": _nature(constants.SPECIAL_DEFENSE, constants.ATTACK),
    "gentle": _nature(constants.SPECIAL_DEFENSE, constants.DEFENSE),
    "sassy": _nature(constants.SPECIAL_DEFENSE, constants.SPEED),
    "careful": _nature(constants.SPECIAL_DEFENSE, constants.SPECIAL_ATTACK),
    "quirky": _nature(),
}

# status move name -> condition it inflicts on the target
STATUS_MOVE_EFFECTS = {
    "hypnosis": constants.SLEEP,
    "sleep-powder": constants.SLEEP,
    "spore": constants.SLEEP,
    "thunder-wave": constants.PARALYSIS,
    "stun-spore": constants.PARALYSIS,
    "glare": constants.PARALYSIS,
    "will-o-wisp": constants.BURN,
    "scald": constants.BURN,
    "flare-blitz": constants.BURN,
    "poison-powder": constants.POISON,
    "poison-gas": constants.POISON,
    "toxic": constants.TOXIC,
    "confuse-ray": constants.CONFUSION,
    "supersonic": constants.CONFUSION,
    "swagger": constants.CONFUSION,
}

HIGH_CRIT_MOVES = {
    "stone-edge",
    "shadow-claw",
    "razor-leaf",
    "crabhammer",
    "slash",
    "cross-poison",
    "night-slash",
    "spacial-rend",
    "attack-order",
    "leaf-blade",
    "psycho-cut",
    "blaze-kick",
}

# abilities that reward the AI for landing a KO
BOOST_ON_KO_ABILITIES = {"moxie", "beast-boost", "chilling-neigh", "grim-neigh"}

BASE_CRIT_CHANCE = 0.0625
HIGH_CRIT_CHANCE = 0.125

BASE_STAT_ALIASES = {
    "hp": constants.HITPOINTS,
    "attack": constants.ATTACK,
    "atk": constants.ATTACK,
    "defense": constants.DEFENSE,
    "def": constants.DEFENSE,
    "special-attack": constants.SPECIAL_ATTACK,
    "special_attack": constants.SPECIAL_ATTACK,
    "spa": constants.SPECIAL_ATTACK,
    "special-defense": constants.SPECIAL_DEFENSE,
    "special_defense": constants.SPECIAL_DEFENSE,
    "spd": constants.SPECIAL_DEFENSE,
    "speed": constants.SPEED,
    "spe": constants.SPEED,
}
