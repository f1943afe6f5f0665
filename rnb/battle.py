from __future__ import annotations

import logging
from copy import deepcopy
from dataclasses import dataclass, field
from typing import ClassVar, Dict, List, Optional, Union

import constants
from rnb.helpers import capitalize, normalize_name, normalize_stat_key
from rnb.stats import Stats, calculate_all_stats

logger = logging.getLogger(__name__)

MAX_MOVES = 4


def _type_name(value) -> str:
    if isinstance(value, dict):
        if "type" in value:
            return _type_name(value["type"])
        return normalize_name(value.get("name", ""))
    return normalize_name(value)


def _as_int(value, default: int) -> int:
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _stat_spread(values) -> Dict[str, int]:
    spread = {}
    if isinstance(values, dict):
        items = values.items()
    elif isinstance(values, list):
        items = [(entry.get("name"), entry.get("value")) for entry in values if isinstance(entry, dict)]
    else:
        return spread

    for key, value in items:
        stat = normalize_stat_key(key)
        if stat is not None and value is not None:
            spread[stat] = _as_int(value, 0)
    return spread


@dataclass(frozen=True)
class Move:
    name: str
    type: str = "normal"
    power: int = 0
    accuracy: int = 100
    damage_class: str = constants.STATUS
    priority: int = 0
    effect_chance: Optional[int] = None
    effect: str = ""

    @property
    def is_status(self) -> bool:
        return self.damage_class == constants.STATUS

    @property
    def is_physical(self) -> bool:
        return self.damage_class == constants.PHYSICAL

    @classmethod
    def neutral(cls, name: str = "unknown") -> "Move":
        return cls(name=normalize_name(name) or "unknown")

    @classmethod
    def from_dict(cls, data) -> "Move":
        """Builds a move from a resolved move record.

        Anything unusable falls back to a neutral status move.
        """
        if isinstance(data, Move):
            return data
        if isinstance(data, str):
            return cls.neutral(data)
        if not isinstance(data, dict):
            return cls.neutral()

        name = normalize_name(data.get("name", "")) or "unknown"

        damage_class = data.get("damageClass", data.get("damage_class", constants.STATUS))
        if isinstance(damage_class, dict):
            damage_class = damage_class.get("name")
        damage_class = normalize_name(damage_class)
        if damage_class not in (constants.PHYSICAL, constants.SPECIAL, constants.STATUS):
            damage_class = constants.STATUS

        effect = data.get("effect", "")
        entries = data.get("effectEntries", data.get("effect_entries"))
        if not effect and entries:
            first = entries[0]
            effect = first.get("short_effect", first.get("effect", "")) if isinstance(first, dict) else first

        effect_chance = data.get("effectChance", data.get("effect_chance"))

        return cls(
            name=name,
            type=_type_name(data.get("type", "normal")) or "normal",
            power=max(0, _as_int(data.get("power"), 0)),
            accuracy=_as_int(data.get("accuracy"), 100),
            damage_class=damage_class,
            priority=_as_int(data.get("priority"), 0),
            effect_chance=_as_int(effect_chance, 0) or None,
            effect=str(effect or ""),
        )


class Pokemon:
    """A roster entry with fixed battle stats and live battle condition."""

    def __init__(
        self,
        name: str,
        types: List[str],
        base_stats: Dict[str, int],
        level: int = constants.DEFAULT_LEVEL,
        ivs: Optional[Dict[str, int]] = None,
        evs: Optional[Dict[str, int]] = None,
        nature: Optional[str] = None,
        ability: Optional[str] = None,
        moves: Optional[List[Union[Move, dict, str]]] = None,
        species: Optional[str] = None,
    ):
        self.name = normalize_name(name)
        self.species = normalize_name(species) or self.name
        self.types = [normalize_name(t) for t in types if t][:2]
        self.base_stats = _stat_spread(base_stats)
        self.level = level or constants.DEFAULT_LEVEL
        self.ivs = _stat_spread(ivs)
        self.evs = _stat_spread(evs)
        self.nature = normalize_name(nature) or constants.DEFAULT_NATURE
        self.ability = normalize_name(ability) or None
        self.moves = [Move.from_dict(m) for m in (moves or [])][:MAX_MOVES]

        self.stats: Stats = calculate_all_stats(self)
        self.current_hp = self.stats.hp
        self.fainted = False
        self.status: Optional[str] = None
        self.status_counter = 0
        self.confusion = 0

    @classmethod
    def from_dict(cls, data: dict) -> "Pokemon":
        types = [_type_name(t) for t in data.get("types", [])]
        base_stats = data.get("base_stats", data.get("baseStats", data.get("stats", {})))
        moves = data.get("moves", data.get("moveData", data.get("move_data", [])))
        return cls(
            name=data.get("name", data.get("species", "unknown")),
            species=data.get("species"),
            types=types,
            base_stats=base_stats,
            level=_as_int(data.get("level"), constants.DEFAULT_LEVEL),
            ivs=data.get("ivs"),
            evs=data.get("evs"),
            nature=data.get("nature"),
            ability=data.get("ability"),
            moves=moves,
        )

    @property
    def display_name(self) -> str:
        return capitalize(self.name)

    @property
    def max_hp(self) -> int:
        return self.stats.hp

    @property
    def hp_fraction(self) -> float:
        return self.current_hp / self.stats.hp if self.stats.hp > 0 else 0.0

    @property
    def damaging_moves(self) -> List[Move]:
        return [m for m in self.moves if not m.is_status]

    def take_damage(self, amount: int) -> int:
        """Applies damage clamped to the remaining HP and returns what was dealt."""
        dealt = max(0, min(amount, self.current_hp))
        self.current_hp -= dealt
        if self.current_hp <= 0:
            self.current_hp = 0
            self.fainted = True
        return dealt

    def __repr__(self):
        return "Pokemon({}, {}/{} HP{})".format(
            self.name, self.current_hp, self.stats.hp, ", {}".format(self.status) if self.status else ""
        )


@dataclass
class SideHazards:
    stealth_rock: bool = False
    spikes: int = 0
    toxic_spikes: int = 0


@dataclass
class FieldEffects:
    weather: Optional[str] = None
    terrain: Optional[str] = None
    player_hazards: SideHazards = field(default_factory=SideHazards)
    enemy_hazards: SideHazards = field(default_factory=SideHazards)


@dataclass(frozen=True)
class MoveAction:
    move_index: int
    move: Move
    type: ClassVar[str] = constants.MOVE_ACTION

    def describe(self) -> str:
        return "use {}".format(capitalize(self.move.name))


@dataclass(frozen=True)
class SwitchAction:
    switch_to_index: int
    pokemon_name: str
    type: ClassVar[str] = constants.SWITCH_ACTION

    def describe(self) -> str:
        return "switch to {}".format(capitalize(self.pokemon_name))


Action = Union[MoveAction, SwitchAction]


@dataclass
class BattleEvent:
    type: str
    text: str
    is_player: Optional[bool] = None
    damage: Optional[int] = None
    effectiveness: Optional[float] = None
    move: Optional[str] = None
    pokemon: Optional[str] = None


class BattleState:
    """Snapshot of an in-progress battle: both rosters, actives, field and turn count."""

    def __init__(
        self,
        player_team: List[Union[Pokemon, dict]],
        enemy_team: List[Union[Pokemon, dict]],
        player_lead: int = 0,
        enemy_lead: int = 0,
    ):
        self.player_team = [self._roster_entry(p) for p in player_team]
        self.enemy_team = [self._roster_entry(p) for p in enemy_team]

        for team, lead, side in (
            (self.player_team, player_lead, "player"),
            (self.enemy_team, enemy_lead, "enemy"),
        ):
            if not 0 <= lead < len(team):
                raise ValueError("Invalid {} lead index {} for a team of {}".format(side, lead, len(team)))

        self.player_active_index = player_lead
        self.enemy_active_index = enemy_lead
        self.field = FieldEffects()
        self.turn = 0

    @staticmethod
    def _roster_entry(pokemon) -> Pokemon:
        if isinstance(pokemon, Pokemon):
            return deepcopy(pokemon)
        return Pokemon.from_dict(pokemon)

    @property
    def player_active(self) -> Pokemon:
        return self.player_team[self.player_active_index]

    @property
    def enemy_active(self) -> Pokemon:
        return self.enemy_team[self.enemy_active_index]

    def team(self, is_player: bool) -> List[Pokemon]:
        return self.player_team if is_player else self.enemy_team

    def active(self, is_player: bool) -> Pokemon:
        return self.player_active if is_player else self.enemy_active

    def active_index(self, is_player: bool) -> int:
        return self.player_active_index if is_player else self.enemy_active_index

    def set_active(self, is_player: bool, index: int) -> None:
        if is_player:
            self.player_active_index = index
        else:
            self.enemy_active_index = index

    def alive_count(self, is_player: bool) -> int:
        return sum(1 for p in self.team(is_player) if not p.fainted)

    def is_over(self) -> bool:
        return self.alive_count(True) == 0 or self.alive_count(False) == 0

    def clone(self) -> "BattleState":
        return deepcopy(self)


@dataclass
class TurnResult:
    state: BattleState
    events: List[BattleEvent]
