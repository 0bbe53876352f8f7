"""Records loaded from the static datasets."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class GameDef:
    """A mainline game with its own species dataset."""

    game_key: str
    label: str
    generation: str  # "gen1" ... "gen9"
    ruleset_key: str  # gen1, gen2, gen34, gen5plus, letsgo, pla
    by_game_file: str  # stem of knowledge/pokemon/by_game/<file>.json


@dataclass(frozen=True)
class SpeciesRecord:
    """A catchable species for one game."""

    id: int
    name: str
    slug: str
    display_name: str
    capture_rate: float  # 0 - 255
    base_stats: dict[str, int] = field(default_factory=dict)
    sprite: Optional[str] = None


@dataclass(frozen=True)
class GoSpeciesRecord:
    """A Pokémon GO encounter entry."""

    id: str
    form: str
    name: str
    base_capture_rate: Optional[float]  # 0.0 - 1.0
    base_flee_rate: Optional[float]  # 0.0 - 1.0
    type1: Optional[str] = None
    type2: Optional[str] = None


@dataclass(frozen=True)
class ItemRecord:
    """An equippable item with a flat stat bag."""

    id: int
    name: str
    slot: Optional[str] = None
    ilvl: Optional[int] = None
    required_level: Optional[int] = None
    stats: dict[str, float] = field(default_factory=dict)
