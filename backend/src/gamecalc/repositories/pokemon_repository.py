"""Species datasets for the mainline and GO catch calculators."""
import logging
from pathlib import Path
from typing import Optional

from gamecalc.config import settings
from gamecalc.models.records import GameDef, GoSpeciesRecord, SpeciesRecord
from gamecalc.repositories.json_cache import JsonCache
from gamecalc.utils.normalizers import (
    coerce_name,
    normalize_ruleset_key,
    normalize_slug,
    normalize_upstream_record,
    to_number,
    to_text,
)

logger = logging.getLogger(__name__)


def _rows(data, list_key: str) -> list:
    """Datasets are either a bare list or wrapped as {list_key: [...]}."""
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        rows = data.get(list_key)
        if isinstance(rows, list):
            return rows
    return []


class PokemonRepository:
    """Reads games.json and per-game species files.

    Layout under the knowledge directory:
        pokemon/games.json
        pokemon/by_game/<byGameFile>.json
    """

    def __init__(self, knowledge_dir: Optional[Path] = None, cache: Optional[JsonCache] = None):
        if knowledge_dir is None:
            knowledge_dir = settings.knowledge_path
        self.knowledge_dir = Path(knowledge_dir)
        self.cache = cache or JsonCache(production=settings.is_production)

    @property
    def data_dir(self) -> Path:
        return self.knowledge_dir / "pokemon"

    def list_games(self) -> list[GameDef]:
        """All games with a species dataset, in file order."""
        games = []
        for row in _rows(self.cache.load(self.data_dir / "games.json"), "games"):
            if not isinstance(row, dict):
                continue
            game_key = coerce_name(row.get("gameKey") or row.get("game_key"))
            if not game_key:
                continue
            games.append(
                GameDef(
                    game_key=game_key,
                    label=coerce_name(row.get("label")) or game_key,
                    generation=coerce_name(row.get("generation")),
                    ruleset_key=normalize_ruleset_key(row.get("rulesetKey") or row.get("ruleset_key")),
                    by_game_file=coerce_name(row.get("byGameFile") or row.get("by_game_file")) or game_key,
                )
            )
        return games

    def get_game(self, game_key: str) -> Optional[GameDef]:
        """Look up a game by key (case-insensitive)."""
        wanted = (game_key or "").strip().lower()
        for game in self.list_games():
            if game.game_key.lower() == wanted:
                return game
        return None

    def get_species(self, game_key: str) -> list[SpeciesRecord]:
        """Species for a game sorted by dex number; empty if the game is unknown."""
        game = self.get_game(game_key)
        if game is None:
            return []

        path = self.data_dir / "by_game" / f"{game.by_game_file}.json"
        records = []
        for raw in _rows(self.cache.load(path), "mons"):
            normalized = normalize_upstream_record(raw, "species")
            if normalized is None or normalized["id"] <= 0:
                continue
            records.append(SpeciesRecord(**normalized))

        records.sort(key=lambda r: r.id)
        return records

    def find_species(self, game_key: str, query: str | int) -> Optional[SpeciesRecord]:
        """Find a species by dex number, slug or display name."""
        species = self.get_species(game_key)
        number = to_number(query)
        if number is not None:
            for record in species:
                if record.id == int(number):
                    return record
            return None

        slug = normalize_slug(str(query))
        if not slug:
            return None
        for record in species:
            if record.slug == slug or normalize_slug(record.display_name) == slug:
                return record
        return None


class GoRepository:
    """Reads the Pokémon GO encounter and CP multiplier tables.

    Layout under the knowledge directory:
        pogo/pokemon_encounter.json  {"updatedAt": ..., "mons": [...]}
        pogo/cp_multiplier.json      {"updatedAt": ..., "cp": [{"level", "cpm"}]}
    """

    def __init__(self, knowledge_dir: Optional[Path] = None, cache: Optional[JsonCache] = None):
        if knowledge_dir is None:
            knowledge_dir = settings.knowledge_path
        self.knowledge_dir = Path(knowledge_dir)
        self.cache = cache or JsonCache(production=settings.is_production)

    @property
    def data_dir(self) -> Path:
        return self.knowledge_dir / "pogo"

    def get_cpm_table(self) -> list[tuple[float, float]]:
        """(level, cpm) rows sorted by level; malformed rows are skipped."""
        table = []
        for row in _rows(self.cache.load(self.data_dir / "cp_multiplier.json"), "cp"):
            if not isinstance(row, dict):
                continue
            level = to_number(row.get("level"))
            cpm = to_number(row.get("cpm"))
            if level is None or cpm is None or cpm <= 0:
                continue
            table.append((level, cpm))
        if not table:
            logger.warning("CP multiplier table is empty")
        return sorted(table)

    def list_species(self) -> list[GoSpeciesRecord]:
        records = []
        for row in _rows(self.cache.load(self.data_dir / "pokemon_encounter.json"), "mons"):
            if not isinstance(row, dict):
                continue
            species_id = to_text(row.get("id")).strip()
            if not species_id:
                continue
            records.append(
                GoSpeciesRecord(
                    id=species_id,
                    form=to_text(row.get("form")).strip() or f"{species_id}_NORMAL",
                    name=coerce_name(row.get("name")) or species_id,
                    base_capture_rate=to_number(row.get("baseCaptureRate")),
                    base_flee_rate=to_number(row.get("baseFleeRate")),
                    type1=coerce_name(row.get("type1")) or None,
                    type2=coerce_name(row.get("type2")) or None,
                )
            )
        return records

    def find_species(self, query: str) -> Optional[GoSpeciesRecord]:
        """Match by form id first ("PIKACHU_NORMAL"), then species id, then name."""
        wanted = (query or "").strip().lower()
        if not wanted:
            return None
        species = self.list_species()
        for attr in ("form", "id", "name"):
            for record in species:
                if getattr(record, attr).lower() == wanted:
                    return record
        return None
