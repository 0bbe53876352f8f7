"""Catch calculators backed by the species datasets."""
import logging
from typing import Any, Iterable, Optional

from gamecalc.models.capture import BallConditions, CaptureResult
from gamecalc.models.records import GoSpeciesRecord, SpeciesRecord
from gamecalc.repositories.pokemon_repository import GoRepository, PokemonRepository
from gamecalc.services.calculators import capture_engine, go_capture
from gamecalc.services.errors import UnknownGameError, UnknownSpeciesError

logger = logging.getLogger(__name__)


class CatchService:
    """Resolves species/game context, then runs the capture engine."""

    def __init__(self, repository: Optional[PokemonRepository] = None):
        self.repository = repository or PokemonRepository()

    def resolve_species(self, game_key: str, species: str | int) -> SpeciesRecord:
        """Find a species in a game's dataset.

        Raises:
            UnknownGameError: If the game is not in games.json
            UnknownSpeciesError: If the species is not in the game's dataset
        """
        if self.repository.get_game(game_key) is None:
            raise UnknownGameError(f"Unknown game: {game_key}")
        record = self.repository.find_species(game_key, species)
        if record is None:
            raise UnknownSpeciesError(f"Unknown species for {game_key}: {species}")
        return record

    def catch_chance(
        self,
        hp_fraction: Any,
        ball: str,
        status: Optional[str] = None,
        turn: Any = 1,
        capture_rate: Any = None,
        game_key: Optional[str] = None,
        species: str | int | None = None,
        ruleset_key: Optional[str] = None,
        conditions: Optional[BallConditions] = None,
    ) -> tuple[CaptureResult, Optional[SpeciesRecord]]:
        """Compute a catch chance from either a raw capture rate or a species.

        When ``game_key`` and ``species`` are given, the species' capture rate
        and the game's ruleset are used unless explicitly overridden.

        Returns:
            (result, species record or None)
        """
        record = None
        if game_key and species is not None:
            record = self.resolve_species(game_key, species)
            game = self.repository.get_game(game_key)
            if capture_rate is None:
                capture_rate = record.capture_rate
            if ruleset_key is None and game is not None:
                ruleset_key = game.ruleset_key

        if capture_rate is None:
            logger.warning("No capture rate or species given; using capture rate 0")
            capture_rate = 0

        result = capture_engine.compute_catch_chance(
            ruleset_key=ruleset_key,
            capture_rate=capture_rate,
            hp_fraction=hp_fraction,
            ball=ball,
            status=status,
            turn=turn,
            conditions=conditions,
        )
        return result, record


class GoCatchService:
    """Pokémon GO catch chance from the encounter and CPM tables."""

    def __init__(self, repository: Optional[GoRepository] = None):
        self.repository = repository or GoRepository()

    def catch_chance(
        self,
        level: Any,
        ball: str = "poke",
        berry: Optional[str] = None,
        throw: Optional[str] = None,
        curveball: bool = False,
        medals: Iterable[Optional[str]] = (),
        throws: Any = 1,
        species: Optional[str] = None,
        base_capture_rate: Any = None,
    ) -> dict:
        """Per-throw and cumulative catch chance.

        Raises:
            UnknownSpeciesError: If ``species`` is given but not in the encounter table
        """
        record: Optional[GoSpeciesRecord] = None
        if species:
            record = self.repository.find_species(species)
            if record is None:
                raise UnknownSpeciesError(f"Unknown species: {species}")
            if base_capture_rate is None:
                base_capture_rate = record.base_capture_rate

        medal_list = list(medals)
        # Only dual-type species average two medals
        if record is not None and (not record.type2 or record.type2 == record.type1):
            medal_list = medal_list[:1]

        cpm = go_capture.pick_cpm(level, self.repository.get_cpm_table())
        multiplier = go_capture.throw_multiplier(ball, berry, throw, curveball, medal_list)
        per_throw = go_capture.catch_chance_per_throw(base_capture_rate, cpm, multiplier)

        return {
            "species": record,
            "cpm": cpm,
            "multiplier": multiplier,
            "per_throw": per_throw,
            "cumulative": go_capture.cumulative_chance(per_throw, throws),
        }
