"""REST endpoints for the Pokémon catch calculators."""

import math
from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from gamecalc.models.capture import BallConditions
from gamecalc.repositories.pokemon_repository import GoRepository, PokemonRepository
from gamecalc.services.catch_service import CatchService, GoCatchService
from gamecalc.services.errors import RecordNotFoundError

router = APIRouter(prefix="/api/pokemon", tags=["pokemon"])
go_router = APIRouter(prefix="/api/pokemon-go", tags=["pokemon-go"])


def _finite_or_none(value: float) -> Optional[float]:
    """JSON has no infinity; report it as null."""
    return value if math.isfinite(value) else None


def _get_catch_service(request: Request) -> CatchService:
    """Get or lazily create the catch service on app state."""
    state = request.app.state
    if not hasattr(state, "catch_service"):
        state.catch_service = CatchService(
            PokemonRepository(cache=getattr(state, "json_cache", None))
        )
    return state.catch_service


def _get_go_catch_service(request: Request) -> GoCatchService:
    state = request.app.state
    if not hasattr(state, "go_catch_service"):
        state.go_catch_service = GoCatchService(
            GoRepository(cache=getattr(state, "json_cache", None))
        )
    return state.go_catch_service


class BallConditionsBody(BaseModel):
    """Optional situational flags for conditional balls."""

    is_dark_location: bool = False
    already_caught: bool = False
    target_is_water_or_bug: bool = False
    is_underwater: bool = False
    target_level: int | None = None


class CatchRequest(BaseModel):
    """Request body for a mainline catch calculation.

    Either ``capture_rate`` or ``game_key`` + ``species`` must identify the
    target; an explicit ``capture_rate`` wins over the species' own rate.
    """

    hp_fraction: float = 1.0
    ball: str = "poke"
    status: str = "none"
    turn: int = 1
    throws: int = 1
    capture_rate: float | None = None
    game_key: str | None = None
    species: str | None = None
    ruleset_key: str | None = None
    conditions: BallConditionsBody | None = None


class GoCatchRequest(BaseModel):
    """Request body for a Pokémon GO catch calculation."""

    level: float = 20.0
    ball: str = "poke"
    berry: str = "none"
    throw: str = "none"
    curveball: bool = False
    medals: list[str] = Field(default_factory=list)
    throws: int = 1
    species: str | None = None
    base_capture_rate: float | None = None


@router.get("/games")
async def list_games(request: Request):
    """List games that have a species dataset."""
    service = _get_catch_service(request)
    return {"games": [asdict(game) for game in service.repository.list_games()]}


@router.get("/games/{game_key}/species")
async def list_species(request: Request, game_key: str):
    """List catchable species for a game."""
    service = _get_catch_service(request)
    if service.repository.get_game(game_key) is None:
        raise HTTPException(status_code=404, detail=f"Unknown game: {game_key}")
    return {
        "game_key": game_key,
        "species": [asdict(record) for record in service.repository.get_species(game_key)],
    }


@router.post("/catch")
async def catch_chance(request: Request, body: CatchRequest):
    """Single-throw catch probability plus expected and cumulative figures."""
    service = _get_catch_service(request)
    conditions = BallConditions(**body.conditions.model_dump()) if body.conditions else None

    try:
        result, record = service.catch_chance(
            hp_fraction=body.hp_fraction,
            ball=body.ball,
            status=body.status,
            turn=body.turn,
            capture_rate=body.capture_rate,
            game_key=body.game_key,
            species=body.species,
            ruleset_key=body.ruleset_key,
            conditions=conditions,
        )
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return {
        "probability": result.probability,
        "a_value": result.a_value,
        "shake_probability": result.shake_probability,
        "ball_multiplier": _finite_or_none(result.ball_multiplier),
        "status_multiplier": result.status_multiplier,
        "ruleset_key": result.ruleset_key,
        "guaranteed": result.guaranteed,
        "expected_throws": _finite_or_none(result.expected_throws),
        "throws": max(1, body.throws),
        "cumulative_probability": result.cumulative_probability(body.throws),
        "species": asdict(record) if record else None,
    }


@go_router.post("/catch")
async def go_catch_chance(request: Request, body: GoCatchRequest):
    """Per-throw and cumulative Pokémon GO catch probability."""
    service = _get_go_catch_service(request)
    try:
        result = service.catch_chance(
            level=body.level,
            ball=body.ball,
            berry=body.berry,
            throw=body.throw,
            curveball=body.curveball,
            medals=body.medals,
            throws=body.throws,
            species=body.species,
            base_capture_rate=body.base_capture_rate,
        )
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    species = result["species"]
    return {
        **result,
        "throws": max(1, body.throws),
        "species": asdict(species) if species else None,
    }
