"""Data providers over the static JSON datasets."""

from gamecalc.repositories.json_cache import JsonCache
from gamecalc.repositories.pokemon_repository import GoRepository, PokemonRepository
from gamecalc.repositories.wow_repository import WowRepository

__all__ = [
    "JsonCache",
    "GoRepository",
    "PokemonRepository",
    "WowRepository",
]
