"""Business logic services."""

from gamecalc.services.catch_service import CatchService, GoCatchService
from gamecalc.services.errors import (
    RecordNotFoundError,
    UnknownGameError,
    UnknownItemError,
    UnknownSpeciesError,
)
from gamecalc.services.upgrade_service import UpgradeService

__all__ = [
    "CatchService",
    "GoCatchService",
    "UpgradeService",
    "RecordNotFoundError",
    "UnknownGameError",
    "UnknownItemError",
    "UnknownSpeciesError",
]
