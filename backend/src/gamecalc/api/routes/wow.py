"""REST endpoints for the WoW upgrade checker and stat priority."""

from dataclasses import asdict
from typing import Literal

from fastapi import APIRouter, HTTPException, Query, Request
from pydantic import BaseModel, Field, model_validator

from gamecalc.repositories.wow_repository import WowRepository
from gamecalc.services.errors import RecordNotFoundError
from gamecalc.services.upgrade_service import UpgradeService

router = APIRouter(prefix="/api/wow", tags=["wow"])


def _get_upgrade_service(request: Request) -> UpgradeService:
    """Get or lazily create the upgrade service on app state."""
    state = request.app.state
    if not hasattr(state, "upgrade_service"):
        state.upgrade_service = UpgradeService(
            WowRepository(cache=getattr(state, "json_cache", None))
        )
    return state.upgrade_service


class UpgradeCheckRequest(BaseModel):
    """Compare either two item ids or two raw stat bags."""

    spec: str
    focus: Literal["mplus", "raid"] = "mplus"
    profile: Literal["st", "aoe"] = "st"
    current_item_id: int | None = None
    candidate_item_id: int | None = None
    current_stats: dict[str, float] = Field(default_factory=dict)
    candidate_stats: dict[str, float] = Field(default_factory=dict)

    @model_validator(mode="after")
    def check_item_pair(self):
        if (self.current_item_id is None) != (self.candidate_item_id is None):
            raise ValueError("current_item_id and candidate_item_id must be given together")
        return self


class StatPriorityRequest(BaseModel):
    """Current secondary ratings for a spec."""

    spec: str
    content_type: Literal["raid_st", "mplus_aoe"] = "raid_st"
    ratings: dict[str, float] = Field(default_factory=dict)


@router.get("/specs")
async def list_specs(request: Request):
    """Specs with stat priority weights, plus the weight table version."""
    service = _get_upgrade_service(request)
    return {
        "weights_version": service.repository.weights_version,
        "specs": service.repository.list_specs(),
    }


@router.get("/items")
async def search_items(
    request: Request,
    q: str = Query(..., min_length=1),
    limit: int = Query(10, ge=1, le=50),
):
    """Search the item database by name."""
    service = _get_upgrade_service(request)
    return {"items": [asdict(item) for item in service.repository.search_items(q, limit)]}


@router.post("/upgrade-check")
async def upgrade_check(request: Request, body: UpgradeCheckRequest):
    """Weighted upgrade/downgrade/sidegrade verdict for a gear swap."""
    service = _get_upgrade_service(request)

    if body.current_item_id is not None and body.candidate_item_id is not None:
        try:
            result, current, candidate = service.compare_items(
                body.current_item_id,
                body.candidate_item_id,
                body.spec,
                body.focus,
                body.profile,
            )
        except RecordNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        return {
            **result.to_dict(),
            "current_item": asdict(current),
            "candidate_item": asdict(candidate),
        }

    result = service.compare_stats(
        body.current_stats,
        body.candidate_stats,
        body.spec,
        body.focus,
        body.profile,
    )
    return {**result.to_dict(), "current_item": None, "candidate_item": None}


@router.post("/stat-priority")
async def stat_priority(request: Request, body: StatPriorityRequest):
    """Which secondary stat to invest in next."""
    service = _get_upgrade_service(request)
    result = service.stat_priority(body.ratings, body.spec, body.content_type)
    return result.to_dict()
