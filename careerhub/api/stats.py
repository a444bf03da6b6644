"""
Stats API Endpoints

GET /v1/stats: fresh dashboard stats (placement probability, streak, deadlines)
GET /v1/stats/cached: last-written display cache
PUT /v1/stats/cached: overwrite display cache fields
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from careerhub.core.auth import get_current_user_id
from careerhub.core.errors import NotFoundError
from careerhub.core.services import Services, get_services

router = APIRouter(prefix="/v1/stats", tags=["stats"])


class Deadline(BaseModel):
    title: str = Field(..., min_length=1)
    date: str = Field(..., min_length=1)


class CachedStatsUpdate(BaseModel):
    placement_probability: Optional[int] = Field(None, ge=0, le=95)
    streak: Optional[int] = Field(None, ge=0)
    upcoming_deadlines: Optional[List[Deadline]] = None


@router.get("")
def get_stats(
    now: Optional[datetime] = Query(None, description="Override current time (testing)"),
    user_id: str = Depends(get_current_user_id),
    services: Services = Depends(get_services),
) -> dict:
    """
    Compute today's dashboard stats.

    Returns:
        {
            "data": {
                "userId": "user_...",
                "placementProbability": 56,
                "streak": 10,
                "lastActiveDate": "2026-01-05",
                "upcomingDeadlines": [{"title": "Amazon OA", "date": "2026-01-07T09:00:00+00:00"}],
                "components": {"applications": 20, "interviews": 15, ...}
            }
        }
    """
    stats = services.stats.get_stats(user_id, now=now)
    return {"data": stats.to_dict()}


@router.get("/cached")
def get_cached_stats(
    user_id: str = Depends(get_current_user_id),
    services: Services = Depends(get_services),
) -> dict:
    cached = services.stats.get_cached_stats(user_id)
    if cached is None:
        raise NotFoundError("No stats recorded yet")
    return {"data": cached.to_dict()}


@router.put("/cached")
def update_cached_stats(
    body: CachedStatsUpdate,
    user_id: str = Depends(get_current_user_id),
    services: Services = Depends(get_services),
) -> dict:
    deadlines = None
    if body.upcoming_deadlines is not None:
        deadlines = [d.model_dump() for d in body.upcoming_deadlines]
    cached = services.stats.update_cached_stats(
        user_id,
        placement_probability=body.placement_probability,
        streak=body.streak,
        upcoming_deadlines=deadlines,
    )
    return {"data": cached.to_dict()}
