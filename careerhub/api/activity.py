"""
Activity API Endpoints

POST /v1/activity: log a qualifying activity (also advances the streak)
GET /v1/activity/recent: most recent activities, newest first
"""

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from careerhub.core.auth import get_current_user_id
from careerhub.core.services import Services, get_services
from careerhub.features.activity.ledger import DEFAULT_RECENT_LIMIT
from careerhub.models.activity import ActivityCategory

router = APIRouter(prefix="/v1/activity", tags=["activity"])


class ActivityCreate(BaseModel):
    category: ActivityCategory
    description: str = Field(..., min_length=1, max_length=2000)


@router.post("", status_code=201)
def log_activity(
    body: ActivityCreate,
    user_id: str = Depends(get_current_user_id),
    services: Services = Depends(get_services),
) -> dict:
    """
    Append an activity for the current user.

    Returns:
        {
            "data": {"id": "1", "type": "application", "description": "...", ...},
            "streak": {"currentStreak": 3, "lastActiveDate": "2026-01-05", "status": "active", ...}
        }
    """
    entry = services.ledger.append(user_id, body.category, body.description)
    return {
        "data": entry.to_dict(),
        "streak": services.streaks.get_state(user_id),
    }


@router.get("/recent")
def list_recent_activity(
    limit: int = Query(DEFAULT_RECENT_LIMIT, ge=1, le=100),
    user_id: str = Depends(get_current_user_id),
    services: Services = Depends(get_services),
) -> dict:
    entries = services.ledger.list_recent(user_id, limit)
    return {"data": [entry.to_dict() for entry in entries]}
