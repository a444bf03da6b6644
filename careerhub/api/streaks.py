from __future__ import annotations

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query

from careerhub.core.auth import get_current_user_id
from careerhub.core.services import Services, get_services

router = APIRouter(prefix="/v1/streaks", tags=["streaks"])


@router.get("/current")
def get_current_streak(
    now: Optional[datetime] = Query(None, description="Override current time (testing)"),
    user_id: str = Depends(get_current_user_id),
    services: Services = Depends(get_services),
):
    """Return the current streak state for a user, with lazy decay applied."""
    return {"data": services.streaks.get_state(user_id, now=now)}
