from typing import List

from fastapi import APIRouter, HTTPException, Query, Request

from api.dependencies.actor import ActorIdDep
from api.dependencies.rate_limits import get_limiter
from infrastructure.services import ActivityLogStoreDep, UserStoreDep
from modules.webhooks.models import ActivityLogEntry

router = APIRouter(prefix="/activity-logs", tags=["Activity"])
limiter = get_limiter()


@router.get("", response_model=List[ActivityLogEntry])
@limiter.limit("60/minute")
async def list_application_activity(
    request: Request,  # pylint: disable=unused-argument
    actor_id: ActorIdDep,  # pylint: disable=unused-argument
    store: ActivityLogStoreDep,
    application_id: int = Query(..., gt=0),
    limit: int = Query(100, ge=1, le=1000),
):
    """Activity log of one application, newest first."""
    return await store.list_for_application(application_id, limit=limit)


@router.get("/users/{app_user_id}", response_model=List[ActivityLogEntry])
@limiter.limit("60/minute")
async def list_app_user_activity(
    request: Request,  # pylint: disable=unused-argument
    app_user_id: int,
    actor_id: ActorIdDep,  # pylint: disable=unused-argument
    store: ActivityLogStoreDep,
    users: UserStoreDep,
    limit: int = Query(100, ge=1, le=1000),
):
    """Activity log of one app user, newest first."""
    if await users.get_user(app_user_id) is None:
        raise HTTPException(status_code=404, detail="User not found")
    return await store.list_for_app_user(app_user_id, limit=limit)
