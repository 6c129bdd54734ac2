"""Activity ingestion endpoint for facet-producing services."""

from fastapi import APIRouter, Depends

from app.dependencies.auth import require_credential
from app.dependencies.dashboard import get_activity_log
from app.schemas.activity import ActivityCreate, ActivityRead
from app.services.activity_log import SqlActivityLog

router = APIRouter(prefix="/activities", tags=["activities"])


@router.post("", response_model=ActivityRead, status_code=201, dependencies=[Depends(require_credential)])
async def log_activity(
    payload: ActivityCreate,
    activity_log: SqlActivityLog = Depends(get_activity_log),
):
    """Append an activity to a user's log. Callers must send an Authorization header."""
    activity = await activity_log.append(
        user_id=payload.user_id,
        type=payload.type,
        description=payload.description,
        metadata=payload.metadata,
    )
    return ActivityRead.model_validate(activity)
