"""Dashboard API endpoints."""

import logging

from fastapi import APIRouter, Depends, Query

from app.dependencies.auth import require_identity
from app.dependencies.dashboard import get_aggregator
from app.schemas.identity import UserIdentity
from app.schemas.snapshot import SnapshotRead
from app.services.snapshot_aggregator import SnapshotAggregator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/me", response_model=SnapshotRead)
async def get_my_dashboard(
    refresh: bool = Query(True, description="Recompute from upstream services instead of returning the stored snapshot"),
    identity: UserIdentity = Depends(require_identity),
    aggregator: SnapshotAggregator = Depends(get_aggregator),
):
    """Get the caller's dashboard snapshot."""
    logger.info("Dashboard requested for user %s (refresh=%s)", identity.id, refresh)
    return await aggregator.fetch_or_build(identity.id, identity.role, refresh=refresh)
