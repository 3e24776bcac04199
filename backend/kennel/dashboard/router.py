from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from kennel.auth.dependencies import Caller, require_caller
from kennel.common.exceptions import ApiException, DataAccessError
from kennel.common.responses import ApiResponse
from kennel.config import get_settings
from kennel.dashboard.service import ActivityFeed, StatsAggregator
from kennel.database import get_session_factory
from kennel.datastore.store import SqlDataStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


def _store_factory(caller: Caller) -> SqlDataStore:
    return SqlDataStore(get_session_factory(), caller)


def get_stats_aggregator() -> StatsAggregator:
    return StatsAggregator(_store_factory, max_workers=get_settings().stats_max_workers)


def get_activity_feed() -> ActivityFeed:
    return ActivityFeed(_store_factory)


@router.get("/stats", response_model=ApiResponse)
def get_stats(
    caller: Caller = Depends(require_caller),
    aggregator: StatsAggregator = Depends(get_stats_aggregator),
) -> ApiResponse:
    try:
        snapshot = aggregator.compute_stats(caller)
    except DataAccessError as exc:
        logger.exception("fetch_stats_failed caller=%s", caller.id)
        raise ApiException(status_code=500, code="FETCH_STATS_ERROR", message="獲取統計數據失敗") from exc
    return ApiResponse.ok(snapshot.model_dump())


@router.get("/activities", response_model=ApiResponse)
def get_activities(
    caller: Caller = Depends(require_caller),
    feed: ActivityFeed = Depends(get_activity_feed),
) -> ApiResponse:
    try:
        activities = feed.recent_activities(caller)
    except DataAccessError as exc:
        logger.exception("fetch_activities_failed caller=%s", caller.id)
        raise ApiException(status_code=500, code="FETCH_ACTIVITIES_ERROR", message="獲取活動記錄失敗") from exc
    return ApiResponse.ok([activity.model_dump() for activity in activities])
