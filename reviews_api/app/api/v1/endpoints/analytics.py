"""
API endpoint for analytics data.

Returns every review (with merged topics and sentiments) together with
the raw predictions so dashboards can aggregate on the client side.
"""

import logging

from fastapi import APIRouter, Depends, Request

from reviews_api.app.api.deps import ERROR_RESPONSES, get_review_service, run_cancellable
from reviews_api.app.core.errors import ApiError, LoadError
from reviews_api.app.schemas.review import AnalyticsData
from reviews_api.app.services.review_service import ReviewService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/analytics", response_model=AnalyticsData, summary="Analytics data", responses=ERROR_RESPONSES)
async def get_analytics(
    request: Request,
    service: ReviewService = Depends(get_review_service),
) -> AnalyticsData:
    try:
        return await run_cancellable(request, service.get_analytics_data)
    except LoadError:
        logger.exception("Failed to get analytics data")
        raise ApiError(500, "internal_error", "Failed to get analytics data")
