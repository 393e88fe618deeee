"""
API endpoint for listing reviews.

Reviews are returned a page at a time and may be filtered by topic and
sentiment.  Pagination parameters are lenient: values that are not
integers are treated as 0 and then normalized by the service, so a
malformed query string still produces the first page rather than a
validation error.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from reviews_api.app.api.deps import ERROR_RESPONSES, get_review_service, run_cancellable
from reviews_api.app.core.errors import ApiError, LoadError
from reviews_api.app.schemas.review import ReviewsPage
from reviews_api.app.services.review_service import ReviewService

logger = logging.getLogger(__name__)

router = APIRouter()


def parse_int(value: Optional[str]) -> int:
    """Parse a query parameter as an integer, returning 0 when it is not one."""
    if value is None:
        return 0
    try:
        return int(value.strip())
    except ValueError:
        return 0


@router.get(
    "/reviews",
    response_model=ReviewsPage,
    summary="List reviews",
    responses=ERROR_RESPONSES,
)
async def list_reviews(
    request: Request,
    page: Optional[str] = Query("1", description="Page number, starting at 1"),
    limit: Optional[str] = Query("20", description="Page size, 1 to 100"),
    topic: str = Query("", description="Only reviews tagged with this topic"),
    sentiment: str = Query("", description="Only reviews tagged with this sentiment"),
    service: ReviewService = Depends(get_review_service),
) -> ReviewsPage:
    """List reviews with optional topic and sentiment filters.

    Both filters must match when both are given.  The response carries
    the total number of matching reviews and the number of pages.
    """
    try:
        return await run_cancellable(
            request,
            service.get_paginated_reviews,
            parse_int(page),
            parse_int(limit),
            topic,
            sentiment,
        )
    except LoadError:
        logger.exception("Failed to get reviews")
        raise ApiError(500, "internal_error", "Failed to get reviews")
