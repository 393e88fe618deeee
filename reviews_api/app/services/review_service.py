"""
Business logic for reviews.

This service turns request parameters into store calls and wraps the
results in response envelopes.  Pagination input is normalized rather
than rejected: a page below 1 becomes 1 and a limit outside 1..100
becomes the default of 20.  Store failures are re-raised as
``LoadError`` with context so the API layer can log them and return a
generic error.
"""

import logging
import math
import threading
from typing import Optional, Tuple

from ..core.errors import LoadError
from ..core.store import ReviewStore
from ..schemas.review import AnalyticsData, ReviewsPage

DEFAULT_LIMIT = 20
MAX_LIMIT = 100

logger = logging.getLogger(__name__)


def normalize_pagination(page: int, limit: int) -> Tuple[int, int]:
    """Clamp ``page`` to at least 1 and reset an out of range ``limit``."""
    if page < 1:
        page = 1
    if limit < 1 or limit > MAX_LIMIT:
        limit = DEFAULT_LIMIT
    return page, limit


class ReviewService:
    """Service for listing reviews and exporting analytics data."""

    def __init__(self, store: ReviewStore) -> None:
        self.store = store

    def get_paginated_reviews(
        self,
        page: int,
        limit: int,
        topic: str = "",
        sentiment: str = "",
        cancel: Optional[threading.Event] = None,
    ) -> ReviewsPage:
        """Return one page of reviews matching the optional filters.

        ``total`` counts every matching review and ``total_pages`` is
        ``ceil(total / limit)``.  A page past the end yields an empty
        ``reviews`` list with the totals still filled in.
        """
        page, limit = normalize_pagination(page, limit)
        offset = (page - 1) * limit
        logger.info(
            "Getting paginated reviews: page=%s limit=%s topic=%r sentiment=%r offset=%s",
            page, limit, topic, sentiment, offset,
        )

        try:
            total = self.store.count(topic, sentiment, cancel=cancel)
        except LoadError as e:
            logger.error("Failed to get total reviews count: %s", e)
            raise LoadError(f"failed to get total reviews count: {e}") from e

        try:
            reviews = self.store.query(offset, limit, topic, sentiment, cancel=cancel)
        except LoadError as e:
            logger.error("Failed to get reviews: %s", e)
            raise LoadError(f"failed to get reviews: {e}") from e

        total_pages = math.ceil(total / limit)
        logger.info(
            "Retrieved paginated reviews: total=%s returned=%s total_pages=%s",
            total, len(reviews), total_pages,
        )
        return ReviewsPage(
            reviews=reviews,
            total=total,
            page=page,
            limit=limit,
            total_pages=total_pages,
        )

    def get_analytics_data(self, cancel: Optional[threading.Event] = None) -> AnalyticsData:
        """Return every review together with every prediction."""
        logger.info("Getting analytics data")
        try:
            reviews, predictions = self.store.all_for_analytics(cancel=cancel)
        except LoadError as e:
            logger.error("Failed to get analytics data: %s", e)
            raise LoadError(f"failed to get analytics data: {e}") from e

        logger.info(
            "Retrieved analytics data: reviews=%s predictions=%s",
            len(reviews), len(predictions),
        )
        return AnalyticsData(reviews=reviews, predictions=predictions)
