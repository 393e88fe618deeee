"""
Unit tests for ReviewService pagination and analytics.
"""

from unittest.mock import MagicMock

import pytest

from reviews_api.app.core.errors import LoadError
from reviews_api.app.services.review_service import ReviewService, normalize_pagination


@pytest.mark.parametrize(
    "page, limit, expected",
    [
        (1, 20, (1, 20)),
        (0, 20, (1, 20)),
        (-3, 50, (1, 50)),
        (2, 0, (2, 20)),
        (2, 101, (2, 20)),
        (2, 100, (2, 100)),
        (2, 1, (2, 1)),
    ],
)
def test_normalize_pagination(page, limit, expected):
    assert normalize_pagination(page, limit) == expected


def test_pages_of_45_reviews(big_store):
    service = ReviewService(big_store)

    first = service.get_paginated_reviews(1, 20)
    assert first.total == 45
    assert first.total_pages == 3
    assert [r.id for r in first.reviews] == list(range(1, 21))

    last = service.get_paginated_reviews(3, 20)
    assert len(last.reviews) == 5
    assert last.page == 3

    past_end = service.get_paginated_reviews(4, 20)
    assert past_end.reviews == []
    assert past_end.total == 45
    assert past_end.total_pages == 3


@pytest.mark.parametrize("page, limit", [(1, 1), (2, 7), (5, 10), (3, 100), (7, 8)])
def test_page_size_is_min_of_limit_and_remaining(big_store, page, limit):
    result = ReviewService(big_store).get_paginated_reviews(page, limit)
    offset = (page - 1) * limit
    assert len(result.reviews) == min(limit, max(0, 45 - offset))


def test_invalid_parameters_are_normalized(big_store):
    result = ReviewService(big_store).get_paginated_reviews(0, 500)
    assert result.page == 1
    assert result.limit == 20
    assert len(result.reviews) == 20


def test_unknown_topic_gives_empty_page(sample_store):
    result = ReviewService(sample_store).get_paginated_reviews(1, 20, topic="billing")
    assert result.reviews == []
    assert result.total == 0
    assert result.total_pages == 0


def test_topic_and_sentiment_filters(sample_store):
    # Review 1 carries both "price" and "positive" (on different topics) so it matches too
    result = ReviewService(sample_store).get_paginated_reviews(1, 20, topic="price", sentiment="positive")
    assert [r.id for r in result.reviews] == [1, 2]
    assert result.total == 2
    assert result.total_pages == 1


def test_filter_pair_isolating_one_review(sample_store):
    result = ReviewService(sample_store).get_paginated_reviews(1, 20, topic="delivery", sentiment="negative")
    assert [r.id for r in result.reviews] == [3]
    assert result.total == 1


def test_count_then_query_calls_store_with_offset():
    store = MagicMock()
    store.count.return_value = 30
    store.query.return_value = []

    result = ReviewService(store).get_paginated_reviews(3, 10, "price", "negative")

    store.count.assert_called_once_with("price", "negative", cancel=None)
    store.query.assert_called_once_with(20, 10, "price", "negative", cancel=None)
    assert result.total_pages == 3


def test_load_error_is_reraised_with_context():
    store = MagicMock()
    store.count.side_effect = LoadError("failed to load reviews: boom")

    with pytest.raises(LoadError, match="failed to get total reviews count") as excinfo:
        ReviewService(store).get_paginated_reviews(1, 20)
    assert isinstance(excinfo.value.__cause__, LoadError)
    store.query.assert_not_called()


def test_analytics_returns_all_reviews_and_predictions(sample_store):
    data = ReviewService(sample_store).get_analytics_data()
    assert [r.id for r in data.reviews] == [1, 2, 3, 4, 5]
    assert [p.id for p in data.predictions] == [1, 2, 3, 500]


def test_analytics_load_error_is_reraised():
    store = MagicMock()
    store.all_for_analytics.side_effect = LoadError("nope")
    with pytest.raises(LoadError, match="failed to get analytics data"):
        ReviewService(store).get_analytics_data()
