"""Shared fixtures: small review/prediction files written to a temp dir."""

import json
import os

import pytest

from reviews_api.app.core.store import ReviewStore


def make_review(review_id, **overrides):
    review = {
        "id": review_id,
        "link": f"https://example.com/reviews/{review_id}",
        "date": "2024-06-01",
        "title": f"Review {review_id}",
        "text": "Some text",
        "rating": "4",
        "status": None,
        "product": None,
        "city": "Moscow",
    }
    review.update(overrides)
    return review


def write_files(directory, reviews, predictions):
    """Write a reviews file and a predictions file, return their paths."""
    reviews_path = os.path.join(directory, "siteReviews.json")
    predictions_path = os.path.join(directory, "reviews.json")
    with open(reviews_path, "w", encoding="utf-8") as fh:
        json.dump({"reviews": reviews}, fh)
    with open(predictions_path, "w", encoding="utf-8") as fh:
        json.dump(predictions, fh)
    return reviews_path, predictions_path


SAMPLE_PREDICTIONS = [
    {"id": 1, "topics": ["price", "service"], "sentiments": ["negative", "positive"]},
    {"id": 2, "topics": ["price"], "sentiments": ["positive"]},
    {"id": 3, "topics": ["delivery"], "sentiments": ["negative"]},
    {"id": 500, "topics": ["orphan"], "sentiments": ["neutral"]},
]


@pytest.fixture
def sample_store(tmp_path):
    """Store over five reviews; ids 4 and 5 have no prediction."""
    reviews = [make_review(i) for i in range(1, 6)]
    paths = write_files(str(tmp_path), reviews, SAMPLE_PREDICTIONS)
    return ReviewStore(*paths)


@pytest.fixture
def big_store(tmp_path):
    """Store over 45 reviews, every one tagged ``price``."""
    reviews = [make_review(i) for i in range(1, 46)]
    predictions = [{"id": i, "topics": ["price"], "sentiments": ["neutral"]} for i in range(1, 46)]
    paths = write_files(str(tmp_path), reviews, predictions)
    return ReviewStore(*paths)
