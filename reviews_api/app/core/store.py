"""
In‑memory review store backed by two JSON files.

The reviews file is an object with a ``reviews`` array; the predictions
file is a bare array of classifier outputs.  Both are read on first use,
predictions are merged into reviews by ``id`` and the result is kept as
an immutable snapshot for the lifetime of the process.

The store has two states.  While ``Unloaded`` the first caller to need
data takes the load lock, parses both files and publishes the snapshot;
concurrent callers wait on the same lock.  Once ``Loaded`` readers grab
the snapshot reference and scan it without locking.  A failed load
publishes nothing, so the next call tries again.
"""

import json
import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError

from ..schemas.review import Prediction, Review
from .errors import LoadError, QueryCancelledError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Snapshot:
    reviews: Tuple[Review, ...]
    predictions: Tuple[Prediction, ...]


def _check_cancelled(cancel: Optional[threading.Event]) -> None:
    if cancel is not None and cancel.is_set():
        raise QueryCancelledError("query cancelled by caller")


def _matches(review: Review, topic: str, sentiment: str) -> bool:
    if topic and topic not in review.topics:
        return False
    if sentiment and sentiment not in review.sentiments:
        return False
    return True


def _read_json(path: str) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as fh:
            return json.load(fh)
    except OSError as e:
        raise LoadError(f"cannot read {path}: {e}") from e
    except ValueError as e:
        raise LoadError(f"invalid JSON in {path}: {e}") from e


def load_reviews(path: str) -> List[Review]:
    """Parse the reviews file.  Duplicate review ids are rejected."""
    data = _read_json(path)
    if not isinstance(data, dict):
        raise LoadError(f"{path}: expected an object with a 'reviews' array")
    items = data.get("reviews")
    if items is None:
        items = []
    if not isinstance(items, list):
        raise LoadError(f"{path}: 'reviews' must be an array")
    try:
        reviews = [Review.model_validate(item) for item in items]
    except ValidationError as e:
        raise LoadError(f"{path}: invalid review: {e}") from e

    seen = set()
    for review in reviews:
        if review.id in seen:
            raise LoadError(f"{path}: duplicate review id {review.id}")
        seen.add(review.id)
    return reviews


def load_predictions(path: str) -> List[Prediction]:
    """Parse the predictions file."""
    data = _read_json(path)
    if data is None:
        return []
    if not isinstance(data, list):
        raise LoadError(f"{path}: expected an array of predictions")
    try:
        return [Prediction.model_validate(item) for item in data]
    except ValidationError as e:
        raise LoadError(f"{path}: invalid prediction: {e}") from e


def merge_predictions(reviews: List[Review], predictions: List[Prediction]) -> List[Review]:
    """Return reviews with topics/sentiments copied from matching predictions.

    When several predictions share an id the last one wins.  Reviews
    without a prediction are returned unchanged.
    """
    by_id: Dict[int, Prediction] = {}
    for pred in predictions:
        by_id[pred.id] = pred

    merged: List[Review] = []
    for review in reviews:
        pred = by_id.get(review.id)
        if pred is not None:
            review = review.model_copy(
                update={"topics": list(pred.topics), "sentiments": list(pred.sentiments)}
            )
        merged.append(review)
    return merged


class ReviewStore:
    """Load‑once store answering filtered, paginated and full‑set queries."""

    def __init__(self, reviews_path: str, predictions_path: str) -> None:
        self.reviews_path = reviews_path
        self.predictions_path = predictions_path
        self._lock = threading.Lock()
        self._snapshot: Optional[_Snapshot] = None

    @property
    def is_loaded(self) -> bool:
        return self._snapshot is not None

    def open(self) -> "ReviewStore":
        """Load both files now and return the store."""
        self.ensure_loaded()
        return self

    def ensure_loaded(self, cancel: Optional[threading.Event] = None) -> None:
        """Load and merge the source files unless already done.

        Raises ``LoadError`` if either file cannot be read or parsed,
        leaving the store unloaded.  Raises ``QueryCancelledError`` if
        ``cancel`` is set before or after the load step.
        """
        self._get_snapshot(cancel)

    def _get_snapshot(self, cancel: Optional[threading.Event] = None) -> _Snapshot:
        _check_cancelled(cancel)
        snapshot = self._snapshot
        if snapshot is not None:
            return snapshot

        with self._lock:
            if self._snapshot is None:
                try:
                    reviews = load_reviews(self.reviews_path)
                except LoadError as e:
                    raise LoadError(f"failed to load reviews: {e}") from e
                try:
                    predictions = load_predictions(self.predictions_path)
                except LoadError as e:
                    raise LoadError(f"failed to load predictions: {e}") from e
                merged = merge_predictions(reviews, predictions)
                _check_cancelled(cancel)
                self._snapshot = _Snapshot(reviews=tuple(merged), predictions=tuple(predictions))
                logger.info(
                    "Loaded %d reviews and %d predictions from %s, %s",
                    len(merged),
                    len(predictions),
                    self.reviews_path,
                    self.predictions_path,
                )
            snapshot = self._snapshot

        _check_cancelled(cancel)
        return snapshot

    def query(
        self,
        offset: int,
        limit: int,
        topic: str = "",
        sentiment: str = "",
        cancel: Optional[threading.Event] = None,
    ) -> List[Review]:
        """Return the ``[offset, offset + limit)`` window of matching reviews.

        A review matches when its topics contain ``topic`` and its
        sentiments contain ``sentiment``; an empty filter matches
        everything.  File order is preserved.  An offset past the end
        yields an empty list.
        """
        snapshot = self._get_snapshot(cancel)
        filtered = [r for r in snapshot.reviews if _matches(r, topic, sentiment)]
        if offset >= len(filtered):
            return []
        end = min(offset + limit, len(filtered))
        return [r.model_copy(deep=True) for r in filtered[offset:end]]

    def count(self, topic: str = "", sentiment: str = "", cancel: Optional[threading.Event] = None) -> int:
        """Number of reviews matching the filters."""
        snapshot = self._get_snapshot(cancel)
        if not topic and not sentiment:
            return len(snapshot.reviews)
        return sum(1 for r in snapshot.reviews if _matches(r, topic, sentiment))

    def all_for_analytics(
        self, cancel: Optional[threading.Event] = None
    ) -> Tuple[List[Review], List[Prediction]]:
        """Copies of every review and every prediction, including unmatched ones."""
        snapshot = self._get_snapshot(cancel)
        reviews = [r.model_copy(deep=True) for r in snapshot.reviews]
        predictions = [p.model_copy(deep=True) for p in snapshot.predictions]
        return reviews, predictions
