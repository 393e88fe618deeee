"""
Pydantic schemas for reviews, predictions and the response envelopes.

``Review`` and ``Prediction`` validate entries of the two source files.
Reviews arrive without topics or sentiments; those are filled in when a
prediction with the same ``id`` is merged by the store.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class Review(BaseModel):
    """A single review scraped from the site."""

    id: int
    link: str
    date: str
    title: str
    text: str
    rating: str
    status: Optional[str] = None
    product: Optional[str] = None
    city: str
    topics: List[str] = Field(default_factory=list, description="Topics assigned by the classifier")
    sentiments: List[str] = Field(default_factory=list, description="Sentiment per topic, same order as topics")


class Prediction(BaseModel):
    """Classifier output for one review."""

    id: int
    topics: List[str]
    sentiments: List[str]


class ReviewsPage(BaseModel):
    """Paginated response for ``GET /reviews``."""

    reviews: List[Review]
    total: int
    page: int
    limit: int
    total_pages: int


class AnalyticsData(BaseModel):
    """Every review and prediction, for client side analytics."""

    reviews: List[Review]
    predictions: List[Prediction]


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str


class ErrorResponse(BaseModel):
    error: str
    message: str
