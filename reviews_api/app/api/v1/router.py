"""
Top‑level router for version 1 of the API.

This router aggregates the resource routers under a unified prefix.
When new endpoints are added, update this file to include their
routers.
"""

from fastapi import APIRouter

from .endpoints import analytics, reviews

router = APIRouter()

# Both routers define their own paths internally, so no prefix here.
router.include_router(reviews.router, tags=["reviews"])
router.include_router(analytics.router, tags=["analytics"])
