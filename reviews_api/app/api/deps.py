"""
Shared FastAPI dependencies and helpers.

The review service is created once in ``create_app`` and stored on
``app.state``; endpoints obtain it through ``get_review_service`` so
tests can build an app around their own store.
"""

import asyncio
import contextlib
import threading
from typing import Any, Callable, TypeVar

from fastapi import Request
from fastapi.concurrency import run_in_threadpool

from reviews_api.app.schemas.review import ErrorResponse
from reviews_api.app.services.review_service import ReviewService

T = TypeVar("T")

# Seconds between client disconnect checks while a query runs.
DISCONNECT_POLL_INTERVAL = 0.1

ERROR_RESPONSES = {
    404: {"model": ErrorResponse, "description": "Route not found"},
    429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
    500: {"model": ErrorResponse, "description": "Review data could not be loaded"},
}


def get_review_service(request: Request) -> ReviewService:
    return request.app.state.review_service


async def _watch_disconnect(request: Request, cancel: threading.Event) -> None:
    while not cancel.is_set():
        if await request.is_disconnected():
            cancel.set()
            return
        await asyncio.sleep(DISCONNECT_POLL_INTERVAL)


async def run_cancellable(request: Request, func: Callable[..., T], *args: Any) -> T:
    """Run ``func(*args, cancel)`` in the threadpool.

    While it runs a background task polls the client connection and
    sets ``cancel`` once the client has gone away, so the store can
    abandon the query around its load step.
    """
    cancel = threading.Event()
    watcher = asyncio.create_task(_watch_disconnect(request, cancel))
    try:
        return await run_in_threadpool(func, *args, cancel)
    finally:
        watcher.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await watcher
