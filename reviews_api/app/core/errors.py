"""
Error types shared by the store, the services and the HTTP layer.

``LoadError`` is the only error the data layer produces.  Services
re-raise it with added context and the API maps it to a generic 500
response so file paths and parser messages never reach clients.
"""


class LoadError(Exception):
    """A source file is missing, unreadable, malformed or inconsistent."""


class QueryCancelledError(Exception):
    """The caller gave up before the query could complete."""


class ApiError(Exception):
    """An error rendered to the client as ``{"error": ..., "message": ...}``."""

    def __init__(self, status_code: int, error: str, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.error = error
        self.message = message
