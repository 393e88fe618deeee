"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts with the sample data shipped in ``data/``.  In a
production deployment override these via environment variables.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

# Project root (the directory that contains the ``reviews_api`` package)
BASE_DIR = Path(__file__).resolve().parent.parent.parent.parent


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


def _env_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Reviews Backend API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")

    host: str = os.getenv("SERVER_HOST", "0.0.0.0")
    port: int = int(os.getenv("SERVER_PORT", "8080"))
    # Seconds uvicorn waits for in‑flight requests on SIGINT/SIGTERM.
    shutdown_timeout: int = int(os.getenv("SERVER_SHUTDOWN_TIMEOUT", "30"))

    # Source files.  Relative paths are resolved against the project
    # root by ``resolve_path``.
    reviews_path: str = os.getenv("REVIEWS_PATH", "data/siteReviews.json")
    predictions_path: str = os.getenv("PREDICTIONS_PATH", "data/reviews.json")

    # Load both files during startup instead of on the first request.
    preload_data: bool = _env_bool("PRELOAD_DATA")

    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    # ``console`` for human readable lines or ``json`` for one JSON
    # object per line.
    log_format: str = os.getenv("LOG_FORMAT", "console")
    log_file: str = os.getenv("LOG_OUTPUT_PATH", "")

    cors_origins: List[str] = field(
        default_factory=lambda: _env_list("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173")
    )

    # Requests allowed per client IP within ``rate_limit_window`` seconds.
    # A limit of 0 disables rate limiting.
    rate_limit: int = int(os.getenv("RATE_LIMIT", "100"))
    rate_limit_window: int = int(os.getenv("RATE_LIMIT_WINDOW", "60"))

    def resolve_path(self, path: str) -> str:
        """Return ``path`` as an absolute path, relative to the project root."""
        if os.path.isabs(path):
            return path
        return str((BASE_DIR / path).resolve())


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
