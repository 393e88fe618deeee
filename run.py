"""Entry point for the Reviews Backend API.

Serves the FastAPI application with uvicorn on the host and port from
the settings.  Uvicorn handles SIGINT/SIGTERM itself and waits up to
``SERVER_SHUTDOWN_TIMEOUT`` seconds for in‑flight requests before
exiting.

Configuration is read from environment variables; see
``reviews_api/app/core/config.py`` for the full list.

Usage:
    python run.py
"""
import logging

from uvicorn import Config, Server

from reviews_api.app.core.config import settings
from reviews_api.app.main import create_app


def main() -> None:
    """Build the app and serve it until a shutdown signal arrives."""
    app = create_app(settings)
    logging.getLogger(__name__).info("Server will listen on %s:%d", settings.host, settings.port)
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
        timeout_graceful_shutdown=settings.shutdown_timeout,
    )
    server = Server(config)
    server.run()


if __name__ == "__main__":
    try:
        main()
    except (KeyboardInterrupt, SystemExit):
        pass
