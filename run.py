"""Entry point for the Event Planning API.

This script launches the FastAPI application with Uvicorn.  It is
intended to be executed from the project root, for example under
Docker, where you only specify a single Python file to run.

Configuration such as DATABASE_URL, SECRET_KEY and LOG_LEVEL is read
from environment variables; see ``event_planning_api/app/core/config.py``
for the full list.

Usage:
    python run.py
"""
import asyncio

from uvicorn import Config, Server

from event_planning_api.app.core.config import settings
from event_planning_api.app.main import app


async def run_api() -> None:
    """Serve the API until interrupted.

    Host and port are read from the ``API_HOST`` and ``API_PORT``
    environment variables.  Defaults are ``0.0.0.0`` and ``8000``.
    """
    config = Config(
        app=app,
        host=settings.api_host,
        port=settings.api_port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(run_api())
    except (KeyboardInterrupt, SystemExit):
        pass
