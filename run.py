"""Entry point for the Mentor App API.

Starts the FastAPI application with Uvicorn.  Host and port are read
from the ``HOST`` and ``PORT`` environment variables (defaults
``0.0.0.0`` and ``8000``); see ``mentor_app_api/app/core/config.py``
for the remaining settings.

Usage:
    python run.py
"""
import asyncio

from uvicorn import Config, Server

from mentor_app_api.app.core.config import settings
from mentor_app_api.app.main import app


async def main() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
