"""
Main entrypoint for the Mentor App API.

This module assembles the FastAPI application, sets up logging,
registers the error translation handlers and includes versioned
routers.  The ``create_app`` function builds and configures the app,
which is then instantiated at module import time as ``app``, e.g.::

    uvicorn mentor_app_api.app.main:app --reload
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.db import init_db
from .core.errors import register_exception_handlers
from .core.logging_config import daily_logfile, setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    # Creates the database file if it does not exist and brings the
    # schema up to date before the first request is served.
    init_db()
    yield


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Initialise logging before anything else so that imports below can
    # safely log messages.
    logfile = daily_logfile(settings.log_dir) if settings.log_dir else None
    setup_logging(settings.log_level, logfile)

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    register_exception_handlers(app)

    # Mount versioned routes under /v1.  Additional versions can be
    # added later by including their respective routers with a
    # different prefix.
    app.include_router(v1_router, prefix=settings.api_prefix)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
