"""
Main entrypoint for the Vegan Catalog API.

This module assembles the FastAPI application, sets up logging and
includes versioned routers.  The ``create_app`` function builds and
configures the app, which is then instantiated at module import time
as ``app``.  Run it with uvicorn, e.g.::

    uvicorn vegan_catalog_api.app.main:app --reload

The application title, version, database location and record size
ceiling come from ``Settings`` in ``core.config``.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI

from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.db import get_database_path
from .core.logging_config import setup_logging
from .services.product_service import ProductService


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Configures logging and mounts the v1 routes under ``/api/v1``.  The
    catalog database is opened (and pending migrations applied) when
    the application starts.

    Parameters
    ----------
    settings : Optional[Settings]
        Settings to use instead of the module-level instance read from
        the environment.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings

    # Initialise logging before anything else so that the catalog can
    # log its migrations.
    setup_logging(
        settings.log_level,
        settings.log_file or None,
        overrides=None if settings.debug else {"uvicorn.access": "WARNING"},
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        db_path = get_database_path(settings.database_url)
        app.state.product_service = ProductService(db_path, max_record_size=settings.max_record_size)
        logging.getLogger(__name__).info("Catalog database ready at %s", db_path)
        yield

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.include_router(v1_router, prefix="/api/v1")

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
