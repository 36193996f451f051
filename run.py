"""Entry point for serving the Vegan Catalog API.

Launches the FastAPI application with uvicorn.  Host and port are read
from the ``API_HOST`` and ``API_PORT`` environment variables; all other
configuration (database path, log level, record size ceiling) is read
by ``vegan_catalog_api.app.core.config``.

Usage:
    python run.py
"""
import asyncio
import logging
import os

from uvicorn import Config, Server

from vegan_catalog_api.app.main import app


async def run_api() -> None:
    """Start the catalog API using Uvicorn.

    Defaults are ``0.0.0.0`` and ``8000``.
    """
    host = os.getenv("API_HOST", "0.0.0.0")
    port = int(os.getenv("API_PORT", "8000"))
    config = Config(app=app, host=host, port=port, reload=False, log_level="info")
    server = Server(config)
    await server.serve()


def main() -> None:
    try:
        asyncio.run(run_api())
    except (KeyboardInterrupt, SystemExit):
        logging.getLogger(__name__).info("Catalog API stopped")


if __name__ == "__main__":
    main()
