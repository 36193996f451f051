"""
Application package initializer.

This package contains the main entrypoint for the catalog API and its
submodules: ``core`` (configuration, logging, database), ``schemas``
(pydantic payloads), ``services`` (identifier counter, record store and
the product operations) and ``api`` (versioned FastAPI routers).
"""

from .main import app  # noqa: F401
