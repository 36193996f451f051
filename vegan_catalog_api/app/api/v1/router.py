"""
Top‑level router for version 1 of the API.

This router aggregates the resource routers under a unified prefix.
When new resources are introduced, update this file to include their
routers.
"""

from fastapi import APIRouter

from .endpoints import audit, products

router = APIRouter()

router.include_router(products.router, prefix="/products", tags=["products"])
router.include_router(audit.router, prefix="/audit", tags=["audit"])
