"""
Business logic for the product catalog.

``ProductService`` is the single owner of the catalog state: one
``IdCounter`` and one ``ProductStore`` over the same SQLite file.  It
is created once per process (see ``main.create_app``), applies pending
migrations on construction and then serves every request.

Operations addressing a missing identifier raise
``ProductNotFoundError``; the API layer turns it into a 404.  Every
successful mutation is recorded through ``AuditService``.
"""

import logging
import time
from typing import Callable, Optional

from vegan_catalog_api.app.core.db import init_db
from vegan_catalog_api.app.schemas.product import Product, ProductPayload
from vegan_catalog_api.app.services.audit_service import AuditService
from vegan_catalog_api.app.services.counter_service import IdCounter
from vegan_catalog_api.app.services.product_store import DEFAULT_MAX_RECORD_SIZE, ProductStore

logger = logging.getLogger(__name__)


class ProductNotFoundError(ValueError):
    """Raised when an operation addresses a product id that is not stored."""

    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(f"Product with ID {product_id} not found")


class ProductService:
    """Create, read, update, delete and toggle products."""

    def __init__(
        self,
        db_path: str,
        max_record_size: int = DEFAULT_MAX_RECORD_SIZE,
        clock: Optional[Callable[[], int]] = None,
    ):
        """Open the catalog stored at ``db_path``.

        Args:
            db_path: Path to the SQLite database file.  Created if missing.
            max_record_size: Size ceiling in bytes for one serialized product.
            clock: Returns the current time in nanoseconds since the epoch.
                Defaults to ``time.time_ns``.
        """
        self._clock = clock or time.time_ns
        init_db(db_path)
        self.counter = IdCounter(db_path)
        self.store = ProductStore(db_path, max_record_size)
        self.audit = AuditService(db_path)

    async def create_product(self, payload: ProductPayload) -> Product:
        """Allocate an identifier, store a new product and return it."""
        product_id = self.counter.next_id()
        product = Product(
            id=product_id,
            name=payload.name,
            description=payload.description,
            price=payload.price,
            seller=payload.seller,
            availability=True,
            created_at=self._clock(),
            updated_at=None,
        )
        self.store.insert(product_id, product)
        logger.info("Created product %s (%s)", product_id, payload.name)
        await self._audit("create", product_id, {"name": payload.name, "seller": payload.seller})
        return product

    async def get_product(self, product_id: int) -> Product:
        """Return the product stored under ``product_id``."""
        product = self.store.get(product_id)
        if product is None:
            logger.warning("Product %s not found", product_id)
            raise ProductNotFoundError(product_id)
        logger.debug("Fetched product %s", product_id)
        return product

    async def update_product(self, product_id: int, payload: ProductPayload) -> Product:
        """Overwrite name, description, price and seller of a product."""
        product = self.store.update_in_place(product_id, payload, self._clock())
        if product is None:
            logger.warning("Cannot update product %s: not found", product_id)
            raise ProductNotFoundError(product_id)
        logger.info("Updated product %s", product_id)
        await self._audit("update", product_id, payload.model_dump())
        return product

    async def delete_product(self, product_id: int) -> Product:
        """Remove a product and return its last state."""
        product = self.store.remove(product_id)
        if product is None:
            logger.warning("Cannot delete product %s: not found", product_id)
            raise ProductNotFoundError(product_id)
        logger.info("Deleted product %s", product_id)
        await self._audit("delete", product_id, None)
        return product

    async def toggle_availability(self, product_id: int) -> Product:
        """Invert the availability flag of a product."""
        product = self.store.toggle(product_id, self._clock())
        if product is None:
            logger.warning("Cannot toggle product %s: not found", product_id)
            raise ProductNotFoundError(product_id)
        logger.info("Product %s availability set to %s", product_id, product.availability)
        await self._audit("toggle", product_id, {"availability": product.availability})
        return product

    async def _audit(self, action: str, product_id: int, details: Optional[dict]) -> None:
        # Audit failures must not undo or hide a completed mutation.
        try:
            await self.audit.log(
                action=action,
                object_type="product",
                object_id=product_id,
                details=details,
            )
        except Exception:
            logger.warning("Failed to write audit log for %s of product %s", action, product_id, exc_info=True)
