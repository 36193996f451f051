"""
Durable map from product identifier to product record.

``ProductStore`` wraps the ``products`` table.  Keys are ordered by
identifier ascending (the table's primary key).  Every method opens its
own connection; methods that read and then write do so inside one
immediate transaction while holding the store lock, so a record is
never observed half-updated.

Callers always receive fresh ``Product`` instances built from the
stored row.  Mutating a returned object does not affect the store.

Each record is validated against a size ceiling before it is written:
its JSON serialization must fit in ``max_record_size`` bytes.
Oversized records raise ``RecordTooLargeError`` and nothing is written.
"""

import logging
import sqlite3
import threading
from typing import Optional

from vegan_catalog_api.app.core.db import get_cursor, transaction
from vegan_catalog_api.app.schemas.product import MAX_INT64, Product, ProductPayload

logger = logging.getLogger(__name__)

DEFAULT_MAX_RECORD_SIZE = 2048

_SELECT_SQL = """
SELECT id, name, description, price, seller, availability, created_at, updated_at
FROM products WHERE id = ?
"""


class RecordTooLargeError(ValueError):
    """Raised when a serialized product exceeds the record size ceiling."""

    def __init__(self, product_id: int, size: int, limit: int):
        self.product_id = product_id
        self.size = size
        self.limit = limit
        super().__init__(
            f"Product with ID {product_id} is {size} bytes when serialized; limit is {limit}"
        )


class ProductStore:
    """SQLite-backed ordered map of ``id -> Product``."""

    def __init__(self, db_path: str, max_record_size: int = DEFAULT_MAX_RECORD_SIZE):
        self._db_path = db_path
        self._max_record_size = max_record_size
        self._lock = threading.Lock()

    def get(self, product_id: int) -> Optional[Product]:
        """Return a copy of the stored product, or ``None`` if absent."""
        if not self._storable(product_id):
            return None
        with get_cursor(self._db_path) as cursor:
            row = cursor.execute(_SELECT_SQL, (product_id,)).fetchone()
        if not row:
            return None
        return self._row_to_product(row)

    def contains(self, product_id: int) -> bool:
        if not self._storable(product_id):
            return False
        with get_cursor(self._db_path) as cursor:
            row = cursor.execute("SELECT 1 FROM products WHERE id = ?", (product_id,)).fetchone()
        return row is not None

    def __len__(self) -> int:
        with get_cursor(self._db_path) as cursor:
            row = cursor.execute("SELECT COUNT(*) AS total FROM products").fetchone()
        return row["total"]

    def insert(self, product_id: int, product: Product) -> None:
        """Insert ``product`` under ``product_id``, overwriting any previous value."""
        record = product.model_copy(update={"id": product_id})
        self.check_size(record)
        with self._lock, transaction(self._db_path) as cursor:
            cursor.execute(
                """
                INSERT OR REPLACE INTO products
                    (id, name, description, price, seller, availability, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    record.id,
                    record.name,
                    record.description,
                    record.price,
                    record.seller,
                    int(record.availability),
                    record.created_at,
                    record.updated_at,
                ),
            )
        logger.debug("Stored product %s", product_id)

    def update_in_place(
        self, product_id: int, payload: ProductPayload, updated_at: int
    ) -> Optional[Product]:
        """Overwrite the mutable fields of an existing product.

        Returns the new state, or ``None`` without touching the store if
        ``product_id`` is absent.
        """
        if not self._storable(product_id):
            return None
        with self._lock, transaction(self._db_path) as cursor:
            row = cursor.execute(_SELECT_SQL, (product_id,)).fetchone()
            if not row:
                return None
            current = self._row_to_product(row)
            updated = current.model_copy(
                update={
                    "name": payload.name,
                    "description": payload.description,
                    "price": payload.price,
                    "seller": payload.seller,
                    "updated_at": self._next_stamp(current, updated_at),
                }
            )
            self.check_size(updated)
            cursor.execute(
                """
                UPDATE products
                SET name = ?, description = ?, price = ?, seller = ?, updated_at = ?
                WHERE id = ?
                """,
                (
                    updated.name,
                    updated.description,
                    updated.price,
                    updated.seller,
                    updated.updated_at,
                    product_id,
                ),
            )
        return updated

    def toggle(self, product_id: int, updated_at: int) -> Optional[Product]:
        """Flip the availability flag of an existing product.

        Returns the new state, or ``None`` if ``product_id`` is absent.
        """
        if not self._storable(product_id):
            return None
        with self._lock, transaction(self._db_path) as cursor:
            row = cursor.execute(_SELECT_SQL, (product_id,)).fetchone()
            if not row:
                return None
            current = self._row_to_product(row)
            updated = current.model_copy(
                update={
                    "availability": not current.availability,
                    "updated_at": self._next_stamp(current, updated_at),
                }
            )
            self.check_size(updated)
            cursor.execute(
                "UPDATE products SET availability = ?, updated_at = ? WHERE id = ?",
                (int(updated.availability), updated.updated_at, product_id),
            )
        return updated

    def remove(self, product_id: int) -> Optional[Product]:
        """Delete a product and return its last state, or ``None`` if absent."""
        if not self._storable(product_id):
            return None
        with self._lock, transaction(self._db_path) as cursor:
            row = cursor.execute(_SELECT_SQL, (product_id,)).fetchone()
            if not row:
                return None
            cursor.execute("DELETE FROM products WHERE id = ?", (product_id,))
        return self._row_to_product(row)

    def check_size(self, product: Product) -> int:
        """Return the serialized size of ``product`` or raise ``RecordTooLargeError``."""
        size = len(product.model_dump_json().encode("utf-8"))
        if size > self._max_record_size:
            raise RecordTooLargeError(product.id, size, self._max_record_size)
        return size

    @staticmethod
    def _storable(product_id: int) -> bool:
        # Identifiers above the SQLite INTEGER range can never have been stored.
        return 0 <= product_id <= MAX_INT64

    @staticmethod
    def _next_stamp(current: Product, requested: int) -> int:
        # Each mutation stamps strictly later than the previous one, even if the
        # wall clock stalls or moves backwards.
        if current.updated_at is not None:
            return max(requested, current.updated_at + 1)
        return max(requested, current.created_at)

    @staticmethod
    def _row_to_product(row: sqlite3.Row) -> Product:
        """Convert a database row to a ``Product`` instance."""
        return Product(
            id=row["id"],
            name=row["name"],
            description=row["description"],
            price=row["price"],
            seller=row["seller"],
            availability=bool(row["availability"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
