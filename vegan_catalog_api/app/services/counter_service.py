"""
Persistent identifier counter.

The counter is a single row of the ``id_counter`` table.  Each call to
``IdCounter.next_id`` reads the stored value, writes the incremented
value and commits before handing the old value back, so an identifier
is never issued twice, even if the process dies right after the call
or the product it was meant for is later deleted.
"""

import logging
import threading

from vegan_catalog_api.app.core.db import get_cursor, transaction

logger = logging.getLogger(__name__)

# SQLite INTEGER ceiling; the stored value must stay representable after
# the increment, so the last identifier issued is MAX_ID - 1.
MAX_ID = 2**63 - 1


class CounterOverflowError(RuntimeError):
    """Raised when the counter has no identifiers left to issue."""


class IdCounter:
    """Monotonic source of product identifiers backed by SQLite."""

    def __init__(self, db_path: str):
        self._db_path = db_path
        self._lock = threading.Lock()

    def next_id(self) -> int:
        """Reserve and return the next identifier.

        The increment is committed before the identifier is returned.
        """
        with self._lock, transaction(self._db_path) as cursor:
            row = cursor.execute("SELECT value FROM id_counter WHERE id = 0").fetchone()
            current = row["value"]
            if current >= MAX_ID:
                raise CounterOverflowError(f"Identifier counter exhausted at {current}")
            cursor.execute("UPDATE id_counter SET value = ? WHERE id = 0", (current + 1,))
        logger.debug("Issued product id %s", current)
        return current

    def current(self) -> int:
        """Return the identifier the next ``next_id`` call will issue."""
        with get_cursor(self._db_path) as cursor:
            row = cursor.execute("SELECT value FROM id_counter WHERE id = 0").fetchone()
        return row["value"]
