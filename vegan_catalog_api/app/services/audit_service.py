"""
Audit service for recording and querying catalog mutations.

Every create, update, delete and availability toggle is written to the
``audit_logs`` table together with the affected product id and a small
JSON blob describing the change.  Records are read back newest first.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from vegan_catalog_api.app.core.db import get_cursor


class AuditService:
    """Write and retrieve audit log entries."""

    def __init__(self, db_path: str):
        self._db_path = db_path

    async def log(
        self,
        action: str,
        object_type: str,
        object_id: Optional[int] = None,
        details: Optional[dict] = None,
    ) -> None:
        """Insert a new audit record.

        Parameters
        ----------
        action : str
            Short description of the action (``"create"``, ``"update"``,
            ``"delete"`` or ``"toggle"``).
        object_type : str
            Type of object affected, ``"product"`` for the catalog.
        object_id : Optional[int]
            Identifier of the affected object, if applicable.
        details : Optional[dict]
            Additional structured data about the action, stored as JSON.
        """
        details_json = json.dumps(details) if details else None
        with get_cursor(self._db_path) as cursor:
            cursor.execute(
                """
                INSERT INTO audit_logs (action, object_type, object_id, details)
                VALUES (?, ?, ?, ?)
                """,
                (action, object_type, object_id, details_json),
            )

    async def list_logs(
        self,
        object_type: Optional[str] = None,
        object_id: Optional[int] = None,
        action: Optional[str] = None,
        limit: int = 100,
    ) -> List[Dict[str, Any]]:
        """Retrieve audit records, newest first, with optional filters."""
        where_clauses: List[str] = []
        params: List[Any] = []
        if object_type:
            where_clauses.append("object_type = ?")
            params.append(object_type)
        if object_id is not None:
            where_clauses.append("object_id = ?")
            params.append(object_id)
        if action:
            where_clauses.append("action = ?")
            params.append(action)
        query = "SELECT id, action, object_type, object_id, timestamp, details FROM audit_logs"
        if where_clauses:
            query += " WHERE " + " AND ".join(where_clauses)
        # ``timestamp`` has one-second resolution; ``id`` breaks ties.
        query += " ORDER BY timestamp DESC, id DESC LIMIT ?"
        params.append(limit)
        with get_cursor(self._db_path) as cursor:
            rows = cursor.execute(query, tuple(params)).fetchall()
        logs = []
        for row in rows:
            details_data = None
            if row["details"]:
                try:
                    details_data = json.loads(row["details"])
                except json.JSONDecodeError:
                    details_data = row["details"]
            logs.append(
                {
                    "id": row["id"],
                    "action": row["action"],
                    "object_type": row["object_type"],
                    "object_id": row["object_id"],
                    "timestamp": row["timestamp"],
                    "details": details_data,
                }
            )
        return logs
