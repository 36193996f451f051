"""
Audit log endpoint for API v1.

Lists recorded catalog mutations, newest first, optionally filtered by
object id or action.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from vegan_catalog_api.app.api.v1.endpoints.products import get_product_service
from vegan_catalog_api.app.schemas.audit import AuditLogRead
from vegan_catalog_api.app.services.product_service import ProductService

router = APIRouter()


@router.get("/", response_model=List[AuditLogRead])
async def list_audit_logs(
    object_id: Optional[int] = Query(None, ge=0),
    action: Optional[str] = Query(None),
    limit: int = Query(100, ge=1, le=1000),
    service: ProductService = Depends(get_product_service),
) -> List[AuditLogRead]:
    """Return audit records for catalog objects."""
    logs = await service.audit.list_logs(
        object_type="product",
        object_id=object_id,
        action=action,
        limit=limit,
    )
    return [AuditLogRead(**log) for log in logs]
