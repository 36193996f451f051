"""
Pydantic models for product data.

``ProductPayload`` carries the caller-controlled fields used by the
create and update operations.  ``Product`` is the full record as it is
stored and returned: the payload fields plus the identifier,
availability flag and timestamps assigned by the service.  Timestamps
are integer nanoseconds since the Unix epoch.
"""

from typing import Optional

from pydantic import BaseModel, Field


# Identifiers and prices are unsigned 64-bit values in the wire format.
# SQLite stores signed 64-bit integers, so persisted values stop at 2**63 - 1.
MAX_INT64 = 2**63 - 1
MAX_UINT64 = 2**64 - 1


class ProductPayload(BaseModel):
    """Schema for creating or updating a product."""

    name: str = Field(..., json_schema_extra={"example": "Tofu"})
    description: str = Field(..., json_schema_extra={"example": "Firm"})
    price: int = Field(
        ...,
        ge=0,
        le=MAX_INT64,
        description="Price in the smallest currency unit",
        json_schema_extra={"example": 500},
    )
    seller: str = Field(..., json_schema_extra={"example": "Acme"})


class Product(ProductPayload):
    """Schema for a stored product."""

    id: int = Field(..., ge=0, le=MAX_INT64)
    availability: bool = True
    created_at: int
    updated_at: Optional[int] = None

    model_config = {
        "from_attributes": True,
    }
