# product_service/schemas.py

"""
Pydantic schemas for the Product Service API.
These define the payloads handlers work with, the JSON envelopes they answer
with, and the error bodies; FastAPI turns them into the OpenAPI document.
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# Payload for POST /api/products, built from a body that already passed validation.
class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="Name of the product.")
    price: float = Field(..., gt=0, description="Price of the product. Must be greater than 0.")
    availability: bool = Field(True, description="Whether the product can be sold.")

    @field_validator("name", mode="before")
    @classmethod
    def coerce_name(cls, value):
        # Numbers and booleans are accepted as names; store their text form
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (int, float)):
            return str(value)
        return value


# Payload for PUT /api/products/{id}: every field is replaced.
class ProductUpdate(ProductCreate):
    availability: bool = Field(..., description="New availability of the product.")


class ProductResponse(BaseModel):
    id: int = Field(..., description="The Product ID", examples=[1])
    name: str = Field(..., description="The Product name", examples=["Monitor curvo de 49 pulgadas"])
    price: float = Field(..., description="The Product price", examples=[300])
    availability: bool = Field(..., description="The Product availability", examples=[True])
    created_at: Optional[datetime] = Field(None, description="Timestamp when the product was created.")
    updated_at: Optional[datetime] = Field(None, description="Timestamp when the product was last updated.")

    model_config = ConfigDict(from_attributes=True)


class ProductEnvelope(BaseModel):
    data: ProductResponse


class ProductListEnvelope(BaseModel):
    data: List[ProductResponse]


class MessageEnvelope(BaseModel):
    data: str = Field(..., examples=["Producto Eliminado"])


class NotFoundResponse(BaseModel):
    error: str = Field(..., examples=["Producto no encontrado"])


class FieldError(BaseModel):
    """One failed rule: where the value came from, what it was, and why it was rejected."""

    type: str = "field"
    value: Any = None
    msg: str
    path: str
    location: str

    def to_dict(self) -> dict:
        # Absent values are left out of the body, explicit nulls are kept
        return self.model_dump(exclude_unset=True) | {"type": self.type}


class ValidationErrorResponse(BaseModel):
    errors: List[FieldError]
