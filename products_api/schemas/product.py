from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from typing import Any, List, Optional
from datetime import datetime


class ProductCreate(BaseModel):
    """Request body accepted by POST /api/products (documentation only)."""
    name: str = Field(..., description="The product name", examples=["Curved Monitor 49"])
    price: float = Field(..., gt=0, description="The product price", examples=[399])
    availability: bool = Field(True, description="The product availability, true when omitted", examples=[True])


class ProductUpdate(ProductCreate):
    """Request body accepted by PUT /api/products/{id} (documentation only)."""
    availability: bool = Field(..., description="The product availability", examples=[True])


class ProductResponse(BaseModel):
    id: int = Field(..., description="The product ID", examples=[1])
    name: str = Field(..., description="The product name", examples=["Curved monitor"])
    price: float = Field(..., description="The product price", examples=[300])
    availability: bool = Field(..., description="The product availability", examples=[True])

    model_config = ConfigDict(from_attributes=True)


class ProductDetail(ProductResponse):
    created_at: Optional[datetime] = Field(
        None,
        validation_alias=AliasChoices("created_at", "createdAt"),
        serialization_alias="createdAt",
    )
    updated_at: Optional[datetime] = Field(
        None,
        validation_alias=AliasChoices("updated_at", "updatedAt"),
        serialization_alias="updatedAt",
    )


class ProductListEnvelope(BaseModel):
    data: List[ProductResponse]


class ProductEnvelope(BaseModel):
    data: ProductResponse


class ProductDetailEnvelope(BaseModel):
    data: ProductDetail


class MessageEnvelope(BaseModel):
    data: str


class ErrorResponse(BaseModel):
    error: str


class FieldError(BaseModel):
    type: str = "field"
    value: Any = None
    msg: str
    path: Optional[str] = None
    location: Optional[str] = None


class ValidationErrorResponse(BaseModel):
    errors: List[FieldError]
