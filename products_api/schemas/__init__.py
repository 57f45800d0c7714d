from products_api.schemas.product import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    ProductDetail,
    ProductListEnvelope,
    ProductEnvelope,
    ProductDetailEnvelope,
    MessageEnvelope,
    ErrorResponse,
    FieldError,
    ValidationErrorResponse,
)

__all__ = [
    "ProductCreate",
    "ProductUpdate",
    "ProductResponse",
    "ProductDetail",
    "ProductListEnvelope",
    "ProductEnvelope",
    "ProductDetailEnvelope",
    "MessageEnvelope",
    "ErrorResponse",
    "FieldError",
    "ValidationErrorResponse",
]
