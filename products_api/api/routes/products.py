from typing import Annotated

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession
from products_api.database import get_db
from products_api.errors import ProductNotFoundError
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
    ValidationErrorResponse,
)
from products_api.services.product_service import ProductService
from products_api.validation import (
    ValidatedRequest,
    body,
    greater_than,
    is_boolean,
    is_int,
    is_numeric,
    not_empty,
    param,
    validate_request,
)
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/products", tags=["Products"])

ID_RULES = (
    param("id", is_int, "Invalid ID"),
)

CREATE_RULES = (
    body("name", not_empty, "You must enter a valid name"),
    body("price", is_numeric, "You must enter a valid price"),
    body("price", not_empty, "You must enter price"),
    body("price", greater_than(0), "You must enter a valid price"),
)

UPDATE_RULES = ID_RULES + CREATE_RULES + (
    body("availability", is_boolean, "Value not valid"),
)

ProductIdPath = Annotated[str, Path(description="The ID of the product", examples=["1"])]

INVALID_INPUT = {"model": ValidationErrorResponse, "description": "Bad request - Invalid input data or Invalid ID"}
NOT_FOUND = {"model": ErrorResponse, "description": "Not found - Item does not exist"}


def _json_body(schema) -> dict:
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": schema.model_json_schema()}},
        }
    }


@router.get(
    "",
    response_model=ProductListEnvelope,
    summary="Get a list of products",
    description="Return a list of products",
)
async def list_products(db: AsyncSession = Depends(get_db)):
    products = await ProductService.list_products(db)
    return ProductListEnvelope(
        data=[ProductResponse.model_validate(p) for p in products]
    )


@router.get(
    "/{id}",
    response_model=ProductEnvelope,
    summary="Get a product by ID",
    description="Return a product based on its unique ID",
    responses={400: {"model": ErrorResponse, "description": "Bad Request - Invalid ID or product does not exist"}},
)
async def get_product(
    id: ProductIdPath,
    validated: ValidatedRequest = Depends(validate_request(*ID_RULES)),
    db: AsyncSession = Depends(get_db)
):
    product = await ProductService.get_product(db, int(validated.params["id"]))
    if not product:
        # Reads report a missing product as a bad request, writes as 404.
        raise ProductNotFoundError(status.HTTP_400_BAD_REQUEST)
    return ProductEnvelope(data=ProductResponse.model_validate(product))


@router.post(
    "",
    response_model=ProductDetailEnvelope,
    status_code=201,
    summary="Creates a new product",
    description="Returns a new record in the database",
    responses={400: INVALID_INPUT},
    openapi_extra=_json_body(ProductCreate),
)
async def create_product(
    validated: ValidatedRequest = Depends(validate_request(*CREATE_RULES)),
    db: AsyncSession = Depends(get_db)
):
    product = await ProductService.create_product(db, validated.body)
    logger.info("Created product id=%s", product.id)
    return ProductDetailEnvelope(data=ProductDetail.model_validate(product))


@router.put(
    "/{id}",
    response_model=ProductDetailEnvelope,
    summary="Updates a product with user input",
    description="Returns the updated product",
    responses={400: INVALID_INPUT, 404: NOT_FOUND},
    openapi_extra=_json_body(ProductUpdate),
)
async def update_product(
    id: ProductIdPath,
    validated: ValidatedRequest = Depends(validate_request(*UPDATE_RULES)),
    db: AsyncSession = Depends(get_db)
):
    product = await ProductService.update_product(
        db, int(validated.params["id"]), validated.body
    )
    if not product:
        raise ProductNotFoundError(status.HTTP_404_NOT_FOUND)
    logger.info("Updated product id=%s", product.id)
    return ProductDetailEnvelope(data=ProductDetail.model_validate(product))


@router.patch(
    "/{id}",
    response_model=ProductDetailEnvelope,
    summary="Updates product availability",
    description="Flips the availability of a product and returns it",
    responses={400: INVALID_INPUT, 404: NOT_FOUND},
)
async def update_availability(
    id: ProductIdPath,
    validated: ValidatedRequest = Depends(validate_request(*ID_RULES)),
    db: AsyncSession = Depends(get_db)
):
    product = await ProductService.toggle_availability(db, int(validated.params["id"]))
    if not product:
        raise ProductNotFoundError(status.HTTP_404_NOT_FOUND)
    return ProductDetailEnvelope(data=ProductDetail.model_validate(product))


@router.delete(
    "/{id}",
    response_model=MessageEnvelope,
    summary="Delete products",
    description="Delete a product from the database",
    responses={400: INVALID_INPUT, 404: NOT_FOUND},
)
async def delete_product(
    id: ProductIdPath,
    validated: ValidatedRequest = Depends(validate_request(*ID_RULES)),
    db: AsyncSession = Depends(get_db)
):
    product_id = int(validated.params["id"])
    deleted = await ProductService.delete_product(db, product_id)
    if not deleted:
        raise ProductNotFoundError(status.HTTP_404_NOT_FOUND)
    logger.info("Deleted product id=%s", product_id)
    return MessageEnvelope(data="The product has been eliminated")
