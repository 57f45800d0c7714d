import logging
from typing import Any, Dict, List

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

PRODUCT_NOT_FOUND = "Product does not exist"


class RequestRejectedError(Exception):
    """Raised by the validation gate when any rule failed."""

    def __init__(self, errors: List[Dict[str, Any]]):
        super().__init__(f"{len(errors)} validation error(s)")
        self.errors = errors


class ProductNotFoundError(Exception):
    """Lookup by id came back empty.

    The status differs per operation: reads answer 400, writes answer 404.
    """

    def __init__(self, status_code: int = status.HTTP_404_NOT_FOUND):
        super().__init__(PRODUCT_NOT_FOUND)
        self.status_code = status_code


async def request_rejected_handler(request: Request, exc: RequestRejectedError):
    logger.warning(
        "Validation failed on %s %s: %s",
        request.method,
        request.url.path,
        [e["msg"] for e in exc.errors],
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder({"errors": exc.errors}),
    )


async def product_not_found_handler(request: Request, exc: ProductNotFoundError):
    logger.info("Product not found on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": PRODUCT_NOT_FOUND},
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Render framework-level validation errors in the same envelope as the gate."""
    errors = [
        {
            "type": "field",
            "msg": e["msg"],
            "path": ".".join(str(loc) for loc in e["loc"][1:]),
            "location": str(e["loc"][0]) if e["loc"] else None,
        }
        for e in exc.errors()
    ]
    logger.warning("Validation failed on %s %s: %s", request.method, request.url.path, errors)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"errors": errors},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestRejectedError, request_rejected_handler)
    app.add_exception_handler(ProductNotFoundError, product_not_found_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
