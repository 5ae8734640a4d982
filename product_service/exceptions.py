# product_service/exceptions.py

"""
Errors the API turns into JSON responses, and the handlers that do it.
"""
from typing import List

from fastapi import Request, status
from fastapi.responses import JSONResponse

from .schemas import FieldError

PRODUCT_NOT_FOUND = "Producto no encontrado"


class ProductNotFoundError(Exception):
    """Raised when no product row matches the requested id."""

    def __init__(self, product_id: int):
        super().__init__(f"Product not found: {product_id}")
        self.product_id = product_id


class RequestValidationFailed(Exception):
    """Raised by the validation gate when at least one rule failed."""

    def __init__(self, errors: List[FieldError]):
        super().__init__(f"{len(errors)} validation error(s)")
        self.errors = errors


async def product_not_found_handler(request: Request, exc: ProductNotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"error": PRODUCT_NOT_FOUND},
    )


async def validation_failed_handler(request: Request, exc: RequestValidationFailed) -> JSONResponse:
    """
    Answers 400 with every collected error, in the order the rules ran.
    """
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"errors": [error.to_dict() for error in exc.errors]},
    )
