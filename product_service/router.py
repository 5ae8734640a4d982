# product_service/router.py

"""
CRUD endpoints for products, mounted under /api/products.

Each route runs its rule list through the validation gate first; handlers then
perform a single database operation and wrap the result in a `data` envelope.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from .db import get_db
from .exceptions import ProductNotFoundError
from .models import ID_MAX, ID_MIN, Product
from .schemas import (
    MessageEnvelope,
    NotFoundResponse,
    ProductCreate,
    ProductEnvelope,
    ProductListEnvelope,
    ProductUpdate,
    ValidationErrorResponse,
)
from .validation import (
    AVAILABILITY_RULES,
    ID_RULES,
    PRODUCT_RULES,
    CheckedRequest,
    build_payload,
    validate_request,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Products"])

LIST_LIMIT = 10

# The body and the id are read by the validation gate, so they are described
# to OpenAPI by hand instead of through typed parameters.
_ID_PARAMETER = {
    "in": "path",
    "name": "id",
    "description": "The ID of the product",
    "required": True,
    "schema": {"type": "integer"},
}


def _json_body(schema):
    return {
        "required": True,
        "content": {"application/json": {"schema": schema.model_json_schema()}},
    }


_BAD_REQUEST = {400: {"model": ValidationErrorResponse, "description": "Invalid ID or input data"}}
_NOT_FOUND = {404: {"model": NotFoundResponse, "description": "Product Not Found"}}


def _find_product(db: Session, product_id: int) -> Product:
    # Ids the column cannot hold can't match a row
    if not ID_MIN <= product_id <= ID_MAX:
        logger.warning(f"Product ID {product_id} is out of range.")
        raise ProductNotFoundError(product_id)
    product = db.get(Product, product_id)
    if product is None:
        logger.warning(f"Product with ID: {product_id} not found.")
        raise ProductNotFoundError(product_id)
    return product


def _commit(db: Session, product: Product, action: str):
    try:
        db.commit()
        db.refresh(product)
    except Exception as e:
        db.rollback()
        logger.error(f"Error trying to {action} product: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Could not {action} product.",
        )


@router.get(
    "",
    response_model=ProductListEnvelope,
    summary="Get a list of products",
    description="Return the 10 most recent products, newest first.",
)
@router.get("/", response_model=ProductListEnvelope, include_in_schema=False)
def list_products(db: Session = Depends(get_db)):
    """
    Retrieves the latest products.

    - Returns at most 10 products, ordered by `id` descending.
    - Always answers 200 with `{"data": [...]}`, possibly empty.
    """
    products = db.query(Product).order_by(Product.id.desc()).limit(LIST_LIMIT).all()
    logger.info(f"Retrieved {len(products)} products.")
    return {"data": products}


@router.get(
    "/{id}",
    response_model=ProductEnvelope,
    summary="Get a product by ID",
    description="Return a product based on its unique ID.",
    responses={**_BAD_REQUEST, **_NOT_FOUND},
    openapi_extra={"parameters": [_ID_PARAMETER]},
)
def get_product(
    checked: CheckedRequest = Depends(validate_request(*ID_RULES)),
    db: Session = Depends(get_db),
):
    """
    Retrieves a single product by its ID.

    - Answers 400 when the id is not an integer.
    - Answers 404 with `{"error": ...}` if the product does not exist.
    """
    product = _find_product(db, checked.id)
    logger.info(f"Product '{product.name}' (ID: {product.id}) retrieved.")
    return {"data": product}


@router.post(
    "",
    response_model=ProductEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new product",
    description="Create a new record in the database; availability starts as true.",
    responses=_BAD_REQUEST,
    openapi_extra={"requestBody": _json_body(ProductCreate)},
)
@router.post(
    "/",
    response_model=ProductEnvelope,
    status_code=status.HTTP_201_CREATED,
    include_in_schema=False,
)
def create_product(
    checked: CheckedRequest = Depends(validate_request(*PRODUCT_RULES)),
    db: Session = Depends(get_db),
):
    """
    Creates a new product.

    - Validates `name` and `price`, reporting every failed rule at once.
    - `availability` defaults to true; any `id` in the body is ignored.
    - Returns 201 with the stored product, including its generated `id`.
    """
    payload = build_payload(ProductCreate, checked.body)
    logger.info(f"Creating product: {payload.name}")
    product = Product(**payload.model_dump())
    db.add(product)
    _commit(db, product, "create")
    logger.info(f"Product '{product.name}' (ID: {product.id}) created successfully.")
    return {"data": product}


@router.put(
    "/{id}",
    response_model=ProductEnvelope,
    summary="Update a product with user input",
    description="Replace the name, price and availability of a product.",
    responses={**_BAD_REQUEST, **_NOT_FOUND},
    openapi_extra={
        "parameters": [_ID_PARAMETER],
        "requestBody": _json_body(ProductUpdate),
    },
)
def update_product(
    checked: CheckedRequest = Depends(
        validate_request(*ID_RULES, *PRODUCT_RULES, *AVAILABILITY_RULES)
    ),
    db: Session = Depends(get_db),
):
    """
    Replaces a product's name, price and availability.

    - All three fields are required; the `id` never changes.
    - Validation errors (400) are reported before the lookup (404).
    """
    payload = build_payload(ProductUpdate, checked.body)
    product = _find_product(db, checked.id)
    for field, value in payload.model_dump().items():
        setattr(product, field, value)
    _commit(db, product, "update")
    logger.info(f"Product '{product.name}' (ID: {product.id}) updated successfully.")
    return {"data": product}


@router.patch(
    "/{id}",
    response_model=ProductEnvelope,
    summary="Update Product availability",
    description="Toggle the availability of a product and return it.",
    responses={**_BAD_REQUEST, **_NOT_FOUND},
    openapi_extra={"parameters": [_ID_PARAMETER]},
)
def update_availability(
    checked: CheckedRequest = Depends(validate_request(*ID_RULES)),
    db: Session = Depends(get_db),
):
    """
    Flips the availability of a product.

    - Each call toggles the stored value, so two calls restore it.
    """
    product = _find_product(db, checked.id)
    product.availability = not product.availability
    _commit(db, product, "update")
    logger.info(f"Product (ID: {product.id}) availability set to {product.availability}.")
    return {"data": product}


@router.delete(
    "/{id}",
    response_model=MessageEnvelope,
    summary="Delete a product by a given ID",
    description="Remove the product permanently and return a confirmation message.",
    responses={**_BAD_REQUEST, **_NOT_FOUND},
    openapi_extra={"parameters": [_ID_PARAMETER]},
)
def delete_product(
    checked: CheckedRequest = Depends(validate_request(*ID_RULES)),
    db: Session = Depends(get_db),
):
    """
    Deletes a product permanently.

    - Returns `{"data": "Producto Eliminado"}` on success.
    - Raises a 404 if the product does not exist.
    """
    product = _find_product(db, checked.id)
    try:
        db.delete(product)
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"Error deleting product {checked.id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred while deleting the product.",
        )
    logger.info(f"Product (ID: {checked.id}) deleted successfully.")
    return {"data": "Producto Eliminado"}
