from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from typing import List
import logging

from billing.database import get_db
from billing.services.product_service import (
    ProductService,
    ProductExistsError,
    ProductNotFoundError,
    InsufficientQuantityError
)
from billing.schemas.common import MessageResponse
from billing.schemas.product import (
    ProductCreate,
    ProductUpdate,
    QuantityReduce,
    ProductResponse,
    ProductUpdateResponse
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["Products"])


def _server_error(action: str, detail: str) -> HTTPException:
    logger.exception(f"Error {action}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=detail
    )


@router.post(
    "",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a new product",
    description="Add a product to the catalog. product_id must be unique."
)
def add_product(
    product_data: ProductCreate,
    db: Session = Depends(get_db)
):
    """
    Add a product.

    - **product_id**: Unique product code (required)
    - **name**: Product name (required)
    - **type**: Product category (optional)
    - **price**: Selling price (required)
    - **purchasePrice**: Cost price, defaults to 0 (optional)
    - **quantity**: Initial stock, must be non-negative (required)
    - **rack**: Shelf location (optional)
    """
    service = ProductService(db)

    try:
        service.create(product_data)
    except ProductExistsError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except SQLAlchemyError:
        raise _server_error("adding product", "Failed to add product")

    return {"message": "Product added successfully"}


@router.get(
    "",
    response_model=List[ProductResponse],
    summary="List all products",
    description="Get every product in the catalog."
)
def list_products(db: Session = Depends(get_db)):
    service = ProductService(db)

    try:
        return service.get_all()
    except SQLAlchemyError:
        raise _server_error("fetching products", "Failed to fetch products")


@router.get(
    "/{id}",
    response_model=ProductResponse,
    summary="Get product by ID",
    description="Get a single product by its internal identifier."
)
def get_product(
    id: str,
    db: Session = Depends(get_db)
):
    service = ProductService(db)
    product = service.get_by_id(id)

    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found"
        )

    return product


@router.put(
    "/update/{id}",
    response_model=ProductUpdateResponse,
    summary="Update a product",
    description="Replace a product's editable fields by internal identifier. product_id cannot be changed."
)
def update_product(
    id: str,
    product_data: ProductUpdate,
    db: Session = Depends(get_db)
):
    """
    Update a product.

    quantity, name and price are required. type and rack are replaced
    (omitting them clears them). An omitted purchasePrice keeps its
    stored value.
    """
    service = ProductService(db)

    try:
        product = service.update(id, product_data)
    except SQLAlchemyError:
        raise _server_error("updating product", "Failed to update product")

    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found"
        )

    return {"message": "Product updated successfully", "product": product}


@router.put(
    "/{product_id}",
    response_model=MessageResponse,
    summary="Reduce product quantity",
    description="""
    Take units out of stock after billing, addressed by product_id.

    The check and the decrement run as one conditional UPDATE, so
    concurrent reductions cannot drive the quantity below zero. If
    the stock is too low, the request fails with 400 and nothing changes.
    """
)
def reduce_quantity(
    product_id: str,
    data: QuantityReduce,
    db: Session = Depends(get_db)
):
    service = ProductService(db)

    try:
        service.reduce_quantity(product_id, data.quantity_to_reduce)
    except ProductNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    except InsufficientQuantityError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except SQLAlchemyError:
        raise _server_error("updating quantity", "Failed to update quantity")

    return {"message": "Quantity updated successfully"}


@router.delete(
    "/by-product-id/{product_id}",
    response_model=MessageResponse,
    summary="Delete a product by product_id",
    description="Delete a product addressed by its business key."
)
def delete_product_by_product_id(
    product_id: str,
    db: Session = Depends(get_db)
):
    service = ProductService(db)

    try:
        deleted = service.delete_by_product_id(product_id)
    except SQLAlchemyError:
        raise _server_error("deleting product", "Failed to delete product")

    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found"
        )

    return {"message": "Product removed successfully"}


@router.delete(
    "/{id}",
    response_model=MessageResponse,
    summary="Delete a product",
    description="Delete a product by its internal identifier."
)
def delete_product(
    id: str,
    db: Session = Depends(get_db)
):
    service = ProductService(db)

    try:
        deleted = service.delete(id)
    except SQLAlchemyError:
        raise _server_error("deleting product", "Server error")

    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found"
        )

    return {"message": "Product deleted successfully"}
