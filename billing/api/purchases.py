from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from typing import List
import logging

from billing.database import get_db
from billing.services.purchase_service import PurchaseService
from billing.schemas.common import MessageResponse
from billing.schemas.purchase import PurchaseCreate, PurchaseResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/purchases", tags=["Purchases"])


@router.post(
    "",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Save a purchase",
    description="""
    Record a completed bill.

    Line items are stored as an opaque snapshot. Stock is **not** reduced
    here: call `PUT /api/products/{product_id}` for each billed item.
    """
)
def save_purchase(
    purchase_data: PurchaseCreate,
    db: Session = Depends(get_db)
):
    service = PurchaseService(db)

    try:
        service.create(purchase_data)
    except SQLAlchemyError:
        logger.exception("Error saving purchase")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save purchase"
        )

    return {"message": "Purchase saved successfully"}


@router.get(
    "",
    response_model=List[PurchaseResponse],
    summary="List all purchases",
    description="Get the full purchase history."
)
def list_purchases(db: Session = Depends(get_db)):
    service = PurchaseService(db)

    try:
        return service.get_all()
    except SQLAlchemyError:
        logger.exception("Error fetching purchases")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error fetching purchase history"
        )
