from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from typing import List
import logging

from billing.models.purchase import Purchase
from billing.schemas.purchase import PurchaseCreate

logger = logging.getLogger(__name__)


class PurchaseService:
    """
    Service class for recording bills.

    Purchases are write-once. Recording one does not touch product stock;
    callers reduce each line item's quantity through the product endpoints.
    """

    def __init__(self, db: Session):
        self.db = db

    def create(self, purchase_data: PurchaseCreate) -> Purchase:
        """Store a purchase as sent, stamping the server time if no date is given."""
        purchase = Purchase(
            customer=purchase_data.customer.model_dump() if purchase_data.customer is not None else None,
            products=purchase_data.products,
            total=purchase_data.total,
        )
        if purchase_data.date is not None:
            purchase.date = purchase_data.date

        try:
            self.db.add(purchase)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

        self.db.refresh(purchase)
        logger.info(f"Purchase #{purchase.id} saved with total {purchase.total}")
        return purchase

    def get_all(self) -> List[Purchase]:
        """Get every purchase, oldest first."""
        return self.db.query(Purchase).order_by(Purchase.date).all()
