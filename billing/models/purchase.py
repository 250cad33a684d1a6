from datetime import datetime, timezone

from sqlalchemy import Column, String, Float, DateTime, JSON

from billing.database import Base, generate_id


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Purchase(Base):
    """
    Purchase model representing a completed bill.

    The customer block and line items are stored as JSON snapshots. Line
    items are not linked to the products table, so later catalog changes do
    not alter past purchases.

    Attributes:
        id: Internal identifier assigned on insert
        customer: Object with optional name, place, phone and address
        products: List of line-item objects as sent by the client
        total: Bill total
        date: Purchase time, defaults to insert time
    """
    __tablename__ = "purchases"

    id = Column(String(32), primary_key=True, default=generate_id)
    customer = Column(JSON, nullable=True)
    products = Column(JSON, nullable=False, default=list)
    total = Column(Float, nullable=True)
    date = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    def __repr__(self):
        return f"<Purchase(id={self.id}, total={self.total})>"
