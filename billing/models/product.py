from sqlalchemy import Column, String, Float, DateTime
from sqlalchemy.sql import func

from billing.database import Base, generate_id


class Product(Base):
    """
    Product model representing an item in the catalog.

    Attributes:
        id: Internal identifier assigned on insert
        product_id: Business key (unique)
        name: Product name
        type: Optional product category
        price: Selling price
        purchase_price: Cost price, defaults to 0
        quantity: Units in stock
        rack: Optional shelf location
        created_at: Timestamp when product was created
        updated_at: Timestamp when product was last updated
    """
    __tablename__ = "products"

    id = Column(String(32), primary_key=True, default=generate_id)
    product_id = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    type = Column(String(255), nullable=True)
    price = Column(Float, nullable=False)
    purchase_price = Column(Float, nullable=False, default=0)
    quantity = Column(Float, nullable=False)
    rack = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Product(id={self.id}, product_id='{self.product_id}', quantity={self.quantity})>"
