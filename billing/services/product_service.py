from sqlalchemy.orm import Session
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from typing import Optional, List
import logging

from billing.models.product import Product
from billing.schemas.product import ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)


class ProductExistsError(Exception):
    """Exception raised when the product_id is already taken."""
    pass


class ProductNotFoundError(Exception):
    """Exception raised when the requested product doesn't exist."""
    pass


class InsufficientQuantityError(Exception):
    """Exception raised when there's not enough stock to reduce."""
    pass


class ProductService:
    """
    Service class for Product catalog operations.

    Products are addressed two ways: by the internal `id` assigned on
    insert, and by the business key `product_id` printed on bills.

    QUANTITY REDUCTION:
    ===================
    Stock is reduced with a single conditional UPDATE:

        UPDATE products SET quantity = quantity - :n
        WHERE product_id = :product_id AND quantity >= :n

    The sufficiency check and the write happen in one statement, so two
    concurrent reductions can never both pass the check against the same
    stock level. When no row is affected, a follow-up lookup tells a
    missing product apart from insufficient stock.
    """

    def __init__(self, db: Session):
        self.db = db

    def create(self, product_data: ProductCreate) -> Product:
        """
        Add a new product.

        Args:
            product_data: Product creation data

        Returns:
            Created product instance

        Raises:
            ProductExistsError: If product_id is already in use
        """
        existing = self.get_by_product_id(product_data.product_id)
        if existing:
            raise ProductExistsError("Product already exists")

        product = Product(**product_data.model_dump())

        try:
            self.db.add(product)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ProductExistsError("Product already exists")
        except SQLAlchemyError:
            self.db.rollback()
            raise

        self.db.refresh(product)
        logger.info(f"Product '{product.product_id}' added")
        return product

    def get_by_id(self, id: str) -> Optional[Product]:
        """Get a product by internal identifier."""
        return self.db.query(Product).filter(Product.id == id).first()

    def get_by_product_id(self, product_id: str) -> Optional[Product]:
        """Get a product by business key."""
        return self.db.query(Product).filter(Product.product_id == product_id).first()

    def get_all(self) -> List[Product]:
        """Get every product, unfiltered."""
        return self.db.query(Product).all()

    def update(self, id: str, product_data: ProductUpdate) -> Optional[Product]:
        """
        Replace the editable fields of a product.

        product_id is never touched. When purchase_price is omitted the
        stored value is kept.

        Args:
            id: Internal identifier of the product
            product_data: Replacement values

        Returns:
            Updated product or None if not found
        """
        product = self.get_by_id(id)

        if not product:
            return None

        update_data = product_data.model_dump()
        if update_data["purchase_price"] is None:
            del update_data["purchase_price"]

        for field, value in update_data.items():
            setattr(product, field, value)

        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

        self.db.refresh(product)
        return product

    def reduce_quantity(self, product_id: str, quantity: float) -> Product:
        """
        Take units out of stock after billing.

        Args:
            product_id: Business key of the product
            quantity: Units to remove

        Returns:
            Product with the reduced quantity

        Raises:
            ProductNotFoundError: If no product has this product_id
            InsufficientQuantityError: If fewer than `quantity` units are in stock
        """
        try:
            result = self.db.execute(
                update(Product)
                .where(Product.product_id == product_id, Product.quantity >= quantity)
                .values(quantity=Product.quantity - quantity)
                .execution_options(synchronize_session=False)
            )

            if result.rowcount == 0:
                self.db.rollback()
                product = self.get_by_product_id(product_id)
                if not product:
                    raise ProductNotFoundError(f"Product with product_id {product_id} not found")
                raise InsufficientQuantityError(
                    f"Insufficient quantity. Available: {product.quantity}, Requested: {quantity}"
                )

            # Read back inside the same transaction; the updated row is still ours
            product = (
                self.db.query(Product)
                .filter(Product.product_id == product_id)
                .populate_existing()
                .first()
            )
            remaining = product.quantity

            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

        logger.info(f"Reduced product '{product_id}' by {quantity}, {remaining} left")
        return product

    def delete(self, id: str) -> bool:
        """
        Delete a product by internal identifier.

        Returns:
            True if deleted, False if not found
        """
        return self._delete(self.get_by_id(id))

    def delete_by_product_id(self, product_id: str) -> bool:
        """
        Delete a product by business key.

        Returns:
            True if deleted, False if not found
        """
        return self._delete(self.get_by_product_id(product_id))

    def _delete(self, product: Optional[Product]) -> bool:
        if not product:
            return False

        product_id = product.product_id
        try:
            self.db.delete(product)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

        logger.info(f"Product '{product_id}' deleted")
        return True
