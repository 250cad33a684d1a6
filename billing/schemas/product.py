from pydantic import BaseModel, Field, ConfigDict
from datetime import datetime
from typing import Optional


class ProductBase(BaseModel):
    """Base schema for Product with common attributes."""
    name: str = Field(..., min_length=1, max_length=255, description="Product name")
    type: Optional[str] = Field(None, max_length=255, description="Product category")
    price: float = Field(..., ge=0, description="Selling price")
    purchase_price: float = Field(
        0, ge=0, alias="purchasePrice", description="Cost price (defaults to 0)"
    )
    quantity: float = Field(..., ge=0, description="Units in stock (must be non-negative)")
    rack: Optional[str] = Field(None, max_length=255, description="Shelf location")

    model_config = ConfigDict(populate_by_name=True)


class ProductCreate(ProductBase):
    """Schema for adding a new product."""
    product_id: str = Field(..., min_length=1, max_length=255, description="Unique product code")


class ProductUpdate(BaseModel):
    """
    Schema for replacing a product's editable fields.

    product_id is not part of this schema and cannot be changed.
    An omitted purchasePrice keeps the stored value.
    """
    name: str = Field(..., min_length=1, max_length=255, description="Product name")
    type: Optional[str] = Field(None, max_length=255, description="Product category")
    price: float = Field(..., ge=0, description="Selling price")
    purchase_price: Optional[float] = Field(
        None, ge=0, alias="purchasePrice", description="Cost price, kept when omitted"
    )
    quantity: float = Field(..., ge=0, description="Units in stock")
    rack: Optional[str] = Field(None, max_length=255, description="Shelf location")

    model_config = ConfigDict(populate_by_name=True)


class QuantityReduce(BaseModel):
    """Schema for reducing stock after billing."""
    quantity_to_reduce: float = Field(
        ..., gt=0, alias="quantityToReduce", description="Units to take out of stock"
    )

    model_config = ConfigDict(populate_by_name=True)


class ProductResponse(ProductCreate):
    """Schema for product response including all fields."""
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class ProductUpdateResponse(BaseModel):
    """Schema for the full-replace update response."""
    message: str
    product: ProductResponse
