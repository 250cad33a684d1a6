from pydantic import BaseModel, Field, ConfigDict
from datetime import datetime
from typing import Any, Dict, List, Optional


class Customer(BaseModel):
    """Customer details printed on the bill. All fields are optional."""
    name: Optional[str] = None
    place: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


class PurchaseCreate(BaseModel):
    """
    Schema for recording a purchase.

    Line items are stored exactly as sent; their structure is not checked.
    """
    customer: Optional[Customer] = Field(default_factory=Customer, description="Customer details")
    products: List[Dict[str, Any]] = Field(..., description="Snapshot of billed line items")
    total: float = Field(..., description="Bill total")
    date: Optional[datetime] = Field(None, description="Purchase time, server time when omitted")


class PurchaseResponse(BaseModel):
    """Schema for purchase response."""
    id: str
    customer: Optional[Customer] = None
    products: List[Dict[str, Any]]
    total: Optional[float] = None
    date: datetime

    model_config = ConfigDict(from_attributes=True)
