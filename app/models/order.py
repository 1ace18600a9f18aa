from sqlmodel import SQLModel, Field, Relationship
from typing import List, Optional
from datetime import datetime

from app.models.order_item import OrderItem


class Order(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)

    original_total: int
    product_total: int
    offer_discount: int = 0
    discount_amount: int = 0
    delivery_charge: int = 0
    total: int

    coupon_code: Optional[str] = Field(default=None, index=True)
    pincode: Optional[str] = None
    payment_mode: str = Field(default="online")
    status: str = Field(default="placed")

    created_at: datetime = Field(default_factory=datetime.utcnow)

    items: List["OrderItem"] = Relationship(back_populates="order")
