from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, TYPE_CHECKING
from sqlalchemy import Column, JSON

if TYPE_CHECKING:
    from app.models.order import Order

class OrderItem(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    order_id: int = Field(foreign_key="order.id")
    variant_id: int

    quantity: int
    line_total: int
    bundle_id: Optional[str] = None
    component_variant_ids: Optional[list] = Field(default=None, sa_column=Column(JSON))

    order: Optional["Order"] = Relationship(back_populates="items")
