from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List
from datetime import datetime


class Product(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    category: str = Field(index=True)
    description: Optional[str] = None

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    variants: List["Variant"] = Relationship(back_populates="product")


class Variant(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    product_id: int = Field(foreign_key="product.id", index=True)
    name: str

    size_ml: int
    oprice: int                  # list price
    discount: float = 0.0        # product-level percent, independent of promotions
    stock: int = 0

    product: Optional[Product] = Relationship(back_populates="variants")
