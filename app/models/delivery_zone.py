from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime


class DeliveryZone(SQLModel, table=True):
    __tablename__ = "delivery_zone"
    id: Optional[int] = Field(default=None, primary_key=True)
    pincode: str = Field(index=True, unique=True)
    delivery_charge: int = 0
    cod_available: bool = Field(default=False)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
