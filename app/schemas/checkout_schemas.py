# app/schemas/checkout_schemas.py
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Literal, Optional

from app.pricing.types import CartLine, PriceBreakdown


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BreakdownRequest(CamelModel):
    cart_items: List[CartLine] = Field(default_factory=list)
    coupon_code: Optional[str] = None
    pincode: Optional[str] = None


class BreakdownResponse(CamelModel):
    success: bool = True
    breakdown: PriceBreakdown


class CheckoutCommitRequest(BreakdownRequest):
    cart_items: List[CartLine] = Field(..., min_length=1)
    expected_total: int = Field(..., ge=0)
    payment_mode: Literal["online", "cod"] = "online"


class CheckoutCommitResponse(CamelModel):
    success: bool = True
    order_id: int
    breakdown: PriceBreakdown
