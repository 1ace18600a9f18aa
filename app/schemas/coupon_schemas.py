from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional
from datetime import datetime


class AvailableCoupon(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    code: str
    title: str
    description: Optional[str]
    discount_type: str
    discount_value: float
    min_order_value: int
    min_item_count: int
    max_discount_amount: Optional[int]
    valid_until: Optional[datetime]
    first_order_only: bool


class ActiveOffer(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    code: str
    title: str
    discount_type: str
    instruction: str
