from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime


class Coupon(SQLModel, table=True):
    """
    Automatic offers and manual coupons share this table.
    Rows are authored by the admin surface; pricing only reads them.
    """
    id: Optional[int] = Field(default=None, primary_key=True)
    code: str = Field(index=True, unique=True)
    title: Optional[str] = None
    description: Optional[str] = None

    is_automatic: bool = Field(default=False, index=True)

    discount_type: str            # percent | flat | free_item
    discount_value: float = 0.0
    min_order_value: int = 0
    min_item_count: int = 0
    max_discount_amount: Optional[int] = None
    valid_from: Optional[datetime] = None
    valid_until: Optional[datetime] = None

    # free item condition / action
    cond_required_category: Optional[str] = None
    cond_required_size: Optional[int] = None
    action_target_size: Optional[int] = None
    action_target_max_price: Optional[int] = None
    action_buy_x: Optional[int] = None
    action_get_y: Optional[int] = None
    include_bundles: bool = Field(default=False)

    # manual only
    first_order_only: bool = Field(default=False)
    max_usage_per_user: Optional[int] = None
    target_user_id: Optional[int] = Field(default=None, foreign_key="user.id")
    target_category: Optional[str] = None

    created_at: datetime = Field(default_factory=datetime.utcnow)
