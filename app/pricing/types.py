from datetime import datetime
from enum import Enum
from typing import FrozenSet, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.pricing.money import selling_price


class EngineModel(BaseModel):
    """Immutable value shared between pricing stages. Serialises as camelCase."""
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class DiscountType(str, Enum):
    PERCENT = "percent"
    FLAT = "flat"
    FREE_ITEM = "free_item"


class CouponFailure(str, Enum):
    AUTOMATIC_COUPON_MANUAL_APPLY_REJECTED = "automatic_coupon_manual_apply_rejected"
    COUPON_NOT_FOUND = "coupon_not_found"
    COUPON_NOT_YET_ACTIVE = "coupon_not_yet_active"
    COUPON_EXPIRED = "coupon_expired"
    MIN_ORDER_NOT_MET = "min_order_not_met"
    MIN_ITEM_COUNT_NOT_MET = "min_item_count_not_met"
    NOT_FIRST_ORDER = "not_first_order"
    USAGE_CAP_EXCEEDED = "usage_cap_exceeded"
    NOT_ELIGIBLE_USER = "not_eligible_user"
    CATEGORY_MISMATCH = "category_mismatch"


# ---------- catalog / cart ----------

class VariantSnapshot(EngineModel):
    id: int
    product_id: int
    category: str
    size_ml: int
    list_price: int
    discount_percent: float = 0.0
    stock: int = 0

    @property
    def selling_price(self) -> int:
        return selling_price(self.list_price, self.discount_percent)


class CartLine(EngineModel):
    variant_id: int
    quantity: int = Field(default=1, ge=1)

    # bundle lines only
    bundle_id: Optional[str] = None
    component_variant_ids: Tuple[int, ...] = ()
    override_price: Optional[int] = None

    @property
    def is_bundle(self) -> bool:
        return self.bundle_id is not None

    @property
    def referenced_variant_ids(self) -> Tuple[int, ...]:
        if self.is_bundle:
            return self.component_variant_ids
        return (self.variant_id,)


class NormalizedUnit(EngineModel):
    unit_id: int
    source_line_index: int
    variant_id: int
    unit_selling_price: int
    eligible_category: str
    eligible_size: int
    part_of_bundle: bool = False


# ---------- promotions ----------

class OfferTerms(EngineModel):
    """Condition/action payload common to automatic offers and manual coupons."""
    discount_type: DiscountType
    discount_value: float = 0.0
    min_order_value: int = 0
    min_item_count: int = 0
    max_discount_amount: Optional[int] = None
    valid_from: Optional[datetime] = None
    valid_until: Optional[datetime] = None

    cond_required_category: Optional[str] = None
    cond_required_size: Optional[int] = None
    action_target_size: Optional[int] = None
    action_target_max_price: Optional[int] = None
    action_buy_x: Optional[int] = None
    action_get_y: Optional[int] = None
    include_bundles: bool = False

    def not_started(self, now: datetime) -> bool:
        return self.valid_from is not None and now < self.valid_from

    def expired(self, now: datetime) -> bool:
        return self.valid_until is not None and now > self.valid_until

    def is_active(self, now: datetime) -> bool:
        return not self.not_started(now) and not self.expired(now)


class AutomaticOffer(EngineModel):
    kind: Literal["automatic"] = "automatic"
    id: int
    code: str
    title: str
    description: Optional[str] = None
    terms: OfferTerms


class ManualCoupon(EngineModel):
    kind: Literal["manual"] = "manual"
    id: int
    code: str
    title: str
    description: Optional[str] = None
    terms: OfferTerms

    first_order_only: bool = False
    max_usage_per_user: Optional[int] = None
    target_user_id: Optional[int] = None
    target_category: Optional[str] = None


Promotion = Union[AutomaticOffer, ManualCoupon]


# ---------- stage outputs ----------

class Waiver(EngineModel):
    unit_id: int
    offer_id: int
    amount: int


class AppliedOffer(EngineModel):
    id: int
    title: str
    amount: int
    applies_to_variant_id: Optional[int] = None


class OfferResolution(EngineModel):
    waivers: Tuple[Waiver, ...] = ()
    applied_offers: Tuple[AppliedOffer, ...] = ()
    offer_discount: int = 0

    @property
    def waived_unit_ids(self) -> FrozenSet[int]:
        return frozenset(w.unit_id for w in self.waivers)


class UsageHistory(EngineModel):
    completed_orders: int = 0
    code_redemptions: int = 0


class CouponValidation(EngineModel):
    code: str
    discount_amount: int = 0
    failure: Optional[CouponFailure] = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.failure is None


class DeliveryInfo(EngineModel):
    delivery_charge: int = 0
    cod_available: bool = False


class PriceBreakdown(EngineModel):
    original_total: int
    product_total: int
    offer_discount: int
    discount_amount: int
    delivery_charge: int
    cod_available: bool
    applied_offers: Tuple[AppliedOffer, ...] = ()
    total: int

    coupon_code: Optional[str] = None
    coupon_error: Optional[CouponFailure] = None
    coupon_message: Optional[str] = None
