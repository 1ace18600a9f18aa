import logging
from datetime import datetime
from typing import Callable, Iterable, Optional, Set

from app.pricing.money import floor_money, percent_of
from app.pricing.types import (
    AutomaticOffer,
    CouponFailure,
    CouponValidation,
    DiscountType,
    ManualCoupon,
    Promotion,
    UsageHistory,
)

logger = logging.getLogger(__name__)

UsageLookup = Callable[[int, Optional[str]], UsageHistory]


def normalize_code(code: Optional[str]) -> str:
    return (code or "").strip().upper()


def find_promotion(promotions: Iterable[Promotion], code: str) -> Optional[Promotion]:
    wanted = normalize_code(code)
    for promotion in promotions:
        if normalize_code(promotion.code) == wanted:
            return promotion
    return None


def _rejected(code: str, failure: CouponFailure, message: str) -> CouponValidation:
    logger.warning(f"Coupon {code} rejected: {failure.value}")
    return CouponValidation(code=code, failure=failure, message=message)


def coupon_discount(coupon: ManualCoupon, post_offer_total: int) -> int:
    terms = coupon.terms
    if terms.discount_type == DiscountType.PERCENT:
        amount = percent_of(post_offer_total, terms.discount_value)
    else:
        amount = floor_money(terms.discount_value)
    if terms.max_discount_amount is not None:
        amount = min(amount, terms.max_discount_amount)
    return max(0, min(amount, post_offer_total))


def validate_coupon(
    promotion: Promotion,
    *,
    post_offer_total: int,
    item_count: int,
    categories: Set[str],
    user_id: Optional[int],
    now: datetime,
    usage_lookup: Optional[UsageLookup] = None,
) -> CouponValidation:
    """
    Run the manual coupon checks in order and stop at the first failure.

    ``usage_lookup`` is only called when the coupon has a first-order or
    per-user cap, and at most once. Guests have no usage history.
    """
    code = normalize_code(promotion.code)

    if isinstance(promotion, AutomaticOffer):
        return _rejected(
            code,
            CouponFailure.AUTOMATIC_COUPON_MANUAL_APPLY_REJECTED,
            "This offer is applied automatically and cannot be entered as a code",
        )

    coupon: ManualCoupon = promotion
    terms = coupon.terms

    if terms.not_started(now):
        return _rejected(code, CouponFailure.COUPON_NOT_YET_ACTIVE, "Coupon is not active yet")
    if terms.expired(now):
        return _rejected(code, CouponFailure.COUPON_EXPIRED, "Coupon has expired")

    if post_offer_total < terms.min_order_value:
        return _rejected(
            code,
            CouponFailure.MIN_ORDER_NOT_MET,
            f"Minimum order value ₹{terms.min_order_value} required",
        )
    if item_count < terms.min_item_count:
        return _rejected(
            code,
            CouponFailure.MIN_ITEM_COUNT_NOT_MET,
            f"Minimum {terms.min_item_count} items required",
        )

    if coupon.first_order_only or coupon.max_usage_per_user is not None:
        if user_id is not None and usage_lookup is not None:
            history = usage_lookup(user_id, code)
        else:
            history = UsageHistory()

        if coupon.first_order_only and history.completed_orders >= 1:
            return _rejected(code, CouponFailure.NOT_FIRST_ORDER, "Coupon is valid on your first order only")
        if (coupon.max_usage_per_user is not None
                and history.code_redemptions >= coupon.max_usage_per_user):
            return _rejected(code, CouponFailure.USAGE_CAP_EXCEEDED, "You have already used this coupon")

    if coupon.target_user_id is not None and coupon.target_user_id != user_id:
        return _rejected(code, CouponFailure.NOT_ELIGIBLE_USER, "This coupon is not available for your account")
    if coupon.target_category and coupon.target_category not in categories:
        return _rejected(
            code,
            CouponFailure.CATEGORY_MISMATCH,
            f"Add an item from {coupon.target_category} to use this coupon",
        )

    amount = coupon_discount(coupon, post_offer_total)
    logger.info(f"Coupon {code} applied, discount {amount}")
    return CouponValidation(code=code, discount_amount=amount)


def coupon_not_found(code: str) -> CouponValidation:
    return _rejected(normalize_code(code), CouponFailure.COUPON_NOT_FOUND, "Invalid coupon code")
