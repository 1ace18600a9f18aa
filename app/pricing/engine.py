import logging
from datetime import datetime
from typing import Iterable, Mapping, Optional, Sequence

from app.pricing.breakdown import compose_breakdown
from app.pricing.coupons import (
    UsageLookup,
    coupon_not_found,
    find_promotion,
    normalize_code,
    validate_coupon,
)
from app.pricing.errors import NegativeTotalInvariantViolation, StaleCartError
from app.pricing.normalizer import BUNDLE_SIZE, item_count, normalize_cart, original_total
from app.pricing.offers import resolve_offers
from app.pricing.types import CartLine, DeliveryInfo, PriceBreakdown, Promotion, VariantSnapshot

logger = logging.getLogger(__name__)


def evaluate(
    cart: Sequence[CartLine],
    coupon_code: Optional[str],
    user_id: Optional[int],
    now: datetime,
    delivery: DeliveryInfo,
    *,
    variants: Mapping[int, VariantSnapshot],
    promotions: Iterable[Promotion],
    usage_lookup: Optional[UsageLookup] = None,
    bundle_size: int = BUNDLE_SIZE,
) -> PriceBreakdown:
    """
    Price a cart. Same inputs always give the same breakdown, so the preview
    and the checkout commit both go through here.

    Raises StructuralError subclasses for carts that cannot be priced.
    Coupon problems never raise: the cart is priced without the coupon and
    the reason is carried on the breakdown.
    """
    promotions = tuple(promotions)

    try:
        units = normalize_cart(cart, variants, bundle_size)
    except StaleCartError as exc:
        logger.warning(f"Stale cart for user {user_id}: {exc}")
        raise
    product_total = sum(u.unit_selling_price for u in units)

    resolution = resolve_offers(units, promotions, now)

    coupon = None
    if normalize_code(coupon_code):
        promotion = find_promotion(promotions, coupon_code)
        if promotion is None:
            coupon = coupon_not_found(coupon_code)
        else:
            coupon = validate_coupon(
                promotion,
                post_offer_total=product_total - resolution.offer_discount,
                item_count=item_count(cart),
                categories={u.eligible_category for u in units},
                user_id=user_id,
                now=now,
                usage_lookup=usage_lookup,
            )

    try:
        return compose_breakdown(
            original_total=original_total(cart, variants),
            product_total=product_total,
            resolution=resolution,
            coupon=coupon,
            delivery=delivery,
        )
    except NegativeTotalInvariantViolation as exc:
        logger.error(
            f"Pricing invariant violated for user {user_id}: {exc} "
            f"(offers={[o.id for o in resolution.applied_offers]}, coupon={coupon_code})"
        )
        raise
