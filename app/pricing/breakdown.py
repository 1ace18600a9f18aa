from typing import Optional

from app.pricing.errors import NegativeTotalInvariantViolation
from app.pricing.types import CouponValidation, DeliveryInfo, OfferResolution, PriceBreakdown


def compose_breakdown(
    *,
    original_total: int,
    product_total: int,
    resolution: OfferResolution,
    coupon: Optional[CouponValidation],
    delivery: DeliveryInfo,
) -> PriceBreakdown:
    """
    total = product_total - offer_discount - discount_amount + delivery_charge

    Fails instead of clamping when product-side discounts exceed the
    product total; that can only come from a bug upstream.
    """
    discount_amount = coupon.discount_amount if coupon is not None and coupon.ok else 0

    if resolution.offer_discount < 0 or discount_amount < 0:
        raise NegativeTotalInvariantViolation(product_total, resolution.offer_discount, discount_amount)
    if resolution.offer_discount + discount_amount > product_total:
        raise NegativeTotalInvariantViolation(product_total, resolution.offer_discount, discount_amount)

    return PriceBreakdown(
        original_total=original_total,
        product_total=product_total,
        offer_discount=resolution.offer_discount,
        discount_amount=discount_amount,
        delivery_charge=delivery.delivery_charge,
        cod_available=delivery.cod_available,
        applied_offers=resolution.applied_offers,
        total=product_total - resolution.offer_discount - discount_amount + delivery.delivery_charge,
        coupon_code=coupon.code if coupon is not None else None,
        coupon_error=coupon.failure if coupon is not None else None,
        coupon_message=coupon.message if coupon is not None else None,
    )
