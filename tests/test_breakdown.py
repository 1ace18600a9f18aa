import pytest

from app.pricing.breakdown import compose_breakdown
from app.pricing.errors import NegativeTotalInvariantViolation
from app.pricing.types import (
    AppliedOffer,
    CouponFailure,
    CouponValidation,
    DeliveryInfo,
    OfferResolution,
)


def test_total_formula():
    resolution = OfferResolution(
        applied_offers=(AppliedOffer(id=1, title="Flat 100", amount=100),),
        offer_discount=100,
    )
    result = compose_breakdown(
        original_total=2500,
        product_total=2000,
        resolution=resolution,
        coupon=CouponValidation(code="TEN", discount_amount=190),
        delivery=DeliveryInfo(delivery_charge=49, cod_available=True),
    )

    assert result.total == 2000 - 100 - 190 + 49
    assert result.cod_available is True
    assert result.coupon_code == "TEN"
    assert result.coupon_error is None


def test_failed_coupon_contributes_nothing():
    result = compose_breakdown(
        original_total=1000,
        product_total=1000,
        resolution=OfferResolution(),
        coupon=CouponValidation(code="OLD", failure=CouponFailure.COUPON_EXPIRED, message="Coupon has expired"),
        delivery=DeliveryInfo(),
    )
    assert result.discount_amount == 0
    assert result.total == 1000
    assert result.coupon_error == CouponFailure.COUPON_EXPIRED


def test_discounts_above_product_total_fail_closed():
    with pytest.raises(NegativeTotalInvariantViolation):
        compose_breakdown(
            original_total=1000,
            product_total=1000,
            resolution=OfferResolution(offer_discount=800),
            coupon=CouponValidation(code="BIG", discount_amount=300),
            delivery=DeliveryInfo(delivery_charge=99),
        )


def test_serialises_camel_case():
    result = compose_breakdown(
        original_total=0,
        product_total=0,
        resolution=OfferResolution(),
        coupon=None,
        delivery=DeliveryInfo(),
    )
    data = result.model_dump(by_alias=True)
    assert {"originalTotal", "productTotal", "offerDiscount", "discountAmount",
            "deliveryCharge", "codAvailable", "appliedOffers", "total"} <= set(data)
