from datetime import datetime, timedelta

from app.models.coupon import Coupon
from app.models.product import Product, Variant
from app.pricing.types import (
    AutomaticOffer,
    CartLine,
    ManualCoupon,
    OfferTerms,
    VariantSnapshot,
)

NOW = datetime(2026, 3, 15, 12, 0, 0)


def variant(id, price, size=50, category="perfume", discount=0, stock=10, product_id=None):
    return VariantSnapshot(
        id=id,
        product_id=product_id or id,
        category=category,
        size_ml=size,
        list_price=price,
        discount_percent=discount,
        stock=stock,
    )


def catalog(*variants):
    return {v.id: v for v in variants}


def line(variant_id, quantity=1):
    return CartLine(variant_id=variant_id, quantity=quantity)


def bundle(components, price, quantity=1, bundle_id="combo-1", variant_id=900):
    return CartLine(
        variant_id=variant_id,
        quantity=quantity,
        bundle_id=bundle_id,
        component_variant_ids=tuple(components),
        override_price=price,
    )


def terms(discount_type="percent", discount_value=0, **kwargs):
    return OfferTerms(discount_type=discount_type, discount_value=discount_value, **kwargs)


def auto_offer(id, title=None, code=None, **kwargs):
    return AutomaticOffer(
        id=id,
        code=code or f"AUTO{id}",
        title=title or f"Offer {id}",
        terms=terms(**kwargs),
    )


def manual_coupon(code, id=100, first_order_only=False, max_usage_per_user=None,
                  target_user_id=None, target_category=None, **kwargs):
    return ManualCoupon(
        id=id,
        code=code,
        title=code,
        terms=terms(**kwargs),
        first_order_only=first_order_only,
        max_usage_per_user=max_usage_per_user,
        target_user_id=target_user_id,
        target_category=target_category,
    )


# --- DB seeding ---

def seed_variant(session, price, size=50, category="perfume", discount=0, stock=10, name="Aura"):
    product = Product(name=name, category=category)
    session.add(product)
    session.commit()
    session.refresh(product)

    v = Variant(product_id=product.id, name=f"{name} {size}ml", size_ml=size,
                oprice=price, discount=discount, stock=stock)
    session.add(v)
    session.commit()
    session.refresh(v)
    return v


def seed_coupon(session, code, discount_type="percent", discount_value=10, **kwargs):
    kwargs.setdefault("valid_from", NOW - timedelta(days=365))
    kwargs.setdefault("valid_until", NOW + timedelta(days=3650))
    coupon = Coupon(code=code, discount_type=discount_type, discount_value=discount_value, **kwargs)
    session.add(coupon)
    session.commit()
    session.refresh(coupon)
    return coupon


def cart_payload(*items, coupon=None, pincode=None):
    return {
        "cartItems": [{"variantId": vid, "quantity": qty} for vid, qty in items],
        "couponCode": coupon,
        "pincode": pincode,
    }
