# app/services/checkout_service.py
import logging
from datetime import datetime
from typing import Dict, List, Optional, Sequence, Tuple

from sqlmodel import Session

from app.config import settings
from app.constants.order_status import PLACED
from app.models.order import Order
from app.models.order_item import OrderItem
from app.models.user import User
from app.pricing import evaluate
from app.pricing.normalizer import line_totals, normalize_cart, referenced_variant_ids, required_stock
from app.pricing.types import CartLine, PriceBreakdown, Promotion, VariantSnapshot
from app.services.catalog_service import load_variant_snapshot
from app.services.delivery_service import resolve_delivery
from app.services.offer_service import load_promotions
from app.services.usage_service import make_usage_lookup

logger = logging.getLogger(__name__)


class BreakdownMismatchError(Exception):
    def __init__(self, expected_total: int, actual: PriceBreakdown):
        self.expected_total = expected_total
        self.actual = actual
        super().__init__(f"Displayed total {expected_total} does not match {actual.total}")


class OutOfStockError(Exception):
    def __init__(self, variant_ids: Sequence[int]):
        self.variant_ids = tuple(sorted(variant_ids))
        super().__init__(f"Insufficient stock for variants {list(self.variant_ids)}")


class CodUnavailableError(Exception):
    def __init__(self, pincode: Optional[str]):
        self.pincode = pincode
        super().__init__(f"Cash on delivery is not available for {pincode}")


def _evaluate(
    session: Session,
    *,
    lines: Sequence[CartLine],
    coupon_code: Optional[str],
    user_id: Optional[int],
    pincode: Optional[str],
    now: datetime,
    promotions: Tuple[Promotion, ...],
) -> Tuple[PriceBreakdown, Dict[int, VariantSnapshot]]:
    variants = load_variant_snapshot(session, referenced_variant_ids(lines))
    breakdown = evaluate(
        lines,
        coupon_code,
        user_id,
        now,
        resolve_delivery(session, pincode),
        variants=variants,
        promotions=promotions,
        usage_lookup=make_usage_lookup(session),
        bundle_size=settings.BUNDLE_SIZE,
    )
    return breakdown, variants


def preview_breakdown(
    session: Session,
    *,
    lines: Sequence[CartLine],
    coupon_code: Optional[str],
    user_id: Optional[int],
    pincode: Optional[str],
    now: datetime,
    promotions: Tuple[Promotion, ...],
) -> PriceBreakdown:
    breakdown, _ = _evaluate(
        session,
        lines=lines,
        coupon_code=coupon_code,
        user_id=user_id,
        pincode=pincode,
        now=now,
        promotions=promotions,
    )
    return breakdown


def find_short_stock(lines: Sequence[CartLine], variants: Dict[int, VariantSnapshot]) -> List[int]:
    return [
        variant_id
        for variant_id, needed in sorted(required_stock(lines).items())
        if variants[variant_id].stock < needed
    ]


def commit_checkout(
    session: Session,
    *,
    user: User,
    lines: Sequence[CartLine],
    coupon_code: Optional[str],
    pincode: Optional[str],
    expected_total: int,
    payment_mode: str,
    now: datetime,
) -> Tuple[Order, PriceBreakdown]:
    """
    Authoritative re-run of the preview against current catalog, offers and
    usage. The order is only written when the recomputed total equals the
    one the shopper saw.
    """
    breakdown, variants = _evaluate(
        session,
        lines=lines,
        coupon_code=coupon_code,
        user_id=user.id,
        pincode=pincode,
        now=now,
        promotions=load_promotions(session),
    )

    if breakdown.total != expected_total:
        logger.warning(
            f"Checkout for user {user.id} rejected: displayed total {expected_total}, "
            f"recomputed {breakdown.total}"
        )
        raise BreakdownMismatchError(expected_total, breakdown)

    short = find_short_stock(lines, variants)
    if short:
        logger.warning(f"Checkout for user {user.id} blocked, out of stock: {short}")
        raise OutOfStockError(short)

    if payment_mode == "cod" and not breakdown.cod_available:
        raise CodUnavailableError(pincode)

    applied_code = breakdown.coupon_code if breakdown.coupon_error is None else None
    totals = line_totals(normalize_cart(lines, variants, settings.BUNDLE_SIZE))

    order = Order(
        user_id=user.id,
        original_total=breakdown.original_total,
        product_total=breakdown.product_total,
        offer_discount=breakdown.offer_discount,
        discount_amount=breakdown.discount_amount,
        delivery_charge=breakdown.delivery_charge,
        total=breakdown.total,
        coupon_code=applied_code,
        pincode=pincode,
        payment_mode=payment_mode,
        status=PLACED,
        created_at=now,
    )

    # order and items land in one transaction
    try:
        session.add(order)
        session.flush()
        for index, line in enumerate(lines):
            session.add(
                OrderItem(
                    order_id=order.id,
                    variant_id=line.variant_id,
                    quantity=line.quantity,
                    line_total=totals.get(index, 0),
                    bundle_id=line.bundle_id,
                    component_variant_ids=list(line.component_variant_ids) or None,
                )
            )
        session.commit()
    except Exception as e:
        logger.error(f"Failed to write order for user {user.id}: {e}")
        session.rollback()
        raise
    session.refresh(order)

    logger.info(f"Order {order.id} placed by user {user.id}, total {order.total}")
    return order, breakdown
