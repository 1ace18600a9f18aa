import logging
from datetime import datetime
from typing import List, Optional, Tuple

from sqlmodel import Session, select

from app.models.coupon import Coupon
from app.pricing.coupons import normalize_code
from app.pricing.describe import describe_promotion
from app.pricing.offers import active_automatic_offers
from app.pricing.types import AutomaticOffer, ManualCoupon, OfferTerms, Promotion

logger = logging.getLogger(__name__)


def to_promotion(row: Coupon) -> Promotion:
    terms = OfferTerms(
        discount_type=row.discount_type,
        discount_value=row.discount_value or 0,
        min_order_value=row.min_order_value or 0,
        min_item_count=row.min_item_count or 0,
        max_discount_amount=row.max_discount_amount,
        valid_from=row.valid_from,
        valid_until=row.valid_until,
        cond_required_category=row.cond_required_category,
        cond_required_size=row.cond_required_size,
        action_target_size=row.action_target_size,
        action_target_max_price=row.action_target_max_price,
        action_buy_x=row.action_buy_x,
        action_get_y=row.action_get_y,
        include_bundles=row.include_bundles,
    )
    code = normalize_code(row.code)
    title = row.title or code

    if row.is_automatic:
        return AutomaticOffer(
            id=row.id, code=code, title=title, description=row.description, terms=terms
        )
    return ManualCoupon(
        id=row.id,
        code=code,
        title=title,
        description=row.description,
        terms=terms,
        first_order_only=row.first_order_only,
        max_usage_per_user=row.max_usage_per_user,
        target_user_id=row.target_user_id,
        target_category=row.target_category,
    )


def load_promotions(session: Session) -> Tuple[Promotion, ...]:
    rows = session.exec(select(Coupon).order_by(Coupon.id)).all()
    return tuple(to_promotion(row) for row in rows)


def list_available_coupons(
    promotions: Tuple[Promotion, ...],
    user_id: Optional[int],
    now: datetime,
    search: Optional[str] = None,
) -> List[ManualCoupon]:
    """Manual coupons a user could try right now, newest id last."""
    needle = (search or "").strip().lower()
    available = []
    for promotion in promotions:
        if not isinstance(promotion, ManualCoupon):
            continue
        if not promotion.terms.is_active(now):
            continue
        if promotion.target_user_id is not None and promotion.target_user_id != user_id:
            continue
        if needle and needle not in promotion.code.lower() and needle not in (promotion.description or "").lower():
            continue
        available.append(promotion)
    return available


def list_active_offers(promotions: Tuple[Promotion, ...], now: datetime) -> List[dict]:
    return [
        {
            "id": offer.id,
            "code": offer.code,
            "title": offer.title,
            "discount_type": offer.terms.discount_type.value,
            "instruction": describe_promotion(offer),
        }
        for offer in active_automatic_offers(promotions, now)
    ]
