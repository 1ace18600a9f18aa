from typing import Optional

from sqlalchemy import func
from sqlmodel import Session, col, select

from app.constants.order_status import COMPLETED_STATUSES
from app.models.order import Order
from app.pricing.coupons import UsageLookup, normalize_code
from app.pricing.types import UsageHistory


def count_completed_orders(session: Session, user_id: int) -> int:
    return session.exec(
        select(func.count(Order.id)).where(
            Order.user_id == user_id,
            col(Order.status).in_(COMPLETED_STATUSES),
        )
    ).one()


def count_redemptions(session: Session, user_id: int, code: str) -> int:
    return session.exec(
        select(func.count(Order.id)).where(
            Order.user_id == user_id,
            Order.coupon_code == normalize_code(code),
            col(Order.status).in_(COMPLETED_STATUSES),
        )
    ).one()


def make_usage_lookup(session: Session) -> UsageLookup:
    def lookup(user_id: int, code: Optional[str] = None) -> UsageHistory:
        return UsageHistory(
            completed_orders=count_completed_orders(session, user_id),
            code_redemptions=count_redemptions(session, user_id, code) if code else 0,
        )

    return lookup
