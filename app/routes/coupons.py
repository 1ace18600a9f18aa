from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.database import get_session
from app.models.user import User
from app.schemas.coupon_schemas import ActiveOffer, AvailableCoupon
from app.services.offer_service import list_active_offers, list_available_coupons
from app.utils.cache_helpers import current_promotions
from app.utils.token import get_current_user

router = APIRouter()


@router.get("/available", response_model=List[AvailableCoupon])
def available_coupons(
    search: Optional[str] = None,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    coupons = list_available_coupons(
        current_promotions(session), current_user.id, datetime.utcnow(), search
    )
    return [
        AvailableCoupon(
            id=c.id,
            code=c.code,
            title=c.title,
            description=c.description,
            discount_type=c.terms.discount_type.value,
            discount_value=c.terms.discount_value,
            min_order_value=c.terms.min_order_value,
            min_item_count=c.terms.min_item_count,
            max_discount_amount=c.terms.max_discount_amount,
            valid_until=c.terms.valid_until,
            first_order_only=c.first_order_only,
        )
        for c in coupons
    ]


# Automatic offers + how to unlock them

@router.get("/offers", response_model=List[ActiveOffer])
def active_offers(session: Session = Depends(get_session)):
    return list_active_offers(current_promotions(session), datetime.utcnow())
