from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.database import get_session
from app.models.user import User
from app.pricing.errors import EngineError
from app.schemas.checkout_schemas import BreakdownRequest, BreakdownResponse
from app.services.checkout_service import preview_breakdown
from app.utils.cache_helpers import current_promotions
from app.utils.http_errors import engine_http_error
from app.utils.token import get_optional_user

router = APIRouter()


# Cart / checkout preview

@router.post("/breakdown", response_model=BreakdownResponse)
def price_breakdown(
    data: BreakdownRequest,
    session: Session = Depends(get_session),
    current_user: Optional[User] = Depends(get_optional_user),
):
    try:
        breakdown = preview_breakdown(
            session,
            lines=data.cart_items,
            coupon_code=data.coupon_code,
            user_id=current_user.id if current_user else None,
            pincode=data.pincode,
            now=datetime.utcnow(),
            promotions=current_promotions(session),
        )
    except EngineError as exc:
        raise engine_http_error(exc)

    return BreakdownResponse(breakdown=breakdown)
