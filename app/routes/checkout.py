from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from app.database import get_session
from app.models.user import User
from app.pricing.errors import EngineError
from app.schemas.checkout_schemas import CheckoutCommitRequest, CheckoutCommitResponse
from app.services.checkout_service import (
    BreakdownMismatchError,
    CodUnavailableError,
    OutOfStockError,
    commit_checkout,
)
from app.utils.http_errors import engine_http_error
from app.utils.token import get_current_user

router = APIRouter()


@router.post("/commit", response_model=CheckoutCommitResponse)
def commit_order(
    data: CheckoutCommitRequest,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    """Recalculate the cart and place the order only if the total still matches."""
    try:
        order, breakdown = commit_checkout(
            session,
            user=current_user,
            lines=data.cart_items,
            coupon_code=data.coupon_code,
            pincode=data.pincode,
            expected_total=data.expected_total,
            payment_mode=data.payment_mode,
            now=datetime.utcnow(),
        )
    except EngineError as exc:
        raise engine_http_error(exc)
    except BreakdownMismatchError as exc:
        raise HTTPException(
            status_code=409,
            detail={
                "message": "Prices have changed. Please review your order again.",
                "breakdown": exc.actual.model_dump(mode="json", by_alias=True),
            },
        )
    except OutOfStockError as exc:
        raise HTTPException(
            status_code=409,
            detail={
                "message": "Some items are out of stock. Please remove them to continue.",
                "variant_ids": list(exc.variant_ids),
            },
        )
    except CodUnavailableError:
        raise HTTPException(400, "Cash on delivery is not available for this pincode")

    return CheckoutCommitResponse(order_id=order.id, breakdown=breakdown)
