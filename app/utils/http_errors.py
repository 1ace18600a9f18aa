import logging
from fastapi import HTTPException

from app.pricing.errors import (
    EngineError,
    InvariantViolation,
    MalformedBundleError,
    StaleCartError,
)

logger = logging.getLogger(__name__)


def engine_http_error(exc: EngineError) -> HTTPException:
    if isinstance(exc, StaleCartError):
        return HTTPException(
            status_code=409,
            detail={
                "message": "Some items in your cart are no longer available. Please refresh your cart.",
                "missing_variant_ids": list(exc.missing_variant_ids),
            },
        )
    if isinstance(exc, MalformedBundleError):
        return HTTPException(status_code=422, detail=str(exc))
    if isinstance(exc, InvariantViolation):
        logger.exception("Pricing invariant violation")
        return HTTPException(status_code=500, detail="Could not calculate prices. Please try again later.")
    logger.exception("Unhandled pricing error")
    return HTTPException(status_code=500, detail="Could not calculate prices.")
