import logging
from datetime import datetime

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app.config import settings
from app.database import get_session
from app.pricing.offers import active_automatic_offers
from app.services.offer_service import load_promotions

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/check")
def health_check(session: Session = Depends(get_session)):
    """Reports whether the offer catalog can be loaded for pricing."""
    now = datetime.utcnow()
    catalog = {"status": "ok", "promotions": 0, "active_offers": 0}

    try:
        promotions = load_promotions(session)
    except SQLAlchemyError as exc:
        logger.error(f"Offer catalog unavailable: {exc}")
        catalog["status"] = "failed"
    else:
        catalog["promotions"] = len(promotions)
        catalog["active_offers"] = len(active_automatic_offers(promotions, now))

    return {
        "status": "ok" if catalog["status"] == "ok" else "degraded",
        "offer_catalog": catalog,
        "offer_cache_ttl": settings.OFFER_CACHE_TTL,
        "bundle_size": settings.BUNDLE_SIZE,
        "timestamp": now.isoformat(),
    }
