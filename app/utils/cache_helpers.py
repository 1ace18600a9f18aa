from functools import lru_cache
import time
from typing import Tuple

from sqlmodel import Session

from app.config import settings
from app.database import get_session
from app.pricing.types import Promotion
from app.services.offer_service import load_promotions


def _ttl_bucket():
    return int(time.time() // settings.OFFER_CACHE_TTL)


@lru_cache(maxsize=8)
def cached_promotions(bucket: int) -> Tuple[Promotion, ...]:
    with next(get_session()) as session:
        return load_promotions(session)


def current_promotions(session: Session) -> Tuple[Promotion, ...]:
    """Offer catalog for previews. Checkout commits read it fresh instead."""
    if settings.OFFER_CACHE_TTL <= 0:
        return load_promotions(session)
    return cached_promotions(_ttl_bucket())
