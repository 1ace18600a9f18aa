import logging
from typing import Dict, Iterable

from sqlmodel import Session, col, select

from app.models.product import Product, Variant
from app.pricing.types import VariantSnapshot

logger = logging.getLogger(__name__)


def load_variant_snapshot(session: Session, variant_ids: Iterable[int]) -> Dict[int, VariantSnapshot]:
    """
    Snapshot of the requested variants. Ids that no longer exist are simply
    absent; the engine reports them as a stale cart.
    """
    ids = sorted(set(variant_ids))
    if not ids:
        return {}

    rows = session.exec(
        select(Variant, Product)
        .join(Product, Variant.product_id == Product.id)
        .where(col(Variant.id).in_(ids))
    ).all()

    snapshot = {
        variant.id: VariantSnapshot(
            id=variant.id,
            product_id=product.id,
            category=product.category,
            size_ml=variant.size_ml,
            list_price=variant.oprice,
            discount_percent=variant.discount or 0,
            stock=variant.stock or 0,
        )
        for variant, product in rows
    }
    logger.info(f"Loaded {len(snapshot)} of {len(ids)} variants")
    return snapshot
