from typing import Optional

from sqlmodel import Session, select

from app.config import settings
from app.models.delivery_zone import DeliveryZone
from app.pricing.types import DeliveryInfo


def resolve_delivery(session: Session, pincode: Optional[str]) -> DeliveryInfo:
    """
    No pincode yet (cart page) means no delivery charge.
    Pincodes without a zone fall back to the configured defaults.
    """
    if not pincode or not pincode.strip():
        return DeliveryInfo(delivery_charge=0, cod_available=False)

    zone = session.exec(
        select(DeliveryZone).where(DeliveryZone.pincode == pincode.strip())
    ).first()

    if zone is None:
        return DeliveryInfo(
            delivery_charge=settings.DEFAULT_DELIVERY_CHARGE,
            cod_available=settings.DEFAULT_COD_AVAILABLE,
        )
    return DeliveryInfo(delivery_charge=zone.delivery_charge, cod_available=zone.cod_available)
