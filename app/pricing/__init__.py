"""
Cart pricing and offer resolution.

Nothing in this package touches the database: callers resolve the catalog,
offer and delivery snapshots first and hand them to ``evaluate``.
"""
from app.pricing.engine import evaluate
from app.pricing.errors import (
    EngineError,
    MalformedBundleError,
    NegativeTotalInvariantViolation,
    StaleCartError,
)
from app.pricing.types import (
    AutomaticOffer,
    CartLine,
    CouponFailure,
    DeliveryInfo,
    ManualCoupon,
    PriceBreakdown,
    UsageHistory,
    VariantSnapshot,
)
