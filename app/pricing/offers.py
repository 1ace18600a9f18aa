"""
Automatic offer resolution.

Offers run one at a time in ascending id order. Each offer sees only the
units that earlier offers left unwaived, so a unit is never waived twice.
Every recorded discount is also capped by what is left of the product
total, so the offer discount can never exceed it.
"""
import logging
from datetime import datetime
from typing import Dict, Iterable, List, Sequence

from app.pricing.money import floor_money, percent_of
from app.pricing.types import (
    AppliedOffer,
    AutomaticOffer,
    DiscountType,
    NormalizedUnit,
    OfferResolution,
    OfferTerms,
    Promotion,
    Waiver,
)

logger = logging.getLogger(__name__)


def active_automatic_offers(promotions: Iterable[Promotion], now: datetime) -> List[AutomaticOffer]:
    offers = [
        p for p in promotions
        if isinstance(p, AutomaticOffer) and p.terms.is_active(now)
    ]
    return sorted(offers, key=lambda o: o.id)


def _cheapest_first(units: Iterable[NormalizedUnit]) -> List[NormalizedUnit]:
    return sorted(units, key=lambda u: (u.unit_selling_price, u.variant_id, u.unit_id))


class _OfferPass:
    def __init__(self, units: Sequence[NormalizedUnit]):
        self.units = list(units)
        self.product_total = sum(u.unit_selling_price for u in self.units)
        self.waivers: Dict[int, Waiver] = {}
        self.applied: List[AppliedOffer] = []
        self.discount = 0

    @property
    def budget(self) -> int:
        return self.product_total - self.discount

    def pool(self, terms: OfferTerms) -> List[NormalizedUnit]:
        return [
            u for u in self.units
            if u.unit_id not in self.waivers
            and (terms.include_bundles or not u.part_of_bundle)
        ]

    def thresholds_met(self, terms: OfferTerms, pool: List[NormalizedUnit]) -> bool:
        pool_total = sum(u.unit_selling_price for u in pool)
        return pool_total >= terms.min_order_value and len(pool) >= terms.min_item_count

    def waive(self, offer: AutomaticOffer, unit: NormalizedUnit) -> bool:
        amount = min(unit.unit_selling_price, self.budget)
        if amount <= 0:
            return False
        self.waivers[unit.unit_id] = Waiver(unit_id=unit.unit_id, offer_id=offer.id, amount=amount)
        self.discount += amount
        self.applied.append(
            AppliedOffer(
                id=offer.id,
                title=offer.title,
                amount=amount,
                applies_to_variant_id=unit.variant_id,
            )
        )
        return True

    def discount_cart(self, offer: AutomaticOffer, amount: int):
        amount = min(amount, self.budget)
        if amount <= 0:
            return
        self.discount += amount
        self.applied.append(AppliedOffer(id=offer.id, title=offer.title, amount=amount))

    def result(self) -> OfferResolution:
        return OfferResolution(
            waivers=tuple(sorted(self.waivers.values(), key=lambda w: w.unit_id)),
            applied_offers=tuple(self.applied),
            offer_discount=self.discount,
        )


def _apply_cart_discount(state: _OfferPass, offer: AutomaticOffer):
    terms = offer.terms
    pool = state.pool(terms)
    if not pool or not state.thresholds_met(terms, pool):
        return

    eligible_total = sum(u.unit_selling_price for u in pool)
    if terms.discount_type == DiscountType.PERCENT:
        amount = percent_of(eligible_total, terms.discount_value)
    else:
        amount = floor_money(terms.discount_value)

    if terms.max_discount_amount is not None:
        amount = min(amount, terms.max_discount_amount)
    state.discount_cart(offer, min(amount, eligible_total))


def _apply_buy_x_get_y(state: _OfferPass, offer: AutomaticOffer):
    terms = offer.terms
    buy_x, get_y = terms.action_buy_x, terms.action_get_y
    count_size = terms.cond_required_size or terms.action_target_size
    target_size = terms.action_target_size or count_size
    if count_size is None:
        logger.warning(f"Offer {offer.id} has buy/get quantities but no size, skipped")
        return

    pool = state.pool(terms)
    if not state.thresholds_met(terms, pool):
        return

    counted = [u for u in pool if u.eligible_size == count_size]
    if target_size == count_size:
        groups = len(counted) // (buy_x + get_y)
        targets = counted
    else:
        groups = len(counted) // buy_x
        targets = [u for u in pool if u.eligible_size == target_size]

    if groups < 1:
        return

    if terms.action_target_max_price is not None:
        targets = [u for u in targets if u.unit_selling_price <= terms.action_target_max_price]

    for unit in _cheapest_first(targets)[: groups * get_y]:
        state.waive(offer, unit)


def _apply_category_gift(state: _OfferPass, offer: AutomaticOffer):
    terms = offer.terms
    pool = state.pool(terms)
    if not state.thresholds_met(terms, pool):
        return

    triggers = [
        u for u in state.units
        if u.eligible_category == terms.cond_required_category
        and (terms.include_bundles or not u.part_of_bundle)
    ]
    if not triggers:
        return

    targets = [
        u for u in pool
        if u.eligible_size == terms.action_target_size
        and (terms.action_target_max_price is None
             or u.unit_selling_price <= terms.action_target_max_price)
    ]
    if targets:
        state.waive(offer, _cheapest_first(targets)[0])


def resolve_offers(
    units: Sequence[NormalizedUnit],
    promotions: Iterable[Promotion],
    now: datetime,
) -> OfferResolution:
    state = _OfferPass(units)

    for offer in active_automatic_offers(promotions, now):
        terms = offer.terms
        if terms.discount_type != DiscountType.FREE_ITEM:
            _apply_cart_discount(state, offer)
        elif (terms.action_buy_x or 0) > 0 and (terms.action_get_y or 0) > 0:
            _apply_buy_x_get_y(state, offer)
        elif terms.cond_required_category and terms.action_target_size:
            _apply_category_gift(state, offer)
        else:
            logger.warning(f"Offer {offer.id} is a free item offer without a usable rule, skipped")

    return state.result()
