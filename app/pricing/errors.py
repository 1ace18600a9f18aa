from typing import Iterable


class EngineError(Exception):
    """Base for everything the pricing engine raises."""


class StructuralError(EngineError):
    """The submitted cart itself is invalid. Refresh and retry."""


class MalformedBundleError(StructuralError):
    def __init__(self, line_index: int, reason: str):
        self.line_index = line_index
        self.reason = reason
        super().__init__(f"Bundle line {line_index} is malformed: {reason}")


class StaleCartError(StructuralError):
    def __init__(self, missing_variant_ids: Iterable[int]):
        self.missing_variant_ids = tuple(sorted(missing_variant_ids))
        super().__init__(
            f"Cart references unknown variants: {list(self.missing_variant_ids)}"
        )


class InvariantViolation(EngineError):
    """A defect in offer composition. Never shown to shoppers as-is."""


class NegativeTotalInvariantViolation(InvariantViolation):
    def __init__(self, product_total: int, offer_discount: int, discount_amount: int):
        self.product_total = product_total
        self.offer_discount = offer_discount
        self.discount_amount = discount_amount
        super().__init__(
            f"Discounts exceed product total: offers={offer_discount} "
            f"coupon={discount_amount} product_total={product_total}"
        )
