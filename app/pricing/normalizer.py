from collections import defaultdict
from typing import Dict, Iterable, List, Mapping, Sequence, Set

from app.pricing.errors import MalformedBundleError, StaleCartError
from app.pricing.money import split_evenly
from app.pricing.types import CartLine, NormalizedUnit, VariantSnapshot

BUNDLE_SIZE = 4


def referenced_variant_ids(lines: Iterable[CartLine]) -> Set[int]:
    ids: Set[int] = set()
    for line in lines:
        ids.update(line.referenced_variant_ids)
    return ids


def _check_bundle(index: int, line: CartLine, bundle_size: int):
    if len(line.component_variant_ids) != bundle_size:
        raise MalformedBundleError(
            index,
            f"expected {bundle_size} components, got {len(line.component_variant_ids)}",
        )
    if line.override_price is None or line.override_price < 0:
        raise MalformedBundleError(index, "missing bundle price")


def normalize_cart(
    lines: Sequence[CartLine],
    variants: Mapping[int, VariantSnapshot],
    bundle_size: int = BUNDLE_SIZE,
) -> List[NormalizedUnit]:
    """
    Expand cart lines into one unit per physical item.

    Plain lines yield ``quantity`` units at the variant's selling price.
    Bundle lines yield ``bundle_size`` units per bundle, splitting the
    bundle price with the last component absorbing the rounding remainder.
    """
    for index, line in enumerate(lines):
        if line.is_bundle:
            _check_bundle(index, line, bundle_size)

    missing = referenced_variant_ids(lines) - set(variants)
    if missing:
        raise StaleCartError(missing)

    units: List[NormalizedUnit] = []

    def emit(index: int, variant: VariantSnapshot, price: int, bundled: bool):
        units.append(
            NormalizedUnit(
                unit_id=len(units),
                source_line_index=index,
                variant_id=variant.id,
                unit_selling_price=price,
                eligible_category=variant.category,
                eligible_size=variant.size_ml,
                part_of_bundle=bundled,
            )
        )

    for index, line in enumerate(lines):
        if line.is_bundle:
            shares = split_evenly(line.override_price, bundle_size)
            for _ in range(line.quantity):
                for variant_id, share in zip(line.component_variant_ids, shares):
                    emit(index, variants[variant_id], share, True)
        else:
            variant = variants[line.variant_id]
            for _ in range(line.quantity):
                emit(index, variant, variant.selling_price, False)

    return units


def original_total(lines: Sequence[CartLine], variants: Mapping[int, VariantSnapshot]) -> int:
    """Sum of list prices; a bundle counts its components' list prices."""
    total = 0
    for line in lines:
        per_line = sum(variants[v].list_price for v in line.referenced_variant_ids)
        total += per_line * line.quantity
    return total


def item_count(lines: Sequence[CartLine]) -> int:
    return sum(line.quantity for line in lines)


def line_totals(units: Iterable[NormalizedUnit]) -> Dict[int, int]:
    totals: Dict[int, int] = defaultdict(int)
    for unit in units:
        totals[unit.source_line_index] += unit.unit_selling_price
    return dict(totals)


def required_stock(lines: Sequence[CartLine]) -> Dict[int, int]:
    """Units needed per variant, counting every bundle component occurrence."""
    needed: Dict[int, int] = defaultdict(int)
    for line in lines:
        for variant_id in line.referenced_variant_ids:
            needed[variant_id] += line.quantity
    return dict(needed)
