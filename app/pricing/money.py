from decimal import Decimal, ROUND_FLOOR
from typing import List, Union

Number = Union[int, float, Decimal]


def to_decimal(value: Number) -> Decimal:
    # str() first so 0.1 stays 0.1 instead of its binary expansion
    return Decimal(str(value))


def floor_money(value: Number) -> int:
    return int(to_decimal(value).to_integral_value(rounding=ROUND_FLOOR))


def selling_price(list_price: int, discount_percent: Number) -> int:
    """floor(list_price * (1 - discount_percent / 100))"""
    factor = 1 - to_decimal(discount_percent) / 100
    return floor_money(to_decimal(list_price) * factor)


def percent_of(amount: int, percent: Number) -> int:
    return floor_money(to_decimal(amount) * to_decimal(percent) / 100)


def split_evenly(total: int, parts: int) -> List[int]:
    """
    Floor-divide ``total`` into ``parts`` shares. The last share takes the
    remainder so the shares always sum back to ``total``.
    """
    share = total // parts
    shares = [share] * parts
    shares[-1] += total - share * parts
    return shares
