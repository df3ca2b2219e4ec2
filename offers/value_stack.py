"""Value-stack arithmetic for an offer's product set.

Works on any iterable of objects exposing `value` and `is_bonus` (model
instances, or plain records in tests). Pure and total: the empty set yields
zero sums and a zero multiplier.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Tuple

ZERO = Decimal("0")
ONE_DECIMAL = Decimal("0.1")


@dataclass(frozen=True)
class ValueStack:
    total_value: Decimal
    main_value: Decimal
    bonus_value: Decimal
    value_multiplier: Decimal
    main_products: Tuple
    bonuses: Tuple


def _to_decimal(value) -> Decimal:
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def sum_values(products) -> Decimal:
    return sum((_to_decimal(p.value) for p in products), ZERO)


def value_multiplier(total_value, price) -> Decimal:
    """total_value / price rounded to one decimal; exactly 0 when price is 0 or unset."""
    price = _to_decimal(price)
    if price <= ZERO:
        return ZERO
    return (_to_decimal(total_value) / price).quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP)


def calculate_value_stack(products, price=None) -> ValueStack:
    products = list(products)
    main_products = tuple(p for p in products if not p.is_bonus)
    bonuses = tuple(p for p in products if p.is_bonus)
    main_value = sum_values(main_products)
    bonus_value = sum_values(bonuses)
    total_value = main_value + bonus_value
    return ValueStack(
        total_value=total_value,
        main_value=main_value,
        bonus_value=bonus_value,
        value_multiplier=value_multiplier(total_value, price),
        main_products=main_products,
        bonuses=bonuses,
    )
