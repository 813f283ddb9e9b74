"""
Subscription and invoice pricing: base price selection, discounts, effective
price and invoice totals.
All amounts are USD-style two-decimal values.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, Iterable, Mapping

CENT = Decimal("0.01")
ZERO = Decimal("0")
HUNDRED = Decimal("100")


def to_decimal(value: Any) -> Decimal:
    """Coerce a numeric-ish value to Decimal; anything unusable becomes 0."""
    if isinstance(value, bool) or value is None:
        return ZERO
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return ZERO
    if not result.is_finite():
        return ZERO
    return result


def to_cents(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def clamp_percent(value: Any) -> Decimal:
    """Clamp a percentage to [0, 100]."""
    return min(HUNDRED, max(ZERO, to_decimal(value)))


def clamp_discount(discount_percent: Any) -> Decimal:
    return clamp_percent(discount_percent)


def select_base_price(custom_price: Any = None, plan_price: Any = None) -> Decimal:
    """
    Price the discount applies to: a positive custom price wins over the plan price.
    """
    custom = to_decimal(custom_price)
    if custom > 0:
        return custom
    return to_decimal(plan_price)


def discount_amount(base_price: Any, discount_percent: Any) -> Decimal:
    """Amount saved by the discount, in cents."""
    base = max(ZERO, to_decimal(base_price))
    return to_cents(base * clamp_discount(discount_percent) / HUNDRED)


def effective_price(base_price: Any, discount_percent: Any) -> Decimal:
    """
    Price actually charged after a percentage discount.

    >>> effective_price(100, 20)
    Decimal('80.00')
    >>> effective_price(100, 150)
    Decimal('0.00')
    """
    base = to_decimal(base_price)
    price = base - base * clamp_discount(discount_percent) / HUNDRED
    return to_cents(max(ZERO, price))


def _line_field(item: Mapping[str, Any], camel: str, snake: str) -> Any:
    value = item.get(camel)
    return item.get(snake) if value is None else value


def invoice_totals(items: Iterable[Mapping[str, Any]]) -> Dict[str, Decimal]:
    """
    Subtotal, tax and total of invoice line items.

    Each line is ``quantity * unitPrice`` plus ``taxRate`` percent of that,
    with the rate clamped to [0, 100] and negative quantities or prices read
    as 0. Sums are kept exact and rounded once, and ``total`` is
    ``subtotal + tax`` so the printed figures always add up.

    >>> invoice_totals([{"quantity": 3, "unitPrice": 19.99, "taxRate": 8.25}])
    {'subtotal': Decimal('59.97'), 'tax': Decimal('4.95'), 'total': Decimal('64.92')}
    """
    subtotal = tax = ZERO
    for item in items:
        quantity = max(ZERO, to_decimal(_line_field(item, "quantity", "quantity")))
        unit_price = max(ZERO, to_decimal(_line_field(item, "unitPrice", "unit_price")))
        line = quantity * unit_price
        subtotal += line
        tax += line * clamp_percent(_line_field(item, "taxRate", "tax_rate")) / HUNDRED
    subtotal = to_cents(subtotal)
    tax = to_cents(tax)
    return {"subtotal": subtotal, "tax": tax, "total": subtotal + tax}
