"""
Money helpers

All amounts are Decimal and rounded half-up to cents, the way the shop
prints them on orders and remitos.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

CENTS = Decimal("0.01")
ZERO = Decimal("0")


def round_money(amount: Decimal) -> Decimal:
    """Round to two decimals using round-half-up"""
    return Decimal(amount).quantize(CENTS, rounding=ROUND_HALF_UP)


def line_subtotal(quantity: Optional[Decimal], unit_price: Optional[Decimal]) -> Decimal:
    """quantity x unit price, or zero when either operand is missing"""
    if quantity is None or unit_price is None:
        return ZERO
    return quantity * unit_price


def total_of(subtotals: Iterable[Decimal]) -> Decimal:
    """Rounded sum of unrounded subtotals"""
    return round_money(sum(subtotals, ZERO))
