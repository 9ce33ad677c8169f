"""Presentation rounding and number formatting"""

from decimal import Decimal, ROUND_HALF_UP


def round_currency(amount: float) -> int:
    """Round to whole currency units, halves away from zero (33472.5 -> 33473)"""
    return int(Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_currency(amount: float, unit: str = "元") -> str:
    """Rounded amount with thousands separators: 100416.95 -> '100,417 元'"""
    return f"{round_currency(amount):,} {unit}"


def format_rate(rate_percent: float) -> str:
    """Percent rate with two decimals: 2.5 -> '2.50 %'"""
    return f"{rate_percent:.2f} %"
