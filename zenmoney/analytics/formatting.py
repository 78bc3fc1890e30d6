"""Display formatting for amounts and dates (Indonesian Rupiah conventions)."""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Union

Number = Union[Decimal, int, float]

CURRENCY_SYMBOLS: dict[str, str] = {
    "IDR": "Rp",
    "USD": "$",
    "EUR": "€",
    "INR": "₹",
}

# (threshold, suffix) largest first; id-ID short compact notation
_COMPACT_UNITS: tuple[tuple[Decimal, str], ...] = (
    (Decimal("1e12"), "T"),
    (Decimal("1e9"), "M"),
    (Decimal("1e6"), "jt"),
    (Decimal("1e3"), "rb"),
)


def currency_symbol(currency_code: str) -> str:
    """Display symbol for an ISO currency code; unknown codes are shown as-is."""
    return CURRENCY_SYMBOLS.get(currency_code.upper(), currency_code)


def _to_whole(value: Decimal) -> Decimal:
    # Wide enough for any finite magnitude, so rounding never runs out of digits
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 2)
        return value.to_integral_value(rounding=ROUND_HALF_UP)


def _group_thousands(value: Decimal) -> str:
    return f"{_to_whole(value):,f}".replace(",", ".")


def format_currency(amount: Number, symbol: str = "Rp") -> str:
    """
    Whole-unit currency with dot thousands separators.

    >>> format_currency(10000000)
    'Rp 10.000.000'
    """
    value = Decimal(str(amount))
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol} {_group_thousands(value.copy_abs())}"


def format_compact(amount: Number) -> str:
    """
    Short form for chart centres: 10 jt, 1,5 jt, 150 rb.
    """
    value = Decimal(str(amount))
    sign = "-" if value < 0 else ""
    value = value.copy_abs()

    for threshold, suffix in _COMPACT_UNITS:
        if value >= threshold:
            scaled = value / threshold
            if scaled < 10:
                text = str(scaled.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))
                text = text.rstrip("0").rstrip(".").replace(".", ",")
            else:
                text = f"{_to_whole(scaled):f}"
            return f"{sign}{text} {suffix}"

    return f"{sign}{_group_thousands(value)}"


def format_signed(amount: Number, is_income: bool, symbol: str = "Rp") -> str:
    """Amount prefixed with + for income and - for expense."""
    return ("+" if is_income else "-") + format_currency(amount, symbol)


def format_date(value: date) -> str:
    """e.g. 'May 1, 2024'."""
    return f"{value.strftime('%b')} {value.day}, {value.year}"
