"""tr-TR currency and number formatting.

Mirrors the browser's ``Intl.NumberFormat("tr-TR")`` output: ``.`` groups
thousands, ``,`` separates decimals and the currency symbol is prefixed
(``₺1.234,56``).
"""

from decimal import ROUND_HALF_UP, Decimal

CURRENCY_SYMBOLS = {
    "TRY": "₺",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
}


def _format_decimal(value: Decimal | float | int, min_digits: int, max_digits: int) -> str:
    amount = Decimal(str(value)).quantize(Decimal(1).scaleb(-max_digits), rounding=ROUND_HALF_UP)
    negative = amount < 0
    whole, _, fraction = f"{abs(amount):f}".partition(".")

    fraction = fraction.rstrip("0")
    if len(fraction) < min_digits:
        fraction = fraction.ljust(min_digits, "0")

    grouped = f"{int(whole):,}".replace(",", ".")
    text = f"{grouped},{fraction}" if fraction else grouped
    if negative and (int(whole) or fraction.strip("0")):
        text = f"-{text}"
    return text


def _with_symbol(text: str, currency: str) -> str:
    symbol = CURRENCY_SYMBOLS.get(currency.upper())
    sign = ""
    if text.startswith("-"):
        sign, text = "-", text[1:]
    if symbol:
        return f"{sign}{symbol}{text}"
    return f"{sign}{currency.upper()}\u00a0{text}"


def format_currency(value: Decimal | float | int, currency: str = "TRY") -> str:
    """Two to four fraction digits: ``₺1.234,50``, ``₺0,1235``."""
    return _with_symbol(_format_decimal(value, 2, 4), currency)


def format_currency_with_precision(
    value: Decimal | float | int,
    currency: str = "TRY",
    fraction_digits: int = 4,
) -> str:
    return _with_symbol(_format_decimal(value, fraction_digits, fraction_digits), currency)


def format_currency_trim_zeros(
    value: Decimal | float | int,
    currency: str = "TRY",
    max_fraction_digits: int = 4,
) -> str:
    return _with_symbol(_format_decimal(value, 0, max_fraction_digits), currency)


def format_number(value: Decimal | float | int) -> str:
    """Up to two fraction digits, no currency: ``1.234,5``."""
    return _format_decimal(value, 0, 2)
