"""Rupee amount rendering: Indian-English words and display formatting."""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Final

from frontdesk.services.invoice_calculations import round_money, to_decimal

_ONES: Final = (
    "", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine",
    "Ten", "Eleven", "Twelve", "Thirteen", "Fourteen", "Fifteen", "Sixteen",
    "Seventeen", "Eighteen", "Nineteen",
)
_TENS: Final = (
    "", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty",
    "Ninety",
)

CRORE: Final = 10_000_000
LAKH: Final = 100_000
THOUSAND: Final = 1_000

_CURRENCY_SYMBOLS: Final = {"INR": "₹", "USD": "$", "EUR": "€", "GBP": "£"}


def _hundreds_to_words(number: int) -> list[str]:
    """Words for 0..999; zero yields no words."""

    words: list[str] = []
    hundreds, number = divmod(number, 100)
    if hundreds:
        words += [_ONES[hundreds], "Hundred"]
    if number > 19:
        tens, number = divmod(number, 10)
        words.append(_TENS[tens])
    if number:
        words.append(_ONES[number])
    return words


def _indian_words(number: int) -> list[str]:
    # Crores are not capped: 1000 crore renders as "One Thousand Crore".
    crores, number = divmod(number, CRORE)
    lakhs, number = divmod(number, LAKH)
    thousands, number = divmod(number, THOUSAND)

    words: list[str] = []
    if crores:
        words += _indian_words(crores) + ["Crore"]
    if lakhs:
        words += _hundreds_to_words(lakhs) + ["Lakh"]
    if thousands:
        words += _hundreds_to_words(thousands) + ["Thousand"]
    words += _hundreds_to_words(number)
    return words


def number_to_words(amount: Any) -> str:
    """Render a rupee amount in words using crore/lakh/thousand grouping.

    >>> number_to_words(1500.50)
    'One Thousand Five Hundred Rupees and Fifty Paise Only'
    >>> number_to_words(0)
    'Zero Rupees Only'
    """

    value = to_decimal(amount)
    if value < 0:
        return f"Negative {number_to_words(-value)}"

    rupees = int(value)
    paise = int(((value - rupees) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    if paise == 100:
        rupees, paise = rupees + 1, 0

    parts: list[str] = []
    if rupees > 0:
        parts.append(" ".join(_indian_words(rupees) + ["Rupees"]))
    if paise > 0:
        parts.append(" ".join(_hundreds_to_words(paise) + ["Paise"]))

    if not parts:
        return "Zero Rupees Only"
    return " and ".join(parts) + " Only"


def _group_indian(digits: str) -> str:
    """Group an integer digit string as 12,34,56,789."""

    if len(digits) <= 3:
        return digits
    head, last3 = digits[:-3], digits[-3:]
    pairs = [head[max(i - 2, 0):i] for i in range(len(head), 0, -2)][::-1]
    return ",".join(pairs + [last3])


def format_currency(amount: Any, currency: str = "INR") -> str:
    """Format an amount for display with two decimals.

    INR uses Indian digit grouping (``₹1,00,000.00``); other currencies use
    western grouping and their symbol, or the ISO code when no symbol is known.
    """

    code = currency.upper()
    value = round_money(to_decimal(amount))
    sign = "-" if value < 0 else ""
    whole, _, fraction = f"{abs(value):.2f}".partition(".")

    grouped = _group_indian(whole) if code == "INR" else f"{int(whole):,}"
    symbol = _CURRENCY_SYMBOLS.get(code, f"{code} ")
    return f"{sign}{symbol}{grouped}.{fraction}"
