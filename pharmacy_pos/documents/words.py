"""Amount-in-words for printed invoices (English short scale, title case)."""
from __future__ import annotations

from decimal import Decimal, ROUND_DOWN

_ONES = ["", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine"]
_TEENS = ["Ten", "Eleven", "Twelve", "Thirteen", "Fourteen", "Fifteen",
          "Sixteen", "Seventeen", "Eighteen", "Nineteen"]
_TENS = ["", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety"]
_SCALES = ["Thousand", "Million", "Billion", "Trillion"]


def number_to_words(n: int) -> str:
    """number_to_words(1250) -> 'One Thousand Two Hundred Fifty'."""
    if n < 0:
        return "Minus " + number_to_words(-n)
    if n == 0:
        return "Zero"
    if n < 10:
        return _ONES[n]
    if n < 20:
        return _TEENS[n - 10]
    if n < 100:
        t, o = divmod(n, 10)
        return f"{_TENS[t]} {_ONES[o]}".strip()
    if n < 1000:
        h, rest = divmod(n, 100)
        return f"{_ONES[h]} Hundred {number_to_words(rest) if rest else ''}".strip()
    for idx, word in enumerate(_SCALES, start=1):
        unit = 1000 ** idx
        if n < unit * 1000 or idx == len(_SCALES):
            high, rest = divmod(n, unit)
            tail = f" {number_to_words(rest)}" if rest else ""
            return f"{number_to_words(high)} {word}{tail}"
    raise AssertionError("unreachable")


def amount_in_words(amount: float | int | Decimal) -> str:
    """
    Whole rupees of `amount` in words + ' Only'. Paise are dropped, not spelled:
    amount_in_words(1250.75) -> 'One Thousand Two Hundred Fifty Only'.
    """
    rupees = int(Decimal(str(amount)).to_integral_value(rounding=ROUND_DOWN))
    return f"{number_to_words(rupees)} Only"
