# utils/helpers.py
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
import logging
from typing import Union, Optional

from ..constants import CURRENCY_SYMBOL

NumberLike = Union[float, int, str]

_log = logging.getLogger(__name__)


def today_str() -> str:
    """Return today's date as ISO string (YYYY-MM-DD)."""
    return date.today().isoformat()


def now_str() -> str:
    """Local timestamp in the same shape SQLite's CURRENT_TIMESTAMP uses."""
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")


def fmt_money(
    v: NumberLike,
    places: int = 2,
    *,
    strict: bool = False,
    sentinel: Optional[str] = None,
) -> str:
    """
    Format a number as money with thousands separators and a fixed number of decimals.

    Behavior on parse failure:
      - By default (strict=False, sentinel=None), returns str(v).
      - If `sentinel` is provided (e.g., "N/A"), returns that sentinel instead.
      - If `strict=True`, raises ValueError on parse failures.
    """
    try:
        x = float(v)
    except Exception as e:
        _log.debug("fmt_money: failed to parse %r as float: %s", v, e)
        if strict:
            raise ValueError(f"Could not parse {v!r} as a number.") from e
        return str(sentinel) if sentinel is not None else str(v)
    return f"{x:,.{places}f}"


def fmt_currency(v: NumberLike) -> str:
    """Printed-document money: rupee glyph, two decimals, no separators (₹1234.50)."""
    return f"{CURRENCY_SYMBOL}{round_money(v):.2f}"


def round_money(v: NumberLike, places: int = 2) -> Decimal:
    """Half-up rounding to `places` decimals (1.375 -> 1.38)."""
    q = Decimal(1).scaleb(-places)
    return Decimal(str(v)).quantize(q, rounding=ROUND_HALF_UP)


def round_rupees(v: NumberLike) -> int:
    """Half-up rounding to a whole rupee (57.75 -> 58, 57.5 -> 58)."""
    return int(Decimal(str(v)).quantize(Decimal(1), rounding=ROUND_HALF_UP))
