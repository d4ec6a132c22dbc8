# utils/validators.py
import math


def non_empty(text: str) -> bool:
    """
    True if `text` is not None/empty after stripping whitespace.
    """
    return bool(text and str(text).strip())


# ---- Numeric parsing & validators ----

def try_parse_float(x):
    """
    Best-effort parse to float.

    Returns:
        (ok: bool, value: float|None)

    ok == False means parsing failed (or the value is NaN/inf) and value is None.
    """
    if isinstance(x, bool):
        return False, None
    try:
        val = float(x)
    except (TypeError, ValueError):
        return False, None
    if not math.isfinite(val):
        return False, None
    return True, val


def is_non_negative_number(x) -> bool:
    """
    True iff x parses to a finite float and value >= 0.
    """
    ok, val = try_parse_float(x)
    return bool(ok and val is not None and val >= 0)


def is_whole_number(x) -> bool:
    """True for ints and integral floats (3, 3.0); False for bools, 2.5, '3'."""
    if isinstance(x, bool):
        return False
    if isinstance(x, int):
        return True
    return isinstance(x, float) and math.isfinite(x) and x.is_integer()


def is_positive_int(x) -> bool:
    return is_whole_number(x) and x > 0


def is_non_negative_int(x) -> bool:
    return is_whole_number(x) and x >= 0
