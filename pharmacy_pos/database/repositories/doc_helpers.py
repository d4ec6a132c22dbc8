"""
Helpers shared by invoices_repo and quotations_repo: line validation, totals,
and date-scoped document numbers.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
import sqlite3
from typing import Sequence

from .errors import ValidationError
from ...utils.helpers import round_money, round_rupees, today_str
from ...utils.validators import (
    is_non_negative_int,
    is_non_negative_number,
    is_positive_int,
    non_empty,
    try_parse_float,
)


@dataclass
class DocumentLine:
    medicine_id: int
    quantity: int
    unit_price: float
    free_quantity: int = 0
    ptr: float | None = None

    @property
    def total_price(self) -> float:
        return float(round_money(Decimal(str(self.unit_price)) * self.quantity))


def validate_lines(conn: sqlite3.Connection, lines: Sequence[DocumentLine]) -> None:
    """Reject empty/malformed lines and unknown medicines. Read-only."""
    if not lines:
        raise ValidationError("At least one line item is required.")

    for pos, ln in enumerate(lines, start=1):
        if not is_positive_int(ln.quantity):
            raise ValidationError(f"Line {pos}: quantity must be a positive whole number.")
        if not is_non_negative_int(ln.free_quantity or 0):
            raise ValidationError(f"Line {pos}: free quantity must be a non-negative whole number.")
        if not is_non_negative_number(ln.unit_price):
            raise ValidationError(f"Line {pos}: unit price must be a non-negative number.")
        if ln.ptr is not None and not try_parse_float(ln.ptr)[0]:
            raise ValidationError(f"Line {pos}: PTR must be a number.")

    wanted = {ln.medicine_id for ln in lines}
    marks = ",".join("?" for _ in wanted)
    found = {
        int(r[0])
        for r in conn.execute(f"SELECT id FROM medicines WHERE id IN ({marks})", tuple(wanted))
    }
    missing = sorted(wanted - found, key=str)
    if missing:
        raise ValidationError(f"Unknown medicine id(s): {', '.join(map(str, missing))}.")


def validate_client(conn: sqlite3.Connection, client_id: int | None, client_name: str | None) -> None:
    if client_id is None:
        if not non_empty(client_name):
            raise ValidationError("A client id or client name is required.")
        return
    row = conn.execute(
        "SELECT 1 FROM parties WHERE id=? AND role='client'", (client_id,)
    ).fetchone()
    if row is None:
        raise ValidationError(f"Unknown client id: {client_id}.")


def validate_rep(conn: sqlite3.Connection, sales_rep_id: int | None) -> None:
    if sales_rep_id is None:
        return
    if conn.execute("SELECT 1 FROM sales_reps WHERE id=?", (sales_rep_id,)).fetchone() is None:
        raise ValidationError(f"Unknown sales rep id: {sales_rep_id}.")


def subtotal(lines: Sequence[DocumentLine]) -> float:
    """Sum of the already-rounded line totals, so the header matches its items."""
    total = sum((Decimal(str(ln.total_price)) for ln in lines), Decimal(0))
    return float(round_money(total))


def tax_from_groups(conn: sqlite3.Connection, lines: Sequence[DocumentLine]) -> float:
    """
    GST for the lines at each medicine's group rate (medicines without a group
    are untaxed). Used when the caller does not supply a tax amount.
    """
    rates = {
        int(r["id"]): Decimal(str(r["gst"] or 0))
        for r in conn.execute(
            "SELECT m.id, ig.gst_percentage AS gst "
            "FROM medicines m LEFT JOIN item_groups ig ON ig.id = m.group_id"
        )
    }
    tax = Decimal(0)
    for ln in lines:
        rate = rates.get(int(ln.medicine_id), Decimal(0))
        tax += Decimal(str(ln.unit_price)) * ln.quantity * rate / 100
    return float(round_money(tax))


def final_amount(total_amount: float, tax: float, discount: float) -> int:
    """final = round(total + tax - discount), half-up to a whole rupee."""
    value = Decimal(str(total_amount)) + Decimal(str(tax)) - Decimal(str(discount))
    return round_rupees(value)


def _date_key(on_date: date | str | None) -> str:
    if on_date is None:
        return today_str()
    if isinstance(on_date, date):
        return on_date.isoformat()
    return str(on_date)[:10]


def count_for_day(conn: sqlite3.Connection, table: str, on_date: date | str | None) -> int:
    row = conn.execute(
        f"SELECT COUNT(*) FROM {table} WHERE DATE(created_at) = DATE(?)",
        (_date_key(on_date),),
    ).fetchone()
    return int(row[0])


def format_doc_number(prefix: str, on_date: date | str | None, seq: int) -> str:
    return f"{prefix}-{_date_key(on_date).replace('-', '')}-{seq:03d}"
