from __future__ import annotations
from dataclasses import dataclass
from datetime import date
import logging
import sqlite3
from typing import Iterable

from .doc_helpers import (
    DocumentLine,
    count_for_day,
    final_amount,
    format_doc_number,
    subtotal,
    tax_from_groups,
    validate_client,
    validate_lines,
    validate_rep,
)
from .errors import PersistenceError, ValidationError
from .parties_repo import PartiesRepo
from .tx import immediate_tx
from ...constants import QUOTATION_PREFIX
from ...utils.helpers import now_str, round_money
from ...utils.validators import is_non_negative_number

_log = logging.getLogger(__name__)


@dataclass
class QuotationHeader:
    client_id: int | None = None
    client_name: str | None = None
    sales_rep_id: int | None = None
    discount: float = 0.0
    tax: float | None = None
    quotation_number: str | None = None
    created_at: str | None = None


QuotationLine = DocumentLine


class QuotationsRepo:
    """
    Quotations mirror invoices (header + lines, same totals) but carry no
    payment mode or status and never move stock.
    """

    def __init__(self, conn: sqlite3.Connection):
        conn.row_factory = sqlite3.Row
        self.conn = conn

    def generate_quotation_number(self, on_date: date | str | None = None) -> str:
        seq = count_for_day(self.conn, "quotations", on_date) + 1
        return format_doc_number(QUOTATION_PREFIX, on_date, seq)

    def create_quotation(self, header: QuotationHeader, items: Iterable[QuotationLine]) -> int:
        items = list(items)
        validate_lines(self.conn, items)
        validate_client(self.conn, header.client_id, header.client_name)
        validate_rep(self.conn, header.sales_rep_id)
        if not is_non_negative_number(header.discount):
            raise ValidationError("Discount must be a non-negative number.")
        if header.tax is not None and not is_non_negative_number(header.tax):
            raise ValidationError("Tax must be a non-negative number.")

        created_at = header.created_at or now_str()

        try:
            with immediate_tx(self.conn):
                # group GST rates are read under the write lock
                total = subtotal(items)
                tax = (
                    tax_from_groups(self.conn, items)
                    if header.tax is None
                    else float(round_money(header.tax))
                )
                final = final_amount(total, tax, header.discount)

                client_id = header.client_id
                if client_id is None:
                    client_id = PartiesRepo(self.conn, "client").get_or_create(header.client_name)
                number = header.quotation_number or format_doc_number(
                    QUOTATION_PREFIX,
                    created_at,
                    count_for_day(self.conn, "quotations", created_at) + 1,
                )
                cur = self.conn.execute(
                    """
                    INSERT INTO quotations (
                        quotation_number, client_id, sales_rep_id,
                        total_amount, discount, tax, final_amount, created_at
                    ) VALUES (?,?,?,?,?,?,?,?)
                    """,
                    (number, client_id, header.sales_rep_id, total,
                     float(header.discount), tax, final, created_at),
                )
                quotation_id = int(cur.lastrowid)
                self.conn.executemany(
                    """
                    INSERT INTO quotation_items (
                        quotation_id, medicine_id, quantity, free_quantity,
                        unit_price, ptr, total_price
                    ) VALUES (?,?,?,?,?,?,?)
                    """,
                    [
                        (
                            quotation_id, it.medicine_id, int(it.quantity),
                            int(it.free_quantity or 0), float(it.unit_price),
                            None if it.ptr is None else float(it.ptr), it.total_price,
                        )
                        for it in items
                    ],
                )
        except sqlite3.Error as e:
            _log.warning("quotation save rolled back: %s", e)
            raise PersistenceError(f"Could not save quotation: {e}") from e

        _log.info("quotation %s saved: id=%s lines=%d", number, quotation_id, len(items))
        return quotation_id

    def get_quotation_details(self, quotation_id: int) -> dict | None:
        r = self.conn.execute(
            """
            SELECT q.*,
                   p.name    AS client_name,
                   p.address AS client_address,
                   p.phone   AS client_phone,
                   p.gstin   AS client_gstin
            FROM quotations q
            LEFT JOIN parties p ON p.id = q.client_id
            WHERE q.id = ?
            """,
            (quotation_id,),
        ).fetchone()
        if r is None:
            return None
        details = dict(r)
        details["items"] = [
            dict(x)
            for x in self.conn.execute(
                """
                SELECT qi.*, m.name AS medicine_name, m.hsn, m.batch_number
                FROM quotation_items qi
                JOIN medicines m ON m.id = qi.medicine_id
                WHERE qi.quotation_id = ?
                ORDER BY qi.id
                """,
                (quotation_id,),
            )
        ]
        return details

    def list_quotations(self) -> list[dict]:
        return [
            dict(r)
            for r in self.conn.execute(
                """
                SELECT q.id, q.quotation_number, q.created_at,
                       CAST(q.final_amount AS REAL) AS final_amount,
                       p.name AS client_name
                FROM quotations q
                LEFT JOIN parties p ON p.id = q.client_id
                ORDER BY q.created_at DESC, q.id DESC
                """
            )
        ]
