from __future__ import annotations
from dataclasses import dataclass
from datetime import date
import logging
import sqlite3
from typing import Iterable, Sequence

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
from ...constants import DEFAULT_INVOICE_STATUS, INVOICE_PREFIX, INVOICE_STATUSES
from ...utils.helpers import now_str, round_money
from ...utils.validators import is_non_negative_number

_log = logging.getLogger(__name__)


@dataclass
class InvoiceHeader:
    client_id: int | None = None
    client_name: str | None = None   # inline new client, resolved inside the commit
    sales_rep_id: int | None = None
    payment_mode: str | None = None
    status: str = DEFAULT_INVOICE_STATUS
    discount: float = 0.0
    tax: float | None = None         # None -> computed from the medicines' GST groups
    invoice_number: str | None = None  # None -> numbered inside the commit
    created_at: str | None = None    # 'YYYY-MM-DD HH:MM:SS', local time by default


# Invoice lines carry exactly the shared document line fields
InvoiceLine = DocumentLine


class InvoicesRepo:
    """
    Invoices + their line items.

    Key behavior:
      - commit_invoice() writes header, items and stock decrements in one
        IMMEDIATE transaction; either all of it lands or none of it does.
      - Stock is decremented by `quantity` (free quantity is informational) and
        is not clamped, so it can go negative.
      - Invoices are immutable once committed: there is no update/delete here.
    """

    def __init__(self, conn: sqlite3.Connection):
        # ensure rows behave like dicts/tuples
        conn.row_factory = sqlite3.Row
        self.conn = conn

    # ---------------------------------------------------------------------
    # NUMBERING
    # ---------------------------------------------------------------------
    def generate_invoice_number(self, on_date: date | str | None = None) -> str:
        """
        INV-YYYYMMDD-NNN where NNN = invoices already created that day + 1.

        Read-only: nothing is reserved, so two callers can be handed the same
        number. commit_invoice() without an explicit number avoids this by
        numbering inside its own write transaction.
        """
        seq = count_for_day(self.conn, "invoices", on_date) + 1
        return format_doc_number(INVOICE_PREFIX, on_date, seq)

    # ---------------------------------------------------------------------
    # WRITE
    # ---------------------------------------------------------------------
    def _validate(self, header: InvoiceHeader, items: Sequence[InvoiceLine]) -> None:
        validate_lines(self.conn, items)
        validate_client(self.conn, header.client_id, header.client_name)
        validate_rep(self.conn, header.sales_rep_id)
        if not is_non_negative_number(header.discount):
            raise ValidationError("Discount must be a non-negative number.")
        if header.tax is not None and not is_non_negative_number(header.tax):
            raise ValidationError("Tax must be a non-negative number.")
        if header.status not in INVOICE_STATUSES:
            raise ValidationError(
                f"Status must be one of {', '.join(INVOICE_STATUSES)}, got {header.status!r}."
            )

    def _insert_header(self, header: InvoiceHeader, client_id: int, number: str,
                       created_at: str, total: float, tax: float, final: int) -> int:
        cur = self.conn.execute(
            """
            INSERT INTO invoices (
                invoice_number, client_id, sales_rep_id,
                total_amount, discount, tax, final_amount,
                payment_mode, status, created_at
            )
            VALUES (?,?,?,?,?,?,?,?,?,?)
            """,
            (
                number,
                client_id,
                header.sales_rep_id,
                total,
                float(header.discount),
                tax,
                final,
                header.payment_mode,
                header.status,
                created_at,
            ),
        )
        return int(cur.lastrowid)

    def _insert_item(self, invoice_id: int, it: InvoiceLine) -> int:
        cur = self.conn.execute(
            """
            INSERT INTO invoice_items (
                invoice_id, medicine_id, quantity, free_quantity,
                unit_price, ptr, total_price
            ) VALUES (?,?,?,?,?,?,?)
            """,
            (
                invoice_id,
                it.medicine_id,
                int(it.quantity),
                int(it.free_quantity or 0),
                float(it.unit_price),
                None if it.ptr is None else float(it.ptr),
                it.total_price,
            ),
        )
        return int(cur.lastrowid)

    def _decrement_stock(self, medicine_id: int, qty: int) -> None:
        self.conn.execute(
            "UPDATE medicines SET stock = stock - ?, updated_at = CURRENT_TIMESTAMP WHERE id = ?",
            (int(qty), medicine_id),
        )

    def commit_invoice(self, header: InvoiceHeader, items: Iterable[InvoiceLine]) -> int:
        """
        Durably record a sale and return the new invoice id.

        Raises:
            ValidationError: bad input; nothing was written.
            PersistenceError: the store rejected the write; everything was rolled back.
        """
        items = list(items)
        self._validate(header, items)

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

                number = header.invoice_number or format_doc_number(
                    INVOICE_PREFIX,
                    created_at,
                    count_for_day(self.conn, "invoices", created_at) + 1,
                )
                invoice_id = self._insert_header(
                    header, client_id, number, created_at, total, tax, final
                )
                for it in items:
                    self._insert_item(invoice_id, it)
                    self._decrement_stock(it.medicine_id, it.quantity)
        except sqlite3.Error as e:
            _log.warning("invoice commit rolled back: %s", e)
            raise PersistenceError(f"Could not save invoice: {e}") from e

        _log.info(
            "invoice %s committed: id=%s lines=%d final=%s",
            number, invoice_id, len(items), final,
        )
        return invoice_id

    # ---------------------------------------------------------------------
    # READ
    # ---------------------------------------------------------------------
    def get_header(self, invoice_id: int) -> dict | None:
        r = self.conn.execute("SELECT * FROM invoices WHERE id=?", (invoice_id,)).fetchone()
        return dict(r) if r else None

    def list_items(self, invoice_id: int) -> list[dict]:
        sql = """
        SELECT ii.id, ii.invoice_id, ii.medicine_id,
               m.name AS medicine_name, m.hsn, m.batch_number,
               ii.quantity, ii.free_quantity,
               CAST(ii.unit_price AS REAL)  AS unit_price,
               ii.ptr,
               CAST(ii.total_price AS REAL) AS total_price
        FROM invoice_items ii
        JOIN medicines m ON m.id = ii.medicine_id
        WHERE ii.invoice_id = ?
        ORDER BY ii.id
        """
        return [dict(r) for r in self.conn.execute(sql, (invoice_id,))]

    def get_invoice_details(self, invoice_id: int) -> dict | None:
        """Header + client fields + rep name, with the lines under 'items'."""
        r = self.conn.execute(
            """
            SELECT i.*,
                   p.name    AS client_name,
                   p.address AS client_address,
                   p.phone   AS client_phone,
                   p.gstin   AS client_gstin,
                   sr.name   AS rep_name
            FROM invoices i
            LEFT JOIN parties p     ON p.id  = i.client_id
            LEFT JOIN sales_reps sr ON sr.id = i.sales_rep_id
            WHERE i.id = ?
            """,
            (invoice_id,),
        ).fetchone()
        if r is None:
            return None
        details = dict(r)
        details["items"] = self.list_items(invoice_id)
        return details

    def list_invoices(
        self,
        *,
        client_id: int | None = None,
        rep_id: int | None = None,
        month: str | None = None,     # 'YYYY-MM'
        status: str | None = None,
        query: str = "",
    ) -> list[dict]:
        where: list[str] = []
        params: list = []

        if client_id is not None:
            where.append("i.client_id = ?")
            params.append(client_id)
        if rep_id is not None:
            where.append("i.sales_rep_id = ?")
            params.append(rep_id)
        if month:
            where.append("strftime('%Y-%m', i.created_at) = ?")
            params.append(month)
        if status:
            where.append("i.status = ?")
            params.append(status)
        if query:
            where.append("(i.invoice_number LIKE ? OR p.name LIKE ?)")
            params += [f"%{query}%", f"%{query}%"]

        sql = """
          SELECT i.id, i.invoice_number, i.created_at, i.status, i.payment_mode,
                 CAST(i.total_amount AS REAL) AS total_amount,
                 CAST(i.tax AS REAL)          AS tax,
                 CAST(i.final_amount AS REAL) AS final_amount,
                 p.name  AS client_name,
                 sr.name AS rep_name
          FROM invoices i
          LEFT JOIN parties p     ON p.id  = i.client_id
          LEFT JOIN sales_reps sr ON sr.id = i.sales_rep_id
        """
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY i.created_at DESC, i.id DESC"
        return [dict(r) for r in self.conn.execute(sql, params)]

    def export_rows(self, invoice_ids: Sequence[int]) -> list[dict]:
        """One row per invoice line, for CSV/XLSX export."""
        if not invoice_ids:
            return []
        marks = ",".join("?" for _ in invoice_ids)
        sql = f"""
            SELECT i.invoice_number, i.created_at,
                   p.name  AS client_name,
                   sr.name AS rep_name,
                   m.name  AS medicine_name, m.hsn,
                   ii.quantity, ii.free_quantity,
                   CAST(ii.unit_price AS REAL)  AS unit_price,
                   CAST(ii.total_price AS REAL) AS total_price
            FROM invoices i
            LEFT JOIN parties p     ON p.id  = i.client_id
            LEFT JOIN sales_reps sr ON sr.id = i.sales_rep_id
            JOIN invoice_items ii   ON ii.invoice_id = i.id
            JOIN medicines m        ON m.id = ii.medicine_id
            WHERE i.id IN ({marks})
            ORDER BY i.invoice_number, m.name
        """
        return [dict(r) for r in self.conn.execute(sql, tuple(invoice_ids))]
