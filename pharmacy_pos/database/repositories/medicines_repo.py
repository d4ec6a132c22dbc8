# pharmacy_pos/database/repositories/medicines_repo.py
from __future__ import annotations
from dataclasses import dataclass
import sqlite3

from .errors import DomainError
from .tx import immediate_tx
from ...constants import ITEM_CODE_PREFIX, LOW_STOCK_THRESHOLD
from ...utils.validators import is_non_negative_number, is_whole_number, non_empty


@dataclass
class Medicine:
    id: int | None
    name: str
    hsn: str | None
    item_code: str | None
    batch_number: str | None
    expiry_date: str | None
    price: float
    stock: int
    group_id: int | None
    gst_percentage: float | None = None


_SELECT = """
    SELECT m.id, m.name, m.hsn, m.item_code, m.batch_number, m.expiry_date,
           CAST(m.price AS REAL) AS price, m.stock, m.group_id,
           ig.gst_percentage
    FROM medicines m
    LEFT JOIN item_groups ig ON ig.id = m.group_id
"""


class MedicinesRepo:
    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn
        self.conn.row_factory = sqlite3.Row

    # ---------------------------- Queries ----------------------------

    def list_medicines(self) -> list[Medicine]:
        rows = self.conn.execute(_SELECT + " ORDER BY m.name").fetchall()
        return [Medicine(**r) for r in rows]

    def search(self, term: str) -> list[Medicine]:
        rows = self.conn.execute(
            _SELECT + " WHERE m.name LIKE ? ORDER BY m.name",
            (f"%{term.strip()}%",),
        ).fetchall()
        return [Medicine(**r) for r in rows]

    def get(self, medicine_id: int) -> Medicine | None:
        r = self.conn.execute(_SELECT + " WHERE m.id=?", (medicine_id,)).fetchone()
        return Medicine(**r) if r else None

    def low_stock(self, threshold: int = LOW_STOCK_THRESHOLD) -> list[Medicine]:
        rows = self.conn.execute(
            _SELECT + " WHERE m.stock < ? ORDER BY m.stock, m.name", (threshold,)
        ).fetchall()
        return [Medicine(**r) for r in rows]

    # ---------------------------- Mutations ----------------------------

    def _validate(self, name: str, price: float, stock: int) -> None:
        if not non_empty(name):
            raise DomainError("Name cannot be empty.")
        if not is_non_negative_number(price):
            raise DomainError("Price must be a non-negative number.")
        if not is_whole_number(stock):
            raise DomainError("Stock must be a whole number.")

    def _resolve_group(
        self, hsn: str | None, gst_percentage: float | None, *, create_missing: bool
    ) -> int | None:
        """
        Link by HSN. An existing group wins (its GST rate is locked in);
        otherwise a group is created when allowed.
        """
        hsn = (hsn or "").strip()
        if not hsn:
            return None
        r = self.conn.execute("SELECT id FROM item_groups WHERE hsn_code=?", (hsn,)).fetchone()
        if r:
            return int(r["id"])
        if not create_missing:
            return None
        if gst_percentage is not None and not is_non_negative_number(gst_percentage):
            raise DomainError("GST percentage must be a non-negative number.")
        cur = self.conn.execute(
            "INSERT INTO item_groups(hsn_code, gst_percentage) VALUES (?, ?)",
            (hsn, float(gst_percentage or 0)),
        )
        return int(cur.lastrowid)

    def create(
        self,
        name: str,
        price: float,
        stock: int = 0,
        *,
        hsn: str | None = None,
        batch_number: str | None = None,
        expiry_date: str | None = None,
        gst_percentage: float | None = None,
    ) -> int:
        """Insert a medicine and stamp its item code (ITEM-0001 style)."""
        self._validate(name, price, stock)
        with immediate_tx(self.conn):
            group_id = self._resolve_group(hsn, gst_percentage, create_missing=True)
            cur = self.conn.execute(
                "INSERT INTO medicines(name, hsn, batch_number, expiry_date, price, stock, group_id) "
                "VALUES (?, ?, ?, ?, ?, ?, ?)",
                (name.strip(), hsn, batch_number, expiry_date, float(price), int(stock), group_id),
            )
            new_id = int(cur.lastrowid)
            self.conn.execute(
                "UPDATE medicines SET item_code=? WHERE id=?",
                (f"{ITEM_CODE_PREFIX}-{new_id:04d}", new_id),
            )
            return new_id

    def update(
        self,
        medicine_id: int,
        name: str,
        price: float,
        stock: int,
        *,
        hsn: str | None = None,
        batch_number: str | None = None,
        expiry_date: str | None = None,
        gst_percentage: float | None = None,
    ) -> bool:
        """
        Update core fields. A new HSN only creates a group when a GST rate is
        supplied; otherwise the current group link is kept.
        """
        self._validate(name, price, stock)
        with immediate_tx(self.conn):
            group_id = self._resolve_group(
                hsn, gst_percentage, create_missing=gst_percentage is not None
            )
            cur = self.conn.execute(
                """
                UPDATE medicines
                SET name=?, hsn=?, batch_number=?, expiry_date=?, price=?, stock=?,
                    group_id=COALESCE(?, group_id),
                    updated_at=CURRENT_TIMESTAMP
                WHERE id=?
                """,
                (
                    name.strip(), hsn, batch_number, expiry_date,
                    float(price), int(stock), group_id, medicine_id,
                ),
            )
            return cur.rowcount > 0

    def _is_referenced(self, medicine_id: int) -> bool:
        for sql in (
            "SELECT 1 FROM invoice_items   WHERE medicine_id=? LIMIT 1",
            "SELECT 1 FROM quotation_items WHERE medicine_id=? LIMIT 1",
        ):
            if self.conn.execute(sql, (medicine_id,)).fetchone():
                return True
        return False

    def delete(self, medicine_id: int) -> bool:
        """Disallow deleting medicines that appear on invoices or quotations."""
        if self._is_referenced(medicine_id):
            raise DomainError(
                "Cannot delete medicine: it is referenced by invoices or quotations."
            )
        with immediate_tx(self.conn):
            cur = self.conn.execute("DELETE FROM medicines WHERE id=?", (medicine_id,))
            return cur.rowcount > 0
