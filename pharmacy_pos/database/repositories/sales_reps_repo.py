from __future__ import annotations
from dataclasses import dataclass
import re
import sqlite3

from .errors import DomainError
from .tx import immediate_tx
from ...utils.validators import is_non_negative_number, non_empty

_MONTH_RX = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


@dataclass
class SalesRep:
    id: int | None
    name: str
    dob: str | None
    contact_number: str | None
    employee_type: str | None
    date_of_joining: str | None


class SalesRepsRepo:
    """
    Sales reps and their monthly targets.

    Achieved amounts are not stored: they are summed from Completed invoices
    attributed to the rep whose created_at falls in the month.
    """

    def __init__(self, conn: sqlite3.Connection):
        conn.row_factory = sqlite3.Row
        self.conn = conn

    @staticmethod
    def _check_month(month: str) -> str:
        if not _MONTH_RX.match(month or ""):
            raise DomainError(f"Month must be YYYY-MM, got {month!r}.")
        return month

    # ---- reps -------------------------------------------------------------

    def list_reps(self) -> list[SalesRep]:
        rows = self.conn.execute(
            "SELECT id, name, dob, contact_number, employee_type, date_of_joining "
            "FROM sales_reps ORDER BY name"
        ).fetchall()
        return [SalesRep(**r) for r in rows]

    def get(self, rep_id: int) -> SalesRep | None:
        r = self.conn.execute(
            "SELECT id, name, dob, contact_number, employee_type, date_of_joining "
            "FROM sales_reps WHERE id=?",
            (rep_id,),
        ).fetchone()
        return SalesRep(**r) if r else None

    def create(
        self,
        name: str,
        *,
        dob: str | None = None,
        contact_number: str | None = None,
        employee_type: str | None = None,
        date_of_joining: str | None = None,
    ) -> int:
        if not non_empty(name):
            raise DomainError("Name cannot be empty.")
        with immediate_tx(self.conn):
            cur = self.conn.execute(
                "INSERT INTO sales_reps(name, dob, contact_number, employee_type, date_of_joining) "
                "VALUES (?,?,?,?,?)",
                (name.strip(), dob, contact_number, employee_type, date_of_joining),
            )
            return int(cur.lastrowid)

    def delete(self, rep_id: int) -> bool:
        # targets cascade; invoices keep their row with sales_rep_id set NULL
        with immediate_tx(self.conn):
            cur = self.conn.execute("DELETE FROM sales_reps WHERE id=?", (rep_id,))
            return cur.rowcount > 0

    # ---- targets & performance -------------------------------------------

    def set_target(self, rep_id: int, month: str, target_amount: float) -> None:
        self._check_month(month)
        if not is_non_negative_number(target_amount):
            raise DomainError("Target amount must be a non-negative number.")
        with immediate_tx(self.conn):
            self.conn.execute(
                """
                INSERT INTO sales_targets(rep_id, month, target_amount)
                VALUES (?, ?, ?)
                ON CONFLICT(rep_id, month)
                DO UPDATE SET target_amount = excluded.target_amount
                """,
                (rep_id, month, float(target_amount)),
            )

    def achieved(self, rep_id: int, month: str) -> float:
        self._check_month(month)
        row = self.conn.execute(
            """
            SELECT COALESCE(SUM(final_amount), 0.0)
            FROM invoices
            WHERE sales_rep_id = ?
              AND status = 'Completed'
              AND strftime('%Y-%m', created_at) = ?
            """,
            (rep_id, month),
        ).fetchone()
        return float(row[0])

    def get_performance(self, rep_id: int, month: str) -> dict | None:
        """{'name', 'month', 'target', 'achieved'} or None for an unknown rep."""
        self._check_month(month)
        r = self.conn.execute(
            """
            SELECT s.name, COALESCE(st.target_amount, 0.0) AS target
            FROM sales_reps s
            LEFT JOIN sales_targets st ON st.rep_id = s.id AND st.month = ?
            WHERE s.id = ?
            """,
            (month, rep_id),
        ).fetchone()
        if r is None:
            return None
        return {
            "name": r["name"],
            "month": month,
            "target": float(r["target"]),
            "achieved": self.achieved(rep_id, month),
        }

    def list_performance(self, month: str) -> list[dict]:
        return [
            perf
            for rep in self.list_reps()
            if (perf := self.get_performance(int(rep.id), month)) is not None
        ]
