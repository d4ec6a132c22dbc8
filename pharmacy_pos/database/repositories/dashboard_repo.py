# pharmacy_pos/database/repositories/dashboard_repo.py
from __future__ import annotations

import sqlite3
from typing import Any, Dict, List, Optional

from ...constants import LOW_STOCK_THRESHOLD


def _to_float(x: Optional[Any]) -> float:
    try:
        return float(x or 0.0)
    except (TypeError, ValueError):
        return 0.0


class DashboardRepo:
    """
    Thin query layer for the Dashboard. All methods are read-only.

    - NO use of SQLite clock (DATE('now')) inside filters; the caller passes
      app-locale dates for time-bound queries.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn
        self.conn.row_factory = sqlite3.Row

    def _scalar(self, sql: str, params: tuple = ()) -> Any:
        row = self.conn.execute(sql, params).fetchone()
        return None if row is None else row[0]

    def total_medicines(self) -> int:
        return int(self._scalar("SELECT COUNT(*) FROM medicines") or 0)

    def low_stock_count(self, threshold: int = LOW_STOCK_THRESHOLD) -> int:
        return int(self._scalar("SELECT COUNT(*) FROM medicines WHERE stock < ?", (threshold,)) or 0)

    def total_invoices(self) -> int:
        return int(self._scalar("SELECT COUNT(*) FROM invoices") or 0)

    def sales_total(self, date_from: str, date_to: str) -> float:
        """Sum of final amounts of Completed invoices between two ISO dates (inclusive)."""
        sql = """
            SELECT COALESCE(SUM(CAST(final_amount AS REAL)), 0.0)
            FROM invoices
            WHERE status = 'Completed'
              AND DATE(created_at) >= DATE(?) AND DATE(created_at) <= DATE(?)
        """
        return _to_float(self._scalar(sql, (date_from, date_to)))

    def recent_medicines(self, limit: int = 5) -> List[Dict]:
        rows = self.conn.execute(
            "SELECT id, name, stock, CAST(price AS REAL) AS price, created_at "
            "FROM medicines ORDER BY created_at DESC, id DESC LIMIT ?",
            (int(limit),),
        ).fetchall()
        return [dict(r) for r in rows]

    def stats(self) -> Dict[str, Any]:
        return {
            "total_medicines": self.total_medicines(),
            "low_stock_items": self.low_stock_count(),
            "total_invoices": self.total_invoices(),
            "recent_medicines": self.recent_medicines(),
        }
