from __future__ import annotations
from dataclasses import dataclass
import sqlite3

from .errors import DomainError
from .tx import immediate_tx
from ...utils.validators import is_non_negative_number, non_empty


@dataclass
class Group:
    id: int | None
    hsn_code: str
    gst_percentage: float
    measure: str | None


class GroupsRepo:
    """
    HSN groups. A medicine linked to a group takes its GST rate from the group;
    the rate cannot be set per medicine once the link exists.
    """

    def __init__(self, conn: sqlite3.Connection):
        conn.row_factory = sqlite3.Row
        self.conn = conn

    def list_groups(self) -> list[dict]:
        """Groups with the number of medicines assigned, ordered by HSN."""
        rows = self.conn.execute(
            """
            SELECT ig.id, ig.hsn_code, ig.gst_percentage, ig.measure,
                   COUNT(m.id) AS item_count
            FROM item_groups ig
            LEFT JOIN medicines m ON m.group_id = ig.id
            GROUP BY ig.id
            ORDER BY ig.hsn_code
            """
        ).fetchall()
        return [dict(r) for r in rows]

    def get(self, group_id: int) -> Group | None:
        r = self.conn.execute(
            "SELECT id, hsn_code, gst_percentage, measure FROM item_groups WHERE id=?",
            (group_id,),
        ).fetchone()
        return Group(**r) if r else None

    def get_details(self, group_id: int) -> dict | None:
        r = self.conn.execute("SELECT * FROM item_groups WHERE id=?", (group_id,)).fetchone()
        if r is None:
            return None
        details = dict(r)
        details["medicines"] = [
            dict(m)
            for m in self.conn.execute(
                "SELECT id, name FROM medicines WHERE group_id=? ORDER BY name", (group_id,)
            )
        ]
        return details

    def get_by_hsn(self, hsn_code: str) -> Group | None:
        r = self.conn.execute(
            "SELECT id, hsn_code, gst_percentage, measure FROM item_groups WHERE hsn_code=?",
            ((hsn_code or "").strip(),),
        ).fetchone()
        return Group(**r) if r else None

    def create(self, hsn_code: str, gst_percentage: float = 0, measure: str | None = None) -> int:
        if not non_empty(hsn_code):
            raise DomainError("HSN code cannot be empty.")
        if not is_non_negative_number(gst_percentage):
            raise DomainError("GST percentage must be a non-negative number.")
        if self.get_by_hsn(hsn_code) is not None:
            raise DomainError(f"A group with HSN '{hsn_code.strip()}' already exists.")
        with immediate_tx(self.conn):
            cur = self.conn.execute(
                "INSERT INTO item_groups(hsn_code, gst_percentage, measure) VALUES (?,?,?)",
                (hsn_code.strip(), float(gst_percentage), measure),
            )
            return int(cur.lastrowid)

    def update_gst(self, group_id: int, gst_percentage: float) -> bool:
        if not is_non_negative_number(gst_percentage):
            raise DomainError("GST percentage must be a non-negative number.")
        with immediate_tx(self.conn):
            cur = self.conn.execute(
                "UPDATE item_groups SET gst_percentage=? WHERE id=?",
                (float(gst_percentage), group_id),
            )
            return cur.rowcount > 0

    def delete(self, group_id: int) -> bool:
        n = self.conn.execute(
            "SELECT COUNT(*) FROM medicines WHERE group_id=?", (group_id,)
        ).fetchone()[0]
        if n:
            raise DomainError(f"Cannot delete group. It is currently assigned to {n} item(s).")
        with immediate_tx(self.conn):
            cur = self.conn.execute("DELETE FROM item_groups WHERE id=?", (group_id,))
            return cur.rowcount > 0
