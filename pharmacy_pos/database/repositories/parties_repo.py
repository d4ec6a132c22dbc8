from __future__ import annotations
from dataclasses import dataclass
import sqlite3

from .errors import DomainError
from .tx import immediate_tx

ROLES = ("client", "supplier")


@dataclass
class Party:
    id: int | None
    name: str
    role: str
    phone: str | None
    address: str | None
    gstin: str | None


_COLS = "id, name, role, phone, address, gstin"


class PartiesRepo:
    """
    Clients and suppliers. One repo instance serves one role; names are unique
    per role, so a supplier may share a name with a client.
    """

    def __init__(self, conn: sqlite3.Connection, role: str = "client"):
        if role not in ROLES:
            raise ValueError(f"role must be one of {ROLES}, got {role!r}")
        conn.row_factory = sqlite3.Row
        self.conn = conn
        self.role = role

    # ---- Internal helpers -------------------------------------------------

    @staticmethod
    def _normalize_text(s: str | None) -> str | None:
        if s is None:
            return None
        return s.strip()

    @staticmethod
    def _ensure_non_empty(value: str | None, field_label: str) -> None:
        if value is None or value.strip() == "":
            raise DomainError(f"{field_label} cannot be empty.")

    # ---- Queries ----------------------------------------------------------

    def list_parties(self) -> list[Party]:
        rows = self.conn.execute(
            f"SELECT {_COLS} FROM parties WHERE role=? ORDER BY name",
            (self.role,),
        ).fetchall()
        return [Party(**r) for r in rows]

    def search(self, term: str) -> list[Party]:
        """Matches name or GSTIN with LIKE."""
        pattern = f"%{term.strip()}%"
        rows = self.conn.execute(
            f"SELECT {_COLS} FROM parties "
            "WHERE role=? AND (name LIKE ? OR gstin LIKE ?) "
            "ORDER BY name",
            (self.role, pattern, pattern),
        ).fetchall()
        return [Party(**r) for r in rows]

    def get(self, party_id: int) -> Party | None:
        r = self.conn.execute(
            f"SELECT {_COLS} FROM parties WHERE id=? AND role=?",
            (party_id, self.role),
        ).fetchone()
        return Party(**r) if r else None

    def get_by_name(self, name: str) -> Party | None:
        r = self.conn.execute(
            f"SELECT {_COLS} FROM parties WHERE name=? AND role=?",
            (self._normalize_text(name), self.role),
        ).fetchone()
        return Party(**r) if r else None

    # ---- Mutations --------------------------------------------------------

    def create(
        self,
        name: str,
        phone: str | None = None,
        address: str | None = None,
        gstin: str | None = None,
    ) -> int:
        self._ensure_non_empty(name, "Name")
        name_n = self._normalize_text(name)
        if self.get_by_name(name_n) is not None:
            raise DomainError(f"A {self.role} named '{name_n}' already exists.")
        with immediate_tx(self.conn):
            cur = self.conn.execute(
                "INSERT INTO parties(name, role, phone, address, gstin) VALUES (?,?,?,?,?)",
                (
                    name_n,
                    self.role,
                    self._normalize_text(phone),
                    self._normalize_text(address),
                    self._normalize_text(gstin),
                ),
            )
            return int(cur.lastrowid)

    def get_or_create(
        self,
        name: str,
        phone: str | None = None,
        address: str | None = None,
        gstin: str | None = None,
    ) -> int:
        """Resolve a free-text name to a party id, creating the party if needed."""
        existing = self.get_by_name(name) if name else None
        if existing is not None:
            return int(existing.id)
        return self.create(name, phone, address, gstin)

    def update(
        self,
        party_id: int,
        name: str,
        phone: str | None = None,
        address: str | None = None,
        gstin: str | None = None,
    ) -> bool:
        self._ensure_non_empty(name, "Name")
        with immediate_tx(self.conn):
            cur = self.conn.execute(
                "UPDATE parties SET name=?, phone=?, address=?, gstin=? WHERE id=? AND role=?",
                (
                    self._normalize_text(name),
                    self._normalize_text(phone),
                    self._normalize_text(address),
                    self._normalize_text(gstin),
                    party_id,
                    self.role,
                ),
            )
            return cur.rowcount > 0

    def _is_referenced(self, party_id: int) -> bool:
        for sql in (
            "SELECT 1 FROM invoices   WHERE client_id=? LIMIT 1",
            "SELECT 1 FROM quotations WHERE client_id=? LIMIT 1",
        ):
            if self.conn.execute(sql, (party_id,)).fetchone():
                return True
        return False

    def delete(self, party_id: int) -> bool:
        """Refuses to delete a party that invoices or quotations still point at."""
        if self._is_referenced(party_id):
            raise DomainError(
                f"Cannot delete {self.role}: it is referenced by invoices or quotations."
            )
        with immediate_tx(self.conn):
            cur = self.conn.execute(
                "DELETE FROM parties WHERE id=? AND role=?", (party_id, self.role)
            )
            return cur.rowcount > 0
