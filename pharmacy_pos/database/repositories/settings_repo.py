from __future__ import annotations
from dataclasses import dataclass, asdict
import sqlite3

from .tx import immediate_tx


@dataclass
class Settings:
    company_name: str | None = None
    address: str | None = None
    phone: str | None = None
    gstin: str | None = None
    footer_text: str | None = None


class SettingsRepo:
    """Company settings: a single row with id=1, read by the document renderer."""

    def __init__(self, conn: sqlite3.Connection):
        conn.row_factory = sqlite3.Row
        self.conn = conn

    def get(self) -> Settings:
        r = self.conn.execute(
            "SELECT company_name, address, phone, gstin, footer_text FROM settings WHERE id=1"
        ).fetchone()
        if r is None:
            with immediate_tx(self.conn):
                self.conn.execute("INSERT OR IGNORE INTO settings(id) VALUES (1)")
            return Settings()
        return Settings(**r)

    def update(self, settings: Settings) -> None:
        with immediate_tx(self.conn):
            self.conn.execute(
                """
                INSERT INTO settings(id, company_name, address, phone, gstin, footer_text)
                VALUES (1, :company_name, :address, :phone, :gstin, :footer_text)
                ON CONFLICT(id) DO UPDATE SET
                    company_name = excluded.company_name,
                    address      = excluded.address,
                    phone        = excluded.phone,
                    gstin        = excluded.gstin,
                    footer_text  = excluded.footer_text
                """,
                asdict(settings),
            )
