"""
Loads persisted invoices/quotations as renderer payloads.

The documents package stays free of database access; this module is the one
place that joins repository rows with the company settings for printing.
"""
from __future__ import annotations

import sqlite3

from ...documents.payloads import DocumentPayload, invoice_payload, quotation_payload
from .invoices_repo import InvoicesRepo
from .quotations_repo import QuotationsRepo
from .settings_repo import SettingsRepo


def load_invoice_payload(conn: sqlite3.Connection, invoice_id: int) -> DocumentPayload | None:
    details = InvoicesRepo(conn).get_invoice_details(invoice_id)
    if details is None:
        return None
    return invoice_payload(details, SettingsRepo(conn).get())


def load_quotation_payload(conn: sqlite3.Connection, quotation_id: int) -> DocumentPayload | None:
    details = QuotationsRepo(conn).get_quotation_details(quotation_id)
    if details is None:
        return None
    return quotation_payload(details, SettingsRepo(conn).get())
