# utils/exporters.py
"""
Sales export: one row per invoice line, as CSV or XLSX.

Input rows are InvoicesRepo.export_rows() dicts.
"""
from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Iterable, Mapping

import openpyxl

EXPORT_HEADERS = (
    "Invoice #", "Date", "Client", "Sales Rep", "Medicine",
    "HSN", "Qty", "Free", "Rate", "Amount",
)

_log = logging.getLogger(__name__)


def _as_tuple(r: Mapping) -> tuple:
    return (
        r["invoice_number"],
        r["created_at"],
        r.get("client_name") or "",
        r.get("rep_name") or "",
        r["medicine_name"],
        r.get("hsn") or "",
        int(r["quantity"]),
        int(r.get("free_quantity") or 0),
        round(float(r["unit_price"]), 2),
        round(float(r["total_price"]), 2),
    )


def export_invoices_csv(rows: Iterable[Mapping], path: str | Path) -> int:
    """Write rows to `path`; returns the number of data rows."""
    count = 0
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(EXPORT_HEADERS)
        for r in rows:
            writer.writerow(_as_tuple(r))
            count += 1
    _log.info("exported %d rows to %s", count, path)
    return count


def export_invoices_xlsx(rows: Iterable[Mapping], path: str | Path) -> int:
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "Sales"
    ws.append(EXPORT_HEADERS)
    count = 0
    for r in rows:
        ws.append(_as_tuple(r))
        count += 1
    wb.save(path)
    _log.info("exported %d rows to %s", count, path)
    return count
