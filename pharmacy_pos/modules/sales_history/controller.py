from __future__ import annotations

import logging
import re
import sqlite3
from pathlib import Path

from PySide6.QtWidgets import QWidget, QFileDialog

from ..base_module import BaseModule
from .view import SalesHistoryView
from .model import InvoicesTableModel, InvoiceItemsModel
from ...database.repositories.errors import DomainError
from ...database.repositories.invoices_repo import InvoicesRepo
from ...database.repositories.payloads_repo import load_invoice_payload
from ...documents.payloads import DocumentPayload
from ...documents.renderer import render_invoice
from ...utils.exporters import export_invoices_csv, export_invoices_xlsx
from ...utils.ui_helpers import info, error

_log = logging.getLogger(__name__)

_MONTH_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


class SalesHistoryController(BaseModule):
    """
    Invoice list + items + preview. Exports follow two steps: the user picks a
    destination first, then the renderer/exporter writes to it.
    """

    def __init__(self, conn: sqlite3.Connection):
        super().__init__()
        self.conn = conn
        self.repo = InvoicesRepo(conn)
        self.view = SalesHistoryView()
        self.model = InvoicesTableModel([])
        self.items_model = InvoiceItemsModel([])
        self.view.table.setModel(self.model)
        self.view.items.setModel(self.items_model)
        self._wire()
        self.reload()

    def get_widget(self) -> QWidget:
        return self.view

    def _wire(self):
        self.view.search.textChanged.connect(self.reload)
        self.view.month.editingFinished.connect(self.reload)
        self.view.status.currentIndexChanged.connect(self.reload)
        self.view.btn_pdf.clicked.connect(self._on_export_pdf)
        self.view.btn_csv.clicked.connect(lambda: self._on_export_rows("csv"))
        self.view.btn_xlsx.clicked.connect(lambda: self._on_export_rows("xlsx"))
        self._connect_selection()

    def _connect_selection(self):
        sel = self.view.table.selectionModel()
        if sel is not None:
            sel.selectionChanged.connect(self._on_selection_changed)

    # ---------- data ----------
    def reload(self, *_):
        month = self.view.month.text().strip()
        rows = self.repo.list_invoices(
            month=month if _MONTH_RE.match(month) else None,
            status=self.view.status.currentData(),
            query=self.view.search.text().strip(),
        )
        self.model.replace(rows)
        self.view.table.resizeColumnsToContents()
        self.items_model.replace([])
        self.view.preview.set_payload(None)

    def selected_rows(self) -> list[dict]:
        sel = self.view.table.selectionModel()
        if sel is None:
            return []
        return [self.model.at(idx.row()) for idx in sel.selectedRows()]

    def selected_ids(self) -> list[int]:
        return [r["id"] for r in self.selected_rows()]

    def _on_selection_changed(self, *_):
        ids = self.selected_ids()
        if not ids:
            self.items_model.replace([])
            self.view.preview.set_payload(None)
            return
        self.items_model.replace(self.repo.list_items(ids[0]))
        self.view.items.resizeColumnsToContents()
        self.view.preview.set_payload(load_invoice_payload(self.conn, ids[0]))

    # ---------- sinks ----------
    def export_pdf_to(self, invoice_id: int, path: str | Path) -> DocumentPayload:
        payload = load_invoice_payload(self.conn, invoice_id)
        if payload is None:
            raise DomainError(f"Invoice {invoice_id} not found.")
        render_invoice(payload, path)
        return payload

    def export_rows_to(self, invoice_ids: list[int], path: str | Path, fmt: str) -> int:
        rows = self.repo.export_rows(invoice_ids)
        if fmt == "xlsx":
            return export_invoices_xlsx(rows, path)
        return export_invoices_csv(rows, path)

    def _ask_save_path(self, caption: str, suggested: str, filters: str) -> str | None:
        path, _ = QFileDialog.getSaveFileName(self.view, caption, suggested, filters)
        return path or None

    # ---------- UI actions ----------
    def _on_export_pdf(self):
        rows = self.selected_rows()
        if not rows:
            info(self.view, "Select", "Select an invoice to export.")
            return
        row = rows[0]
        path = self._ask_save_path("Save Invoice PDF", f"{row['invoice_number']}.pdf", "PDF files (*.pdf)")
        if not path:
            return
        try:
            self.export_pdf_to(row["id"], path)
        except (DomainError, OSError, ValueError) as e:
            _log.warning("PDF export of invoice %s failed: %s", row["invoice_number"], e)
            error(self.view, "Export failed", str(e))
            return
        info(self.view, "Exported", f"Invoice saved to:\n{path}")

    def _on_export_rows(self, fmt: str):
        ids = self.selected_ids() or [r["id"] for r in self.model.rows()]
        if not ids:
            info(self.view, "Export", "There are no invoices to export.")
            return
        filters = "Excel workbook (*.xlsx)" if fmt == "xlsx" else "CSV files (*.csv)"
        path = self._ask_save_path("Export Sales", f"sales.{fmt}", filters)
        if not path:
            return
        try:
            count = self.export_rows_to(ids, path, fmt)
        except OSError as e:
            _log.warning("sales export failed: %s", e)
            error(self.view, "Export failed", str(e))
            return
        info(self.view, "Exported", f"{count} row(s) written to:\n{path}")
