from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QPushButton, QLineEdit, QLabel,
    QComboBox, QSplitter, QGroupBox,
)
from PySide6.QtCore import Qt

from ...constants import INVOICE_STATUSES
from ...widgets.table_view import TableView
from ...widgets.invoice_preview import InvoicePreview


class SalesHistoryView(QWidget):
    def __init__(self, parent=None):
        super().__init__(parent)
        root = QVBoxLayout(self)

        # --- Filters ---
        bar = QHBoxLayout()
        self.search = QLineEdit()
        self.search.setPlaceholderText("Search invoice # or client…")
        self.month = QLineEdit()
        self.month.setPlaceholderText("YYYY-MM")
        self.month.setMaximumWidth(90)
        self.status = QComboBox()
        self.status.addItem("All", None)
        for s in INVOICE_STATUSES:
            self.status.addItem(s, s)
        bar.addWidget(QLabel("Search:"))
        bar.addWidget(self.search, 1)
        bar.addWidget(QLabel("Month:"))
        bar.addWidget(self.month)
        bar.addWidget(QLabel("Status:"))
        bar.addWidget(self.status)
        root.addLayout(bar)

        # --- Actions ---
        actions = QHBoxLayout()
        self.btn_pdf = QPushButton("Export PDF…")
        self.btn_csv = QPushButton("Export CSV…")
        self.btn_xlsx = QPushButton("Export XLSX…")
        actions.addWidget(self.btn_pdf)
        actions.addStretch(1)
        actions.addWidget(self.btn_csv)
        actions.addWidget(self.btn_xlsx)
        root.addLayout(actions)

        # --- Invoices | (items + preview) ---
        split = QSplitter(Qt.Horizontal)
        self.table = TableView()
        self.table.setSelectionMode(TableView.ExtendedSelection)
        split.addWidget(self.table)

        right = QWidget()
        rv = QVBoxLayout(right)
        rv.setContentsMargins(0, 0, 0, 0)
        items_box = QGroupBox("Items")
        iv = QVBoxLayout(items_box)
        self.items = TableView()
        self.items.setSortingEnabled(False)
        iv.addWidget(self.items)
        rv.addWidget(items_box, 1)
        self.preview = InvoicePreview()
        rv.addWidget(self.preview, 2)
        split.addWidget(right)
        split.setStretchFactor(0, 3)
        split.setStretchFactor(1, 2)
        root.addWidget(split, 1)
