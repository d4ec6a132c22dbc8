from __future__ import annotations

from typing import Dict, List

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QFont, QStandardItemModel, QStandardItem
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QGridLayout, QFrame,
    QHeaderView, QAbstractItemView,
)

from ...widgets.table_view import TableView
from ...utils.helpers import fmt_money


class DashboardView(QWidget):
    """
    Pure-UI dashboard surface. Controller drives it by calling the setters.

    Signals:
        refresh_requested()
        low_stock_view_requested()
    """

    refresh_requested = Signal()
    low_stock_view_requested = Signal()

    def __init__(self, parent=None) -> None:
        super().__init__(parent)
        self._kpi_cards: Dict[str, KPICard] = {}
        self._build_ui()

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(8, 8, 8, 8)
        root.setSpacing(10)

        top = QHBoxLayout()
        title = QLabel("<h2>Dashboard</h2>")
        title.setTextFormat(Qt.RichText)
        top.addWidget(title)
        top.addStretch(1)
        self.btn_refresh = QPushButton("Refresh")
        self.btn_refresh.clicked.connect(self.refresh_requested.emit)
        top.addWidget(self.btn_refresh)
        root.addLayout(top)

        gridwrap = QWidget()
        grid = QGridLayout(gridwrap)
        grid.setContentsMargins(0, 0, 0, 0)
        grid.setHorizontalSpacing(10)
        for col, (key, label, caption) in enumerate([
            ("total_medicines", "Medicines", "items in catalogue"),
            ("low_stock_items", "Low Stock", "below threshold"),
            ("total_invoices", "Invoices", "all time"),
            ("month_sales", "Sales (MTD)", "completed invoices"),
        ]):
            card = KPICard(label, caption)
            if key == "low_stock_items":
                card.clicked.connect(self.low_stock_view_requested.emit)
            self._kpi_cards[key] = card
            grid.addWidget(card, 0, col)
        root.addWidget(gridwrap)

        self.recent_model = QStandardItemModel(0, 3, self)
        self.recent_model.setHorizontalHeaderLabels(["Medicine", "Stock", "Price"])
        self.tbl_recent = TableView()
        self.tbl_recent.setModel(self.recent_model)
        self.tbl_recent.setSortingEnabled(False)
        self.tbl_recent.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.tbl_recent.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeToContents)
        self.lbl_list = QLabel()
        self.lbl_list.setTextFormat(Qt.RichText)
        root.addWidget(self.lbl_list)
        root.addWidget(self.tbl_recent, 1)

    # ---------------- setters ----------------
    def set_kpi_value(self, key: str, value: str) -> None:
        card = self._kpi_cards.get(key)
        if card:
            card.set_value(value)

    def kpi_card(self, key: str) -> "KPICard":
        return self._kpi_cards[key]

    def kpi_value(self, key: str) -> str:
        return self._kpi_cards[key].lbl_value.text()

    def list_title(self) -> str:
        return self.lbl_list.text()

    def set_recent_medicines(self, rows: List[dict]) -> None:
        self._fill_medicines(rows, "Recently added medicines")

    def set_low_stock_medicines(self, rows: List[dict], threshold: int) -> None:
        self._fill_medicines(rows, f"Low stock medicines (below {threshold})")

    def _fill_medicines(self, rows: List[dict], title: str) -> None:
        self.lbl_list.setText(f"<b>{title}</b>")
        self.recent_model.setRowCount(0)
        for r in rows:
            stock = QStandardItem(str(r["stock"]))
            stock.setTextAlignment(Qt.AlignRight | Qt.AlignVCenter)
            price = QStandardItem(fmt_money(r["price"]))
            price.setTextAlignment(Qt.AlignRight | Qt.AlignVCenter)
            self.recent_model.appendRow([QStandardItem(r["name"]), stock, price])


class KPICard(QFrame):
    clicked = Signal()

    def __init__(self, title: str, caption: str) -> None:
        super().__init__()
        self.setObjectName("kpi_card")
        self.setStyleSheet("""
            QFrame#kpi_card {
                border: 1px solid #e1e1e1;
                border-radius: 10px;
                background: #fff;
            }
        """)
        self.setCursor(Qt.PointingHandCursor)

        v = QVBoxLayout(self)
        v.setContentsMargins(12, 10, 12, 12)
        v.setSpacing(2)

        self.lbl_title = QLabel(title)
        f = self.lbl_title.font()
        f.setBold(True)
        self.lbl_title.setFont(f)

        self.lbl_value = QLabel("—")
        fv = QFont(self.lbl_value.font())
        fv.setPointSize(fv.pointSize() + 6)
        fv.setBold(True)
        self.lbl_value.setFont(fv)

        self.lbl_caption = QLabel(caption)

        v.addWidget(self.lbl_title)
        v.addWidget(self.lbl_value)
        v.addWidget(self.lbl_caption)

    def mousePressEvent(self, e) -> None:  # type: ignore[override]
        if e.button() == Qt.LeftButton:
            self.clicked.emit()
        super().mousePressEvent(e)

    def set_value(self, s: str) -> None:
        self.lbl_value.setText(s)
