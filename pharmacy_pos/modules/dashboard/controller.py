# pharmacy_pos/modules/dashboard/controller.py
from __future__ import annotations

from dataclasses import asdict
import sqlite3
from datetime import date

from PySide6.QtWidgets import QWidget

from ..base_module import BaseModule
from ...constants import LOW_STOCK_THRESHOLD
from ...database.repositories.dashboard_repo import DashboardRepo
from ...database.repositories.medicines_repo import MedicinesRepo
from ...utils.helpers import fmt_money
from .view import DashboardView


class DashboardController(BaseModule):
    """
    Coordinates DashboardRepo <-> DashboardView.

    Clicking the Low Stock card swaps the medicines table to the low-stock
    list; Refresh goes back to the recently added medicines.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        super().__init__()
        self.conn = conn
        self.repo = DashboardRepo(conn)
        self.medicines = MedicinesRepo(conn)
        self.view = DashboardView()
        self.view.refresh_requested.connect(self.refresh)
        self.view.low_stock_view_requested.connect(self.show_low_stock)
        self.refresh()

    def get_widget(self) -> QWidget:
        return self.view

    def refresh(self, today: date | None = None) -> None:
        today = today or date.today()
        stats = self.repo.stats()
        self.view.set_kpi_value("total_medicines", str(stats["total_medicines"]))
        self.view.set_kpi_value("low_stock_items", str(stats["low_stock_items"]))
        self.view.set_kpi_value("total_invoices", str(stats["total_invoices"]))
        month_start = today.replace(day=1).isoformat()
        self.view.set_kpi_value(
            "month_sales", fmt_money(self.repo.sales_total(month_start, today.isoformat()))
        )
        self.view.set_recent_medicines(stats["recent_medicines"])

    def show_low_stock(self) -> None:
        rows = [asdict(m) for m in self.medicines.low_stock(LOW_STOCK_THRESHOLD)]
        self.view.set_low_stock_medicines(rows, LOW_STOCK_THRESHOLD)
