"""
Sales History module package exports.
"""

from .controller import SalesHistoryController
from .model import InvoicesTableModel, InvoiceItemsModel
from .view import SalesHistoryView

__all__ = [
    "SalesHistoryController",
    "InvoicesTableModel",
    "InvoiceItemsModel",
    "SalesHistoryView",
]
