from PySide6.QtCore import QAbstractTableModel, Qt, QModelIndex
from ...utils.helpers import fmt_money


class InvoicesTableModel(QAbstractTableModel):
    HEADERS = ["Invoice #", "Date", "Client", "Sales Rep", "Status", "Payment", "Total"]

    def __init__(self, rows: list):
        super().__init__()
        self._rows = rows

    def rowCount(self, parent=QModelIndex()):
        return len(self._rows)

    def columnCount(self, parent=QModelIndex()):
        return len(self.HEADERS)

    def data(self, index, role=Qt.DisplayRole):
        if not index.isValid():
            return None
        r = self._rows[index.row()]
        if role in (Qt.DisplayRole, Qt.EditRole):
            mapping = [
                r["invoice_number"],
                r["created_at"],
                r.get("client_name") or "",
                r.get("rep_name") or "",
                r["status"],
                r.get("payment_mode") or "",
                fmt_money(r["final_amount"]),
            ]
            return mapping[index.column()]
        if role == Qt.TextAlignmentRole and index.column() == len(self.HEADERS) - 1:
            return int(Qt.AlignRight | Qt.AlignVCenter)
        return None

    def headerData(self, section, orientation, role=Qt.DisplayRole):
        if orientation == Qt.Horizontal and role == Qt.DisplayRole:
            return self.HEADERS[section]
        return super().headerData(section, orientation, role)

    def at(self, row: int) -> dict:
        return self._rows[row]

    def rows(self) -> list:
        return list(self._rows)

    def replace(self, rows: list):
        self.beginResetModel()
        self._rows = rows
        self.endResetModel()


class InvoiceItemsModel(QAbstractTableModel):
    HEADERS = ["#", "Medicine", "HSN", "Batch", "Qty", "Free", "Rate", "Amount"]

    def __init__(self, rows: list):
        super().__init__()
        self._rows = rows

    def rowCount(self, parent=QModelIndex()):
        return len(self._rows)

    def columnCount(self, parent=QModelIndex()):
        return len(self.HEADERS)

    def data(self, idx, role=Qt.DisplayRole):
        if not idx.isValid():
            return None
        r = self._rows[idx.row()]
        if role in (Qt.DisplayRole, Qt.EditRole):
            m = [idx.row() + 1, r["medicine_name"], r.get("hsn") or "", r.get("batch_number") or "",
                 r["quantity"], r.get("free_quantity") or 0,
                 fmt_money(r["unit_price"]), fmt_money(r["total_price"])]
            return m[idx.column()]
        return None

    def headerData(self, s, o, role=Qt.DisplayRole):
        return self.HEADERS[s] if o == Qt.Horizontal and role == Qt.DisplayRole else super().headerData(s, o, role)

    def replace(self, rows: list):
        self.beginResetModel()
        self._rows = rows
        self.endResetModel()
