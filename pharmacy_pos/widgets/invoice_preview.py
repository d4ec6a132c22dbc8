from PySide6.QtWidgets import QWidget, QVBoxLayout, QToolBar, QTextBrowser
from PySide6.QtGui import QAction, QKeySequence, QShortcut, QTextDocument
from PySide6.QtPrintSupport import QPrinter, QPrintDialog

from ..documents.html import render_invoice_html
from ..documents.payloads import DocumentPayload


class InvoicePreview(QWidget):
    """On-screen rendition of an invoice/quotation payload, with printing."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.payload: DocumentPayload | None = None
        self.setup_ui()

    def setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        toolbar = QToolBar()
        layout.addWidget(toolbar)

        print_action = QAction("Print", self)
        print_action.triggered.connect(self.print_invoice)
        toolbar.addAction(print_action)

        print_shortcut = QShortcut(QKeySequence("Ctrl+P"), self)
        print_shortcut.activated.connect(self.print_invoice)

        self.browser = QTextBrowser()
        self.browser.setOpenExternalLinks(False)
        layout.addWidget(self.browser)

    def set_payload(self, payload: DocumentPayload | None):
        self.payload = payload
        if payload is None:
            self.browser.clear()
            return
        self.browser.setHtml(render_invoice_html(payload))

    def print_invoice(self):
        if self.payload is None:
            return
        printer = QPrinter(QPrinter.HighResolution)
        printer.setDocName(self.payload.number)
        dialog = QPrintDialog(printer, self)
        if dialog.exec() != QPrintDialog.Accepted:
            return
        doc = QTextDocument()
        doc.setHtml(self.browser.toHtml())
        doc.print_(printer)
