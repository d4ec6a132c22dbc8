# documents/__init__.py
"""
Printed documents: payload assembly, layout, PDF and HTML output.

    # loaders live in database.repositories.payloads_repo
    payload = load_invoice_payload(conn, invoice_id)
    render_invoice(payload, "invoice.pdf")
"""

from .payloads import (
    BillItem,
    ClientInfo,
    CompanyInfo,
    DocumentPayload,
    Totals,
    INVOICE,
    QUOTATION,
    invoice_payload,
    quotation_payload,
)
from .words import amount_in_words, number_to_words
from .layout import Rule, Text, layout_invoice, layout_quotation
from .renderer import render_document, render_invoice, render_quotation
from .html import render_invoice_html

__all__ = [
    "BillItem",
    "ClientInfo",
    "CompanyInfo",
    "DocumentPayload",
    "Totals",
    "INVOICE",
    "QUOTATION",
    "invoice_payload",
    "quotation_payload",
    "amount_in_words",
    "number_to_words",
    "Rule",
    "Text",
    "layout_invoice",
    "layout_quotation",
    "render_document",
    "render_invoice",
    "render_quotation",
    "render_invoice_html",
]
