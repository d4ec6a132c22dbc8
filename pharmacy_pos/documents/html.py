"""HTML rendition of a document payload for the on-screen preview (jinja2)."""
from __future__ import annotations

from datetime import date
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..utils.helpers import fmt_currency, round_money
from .layout import INVOICE_COLUMNS, QUOTATION_COLUMNS, format_date
from .payloads import DocumentPayload, QUOTATION
from .words import amount_in_words

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html"]),
)


def document_context(payload: DocumentPayload, today: date) -> dict:
    is_quote = payload.kind == QUOTATION
    columns = QUOTATION_COLUMNS if is_quote else INVOICE_COLUMNS
    rows = []
    for item in payload.bill_items:
        qty = f"{item.quantity:g}"
        price, amount = fmt_currency(item.price), fmt_currency(item.amount)
        if is_quote:
            rows.append([item.name, qty, price, amount])
        else:
            rows.append([item.name, item.hsn or "", item.batch_number or "", qty, price, amount])

    half_tax = fmt_currency(round_money(payload.totals.tax) / 2)
    company = payload.settings
    return {
        "is_quotation": is_quote,
        "company": company,
        "address_lines": (company.address.split("\n") if company.address
                          else ["Your Company Address Line 1", "Address Line 2"]),
        "client": payload.client,
        "number": payload.number,
        "date": format_date(today),
        "payment_mode": payload.payment_mode,
        "columns": [title for title, _ in columns],
        "rows": rows,
        "totals": {
            "subtotal": fmt_currency(payload.totals.subtotal),
            "sgst": half_tax,
            "cgst": half_tax,
            "final_amount": fmt_currency(payload.totals.final_amount),
        },
        "words": amount_in_words(payload.totals.final_amount),
    }


def render_invoice_html(payload: DocumentPayload, today: date | None = None) -> str:
    """Works for quotations too; `payload.kind` picks the variant."""
    payload.validate()
    template = _env.get_template("document.html")
    return template.render(**document_context(payload, today or date.today()))
