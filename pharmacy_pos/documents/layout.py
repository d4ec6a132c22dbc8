"""
Page layout for printed invoices and quotations.

`layout_invoice()` / `layout_quotation()` are pure: the same payload and date
always produce the same list of drawing operations. Coordinates are in points,
measured from the top-left corner of an A4 page.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase.pdfmetrics import stringWidth

from ..utils.helpers import fmt_currency, round_money
from .payloads import DocumentPayload, QUOTATION
from .words import amount_in_words

PAGE_WIDTH, PAGE_HEIGHT = A4
MARGIN = 50
CONTENT_WIDTH = PAGE_WIDTH - 2 * MARGIN
ROW_STEP = 20

REGULAR = "regular"
BOLD = "bold"
ITALIC = "italic"

INVOICE_COLUMNS = (
    ("Medicine", 180),
    ("HSN", 70),
    ("Batch No", 70),
    ("Qty", 50),
    ("Rate", 70),
    ("Amount", 80),
)
QUOTATION_COLUMNS = (
    ("Item Description", 280),
    ("Qty", 70),
    ("Rate", 100),
    ("Amount", 100),
)

# totals block: label column at 350 (w=100), value column at 460 (w=90)
LABEL_X, LABEL_W = 350, 100
VALUE_X, VALUE_W = 460, 90
INVOICE_TOTALS_HEIGHT = 90
QUOTATION_TOTALS_HEIGHT = 35
# company signature line sits this far above the bottom edge
FOOTER_OFFSET = 100
# left info column runs up to the right-hand labels
INFO_LEFT_W = 290
INFO_VALUE_X = 430
INFO_VALUE_W = PAGE_WIDTH - MARGIN - INFO_VALUE_X

# metric fonts used for truncation; painter maps styles to concrete fonts
_METRIC_FONTS = {REGULAR: "Helvetica", BOLD: "Helvetica-Bold", ITALIC: "Helvetica-Oblique"}


@dataclass(frozen=True)
class Text:
    page: int
    x: float
    y: float
    text: str
    size: float = 10
    style: str = REGULAR
    width: float | None = None
    align: str = "left"


@dataclass(frozen=True)
class Rule:
    page: int
    x1: float
    y1: float
    x2: float
    y2: float
    opacity: float = 1.0


def format_date(d: date) -> str:
    return d.strftime("%d/%m/%Y")


def _fit(text: str, style: str, size: float, width: float) -> str:
    """Truncate `text` with '...' so it fits in `width` points."""
    font = _METRIC_FONTS[style]
    if stringWidth(text, font, size) <= width:
        return text
    while text and stringWidth(text + "...", font, size) > width:
        text = text[:-1]
    return text + "..."


def _lines(text: str, style: str, size: float, width: float) -> list[str]:
    """Word-wrap `text` to `width` points; a single over-long word is truncated."""
    lines = simpleSplit(text, _METRIC_FONTS[style], size, width) or [""]
    return [_fit(line, style, size, width) for line in lines]


class _Page:
    """Cursor over the growing op list."""

    def __init__(self) -> None:
        self.ops: list[Text | Rule] = []
        self.page = 0

    def text(self, x, y, text, **kw) -> None:
        self.ops.append(Text(self.page, x, y, text, **kw))

    def wrapped(self, x, y, text, *, width, leading, size=10, style=REGULAR,
                align="left") -> float:
        """Draw `text` wrapped to `width`; return y below the last line."""
        for line in _lines(text, style, size, width):
            self.text(x, y, line, size=size, style=style, width=width, align=align)
            y += leading
        return y

    def rule(self, x1, y1, x2, y2, opacity=1.0) -> None:
        self.ops.append(Rule(self.page, x1, y1, x2, y2, opacity))

    def new_page(self) -> float:
        self.page += 1
        return MARGIN


def _header(p: _Page, payload: DocumentPayload) -> float:
    settings = payload.settings
    y = MARGIN
    if payload.kind == QUOTATION:
        p.text(MARGIN, y, "QUOTATION", size=22, style=BOLD, width=CONTENT_WIDTH, align="center")
        y += 28
        name_size = 16
    else:
        name_size = 20
    y = p.wrapped(MARGIN, y, settings.company_name or "Your Company Name",
                  width=CONTENT_WIDTH, leading=name_size + 4, size=name_size,
                  style=BOLD, align="center")

    if settings.address:
        segments = settings.address.split("\n")
    else:
        segments = ["Your Company Address Line 1", "Address Line 2"]
    for segment in segments:
        y = p.wrapped(MARGIN, y, segment, width=CONTENT_WIDTH, leading=12, align="center")
    return y + 24


def _info_block(p: _Page, payload: DocumentPayload, y: float, today: date) -> float:
    client = payload.client
    is_quote = payload.kind == QUOTATION
    p.text(MARGIN, y, "To:" if is_quote else "Bill To:", style=BOLD, width=INFO_LEFT_W)
    left = [client.name or "", client.address or "", client.phone or ""]
    if not is_quote:
        left.append(f"GSTIN: {client.gstin or ''}")
    ly = y + 15
    for value in left:
        ly = p.wrapped(MARGIN, ly, value, width=INFO_LEFT_W, leading=15)

    right = [
        ("Quotation #:" if is_quote else "Invoice #:", payload.number),
        ("Date:" if is_quote else "Invoice Date:", format_date(today)),
    ]
    if not is_quote:
        right.append(("Payment Mode:", payload.payment_mode or "N/A"))
    for offset, (label, value) in zip((0, 15, 30), right):
        p.text(LABEL_X, y + offset, label, style=BOLD, width=INFO_VALUE_X - LABEL_X)
        p.text(INFO_VALUE_X, y + offset, _fit(value, REGULAR, 10, INFO_VALUE_W),
               width=INFO_VALUE_W)
    return max(ly + 5, y + 80)


def _table_header(p: _Page, columns, y: float) -> float:
    x = MARGIN
    for i, (title, width) in enumerate(columns):
        p.text(x, y, title, style=BOLD, width=width,
               align="right" if i >= len(columns) - 3 else "left")
        x += width
    p.rule(MARGIN, y + 15, MARGIN + CONTENT_WIDTH, y + 15)
    return y + 20


def _row_cells(payload: DocumentPayload, item) -> list[str]:
    qty = f"{item.quantity:g}"
    if payload.kind == QUOTATION:
        return [item.name, qty, fmt_currency(item.price), fmt_currency(item.amount)]
    return [item.name, item.hsn or "", item.batch_number or "", qty,
            fmt_currency(item.price), fmt_currency(item.amount)]


def _table(p: _Page, payload: DocumentPayload, y: float, reserve: float) -> float:
    """Draw rows; continue on a new page (header repeated) before the bottom margin."""
    columns = QUOTATION_COLUMNS if payload.kind == QUOTATION else INVOICE_COLUMNS
    bottom = PAGE_HEIGHT - MARGIN
    y = _table_header(p, columns, y)
    for item in payload.bill_items:
        if y + ROW_STEP > bottom:
            y = _table_header(p, columns, p.new_page())
        x = MARGIN
        for i, ((_, width), cell) in enumerate(zip(columns, _row_cells(payload, item))):
            right = i >= len(columns) - 3
            p.text(x, y, _fit(cell, REGULAR, 10, width - 4), width=width,
                   align="right" if right else "left")
            x += width
        y += ROW_STEP
        if payload.kind != QUOTATION:
            p.rule(MARGIN, y - 5, MARGIN + CONTENT_WIDTH, y - 5, opacity=0.5)
    if payload.kind == QUOTATION:
        p.rule(MARGIN, y, MARGIN + CONTENT_WIDTH, y)
    if y + reserve > PAGE_HEIGHT - FOOTER_OFFSET:
        y = p.new_page()
    return y


def _money_line(p: _Page, y: float, label: str, amount, *, size=10, style=REGULAR) -> None:
    p.text(LABEL_X, y, label, size=size, style=BOLD, width=LABEL_W, align="right")
    p.text(VALUE_X, y, fmt_currency(amount), size=size, style=style, width=VALUE_W, align="right")


def layout_invoice(payload: DocumentPayload, today: date) -> list[Text | Rule]:
    payload.validate()
    p = _Page()
    y = _info_block(p, payload, _header(p, payload), today)
    y = _table(p, payload, y, INVOICE_TOTALS_HEIGHT) + 10

    totals = payload.totals
    half_tax = round_money(totals.tax) / 2
    _money_line(p, y, "Subtotal:", totals.subtotal)
    _money_line(p, y + 15, "SGST:", half_tax)
    _money_line(p, y + 30, "CGST:", half_tax)
    p.rule(LABEL_X, y + 48, MARGIN + CONTENT_WIDTH, y + 48)
    _money_line(p, y + 55, "Grand Total:", totals.final_amount, size=12, style=BOLD)
    p.wrapped(MARGIN, y + 75, f"(Rupees {amount_in_words(totals.final_amount)})",
              width=CONTENT_WIDTH, leading=11, size=9, style=BOLD)

    footer_y = PAGE_HEIGHT - FOOTER_OFFSET
    if payload.settings.footer_text:
        footer = _lines(payload.settings.footer_text, ITALIC, 8, CONTENT_WIDTH)
        # the last footer line stays on footer_y; longer footers grow upwards
        p.wrapped(MARGIN, footer_y - 10 * (len(footer) - 1), payload.settings.footer_text,
                  width=CONTENT_WIDTH, leading=10, size=8, style=ITALIC, align="center")
    signature = f"For {payload.settings.company_name or 'Your Company Name'}"
    p.text(MARGIN, footer_y + 30, _fit(signature, BOLD, 10, CONTENT_WIDTH),
           style=BOLD, width=CONTENT_WIDTH, align="right")
    return p.ops


def layout_quotation(payload: DocumentPayload, today: date) -> list[Text | Rule]:
    payload.validate()
    p = _Page()
    y = _info_block(p, payload, _header(p, payload), today)
    y = _table(p, payload, y, QUOTATION_TOTALS_HEIGHT)
    _money_line(p, y + 15, "Estimated Total:", payload.totals.final_amount, size=12, style=BOLD)
    return p.ops
