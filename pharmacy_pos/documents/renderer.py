"""
PDF output for invoices and quotations (reportlab).

    render_invoice(payload, "INV-20241012-001.pdf")
    render_quotation(payload, stream, today=date(2024, 10, 12))

The sink is a filesystem path or a writable binary stream. Canvases are
created in invariant mode, so the same payload and date produce identical
bytes. I/O failures surface as OSError.
"""
from __future__ import annotations

from datetime import date
import logging
from pathlib import Path
from typing import BinaryIO, Callable, Iterable, Union

from reportlab.lib.pagesizes import A4
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen import canvas

from .. import config
from .layout import BOLD, ITALIC, REGULAR, Rule, Text, layout_invoice, layout_quotation
from .payloads import DocumentPayload, QUOTATION

Sink = Union[str, Path, BinaryIO]

_log = logging.getLogger(__name__)

_BUILTIN_FONTS = {REGULAR: "Helvetica", BOLD: "Helvetica-Bold", ITALIC: "Helvetica-Oblique"}
_TTF_NAME = "DocumentSans"


def _font_map(font_path: str | None) -> dict[str, str]:
    """
    Helvetica has no rupee glyph; when a TTF is configured every style is drawn
    with it instead.
    """
    if not font_path:
        return _BUILTIN_FONTS
    if _TTF_NAME not in pdfmetrics.getRegisteredFontNames():
        pdfmetrics.registerFont(TTFont(_TTF_NAME, font_path))
    return {style: _TTF_NAME for style in _BUILTIN_FONTS}


def _draw_text(c: canvas.Canvas, op: Text, font: str) -> None:
    c.setFont(font, op.size)
    # layout y is the top of the line; reportlab wants a baseline from the bottom
    baseline = A4[1] - op.y - op.size
    if op.width is None or op.align == "left":
        c.drawString(op.x, baseline, op.text)
    elif op.align == "right":
        c.drawRightString(op.x + op.width, baseline, op.text)
    else:
        c.drawCentredString(op.x + op.width / 2, baseline, op.text)


def _draw_rule(c: canvas.Canvas, op: Rule) -> None:
    height = A4[1]
    c.saveState()
    c.setStrokeAlpha(op.opacity)
    c.line(op.x1, height - op.y1, op.x2, height - op.y2)
    c.restoreState()


def paint(ops: Iterable[Text | Rule], sink: Sink, *, title: str = "",
          font_path: str | None = None) -> None:
    """Draw layout ops onto an A4 canvas and write the PDF to `sink`."""
    fonts = _font_map(font_path)
    target = str(sink) if isinstance(sink, Path) else sink
    c = canvas.Canvas(target, pagesize=A4, invariant=1)
    c.setTitle(title)
    page = 0
    for op in ops:
        while op.page > page:
            c.showPage()
            page += 1
        if isinstance(op, Text):
            _draw_text(c, op, fonts[op.style])
        else:
            _draw_rule(c, op)
    c.showPage()
    c.save()


def _render(layout: Callable, payload: DocumentPayload, sink: Sink,
            today: date | None, font_path: str | None) -> None:
    ops = layout(payload, today or date.today())
    paint(ops, sink, title=payload.number,
          font_path=font_path if font_path is not None else config.PDF_FONT_PATH)
    _log.info("rendered %s %s (%d items)", payload.kind, payload.number, len(payload.bill_items))


def render_invoice(payload: DocumentPayload, sink: Sink, *, today: date | None = None,
                   font_path: str | None = None) -> None:
    _render(layout_invoice, payload, sink, today, font_path)


def render_quotation(payload: DocumentPayload, sink: Sink, *, today: date | None = None,
                     font_path: str | None = None) -> None:
    _render(layout_quotation, payload, sink, today, font_path)


def render_document(payload: DocumentPayload, sink: Sink, **kw) -> None:
    """Dispatch on payload.kind."""
    if payload.kind == QUOTATION:
        render_quotation(payload, sink, **kw)
    else:
        render_invoice(payload, sink, **kw)
