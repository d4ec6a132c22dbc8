"""
Renderer input: a fully resolved invoice or quotation.

Nothing here touches the database: `invoice_payload()` and `quotation_payload()`
assemble the payload from already-loaded repository rows + settings (any object
with company_name, address and footer_text).
"""
from __future__ import annotations

from dataclasses import dataclass, field

from ..utils.validators import is_non_negative_number

INVOICE = "invoice"
QUOTATION = "quotation"


@dataclass
class ClientInfo:
    name: str | None = None
    address: str | None = None
    phone: str | None = None
    gstin: str | None = None


@dataclass
class BillItem:
    name: str
    quantity: float
    price: float
    hsn: str | None = None
    batch_number: str | None = None

    @property
    def amount(self) -> float:
        return self.price * self.quantity


@dataclass
class Totals:
    subtotal: float
    tax: float
    final_amount: float


@dataclass
class CompanyInfo:
    company_name: str | None = None
    address: str | None = None
    footer_text: str | None = None


@dataclass
class DocumentPayload:
    number: str
    client: ClientInfo
    bill_items: list[BillItem]
    totals: Totals
    settings: CompanyInfo = field(default_factory=CompanyInfo)
    payment_mode: str | None = None
    kind: str = INVOICE

    def validate(self) -> None:
        """Every number must be finite and non-negative."""
        if self.kind not in (INVOICE, QUOTATION):
            raise ValueError(f"Unknown document kind {self.kind!r}")
        for label, value in (
            ("subtotal", self.totals.subtotal),
            ("tax", self.totals.tax),
            ("final amount", self.totals.final_amount),
        ):
            if not is_non_negative_number(value):
                raise ValueError(f"{label} must be a finite, non-negative number: {value!r}")
        for pos, item in enumerate(self.bill_items, start=1):
            if not is_non_negative_number(item.quantity):
                raise ValueError(f"item {pos}: quantity must be finite and non-negative")
            if not is_non_negative_number(item.price):
                raise ValueError(f"item {pos}: price must be finite and non-negative")


def _company(settings) -> CompanyInfo:
    return CompanyInfo(
        company_name=settings.company_name,
        address=settings.address,
        footer_text=settings.footer_text,
    )


def _items(rows: list[dict]) -> list[BillItem]:
    return [
        BillItem(
            name=r["medicine_name"],
            quantity=r["quantity"],
            price=float(r["unit_price"]),
            hsn=r.get("hsn"),
            batch_number=r.get("batch_number"),
        )
        for r in rows
    ]


def _client(details: dict) -> ClientInfo:
    return ClientInfo(
        name=details.get("client_name"),
        address=details.get("client_address"),
        phone=details.get("client_phone"),
        gstin=details.get("client_gstin"),
    )


def invoice_payload(details: dict, settings) -> DocumentPayload:
    """Build from InvoicesRepo.get_invoice_details() output."""
    return DocumentPayload(
        number=details["invoice_number"],
        client=_client(details),
        bill_items=_items(details["items"]),
        totals=Totals(
            subtotal=float(details["total_amount"]),
            tax=float(details["tax"] or 0.0),
            final_amount=float(details["final_amount"]),
        ),
        settings=_company(settings),
        payment_mode=details.get("payment_mode") or "N/A",
        kind=INVOICE,
    )


def quotation_payload(details: dict, settings) -> DocumentPayload:
    """Build from QuotationsRepo.get_quotation_details() output."""
    return DocumentPayload(
        number=details["quotation_number"],
        client=_client(details),
        bill_items=_items(details["items"]),
        totals=Totals(
            subtotal=float(details["total_amount"]),
            tax=float(details["tax"] or 0.0),
            final_amount=float(details["final_amount"]),
        ),
        settings=_company(settings),
        kind=QUOTATION,
    )
