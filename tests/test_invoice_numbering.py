# tests/test_invoice_numbering.py
from datetime import date

from pharmacy_pos.database.repositories import InvoiceHeader, InvoiceLine, InvoicesRepo


def _sell(repo, ids, created_at):
    return repo.commit_invoice(
        InvoiceHeader(client_id=ids["client_acme"], tax=0, created_at=created_at),
        [InvoiceLine(ids["med_para"], 1, 10.0)],
    )


def test_first_number_of_the_day(conn):
    repo = InvoicesRepo(conn)
    assert repo.generate_invoice_number(date(2024, 10, 12)) == "INV-20241012-001"
    assert repo.generate_invoice_number("2024-10-12") == "INV-20241012-001"


def test_sequence_counts_only_that_day(conn, ids):
    repo = InvoicesRepo(conn)
    _sell(repo, ids, "2024-10-11 23:59:59")
    _sell(repo, ids, "2024-10-12 00:00:01")
    _sell(repo, ids, "2024-10-12 17:45:00")

    assert repo.generate_invoice_number("2024-10-11") == "INV-20241011-002"
    assert repo.generate_invoice_number("2024-10-12") == "INV-20241012-003"
    assert repo.generate_invoice_number("2024-10-13") == "INV-20241013-001"


def test_generate_is_read_only(conn, ids):
    repo = InvoicesRepo(conn)
    before = conn.total_changes
    a = repo.generate_invoice_number("2024-10-12")
    b = repo.generate_invoice_number("2024-10-12")
    assert a == b
    assert conn.total_changes == before


def test_commit_numbers_consecutively_within_a_day(conn, ids):
    repo = InvoicesRepo(conn)
    numbers = [repo.get_header(_sell(repo, ids, "2024-10-12 10:00:00"))["invoice_number"]
               for _ in range(3)]
    assert numbers == ["INV-20241012-001", "INV-20241012-002", "INV-20241012-003"]


def test_explicit_number_is_kept(conn, ids):
    repo = InvoicesRepo(conn)
    inv_id = repo.commit_invoice(
        InvoiceHeader(client_id=ids["client_acme"], tax=0, invoice_number="MANUAL-7"),
        [InvoiceLine(ids["med_para"], 1, 10.0)],
    )
    assert repo.get_header(inv_id)["invoice_number"] == "MANUAL-7"


def test_default_date_is_today(conn):
    today = date.today().strftime("%Y%m%d")
    assert InvoicesRepo(conn).generate_invoice_number() == f"INV-{today}-001"
