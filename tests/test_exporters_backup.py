# tests/test_exporters_backup.py
import csv
import sqlite3

import openpyxl
import pytest

from pharmacy_pos.database.backup import checkpoint, create_backup, quick_check
from pharmacy_pos.database.repositories import InvoiceHeader, InvoiceLine, InvoicesRepo
from pharmacy_pos.utils.exporters import (
    EXPORT_HEADERS,
    export_invoices_csv,
    export_invoices_xlsx,
)


@pytest.fixture()
def export_rows(conn, ids):
    repo = InvoicesRepo(conn)
    a = repo.commit_invoice(
        InvoiceHeader(client_id=ids["client_acme"], sales_rep_id=ids["rep"], tax=0,
                      created_at="2024-10-12 10:30:00"),
        [InvoiceLine(ids["med_para"], 3, 10.0, free_quantity=1),
         InvoiceLine(ids["med_amox"], 1, 25.0)],
    )
    return repo.export_rows([a])


def test_csv_export(export_rows, tmp_path):
    path = tmp_path / "sales.csv"
    assert export_invoices_csv(export_rows, path) == 2
    with open(path, newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    assert tuple(rows[0]) == EXPORT_HEADERS
    by_med = {r[4]: r for r in rows[1:]}
    para = by_med["Paracetamol 500mg"]
    assert para[0] == "INV-20241012-001"
    assert para[2] == "Acme Clinic"
    assert para[3] == "Ravi Kumar"
    assert para[6:] == ["3", "1", "10.0", "30.0"]


def test_xlsx_export(export_rows, tmp_path):
    path = tmp_path / "sales.xlsx"
    assert export_invoices_xlsx(export_rows, path) == 2
    ws = openpyxl.load_workbook(path).active
    values = list(ws.iter_rows(values_only=True))
    assert values[0] == EXPORT_HEADERS
    assert len(values) == 3
    assert {v[4] for v in values[1:]} == {"Paracetamol 500mg", "Amoxicillin 250mg"}


def test_export_to_missing_directory_raises(export_rows, tmp_path):
    with pytest.raises(OSError):
        export_invoices_csv(export_rows, tmp_path / "nope" / "sales.csv")


def test_backup_is_a_consistent_copy(conn, ids, tmp_path):
    InvoicesRepo(conn).commit_invoice(
        InvoiceHeader(client_id=ids["client_acme"], tax=0),
        [InvoiceLine(ids["med_para"], 1, 10.0)],
    )
    checkpoint(conn)
    progress = []
    dest = create_backup(conn, tmp_path / "backups" / "copy.db", progress_step=progress.append)

    assert dest.exists()
    assert progress[-1] == 100
    assert quick_check(dest)
    con = sqlite3.connect(dest)
    try:
        assert con.execute("SELECT COUNT(*) FROM invoices").fetchone()[0] == 1
        assert con.execute("SELECT COUNT(*) FROM medicines").fetchone()[0] == 4
    finally:
        con.close()
