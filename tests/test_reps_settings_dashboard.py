# tests/test_reps_settings_dashboard.py
import pytest

from pharmacy_pos.database.repositories import (
    DashboardRepo,
    DomainError,
    InvoiceHeader,
    InvoiceLine,
    InvoicesRepo,
    SalesRepsRepo,
    Settings,
    SettingsRepo,
)


def _sell(conn, ids, created_at, qty=1, status="Completed", rep=True):
    return InvoicesRepo(conn).commit_invoice(
        InvoiceHeader(client_id=ids["client_acme"], sales_rep_id=ids["rep"] if rep else None,
                      status=status, tax=0, created_at=created_at),
        [InvoiceLine(ids["med_para"], qty, 10.0)],
    )


# ---------------------------- sales reps ----------------------------

def test_target_upsert_and_performance(conn, ids):
    reps = SalesRepsRepo(conn)
    reps.set_target(ids["rep"], "2024-10", 5000)
    reps.set_target(ids["rep"], "2024-10", 7500)

    _sell(conn, ids, "2024-10-03 10:00:00", qty=10)          # 100
    _sell(conn, ids, "2024-10-20 10:00:00", qty=5)           # 50
    _sell(conn, ids, "2024-10-21 10:00:00", qty=7, status="Draft")
    _sell(conn, ids, "2024-11-01 10:00:00", qty=3)
    _sell(conn, ids, "2024-10-22 10:00:00", qty=9, rep=False)

    perf = reps.get_performance(ids["rep"], "2024-10")
    assert perf == {"name": "Ravi Kumar", "month": "2024-10", "target": 7500.0, "achieved": 150.0}
    assert reps.get_performance(ids["rep"], "2024-09")["target"] == 0.0
    assert reps.get_performance(31337, "2024-10") is None
    assert [p["name"] for p in reps.list_performance("2024-10")] == ["Ravi Kumar"]


def test_month_format_is_enforced(conn, ids):
    reps = SalesRepsRepo(conn)
    with pytest.raises(DomainError):
        reps.set_target(ids["rep"], "2024-13", 100)
    with pytest.raises(DomainError):
        reps.achieved(ids["rep"], "Oct 2024")
    with pytest.raises(DomainError):
        reps.set_target(ids["rep"], "2024-10", -1)


def test_rep_delete_keeps_invoices(conn, ids):
    inv = _sell(conn, ids, "2024-10-03 10:00:00")
    reps = SalesRepsRepo(conn)
    assert reps.delete(ids["rep"]) is True
    assert reps.list_reps() == []
    assert InvoicesRepo(conn).get_header(inv)["sales_rep_id"] is None


# ---------------------------- settings ----------------------------

def test_settings_singleton_roundtrip(conn):
    repo = SettingsRepo(conn)
    assert repo.get() == Settings()
    repo.update(Settings(company_name="City Pharma", footer_text="Get well soon"))
    repo.update(Settings(company_name="City Pharma LLP", footer_text="Get well soon"))
    assert repo.get().company_name == "City Pharma LLP"
    assert conn.execute("SELECT COUNT(*) FROM settings").fetchone()[0] == 1


def test_settings_row_recreated_when_missing(conn):
    conn.execute("DELETE FROM settings")
    conn.commit()
    assert SettingsRepo(conn).get() == Settings()
    assert conn.execute("SELECT COUNT(*) FROM settings").fetchone()[0] == 1


# ---------------------------- dashboard ----------------------------

def test_dashboard_stats(conn, ids):
    _sell(conn, ids, "2024-10-03 10:00:00", qty=2)
    _sell(conn, ids, "2024-10-04 10:00:00", qty=1, status="Draft")
    stats = DashboardRepo(conn).stats()
    assert stats["total_medicines"] == 4
    assert stats["low_stock_items"] == 1          # cough syrup, stock 5
    assert stats["total_invoices"] == 2
    assert len(stats["recent_medicines"]) == 4
    assert stats["recent_medicines"][0]["name"] == "Cotton Roll"


def test_dashboard_sales_total_counts_completed_only(conn, ids):
    _sell(conn, ids, "2024-10-03 10:00:00", qty=2)
    _sell(conn, ids, "2024-10-04 10:00:00", qty=1, status="Draft")
    _sell(conn, ids, "2024-11-01 10:00:00", qty=4)
    assert DashboardRepo(conn).sales_total("2024-10-01", "2024-10-31") == pytest.approx(20.0)
