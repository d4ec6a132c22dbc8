# tests/test_quotations_repo.py
import pytest

from pharmacy_pos.database.repositories import (
    QuotationHeader,
    QuotationLine,
    QuotationsRepo,
    ValidationError,
)


def test_quotation_totals_and_number(conn, ids):
    repo = QuotationsRepo(conn)
    q_id = repo.create_quotation(
        QuotationHeader(client_id=ids["client_acme"], sales_rep_id=ids["rep"],
                        created_at="2024-10-12 11:00:00"),
        [QuotationLine(ids["med_para"], 3, 10.0), QuotationLine(ids["med_amox"], 1, 25.0)],
    )
    d = repo.get_quotation_details(q_id)
    assert d["quotation_number"] == "QTN-20241012-001"
    assert d["total_amount"] == pytest.approx(55.0)
    assert d["tax"] == pytest.approx(2.75)   # both lines in the 5% group
    assert d["final_amount"] == 58
    assert d["client_name"] == "Acme Clinic"
    assert [i["medicine_name"] for i in d["items"]] == ["Paracetamol 500mg", "Amoxicillin 250mg"]
    assert repo.generate_quotation_number("2024-10-12") == "QTN-20241012-002"


def test_quotation_never_moves_stock(conn, ids, stock_of):
    QuotationsRepo(conn).create_quotation(
        QuotationHeader(client_id=ids["client_acme"], tax=0),
        [QuotationLine(ids["med_syrup"], 50, 85.0)],
    )
    assert stock_of(ids["med_syrup"]) == 5


def test_quotation_validation(conn, ids):
    repo = QuotationsRepo(conn)
    with pytest.raises(ValidationError):
        repo.create_quotation(QuotationHeader(client_id=ids["client_acme"]), [])
    with pytest.raises(ValidationError):
        repo.create_quotation(QuotationHeader(), [QuotationLine(ids["med_para"], 1, 10.0)])
    assert repo.list_quotations() == []


def test_list_quotations_newest_first(conn, ids):
    repo = QuotationsRepo(conn)
    line = [QuotationLine(ids["med_para"], 1, 10.0)]
    repo.create_quotation(QuotationHeader(client_id=ids["client_acme"], tax=0,
                                          created_at="2024-10-01 09:00:00"), line)
    repo.create_quotation(QuotationHeader(client_name="Prospect Labs", tax=0,
                                          created_at="2024-10-05 09:00:00"), line)
    rows = repo.list_quotations()
    assert [r["client_name"] for r in rows] == ["Prospect Labs", "Acme Clinic"]
    assert repo.get_quotation_details(999) is None
