# tests/test_catalogue_repos.py
"""Parties, groups and medicines."""
import pytest

from pharmacy_pos.database.repositories import (
    DomainError,
    GroupsRepo,
    InvoiceHeader,
    InvoiceLine,
    InvoicesRepo,
    MedicinesRepo,
    PartiesRepo,
)


# ---------------------------- parties ----------------------------

def test_party_create_search_update(conn, ids):
    clients = PartiesRepo(conn, "client")
    assert [p.name for p in clients.list_parties()] == ["Acme Clinic", "Sunrise Hospital"]
    assert [p.name for p in clients.search("27AAAAA")] == ["Acme Clinic"]
    assert clients.get(ids["client_acme"]).phone == "9800000001"

    assert clients.update(ids["client_sunrise"], "Sunrise Hospital", phone="020-1234")
    assert clients.get(ids["client_sunrise"]).phone == "020-1234"


def test_party_names_unique_per_role(conn, ids):
    clients = PartiesRepo(conn, "client")
    with pytest.raises(DomainError):
        clients.create("Acme Clinic")
    with pytest.raises(DomainError):
        clients.create("   ")
    # the same name is fine for a supplier
    sup_id = PartiesRepo(conn, "supplier").create("Acme Clinic")
    assert PartiesRepo(conn, "supplier").get(sup_id).role == "supplier"
    assert clients.get(sup_id) is None


def test_party_get_or_create(conn, ids):
    clients = PartiesRepo(conn, "client")
    assert clients.get_or_create("Acme Clinic") == ids["client_acme"]
    new_id = clients.get_or_create("City Dispensary")
    assert clients.get_by_name("City Dispensary").id == new_id


def test_party_delete_refused_while_invoiced(conn, ids):
    InvoicesRepo(conn).commit_invoice(
        InvoiceHeader(client_id=ids["client_acme"], tax=0),
        [InvoiceLine(ids["med_para"], 1, 10.0)],
    )
    clients = PartiesRepo(conn, "client")
    with pytest.raises(DomainError):
        clients.delete(ids["client_acme"])
    assert clients.delete(ids["client_sunrise"]) is True
    assert clients.get(ids["client_sunrise"]) is None


def test_unknown_role_rejected(conn):
    with pytest.raises(ValueError):
        PartiesRepo(conn, "vendor")


# ---------------------------- groups ----------------------------

def test_groups_listed_with_item_counts(conn, ids):
    rows = {g["hsn_code"]: g for g in GroupsRepo(conn).list_groups()}
    assert rows["3004"]["item_count"] == 2
    assert rows["3004"]["gst_percentage"] == pytest.approx(5.0)
    assert rows["3003"]["item_count"] == 1


def test_group_details_and_delete_guard(conn, ids):
    groups = GroupsRepo(conn)
    details = groups.get_details(ids["group_3004"])
    assert [m["name"] for m in details["medicines"]] == ["Amoxicillin 250mg", "Paracetamol 500mg"]

    with pytest.raises(DomainError, match="assigned to 2 item"):
        groups.delete(ids["group_3004"])

    empty = groups.create("9018", 18, measure="Nos")
    assert groups.delete(empty) is True
    assert groups.get(empty) is None


def test_group_duplicate_hsn_and_gst_update(conn, ids):
    groups = GroupsRepo(conn)
    with pytest.raises(DomainError):
        groups.create("3004", 12)
    assert groups.update_gst(ids["group_3004"], 12)
    med = MedicinesRepo(conn).get(ids["med_para"])
    assert med.gst_percentage == pytest.approx(12.0)


# ---------------------------- medicines ----------------------------

def test_medicine_item_code_and_group_link(conn, ids):
    meds = MedicinesRepo(conn)
    para = meds.get(ids["med_para"])
    assert para.item_code == f"ITEM-{ids['med_para']:04d}"
    assert para.group_id == ids["group_3004"]
    # amoxicillin joined the existing group, its own rate would be ignored
    assert meds.get(ids["med_amox"]).gst_percentage == pytest.approx(5.0)
    assert meds.get(ids["med_loose"]).group_id is None


def test_medicine_validation(conn):
    meds = MedicinesRepo(conn)
    with pytest.raises(DomainError):
        meds.create("", 1.0)
    with pytest.raises(DomainError):
        meds.create("Bad Price", -1)
    with pytest.raises(DomainError):
        meds.create("Bad Stock", 1.0, 2.5)


def test_medicine_update_keeps_group_without_rate(conn, ids):
    meds = MedicinesRepo(conn)
    assert meds.update(ids["med_para"], "Paracetamol 650mg", 12.0, 80, hsn="9999")
    med = meds.get(ids["med_para"])
    assert med.name == "Paracetamol 650mg"
    assert med.stock == 80
    assert med.group_id == ids["group_3004"]
    assert GroupsRepo(conn).get_by_hsn("9999") is None

    meds.update(ids["med_para"], "Paracetamol 650mg", 12.0, 80, hsn="9999", gst_percentage=18)
    assert meds.get(ids["med_para"]).gst_percentage == pytest.approx(18.0)


def test_medicine_search_low_stock_and_delete(conn, ids):
    meds = MedicinesRepo(conn)
    assert [m.name for m in meds.search("amox")] == ["Amoxicillin 250mg"]
    assert [m.name for m in meds.low_stock()] == ["Cough Syrup"]

    InvoicesRepo(conn).commit_invoice(
        InvoiceHeader(client_id=ids["client_acme"], tax=0),
        [InvoiceLine(ids["med_para"], 1, 10.0)],
    )
    with pytest.raises(DomainError):
        meds.delete(ids["med_para"])
    assert meds.delete(ids["med_loose"]) is True
