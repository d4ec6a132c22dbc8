# pharmacy_pos/tests/conftest.py
# ---------------------------------------------------------------------
# Ground rules:
# - pytest-qt owns QApplication (use qapp/qtbot fixtures)
# - Every test gets its own file-backed SQLite DB under tmp_path,
#   built through database.get_connection (schema + seed applied)
# - conn.row_factory = sqlite3.Row, PRAGMA foreign_keys=ON
# - `ids` seeds a small catalogue: settings, clients, groups, medicines, a rep
# - Silence benign Qt signal warnings
# ---------------------------------------------------------------------

from __future__ import annotations

import os
import re
import sqlite3

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6 import QtCore

from pharmacy_pos.database import get_connection
from pharmacy_pos.database.repositories import (
    GroupsRepo,
    MedicinesRepo,
    PartiesRepo,
    SalesRepsRepo,
    Settings,
    SettingsRepo,
)


# ---------- Qt: let pytest-qt own the app ----------
@pytest.fixture(scope="session")
def app(qapp):  # alias to match code that expects an `app` fixture
    return qapp


# ---------- Silence benign Qt warnings ----------
_BENIGN_QT_PATTERNS = [
    r"^QObject::connect: .* already connected",
    r"^QObject::disconnect: Unexpected null parameter",
    r"^QBasicTimer::stop: Failed\. Platform timer not running\.",
]


@pytest.fixture(autouse=True, scope="session")
def _silence_benign_qt():
    """Filter common harmless Qt messages during tests."""
    rx = [re.compile(p) for p in _BENIGN_QT_PATTERNS]

    def handler(msg_type, context, message):
        text = str(message)
        if any(r.search(text) for r in rx):
            return
        print(text)

    original = QtCore.qInstallMessageHandler(handler)
    try:
        yield
    finally:
        QtCore.qInstallMessageHandler(original)


# ---------- Per-test database ----------
@pytest.fixture()
def conn(tmp_path):
    """Fresh database per test; closed afterwards."""
    con = get_connection(tmp_path / "pharmacy_test.db")
    try:
        yield con
    finally:
        con.close()


# ---------- Handy seeded ids ----------
@pytest.fixture()
def ids(conn: sqlite3.Connection) -> dict:
    """Common IDs used throughout the tests."""
    SettingsRepo(conn).update(Settings(
        company_name="City Pharma",
        address="12 Main Road\nPune 411001",
        phone="020-5550100",
        gstin="27AAACC1234F1Z5",
        footer_text="Thank you for your business",
    ))

    clients = PartiesRepo(conn, "client")
    acme = clients.create("Acme Clinic", phone="9800000001", address="4 Hill Street",
                          gstin="27AAAAA0000A1Z5")
    sunrise = clients.create("Sunrise Hospital")

    meds = MedicinesRepo(conn)
    para = meds.create("Paracetamol 500mg", 10.0, 100, hsn="3004", batch_number="B-001",
                       expiry_date="2026-12-31", gst_percentage=5)
    # joins the existing 3004 group (5%)
    amox = meds.create("Amoxicillin 250mg", 25.0, 50, hsn="3004", batch_number="B-002")
    syrup = meds.create("Cough Syrup", 85.0, 5, hsn="3003", gst_percentage=12)
    loose = meds.create("Cotton Roll", 40.0, 20)

    rep = SalesRepsRepo(conn).create("Ravi Kumar", employee_type="Full-time")
    groups = GroupsRepo(conn)

    return {
        "client_acme": acme,
        "client_sunrise": sunrise,
        "med_para": para,
        "med_amox": amox,
        "med_syrup": syrup,
        "med_loose": loose,
        "group_3004": groups.get_by_hsn("3004").id,
        "group_3003": groups.get_by_hsn("3003").id,
        "rep": rep,
    }


@pytest.fixture()
def stock_of(conn: sqlite3.Connection):
    """stock_of(medicine_id) -> current stock."""
    def _get(medicine_id: int) -> int:
        row = conn.execute("SELECT stock FROM medicines WHERE id=?", (medicine_id,)).fetchone()
        return int(row[0])
    return _get
