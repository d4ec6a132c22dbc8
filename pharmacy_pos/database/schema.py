from pathlib import Path
import logging
import sqlite3
import sys
from contextlib import closing

_log = logging.getLogger(__name__)

SQL = r"""
PRAGMA foreign_keys = ON;

/* ======================== CORE TABLES ======================== */

/* -------- company settings (singleton) -------- */
CREATE TABLE IF NOT EXISTS settings (
    id           INTEGER PRIMARY KEY CHECK (id = 1),
    company_name TEXT,
    address      TEXT,
    phone        TEXT,
    gstin        TEXT,
    footer_text  TEXT
);

/* -------- parties: clients and suppliers share one table -------- */
CREATE TABLE IF NOT EXISTS parties (
    id         INTEGER PRIMARY KEY AUTOINCREMENT,
    name       TEXT NOT NULL,
    role       TEXT NOT NULL DEFAULT 'client' CHECK (role IN ('client','supplier')),
    phone      TEXT,
    address    TEXT,
    gstin      TEXT,
    created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
    UNIQUE(name, role)
);

/* -------- HSN groups & medicines -------- */
CREATE TABLE IF NOT EXISTS item_groups (
    id             INTEGER PRIMARY KEY AUTOINCREMENT,
    hsn_code       TEXT NOT NULL UNIQUE,
    gst_percentage REAL NOT NULL DEFAULT 0 CHECK (gst_percentage >= 0),
    measure        TEXT
);

CREATE TABLE IF NOT EXISTS medicines (
    id           INTEGER PRIMARY KEY AUTOINCREMENT,
    name         TEXT NOT NULL UNIQUE,
    hsn          TEXT,
    item_code    TEXT UNIQUE,
    batch_number TEXT,
    expiry_date  DATE,
    price        REAL NOT NULL CHECK (price >= 0),
    stock        INTEGER NOT NULL DEFAULT 0,  /* may go negative after a sale */
    group_id     INTEGER,
    created_at   DATETIME DEFAULT CURRENT_TIMESTAMP,
    updated_at   DATETIME DEFAULT CURRENT_TIMESTAMP,
    FOREIGN KEY (group_id) REFERENCES item_groups(id) ON DELETE SET NULL
);
CREATE INDEX IF NOT EXISTS idx_medicines_name ON medicines(name);

/* -------- sales reps & monthly targets -------- */
CREATE TABLE IF NOT EXISTS sales_reps (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    name            TEXT NOT NULL UNIQUE,
    dob             DATE,
    contact_number  TEXT,
    employee_type   TEXT,
    date_of_joining DATE
);

CREATE TABLE IF NOT EXISTS sales_targets (
    id            INTEGER PRIMARY KEY AUTOINCREMENT,
    rep_id        INTEGER NOT NULL,
    month         TEXT NOT NULL,   /* YYYY-MM */
    target_amount REAL NOT NULL CHECK (target_amount >= 0),
    FOREIGN KEY (rep_id) REFERENCES sales_reps(id) ON DELETE CASCADE,
    UNIQUE(rep_id, month)
);

/* ======================== DOCUMENTS ======================== */

/* -------- invoices -------- */
CREATE TABLE IF NOT EXISTS invoices (
    id             INTEGER PRIMARY KEY AUTOINCREMENT,
    invoice_number TEXT NOT NULL UNIQUE,
    client_id      INTEGER NOT NULL,
    sales_rep_id   INTEGER,
    total_amount   REAL NOT NULL CHECK (total_amount >= 0),
    discount       REAL NOT NULL DEFAULT 0 CHECK (discount >= 0),
    tax            REAL NOT NULL DEFAULT 0 CHECK (tax >= 0),
    final_amount   REAL NOT NULL,
    payment_mode   TEXT,
    status         TEXT NOT NULL DEFAULT 'Completed',
    created_at     DATETIME NOT NULL DEFAULT CURRENT_TIMESTAMP,
    FOREIGN KEY (client_id)    REFERENCES parties(id),
    FOREIGN KEY (sales_rep_id) REFERENCES sales_reps(id) ON DELETE SET NULL
);
CREATE INDEX IF NOT EXISTS idx_invoices_number     ON invoices(invoice_number);
CREATE INDEX IF NOT EXISTS idx_invoices_created_at ON invoices(created_at);

CREATE TABLE IF NOT EXISTS invoice_items (
    id            INTEGER PRIMARY KEY AUTOINCREMENT,
    invoice_id    INTEGER NOT NULL,
    medicine_id   INTEGER NOT NULL,
    quantity      INTEGER NOT NULL CHECK (quantity > 0),
    free_quantity INTEGER NOT NULL DEFAULT 0 CHECK (free_quantity >= 0),
    unit_price    REAL NOT NULL CHECK (unit_price >= 0),
    ptr           REAL,
    total_price   REAL NOT NULL,
    FOREIGN KEY (invoice_id)  REFERENCES invoices(id) ON DELETE CASCADE,
    FOREIGN KEY (medicine_id) REFERENCES medicines(id)
);
CREATE INDEX IF NOT EXISTS idx_invoice_items_invoice ON invoice_items(invoice_id);

/* -------- quotations: same shape, never touch stock -------- */
CREATE TABLE IF NOT EXISTS quotations (
    id               INTEGER PRIMARY KEY AUTOINCREMENT,
    quotation_number TEXT NOT NULL UNIQUE,
    client_id        INTEGER NOT NULL,
    sales_rep_id     INTEGER,
    total_amount     REAL NOT NULL CHECK (total_amount >= 0),
    discount         REAL NOT NULL DEFAULT 0 CHECK (discount >= 0),
    tax              REAL NOT NULL DEFAULT 0 CHECK (tax >= 0),
    final_amount     REAL NOT NULL,
    created_at       DATETIME NOT NULL DEFAULT CURRENT_TIMESTAMP,
    FOREIGN KEY (client_id)    REFERENCES parties(id),
    FOREIGN KEY (sales_rep_id) REFERENCES sales_reps(id) ON DELETE SET NULL
);
CREATE INDEX IF NOT EXISTS idx_quotations_created_at ON quotations(created_at);

CREATE TABLE IF NOT EXISTS quotation_items (
    id            INTEGER PRIMARY KEY AUTOINCREMENT,
    quotation_id  INTEGER NOT NULL,
    medicine_id   INTEGER NOT NULL,
    quantity      INTEGER NOT NULL CHECK (quantity > 0),
    free_quantity INTEGER NOT NULL DEFAULT 0 CHECK (free_quantity >= 0),
    unit_price    REAL NOT NULL CHECK (unit_price >= 0),
    ptr           REAL,
    total_price   REAL NOT NULL,
    FOREIGN KEY (quotation_id) REFERENCES quotations(id) ON DELETE CASCADE,
    FOREIGN KEY (medicine_id)  REFERENCES medicines(id)
);
"""


def init_schema(db_path: Path | str) -> None:
    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    with closing(sqlite3.connect(db_path)) as conn:
        conn.execute("PRAGMA journal_mode=WAL;")
        # Apply (idempotent) schema
        conn.executescript(SQL)
        conn.commit()
    _log.debug("schema applied to %s", db_path)


if __name__ == "__main__":
    from ..config import DB_PATH

    target = sys.argv[1] if len(sys.argv) > 1 else DB_PATH
    init_schema(target)
    print(f"✓ DB applied to {target}")
