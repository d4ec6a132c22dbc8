# database/repositories/__init__.py
"""
Repository layer public API.

Usage:
    from pharmacy_pos.database.repositories import (
        # Errors
        DomainError, ValidationError, PersistenceError,
        # Parties (clients / suppliers)
        PartiesRepo, Party,
        # Inventory
        MedicinesRepo, Medicine, GroupsRepo, Group,
        # Invoices & quotations
        InvoicesRepo, InvoiceHeader, InvoiceLine,
        QuotationsRepo, QuotationHeader, QuotationLine,
        # Sales reps, settings, dashboard
        SalesRepsRepo, SalesRep, SettingsRepo, Settings, DashboardRepo,
    )
"""

# ----------------- Errors ------------------
from .errors import DomainError, ValidationError, PersistenceError

# ---------------- Parties ------------------
from .parties_repo import PartiesRepo, Party

# --------------- Inventory -----------------
from .groups_repo import GroupsRepo, Group
from .medicines_repo import MedicinesRepo, Medicine

# --------- Invoices & quotations -----------
from .invoices_repo import InvoicesRepo, InvoiceHeader, InvoiceLine
from .quotations_repo import QuotationsRepo, QuotationHeader, QuotationLine

# --------- Reps / settings / dashboard -----
from .sales_reps_repo import SalesRepsRepo, SalesRep
from .settings_repo import SettingsRepo, Settings
from .dashboard_repo import DashboardRepo

__all__ = [
    # errors
    "DomainError",
    "ValidationError",
    "PersistenceError",
    # parties_repo
    "PartiesRepo",
    "Party",
    # inventory
    "GroupsRepo",
    "Group",
    "MedicinesRepo",
    "Medicine",
    # invoices / quotations
    "InvoicesRepo",
    "InvoiceHeader",
    "InvoiceLine",
    "QuotationsRepo",
    "QuotationHeader",
    "QuotationLine",
    # reps / settings / dashboard
    "SalesRepsRepo",
    "SalesRep",
    "SettingsRepo",
    "Settings",
    "DashboardRepo",
]
