"""Pharmacy POS: billing, stock and printed invoices on a local SQLite store."""

__version__ = "1.0.0"
