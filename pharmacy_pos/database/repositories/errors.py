# database/repositories/errors.py
"""
Error taxonomy shared by the repositories.

- DomainError:      anything the UI can surface directly (toast/snackbar).
- ValidationError:  malformed input rejected before any write.
- PersistenceError: the store rejected a write; the transaction was rolled back.
                    The originating sqlite3.Error is available as __cause__.
"""


class DomainError(Exception):
    pass


class ValidationError(DomainError):
    pass


class PersistenceError(DomainError):
    pass
