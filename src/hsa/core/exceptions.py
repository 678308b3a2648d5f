"""Exception hierarchy for HSA operations.

Services raise these; the API layer maps them to HTTP responses. Each
exception carries an error_code from the catalog in errors.py.
"""

from typing import Any


class HSAError(Exception):
    """Base exception for all HSA business errors.

    Attributes:
        error_code: Code from the error catalog (e.g., "NF_001")
        details: Additional context about the error (for logging only)
        http_status: HTTP status code to return
    """

    default_status: int = 500

    def __init__(
        self,
        error_code: str,
        details: dict[str, Any] | None = None,
        http_status: int | None = None,
    ):
        self.error_code = error_code
        self.details = details or {}
        self.http_status = http_status or self.default_status
        super().__init__(error_code)


class ValidationError(HSAError):
    """Missing or invalid input (400)."""

    default_status = 400


class AuthError(HSAError):
    """Bad credentials or token (401)."""

    default_status = 401


class NotFoundError(HSAError):
    """No such user or account (404)."""

    default_status = 404


class ConflictError(HSAError):
    """Duplicate email or an already-active card (409).

    Raised after a pre-check, or after the store rejects a concurrent insert.
    """

    default_status = 409


class StoreError(HSAError):
    """Underlying storage failure (500). The client message stays generic."""

    default_status = 500
