"""
Error taxonomy for the data-access and authentication layers.

Every error a request can fail with derives from AlohaError, which
carries the HTTP status it maps to. The wire representation is
``{"code": <status>, "error": "<message>"}``.
"""

from typing import Any, Dict


class AlohaError(Exception):
    """Base class for all request-scoped failures."""

    status_code: int = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.status_code, "error": self.message}


class DataAccessError(AlohaError):
    """
    Store failure: connection, timeout or constraint violation.

    The underlying driver message is kept in ``message``; the original
    exception is chained via ``raise ... from``. Never retried here.
    """

    status_code = 400


class NotFoundError(DataAccessError):
    """A mutation targeted a row that does not exist."""

    status_code = 404


class InvalidQueryError(AlohaError):
    """Client input rejected before any store call (page, size, sort, order)."""

    status_code = 422


class InvalidRequestError(AlohaError):
    """Malformed or unresolvable request, e.g. login for an unknown username."""

    status_code = 400


class AuthenticationError(AlohaError):
    """Credential mismatch or missing/expired session."""

    status_code = 401


class TransactionClosedError(RuntimeError):
    """
    A transaction handle was used after its ownership was consumed.

    A programming error rather than a request failure, hence not an
    AlohaError.
    """
