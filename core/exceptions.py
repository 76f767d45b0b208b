"""
core/exceptions.py -- Domain exceptions shared by the stores and the API layer.

Stores raise these; api/main.py maps each class to an HTTP status and renders
the flat {"error": ..., "message": ...} envelope. Stores never import fastapi.
"""

from __future__ import annotations


class StockRoomError(Exception):
    """Base class for expected, client-facing failures.

    error   -- short label returned as the "error" field.
    message -- optional human-readable explanation.
    """

    status_code = 500

    def __init__(self, error: str, message: str | None = None) -> None:
        self.error = error
        self.message = message
        super().__init__(message or error)


class ValidationError(StockRoomError):
    """Required fields are missing or hold unusable values."""

    status_code = 400


class DuplicateError(StockRoomError):
    """A uniqueness rule (username, product id, product name) would be broken."""

    status_code = 409
