"""
auth/models.py -- Domain dataclasses for authentication entities.

Pattern: Data class (pure data container, zero logic). Mirrors the approach
in catalog/models.py -- dataclasses own domain shape; stores and routes do
the work.

Layer rule: no imports from api/ or catalog/.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    """A registered identity.

    Records are append-only: created on registration, never mutated or
    deleted, and gone when the process exits.
    """

    id: int
    username: str
    hashed_password: str

    def public_view(self) -> dict:
        """Return the fields safe to send to clients (never the hash)."""
        return {"id": self.id, "username": self.username}


@dataclass(frozen=True)
class TokenClaim:
    """Decoded payload of a verified access token. Derived, never stored."""

    username: str
    id: int
    issued_at: datetime
    expires_at: datetime
