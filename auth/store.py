"""
auth/store.py -- In-memory credential store.

Pattern: Repository. UserStore owns the only list of User records; route and
dependency code never touches the list directly. One instance is created in
the API lifespan and attached to app.state.user_store.

Storage:
  Append-only Python list scanned linearly. Usernames are compared with
  str.lower() on both sides, first match wins. There is no removal, so the
  case-insensitive uniqueness invariant can only be broken by register(),
  which checks it under the lock.

Concurrency:
  FastAPI runs sync route handlers in a thread pool. The duplicate check and
  the append happen under a single threading.Lock. bcrypt hashing is slow
  on purpose and runs outside the lock so one registration does not stall
  the others.

Layer rule: no imports from api/ or catalog/.
"""

from __future__ import annotations

import logging
import threading

from auth.models import User
from auth.tokens import hash_password, verify_password
from core.exceptions import DuplicateError

logger = logging.getLogger("stockroom.auth")


class UserStore:
    def __init__(self, bcrypt_rounds: int = 10) -> None:
        self.bcrypt_rounds = bcrypt_rounds
        self._users: list[User] = []
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def count(self) -> int:
        return len(self._users)

    def get_by_username(self, username: str) -> User | None:
        """Case-insensitive exact match. First match wins."""
        wanted = username.lower()
        for user in self._users:
            if user.username.lower() == wanted:
                return user
        return None

    def get_by_id(self, user_id: int) -> User | None:
        for user in self._users:
            if user.id == user_id:
                return user
        return None

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def register(self, username: str, password: str) -> User:
        """Create a user with a bcrypt-hashed password.

        Raises DuplicateError if the username is already taken, ignoring case.
        The new id is the current user count plus one.
        """
        # Re-checked under the lock after hashing.
        if self.get_by_username(username) is not None:
            raise _duplicate_username()

        hashed = hash_password(password, rounds=self.bcrypt_rounds)

        with self._lock:
            if self.get_by_username(username) is not None:
                raise _duplicate_username()
            user = User(id=len(self._users) + 1, username=username, hashed_password=hashed)
            self._users.append(user)

        logger.info("Registered user id=%d", user.id)
        return user

    # ------------------------------------------------------------------
    # Credentials
    # ------------------------------------------------------------------

    @staticmethod
    def verify_password(user: User, plaintext: str) -> bool:
        """Constant-time bcrypt comparison against the stored hash."""
        return verify_password(plaintext, user.hashed_password)


def _duplicate_username() -> DuplicateError:
    return DuplicateError("Duplicate username", "Username already exists (case-insensitive check)")
