"""
auth/tokens.py -- JWT issuing/verification and password hashing utilities.

Security design decisions:
  JWT: python-jose with HS256. Tokens are signed with SECRET_KEY and carry
       the username (sub), user_id, iat and exp. TokenService.verify() returns
       None on any failure -- the auth dependency turns that into a 403.

  Passwords: bcrypt directly (no passlib wrapper). Cost factor comes from
       Settings.bcrypt_rounds (default 10). A dummy hash of the same cost is
       used by authenticate_user() so response time does not reveal whether
       a username exists.

  SECRET_KEY: sourced from core.config.get_settings() by the API lifespan and
       handed to TokenService. Nothing in this module reads the environment.

Layer rule: no imports from api/ or catalog/. Import from core/ is allowed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import TYPE_CHECKING

import bcrypt
from jose import ExpiredSignatureError, JWTError, jwt

from auth.models import TokenClaim

if TYPE_CHECKING:
    from auth.models import User
    from auth.store import UserStore

logger = logging.getLogger("stockroom.auth")

_ALGORITHM = "HS256"

# ---------------------------------------------------------------------------
# Password hashing (bcrypt -- direct usage, no passlib wrapper)
# ---------------------------------------------------------------------------


def hash_password(plain: str, rounds: int = 10) -> str:
    """Return a salted bcrypt hash of the given plaintext password.

    bcrypt only looks at the first 72 bytes of input; longer passwords are
    truncated before hashing so bcrypt 4.x does not reject them.
    """
    return bcrypt.hashpw(plain.encode("utf-8")[:72], bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Return True if the plaintext password matches the bcrypt hash."""
    try:
        return bcrypt.checkpw(plain.encode("utf-8")[:72], hashed.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


@lru_cache
def _dummy_hash(rounds: int) -> str:
    return hash_password("stockroom_timing_dummy", rounds=rounds)


def authenticate_user(store: UserStore, username: str, password: str) -> User | None:
    """Check a username/password pair with timing equalization.

    Always runs bcrypt whether or not the user exists:
    - Unknown username: bcrypt runs against a dummy hash of the same cost
    - Wrong password: bcrypt runs against the real hash

    Returns the User on success, None on any failure.
    """
    user = store.get_by_username(username)
    if user is None:
        # Equalize timing -- do NOT return early before running bcrypt
        verify_password(password, _dummy_hash(store.bcrypt_rounds))
        return None
    if not store.verify_password(user, password):
        return None
    return user


# ---------------------------------------------------------------------------
# JWT encode / decode
# ---------------------------------------------------------------------------


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """Issue and verify signed, time-limited bearer tokens.

    Args:
        secret_key:       HMAC signing key shared by issue and verify.
        lifetime_seconds: Token validity window, counted from issue time.
        expires_in:       Human form of the lifetime ("1h"), echoed to clients.
        clock:            Returns the current UTC time. Tests inject a fixed
                          clock to mint already-expired tokens.
    """

    def __init__(
        self,
        secret_key: str,
        lifetime_seconds: int = 3600,
        expires_in: str = "1h",
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._secret_key = secret_key
        self.lifetime_seconds = lifetime_seconds
        self.expires_in = expires_in
        self._clock = clock

    def issue(self, user: User) -> str:
        """Encode a signed JWT carrying the user's id and username."""
        issued_at = self._clock()
        payload = {
            "sub": user.username,
            "user_id": user.id,
            "iat": issued_at,
            "exp": issued_at + timedelta(seconds=self.lifetime_seconds),
        }
        return jwt.encode(payload, self._secret_key, algorithm=_ALGORITHM)

    def verify(self, token: str) -> TokenClaim | None:
        """Decode and verify a JWT. Returns the claim or None on any failure.

        Bad signature, malformed token, missing claims and expiry all yield
        None; the reason is only logged at DEBUG.
        """
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[_ALGORITHM])
        except ExpiredSignatureError:
            logger.debug("Rejected expired token")
            return None
        except JWTError as exc:
            logger.debug("Rejected token: %s", exc)
            return None

        username = payload.get("sub")
        user_id = payload.get("user_id")
        issued_at = payload.get("iat")
        expires_at = payload.get("exp")
        if not isinstance(username, str) or not isinstance(user_id, int):
            logger.debug("Rejected token with missing identity claims")
            return None
        if not isinstance(issued_at, int) or not isinstance(expires_at, int):
            logger.debug("Rejected token with missing time claims")
            return None

        return TokenClaim(
            username=username,
            id=user_id,
            issued_at=datetime.fromtimestamp(issued_at, tz=timezone.utc),
            expires_at=datetime.fromtimestamp(expires_at, tz=timezone.utc),
        )
