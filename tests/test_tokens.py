"""Unit tests for auth/tokens.py -- TokenService and password helpers.

Covers:
- issue() -> verify() returns the same id and username
- Expired, tampered, foreign-key and malformed tokens verify to None
- Tokens missing identity claims verify to None
- bcrypt hash/verify and timing-equalised authenticate_user()
"""

from datetime import datetime, timedelta, timezone

from jose import jwt

from auth.models import User
from auth.store import UserStore
from auth.tokens import TokenService, authenticate_user, hash_password, verify_password

_SECRET = "unit-test-secret-key-0123456789abcdef"
_USER = User(id=7, username="Alice", hashed_password="unused")


def _service(**kwargs) -> TokenService:
    return TokenService(secret_key=_SECRET, **kwargs)


class TestTokenService:
    def test_round_trip_preserves_identity(self):
        service = _service()
        claim = service.verify(service.issue(_USER))
        assert claim is not None
        assert claim.id == 7
        assert claim.username == "Alice"

    def test_expiry_matches_lifetime(self):
        service = _service(lifetime_seconds=900)
        claim = service.verify(service.issue(_USER))
        assert claim.expires_at - claim.issued_at == timedelta(seconds=900)

    def test_token_verified_after_lifetime_is_rejected(self):
        two_hours_ago = datetime.now(timezone.utc) - timedelta(hours=2)
        issuer = _service(lifetime_seconds=3600, clock=lambda: two_hours_ago)
        token = issuer.issue(_USER)
        assert _service().verify(token) is None

    def test_token_from_other_secret_is_rejected(self):
        other = TokenService(secret_key="another-secret-key-0123456789abcdef")
        assert _service().verify(other.issue(_USER)) is None

    def test_tampered_token_is_rejected(self):
        token = _service().issue(_USER)
        header, payload, signature = token.split(".")
        tampered = ".".join([header, payload, signature[::-1]])
        assert _service().verify(tampered) is None

    def test_garbage_is_rejected(self):
        assert _service().verify("not-a-token") is None
        assert _service().verify("") is None

    def test_missing_identity_claims_rejected(self):
        exp = datetime.now(timezone.utc) + timedelta(hours=1)
        token = jwt.encode({"sub": "Alice", "exp": exp, "iat": datetime.now(timezone.utc)}, _SECRET, algorithm="HS256")
        assert _service().verify(token) is None


class TestPasswords:
    def test_hash_is_salted_and_verifies(self):
        first = hash_password("s3cret", rounds=4)
        second = hash_password("s3cret", rounds=4)
        assert first != second
        assert first != "s3cret"
        assert verify_password("s3cret", first)
        assert not verify_password("wrong", first)

    def test_default_cost_factor_is_ten(self):
        assert hash_password("s3cret").startswith("$2b$10$")

    def test_malformed_hash_does_not_verify(self):
        assert verify_password("s3cret", "not-a-bcrypt-hash") is False

    def test_authenticate_user(self):
        store = UserStore(bcrypt_rounds=4)
        user = store.register("Bob", "hunter22")
        assert authenticate_user(store, "bob", "hunter22") is user
        assert authenticate_user(store, "Bob", "wrong") is None
        assert authenticate_user(store, "nobody", "hunter22") is None
