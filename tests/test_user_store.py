"""Unit tests for auth/store.py -- the in-memory credential store.

Covers:
- Sequential ids starting at 1
- Case-insensitive duplicate rejection leaves the store unchanged
- Case-insensitive lookup, first match wins
- Password verification against the stored bcrypt hash
"""

import threading

import pytest

from auth.store import UserStore
from core.exceptions import DuplicateError


@pytest.fixture
def store():
    return UserStore(bcrypt_rounds=4)


def test_register_assigns_sequential_ids(store):
    first = store.register("alice", "pw-one")
    second = store.register("bob", "pw-two")
    assert (first.id, second.id) == (1, 2)
    assert store.count() == 2


def test_register_stores_hash_not_plaintext(store):
    user = store.register("alice", "pw-one")
    assert user.hashed_password != "pw-one"
    assert user.hashed_password.startswith("$2b$04$")


def test_duplicate_username_ignores_case(store):
    store.register("Alice", "pw-one")
    with pytest.raises(DuplicateError) as exc_info:
        store.register("aLICE", "pw-two")
    assert exc_info.value.error == "Duplicate username"
    assert exc_info.value.status_code == 409
    assert store.count() == 1


def test_get_by_username_ignores_case(store):
    user = store.register("Alice", "pw-one")
    assert store.get_by_username("ALICE") is user
    assert store.get_by_username("alice") is user
    assert store.get_by_username("alic") is None


def test_get_by_id(store):
    user = store.register("alice", "pw-one")
    assert store.get_by_id(1) is user
    assert store.get_by_id(2) is None


def test_verify_password(store):
    user = store.register("alice", "pw-one")
    assert store.verify_password(user, "pw-one")
    assert not store.verify_password(user, "PW-ONE")


def test_public_view_hides_hash(store):
    user = store.register("alice", "pw-one")
    assert user.public_view() == {"id": 1, "username": "alice"}


def test_concurrent_registration_keeps_usernames_unique(store):
    results: list[str] = []

    def attempt(name: str) -> None:
        try:
            store.register(name, "pw")
            results.append("ok")
        except DuplicateError:
            results.append("dup")

    threads = [threading.Thread(target=attempt, args=(name,)) for name in ("carol", "Carol", "CAROL", "cArOl")]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results.count("ok") == 1
    assert store.count() == 1
