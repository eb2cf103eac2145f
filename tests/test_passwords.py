"""Unit tests for bcrypt password hashing."""

from common.auth import hash_password, verify_password, DUMMY_PASSWORD_HASH


def test_hash_verifies():
    hashed = hash_password("secret123", rounds=4)

    assert hashed != "secret123"
    assert verify_password("secret123", hashed)
    assert not verify_password("secret124", hashed)


def test_long_passwords_are_not_truncated():
    base = "x" * 80
    hashed = hash_password(base + "a", rounds=4)

    assert not verify_password(base + "b", hashed)


def test_empty_or_malformed_hash():
    assert not verify_password("secret123", "")
    assert not verify_password("secret123", "not-a-bcrypt-hash")


def test_dummy_hash_is_a_real_hash():
    assert DUMMY_PASSWORD_HASH.startswith("$2")
    assert not verify_password("secret123", DUMMY_PASSWORD_HASH)
