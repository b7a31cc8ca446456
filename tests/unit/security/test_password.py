"""Unit tests for password hashing."""

from tunganotes.security.password import hash_password, verify_password


def test_hash_and_verify():
    hashed = hash_password("correct horse battery")
    assert hashed != "correct horse battery"
    assert hashed.startswith("$bcrypt-sha256$")
    assert verify_password("correct horse battery", hashed)
    assert not verify_password("wrong", hashed)


def test_long_passwords_are_not_truncated():
    base = "p" * 80
    hashed = hash_password(base + "a")
    assert verify_password(base + "a", hashed)
    assert not verify_password(base + "b", hashed)
