"""Unit tests for password hashing."""

from clinic.core.security import hash_password, pwd_context, verify_password


def test_hash_is_salted_bcrypt():
    first = hash_password("Correct-Horse-1")
    second = hash_password("Correct-Horse-1")
    assert first.startswith("$2")
    assert first != second


def test_verify_password_roundtrip():
    hashed = hash_password("Correct-Horse-1")
    assert verify_password("Correct-Horse-1", hashed) is True
    assert verify_password("wrong", hashed) is False


def test_work_factor_follows_configuration():
    # tests run with BCRYPT_ROUNDS=4
    hashed = hash_password("whatever-123")
    assert pwd_context.identify(hashed) == "bcrypt"
    assert hashed.split("$")[2] == "04"
