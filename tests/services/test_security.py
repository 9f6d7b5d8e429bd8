# tests/services/test_security.py
"""Tests for password hashing and access tokens."""

from stackit.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


def test_password_round_trip():
    hashed = hash_password("s3cret-pass")

    assert hashed.startswith("$argon2id$")
    assert verify_password(hashed, "s3cret-pass")
    assert not verify_password(hashed, "wrong-pass")


def test_verify_rejects_malformed_hash():
    assert not verify_password("not-a-hash", "whatever")


def test_access_token_subject_is_user_id():
    token = create_access_token(17, {"role": "user"})
    assert decode_access_token(token) == 17
    assert decode_access_token(token + "x") is None
