from datetime import timedelta

import pytest
from jose import ExpiredSignatureError, JWTError, jwt

from moodflow.core.config import settings
from moodflow.core.security import (
    check_password,
    create_access_token,
    decode_access_token,
    hash_password,
)


def test_password_hash_round_trip():
    hashed = hash_password("secret123")
    assert hashed != "secret123"
    assert check_password("secret123", hashed)
    assert not check_password("secret124", hashed)


def test_check_password_handles_bad_input():
    assert not check_password(None, hash_password("x"))
    assert not check_password("secret", "not-a-hash")


def test_token_carries_subject():
    claims = decode_access_token(create_access_token("abc", username="alice"))
    assert claims["sub"] == "abc"
    assert claims["username"] == "alice"
    assert claims["type"] == "access"
    assert claims["jti"]


def test_token_requires_subject():
    with pytest.raises(ValueError):
        create_access_token("")


def test_expired_token_is_rejected():
    token = create_access_token("abc", expires_delta=timedelta(seconds=-5))
    with pytest.raises(ExpiredSignatureError):
        decode_access_token(token)


def test_tampered_token_is_rejected():
    token = create_access_token("abc")
    with pytest.raises(JWTError):
        decode_access_token(token[:-2] + ("AA" if not token.endswith("AA") else "BB"))


def test_other_token_types_are_rejected():
    token = jwt.encode({"sub": "abc", "type": "refresh"}, settings.secret_key, algorithm=settings.algorithm)
    with pytest.raises(JWTError):
        decode_access_token(token)
