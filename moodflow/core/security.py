"""
Password hashing and bearer tokens.

Tokens are HS256 JWTs whose ``sub`` claim is the user id. ``type`` is always
``"access"``; there are no refresh tokens.
"""
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from moodflow.core.config import settings
from moodflow.core.logging_config import log_warning

ACCESS_TOKEN_TYPE = "access"

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def check_password(password: Optional[str], password_hash: str) -> bool:
    """True when ``password`` matches; malformed hashes never match."""
    if password is None:
        return False
    try:
        return pwd_context.verify(password, password_hash)
    except (ValueError, TypeError):
        return False


def create_access_token(
    user_id: str,
    username: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Sign a token for ``user_id``, valid for ``access_token_expire_minutes`` by default."""
    if not user_id:
        raise ValueError("A user id is required for the 'sub' claim")

    issued_at = datetime.now(timezone.utc)
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    claims: Dict[str, Any] = {
        "sub": str(user_id),
        "type": ACCESS_TOKEN_TYPE,
        "iat": issued_at,
        "exp": issued_at + lifetime,
        "jti": uuid.uuid4().hex,
    }
    if username:
        claims["username"] = username
    return jwt.encode(claims, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> Dict[str, Any]:
    """Return the claims of a valid access token.

    Raises ``JWTError`` (``ExpiredSignatureError`` for expired ones) otherwise.
    """
    try:
        claims = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as exc:
        log_warning(f"Rejected token: {exc}")
        raise

    if claims.get("type") != ACCESS_TOKEN_TYPE:
        raise JWTError("Not an access token")
    if not claims.get("sub"):
        raise JWTError("Token has no subject")
    return claims
