"""Password hashing and bearer tokens for HSA account holders.

Tokens are HS256 JWTs identifying the account holder by ``sub`` and carrying
the issuing service in ``iss``; a token from another issuer is rejected even
when the signature checks out.
"""

from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import UUID

from jose import JWTError, jwt
from passlib.context import CryptContext

from hsa.config import settings

ACCESS_TOKEN_TYPE = "access"

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(user_id: UUID, expires_delta: timedelta | None = None) -> str:
    """Issue an access token for an account holder.

    Lifetime defaults to ``jwt_access_expire_minutes``.
    """
    issued_at = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.jwt_access_expire_minutes)
    claims = {
        "sub": str(user_id),
        "iss": settings.jwt_issuer,
        "iat": issued_at,
        "exp": issued_at + expires_delta,
        "type": ACCESS_TOKEN_TYPE,
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> dict[str, Any]:
    """Verify signature, expiry and issuer.

    Raises:
        JWTError: If any check fails
    """
    return jwt.decode(
        token,
        settings.jwt_secret,
        algorithms=[settings.jwt_algorithm],
        issuer=settings.jwt_issuer,
    )


def get_user_id_from_token(token: str) -> UUID:
    """
    Resolve the account holder a bearer token was issued to.

    Raises:
        JWTError: If the token is invalid, expired, from another issuer or
            not an access token
        ValueError: If ``sub`` is not a UUID
    """
    claims = decode_token(token)
    if claims.get("type") != ACCESS_TOKEN_TYPE:
        raise JWTError("Not an access token")
    subject = claims.get("sub")
    if subject is None:
        raise JWTError("Token missing 'sub' claim")
    return UUID(subject)
