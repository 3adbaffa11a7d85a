"""
security helpers:
- Argon2 password hashing via argon2-cffi
- JWT creation/verification via PyJWT
- Bearer credential extraction from request headers
- Opaque refresh token generation
"""
from __future__ import annotations

import secrets
import uuid
from datetime import datetime, timedelta, timezone
from typing import Mapping

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import HashingError as Argon2HashingError
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

from utils.exceptions import (
    HashingError,
    InternalError,
    InvalidSignature,
    MalformedToken,
    MissingCredential,
    PasswordMismatch,
    TokenExpired,
)

DEFAULT_ISSUER = "chirpy"
DEFAULT_ALGORITHM = "HS256"
MAX_SESSION_TTL = timedelta(hours=1)
REFRESH_TOKEN_BYTES = 32

ph = PasswordHasher()


def _now() -> datetime:
    return datetime.now(timezone.utc)


def hash_password(password: str) -> str:
    """Hash a plaintext password using Argon2
    """
    try:
        return ph.hash(password)
    except Argon2HashingError as exc:
        raise HashingError(str(exc)) from exc


def verify_password(password_hash: str, password: str) -> bool:
    """Verify a plaintext password against a stored Argon2 digest.

    Raises PasswordMismatch on a wrong password and InternalError when the
    digest itself cannot be parsed.
    """
    try:
        return ph.verify(password_hash, password)
    except VerifyMismatchError as exc:
        raise PasswordMismatch() from exc
    except (InvalidHashError, VerificationError) as exc:
        raise InternalError("Stored password hash is unusable") from exc


def clamp_session_ttl(seconds, maximum: timedelta = MAX_SESSION_TTL) -> timedelta:
    """Honour a client-requested lifetime only when 0 < seconds < maximum."""
    # compare before building a timedelta, which overflows on huge values
    if seconds is None or seconds <= 0 or seconds >= maximum.total_seconds():
        return maximum
    return timedelta(seconds=seconds)


class TokenSigner:
    """Issues and verifies HMAC-signed session tokens for a single secret."""

    def __init__(self, secret: str, issuer: str = DEFAULT_ISSUER, algorithm: str = DEFAULT_ALGORITHM):
        if not secret:
            raise ValueError("a signing secret is required")
        self.secret = secret
        self.issuer = issuer
        self.algorithm = algorithm

    def issue(self, subject_id, ttl: timedelta = MAX_SESSION_TTL) -> str:
        if ttl <= timedelta(0):
            raise ValueError("ttl must be positive")
        now = _now()
        payload = {
            "iss": self.issuer,
            "iat": int(now.timestamp()),
            "exp": int((now + ttl).timestamp()),
            "sub": str(subject_id),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """
        Decode and validate a session token, returning its subject.
        Raises TokenExpired, InvalidSignature or MalformedToken.
        """
        try:
            decoded = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                issuer=self.issuer,
                options={"require": ["exp", "iat", "sub", "iss"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenExpired() from exc
        except jwt.InvalidSignatureError as exc:
            raise InvalidSignature() from exc
        except jwt.InvalidTokenError as exc:
            raise MalformedToken(str(exc)) from exc

        try:
            return str(uuid.UUID(decoded["sub"]))
        except (ValueError, TypeError, AttributeError) as exc:
            raise MalformedToken("Subject is not a user id") from exc


def get_bearer_token(headers: Mapping[str, str]) -> str:
    """Return the credential of an `Authorization: Bearer <token>` header."""
    auth = headers.get("Authorization", "") or ""
    scheme, _, credential = auth.strip().partition(" ")
    if scheme.lower() != "bearer" or not credential.strip():
        raise MissingCredential()
    return credential.strip()


def generate_refresh_token() -> str:
    """64 hex characters from 32 random bytes."""
    return secrets.token_hex(REFRESH_TOKEN_BYTES)
