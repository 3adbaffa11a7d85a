"""
Session lifecycle: register, login, refresh, revoke and request authentication.

SessionService composes the password hasher, the JWT signer and the refresh
token store. Every credential failure surfaces as Unauthenticated so callers
cannot tell a wrong password from an unknown email, or an expired refresh
token from a revoked one.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Mapping, NamedTuple, Optional

from models.user import User
from utils.exceptions import (
    Conflict,
    NotFound,
    PasswordMismatch,
    Unauthenticated,
)
from utils.refresh_store import REFRESH_TOKEN_TTL, RefreshTokenStore
from utils.security import (
    DEFAULT_ALGORITHM,
    DEFAULT_ISSUER,
    MAX_SESSION_TTL,
    TokenSigner,
    clamp_session_ttl,
    generate_refresh_token,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionConfig:
    secret: str
    platform: str = ""
    issuer: str = DEFAULT_ISSUER
    algorithm: str = DEFAULT_ALGORITHM
    max_session_ttl: timedelta = MAX_SESSION_TTL
    refresh_token_ttl: timedelta = REFRESH_TOKEN_TTL

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> "SessionConfig":
        """Build from a Flask config (see api/config.py for the keys)."""
        return cls(
            secret=config["JWT_SECRET"],
            platform=config.get("PLATFORM", ""),
            issuer=config.get("JWT_ISSUER", DEFAULT_ISSUER),
            algorithm=config.get("JWT_ALGORITHM", DEFAULT_ALGORITHM),
            max_session_ttl=config.get("JWT_MAX_EXPIRES", MAX_SESSION_TTL),
            refresh_token_ttl=config.get("REFRESH_TOKEN_EXPIRES", REFRESH_TOKEN_TTL),
        )


class LoginResult(NamedTuple):
    user: User
    token: str
    refresh_token: str


class SessionService:
    def __init__(self, config: SessionConfig, storage):
        self.config = config
        self.storage = storage
        self.signer = TokenSigner(config.secret, issuer=config.issuer, algorithm=config.algorithm)
        self.refresh_tokens = RefreshTokenStore(storage, expires_in=config.refresh_token_ttl)
        # unknown emails are verified against this so both failures cost one Argon2 run
        self.dummy_hash = hash_password(generate_refresh_token())

    def register(self, email: str, password: str) -> User:
        if self.storage.get_user_by_email(email):
            raise Conflict("Email already registered")
        user = User(email=email, password_hash=hash_password(password))
        self.storage.new(user)
        self.storage.save()
        logger.info("registered user %s", user.id)
        return user

    def login(self, email: str, password: str, expires_in_seconds: Optional[int] = None) -> LoginResult:
        user = self.storage.get_user_by_email(email)
        try:
            verify_password(user.password_hash if user else self.dummy_hash, password)
        except PasswordMismatch:
            if user is None:
                logger.warning("login failed: unknown email")
            else:
                logger.warning("login failed: wrong password for user %s", user.id)
            raise Unauthenticated("Incorrect email or password")
        if user is None:
            raise Unauthenticated("Incorrect email or password")

        ttl = clamp_session_ttl(expires_in_seconds, self.config.max_session_ttl)
        token = self.signer.issue(user.id, ttl)
        refresh_token = self.refresh_tokens.issue(user.id)
        logger.info("user %s logged in, session ttl %ss", user.id, int(ttl.total_seconds()))
        return LoginResult(user=user, token=token, refresh_token=refresh_token)

    def refresh(self, refresh_token: str) -> str:
        """Mint a new session token; the refresh token itself stays as it is."""
        try:
            record = self.refresh_tokens.lookup(refresh_token)
        except NotFound:
            raise Unauthenticated()
        if not record.is_usable():
            reason = "revoked" if record.is_revoked else "expired"
            logger.warning("refresh rejected: token %s for user %s", reason, record.user_id)
            raise Unauthenticated()
        return self.signer.issue(record.user_id, self.config.max_session_ttl)

    def revoke(self, refresh_token: str) -> None:
        try:
            record = self.refresh_tokens.revoke(refresh_token)
        except NotFound:
            raise Unauthenticated()
        logger.info("revoked refresh token for user %s", record.user_id)

    def authenticate(self, session_token: str) -> str:
        return self.signer.verify(session_token)

    def update_credentials(self, user_id: str, email: str, password: str) -> User:
        user = self.storage.get(User, user_id)
        if user is None:
            raise Unauthenticated()
        other = self.storage.get_user_by_email(email)
        if other is not None and other.id != user.id:
            raise Conflict("Email already registered")
        user.email = email
        user.password_hash = hash_password(password)
        self.storage.new(user)
        self.storage.save()
        logger.info("updated credentials for user %s", user.id)
        return user
