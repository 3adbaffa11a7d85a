"""
Refresh token persistence.
Lookups return expired and revoked rows as-is; deciding whether a row may
still mint session tokens is left to the caller (see RefreshToken.is_usable).
"""
from __future__ import annotations

from datetime import timedelta

from models.base_model import utcnow
from models.refresh_token import RefreshToken
from utils.exceptions import RefreshTokenNotFound
from utils.security import generate_refresh_token

REFRESH_TOKEN_TTL = timedelta(days=60)


class RefreshTokenStore:
    def __init__(self, storage, expires_in: timedelta = REFRESH_TOKEN_TTL):
        self.storage = storage
        self.expires_in = expires_in

    def issue(self, user_id: str) -> str:
        token = generate_refresh_token()
        now = utcnow()
        record = RefreshToken(
            token=token,
            user_id=str(user_id),
            created_at=now,
            updated_at=now,
            expires_at=now + self.expires_in,
            revoked_at=None,
        )
        self.storage.new(record)
        self.storage.save()
        return token

    def lookup(self, token: str) -> RefreshToken:
        record = self.storage.get_refresh_token(token)
        if record is None:
            raise RefreshTokenNotFound()
        return record

    def revoke(self, token: str) -> RefreshToken:
        record = self.lookup(token)
        # second revocation keeps the original timestamp
        if record.revoked_at is None:
            record.revoked_at = utcnow()
            self.storage.new(record)
            self.storage.save()
        return record
