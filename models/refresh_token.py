"""
RefreshToken model: stores opaque refresh tokens so they can expire and be revoked
Fields:
- token (64 hex chars, unique)
- user_id (String(36)) - FK to users.id
- expires_at
- revoked_at (null until revoked)
- created_at, updated_at
"""
from datetime import datetime
from sqlalchemy import Column, String, ForeignKey
from sqlalchemy.orm import relationship
from models.base_model import BaseModel, Base, UTCDateTime, utcnow


class RefreshToken(BaseModel, Base):
    __tablename__ = "refresh_tokens"

    token = Column(String(64), nullable=False, unique=True, index=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    expires_at = Column(UTCDateTime(), nullable=False)
    revoked_at = Column(UTCDateTime(), nullable=True)

    user = relationship("User", back_populates="refresh_tokens")

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or utcnow()) >= self.expires_at

    @property
    def is_revoked(self) -> bool:
        return self.revoked_at is not None

    def is_usable(self, now: datetime | None = None) -> bool:
        return not self.is_revoked and not self.is_expired(now)

    def __repr__(self):
        return f"<RefreshToken user={self.user_id} expires_at={self.expires_at}>"
