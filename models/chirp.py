from sqlalchemy import Column, String, ForeignKey, CheckConstraint, Index
from sqlalchemy.orm import relationship

from models.base_model import BaseModel, Base


class Chirp(BaseModel, Base):
    __tablename__ = "chirps"

    body = Column(String(140), nullable=False)  # length and profanity handled in the schema
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    user = relationship("User", back_populates="chirps")

    __table_args__ = (
        CheckConstraint("length(body) <= 140", name="ck_chirps_body_length"),
        Index("ix_chirps_user_id", "user_id"),
        Index("ix_chirps_created_at", "created_at"),
    )
