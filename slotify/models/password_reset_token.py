# slotify/models/password_reset_token.py
"""One-time password reset tokens. Usable once, and only before expires_at."""

import uuid

from sqlalchemy import Column, DateTime, ForeignKey, String, Uuid

from slotify.database import Base
from slotify.utils.clock import utcnow


class PasswordResetToken(Base):
    __tablename__ = "password_reset_tokens"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    token = Column(String(64), unique=True, nullable=False, index=True)
    expires_at = Column(DateTime, nullable=False)
    used_at = Column(DateTime)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    def __repr__(self):
        return f"<PasswordResetToken user={self.user_id} used={self.used_at is not None}>"
