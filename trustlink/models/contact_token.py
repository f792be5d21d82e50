from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from trustlink.database import Base


class ContactToken(Base):
    __tablename__ = "contact_tokens"

    contact_email: Mapped[str] = mapped_column(String(320), primary_key=True)

    # AES-GCM ciphertext of the contact's Drive refresh token (urlsafe base64)
    encrypted_token: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    last_used: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
