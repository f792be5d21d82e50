from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from trustlink.database import Base


def _now() -> datetime:
    return datetime.now(timezone.utc)


class SetupToken(Base):
    __tablename__ = "setup_tokens"

    # raw token is the key; it is the only thing the setup link carries
    token: Mapped[str] = mapped_column(String(64), primary_key=True)

    user_email: Mapped[str] = mapped_column(String(320), nullable=False)
    contact_google_email: Mapped[str] = mapped_column(String(320), nullable=False)

    # pending | completed
    status: Mapped[str] = mapped_column(String(20), default="pending", nullable=False)

    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now, nullable=False)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


Index("ix_setup_token_contact_status", SetupToken.contact_google_email, SetupToken.status)
