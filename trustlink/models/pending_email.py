from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, DateTime, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from trustlink.database import Base


class PendingEmail(Base):
    __tablename__ = "pending_emails"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    # EmailJS identifiers
    service_id: Mapped[str] = mapped_column(String(100), nullable=False)
    template_id: Mapped[str] = mapped_column(String(100), nullable=False)
    user_id: Mapped[str] = mapped_column(String(100), nullable=False)

    # user_email, setup_link, to_email
    template_params: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)

    contact_email: Mapped[str] = mapped_column(String(320), nullable=False)

    # pending | sent
    status: Mapped[str] = mapped_column(String(20), default="pending", nullable=False)
    last_error: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False
    )
    sent_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


Index("ix_pending_email_status_created", PendingEmail.status, PendingEmail.created_at)
