import uuid
from typing import Any

from sqlalchemy import asc, select
from sqlalchemy.orm import Session

from trustlink.config import Settings
from trustlink.models.pending_email import PendingEmail
from trustlink.services.tokens import utcnow
from trustlink.utils.constants import PENDING_EMAIL_BATCH


def setup_link(base_url: str, token: str) -> str:
    return f"{base_url.rstrip('/')}/setup-drive?token={token}"


def stage_setup_email(db: Session, settings: Settings, contact_email: str, token: str, user_email: str) -> PendingEmail:
    """
    Queue the setup email for the contact. Nothing is delivered here:
    a consumer polls pending rows, sends them through EmailJS and marks them sent.
    """
    row = PendingEmail(
        service_id=settings.emailjs_service_id,
        template_id=settings.emailjs_template_id,
        user_id=settings.emailjs_public_key,
        template_params={
            "user_email": user_email,
            "setup_link": setup_link(settings.setup_link_base_url, token),
            "to_email": contact_email,
        },
        contact_email=contact_email,
        status="pending",
        created_at=utcnow(),
    )
    db.add(row)
    db.flush()
    return row


def list_pending_emails(db: Session, limit: int = PENDING_EMAIL_BATCH) -> list[PendingEmail]:
    q = (
        select(PendingEmail)
        .where(PendingEmail.status == "pending")
        .order_by(asc(PendingEmail.created_at))
        .limit(limit)
    )
    return list(db.execute(q).scalars().all())


def mark_email_sent(db: Session, email_id: uuid.UUID) -> PendingEmail | None:
    row = db.get(PendingEmail, email_id)
    if row is None:
        return None

    # already-sent rows keep their first sent_at
    if row.status != "sent":
        row.status = "sent"
        row.sent_at = utcnow()
        row.last_error = None
        db.flush()
    return row


def email_to_dict(row: PendingEmail) -> dict[str, Any]:
    return {
        "id": str(row.id),
        "service_id": row.service_id,
        "template_id": row.template_id,
        "user_id": row.user_id,
        "template_params": row.template_params,
        "contactEmail": row.contact_email,
        "status": row.status,
        "createdAt": row.created_at.isoformat() if row.created_at else None,
    }
