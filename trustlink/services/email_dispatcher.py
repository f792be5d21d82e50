import logging
from typing import Callable

import httpx
from sqlalchemy.orm import Session

from trustlink.config import Settings
from trustlink.models.pending_email import PendingEmail
from trustlink.services.mailer import list_pending_emails, mark_email_sent

logger = logging.getLogger("trustlink.email_dispatcher")


class EmailDeliveryError(Exception):
    pass


def emailjs_payload(email: PendingEmail, settings: Settings) -> dict:
    payload = {
        "service_id": email.service_id,
        "template_id": email.template_id,
        "user_id": email.user_id,
        "template_params": email.template_params,
    }
    # server-side calls must carry the private key when EmailJS strict mode is on
    if settings.emailjs_private_key:
        payload["accessToken"] = settings.emailjs_private_key
    return payload


def send_via_emailjs(email: PendingEmail, settings: Settings, client: httpx.Client) -> None:
    if not email.service_id or not email.template_id or not email.user_id:
        raise EmailDeliveryError("EmailJS service/template/public key missing on staged email")

    resp = client.post(settings.emailjs_api_url, json=emailjs_payload(email, settings))
    if resp.status_code >= 400:
        raise EmailDeliveryError(f"EmailJS error {resp.status_code}: {resp.text}")


def dispatch_pending(
    db: Session,
    settings: Settings,
    limit: int = 10,
    client: httpx.Client | None = None,
    send: Callable[[PendingEmail, Settings, httpx.Client], None] = send_via_emailjs,
) -> dict:
    """
    One delivery pass over pending emails.
    Failed rows stay pending with last_error set; the next pass picks them up again.
    """
    due = list_pending_emails(db, limit=limit)
    sent = 0
    failed = 0

    own_client = client is None
    http = client or httpx.Client(timeout=20.0)
    try:
        for email in due:
            try:
                send(email, settings, http)
            except Exception as e:
                email.last_error = str(e)
                failed += 1
                logger.warning("Delivery of pending email %s failed: %s", email.id, e)
                continue

            mark_email_sent(db, email.id)
            sent += 1
    finally:
        if own_client:
            http.close()

    db.commit()
    return {"due": len(due), "sent": sent, "failed": failed}
