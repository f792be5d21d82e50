import hashlib
import logging
import secrets
from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import Session

from trustlink.models.pending_setup import PendingSetup
from trustlink.models.setup_token import SetupToken
from trustlink.services.state_machine import ensure_transition

logger = logging.getLogger("trustlink.tokens")


def new_token(nbytes: int = 32) -> str:
    # 32 bytes -> 64 hex chars, safe to drop into a query string as-is
    return secrets.token_hex(nbytes)


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def fingerprint(token: str) -> str:
    """Short, non-reversible label for a token, fit for log lines."""
    return hash_token(token)[:12]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def expires_in(hours: int) -> datetime:
    return utcnow() + timedelta(hours=hours)


def as_utc(value: datetime) -> datetime:
    # sqlite hands back naive datetimes; everything is written as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def issue_setup_token(db: Session, user_email: str, contact_google_email: str, ttl_hours: int = 24) -> str:
    token = new_token()
    db.add(
        SetupToken(
            token=token,
            user_email=user_email,
            contact_google_email=contact_google_email,
            expires_at=expires_in(ttl_hours),
            status="pending",
            created_at=utcnow(),
        )
    )
    db.flush()
    logger.info("Issued setup token %s (ttl=%dh)", fingerprint(token), ttl_hours)
    return token


def store_pending_setup(db: Session, user_email: str, contact_google_email: str, token: str) -> None:
    db.add(
        PendingSetup(
            token=token,
            user_email=user_email,
            contact_google_email=contact_google_email,
            status="pending",
            created_at=utcnow(),
        )
    )
    db.flush()


def _usable(row: SetupToken | None, now: datetime) -> bool:
    if row is None:
        return False
    if now >= as_utc(row.expires_at):
        return False
    return row.status == "pending"


def verify_setup_token(db: Session, token: str) -> bool:
    row = db.get(SetupToken, token)
    return _usable(row, utcnow())


def verify_contact_auth(db: Session, token: str, contact_email: str) -> bool:
    row = db.get(SetupToken, token)
    if not _usable(row, utcnow()):
        logger.info("Setup token %s rejected: missing, expired or used", fingerprint(token))
        return False

    if row.contact_google_email != contact_email:
        logger.info("Setup token %s rejected: contact mismatch", fingerprint(token))
        return False

    return True


def update_setup_status(db: Session, token: str, status: str) -> SetupToken:
    row = db.get(SetupToken, token)
    if row is None:
        raise LookupError(f"Setup token {fingerprint(token)} not found")

    ensure_transition(row.status, status)
    row.status = status
    if status == "completed":
        row.completed_at = utcnow()

    db.flush()
    return row
