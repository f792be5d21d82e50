from __future__ import annotations

from sqlalchemy.orm import Session

from trustlink.models.contact_token import ContactToken
from trustlink.services.encryption import TokenCipher
from trustlink.services.tokens import utcnow


def store_encrypted_token(db: Session, cipher: TokenCipher, contact_email: str, credential: str) -> ContactToken:
    """Upsert the contact's credential. Latest write wins."""
    now = utcnow()
    encrypted = cipher.encrypt(credential, context=contact_email)

    row = db.get(ContactToken, contact_email)
    if row is None:
        row = ContactToken(contact_email=contact_email, encrypted_token=encrypted, created_at=now, last_used=now)
        db.add(row)
    else:
        row.encrypted_token = encrypted
        row.created_at = now
        row.last_used = now

    db.flush()
    return row


def get_decrypted_token(db: Session, cipher: TokenCipher, contact_email: str) -> str | None:
    row = db.get(ContactToken, contact_email)
    if row is None or not (row.encrypted_token or "").strip():
        return None

    token = cipher.decrypt(row.encrypted_token, context=contact_email)
    return token if token.strip() else None


def touch_last_used(db: Session, contact_email: str) -> None:
    row = db.get(ContactToken, contact_email)
    if row is not None:
        row.last_used = utcnow()
        db.flush()
