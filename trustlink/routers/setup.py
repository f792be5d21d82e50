import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from trustlink.config import Settings
from trustlink.database import get_db
from trustlink.dependencies import get_cipher, get_settings
from trustlink.schemas.setup import CompleteContactAuthIn, InitiateSetupIn
from trustlink.services.credentials import store_encrypted_token
from trustlink.services.encryption import TokenCipher
from trustlink.services.mailer import stage_setup_email
from trustlink.services.state_machine import InvalidTransition
from trustlink.services.tokens import (
    fingerprint,
    issue_setup_token,
    store_pending_setup,
    update_setup_status,
    verify_contact_auth,
    verify_setup_token,
)

router = APIRouter(prefix="/setup", tags=["setup"])
logger = logging.getLogger("trustlink.setup")


@router.post("/initiate")
def initiate_contact_setup(
    payload: InitiateSetupIn,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """
    Start the trusted-contact handshake:
      - issue a 24h setup token
      - queue the setup email for the contact
      - keep the legacy pending-setup audit row
    All three rows commit together.
    """
    try:
        token = issue_setup_token(
            db,
            payload.user_email,
            payload.contact_google_email,
            ttl_hours=settings.setup_token_ttl_hours,
        )
        stage_setup_email(db, settings, payload.contact_google_email, token, payload.user_email)
        store_pending_setup(db, payload.user_email, payload.contact_google_email, token)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to initiate contact setup")
        raise HTTPException(status_code=500, detail="Failed to initiate setup")

    return {"success": True, "message": "Setup email queued for delivery"}


@router.post("/complete")
def complete_contact_auth(
    payload: CompleteContactAuthIn,
    db: Session = Depends(get_db),
    cipher: TokenCipher = Depends(get_cipher),
):
    # verify before any write; a rejected token leaves nothing behind
    if not verify_contact_auth(db, payload.setup_token, payload.contact_email):
        raise HTTPException(status_code=400, detail="Invalid setup token")

    try:
        store_encrypted_token(db, cipher, payload.contact_email, payload.refresh_token)
        update_setup_status(db, payload.setup_token, "completed")
        db.commit()
    except (SQLAlchemyError, InvalidTransition, LookupError):
        db.rollback()
        logger.exception("Failed to complete authorization for token %s", fingerprint(payload.setup_token))
        raise HTTPException(status_code=500, detail="Failed to complete authorization")

    return {"success": True, "message": "Authorization completed"}


@router.get("/validate")
def validate_setup_token(token: str | None = None, db: Session = Depends(get_db)):
    if not token or not token.strip():
        return JSONResponse(status_code=400, content={"valid": False, "error": "Token required"})

    try:
        valid = verify_setup_token(db, token.strip())
    except SQLAlchemyError:
        logger.exception("Failed to validate setup token %s", fingerprint(token.strip()))
        return JSONResponse(status_code=500, content={"valid": False, "error": "Server error"})

    return {"valid": valid}
