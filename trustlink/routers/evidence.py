from __future__ import annotations

import base64
import binascii
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from trustlink.database import get_db
from trustlink.dependencies import get_cipher, get_uploader
from trustlink.schemas.evidence import UploadEvidenceIn, UploadEvidenceOut
from trustlink.services.credentials import get_decrypted_token, touch_last_used
from trustlink.services.drive_storage import EvidenceUploader
from trustlink.services.encryption import TokenCipher, TokenDecryptionError

router = APIRouter(prefix="/evidence", tags=["evidence"])
logger = logging.getLogger("trustlink.evidence")


def _decode_video(data: str) -> bytes:
    # mobile encoders wrap base64 at 76 columns
    try:
        raw = base64.b64decode("".join(data.split()), validate=True)
    except (binascii.Error, ValueError):
        raise HTTPException(status_code=400, detail={"error": "Invalid videoData", "details": "videoData is not valid base64"})
    if not raw:
        raise HTTPException(status_code=400, detail={"error": "Invalid videoData", "details": "videoData is empty"})
    return raw


@router.post("/upload", response_model=UploadEvidenceOut)
def upload_evidence_video(
    payload: UploadEvidenceIn,
    db: Session = Depends(get_db),
    cipher: TokenCipher = Depends(get_cipher),
    uploader: EvidenceUploader = Depends(get_uploader),
):
    """
    Upload a video into the trusted contact's Drive.
    Flow:
      - decode base64 payload
      - look up the contact's stored credential (404 when none; no upload attempted)
      - upload with retry/backoff
    """
    raw = _decode_video(payload.video_data)
    contact = payload.trusted_contact_email

    try:
        refresh_token = get_decrypted_token(db, cipher, contact)
    except TokenDecryptionError:
        logger.exception("Stored credential for a trusted contact could not be decrypted")
        raise HTTPException(
            status_code=500,
            detail={
                "error": "Stored credential could not be decrypted",
                "details": "Ask the trusted contact to complete setup again",
            },
        )

    if not refresh_token:
        raise HTTPException(
            status_code=404,
            detail={
                "error": "Trusted contact not found or not authorized",
                "details": f"No token found for email: {contact}",
            },
        )

    try:
        file_id = uploader.upload(refresh_token, raw, payload.file_name, payload.user_email)
    except Exception as e:
        # upstream errors (auth refresh, Drive API, transport) after all retries
        logger.exception("Evidence upload failed")
        raise HTTPException(status_code=500, detail={"error": "Failed to upload video", "details": str(e)})

    touch_last_used(db, contact)
    db.commit()

    return UploadEvidenceOut(success=True, fileId=file_id)
