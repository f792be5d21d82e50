from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from trustlink.database import get_db
from trustlink.schemas.email import MarkEmailSentIn
from trustlink.services.mailer import email_to_dict, list_pending_emails, mark_email_sent

router = APIRouter(prefix="/emails", tags=["emails"])


@router.get("/pending")
def get_pending_emails(db: Session = Depends(get_db)):
    emails = list_pending_emails(db)
    return {"success": True, "emails": [email_to_dict(e) for e in emails]}


@router.post("/mark-sent")
def mark_sent(payload: MarkEmailSentIn, db: Session = Depends(get_db)):
    row = mark_email_sent(db, payload.email_id)
    if row is None:
        raise HTTPException(status_code=404, detail="Email not found")

    db.commit()
    return {"success": True}
