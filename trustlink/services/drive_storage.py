from __future__ import annotations

import io
import logging
from typing import Any, Callable

from google.auth.transport.requests import Request as GoogleAuthRequest
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.http import MediaIoBaseUpload

from trustlink.config import Settings
from trustlink.services.retry import RetryPolicy
from trustlink.utils.constants import DRIVE_FOLDER_MIME, DRIVE_SCOPES, EVIDENCE_FOLDER_PREFIX, EVIDENCE_MIME

logger = logging.getLogger("trustlink.drive")

DriveFactory = Callable[[str], Any]


def drive_service_factory(settings: Settings) -> DriveFactory:
    """
    Returns a callable that turns a stored refresh token into an authorized
    Drive v3 client. Each call mints a fresh short-lived access token.
    """

    def _build(refresh_token: str):
        creds = Credentials(
            token=None,
            refresh_token=refresh_token,
            client_id=settings.google_client_id,
            client_secret=settings.google_client_secret,
            token_uri=settings.google_token_uri,
            scopes=DRIVE_SCOPES,
        )
        creds.refresh(GoogleAuthRequest())
        return build("drive", "v3", credentials=creds, cache_discovery=False)

    return _build


def evidence_folder_name(user_email: str) -> str:
    return f"{EVIDENCE_FOLDER_PREFIX}{user_email.replace('@', '_at_')}"


def _quote(value: str) -> str:
    return value.replace("\\", "\\\\").replace("'", "\\'")


def get_or_create_evidence_folder(drive, user_email: str) -> str:
    name = evidence_folder_name(user_email)

    res = (
        drive.files()
        .list(
            q=f"name='{_quote(name)}' and mimeType='{DRIVE_FOLDER_MIME}' and trashed=false",
            fields="files(id, name)",
            spaces="drive",
        )
        .execute()
    )
    files = res.get("files") or []
    if files:
        # duplicates from concurrent first uploads are left alone; the first match wins
        return files[0]["id"]

    folder = drive.files().create(body={"name": name, "mimeType": DRIVE_FOLDER_MIME}, fields="id").execute()
    logger.info("Created evidence folder %s", folder["id"])
    return folder["id"]


class EvidenceUploader:
    def __init__(self, drive_factory: DriveFactory, policy: RetryPolicy | None = None):
        self.drive_factory = drive_factory
        self.policy = policy or RetryPolicy()

    def _attempt(self, refresh_token: str, payload: bytes, file_name: str, user_email: str) -> str:
        drive = self.drive_factory(refresh_token)
        folder_id = get_or_create_evidence_folder(drive, user_email)

        media = MediaIoBaseUpload(io.BytesIO(payload), mimetype=EVIDENCE_MIME, resumable=False)
        created = (
            drive.files()
            .create(body={"name": file_name, "parents": [folder_id]}, media_body=media, fields="id")
            .execute()
        )
        return created["id"]

    def upload(self, refresh_token: str, payload: bytes, file_name: str, user_email: str) -> str:
        """Upload payload into the user's evidence folder and return the Drive file id."""
        file_id = self.policy.call(
            self._attempt, refresh_token, payload, file_name, user_email, label="Evidence upload"
        )
        logger.info("Evidence uploaded as %s (%d bytes)", file_id, len(payload))
        return file_id
