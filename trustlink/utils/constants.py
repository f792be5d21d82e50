SETUP_STATUSES = {"pending", "completed"}
EMAIL_STATUSES = {"pending", "sent"}

DRIVE_FOLDER_MIME = "application/vnd.google-apps.folder"
EVIDENCE_MIME = "video/mp4"
EVIDENCE_FOLDER_PREFIX = "SOS_Evidence_"

DRIVE_SCOPES = ["https://www.googleapis.com/auth/drive.file"]

PENDING_EMAIL_BATCH = 10
