import os

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


def _csv(raw: str) -> list[str]:
    return [x.strip() for x in raw.split(",") if x.strip()]


class Settings(BaseModel):
    app_name: str = "trustlink"
    database_url: str = "sqlite:///./trustlink.db"
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    # Contact setup handshake
    setup_link_base_url: str = "http://localhost:5000"
    setup_token_ttl_hours: int = 24

    # EmailJS (delivery of staged setup emails)
    emailjs_service_id: str = ""
    emailjs_template_id: str = ""
    emailjs_public_key: str = ""
    emailjs_private_key: str = ""
    emailjs_api_url: str = "https://api.emailjs.com/api/v1.0/email/send"

    # Google OAuth client used to refresh the contact's Drive credential
    google_client_id: str = ""
    google_client_secret: str = ""
    google_token_uri: str = "https://oauth2.googleapis.com/token"

    # urlsafe base64 of 32 random bytes
    token_encryption_key: str = ""

    upload_max_attempts: int = 3
    upload_base_delay_seconds: float = 2.0

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            app_name=os.getenv("APP_NAME", "trustlink"),
            database_url=os.getenv("DATABASE_URL", "sqlite:///./trustlink.db"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            cors_origins=_csv(os.getenv("CORS_ORIGINS", "*")),
            setup_link_base_url=os.getenv("SETUP_LINK_BASE_URL", "http://localhost:5000").strip().rstrip("/"),
            setup_token_ttl_hours=int(os.getenv("SETUP_TOKEN_TTL_HOURS", "24")),
            emailjs_service_id=os.getenv("EMAILJS_SERVICE_ID", "").strip(),
            emailjs_template_id=os.getenv("EMAILJS_TEMPLATE_ID", "").strip(),
            emailjs_public_key=os.getenv("EMAILJS_PUBLIC_KEY", "").strip(),
            emailjs_private_key=os.getenv("EMAILJS_PRIVATE_KEY", "").strip(),
            emailjs_api_url=os.getenv("EMAILJS_API_URL", "https://api.emailjs.com/api/v1.0/email/send"),
            google_client_id=os.getenv("GOOGLE_CLIENT_ID", "").strip(),
            google_client_secret=os.getenv("GOOGLE_CLIENT_SECRET", "").strip(),
            google_token_uri=os.getenv("GOOGLE_TOKEN_URI", "https://oauth2.googleapis.com/token"),
            token_encryption_key=os.getenv("TOKEN_ENCRYPTION_KEY", "").strip(),
            upload_max_attempts=int(os.getenv("UPLOAD_MAX_ATTEMPTS", "3")),
            upload_base_delay_seconds=float(os.getenv("UPLOAD_BASE_DELAY_SECONDS", "2.0")),
        )
