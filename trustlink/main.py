import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from trustlink.config import Settings
from trustlink.database import build_engine, build_session_factory
from trustlink.errors import register_exception_handlers
from trustlink.routers import emails, evidence, setup
from trustlink.services.drive_storage import EvidenceUploader, drive_service_factory
from trustlink.services.encryption import TokenCipher
from trustlink.services.retry import RetryPolicy


def create_app(settings: Settings | None = None, uploader: EvidenceUploader | None = None) -> FastAPI:
    """
    Build the app and its process-wide handles (engine, session factory,
    credential cipher, Drive uploader). Handlers reach them through app.state.

    Run with: uvicorn trustlink.main:create_app --factory
    """
    settings = settings or Settings.from_env()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    app = FastAPI(title=settings.app_name)

    engine = build_engine(settings.database_url)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.cipher = TokenCipher.from_key(settings.token_encryption_key)
    app.state.uploader = uploader or EvidenceUploader(
        drive_service_factory(settings),
        RetryPolicy(max_attempts=settings.upload_max_attempts, base_delay=settings.upload_base_delay_seconds),
    )

    # Evidence upload is called straight from the mobile app and a browser page
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
    )

    register_exception_handlers(app)

    app.include_router(setup.router)
    app.include_router(evidence.router)
    app.include_router(emails.router)

    @app.get("/")
    def health_check():
        return {"status": "ok"}

    return app
