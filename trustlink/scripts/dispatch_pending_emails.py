from trustlink.config import Settings
from trustlink.database import build_engine, build_session_factory
from trustlink.services.email_dispatcher import dispatch_pending


def main():
    settings = Settings.from_env()
    SessionLocal = build_session_factory(build_engine(settings.database_url))
    db = SessionLocal()
    try:
        res = dispatch_pending(db, settings, limit=50)
        print(res)
    finally:
        db.close()


if __name__ == "__main__":
    main()
