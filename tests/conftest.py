"""Shared fixtures: in-memory sqlite app wired with a fake uploader."""

import pytest
from fastapi.testclient import TestClient

import trustlink.models  # noqa: F401
from fakes import FakeUploader
from trustlink.config import Settings
from trustlink.database import Base
from trustlink.main import create_app
from trustlink.services.encryption import TokenCipher


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite://",
        token_encryption_key=TokenCipher.generate_key(),
        setup_link_base_url="https://trustlink.example.com",
        emailjs_service_id="service_test",
        emailjs_template_id="template_test",
        emailjs_public_key="public_test",
        log_level="WARNING",
    )


@pytest.fixture
def uploader():
    return FakeUploader()


@pytest.fixture
def app(settings, uploader):
    app = create_app(settings, uploader=uploader)
    Base.metadata.create_all(app.state.engine)
    yield app
    Base.metadata.drop_all(app.state.engine)
    app.state.engine.dispose()


@pytest.fixture
def client(app):
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def session_factory(app):
    return app.state.session_factory


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()
