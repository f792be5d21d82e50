from fastapi import Request

from trustlink.config import Settings
from trustlink.services.drive_storage import EvidenceUploader
from trustlink.services.encryption import TokenCipher


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_cipher(request: Request) -> TokenCipher:
    return request.app.state.cipher


def get_uploader(request: Request) -> EvidenceUploader:
    return request.app.state.uploader
