"""AES-256-GCM encryption for stored contact credentials.

Stored format (urlsafe base64, unpadded-safe):
    nonce (12 bytes) || ciphertext || auth tag (16 bytes)

The contact email is bound as associated data, so a ciphertext copied onto
another contact's row fails to decrypt.
"""

from __future__ import annotations

import base64
import binascii
import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM


class EncryptionKeyError(RuntimeError):
    pass


class TokenDecryptionError(RuntimeError):
    pass


class TokenCipher:
    NONCE_SIZE = 12
    MIN_SIZE = 12 + 16

    def __init__(self, aesgcm: AESGCM):
        self._aesgcm = aesgcm

    @classmethod
    def from_key(cls, encoded_key: str) -> "TokenCipher":
        if not encoded_key:
            raise EncryptionKeyError("TOKEN_ENCRYPTION_KEY is not set")
        try:
            key = base64.urlsafe_b64decode(encoded_key)
        except (binascii.Error, ValueError) as e:
            raise EncryptionKeyError(f"TOKEN_ENCRYPTION_KEY is not valid base64: {e}") from e
        if len(key) != 32:
            raise EncryptionKeyError(f"TOKEN_ENCRYPTION_KEY must decode to 32 bytes, got {len(key)}")
        return cls(AESGCM(key))

    @staticmethod
    def generate_key() -> str:
        return base64.urlsafe_b64encode(os.urandom(32)).decode("ascii")

    def encrypt(self, plaintext: str, context: str) -> str:
        nonce = os.urandom(self.NONCE_SIZE)
        sealed = self._aesgcm.encrypt(nonce, plaintext.encode("utf-8"), context.encode("utf-8"))
        return base64.urlsafe_b64encode(nonce + sealed).decode("ascii")

    def decrypt(self, encrypted: str, context: str) -> str:
        try:
            raw = base64.urlsafe_b64decode(encrypted)
        except (binascii.Error, ValueError) as e:
            raise TokenDecryptionError("Stored credential is not valid base64") from e

        if len(raw) < self.MIN_SIZE:
            raise TokenDecryptionError("Stored credential is truncated")

        nonce, sealed = raw[: self.NONCE_SIZE], raw[self.NONCE_SIZE :]
        try:
            plain = self._aesgcm.decrypt(nonce, sealed, context.encode("utf-8"))
        except InvalidTag as e:
            raise TokenDecryptionError("Stored credential failed authentication") from e
        return plain.decode("utf-8")
