"""AES-256-GCM encryption wrapper. Use env key; fail if key missing. No global state."""

import base64
import binascii
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from secure_inquiry.security.exceptions import DecryptionError, EncryptionError

KEY_ENV_VAR = "AES_SECRET_KEY"
KEY_SIZE_BYTES = 32
NONCE_SIZE_BYTES = 12
TAG_SIZE_BYTES = 16


@dataclass(frozen=True)
class EncryptedPayload:
    """Ciphertext with its nonce and authentication tag, each base64-encoded."""

    ciphertext: str
    iv: str
    tag: str

    def to_dict(self) -> Dict[str, str]:
        return {"ciphertext": self.ciphertext, "iv": self.iv, "tag": self.tag}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EncryptedPayload":
        return cls(
            ciphertext=str(data["ciphertext"]),
            iv=str(data["iv"]),
            tag=str(data["tag"]),
        )


def _b64encode(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii")


def _b64decode(data: str) -> bytes:
    return base64.b64decode(data.encode("ascii"), validate=True)


def _parse_key(raw: str) -> bytes:
    try:
        key = bytes.fromhex(raw)
    except ValueError as e:
        raise EncryptionError(f"{KEY_ENV_VAR} must be hex encoded") from e
    if len(key) != KEY_SIZE_BYTES:
        raise EncryptionError(
            f"{KEY_ENV_VAR} must encode {KEY_SIZE_BYTES} bytes ({KEY_SIZE_BYTES * 2} hex chars)"
        )
    return key


class EncryptionService:
    """
    Authenticated encryption (AES-256-GCM). Use environment key; fail if key missing.
    No global state: key is passed in (from settings in production).
    A fresh random nonce is drawn for every encrypt call.
    """

    def __init__(self, key: Optional[str] = None) -> None:
        """
        key: hex-encoded 256-bit secret (e.g. from AES_SECRET_KEY env). If None/empty,
        read from os.environ["AES_SECRET_KEY"]. Raises EncryptionError if key missing.
        """
        raw = key or os.environ.get(KEY_ENV_VAR)
        if not raw or not raw.strip():
            raise EncryptionError(
                f"Encryption key is required. Set {KEY_ENV_VAR} in environment."
            )
        self._aesgcm = AESGCM(_parse_key(raw.strip()))

    def encrypt(self, data: str) -> EncryptedPayload:
        """Encrypt string; return ciphertext, nonce and tag."""
        nonce = os.urandom(NONCE_SIZE_BYTES)
        try:
            sealed = self._aesgcm.encrypt(nonce, data.encode("utf-8"), None)
        except Exception as e:
            raise EncryptionError(f"Encryption failed: {e}") from e
        # AESGCM appends the tag to the ciphertext; stored separately.
        return EncryptedPayload(
            ciphertext=_b64encode(sealed[:-TAG_SIZE_BYTES]),
            iv=_b64encode(nonce),
            tag=_b64encode(sealed[-TAG_SIZE_BYTES:]),
        )

    def decrypt(self, payload: EncryptedPayload) -> str:
        """Decrypt payload. Raises DecryptionError if the tag does not verify."""
        try:
            ciphertext = _b64decode(payload.ciphertext)
            nonce = _b64decode(payload.iv)
            tag = _b64decode(payload.tag)
        except (binascii.Error, ValueError) as e:
            raise DecryptionError("Decryption failed: payload is not valid base64") from e
        if len(nonce) != NONCE_SIZE_BYTES or len(tag) != TAG_SIZE_BYTES:
            raise DecryptionError("Decryption failed: malformed nonce or tag")
        try:
            plain = self._aesgcm.decrypt(nonce, ciphertext + tag, None)
        except InvalidTag as e:
            raise DecryptionError("Decryption failed: invalid tag or wrong key") from e
        try:
            return plain.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecryptionError("Decryption failed: plaintext is not UTF-8") from e
