"""Security tests: AES-256-GCM round-trip, tamper detection, key handling."""

import base64
import os
from unittest.mock import patch

import pytest

from secure_inquiry.security.encryption import EncryptedPayload, EncryptionService
from secure_inquiry.security.exceptions import DecryptionError, EncryptionError

KEY = "00112233445566778899aabbccddeeff00112233445566778899aabbccddeeff"
OTHER_KEY = "ffeeddccbbaa99887766554433221100ffeeddccbbaa99887766554433221100"


def _flip_first_byte(b64: str) -> str:
    raw = bytearray(base64.b64decode(b64))
    raw[0] ^= 0x01
    return base64.b64encode(bytes(raw)).decode("ascii")


def test_encryption_round_trip_works():
    svc = EncryptionService(key=KEY)
    plain = '{"message":"Contact me at a@b.com","note":"olá"}'
    encrypted = svc.encrypt(plain)
    assert plain not in encrypted.ciphertext
    assert svc.decrypt(encrypted) == plain


def test_payload_carries_nonce_and_tag_sizes():
    encrypted = EncryptionService(key=KEY).encrypt("secret")
    assert len(base64.b64decode(encrypted.iv)) == 12
    assert len(base64.b64decode(encrypted.tag)) == 16


def test_each_encryption_uses_a_fresh_nonce():
    svc = EncryptionService(key=KEY)
    first = svc.encrypt("same")
    second = svc.encrypt("same")
    assert first.iv != second.iv
    assert first.ciphertext != second.ciphertext


def test_decrypt_with_wrong_key_fails():
    encrypted = EncryptionService(key=KEY).encrypt("secret")
    with pytest.raises(DecryptionError) as exc_info:
        EncryptionService(key=OTHER_KEY).decrypt(encrypted)
    assert "invalid tag" in exc_info.value.message


def test_tampered_ciphertext_fails():
    svc = EncryptionService(key=KEY)
    encrypted = svc.encrypt("secret payload")
    tampered = EncryptedPayload(
        ciphertext=_flip_first_byte(encrypted.ciphertext),
        iv=encrypted.iv,
        tag=encrypted.tag,
    )
    with pytest.raises(DecryptionError):
        svc.decrypt(tampered)


def test_tampered_tag_fails():
    svc = EncryptionService(key=KEY)
    encrypted = svc.encrypt("secret payload")
    tampered = EncryptedPayload(encrypted.ciphertext, encrypted.iv, _flip_first_byte(encrypted.tag))
    with pytest.raises(DecryptionError):
        svc.decrypt(tampered)


def test_invalid_base64_fails():
    svc = EncryptionService(key=KEY)
    encrypted = svc.encrypt("secret")
    with pytest.raises(DecryptionError):
        svc.decrypt(EncryptedPayload("!!not base64!!", encrypted.iv, encrypted.tag))


def test_short_nonce_fails():
    svc = EncryptionService(key=KEY)
    encrypted = svc.encrypt("secret")
    short_iv = base64.b64encode(b"123").decode("ascii")
    with pytest.raises(DecryptionError):
        svc.decrypt(EncryptedPayload(encrypted.ciphertext, short_iv, encrypted.tag))


def test_decryption_error_is_an_encryption_error():
    assert issubclass(DecryptionError, EncryptionError)


def test_encryption_fails_if_key_missing():
    with patch.dict(os.environ, {"AES_SECRET_KEY": ""}):
        with pytest.raises(EncryptionError) as exc_info:
            EncryptionService()
    assert "AES_SECRET_KEY" in exc_info.value.message


def test_key_is_read_from_environment():
    with patch.dict(os.environ, {"AES_SECRET_KEY": KEY}):
        svc = EncryptionService()
    assert EncryptionService(key=KEY).decrypt(svc.encrypt("x")) == "x"


@pytest.mark.parametrize("bad_key", ["abcd", "zz" * 32, KEY + "00"])
def test_malformed_key_is_rejected(bad_key):
    with pytest.raises(EncryptionError):
        EncryptionService(key=bad_key)


def test_payload_dict_round_trip():
    payload = EncryptedPayload(ciphertext="Y3Q=", iv="aXY=", tag="dGFn")
    assert payload.to_dict() == {"ciphertext": "Y3Q=", "iv": "aXY=", "tag": "dGFn"}
    assert EncryptedPayload.from_dict(payload.to_dict()) == payload
