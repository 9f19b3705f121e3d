"""
Authenticated symmetric encryption helpers.

Tokens are the unpadded URL-safe base64 encoding of ``nonce || ciphertext || tag``
produced by AES-GCM with a random 96-bit nonce. Keys must be 16, 24 or 32 bytes.
"""

import base64
import binascii
import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from shared.errors import EncryptionError

NONCE_SIZE = 12


def _aesgcm(key: bytes) -> AESGCM:
    try:
        return AESGCM(key)
    except ValueError as exc:
        raise EncryptionError(str(exc), details={"key_length": len(key)}) from exc


def encrypt(plaintext: bytes, key: bytes) -> str:
    """Encrypt ``plaintext`` and return a URL-safe token."""
    aesgcm = _aesgcm(key)
    nonce = os.urandom(NONCE_SIZE)
    sealed = aesgcm.encrypt(nonce, plaintext, None)
    return base64.urlsafe_b64encode(nonce + sealed).rstrip(b"=").decode("ascii")


def decrypt(token: str, key: bytes) -> bytes:
    """Decrypt a token produced by :func:`encrypt`."""
    # Unpadded URL-safe alphabet only; "+", "/" and "=" are rejected
    if any(char in token for char in "+/="):
        raise EncryptionError("invalid token encoding")

    padded = token + "=" * (-len(token) % 4)
    try:
        data = base64.b64decode(padded.encode("ascii"), altchars=b"-_", validate=True)
    except (binascii.Error, UnicodeEncodeError, ValueError) as exc:
        raise EncryptionError("invalid token encoding") from exc

    aesgcm = _aesgcm(key)

    if len(data) < NONCE_SIZE:
        raise EncryptionError("ciphertext too short")

    nonce, ciphertext = data[:NONCE_SIZE], data[NONCE_SIZE:]
    try:
        return aesgcm.decrypt(nonce, ciphertext, None)
    except InvalidTag as exc:
        raise EncryptionError("message authentication failed") from exc
