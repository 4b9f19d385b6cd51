# -*- coding: utf-8 -*-
"""Passphrase-based encryption for portable backups.

Blob layout: ``salt(16) || nonce(12) || AES-256-GCM ciphertext+tag``.
The key is derived with PBKDF2-HMAC-SHA256, 100k iterations, fresh salt
per call. No associated data.
"""

from __future__ import annotations

import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from .errors import CryptoError

SALT_SIZE = 16
NONCE_SIZE = 12
KEY_SIZE = 32
ITERATIONS = 100_000


def derive_key(passphrase: str, salt: bytes) -> bytes:
    """Derive a 256-bit key from *passphrase* and *salt*."""
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=KEY_SIZE,
        salt=salt,
        iterations=ITERATIONS,
    )
    return kdf.derive(passphrase.encode("utf-8"))


def encrypt(data: bytes, passphrase: str) -> bytes:
    """Seal *data* under *passphrase*. Returns the self-contained blob."""
    salt = os.urandom(SALT_SIZE)
    nonce = os.urandom(NONCE_SIZE)
    key = derive_key(passphrase, salt)
    return salt + nonce + AESGCM(key).encrypt(nonce, data, None)


def decrypt(blob: bytes, passphrase: str) -> bytes:
    """Open a blob produced by :func:`encrypt`.

    Raises:
        CryptoError: wrong passphrase, truncated or tampered blob.
    """
    if len(blob) < SALT_SIZE + NONCE_SIZE:
        raise CryptoError()

    salt = blob[:SALT_SIZE]
    nonce = blob[SALT_SIZE : SALT_SIZE + NONCE_SIZE]
    ciphertext = blob[SALT_SIZE + NONCE_SIZE :]

    key = derive_key(passphrase, salt)
    try:
        return AESGCM(key).decrypt(nonce, ciphertext, None)
    except InvalidTag:
        raise CryptoError() from None
