"""
Password hashing and stored-credential verification.

Accounts written by different generations of the admin tooling carry
credentials in different encodings. A stored value is classified once into
one family and only then compared:

    $2a$/$2b$/$2y$...   bcrypt (constant-time compare via the bcrypt package)
    64 hex characters   SHA-256 hex digest of the password
    anything else       legacy plaintext (only accepted in legacy mode)

New credentials are always bcrypt.
"""

import hashlib
import hmac
import re
from dataclasses import dataclass

import bcrypt

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

# bcrypt ignores input past 72 bytes; truncate explicitly so hashing and checking agree.
BCRYPT_MAX_BYTES = 72

_SHA256_HEX = re.compile(r"[0-9a-fA-F]{64}")


@dataclass(frozen=True)
class BcryptHash:
    value: str


@dataclass(frozen=True)
class Sha256Hex:
    value: str


@dataclass(frozen=True)
class Plaintext:
    value: str


Credential = BcryptHash | Sha256Hex | Plaintext


def classify_credential(stored: str) -> Credential:
    """Decide which encoding family a stored credential belongs to (first match wins)."""
    if stored.startswith("$2"):
        return BcryptHash(stored)
    if _SHA256_HEX.fullmatch(stored):
        return Sha256Hex(stored.lower())
    return Plaintext(stored)


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def sha256_hex(plain_password: str) -> str:
    return hashlib.sha256(plain_password.encode("utf-8")).hexdigest()


def verify_password(
    plain_password: str,
    stored: str | None,
    *,
    allow_plaintext: bool = False,
) -> bool:
    """
    Verify a plain password against a stored credential of unknown encoding.

    Returns False when nothing is stored. A value that looks like bcrypt but
    cannot be checked by the bcrypt backend is rejected rather than retried
    as another family. Plaintext comparison happens only with allow_plaintext.
    """
    if not stored:
        return False
    credential = classify_credential(stored)

    if isinstance(credential, BcryptHash):
        pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        try:
            return bcrypt.checkpw(pw_bytes, credential.value.encode("utf-8"))
        except (ValueError, TypeError):
            return False

    if isinstance(credential, Sha256Hex):
        return hmac.compare_digest(sha256_hex(plain_password), credential.value)

    if not allow_plaintext:
        return False
    return hmac.compare_digest(
        plain_password.encode("utf-8"), credential.value.encode("utf-8")
    )
