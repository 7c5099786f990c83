"""
Password hashing – salted bcrypt hashes, constant-time verification.

bcrypt only accepts 72 bytes of input, so passwords are first reduced to a
fixed-length SHA-256 digest (base64, 44 bytes). Both functions apply the
same reduction.
"""

import base64
import hashlib
from typing import Optional

import bcrypt

from druginfo.config import Config


def _prehash(password: str) -> bytes:
    return base64.b64encode(hashlib.sha256(password.encode()).digest())


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    salt = bcrypt.gensalt(rounds=rounds or Config.BCRYPT_ROUNDS)
    return bcrypt.hashpw(_prehash(password), salt).decode()


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(_prehash(password), password_hash.encode())
    except ValueError:
        # malformed stored hash
        return False
