"""
Password and refresh token hashing.
"""

import hashlib
import secrets

import bcrypt

from config import ApplicationConfig

# bcrypt only accepts passwords up to 72 bytes
MAX_PASSWORD_BYTES = 72

# Used to keep login work constant when the email is unknown
_DUMMY_HASH = bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(ApplicationConfig.BCRYPT_ROUNDS))


def hash_password(password: str) -> str:
    return bcrypt.hashpw(
        password.encode(), bcrypt.gensalt(ApplicationConfig.BCRYPT_ROUNDS)
    ).decode()


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except ValueError:
        return False


def burn_password_check(password: str) -> None:
    """Spend a bcrypt comparison when there is no user to compare against."""
    bcrypt.checkpw(password.encode()[:MAX_PASSWORD_BYTES], _DUMMY_HASH)


def password_fits(password: str) -> bool:
    return len(password.encode()) <= MAX_PASSWORD_BYTES


def new_refresh_token() -> str:
    return secrets.token_urlsafe(32)


def hash_refresh_token(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()
