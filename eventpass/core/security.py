# eventpass/core/security.py
"""
Password hashing and admin session tokens.

Passwords are stored as bcrypt hashes (12 rounds). Sessions are HS256 JWTs
carrying ``userId``, ``tenantId``, ``role`` and ``email``.
"""
import logging
import secrets
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional

import bcrypt
from jose import JWTError, jwt

from eventpass.core.config import settings
from eventpass.schemas.token import SessionClaims

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
BCRYPT_ROUNDS = 12


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


@lru_cache(maxsize=1)
def dummy_password_hash() -> str:
    """Checked in place of a real hash when no account matches the login."""
    return hash_password(secrets.token_urlsafe(16))


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed hash in the database
        logger.warning("Stored password hash could not be parsed")
        return False


def create_session_token(
    user_id: str,
    tenant_id: str,
    role: str,
    email: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(days=settings.SESSION_TTL_DAYS))
    payload = {
        "userId": user_id,
        "tenantId": tenant_id,
        "role": role,
        "email": email,
        "iss": settings.JWT_ISSUER,
        "iat": int(now.timestamp()),
        "exp": int(expire.timestamp()),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=ALGORITHM)


def verify_session_token(token: str) -> Optional[SessionClaims]:
    """Return the embedded claims, or None if the signature/expiry/issuer is bad."""
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[ALGORITHM],
            issuer=settings.JWT_ISSUER,
        )
        return SessionClaims(**payload)
    except (JWTError, ValueError) as e:
        logger.debug(f"Session token rejected: {e}")
        return None
