from __future__ import annotations

import hashlib
import hmac
import secrets

import bcrypt  # type: ignore[import-not-found]

from roopsnap.core.settings import settings

# bcrypt only reads the first 72 bytes; newer releases refuse longer input.
BCRYPT_MAX_PASSWORD_BYTES = 72


def hash_password(password: str, *, rounds: int | None = None) -> str:
    """
    bcrypt password hash (random salt, fixed cost factor):
      $2b$<rounds>$<salt+hash>
    """
    if not password:
        raise ValueError("password must be non-empty")
    cost = int(rounds if rounds is not None else settings.AUTH_BCRYPT_ROUNDS)
    salt = bcrypt.gensalt(rounds=cost)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, encoded: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), encoded.encode("utf-8"))
    except (ValueError, TypeError):
        return False


# Verified against when the login email is unknown so both failure paths
# spend one bcrypt check.
DUMMY_PASSWORD_HASH = hash_password(secrets.token_urlsafe(16))


def new_session_token() -> str:
    # Cookie value (opaque bearer token).
    return secrets.token_urlsafe(32)


def hash_session_token(token: str) -> str:
    # Store only a keyed hash in DB so a copied table cannot be replayed.
    key = settings.AUTH_SESSION_SECRET.encode("utf-8")
    return hmac.new(key, token.encode("utf-8"), hashlib.sha256).hexdigest()
