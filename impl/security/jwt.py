from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import ExpiredSignatureError, JWTError, jwt

from impl.config import settings


ALGORITHM = "HS256"
TOKEN_CLAIM = "token"


class SessionError(Exception):
    """The session credential is missing, malformed, expired or forged."""


def create_session_token(upstream_token: str, *, expires_seconds: Optional[int] = None) -> tuple[str, int]:
    if expires_seconds is None:
        expires_seconds = settings.session_ttl_seconds
    now = datetime.now(timezone.utc)
    exp = now + timedelta(seconds=expires_seconds)
    payload = {
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
        TOKEN_CLAIM: upstream_token,
    }
    token = jwt.encode(payload, settings.jwt_secret_key, algorithm=ALGORITHM)
    return token, expires_seconds


def decode_session_token(session_token: str) -> str:
    """Return the upstream token embedded in a session credential."""
    if not session_token:
        raise SessionError("missing credential")
    try:
        payload = jwt.decode(
            session_token,
            settings.jwt_secret_key,
            algorithms=[ALGORITHM],
            options={"require_exp": True},
        )
    except ExpiredSignatureError as e:
        raise SessionError("expired credential") from e
    except JWTError as e:
        raise SessionError(f"invalid credential: {e}") from e

    upstream_token = payload.get(TOKEN_CLAIM)
    if not isinstance(upstream_token, str) or not upstream_token:
        raise SessionError("credential carries no token claim")
    return upstream_token
