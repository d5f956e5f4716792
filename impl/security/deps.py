from __future__ import annotations

import logging

from fastapi import HTTPException, Request, status

from impl.config import settings
from impl.security.jwt import SessionError, decode_session_token


logger = logging.getLogger("ghgateway.security")

NOT_AUTHENTICATED = "Not authenticated"


def get_upstream_token(request: Request) -> str:
    """Resolve the caller's GitHub token from the session cookie or reject with 401."""
    session_token = request.cookies.get(settings.session_cookie_name, "")
    try:
        upstream_token = decode_session_token(session_token)
    except SessionError as e:
        logger.info("session rejected path=%s reason=%s", request.url.path, e)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=NOT_AUTHENTICATED)

    return upstream_token
