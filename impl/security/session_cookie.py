from __future__ import annotations

from fastapi import Response

from impl.config import settings
from impl.security.jwt import create_session_token


def set_session_cookie(response: Response, upstream_token: str) -> None:
    session_token, ttl = create_session_token(upstream_token)
    response.set_cookie(
        key=settings.session_cookie_name,
        value=session_token,
        max_age=ttl,
        path="/",
        secure=settings.session_cookie_secure,
        httponly=True,
    )


def clear_session_cookie(response: Response) -> None:
    # overwrite with an already-expired cookie of the same name/path
    response.delete_cookie(
        key=settings.session_cookie_name,
        path="/",
        secure=settings.session_cookie_secure,
        httponly=True,
    )
