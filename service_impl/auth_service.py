from __future__ import annotations

import logging
from typing import Optional

from fastapi import HTTPException, status

from base_requests import GithubUser, StatusMessage
from impl.integrations.github.client import GitHubClient
from impl.integrations.github import status_map as sm
from service_impl.upstream import invoke


logger = logging.getLogger("ghgateway.auth")

AUTHENTICATE_STATUS: sm.StatusTable = {
    200: sm.data(),
    401: sm.failure("Invalid token"),
    403: sm.RATE_LIMITED,
}

CURRENT_USER_STATUS: sm.StatusTable = {
    200: sm.data(),
    401: sm.failure("Invalid token"),
    403: sm.RATE_LIMITED,
}


class AuthService:
    def authenticate(self, *, token: Optional[str]) -> StatusMessage:
        """Prove the token against GitHub; the caller issues the session on success."""
        if not token:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No token provided")

        with GitHubClient(token) as gh:
            outcome, user = invoke(gh.get_user, AUTHENTICATE_STATUS, GithubUser.model_validate)

        logger.info("authenticated github_login=%s", user.login)
        return StatusMessage(status=outcome.status, message=f"Authenticated as {user.login}")

    def current_user(self, *, token: str) -> GithubUser:
        with GitHubClient(token) as gh:
            _, user = invoke(gh.get_user, CURRENT_USER_STATUS, GithubUser.model_validate)
        return user

    def logout(self) -> StatusMessage:
        return StatusMessage(status=status.HTTP_200_OK, message="Logged out")
