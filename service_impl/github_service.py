from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from fastapi import HTTPException, status
from pydantic import TypeAdapter

from base_requests import GithubPullRequest, GithubRepo, StatusMessage
from impl.integrations.github.client import GitHubClient
from impl.integrations.github import status_map as sm
from impl.utils.json_utils import coerce_query_value
from service_impl.upstream import invoke


logger = logging.getLogger("ghgateway.github")

_repo_list = TypeAdapter(List[GithubRepo])
_pull_list = TypeAdapter(List[GithubPullRequest])

LIST_REPOS_STATUS: sm.StatusTable = {
    200: sm.data(),
    401: sm.failure("Invalid token"),
    403: sm.RATE_LIMITED,
    404: sm.failure("User not found"),
    422: sm.failure("Malformed request"),
}

CREATE_REPO_STATUS: sm.StatusTable = {
    201: sm.data(),
    400: sm.failure("Bad request"),
    401: sm.failure("Invalid token"),
    403: sm.RATE_LIMITED,
    404: sm.failure("Resource not found"),
    422: sm.failure("Repo already exists"),
}

DELETE_REPO_STATUS: sm.StatusTable = {
    204: sm.ok("Deleted {repo}", status=status.HTTP_200_OK),
    307: sm.failure("Temporary redirect"),
    401: sm.failure("Invalid token"),
    403: sm.FORBIDDEN_OR_RATE_LIMITED,
    404: sm.failure("Repo not found"),
}

LIST_PULLS_STATUS: sm.StatusTable = {
    200: sm.data(),
    401: sm.failure("Invalid token"),
    403: sm.RATE_LIMITED,
    404: sm.failure("Repo not found"),
    422: sm.failure("Endpoint spam"),
}


def build_repo_payload(params: Mapping[str, str]) -> Dict[str, Any]:
    return {key: coerce_query_value(value) for key, value in params.items()}


class GithubService:
    def list_repos(self, *, token: str, user: Optional[str] = None) -> List[GithubRepo]:
        with GitHubClient(token) as gh:
            _, repos = invoke(lambda: gh.list_repos(user), LIST_REPOS_STATUS, _repo_list.validate_python)
        return repos

    def create_repo(self, *, token: str, params: Mapping[str, str]) -> GithubRepo:
        if not params.get("name"):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing name parameter")

        payload = build_repo_payload(params)
        with GitHubClient(token) as gh:
            _, repo = invoke(lambda: gh.create_repo(payload), CREATE_REPO_STATUS, GithubRepo.model_validate)

        logger.info("created repo full_name=%s", repo.full_name)
        return repo

    def delete_repo(self, *, token: str, owner: str, repo: str) -> StatusMessage:
        with GitHubClient(token) as gh:
            outcome, _ = invoke(lambda: gh.delete_repo(owner, repo), DELETE_REPO_STATUS)

        logger.info("deleted repo owner=%s repo=%s", owner, repo)
        return StatusMessage(status=outcome.status, message=outcome.message.format(repo=repo))

    def list_pulls(self, *, token: str, owner: str, repo: str, n: int, state: Optional[str] = None) -> List[GithubPullRequest]:
        if n < 1:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid number of pull requests")

        with GitHubClient(token) as gh:
            _, pulls = invoke(
                lambda: gh.list_pulls(owner, repo, per_page=n, state=state),
                LIST_PULLS_STATUS,
                _pull_list.validate_python,
            )
        return pulls[:n]
