from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Request, Response, status

from base_requests import (
    HealthResponse, StatusMessage,
    GithubUser, GithubRepo, GithubPullRequest, PullRequestState,
)
from service_impl.auth_service import AuthService
from service_impl.github_service import GithubService
from impl.security.deps import get_upstream_token
from impl.security.session_cookie import clear_session_cookie, set_session_cookie


router = APIRouter(tags=["gateway"])


@router.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(ok=True)


# ---------- Auth ----------
@router.post("/auth", response_model=StatusMessage)
def authenticate(response: Response, token: Optional[str] = None) -> StatusMessage:
    result = AuthService().authenticate(token=token)
    set_session_cookie(response, token)
    return result


@router.get("/auth", response_model=GithubUser)
def current_user(token: str = Depends(get_upstream_token)) -> GithubUser:
    return AuthService().current_user(token=token)


@router.delete("/auth", response_model=StatusMessage)
def logout(response: Response, _token: str = Depends(get_upstream_token)) -> StatusMessage:
    # TTL-only invalidation: the old credential stays valid until it expires
    clear_session_cookie(response)
    return AuthService().logout()


# ---------- Repositories ----------
@router.get("/repos", response_model=List[GithubRepo])
def list_own_repos(token: str = Depends(get_upstream_token)) -> List[GithubRepo]:
    return GithubService().list_repos(token=token)


@router.get("/repos/{user}", response_model=List[GithubRepo])
def list_user_repos(user: str, token: str = Depends(get_upstream_token)) -> List[GithubRepo]:
    return GithubService().list_repos(token=token, user=user)


@router.post("/repos", response_model=GithubRepo, status_code=status.HTTP_201_CREATED)
def create_repo(request: Request, token: str = Depends(get_upstream_token)) -> GithubRepo:
    # every query parameter is forwarded as a repo-creation field
    return GithubService().create_repo(token=token, params=dict(request.query_params))


@router.delete("/repos/{owner}/{repo}", response_model=StatusMessage)
def delete_repo(owner: str, repo: str, token: str = Depends(get_upstream_token)) -> StatusMessage:
    return GithubService().delete_repo(token=token, owner=owner, repo=repo)


# ---------- Pull requests ----------
@router.get("/pulls/{owner}/{repo}/{n}", response_model=List[GithubPullRequest])
def list_pulls(
    owner: str,
    repo: str,
    n: int,
    state: PullRequestState = None,
    token: str = Depends(get_upstream_token),
) -> List[GithubPullRequest]:
    return GithubService().list_pulls(token=token, owner=owner, repo=repo, n=n, state=state)
