from __future__ import annotations

from typing import Any, Dict, Optional
import requests
from requests.utils import quote

from impl.config import settings


class UpstreamUnavailable(Exception):
    """GitHub could not be reached (DNS, connection, TLS, ...)."""


def _segment(value: str) -> str:
    return quote(value, safe="")


class GitHubClient:
    def __init__(self, token: str, base_url: Optional[str] = None):
        self.base_url = (base_url or settings.github_api_url).rstrip("/")
        self.session = requests.Session()
        self.session.headers.update({
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {token}",
            "X-GitHub-Api-Version": settings.github_api_version,
        })

    def __enter__(self) -> "GitHubClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def send(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> requests.Response:
        """Send one request; every HTTP status is returned, only transport failures raise."""
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            return self.session.request(
                method,
                url,
                params=params,
                json=json,
                timeout=settings.github_timeout_seconds,
            )
        except requests.RequestException as e:
            raise UpstreamUnavailable(f"{method} {url}: {e.__class__.__name__}") from e

    def get_user(self) -> requests.Response:
        return self.send("GET", "/user")

    def list_repos(self, user: Optional[str] = None) -> requests.Response:
        if user:
            return self.send("GET", f"/users/{_segment(user)}/repos")
        return self.send("GET", "/user/repos")

    def create_repo(self, payload: Dict[str, Any]) -> requests.Response:
        return self.send("POST", "/user/repos", json=payload)

    def delete_repo(self, owner: str, repo: str) -> requests.Response:
        return self.send("DELETE", f"/repos/{_segment(owner)}/{_segment(repo)}")

    def list_pulls(self, owner: str, repo: str, *, per_page: int, state: Optional[str] = None) -> requests.Response:
        params: Dict[str, Any] = {"per_page": per_page}
        if state:
            params["state"] = state
        return self.send("GET", f"/repos/{_segment(owner)}/{_segment(repo)}/pulls", params=params)
