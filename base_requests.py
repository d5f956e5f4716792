from __future__ import annotations

from typing import Any, Literal, Optional
from pydantic import BaseModel, Field, field_validator


# ---------- Generic ----------
class HealthResponse(BaseModel):
    ok: bool


class StatusMessage(BaseModel):
    status: int
    message: str


# ---------- GitHub projections ----------
class GithubUser(BaseModel):
    login: str = ""
    html_url: str = ""


def _empty_if_null(v: Any) -> Any:
    # GitHub may send null for an author or owner
    return {} if v is None else v


class GithubRepo(BaseModel):
    name: str = ""
    full_name: str = ""
    html_url: str = ""
    owner: GithubUser = Field(default_factory=GithubUser)

    @field_validator("owner", mode="before")
    @classmethod
    def _null_owner(cls, v: Any) -> Any:
        return _empty_if_null(v)


class GithubPullRequest(BaseModel):
    number: int = 0
    title: str = ""
    user: GithubUser = Field(default_factory=GithubUser)

    @field_validator("user", mode="before")
    @classmethod
    def _null_user(cls, v: Any) -> Any:
        return _empty_if_null(v)


PullRequestState = Optional[Literal["open", "closed", "all"]]
