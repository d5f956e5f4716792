import json

import pytest
import requests
from fastapi.testclient import TestClient
from requests.structures import CaseInsensitiveDict

from api import app
from impl.config import settings
from impl.security.jwt import create_session_token


GITHUB_TOKEN = "ghp_testtoken"


def make_response(status_code, body=None, headers=None, raw_body=None, url=""):
    resp = requests.Response()
    resp.status_code = status_code
    resp.headers = CaseInsensitiveDict(headers or {})
    if raw_body is not None:
        resp._content = raw_body
    elif body is not None:
        resp._content = json.dumps(body).encode("utf-8")
    else:
        resp._content = b""
    resp._content_consumed = True
    resp.encoding = "utf-8"
    resp.url = url
    return resp


class FakeGitHub:
    """Stands in for api.github.com by answering requests.Session.request."""

    def __init__(self):
        self.calls = []
        self.routes = {}

    def add(self, method, path, status_code=200, body=None, headers=None, raw_body=None, error=None):
        self.routes.setdefault((method, path), []).append((status_code, body, headers, raw_body, error))

    def handle(self, session, method, url, **kwargs):
        path = url[len(settings.github_api_url.rstrip("/")):]
        self.calls.append({
            "method": method,
            "path": path,
            "params": kwargs.get("params"),
            "json": kwargs.get("json"),
            "headers": dict(session.headers),
        })
        queue = self.routes.get((method, path))
        if not queue:
            raise AssertionError(f"unexpected upstream call {method} {path}")
        status_code, body, headers, raw_body, error = queue.pop(0) if len(queue) > 1 else queue[0]
        if error is not None:
            raise error
        return make_response(status_code, body=body, headers=headers, raw_body=raw_body, url=url)


@pytest.fixture
def github(monkeypatch):
    fake = FakeGitHub()
    monkeypatch.setattr(
        requests.Session,
        "request",
        lambda session, method, url, **kwargs: fake.handle(session, method, url, **kwargs),
    )
    return fake


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def auth_client(client):
    session_token, _ = create_session_token(GITHUB_TOKEN)
    client.cookies.set(settings.session_cookie_name, session_token)
    return client


def user_json(login="octocat"):
    return {
        "login": login,
        "id": 1,
        "html_url": f"https://github.com/{login}",
        "url": f"https://api.github.com/users/{login}",
        "type": "User",
    }


def repo_json(name, owner="octocat"):
    return {
        "id": 1296269,
        "name": name,
        "full_name": f"{owner}/{name}",
        "html_url": f"https://github.com/{owner}/{name}",
        "private": False,
        "owner": user_json(owner),
    }


def pull_json(number, title="Fix things", login="octocat"):
    return {"number": number, "title": title, "state": "open", "user": user_json(login)}
