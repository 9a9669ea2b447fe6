from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from types import SimpleNamespace
from typing import Any

os.environ["APP_ENV"] = "test"
os.environ["DATABASE_URL"] = f"sqlite:///{Path(tempfile.gettempdir()) / 'careermatch-test.db'}"
os.environ["UPLOAD_DIR"] = str(Path(tempfile.gettempdir()) / "careermatch-test-uploads")
os.environ["AUTH_URL"] = "http://auth.test"
os.environ["AUTH_ANON_KEY"] = "anon-key"
os.environ["OPENAI_API_KEY"] = ""

import pytest
from fastapi.testclient import TestClient

from careermatch.api.app import create_app
from careermatch.api.deps import get_identity_gateway, get_llm_provider
from careermatch.config import get_settings
from careermatch.db.base import Base
from careermatch.db.session import engine
from careermatch.identity.gateway import IdentityGateway
from careermatch.llm.providers import LLMProvider, ProviderConfig

SAMPLE_SUGGESTIONS = [
    {
        "job_title": "Frontend Developer",
        "match_percentage": 88,
        "reason": "Your React and TypeScript skills fit modern frontend work. Design interest helps with UI.",
        "required_skills": ["React", "TypeScript", "CSS"],
        "salary_range": "$80,000 - $120,000",
        "location": "Remote",
    },
    {
        "job_title": "UI Engineer",
        "match_percentage": 82,
        "reason": "You combine engineering with design sensibility. Teams value that overlap.",
        "required_skills": ["React", "Figma", "Accessibility"],
        "salary_range": "$85,000 - $125,000",
        "location": "New York",
    },
    {
        "job_title": "Product Designer",
        "match_percentage": 70,
        "reason": "Your design interest is a strong start. Engineering knowledge is a bonus.",
        "required_skills": ["Figma", "Prototyping", "User Research"],
        "salary_range": "$75,000 - $110,000",
        "location": "San Francisco",
    },
]


class FakeHTTPResponse:
    def __init__(self, status_code: int, payload: Any = None, reason: str = ""):
        self.status_code = status_code
        self._payload = payload
        self.content = b"" if payload is None else json.dumps(payload).encode("utf-8")
        self.reason = reason

    def json(self) -> Any:
        return self._payload


class FakeAuthHTTP:
    """Stands in for ``requests.Session`` in front of a GoTrue-style provider."""

    def __init__(self) -> None:
        self.users: dict[str, dict[str, str]] = {}
        self.tokens: dict[str, str] = {}
        self.calls: list[tuple[str, str]] = []
        self.last_params: dict[str, str] = {}
        self.signup_error: tuple[int, dict[str, Any]] | None = None

    def add_user(self, email: str, password: str, *, user_id: str, name: str = "", token: str = "") -> None:
        self.users[email] = {"id": user_id, "password": password, "name": name}
        if token:
            self.tokens[token] = email

    def request(self, method, url, *, headers=None, params=None, json=None, timeout=None):
        path = url.split("/auth/v1", 1)[1]
        self.calls.append((method, path))
        self.last_params = params or {}
        headers = headers or {}

        if path == "/signup":
            if self.signup_error:
                status, payload = self.signup_error
                return FakeHTTPResponse(status, payload)
            if json["email"] in self.users:
                return FakeHTTPResponse(422, {"msg": "User already registered"})
            user_id = f"user-{len(self.users) + 1}"
            self.add_user(json["email"], json["password"], user_id=user_id, name=json["data"]["full_name"])
            return FakeHTTPResponse(200, self._user_payload(json["email"]))

        if path == "/token" and params.get("grant_type") == "password":
            user = self.users.get(json["email"])
            if user is None or user["password"] != json["password"]:
                return FakeHTTPResponse(
                    400, {"error": "invalid_grant", "error_description": "Invalid login credentials"}
                )
            token = f"token-{user['id']}-{len(self.tokens)}"
            self.tokens[token] = json["email"]
            return FakeHTTPResponse(
                200,
                {
                    "access_token": token,
                    "refresh_token": f"refresh-{token}",
                    "expires_in": 3600,
                    "user": self._user_payload(json["email"]),
                },
            )

        if path == "/token" and params.get("grant_type") == "refresh_token":
            token = json["refresh_token"].removeprefix("refresh-")
            email = self.tokens.get(token)
            if email is None:
                return FakeHTTPResponse(400, {"error_description": "Invalid Refresh Token"})
            new_token = f"{token}-r"
            self.tokens[new_token] = email
            return FakeHTTPResponse(
                200,
                {"access_token": new_token, "refresh_token": f"refresh-{new_token}", "user": self._user_payload(email)},
            )

        token = headers.get("Authorization", "").removeprefix("Bearer ")
        if path == "/user":
            email = self.tokens.get(token)
            if email is None:
                return FakeHTTPResponse(401, {"msg": "invalid JWT"})
            return FakeHTTPResponse(200, self._user_payload(email))

        if path == "/logout":
            self.tokens.pop(token, None)
            return FakeHTTPResponse(204)

        return FakeHTTPResponse(404, {"msg": "not found"})

    def _user_payload(self, email: str) -> dict[str, Any]:
        user = self.users[email]
        return {"id": user["id"], "email": email, "user_metadata": {"full_name": user["name"]}}


class FakeChatCompletions:
    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []
        self.content: str = json.dumps(SAMPLE_SUGGESTIONS)
        self.error: Exception | None = None

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        payload = SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=self.content))])
        payload.model_dump = lambda: {"id": "chat_1"}
        return payload


@pytest.fixture(autouse=True)
def reset_db() -> None:
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def auth_http() -> FakeAuthHTTP:
    http = FakeAuthHTTP()
    http.add_user("ada@example.com", "secret123", user_id="user-ada", name="Ada", token="valid-token")
    return http


@pytest.fixture
def gateway(auth_http: FakeAuthHTTP) -> IdentityGateway:
    return IdentityGateway(get_settings(), http=auth_http)


@pytest.fixture
def chat() -> FakeChatCompletions:
    return FakeChatCompletions()


@pytest.fixture
def llm_provider(chat: FakeChatCompletions) -> LLMProvider:
    provider = LLMProvider(
        ProviderConfig(name="openai", base_url="http://localhost:9999/v1", api_key="dummy", timeout_sec=5)
    )
    provider.client = SimpleNamespace(chat=SimpleNamespace(completions=chat))
    return provider


@pytest.fixture
def client(auth_http: FakeAuthHTTP, llm_provider: LLMProvider) -> TestClient:
    app = create_app()
    app.dependency_overrides[get_identity_gateway] = lambda: IdentityGateway(get_settings(), http=auth_http)
    app.dependency_overrides[get_llm_provider] = lambda: llm_provider
    return TestClient(app)


@pytest.fixture
def sample_suggestions() -> list[dict[str, Any]]:
    return [dict(item) for item in SAMPLE_SUGGESTIONS]
