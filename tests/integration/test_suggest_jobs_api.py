from __future__ import annotations

from careermatch.config import Settings, get_settings
from careermatch.db.repositories import ProfileStore
from careermatch.db.session import SessionLocal

AUTH = {"Authorization": "Bearer valid-token"}
PROFILE = {
    "education": "bachelors",
    "specialization": "Computer Science",
    "skills": ["React", "TypeScript"],
    "interests": ["Design"],
}


def test_preflight_returns_cors_headers_and_no_body(client) -> None:
    response = client.options("/functions/v1/suggest-jobs")

    assert response.status_code == 200
    assert response.content == b""
    assert response.headers["access-control-allow-origin"] == "*"
    allowed = response.headers["access-control-allow-headers"]
    assert "authorization" in allowed
    assert "content-type" in allowed
    assert "POST" in response.headers["access-control-allow-methods"]


def test_profile_submission_stores_three_suggestions(client) -> None:
    response = client.post("/functions/v1/suggest-jobs", json={"profile": PROFILE}, headers=AUTH)

    assert response.status_code == 200
    assert response.json() == {"success": True, "suggestions": 3}
    assert response.headers["access-control-allow-origin"] == "*"

    with SessionLocal() as db:
        rows = ProfileStore(db).list_suggestions("user-ada")
    assert len(rows) == 3
    assert all(row.job_type == "Full-time" for row in rows)
    assert all(row.company == "Various Companies" for row in rows)


def test_missing_token_is_unauthorized_without_model_call(client, chat) -> None:
    response = client.post("/functions/v1/suggest-jobs", json={"profile": PROFILE})

    assert response.status_code == 401
    assert response.json() == {"error": "No authorization header"}
    assert chat.calls == []


def test_invalid_token_is_unauthorized(client, chat) -> None:
    response = client.post(
        "/functions/v1/suggest-jobs",
        json={"profile": PROFILE},
        headers={"Authorization": "Bearer forged"},
    )

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid token"}
    assert chat.calls == []


def test_unparseable_model_output_is_bad_gateway(client, chat) -> None:
    chat.content = "I think you should be an astronaut."
    response = client.post("/functions/v1/suggest-jobs", json={"profile": PROFILE}, headers=AUTH)

    assert response.status_code == 502
    assert "Invalid AI response format" in response.json()["error"]


def test_browser_file_object_in_resume_is_ignored(client, chat) -> None:
    response = client.post(
        "/functions/v1/suggest-jobs",
        json={"profile": {**PROFILE, "resume": {}}},
        headers=AUTH,
    )

    assert response.status_code == 200
    assert response.json() == {"success": True, "suggestions": 3}
    assert "resume" not in chat.calls[0]["messages"][1]["content"].lower()


def test_malformed_body_is_rejected(client, chat) -> None:
    response = client.post(
        "/functions/v1/suggest-jobs",
        content=b"{not json",
        headers={**AUTH, "Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert "error" in response.json()
    assert chat.calls == []


def test_legacy_mode_reports_every_failure_as_500(client) -> None:
    client.app.dependency_overrides[get_settings] = lambda: Settings(legacy_error_status=True)

    response = client.post("/functions/v1/suggest-jobs", json={"profile": PROFILE})

    assert response.status_code == 500
    assert response.json() == {"error": "No authorization header"}


def test_profile_and_suggestion_endpoints(client) -> None:
    assert client.get("/api/profile", headers=AUTH).status_code == 404

    put_resp = client.put(
        "/api/profile",
        json={"name": "Ada", **PROFILE, "skills": ["React", "React", "Go"]},
        headers=AUTH,
    )
    assert put_resp.status_code == 200
    assert put_resp.json()["skills"] == ["React", "Go"]

    get_resp = client.get("/api/profile", headers=AUTH)
    assert get_resp.json()["name"] == "Ada"

    client.post("/functions/v1/suggest-jobs", json={"profile": PROFILE}, headers=AUTH)
    suggestions = client.get("/api/suggestions", headers=AUTH).json()
    assert [item["match_percentage"] for item in suggestions] == [88, 82, 70]

    assert client.get("/api/suggestions").status_code == 401


def test_auth_endpoints(client) -> None:
    signup = client.post(
        "/api/auth/signup",
        json={"email": "grace@example.com", "password": "hopper123", "display_name": "Grace"},
    )
    assert signup.status_code == 200
    assert "check your email" in signup.json()["message"]

    bad = client.post("/api/auth/signin", json={"email": "grace@example.com", "password": "nope"})
    assert bad.status_code == 400
    assert bad.json()["detail"] == "Invalid login credentials"

    good = client.post("/api/auth/signin", json={"email": "grace@example.com", "password": "hopper123"})
    assert good.status_code == 200
    assert good.json()["user"]["display_name"] == "Grace"


def test_health(client) -> None:
    assert client.get("/health").json() == {"status": "ok"}
