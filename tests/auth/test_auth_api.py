from __future__ import annotations

import json

import pytest  # type: ignore[import-not-found]
from fastapi.testclient import TestClient  # type: ignore[import-not-found]

from roopsnap.core.settings import settings


def _register(client: TestClient, email: str = "alice@example.com", password: str = "secret1"):  # type: ignore[no-untyped-def]
    return client.post("/api/auth/register", json={"email": email, "password": password})


def _login(client: TestClient, email: str = "alice@example.com", password: str = "secret1"):  # type: ignore[no-untyped-def]
    return client.post("/api/auth/login", json={"email": email, "password": password})


def test_register_login_check_logout_flow(auth_client: TestClient) -> None:
    r = _register(auth_client)
    assert r.status_code == 200
    assert r.json()["email"] == "alice@example.com"
    assert "password_hash" not in r.json()

    r = _login(auth_client)
    assert r.status_code == 200
    assert r.json()["id"]
    assert auth_client.cookies.get(settings.AUTH_COOKIE_NAME)

    r = auth_client.get("/api/auth/check")
    assert r.status_code == 200
    data = r.json()
    assert data["authenticated"] is True
    assert data["user"]["email"] == "alice@example.com"

    r = auth_client.post("/api/auth/logout")
    assert r.status_code == 200

    r = auth_client.get("/api/auth/check")
    assert r.status_code == 401


def test_session_cookie_attributes(auth_client: TestClient) -> None:
    _register(auth_client)
    r = _login(auth_client)
    cookie = r.headers["set-cookie"].lower()
    assert f"{settings.AUTH_COOKIE_NAME}=" in cookie
    assert "httponly" in cookie
    assert "max-age=86400" in cookie
    # Development mode: no Secure flag.
    assert "secure" not in cookie


def test_session_cookie_secure_in_production(auth_client: TestClient, monkeypatch) -> None:  # type: ignore[no-untyped-def]
    monkeypatch.setattr(settings, "ENVIRONMENT", "production")
    _register(auth_client)
    r = _login(auth_client)
    assert "secure" in r.headers["set-cookie"].lower()


def test_register_validation_errors(auth_client: TestClient) -> None:
    r = auth_client.post("/api/auth/register", json={"email": "alice@example.com"})
    assert r.status_code == 400
    assert r.json() == {"error": "Email and password are required"}

    r = _register(auth_client, password="12345")
    assert r.status_code == 400
    assert "at least 6 characters" in r.json()["error"]


def test_register_duplicate_email_is_400(auth_client: TestClient) -> None:
    assert _register(auth_client).status_code == 200
    r = _register(auth_client)
    assert r.status_code == 400
    assert r.json()["error"] == "User with this email already exists"


def test_malformed_body_is_400(auth_client: TestClient) -> None:
    r = auth_client.post(
        "/api/auth/login", content="not json", headers={"content-type": "application/json"}
    )
    assert r.status_code == 400
    assert "error" in r.json()


def test_login_unknown_user_and_wrong_password_match(auth_client: TestClient) -> None:
    _register(auth_client)
    unknown = _login(auth_client, email="bob@example.com")
    wrong = _login(auth_client, password="wrong99")
    assert unknown.status_code == wrong.status_code == 401
    assert unknown.content == wrong.content
    assert unknown.json() == {"error": "Invalid email or password"}


def test_forgot_password_bodies_identical(auth_client: TestClient, mailer) -> None:  # type: ignore[no-untyped-def]
    _register(auth_client)
    known = auth_client.post("/api/auth/forgot-password", json={"email": "alice@example.com"})
    unknown = auth_client.post("/api/auth/forgot-password", json={"email": "bob@example.com"})
    assert known.status_code == unknown.status_code == 200
    assert known.content == unknown.content
    assert [to for to, _ in mailer.sent] == ["alice@example.com"]


def test_forgot_password_identical_when_mail_fails(auth_client: TestClient, mailer) -> None:  # type: ignore[no-untyped-def]
    _register(auth_client)
    mailer.fail = True
    known = auth_client.post("/api/auth/forgot-password", json={"email": "alice@example.com"})
    unknown = auth_client.post("/api/auth/forgot-password", json={"email": "bob@example.com"})
    assert known.status_code == 200
    assert known.content == unknown.content


def test_reset_password_endpoint(auth_client: TestClient, mailer) -> None:  # type: ignore[no-untyped-def]
    _register(auth_client)
    auth_client.post("/api/auth/forgot-password", json={"email": "alice@example.com"})
    code = mailer.last_code_for("alice@example.com")

    r = auth_client.post(
        "/api/auth/reset-password",
        json={"email": "alice@example.com", "code": code, "newPassword": "brandnew"},
    )
    assert r.status_code == 200
    assert r.json() == {"message": "Password reset successfully"}

    r = auth_client.post(
        "/api/auth/reset-password",
        json={"email": "alice@example.com", "code": code, "newPassword": "brandnew2"},
    )
    assert r.status_code == 400

    assert _login(auth_client, password="brandnew").status_code == 200


def test_reset_password_short_password(auth_client: TestClient) -> None:
    r = auth_client.post(
        "/api/auth/reset-password",
        json={"email": "alice@example.com", "code": "123456", "newPassword": "abc"},
    )
    assert r.status_code == 400
    assert "at least 6 characters" in r.json()["error"]


def test_destroyed_session_is_rejected_everywhere(auth_client: TestClient) -> None:
    _register(auth_client)
    _login(auth_client)
    token = auth_client.cookies.get(settings.AUTH_COOKIE_NAME)
    assert auth_client.get("/api/admin/verify").json()["via"] == "session"

    auth_client.post("/api/auth/logout")
    assert not auth_client.cookies.get(settings.AUTH_COOKIE_NAME)

    # Replay the old cookie value.
    replay = {"Cookie": f"{settings.AUTH_COOKIE_NAME}={token}"}
    assert auth_client.get("/api/auth/check", headers=replay).status_code == 401
    assert auth_client.get("/api/admin/verify", headers=replay).status_code == 401


def test_check_without_cookie_is_401(auth_client: TestClient) -> None:
    r = auth_client.get("/api/auth/check")
    assert r.status_code == 401
    assert r.json() == {"error": "Not authenticated"}


def test_logout_without_session_is_ok(auth_client: TestClient) -> None:
    r = auth_client.post("/api/auth/logout")
    assert r.status_code == 200


def test_register_password_over_72_bytes_is_400(auth_client: TestClient) -> None:
    r = _register(auth_client, password="x" * 100)
    assert r.status_code == 400
    assert r.json() == {"error": "Password must be at most 72 bytes long"}


def test_reset_with_long_password_keeps_code(auth_client: TestClient, mailer) -> None:  # type: ignore[no-untyped-def]
    _register(auth_client)
    auth_client.post("/api/auth/forgot-password", json={"email": "alice@example.com"})
    code = mailer.last_code_for("alice@example.com")

    r = auth_client.post(
        "/api/auth/reset-password",
        json={"email": "alice@example.com", "code": code, "newPassword": "y" * 100},
    )
    assert r.status_code == 400

    r = auth_client.post(
        "/api/auth/reset-password",
        json={"email": "alice@example.com", "code": code, "newPassword": "brandnew"},
    )
    assert r.status_code == 200


def test_expired_session_is_rejected_everywhere(auth_client: TestClient, clock) -> None:  # type: ignore[no-untyped-def]
    _register(auth_client)
    _login(auth_client)

    clock.advance(hours=23)
    assert auth_client.get("/api/auth/check").status_code == 200
    assert auth_client.get("/api/admin/verify").json()["via"] == "session"

    clock.advance(hours=1, seconds=1)
    assert auth_client.get("/api/auth/check").status_code == 401
    assert auth_client.get("/api/admin/verify").status_code == 401


@pytest.mark.anyio
async def test_forgot_password_responds_before_mail_is_sent(auth_app, auth_service, mailer, db_session, monkeypatch) -> None:  # type: ignore[no-untyped-def]
    await auth_service.register(db_session, email="alice@example.com", password="secret1")
    events: list[str] = []
    send_reset_code = mailer.send_reset_code

    async def _recording_send(*, to_email: str, code: str) -> None:
        events.append("mail")
        await send_reset_code(to_email=to_email, code=code)

    monkeypatch.setattr(mailer, "send_reset_code", _recording_send)

    body = json.dumps({"email": "alice@example.com"}).encode("utf-8")
    messages = [{"type": "http.request", "body": body, "more_body": False}]

    async def receive() -> dict:
        return messages.pop(0) if messages else {"type": "http.disconnect"}

    async def send(message: dict) -> None:
        if message["type"] == "http.response.body" and not message.get("more_body"):
            events.append("response")

    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "POST",
        "scheme": "http",
        "path": "/api/auth/forgot-password",
        "raw_path": b"/api/auth/forgot-password",
        "root_path": "",
        "query_string": b"",
        "headers": [(b"host", b"testserver"), (b"content-type", b"application/json")],
        "client": ("testclient", 50000),
        "server": ("testserver", 80),
    }
    await auth_app(scope, receive, send)

    assert events == ["response", "mail"]
    assert mailer.sent[0][0] == "alice@example.com"
