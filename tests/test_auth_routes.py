"""
Tests for the /api/v1/auth endpoints through the full application.
"""

import json
from unittest.mock import AsyncMock

from authgate.modules.storage.exchange_store import KEY_PREFIX as CODE_PREFIX
from authgate.modules.storage.refresh_store import KEY_PREFIX as REFRESH_PREFIX

PAYLOAD = json.dumps({"provider": "x", "providerUserId": "42", "nickname": "Ann"})


def seed_code(sync_redis, code="abc"):
    sync_redis.set(f"{CODE_PREFIX}{code}", PAYLOAD, ex=60)


def cookie_header(response):
    return [v for k, v in response.headers.multi_items() if k == "set-cookie"]


def test_login_returns_token_and_sets_refresh_cookie(client, sync_redis):
    seed_code(sync_redis)

    response = client.post("/api/v1/auth/login", json={"authCode": "abc"})

    assert response.status_code == 200
    body = response.json()
    assert body["tokenType"] == "Bearer"
    assert body["expiresIn"] == 900
    assert body["accessToken"]

    (cookie,) = cookie_header(response)
    lowered = cookie.lower()
    assert cookie.startswith("refresh_token=")
    assert "httponly" in lowered
    assert "secure" in lowered
    assert "samesite=strict" in lowered
    assert "path=/api/v1/auth" in lowered
    assert "max-age=1209600" in lowered
    assert len(sync_redis.keys(f"{REFRESH_PREFIX}*")) == 1


def test_login_code_cannot_be_reused(client, sync_redis):
    seed_code(sync_redis)

    assert client.post("/api/v1/auth/login", json={"authCode": "abc"}).status_code == 200
    response = client.post("/api/v1/auth/login", json={"authCode": "abc"})

    assert response.status_code == 401
    assert response.json()["code"] == "UNAUTHORIZED"


def test_login_blank_code_is_400(client):
    response = client.post("/api/v1/auth/login", json={"authCode": ""})

    assert response.status_code == 400
    assert response.json()["code"] == "REQUEST_BIND_ERROR"


def test_login_missing_code_is_400(client):
    response = client.post("/api/v1/auth/login", json={})

    assert response.status_code == 400
    assert response.json()["code"] == "MISSING_REQUEST_VALUE"


def test_refresh_rotates_cookie(client, sync_redis):
    seed_code(sync_redis)
    client.post("/api/v1/auth/login", json={"authCode": "abc"})
    first = client.cookies.get("refresh_token")

    response = client.post("/api/v1/auth/refresh")

    assert response.status_code == 200
    assert response.json()["expiresIn"] == 900
    second = client.cookies.get("refresh_token")
    assert second and second != first
    assert len(sync_redis.keys(f"{REFRESH_PREFIX}*")) == 1


def test_refresh_with_rotated_token_is_401(client, sync_redis):
    seed_code(sync_redis)
    client.post("/api/v1/auth/login", json={"authCode": "abc"})
    stale = client.cookies.get("refresh_token")
    client.post("/api/v1/auth/refresh")

    client.cookies.clear()
    response = client.post("/api/v1/auth/refresh", cookies={"refresh_token": stale})

    assert response.status_code == 401


def test_refresh_without_cookie_is_401(client):
    response = client.post("/api/v1/auth/refresh")

    assert response.status_code == 401
    assert response.json() == {"code": "UNAUTHORIZED", "details": None}


def test_refresh_with_unknown_token_creates_no_key(client, sync_redis):
    response = client.post("/api/v1/auth/refresh", cookies={"refresh_token": "never-issued"})

    assert response.status_code == 401
    assert sync_redis.keys(f"{REFRESH_PREFIX}*") == []


def test_logout_revokes_and_clears_cookie(client, sync_redis):
    seed_code(sync_redis)
    client.post("/api/v1/auth/login", json={"authCode": "abc"})

    response = client.post("/api/v1/auth/logout")

    assert response.status_code == 204
    (cookie,) = cookie_header(response)
    lowered = cookie.lower()
    assert "max-age=0" in lowered
    assert "path=/api/v1/auth" in lowered
    assert "httponly" in lowered
    assert "secure" in lowered
    assert "samesite=strict" in lowered
    assert sync_redis.keys(f"{REFRESH_PREFIX}*") == []


def test_logout_without_cookie_still_succeeds(client):
    response = client.post("/api/v1/auth/logout")

    assert response.status_code == 204
    assert "max-age=0" in cookie_header(response)[0].lower()


def test_logout_when_revoke_fails_still_clears_cookie(client, app):
    app.state.auth_service.logout = AsyncMock(side_effect=RuntimeError("store down"))

    response = client.post("/api/v1/auth/logout", cookies={"refresh_token": "t"})

    assert response.status_code == 204
    assert "max-age=0" in cookie_header(response)[0].lower()
