from __future__ import annotations

from collections.abc import Generator
from datetime import timedelta

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from app.core.auth import Identity, create_access_token, decode_identity
from app.core.config import get_settings
from app.main import app


@pytest.fixture()
def client() -> Generator[TestClient, None, None]:
    with TestClient(app) as test_client:
        yield test_client


def _token(role: str, **kwargs) -> str:  # type: ignore[no-untyped-def]
    return create_access_token(Identity(user_id=f"{role}-1", email=f"{role}@acme.io", name=role.title(), role=role), **kwargs)


def test_me_returns_identity_and_capabilities(client: TestClient) -> None:
    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {_token('admin')}"})

    assert response.status_code == 200
    assert response.json()["data"] == {
        "userId": "admin-1",
        "email": "admin@acme.io",
        "name": "Admin",
        "role": "admin",
        "roleLevel": 4,
        "capabilities": [
            "create_record",
            "update_record",
            "delete_record",
            "view_analytics",
            "manage_users",
            "view_all_data",
        ],
    }


def test_me_for_unknown_role_has_no_capabilities(client: TestClient) -> None:
    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {_token('intern')}"})

    assert response.status_code == 200
    assert response.json()["data"]["roleLevel"] == 0
    assert response.json()["data"]["capabilities"] == []


def test_expired_token_is_unauthorized(client: TestClient) -> None:
    token = _token("admin", expires_delta=timedelta(seconds=-30))

    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json()["code"] == "unauthorized"


def test_token_signed_with_other_secret_is_unauthorized(client: TestClient) -> None:
    settings = get_settings()
    token = jwt.encode({"sub": "x", "role": "admin"}, settings.jwt_secret + "-other", algorithm=settings.jwt_algorithm)

    assert client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"}).status_code == 401


def test_token_without_subject_is_unauthorized(client: TestClient) -> None:
    settings = get_settings()
    token = jwt.encode({"role": "admin"}, settings.jwt_secret, algorithm=settings.jwt_algorithm)

    assert client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"}).status_code == 401


def test_bearer_header_wins_over_cookie(client: TestClient) -> None:
    cookie_name = get_settings().auth_cookie_name
    response = client.get(
        "/api/auth/me",
        headers={
            "Authorization": f"Bearer {_token('manager')}",
            "Cookie": f"{cookie_name}={_token('viewer')}",
        },
    )

    assert response.json()["data"]["role"] == "manager"


def test_cookie_used_when_header_is_not_bearer(client: TestClient) -> None:
    cookie_name = get_settings().auth_cookie_name
    response = client.get(
        "/api/auth/me",
        headers={"Authorization": "Basic abc", "Cookie": f"{cookie_name}={_token('analyst')}"},
    )

    assert response.status_code == 200
    assert response.json()["data"]["role"] == "analyst"


@pytest.mark.parametrize("raw", ["", "garbage", "a.b.c"])
def test_decode_identity_rejects_garbage(raw: str) -> None:
    assert decode_identity(raw) is None


def test_decode_identity_accepts_legacy_user_id_claim() -> None:
    settings = get_settings()
    token = jwt.encode({"userId": 17, "role": "viewer"}, settings.jwt_secret, algorithm=settings.jwt_algorithm)

    identity = decode_identity(token)

    assert identity == Identity(user_id="17", email=None, name=None, role="viewer")
