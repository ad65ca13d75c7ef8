from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.auth import Identity, create_access_token
from app.core.database import Base, get_db
from app.logging import ConsoleLogFormatter, JsonLogFormatter
from app.main import app


@pytest.fixture()
def db_session() -> Generator[Session, None, None]:
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client(db_session: Session) -> Generator[TestClient, None, None]:
    def override_get_db() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _headers(role: str) -> dict[str, str]:
    token = create_access_token(Identity(user_id=f"{role}-9", email=None, name=None, role=role))
    return {"Authorization": f"Bearer {token}", "X-Correlation-Id": "abc-123"}


def test_logs_include_correlation_id_for_http(client: TestClient, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)

    response = client.get("/api/website-visits/42", headers=_headers("viewer"))
    assert response.status_code == 404

    records = [record for record in caplog.records if record.name == "app.request" and record.getMessage() == "http.request"]
    assert records
    assert any(
        getattr(record, "correlation_id", None) == "abc-123"
        and getattr(record, "method", None) == "GET"
        and getattr(record, "path", None) == "/api/website-visits/{id}"
        and getattr(record, "status_code", None) == 404
        and isinstance(getattr(record, "duration_ms", None), float)
        for record in records
    )


def test_authorization_denial_is_logged_without_token(client: TestClient, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)
    headers = _headers("analyst")

    response = client.delete("/api/campaigns/1", headers=headers)
    assert response.status_code == 403

    denials = [record for record in caplog.records if record.name == "app.authz" and record.getMessage() == "authz.denied"]
    assert denials
    denial = denials[-1]
    assert getattr(denial, "user_id", None) == "analyst-9"
    assert getattr(denial, "role", None) == "analyst"
    assert getattr(denial, "reason", None) == "delete_record"
    assert getattr(denial, "correlation_id", None) == "abc-123"
    token = headers["Authorization"].split(" ", 1)[1]
    assert all(token not in record.getMessage() for record in caplog.records)


def test_record_writes_are_logged(client: TestClient, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)

    response = client.post("/api/competitions", json={"similar_tools": "Hooli"}, headers=_headers("manager"))
    assert response.status_code == 201

    writes = [record for record in caplog.records if record.name == "app.records" and record.getMessage() == "record.create"]
    assert writes
    assert getattr(writes[-1], "entity", None) == "competition"
    assert getattr(writes[-1], "record_id", None) == response.json()["data"]["id"]


def test_json_formatter_keeps_known_fields_only() -> None:
    record = logging.makeLogRecord(
        {
            "name": "app.analytics",
            "levelname": "INFO",
            "levelno": logging.INFO,
            "msg": "journey.built",
            "identifier": "alice@acme.io",
            "event_count": 3,
            "password": "hunter2",
            "correlation_id": "corr-json",
        }
    )

    payload = json.loads(JsonLogFormatter().format(record))

    assert payload["msg"] == "journey.built"
    assert payload["logger"] == "app.analytics"
    assert payload["correlation_id"] == "corr-json"
    assert payload["fields"] == {"identifier": "alice@acme.io", "event_count": 3}


def test_json_formatter_truncates_errors() -> None:
    record = logging.makeLogRecord({"name": "app.db", "msg": "db.slow_query", "error": "e" * 2000})

    payload = json.loads(JsonLogFormatter().format(record))

    assert len(payload["fields"]["error"]) == 500


def test_console_formatter_renders_single_line() -> None:
    record = logging.makeLogRecord(
        {
            "name": "app.records",
            "levelname": "INFO",
            "msg": "record.create",
            "entity": "review",
            "record_id": 7,
            "correlation_id": "corr-console",
        }
    )

    line = ConsoleLogFormatter().format(record)

    assert line == "INFO    [corr-console] app.records: record.create entity=review record_id=7"
