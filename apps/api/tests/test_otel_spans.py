from __future__ import annotations

import datetime as dt
from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.auth import Identity, create_access_token
from app.core.database import Base, get_db
from app.main import app
from app.otel import setup_inmemory_otel
from app.tracking.models import Contact, StoreVisit


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
def span_exporter() -> InMemorySpanExporter:
    exporter = setup_inmemory_otel("lifecycle-api")
    exporter.clear()
    return exporter


@pytest.fixture()
def client(db_session: Session) -> Generator[TestClient, None, None]:
    def override_get_db() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _headers(role: str, correlation_id: str) -> dict[str, str]:
    token = create_access_token(Identity(user_id=f"{role}-o", email=None, name=None, role=role))
    return {"Authorization": f"Bearer {token}", "X-Correlation-Id": correlation_id}


def test_request_span_contains_correlation_id(client: TestClient, span_exporter: InMemorySpanExporter) -> None:
    response = client.post(
        "/api/research",
        json={"lead_name": "Umbrella"},
        headers=_headers("manager", "otel-corr-1"),
    )
    assert response.status_code == 201

    spans = span_exporter.get_finished_spans()
    assert spans
    assert any(span.attributes.get("correlation_id") == "otel-corr-1" for span in spans)


def test_journey_span_records_event_count(
    client: TestClient,
    db_session: Session,
    span_exporter: InMemorySpanExporter,
) -> None:
    db_session.add_all(
        [
            Contact(contact_identifier="span@acme.io"),
            StoreVisit(owner_contact="span@acme.io", number_of_visits=1, location="Oslo", date=dt.date(2024, 2, 2), time=dt.time(10)),
        ]
    )
    db_session.commit()

    response = client.get("/api/contacts/journey/span@acme.io", headers=_headers("viewer", "otel-journey-1"))
    assert response.status_code == 200

    journey_spans = [span for span in span_exporter.get_finished_spans() if span.name == "analytics.journey"]
    assert journey_spans
    assert journey_spans[-1].attributes.get("journey.identifier") == "span@acme.io"
    assert journey_spans[-1].attributes.get("journey.event_count") == 1


def test_analytics_spans_emitted(client: TestClient, span_exporter: InMemorySpanExporter) -> None:
    assert client.get("/api/analytics/funnel", headers=_headers("analyst", "otel-funnel")).status_code == 200
    assert client.get("/api/dashboard/summary", headers=_headers("viewer", "otel-dash")).status_code == 200

    names = {span.name for span in span_exporter.get_finished_spans()}
    assert {"analytics.funnel", "analytics.dashboard_summary"} <= names
