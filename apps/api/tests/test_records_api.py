from __future__ import annotations

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.auth import Identity, create_access_token
from app.core.database import Base, get_db
from app.main import app
from app.marketing.models import Review


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


def _headers(role: str = "manager") -> dict[str, str]:
    token = create_access_token(Identity(user_id=f"{role}-7", email=None, name=None, role=role))
    return {"Authorization": f"Bearer {token}"}


RESOURCES = [
    ("/api/campaigns", {"campaign_name": "Spring launch", "channel": "email", "budget": 1500.5, "clicks": 40}, "campaign_name"),
    ("/api/funnels", {"company_name": "Acme", "stage": "Qualified", "probability": 40, "contact_email": "buyer@acme.io"}, "company_name"),
    ("/api/research", {"lead_name": "Globex", "employee_count": 120, "public_or_private": "private"}, "lead_name"),
    ("/api/reviews", {"channel_name": "G2", "sentiment": "positive", "product_review_count": 12}, "channel_name"),
    ("/api/competitions", {"similar_tools": "Initech CRM", "pricing": "$49/seat"}, "similar_tools"),
    ("/api/newsletter-blogs", {"email": "reader@acme.io", "newsletter_name": "Weekly", "status": "active", "time": "08:00"}, "newsletter_name"),
    ("/api/call-interactions", {"name": "Discovery call", "call_duration": 900, "sentiment": "neutral"}, "name"),
    ("/api/chat-interactions", {"name": "Pricing chat", "conversation": "hi", "purchase_intent_score": 72.5}, "name"),
    ("/api/email-interactions", {"subject": "Renewal", "sender_id": "ae@acme.io", "sentiment": "positive"}, "subject"),
]


@pytest.mark.parametrize(("path", "payload", "required"), RESOURCES)
def test_record_lifecycle(client: TestClient, path: str, payload: dict, required: str) -> None:
    created = client.post(path, json=payload, headers=_headers())
    assert created.status_code == 201
    record = created.json()["data"]
    assert record[required] == payload[required]
    record_id = record["id"]

    listed = client.get(path, headers=_headers("viewer"))
    assert listed.status_code == 200
    assert [row["id"] for row in listed.json()["data"]] == [record_id]

    fetched = client.get(f"{path}/{record_id}", headers=_headers("viewer"))
    assert fetched.status_code == 200
    assert fetched.json()["data"]["id"] == record_id

    updated = client.put(f"{path}/{record_id}", json={required: "Renamed"}, headers=_headers())
    assert updated.status_code == 200
    assert updated.json()["data"][required] == "Renamed"
    for key, value in payload.items():
        if key != required and not isinstance(value, str):
            assert updated.json()["data"][key] == value

    deleted = client.delete(f"{path}/{record_id}", headers=_headers("admin"))
    assert deleted.status_code == 200
    assert deleted.json()["success"] is True

    assert client.get(f"{path}/{record_id}", headers=_headers("viewer")).status_code == 404


@pytest.mark.parametrize(("path", "payload", "required"), RESOURCES)
def test_required_field_enforced(client: TestClient, path: str, payload: dict, required: str) -> None:
    body = {key: value for key, value in payload.items() if key != required}

    response = client.post(path, json=body, headers=_headers())

    assert response.status_code == 400
    assert required in {detail["field"] for detail in response.json()["details"]}


def test_missing_record_messages(client: TestClient) -> None:
    response = client.get("/api/campaigns/404", headers=_headers("viewer"))

    assert response.status_code == 404
    assert response.json()["error"] == "Campaign not found"


def test_review_filters_and_default_page_size(client: TestClient, db_session: Session) -> None:
    db_session.add_all(
        [Review(channel_name=f"Channel {index}", sentiment="positive" if index % 2 else "negative") for index in range(120)]
    )
    db_session.add(Review(channel_name="Trustpilot", sentiment="negative"))
    db_session.commit()

    page = client.get("/api/reviews", headers=_headers("viewer"))
    assert len(page.json()["data"]) == 100

    negative = client.get("/api/reviews", params={"sentiment": "negative", "limit": 500}, headers=_headers("viewer"))
    assert len(negative.json()["data"]) == 61

    trustpilot = client.get("/api/reviews", params={"channel_name": "trust"}, headers=_headers("viewer"))
    assert [row["channel_name"] for row in trustpilot.json()["data"]] == ["Trustpilot"]


def test_newsletter_status_filter(client: TestClient) -> None:
    client.post("/api/newsletter-blogs", json={"email": "a@acme.io", "newsletter_name": "A", "status": "active"}, headers=_headers())
    client.post("/api/newsletter-blogs", json={"email": "b@acme.io", "newsletter_name": "B", "status": "paused"}, headers=_headers())

    response = client.get("/api/newsletter-blogs", params={"status": "paused"}, headers=_headers("viewer"))

    assert [row["newsletter_name"] for row in response.json()["data"]] == ["B"]


def test_interaction_sentiment_filter(client: TestClient) -> None:
    client.post("/api/call-interactions", json={"name": "One", "sentiment": "positive"}, headers=_headers())
    client.post("/api/call-interactions", json={"name": "Two", "sentiment": "negative"}, headers=_headers())

    response = client.get("/api/call-interactions", params={"sentiment": "negative"}, headers=_headers("viewer"))

    assert [row["name"] for row in response.json()["data"]] == ["Two"]


def test_records_are_hard_deleted(client: TestClient, db_session: Session) -> None:
    created = client.post("/api/reviews", json={"channel_name": "Capterra"}, headers=_headers()).json()["data"]

    client.delete(f"/api/reviews/{created['id']}", headers=_headers())

    db_session.expire_all()
    assert db_session.get(Review, created["id"]) is None


@pytest.mark.parametrize("role", ["analyst", "viewer"])
def test_marketing_writes_forbidden_for_read_roles(client: TestClient, role: str) -> None:
    response = client.post("/api/campaigns", json={"campaign_name": "Nope"}, headers=_headers(role))
    assert response.status_code == 403


def test_invalid_interaction_time_rejected(client: TestClient) -> None:
    response = client.post("/api/chat-interactions", json={"name": "Late chat", "time": "24:10"}, headers=_headers())

    assert response.status_code == 400
    assert response.json()["details"][0] == {"field": "time", "message": "Invalid time format (use HH:MM or HH:MM:SS)"}


@pytest.mark.parametrize(
    ("path", "payload", "field"),
    [
        ("/api/campaigns", {"campaign_name": "Huge", "impressions": 2_147_483_648}, "impressions"),
        ("/api/research", {"lead_name": "Huge", "employee_count": 10**20}, "employee_count"),
        ("/api/call-interactions", {"name": "Huge", "call_duration": 10**20}, "call_duration"),
    ],
)
def test_integer_fields_beyond_column_range_rejected(client: TestClient, path: str, payload: dict, field: str) -> None:
    response = client.post(path, json=payload, headers=_headers())

    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "validation_error"
    assert body["details"][0]["field"] == field
