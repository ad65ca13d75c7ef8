from __future__ import annotations

import datetime as dt
from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.analytics.service import bucket_counts, bucket_start
from app.core.auth import Identity, create_access_token
from app.core.database import Base, get_db
from app.main import app
from app.tracking.models import LoginSignup, StoreVisit, WebsiteVisit


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


def _headers(role: str = "analyst") -> dict[str, str]:
    token = create_access_token(Identity(user_id=f"{role}-3", email=None, name=None, role=role))
    return {"Authorization": f"Bearer {token}"}


def _website(owner: str | None, day: dt.date, index: int, **extra: object) -> WebsiteVisit:
    return WebsiteVisit(
        ip=f"10.1.{index // 250}.{index % 250}",
        owner_contact=owner,
        number_of_visits=1,
        website_duration=10,
        date=day,
        time=dt.time(9, 0),
        **extra,
    )


def _store(owner: str, day: dt.date, **extra: object) -> StoreVisit:
    return StoreVisit(owner_contact=owner, number_of_visits=1, location="Lyon", date=day, time=dt.time(11, 0), **extra)


def _signup(email: str, day: dt.date, **extra: object) -> LoginSignup:
    return LoginSignup(username=email.split("@")[0], email=email, location="Lyon", date=day, time=dt.time(12, 0), **extra)


@pytest.fixture()
def funnel_data(db_session: Session) -> None:
    day = dt.date(2024, 4, 10)
    rows: list[object] = []
    for index in range(200):
        rows.append(_website(f"visitor{index}@acme.io", day, index))
    # Repeat visits and anonymous traffic raise totals without adding unique visitors.
    rows.append(_website("visitor0@acme.io", day, 300))
    rows.append(_website(None, day, 301))
    for index in range(50):
        rows.append(_store(f"visitor{index}@acme.io", day))
    rows.append(_store("visitor1@acme.io", day))
    for index in range(10):
        rows.append(_signup(f"visitor{index}@acme.io", day))
    rows.append(_website("gone@acme.io", day, 302, deleted_at=dt.datetime(2024, 4, 11, tzinfo=dt.timezone.utc)))
    rows.append(_website("old@acme.io", dt.date(2023, 1, 1), 303))
    db_session.add_all(rows)
    db_session.commit()


def test_funnel_reports_stages_and_metrics(client: TestClient, funnel_data: None) -> None:
    response = client.get(
        "/api/analytics/funnel",
        params={"startDate": "2024-04-01", "endDate": "2024-04-30"},
        headers=_headers(),
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["stages"] == [
        {"name": "Website Visits", "uniqueVisitors": 200, "totalVisits": 202, "conversionRate": 100},
        {"name": "Store Visits", "uniqueVisitors": 50, "totalVisits": 51, "conversionRate": 25.0},
        {"name": "Signups", "uniqueVisitors": 10, "totalVisits": 10, "conversionRate": 20.0},
    ]
    assert data["metrics"] == {"websiteToStore": 25.0, "storeToSignup": 20.0, "overallConversion": 5.0}


def test_funnel_without_window_includes_older_rows(client: TestClient, funnel_data: None) -> None:
    response = client.get("/api/analytics/funnel", headers=_headers("manager"))

    assert response.json()["data"]["stages"][0]["uniqueVisitors"] == 201


def test_funnel_on_empty_store_is_all_zero(client: TestClient) -> None:
    data = client.get("/api/analytics/funnel", headers=_headers()).json()["data"]

    assert [stage["conversionRate"] for stage in data["stages"]] == [100, 0, 0]
    assert data["metrics"] == {"websiteToStore": 0, "storeToSignup": 0, "overallConversion": 0}


@pytest.mark.parametrize("path", ["/api/analytics/funnel", "/api/analytics/trends"])
def test_analytics_requires_view_analytics(client: TestClient, path: str) -> None:
    assert client.get(path, headers=_headers("viewer")).status_code == 403
    assert client.get(path).status_code == 401
    assert client.get(path, headers=_headers("admin")).status_code == 200


def test_bucket_start() -> None:
    wednesday = dt.date(2024, 5, 15)
    assert bucket_start(wednesday, "daily") == wednesday
    assert bucket_start(wednesday, "weekly") == dt.date(2024, 5, 13)
    assert bucket_start(dt.date(2024, 5, 13), "weekly") == dt.date(2024, 5, 13)
    assert bucket_start(wednesday, "monthly") == dt.date(2024, 5, 1)


def test_bucket_counts_merges_days() -> None:
    daily = [(dt.date(2024, 5, 12), 1), (dt.date(2024, 5, 13), 2), (dt.date(2024, 5, 19), 4)]

    weekly = bucket_counts(daily, "weekly")

    assert [(point.date, point.count) for point in weekly] == [(dt.date(2024, 5, 6), 1), (dt.date(2024, 5, 13), 6)]


def test_trends_by_granularity(client: TestClient, db_session: Session) -> None:
    db_session.add_all(
        [
            _website("a@acme.io", dt.date(2024, 5, 13), 1),
            _website("b@acme.io", dt.date(2024, 5, 13), 2),
            _website("c@acme.io", dt.date(2024, 5, 15), 3),
            _website("d@acme.io", dt.date(2024, 6, 2), 4),
            _store("a@acme.io", dt.date(2024, 5, 14)),
            _signup("a@acme.io", dt.date(2024, 5, 20)),
        ]
    )
    db_session.commit()

    daily = client.get("/api/analytics/trends", headers=_headers()).json()["data"]
    assert daily["websiteVisits"] == [
        {"date": "2024-05-13", "count": 2},
        {"date": "2024-05-15", "count": 1},
        {"date": "2024-06-02", "count": 1},
    ]
    assert daily["storeVisits"] == [{"date": "2024-05-14", "count": 1}]
    assert daily["signups"] == [{"date": "2024-05-20", "count": 1}]

    weekly = client.get("/api/analytics/trends", params={"granularity": "weekly"}, headers=_headers()).json()["data"]
    assert weekly["websiteVisits"] == [
        {"date": "2024-05-13", "count": 3},
        {"date": "2024-05-27", "count": 1},
    ]

    monthly = client.get(
        "/api/analytics/trends",
        params={"granularity": "monthly", "startDate": "2024-05-01", "endDate": "2024-05-31"},
        headers=_headers(),
    ).json()["data"]
    assert monthly["websiteVisits"] == [{"date": "2024-05-01", "count": 3}]


def test_trends_rejects_unknown_granularity(client: TestClient) -> None:
    response = client.get("/api/analytics/trends", params={"granularity": "hourly"}, headers=_headers())

    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "granularity"


def test_dashboard_summary(client: TestClient, db_session: Session) -> None:
    base = dt.datetime(2024, 6, 1, 8, 0, tzinfo=dt.timezone.utc)
    rows: list[object] = []
    for index in range(6):
        rows.append(_website(f"w{index % 3}@acme.io", dt.date(2024, 6, 1), index, created_at=base + dt.timedelta(minutes=index)))
    for index in range(3):
        rows.append(_store(f"w{index % 2}@acme.io", dt.date(2024, 6, 1), created_at=base + dt.timedelta(minutes=10 + index)))
    rows.append(_signup("w0@acme.io", dt.date(2024, 6, 1), created_at=base + dt.timedelta(minutes=30)))
    rows.append(
        _signup("ghost@acme.io", dt.date(2024, 6, 1), created_at=base + dt.timedelta(hours=5), deleted_at=base + dt.timedelta(hours=6))
    )
    db_session.add_all(rows)
    db_session.commit()

    response = client.get("/api/dashboard/summary", headers=_headers("viewer"))

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["metrics"] == {
        "totalWebsiteVisits": 6,
        "uniqueWebsiteVisitors": 3,
        "totalStoreVisits": 3,
        "uniqueStoreVisitors": 2,
        "totalSignups": 1,
        "uniqueSignups": 1,
        "websiteToStoreConversion": 66.67,
        "storeToSignupConversion": 50.0,
    }

    activities = data["recentActivities"]
    assert len(activities) == 9
    assert activities[0]["type"] == "signup"
    assert activities[0]["identifier"] == "w0@acme.io"
    assert [activity["type"] for activity in activities[1:4]] == ["store_visit"] * 3
    website_ips = [activity["identifier"] for activity in activities if activity["type"] == "website_visit"]
    assert website_ips == ["10.1.0.5", "10.1.0.4", "10.1.0.3", "10.1.0.2", "10.1.0.1"]


def test_dashboard_requires_identity(client: TestClient) -> None:
    assert client.get("/api/dashboard/summary").status_code == 401
