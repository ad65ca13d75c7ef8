from __future__ import annotations

import logging
import time
from collections.abc import Generator, Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from app.core.config import get_settings


logger = logging.getLogger("app.db")


class Base(DeclarativeBase):
    pass


def _build_engine() -> Engine:
    settings = get_settings()
    if settings.database_url.startswith("sqlite"):
        return create_engine(settings.database_url, connect_args={"check_same_thread": False})
    return create_engine(
        settings.database_url,
        pool_pre_ping=True,
        pool_size=20,
        pool_timeout=2,
        pool_recycle=1800,
    )


engine = _build_engine()
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


@event.listens_for(Engine, "before_cursor_execute")
def _before_cursor_execute(conn, cursor, statement, parameters, context, executemany):  # type: ignore[no-untyped-def]
    conn.info.setdefault("query_started_at", []).append(time.perf_counter())


@event.listens_for(Engine, "after_cursor_execute")
def _after_cursor_execute(conn, cursor, statement, parameters, context, executemany):  # type: ignore[no-untyped-def]
    started_stack: list[float] = conn.info.get("query_started_at", [])
    if not started_stack:
        return
    duration_ms = round((time.perf_counter() - started_stack.pop()) * 1000, 2)
    if duration_ms > get_settings().slow_query_ms:
        logger.warning(
            "db.slow_query",
            extra={"duration_ms": duration_ms, "statement": statement[:500], "rows": cursor.rowcount},
        )


def get_db() -> Generator[Session, None, None]:
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@contextmanager
def atomic(session: Session) -> Iterator[Session]:
    """Commit everything done inside the block, or roll all of it back."""
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
