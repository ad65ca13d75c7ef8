from __future__ import annotations

from typing import Any

from fastapi import Query
from sqlalchemy import ColumnElement

from app.interactions.models import CallInteraction, ChatInteraction, EmailInteraction
from app.interactions.schemas import (
    CallInteractionCreate,
    CallInteractionRead,
    CallInteractionUpdate,
    ChatInteractionCreate,
    ChatInteractionRead,
    ChatInteractionUpdate,
    EmailInteractionCreate,
    EmailInteractionRead,
    EmailInteractionUpdate,
)
from app.platform.records.crud import RecordService, build_record_router


call_interaction_service = RecordService(
    CallInteraction, CallInteractionRead, entity="call_interaction", label="Call interaction"
)
chat_interaction_service = RecordService(
    ChatInteraction, ChatInteractionRead, entity="chat_interaction", label="Chat interaction"
)
email_interaction_service = RecordService(
    EmailInteraction, EmailInteractionRead, entity="email_interaction", label="Email interaction"
)


def sentiment_filter(model: Any):  # type: ignore[no-untyped-def]
    def filters(sentiment: str | None = Query(default=None)) -> list[ColumnElement[bool]]:
        return [model.sentiment == sentiment] if sentiment else []

    return filters


call_interactions_router = build_record_router(
    prefix="/api/call-interactions",
    tag="interactions.calls",
    service=call_interaction_service,
    create_schema=CallInteractionCreate,
    update_schema=CallInteractionUpdate,
    filters=sentiment_filter(CallInteraction),
)

chat_interactions_router = build_record_router(
    prefix="/api/chat-interactions",
    tag="interactions.chats",
    service=chat_interaction_service,
    create_schema=ChatInteractionCreate,
    update_schema=ChatInteractionUpdate,
    filters=sentiment_filter(ChatInteraction),
    default_limit=100,
)

email_interactions_router = build_record_router(
    prefix="/api/email-interactions",
    tag="interactions.emails",
    service=email_interaction_service,
    create_schema=EmailInteractionCreate,
    update_schema=EmailInteractionUpdate,
    filters=sentiment_filter(EmailInteraction),
)
