from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel


DataT = TypeVar("DataT")


class Envelope(BaseModel, Generic[DataT]):
    success: bool = True
    data: DataT
    message: str | None = None


class MessageEnvelope(BaseModel):
    success: bool = True
    message: str


class ErrorEnvelope(BaseModel):
    success: bool = False
    error: str
    code: str
    details: Any = None
    correlation_id: str | None = None
