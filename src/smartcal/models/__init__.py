"""Data models for smartcal."""

from __future__ import annotations

from smartcal.models.auth import LoginRequest, LoginResponse, RegistrationRequest
from smartcal.models.event import (
    CATEGORIES,
    STATUSES,
    AlternativeEvent,
    AlternativesResponse,
    Event,
    EventCategory,
    EventStatus,
    TimeWindow,
)
from smartcal.models.transcript import EventDraft

__all__ = [
    "CATEGORIES",
    "STATUSES",
    "AlternativeEvent",
    "AlternativesResponse",
    "Event",
    "EventCategory",
    "EventDraft",
    "EventStatus",
    "LoginRequest",
    "LoginResponse",
    "RegistrationRequest",
    "TimeWindow",
]
