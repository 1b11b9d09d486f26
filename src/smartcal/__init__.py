"""smartcal: personal calendar core.

User-scoped calendar events, a rule-based parser for dictated events, and
template-driven suggestions for replacing an event with something else.
"""

from __future__ import annotations

from smartcal.exceptions import (
    CredentialError,
    NotFoundError,
    RecognitionError,
    ScoringError,
    ScoringTimeoutError,
    SmartCalError,
    UnsupportedError,
    ValidationError,
)
from smartcal.models.event import (
    AlternativeEvent,
    AlternativesResponse,
    Event,
    TimeWindow,
)
from smartcal.models.transcript import EventDraft
from smartcal.parser import parse_utterance
from smartcal.resolver import AlternativeResolver
from smartcal.scheduling import accept_alternative, schedule_utterance
from smartcal.store import EventStore, InMemoryEventStore

__version__ = "0.1.0"

__all__ = [
    "AlternativeEvent",
    "AlternativeResolver",
    "AlternativesResponse",
    "CredentialError",
    "Event",
    "EventDraft",
    "EventStore",
    "InMemoryEventStore",
    "NotFoundError",
    "RecognitionError",
    "ScoringError",
    "ScoringTimeoutError",
    "SmartCalError",
    "TimeWindow",
    "UnsupportedError",
    "ValidationError",
    "accept_alternative",
    "parse_utterance",
    "schedule_utterance",
]
