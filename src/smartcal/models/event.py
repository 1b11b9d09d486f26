"""Pydantic models for calendar events and their suggested alternatives.

- :class:`Event` -- a persisted, user-owned calendar entry.
- :class:`AlternativeEvent` -- an ephemeral, scored substitute for an event.
- :class:`AlternativesResponse` -- the resolver's ranked output.
- :class:`TimeWindow` -- an explicit availability slot.

All models are frozen: an update is a whole replacement record, never an
in-place mutation.  Raw input goes through :meth:`from_raw`, which converts
pydantic failures into :class:`~smartcal.exceptions.ValidationError` naming
the offending field.
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Literal, Self, get_args

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_serializer, field_validator
from pydantic import ValidationError as PydanticValidationError

from smartcal.exceptions import ValidationError

EventCategory = Literal[
    "work",
    "personal",
    "health",
    "social",
    "education",
    "entertainment",
    "shopping",
    "travel",
    "other",
]

EventStatus = Literal["scheduled", "completed", "missed", "cancelled", "alternative"]

CATEGORIES: tuple[str, ...] = get_args(EventCategory)
STATUSES: tuple[str, ...] = get_args(EventStatus)


def generate_event_id() -> str:
    """Return a fresh opaque event identifier."""
    return uuid.uuid4().hex


def _check_window(start: datetime | None, end: datetime) -> datetime:
    """Ensure *end* falls strictly after *start*."""
    if start is None:
        # start_time already failed validation; let that error stand alone.
        return end
    if (start.tzinfo is None) != (end.tzinfo is None):
        raise ValueError("start and end must both be naive or both be timezone-aware")
    if end <= start:
        raise ValueError(
            f"end ({end.isoformat()}) must be after start ({start.isoformat()})"
        )
    return end


def _from_pydantic(exc: PydanticValidationError) -> ValidationError:
    """Convert the first pydantic error into a smartcal ValidationError."""
    first = exc.errors()[0]
    loc = first.get("loc") or ()
    field = str(loc[0]) if loc else None
    message = first.get("msg", "invalid value")
    if field:
        message = f"{field}: {message}"
    return ValidationError(message, field=field)


class RawInputModel(BaseModel):
    """Base for models built from untrusted field values."""

    @classmethod
    def from_raw(cls, data: Mapping[str, Any]) -> Self:
        """Build a model from raw field values.

        Args:
            data: Field name to value mapping.  Datetimes may be given as
                ``datetime`` objects or ISO 8601 strings.

        Returns:
            The validated model.

        Raises:
            ValidationError: If a field is missing, malformed, outside its
                enumeration, unknown, or a time window is inverted.  The
                ``field`` attribute names the first offending field.
        """
        try:
            return cls.model_validate(dict(data))
        except PydanticValidationError as exc:
            raise _from_pydantic(exc) from exc


# ---------------------------------------------------------------------------
# Shared fields
# ---------------------------------------------------------------------------


class _ScheduledItem(RawInputModel):
    """Fields common to events and alternatives.

    Timestamps are truncated to whole seconds and serialise as ISO 8601
    with a ``T`` separator.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", str_strip_whitespace=True)

    id: str = Field(default_factory=generate_event_id, min_length=1)
    title: str = Field(min_length=1)
    description: str | None = None
    start_time: datetime
    end_time: datetime
    location: str | None = None
    category: EventCategory

    @field_validator("description", "location", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("start_time", "end_time")
    @classmethod
    def _truncate_to_seconds(cls, value: datetime) -> datetime:
        return value.replace(microsecond=0)

    @field_validator("end_time")
    @classmethod
    def _end_after_start(cls, value: datetime, info: ValidationInfo) -> datetime:
        return _check_window(info.data.get("start_time"), value)

    @field_serializer("start_time", "end_time", when_used="json")
    def _serialize_datetime(self, value: datetime) -> str:
        return value.isoformat(timespec="seconds")


# ---------------------------------------------------------------------------
# AlternativeEvent
# ---------------------------------------------------------------------------


class AlternativeEvent(_ScheduledItem):
    """A scored candidate substitute for an event.

    Never persisted directly; :meth:`promote` turns it into a real
    :class:`Event` once the user picks it.

    Attributes:
        confidence: Relevance score in ``[0, 1]``.
        reason: Short human-readable justification.
    """

    confidence: float = Field(ge=0.0, le=1.0)
    reason: str = Field(min_length=1)

    def promote(self, original_event_id: str) -> Event:
        """Turn this suggestion into a scheduled event.

        Args:
            original_event_id: Id of the event this alternative replaces.

        Returns:
            An :class:`Event` carrying every field of this alternative
            (including its id) with ``status="scheduled"``,
            ``is_alternative=True`` and the back-reference set.
        """
        fields = self.model_dump(exclude={"confidence", "reason"})
        return Event(
            **fields,
            status="scheduled",
            is_alternative=True,
            original_event_id=original_event_id,
        )


# ---------------------------------------------------------------------------
# Event
# ---------------------------------------------------------------------------


class Event(_ScheduledItem):
    """A user-owned, time-boxed calendar entry.

    Attributes:
        status: Lifecycle status (default ``"scheduled"``).
        color: Optional cosmetic display tag.
        alternatives: Alternatives attached when the event was created.
            Never written to the persisted record.
        is_alternative: Whether this event was promoted from a suggestion.
        original_event_id: Id of the event it replaced, if promoted.
    """

    status: EventStatus = "scheduled"
    color: str | None = None
    alternatives: tuple[AlternativeEvent, ...] = ()
    is_alternative: bool = False
    original_event_id: str | None = None

    def with_id(self, event_id: str) -> Event:
        """Return a copy of this event under a different id."""
        return self.model_copy(update={"id": event_id})

    def cancelled(self) -> Event:
        """Return a copy of this event with ``status="cancelled"``."""
        return self.model_copy(update={"status": "cancelled"})

    def to_record(self, user_id: str) -> dict[str, Any]:
        """Serialise to the persisted, JSON-ready record shape.

        Args:
            user_id: Owner of the event.

        Returns:
            A flat dict with snake_case keys and ISO 8601 timestamps.
        """
        record = self.model_dump(mode="json", exclude={"alternatives"})
        return {"user_id": user_id, **record}

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Event:
        """Rebuild an event from a persisted record (owner key ignored).

        Raises:
            ValidationError: If the record does not describe a valid event.
        """
        return cls.from_raw({k: v for k, v in record.items() if k != "user_id"})


# ---------------------------------------------------------------------------
# Resolver input / output
# ---------------------------------------------------------------------------


class TimeWindow(RawInputModel):
    """An explicit availability slot; ``end`` must be after ``start``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    start: datetime
    end: datetime

    @field_validator("end")
    @classmethod
    def _end_after_start(cls, value: datetime, info: ValidationInfo) -> datetime:
        return _check_window(info.data.get("start"), value)


class AlternativesResponse(BaseModel):
    """Ranked suggestions plus the resolver's aggregate explanation.

    Attributes:
        alternatives: Suggested substitutes, best first.
        reasoning: Sentence explaining the suggestions.
        confidence: Aggregate confidence in ``[0, 1]``.
    """

    model_config = ConfigDict(frozen=True)

    alternatives: list[AlternativeEvent] = Field(default_factory=list)
    reasoning: str
    confidence: float = Field(ge=0.0, le=1.0)
