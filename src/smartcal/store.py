"""User-scoped event storage.

:class:`EventStore` is the contract the rest of smartcal consumes;
:class:`InMemoryEventStore` implements it over persisted-shape records
(see :meth:`~smartcal.models.event.Event.to_record`).

Every operation is filtered by the caller's user id.  An event owned by
someone else is reported exactly like a missing one, with
:class:`~smartcal.exceptions.NotFoundError`.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from typing import Any, Protocol

from smartcal.exceptions import NotFoundError, ValidationError
from smartcal.models.event import Event

logger = logging.getLogger(__name__)

EventInput = Event | Mapping[str, Any]


class EventStore(Protocol):
    """CRUD contract for a user's events."""

    def list_events(self, user_id: str) -> list[Event]: ...

    def get_event(self, user_id: str, event_id: str) -> Event: ...

    def create_event(self, user_id: str, event: EventInput) -> Event: ...

    def update_event(self, user_id: str, event_id: str, event: EventInput) -> Event: ...

    def delete_event(self, user_id: str, event_id: str) -> None: ...


def _require_user_id(user_id: str) -> str:
    if not isinstance(user_id, str) or not user_id.strip():
        raise ValidationError("user_id: must be a non-empty string", field="user_id")
    return user_id


def _coerce_event(event: EventInput) -> Event:
    """Accept a ready :class:`Event` or raw field values."""
    if isinstance(event, Event):
        return event
    if isinstance(event, Mapping):
        return Event.from_raw(event)
    raise ValidationError(
        f"event must be an Event or a mapping, got {type(event).__name__}"
    )


class InMemoryEventStore:
    """Thread-safe in-memory :class:`EventStore`.

    Events are kept as persisted records keyed by event id, so what comes
    back out has been through the same serialisation a database row
    would.  Concurrent writes to one id resolve as last write wins.
    """

    def __init__(self) -> None:
        self._records: dict[str, dict[str, Any]] = {}
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def list_events(self, user_id: str) -> list[Event]:
        """Return all of *user_id*'s events, earliest start first."""
        _require_user_id(user_id)
        with self._lock:
            records = [r for r in self._records.values() if r["user_id"] == user_id]
        events = [Event.from_record(r) for r in records]
        events.sort(key=lambda e: (e.start_time, e.id))
        logger.debug("Listed %d event(s) for user %s", len(events), user_id)
        return events

    def get_event(self, user_id: str, event_id: str) -> Event:
        """Return one event owned by *user_id*.

        Raises:
            NotFoundError: If the id is unknown or owned by another user.
        """
        _require_user_id(user_id)
        with self._lock:
            record = self._owned_record(user_id, event_id)
        return Event.from_record(record)

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def create_event(self, user_id: str, event: EventInput) -> Event:
        """Persist a new event for *user_id*.

        Args:
            user_id: Owner of the new event.
            event: An :class:`Event` or raw field values.

        Returns:
            The event as stored.

        Raises:
            ValidationError: If the input is not a valid event or its id is
                already taken.
        """
        _require_user_id(user_id)
        new_event = _coerce_event(event)
        record = new_event.to_record(user_id)
        with self._lock:
            if new_event.id in self._records:
                raise ValidationError(
                    f"id: an event with id {new_event.id!r} already exists", field="id"
                )
            self._records[new_event.id] = record
        logger.info(
            "Created event '%s' (id=%s) for user %s",
            new_event.title,
            new_event.id,
            user_id,
        )
        return Event.from_record(record)

    def update_event(self, user_id: str, event_id: str, event: EventInput) -> Event:
        """Replace one of *user_id*'s events wholesale.

        The *event_id* argument wins over any id carried by *event*.

        Raises:
            ValidationError: If the replacement is not a valid event.
            NotFoundError: If the id is unknown or owned by another user.
        """
        _require_user_id(user_id)
        replacement = _coerce_event(event).with_id(event_id)
        record = replacement.to_record(user_id)
        with self._lock:
            self._owned_record(user_id, event_id)
            self._records[event_id] = record
        logger.info("Updated event '%s' (id=%s)", replacement.title, event_id)
        return Event.from_record(record)

    def delete_event(self, user_id: str, event_id: str) -> None:
        """Delete one of *user_id*'s events.

        Raises:
            NotFoundError: If the id is unknown or owned by another user.
        """
        _require_user_id(user_id)
        with self._lock:
            self._owned_record(user_id, event_id)
            del self._records[event_id]
        logger.info("Deleted event id=%s", event_id)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _owned_record(self, user_id: str, event_id: str) -> dict[str, Any]:
        """Look up a record owned by *user_id*; caller holds the lock."""
        record = self._records.get(event_id)
        if record is None or record["user_id"] != user_id:
            if record is not None:
                logger.warning(
                    "User %s attempted to access event %s owned by another user",
                    user_id,
                    event_id,
                )
            raise NotFoundError(event_id)
        return record
