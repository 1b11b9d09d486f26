"""Tests for the dictation and accept-alternative flows."""

from __future__ import annotations

from datetime import datetime

import pytest

from smartcal.auth import StaticSession
from smartcal.exceptions import CredentialError, NotFoundError, RecognitionError, ValidationError
from smartcal.models.event import AlternativeEvent, Event
from smartcal.resolver import AlternativeResolver
from smartcal.scheduling import accept_alternative, schedule_utterance
from smartcal.store import InMemoryEventStore


class TestScheduleUtterance:
    def test_dictated_event_is_stored(
        self, store: InMemoryEventStore, alice: StaticSession, now: datetime
    ) -> None:
        event = schedule_utterance(store, alice, "Meeting with Bob on June 25 at 3pm", now=now)

        assert event.title == "Meeting with Bob"
        assert event.category == "personal"
        assert event.status == "scheduled"
        assert event.start_time == datetime(2026, 6, 25, 15, 0)
        assert store.list_events("alice") == [event]

    def test_category_override(
        self, store: InMemoryEventStore, alice: StaticSession, now: datetime
    ) -> None:
        event = schedule_utterance(store, alice, "Run on May 3 at 7am", category="health", now=now)

        assert event.category == "health"

    def test_unparseable_stores_nothing(
        self, store: InMemoryEventStore, alice: StaticSession, now: datetime
    ) -> None:
        with pytest.raises(RecognitionError):
            schedule_utterance(store, alice, "Party on Smarch 5", now=now)

        assert store.list_events("alice") == []

    def test_unknown_category(
        self, store: InMemoryEventStore, alice: StaticSession, now: datetime
    ) -> None:
        with pytest.raises(ValidationError):
            schedule_utterance(store, alice, "lunch", category="brunch", now=now)  # type: ignore[arg-type]

    def test_requires_login(self, store: InMemoryEventStore, now: datetime) -> None:
        with pytest.raises(CredentialError):
            schedule_utterance(store, StaticSession(None), "lunch", now=now)


class TestAcceptAlternative:
    @pytest.fixture()
    def stored(self, store: InMemoryEventStore, work_event: Event) -> Event:
        return store.create_event("alice", work_event)

    @pytest.fixture()
    def alternative(self, stored: Event) -> AlternativeEvent:
        return AlternativeResolver().generate_alternatives(stored).alternatives[0]

    def test_promotes_and_cancels(
        self,
        store: InMemoryEventStore,
        alice: StaticSession,
        stored: Event,
        alternative: AlternativeEvent,
    ) -> None:
        result = accept_alternative(store, alice, stored, alternative)

        assert result.promoted.id == alternative.id
        assert result.promoted.title == alternative.title
        assert result.promoted.is_alternative is True
        assert result.promoted.original_event_id == stored.id
        assert result.promoted.status == "scheduled"
        assert result.original.id == stored.id
        assert result.original.status == "cancelled"

    def test_both_events_persisted(
        self,
        store: InMemoryEventStore,
        alice: StaticSession,
        stored: Event,
        alternative: AlternativeEvent,
    ) -> None:
        accept_alternative(store, alice, stored, alternative)

        events = {e.id: e for e in store.list_events("alice")}
        assert set(events) == {stored.id, alternative.id}
        assert events[stored.id].status == "cancelled"
        assert events[alternative.id].is_alternative is True

    def test_original_otherwise_unchanged(
        self,
        store: InMemoryEventStore,
        alice: StaticSession,
        stored: Event,
        alternative: AlternativeEvent,
    ) -> None:
        result = accept_alternative(store, alice, stored, alternative)

        assert result.original == stored.cancelled()

    def test_other_users_original(
        self,
        store: InMemoryEventStore,
        stored: Event,
        alternative: AlternativeEvent,
    ) -> None:
        """Nothing is created when the original belongs to someone else."""
        with pytest.raises(NotFoundError):
            accept_alternative(store, StaticSession("bob"), stored, alternative)

        assert store.list_events("bob") == []
        assert store.get_event("alice", stored.id).status == "scheduled"

    def test_accepting_twice_fails(
        self,
        store: InMemoryEventStore,
        alice: StaticSession,
        stored: Event,
        alternative: AlternativeEvent,
    ) -> None:
        accept_alternative(store, alice, stored, alternative)

        with pytest.raises(ValidationError) as exc_info:
            accept_alternative(store, alice, stored, alternative)

        assert exc_info.value.field == "id"
        assert store.get_event("alice", stored.id).status == "cancelled"
        assert len(store.list_events("alice")) == 2

    def test_failed_promotion_restores_original(
        self,
        store: InMemoryEventStore,
        alice: StaticSession,
        stored: Event,
        alternative: AlternativeEvent,
        work_event: Event,
    ) -> None:
        """When the promoted event cannot be created the original stays scheduled."""
        store.create_event("bob", work_event.with_id(alternative.id))

        with pytest.raises(ValidationError) as exc_info:
            accept_alternative(store, alice, stored, alternative)

        assert exc_info.value.field == "id"
        assert store.list_events("alice") == [stored]
        assert store.get_event("alice", stored.id).status == "scheduled"
