"""Orchestration of the user-facing scheduling flows.

Wires the parser, resolver and store together for the two flows that span
more than one component:

- dictating an event (:func:`schedule_utterance`), and
- replacing an event with one of its suggestions (:func:`accept_alternative`).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from smartcal.auth import SessionContext, require_user
from smartcal.models.event import AlternativeEvent, Event, EventCategory
from smartcal.parser import parse_utterance
from smartcal.store import EventStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AcceptedAlternative:
    """Outcome of promoting a suggestion.

    Attributes:
        promoted: The newly persisted event built from the suggestion.
        original: The replaced event, now ``cancelled``.
    """

    promoted: Event
    original: Event


def schedule_utterance(
    store: EventStore,
    session: SessionContext,
    text: str,
    category: EventCategory = "personal",
    now: datetime | None = None,
) -> Event:
    """Parse a dictated utterance and persist it for the current user.

    Args:
        store: Where the event is saved.
        session: Supplies the current user id.
        text: The utterance.
        category: Category for the new event (default ``"personal"``).
        now: Reference time for the parser.

    Returns:
        The stored event.

    Raises:
        CredentialError: If nobody is logged in.
        RecognitionError: If the utterance does not parse; nothing is saved.
        ValidationError: If *category* is not a known category.
    """
    user_id = require_user(session)
    draft = parse_utterance(text, now=now)
    event = store.create_event(user_id, draft.to_event(category))
    logger.info("Scheduled dictated event '%s' at %s", event.title, event.start_time.isoformat())
    return event


def accept_alternative(
    store: EventStore,
    session: SessionContext,
    original: Event,
    alternative: AlternativeEvent,
) -> AcceptedAlternative:
    """Replace *original* with *alternative* for the current user.

    *original* is updated to ``cancelled`` first, then the suggestion is
    persisted as a scheduled event pointing back at it.  If that create
    fails, *original* is restored to its stored state and the error
    propagates.

    Raises:
        CredentialError: If nobody is logged in.
        NotFoundError: If *original* is not one of the user's events.
        ValidationError: If the promoted event's id is already taken.
    """
    user_id = require_user(session)
    stored = store.get_event(user_id, original.id)

    cancelled = store.update_event(user_id, stored.id, stored.cancelled())
    try:
        promoted = store.create_event(user_id, alternative.promote(stored.id))
    except Exception:
        logger.warning(
            "Could not promote alternative id=%s; restoring id=%s", alternative.id, stored.id
        )
        store.update_event(user_id, stored.id, stored)
        raise

    logger.info(
        "Replaced '%s' (id=%s) with alternative '%s' (id=%s)",
        original.title,
        original.id,
        promoted.title,
        promoted.id,
    )
    return AcceptedAlternative(promoted=promoted, original=cancelled)
