"""Data model for the output of the transcript parser.

Validation happens when the draft becomes an
:class:`~smartcal.models.event.Event`.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from smartcal.models.event import Event, EventCategory


@dataclass(frozen=True)
class EventDraft:
    """A best-effort event parsed from a single utterance.

    Attributes:
        title: Text preceding the first "on"/"for", or the whole utterance.
        start_time: Parsed start (falls back to the parse's "now").
        end_time: Always ``start_time`` plus one hour.
        utterance: The original text, kept for display and retries.
    """

    title: str
    start_time: datetime
    end_time: datetime
    utterance: str = ""

    def to_event(self, category: EventCategory = "personal") -> Event:
        """Build a scheduled :class:`Event` from this draft.

        Args:
            category: Category for the new event (default ``"personal"``).

        Raises:
            ValidationError: If *category* is not a known category.
        """
        return Event.from_raw(
            {
                "title": self.title,
                "start_time": self.start_time,
                "end_time": self.end_time,
                "category": category,
                "status": "scheduled",
            }
        )
