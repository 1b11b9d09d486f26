"""Console formatting for drafts and suggestions.

:func:`format_draft` and :func:`format_alternatives` return strings;
:func:`print_draft` and :func:`print_alternatives` are convenience wrappers
writing to stdout.  Confidence scores are shown both as a percentage and as
a low / medium / high bucket.
"""

from __future__ import annotations

import sys
from datetime import datetime
from typing import Literal

from smartcal.models.event import AlternativesResponse, Event
from smartcal.models.transcript import EventDraft

ConfidenceLevel = Literal["low", "medium", "high"]

# Bucket boundaries: below MEDIUM is low, below HIGH is medium.
MEDIUM_THRESHOLD = 0.6
HIGH_THRESHOLD = 0.8

_BANNER_WIDTH = 60
_SEPARATOR = "=" * _BANNER_WIDTH
_DIVIDER = "-" * _BANNER_WIDTH


def confidence_level(confidence: float) -> ConfidenceLevel:
    """Bucket a ``[0, 1]`` confidence score.

    Raises:
        ValueError: If *confidence* is outside ``[0, 1]``.
    """
    if not 0.0 <= confidence <= 1.0:
        raise ValueError(f"confidence must be within [0, 1], got {confidence!r}")
    if confidence >= HIGH_THRESHOLD:
        return "high"
    if confidence >= MEDIUM_THRESHOLD:
        return "medium"
    return "low"


def category_name(category: str) -> str:
    """Display name for a category (``"work"`` -> ``"Work"``)."""
    return category[:1].upper() + category[1:]


def format_draft(draft: EventDraft) -> str:
    """Render a parsed draft."""
    lines = [
        _SEPARATOR,
        "  PARSED EVENT",
        _SEPARATOR,
        f"  Heard:  {draft.utterance}",
        f"  Title:  {draft.title}",
        f"  Start:  {_format_datetime(draft.start_time)}",
        f"  End:    {_format_datetime(draft.end_time)}",
        _SEPARATOR,
    ]
    return "\n".join(lines)


def format_alternatives(event: Event, response: AlternativesResponse) -> str:
    """Render suggestions for *event*, each labelled with its confidence bucket.

    Args:
        event: The event being replaced.
        response: The resolver's output.

    Returns:
        A multi-line string ready for console display.
    """
    lines = [
        _SEPARATOR,
        "  ALTERNATIVES",
        _SEPARATOR,
        f"  For:    {event.title} ({category_name(event.category)})",
        f"  When:   {_format_datetime(event.start_time)} - {_format_time(event.end_time)}",
        f"  Confidence: {_describe_confidence(response.confidence)}",
        f"  {response.reasoning}",
        _DIVIDER,
    ]

    if not response.alternatives:
        lines.append("  No alternatives found.")

    for index, alt in enumerate(response.alternatives, start=1):
        lines.append(f"  [{index}] {alt.title} ({category_name(alt.category)})")
        lines.append(f"      {_format_datetime(alt.start_time)} - {_format_time(alt.end_time)}")
        lines.append(f"      {round(alt.confidence * 100)}% match, {confidence_level(alt.confidence)}")
        lines.append(f"      Why: {alt.reason}")
        if alt.description:
            lines.append(f"      {alt.description}")

    lines.append(_SEPARATOR)
    return "\n".join(lines)


def print_draft(draft: EventDraft) -> None:
    """Format and print a draft to stdout."""
    sys.stdout.write(format_draft(draft) + "\n")


def print_alternatives(event: Event, response: AlternativesResponse) -> None:
    """Format and print suggestions to stdout."""
    sys.stdout.write(format_alternatives(event, response) + "\n")


# ---------------------------------------------------------------------------
# Internal formatters
# ---------------------------------------------------------------------------


def _describe_confidence(confidence: float) -> str:
    level = confidence_level(confidence)
    return f"{level.capitalize()} ({round(confidence * 100)}%)"


def _format_datetime(dt: datetime) -> str:
    """``Jun 25, 2026 3:00 PM``."""
    return f"{dt.strftime('%b')} {dt.day}, {dt.year} {_format_time(dt)}"


def _format_time(dt: datetime) -> str:
    """``3:00 PM``."""
    hour = dt.hour % 12 or 12
    return f"{hour}:{dt.minute:02d} {'AM' if dt.hour < 12 else 'PM'}"
