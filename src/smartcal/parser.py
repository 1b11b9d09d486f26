"""Rule-based parser turning a spoken utterance into an event draft.

Recognises utterances shaped like ``Meeting with Bob on June 25 at 3pm``:

- the **title** is the text before the first standalone "on" or "for";
- the **date** is a ``<Month> <Day>`` pair right after "on";
- the **time** is ``<hour>[:<minute>] [am|pm]`` right after "at".

Anything outside that grammar is refused rather than guessed at: a relative
date ("tomorrow", "next week", "on Friday"), an "on" fragment that is not a
``<Month> <Day>`` pair, or a date or time that is present but impossible all
raise :class:`~smartcal.exceptions.RecognitionError`.  Only a fragment that
is entirely absent falls back to the current date/time.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta

from smartcal.exceptions import RecognitionError
from smartcal.models.transcript import EventDraft

logger = logging.getLogger(__name__)

# Every draft lasts exactly one hour.
DRAFT_DURATION = timedelta(minutes=60)

# Title: everything before the first whitespace-delimited "on" / "for".
_TITLE_RE = re.compile(r"^(.*?)\s+(?:on|for)\s", re.IGNORECASE)

# Date: "on June 25", "on Jun 5th".
_DATE_RE = re.compile(r"\bon\s+([A-Za-z]+)\s+(\d{1,2})(?:st|nd|rd|th)?\b", re.IGNORECASE)

# Time: "at 3pm", "at 3 pm", "at 10:30", "at 7:15 am", "at 3 p.m.".
_TIME_RE = re.compile(
    r"\bat\s+(\d{1,2})(?::(\d{2}))?\s*([ap]\.?m\.?)?(?![a-z0-9])",
    re.IGNORECASE,
)

# Any "on <word>"; checked only when _DATE_RE found nothing.
_ON_FRAGMENT_RE = re.compile(r"\bon\s+(\S+)", re.IGNORECASE)

_WEEKDAYS = r"(?:mon|tues|wednes|thurs|fri|satur|sun)day"

# Relative dates the grammar cannot place on a calendar.
_RELATIVE_RE = re.compile(
    r"\b(?:today|tonight|tomorrow|yesterday|" + _WEEKDAYS + r"|"
    r"(?:next|this|last|coming)\s+(?:week|weekend|month|year)|"
    r"in\s+\d+\s+(?:day|week|month)s?)\b",
    re.IGNORECASE,
)

_MONTH_NAMES = (
    "january",
    "february",
    "march",
    "april",
    "may",
    "june",
    "july",
    "august",
    "september",
    "october",
    "november",
    "december",
)

_MONTHS: dict[str, int] = {}
for _number, _name in enumerate(_MONTH_NAMES, start=1):
    _MONTHS[_name] = _number
    _MONTHS[_name[:3]] = _number
_MONTHS["sept"] = 9


def parse_utterance(text: str, now: datetime | None = None) -> EventDraft:
    """Parse one free-text utterance into an :class:`EventDraft`.

    Args:
        text: The utterance, e.g. ``"Meeting with Bob on June 25 at 3pm"``.
        now: Reference time used for the current year and as the fallback
            start.  Defaults to :meth:`datetime.now`.

    Returns:
        A draft whose ``end_time`` is ``start_time`` plus one hour.

    Raises:
        RecognitionError: If the utterance is empty, uses a relative date,
            has an "on" fragment that is not ``<Month> <Day>``, or names an
            unknown month or an impossible day, hour, or minute.
    """
    utterance = (text or "").strip()
    if not utterance:
        raise RecognitionError("Could not recognise event details: empty utterance", text or "")

    now = now or datetime.now()

    title_match = _TITLE_RE.match(utterance)
    title = title_match.group(1).strip() if title_match else utterance

    start = now
    date_match = _DATE_RE.search(utterance)
    if date_match:
        start = _resolve_date(date_match.group(1), date_match.group(2), now, utterance)
    else:
        _reject_unplaceable_date(utterance)

    time_match = _TIME_RE.search(utterance)
    if time_match:
        start = _apply_time(
            start,
            time_match.group(1),
            time_match.group(2),
            time_match.group(3),
            utterance,
        )

    logger.debug(
        "Parsed utterance %r -> title=%r start=%s (date=%s, time=%s)",
        utterance,
        title,
        start.isoformat(),
        "matched" if date_match else "fallback",
        "matched" if time_match else "fallback",
    )

    return EventDraft(
        title=title,
        start_time=start,
        end_time=start + DRAFT_DURATION,
        utterance=utterance,
    )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _reject_unplaceable_date(utterance: str) -> None:
    """Refuse date wording that the grammar cannot turn into a calendar day."""
    relative = _RELATIVE_RE.search(utterance)
    if relative:
        raise RecognitionError(
            f"Relative dates are not supported: {relative.group(0)!r}", utterance
        )
    fragment = _ON_FRAGMENT_RE.search(utterance)
    if fragment:
        raise RecognitionError(
            f"Expected 'on <Month> <Day>', got 'on {fragment.group(1)}'", utterance
        )


def _resolve_date(month_word: str, day_text: str, now: datetime, utterance: str) -> datetime:
    """Build midnight of ``<month> <day>`` in *now*'s year."""
    month = _MONTHS.get(month_word.lower())
    if month is None:
        raise RecognitionError(f"Unknown month: {month_word!r}", utterance)

    try:
        return datetime(now.year, month, int(day_text), tzinfo=now.tzinfo)
    except ValueError as exc:
        raise RecognitionError(
            f"Invalid date: {month_word} {day_text}", utterance
        ) from exc


def _apply_time(
    base: datetime,
    hour_text: str,
    minute_text: str | None,
    meridiem: str | None,
    utterance: str,
) -> datetime:
    """Set the time of day on *base*; "pm" or "p.m." shifts hours below 12 by 12."""
    hour = int(hour_text)
    minute = int(minute_text) if minute_text else 0

    if meridiem and meridiem.lower().startswith("p") and hour < 12:
        hour += 12

    if hour > 23 or minute > 59:
        raise RecognitionError(
            f"Invalid time: {hour_text}{':' + minute_text if minute_text else ''}"
            f"{' ' + meridiem if meridiem else ''}",
            utterance,
        )

    return base.replace(hour=hour, minute=minute, second=0, microsecond=0)
