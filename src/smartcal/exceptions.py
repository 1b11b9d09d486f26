"""Custom exceptions for the smartcal core.

Every failure a caller is expected to act on has its own type so it can be
inspected rather than parsed out of a message.

Exception hierarchy::

    SmartCalError              (base for all smartcal errors)
    +-- ValidationError        (missing / malformed field, carries ``field``)
    +-- NotFoundError          (id absent or owned by another user)
    +-- RecognitionError       (utterance could not become an event draft)
    +-- UnsupportedError       (no transcript source available)
    +-- CredentialError        (login / registration / session failures)
    +-- ScoringError           (remote scorer transport or reply failure)
        +-- ScoringTimeoutError
"""

from __future__ import annotations


class SmartCalError(Exception):
    """Base exception for smartcal errors."""


class ValidationError(SmartCalError):
    """Raised when a required field is missing or has the wrong shape.

    Raised before anything reaches the store.

    Attributes:
        field: Name of the offending field (e.g. ``"end_time"``), or
            ``None`` when the input as a whole was unusable.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class NotFoundError(SmartCalError):
    """Raised when an event id is absent or not owned by the caller.

    Cross-user access reports this rather than a distinct "forbidden" error.

    Attributes:
        event_id: The id that could not be resolved.
    """

    def __init__(self, event_id: str) -> None:
        super().__init__(f"Event not found: {event_id}")
        self.event_id = event_id


class RecognitionError(SmartCalError):
    """Raised when a transcript cannot be parsed into a usable draft.

    The caller should prompt the user to try again.

    Attributes:
        utterance: The text that failed to parse.
    """

    def __init__(self, message: str, utterance: str = "") -> None:
        super().__init__(message)
        self.utterance = utterance


class UnsupportedError(SmartCalError):
    """Raised when no transcript source is available on this platform."""


class CredentialError(SmartCalError):
    """Raised by the credential gate or when no user is logged in."""


class ScoringError(SmartCalError):
    """Raised when a remote confidence scorer fails.

    Kept distinct from an empty suggestion list: it means the scorer could
    not be reached or answered with something unusable.
    """


class ScoringTimeoutError(ScoringError):
    """Raised when a remote confidence scorer does not answer in time."""
