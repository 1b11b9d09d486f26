"""Sources of spoken utterances.

The parser does not care how an utterance arrives.  A
:class:`TranscriptSource` is anything that asynchronously yields one
utterance string, or fails with
:class:`~smartcal.exceptions.UnsupportedError` when no recogniser is
available or :class:`~smartcal.exceptions.RecognitionError` when nothing
usable was heard.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from pathlib import Path
from typing import Protocol, runtime_checkable

from smartcal.exceptions import RecognitionError, UnsupportedError
from smartcal.models.transcript import EventDraft
from smartcal.parser import parse_utterance

logger = logging.getLogger(__name__)


@runtime_checkable
class TranscriptSource(Protocol):
    """Produces a single utterance."""

    async def listen(self) -> str:
        """Return one utterance.

        Raises:
            UnsupportedError: If the platform has no speech capability.
            RecognitionError: If nothing usable was recognised.
        """
        ...


class StaticTranscriptSource:
    """A source that always yields the same, already-known text."""

    def __init__(self, text: str) -> None:
        self._text = text

    async def listen(self) -> str:
        if not self._text.strip():
            raise RecognitionError("No speech detected", self._text)
        return self._text


class FileTranscriptSource:
    """A source that reads one utterance from a UTF-8 text file.

    Args:
        path: File holding the utterance.  Surrounding whitespace and
            newlines are stripped.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    async def listen(self) -> str:
        if not self._path.exists():
            raise FileNotFoundError(f"Transcript file not found: {self._path}")
        text = await asyncio.to_thread(self._path.read_text, encoding="utf-8")
        text = text.strip()
        if not text:
            raise RecognitionError(f"Transcript file is empty: {self._path}")
        return text


class UnavailableTranscriptSource:
    """Stand-in used where no speech recogniser exists."""

    async def listen(self) -> str:
        raise UnsupportedError("Speech recognition is not supported on this platform")


async def capture_draft(source: TranscriptSource, now: datetime | None = None) -> EventDraft:
    """Await one utterance from *source* and parse it into a draft.

    Args:
        source: Where the utterance comes from.
        now: Reference time passed to :func:`~smartcal.parser.parse_utterance`.

    Raises:
        UnsupportedError: Propagated from the source.
        RecognitionError: From the source, or if the text does not parse.
    """
    utterance = await source.listen()
    logger.info("Captured utterance: %r", utterance)
    return parse_utterance(utterance, now=now)
