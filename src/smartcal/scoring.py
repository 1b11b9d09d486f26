"""Confidence scorers for suggested alternatives.

A scorer is any callable ``(event, template) -> float`` returning a value in
``[0, 1]``.  The resolver only ever calls the scorer, so replacing the
placeholder random draw with a real model touches nothing else.

- :class:`RandomScorer` -- uniform draw in ``[0.7, 1.0)``; the default.
- :class:`GeminiScorer` -- asks Google Gemini for a relevance score, with
  an explicit request timeout.
"""

from __future__ import annotations

import json
import logging
import random
from typing import Protocol

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types as genai_types
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from smartcal.config import Settings
from smartcal.exceptions import ScoringError, ScoringTimeoutError
from smartcal.models.event import Event
from smartcal.prompts import build_scoring_system_prompt, build_scoring_user_prompt
from smartcal.templates import AlternativeTemplate

logger = logging.getLogger(__name__)

RANDOM_SCORE_MIN = 0.7
RANDOM_SCORE_MAX = 1.0


class Scorer(Protocol):
    """Assigns a confidence in ``[0, 1]`` to one substitute."""

    def __call__(self, event: Event, template: AlternativeTemplate) -> float: ...


class RandomScorer:
    """Placeholder scorer drawing uniformly from ``[0.7, 1.0)``.

    Args:
        rng: Random source; pass a seeded :class:`random.Random` for
            reproducible draws.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def __call__(self, event: Event, template: AlternativeTemplate) -> float:  # noqa: ARG002
        span = RANDOM_SCORE_MAX - RANDOM_SCORE_MIN
        return RANDOM_SCORE_MIN + self._rng.random() * span


class _ScoreReply(BaseModel):
    """Schema for Gemini's ``response_schema`` parameter."""

    confidence: float = Field(ge=0.0, le=1.0)


class GeminiScorer:
    """Scores substitutes with Google Gemini.

    Every request carries a timeout.  A timeout raises
    :class:`ScoringTimeoutError`; any other API or transport failure raises
    :class:`ScoringError`.  A malformed reply is retried once before
    raising :class:`ScoringError`.

    Args:
        api_key: Google Gemini API key.
        model: Model identifier.  Defaults to ``"gemini-2.0-flash"``.
        timeout: Seconds to wait for each request.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.0-flash",
        timeout: float = 10.0,
    ) -> None:
        self._client = genai.Client(
            api_key=api_key,
            http_options=genai_types.HttpOptions(timeout=int(timeout * 1000)),
        )
        self._model = model
        self._timeout = timeout

    def __call__(self, event: Event, template: AlternativeTemplate) -> float:
        config = genai_types.GenerateContentConfig(
            system_instruction=build_scoring_system_prompt(),
            response_mime_type="application/json",
            response_schema=_ScoreReply,
        )
        user_prompt = build_scoring_user_prompt(event, template)
        logger.debug("Scoring prompt sent to Gemini:\n%s", user_prompt)

        last_error: ScoringError | None = None
        for attempt in range(1, 3):
            raw_text = self._call_api(user_prompt, config)
            logger.debug("Raw scorer response (attempt %d): %s", attempt, raw_text)
            try:
                score = self._parse_response(raw_text)
            except ScoringError as exc:
                last_error = exc
                if attempt == 1:
                    logger.warning("Malformed scorer response, retrying: %s", exc)
                continue
            logger.info(
                "Scored '%s' as substitute for '%s': %.2f",
                template.title,
                event.title,
                score,
            )
            return score

        logger.error("Scorer response malformed after 2 attempts: %s", last_error)
        raise ScoringError(f"Scorer returned unusable responses after 2 attempts: {last_error}")

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _call_api(self, user_prompt: str, config: genai_types.GenerateContentConfig) -> str:
        """Call the Gemini API and return the raw response text.

        Raises:
            ScoringTimeoutError: If the request exceeds the timeout.
            ScoringError: On API-level or transport failures.
        """
        try:
            response = self._client.models.generate_content(
                model=self._model,
                contents=user_prompt,
                config=config,
            )
        except (httpx.TimeoutException, TimeoutError) as exc:
            logger.error("Gemini scoring timed out after %.1fs", self._timeout)
            raise ScoringTimeoutError(
                f"Gemini scoring timed out after {self._timeout:.1f}s"
            ) from exc
        except (genai_errors.APIError, httpx.HTTPError) as exc:
            logger.error("Gemini API error: %s", exc)
            raise ScoringError(f"Gemini scoring call failed: {exc}") from exc

        return response.text or ""

    @staticmethod
    def _parse_response(raw_text: str) -> float:
        """Parse ``{"confidence": <float>}`` out of the raw reply.

        Raises:
            ScoringError: If the reply is empty, not JSON, or the score is
                missing or outside ``[0, 1]``.
        """
        if not raw_text.strip():
            raise ScoringError("Empty response from scorer")
        try:
            return _ScoreReply.model_validate(json.loads(raw_text)).confidence
        except json.JSONDecodeError as exc:
            raise ScoringError(f"Invalid JSON: {exc}") from exc
        except PydanticValidationError as exc:
            raise ScoringError(f"Schema validation failed: {exc}") from exc


def build_scorer(settings: Settings, rng: random.Random | None = None) -> Scorer:
    """Return the scorer selected by *settings*.

    Args:
        settings: Loaded application settings.
        rng: Random source for the random scorer.
    """
    if settings.scorer == "gemini":
        if not settings.gemini_api_key:
            raise ScoringError("Gemini scorer selected but no API key configured")
        return GeminiScorer(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            timeout=settings.scoring_timeout,
        )
    return RandomScorer(rng)
