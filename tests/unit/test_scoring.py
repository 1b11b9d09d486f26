"""Unit tests for the confidence scorers.

All Gemini tests use mocks -- no real API calls are made.
"""

from __future__ import annotations

import json
import random
from unittest.mock import MagicMock, patch

import httpx
import pytest
from google.genai import errors as genai_errors

from smartcal.config import Settings
from smartcal.exceptions import ScoringError, ScoringTimeoutError
from smartcal.models.event import Event
from smartcal.scoring import (
    RANDOM_SCORE_MAX,
    RANDOM_SCORE_MIN,
    GeminiScorer,
    RandomScorer,
    _ScoreReply,
    build_scorer,
)
from smartcal.templates import CATEGORY_TEMPLATES

_TEMPLATE = CATEGORY_TEMPLATES["work"][0]

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _mock_scorer(*response_texts: str) -> GeminiScorer:
    """Create a ``GeminiScorer`` whose API returns *response_texts* in turn."""
    with patch("smartcal.scoring.genai.Client"):
        scorer = GeminiScorer(api_key="fake-key")

    responses = []
    for text in response_texts:
        mock_resp = MagicMock()
        mock_resp.text = text
        responses.append(mock_resp)

    scorer._client.models.generate_content = MagicMock(side_effect=responses)
    return scorer


def _failing_scorer(error: BaseException) -> GeminiScorer:
    with patch("smartcal.scoring.genai.Client"):
        scorer = GeminiScorer(api_key="fake-key", timeout=2.5)
    scorer._client.models.generate_content = MagicMock(side_effect=error)
    return scorer


# ---------------------------------------------------------------------------
# RandomScorer
# ---------------------------------------------------------------------------


class TestRandomScorer:
    def test_scores_within_range(self, work_event: Event) -> None:
        scorer = RandomScorer(random.Random(7))

        scores = [scorer(work_event, _TEMPLATE) for _ in range(500)]

        assert all(RANDOM_SCORE_MIN <= s < RANDOM_SCORE_MAX for s in scores)

    def test_seeded_rng_is_reproducible(self, work_event: Event) -> None:
        first = RandomScorer(random.Random(42))
        second = RandomScorer(random.Random(42))

        assert [first(work_event, _TEMPLATE) for _ in range(3)] == [
            second(work_event, _TEMPLATE) for _ in range(3)
        ]

    def test_extremes_of_rng(self, work_event: Event) -> None:
        low = MagicMock(spec=random.Random)
        low.random.return_value = 0.0

        assert RandomScorer(low)(work_event, _TEMPLATE) == pytest.approx(0.7)


# ---------------------------------------------------------------------------
# GeminiScorer
# ---------------------------------------------------------------------------


class TestGeminiScorerHappyPath:
    def test_returns_confidence(self, work_event: Event) -> None:
        scorer = _mock_scorer(json.dumps({"confidence": 0.64}))

        assert scorer(work_event, _TEMPLATE) == pytest.approx(0.64)

    def test_request_shape(self, work_event: Event) -> None:
        """The call uses JSON mode, the reply schema and the model name."""
        scorer = _mock_scorer(json.dumps({"confidence": 0.9}))

        scorer(work_event, _TEMPLATE)

        call = scorer._client.models.generate_content.call_args
        assert call.kwargs["model"] == "gemini-2.0-flash"
        assert call.kwargs["config"].response_mime_type == "application/json"
        assert call.kwargs["config"].response_schema is _ScoreReply
        assert "Quarterly planning" in call.kwargs["contents"]
        assert _TEMPLATE.title in call.kwargs["contents"]

    def test_client_gets_timeout_in_milliseconds(self) -> None:
        with patch("smartcal.scoring.genai.Client") as client_cls:
            GeminiScorer(api_key="k", timeout=2.5)

        http_options = client_cls.call_args.kwargs["http_options"]
        assert http_options.timeout == 2500


class TestGeminiScorerMalformed:
    def test_retries_once_then_succeeds(self, work_event: Event) -> None:
        scorer = _mock_scorer("not json", json.dumps({"confidence": 0.5}))

        assert scorer(work_event, _TEMPLATE) == pytest.approx(0.5)
        assert scorer._client.models.generate_content.call_count == 2

    @pytest.mark.parametrize(
        "bad",
        ["", "{not json", json.dumps({"confidence": 1.7}), json.dumps({"score": 0.5})],
    )
    def test_two_bad_replies_raise(self, work_event: Event, bad: str) -> None:
        scorer = _mock_scorer(bad, bad)

        with pytest.raises(ScoringError, match="after 2 attempts"):
            scorer(work_event, _TEMPLATE)

    def test_empty_reply_rejected(self) -> None:
        with pytest.raises(ScoringError, match="Empty response"):
            GeminiScorer._parse_response("")


class TestGeminiScorerFailures:
    """Transport failures map to the scoring exceptions."""

    @pytest.mark.parametrize(
        "error",
        [httpx.ReadTimeout("slow"), TimeoutError("slow")],
    )
    def test_timeout(self, work_event: Event, error: BaseException) -> None:
        scorer = _failing_scorer(error)

        with pytest.raises(ScoringTimeoutError, match="2.5s"):
            scorer(work_event, _TEMPLATE)

    def test_api_error(self, work_event: Event) -> None:
        scorer = _failing_scorer(
            genai_errors.APIError(code=503, response_json={"error": "Service unavailable"})
        )

        with pytest.raises(ScoringError) as exc_info:
            scorer(work_event, _TEMPLATE)

        assert not isinstance(exc_info.value, ScoringTimeoutError)

    def test_transport_error(self, work_event: Event) -> None:
        scorer = _failing_scorer(httpx.ConnectError("refused"))

        with pytest.raises(ScoringError, match="call failed"):
            scorer(work_event, _TEMPLATE)


# ---------------------------------------------------------------------------
# build_scorer
# ---------------------------------------------------------------------------


class TestBuildScorer:
    def test_default_is_random(self) -> None:
        assert isinstance(build_scorer(Settings()), RandomScorer)

    def test_gemini_selected(self) -> None:
        settings = Settings(scorer="gemini", gemini_api_key="k", gemini_model="m")

        with patch("smartcal.scoring.genai.Client"):
            scorer = build_scorer(settings)

        assert isinstance(scorer, GeminiScorer)
        assert scorer._model == "m"

    def test_gemini_without_key(self) -> None:
        with pytest.raises(ScoringError, match="no API key"):
            build_scorer(Settings(scorer="gemini"))
