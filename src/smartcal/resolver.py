"""Alternative suggestion resolver.

Produces ranked substitutes for an event from the static tables in
:mod:`smartcal.templates`.  Nothing here is inferred: titles, categories and
reasons come from the tables, and confidences come from a pluggable
:class:`~smartcal.scoring.Scorer`.

With the default :class:`~smartcal.scoring.RandomScorer` the resolver never
raises; unknown categories fall back to the ``"other"`` table.  A remote
scorer may raise :class:`~smartcal.exceptions.ScoringError`, which is
propagated unchanged.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable, Sequence
from datetime import datetime

from smartcal.models.event import (
    AlternativeEvent,
    AlternativesResponse,
    Event,
    TimeWindow,
    generate_event_id,
)
from smartcal.scoring import RandomScorer, Scorer
from smartcal.templates import PERSONALIZED_TEMPLATES, AlternativeTemplate, templates_for

logger = logging.getLogger(__name__)

ALTERNATIVE_COUNT = 3
BASELINE_CONFIDENCE = 0.85
PERSONALIZED_CONFIDENCE = 0.92

_BASELINE_REASONING = (
    'Based on your {category} event "{title}", I\'ve suggested some alternatives '
    "that align with your interests and schedule."
)
_PERSONALIZED_REASONING = (
    "I've analyzed your preferences and the available time slot to suggest "
    "activities that match your interests and schedule."
)


class AlternativeResolver:
    """Builds :class:`AlternativesResponse` objects for events.

    Args:
        scorer: Confidence scorer for the baseline method.  Defaults to a
            fresh :class:`RandomScorer`.
        id_factory: Produces ids for suggestions.  Defaults to
            :func:`~smartcal.models.event.generate_event_id`.
    """

    def __init__(
        self,
        scorer: Scorer | None = None,
        id_factory: Callable[[], str] = generate_event_id,
    ) -> None:
        self._scorer = scorer or RandomScorer()
        self._id_factory = id_factory

    def generate_alternatives(self, event: Event) -> AlternativesResponse:
        """Suggest three substitutes occupying *event*'s time slot.

        Templates are taken from the event's category table in order,
        wrapping around when the table holds fewer than three.  Each
        suggestion keeps the original start/end and is described as an
        alternative to the original title.

        Args:
            event: The event to replace.

        Returns:
            Three alternatives with scorer-assigned confidences, a
            reasoning sentence naming the event, and an aggregate
            confidence of 0.85.
        """
        templates = templates_for(event.category)
        chosen = itertools.islice(itertools.cycle(templates), ALTERNATIVE_COUNT)

        alternatives = [
            self._build(
                template,
                start=event.start_time,
                end=event.end_time,
                description=f"Alternative to: {event.title}",
                confidence=self._scorer(event, template),
            )
            for template in chosen
        ]

        logger.info(
            "Generated %d alternative(s) for '%s' (%s)",
            len(alternatives),
            event.title,
            event.category,
        )
        return AlternativesResponse(
            alternatives=alternatives,
            reasoning=_BASELINE_REASONING.format(category=event.category, title=event.title),
            confidence=BASELINE_CONFIDENCE,
        )

    def suggest_smart_alternatives(
        self,
        event: Event,
        preferences: Sequence[str],
        window: TimeWindow,
    ) -> AlternativesResponse:
        """Suggest the top three personalised substitutes for *window*.

        The pool is ranked by each template's static confidence alone;
        *preferences* are recorded in the log but do not affect the order.

        Args:
            event: The event to replace.
            preferences: Free-form user preference tags.
            window: Slot the suggestions should occupy.

        Returns:
            Three alternatives timed to *window*, with the template's own
            confidence, and an aggregate confidence of 0.92.
        """
        # TODO: rank by overlap with preference tags once tagged templates exist.
        logger.debug(
            "Personalised suggestions for '%s' with preferences %s",
            event.title,
            list(preferences),
        )
        ranked = _rank_by_static_confidence(PERSONALIZED_TEMPLATES)

        alternatives = [
            self._build(
                template,
                start=window.start,
                end=window.end,
                description=template.description,
                confidence=template.confidence or 0.0,
            )
            for template in ranked[:ALTERNATIVE_COUNT]
        ]

        logger.info(
            "Generated %d personalised alternative(s) for '%s'",
            len(alternatives),
            event.title,
        )
        return AlternativesResponse(
            alternatives=alternatives,
            reasoning=_PERSONALIZED_REASONING,
            confidence=PERSONALIZED_CONFIDENCE,
        )

    def _build(
        self,
        template: AlternativeTemplate,
        *,
        start: datetime,
        end: datetime,
        description: str | None,
        confidence: float,
    ) -> AlternativeEvent:
        return AlternativeEvent(
            id=self._id_factory(),
            title=template.title,
            description=description,
            start_time=start,
            end_time=end,
            category=template.category,
            confidence=confidence,
            reason=template.reason,
        )


def _rank_by_static_confidence(
    templates: Sequence[AlternativeTemplate],
) -> list[AlternativeTemplate]:
    """Sort templates by their static confidence, highest first (stable)."""
    return sorted(templates, key=lambda t: t.confidence or 0.0, reverse=True)
