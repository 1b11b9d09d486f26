"""Static suggestion templates used by the alternative resolver.

Two fixed tables:

- :data:`CATEGORY_TEMPLATES` -- three substitutes per event category, used
  by :meth:`~smartcal.resolver.AlternativeResolver.generate_alternatives`.
  A template's category is the category of the *suggestion*, which may
  differ from the key it is filed under.
- :data:`PERSONALIZED_TEMPLATES` -- a larger pool carrying a static
  confidence, used by
  :meth:`~smartcal.resolver.AlternativeResolver.suggest_smart_alternatives`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType

from smartcal.models.event import EventCategory

logger = logging.getLogger(__name__)

FALLBACK_CATEGORY: EventCategory = "other"


@dataclass(frozen=True)
class AlternativeTemplate:
    """One canned substitute.

    Attributes:
        title: Title of the suggested event.
        category: Category of the suggested event.
        reason: Short justification shown to the user.
        description: Optional description; when ``None`` the resolver
            writes "Alternative to: <original title>".
        confidence: Static confidence, used only by the personalised pool.
    """

    title: str
    category: EventCategory
    reason: str
    description: str | None = None
    confidence: float | None = None


def _t(title: str, category: EventCategory, reason: str) -> AlternativeTemplate:
    return AlternativeTemplate(title=title, category=category, reason=reason)


CATEGORY_TEMPLATES: MappingProxyType[str, tuple[AlternativeTemplate, ...]] = MappingProxyType(
    {
        "work": (
            _t("Remote work session", "work", "Flexible work arrangement"),
            _t("Focus time - deep work", "work", "Productive alternative"),
            _t("Professional development", "education", "Skill building opportunity"),
        ),
        "personal": (
            _t("Self-care time", "health", "Wellness alternative"),
            _t("Hobby time", "entertainment", "Personal fulfillment"),
            _t("Home organization", "personal", "Productive personal time"),
        ),
        "health": (
            _t("Home workout", "health", "Flexible fitness option"),
            _t("Meditation session", "health", "Mental wellness"),
            _t("Healthy meal prep", "health", "Nutrition focus"),
        ),
        "social": (
            _t("Video call with friends", "social", "Virtual social connection"),
            _t("Social media catch-up", "social", "Digital socializing"),
            _t("Plan future meetup", "social", "Social planning"),
        ),
        "education": (
            _t("Online course session", "education", "Digital learning"),
            _t("Reading time", "education", "Self-directed learning"),
            _t("Research project", "education", "Knowledge building"),
        ),
        "entertainment": (
            _t("Movie night at home", "entertainment", "Home entertainment"),
            _t("Gaming session", "entertainment", "Digital entertainment"),
            _t("Creative project", "entertainment", "Creative expression"),
        ),
        "shopping": (
            _t("Online shopping", "shopping", "Digital shopping"),
            _t("Budget planning", "personal", "Financial management"),
            _t("Wishlist organization", "shopping", "Shopping planning"),
        ),
        "travel": (
            _t("Virtual travel experience", "entertainment", "Digital exploration"),
            _t("Travel planning", "travel", "Future trip preparation"),
            _t("Local exploration", "travel", "Local adventure"),
        ),
        "other": (
            _t("Personal project time", "personal", "Personal development"),
            _t("Relaxation time", "health", "Stress relief"),
            _t("Creative exploration", "entertainment", "Creative outlet"),
        ),
    }
)

PERSONALIZED_TEMPLATES: tuple[AlternativeTemplate, ...] = (
    AlternativeTemplate(
        title="Fitness workout",
        description="Stay active with a home workout",
        category="health",
        confidence=0.9,
        reason="Matches your fitness goals",
    ),
    AlternativeTemplate(
        title="Learning session",
        description="Dive into a new skill or topic",
        category="education",
        confidence=0.85,
        reason="Aligns with your learning interests",
    ),
    AlternativeTemplate(
        title="Creative project",
        description="Express yourself through art or writing",
        category="entertainment",
        confidence=0.8,
        reason="Fits your creative side",
    ),
    AlternativeTemplate(
        title="Social connection",
        description="Reach out to friends or family",
        category="social",
        confidence=0.75,
        reason="Maintains social connections",
    ),
    AlternativeTemplate(
        title="Productivity boost",
        description="Tackle important tasks efficiently",
        category="work",
        confidence=0.88,
        reason="Maximizes your productivity",
    ),
)


def templates_for(category: str) -> tuple[AlternativeTemplate, ...]:
    """Return the templates filed under *category*.

    Unknown or empty categories fall back to the ``"other"`` list instead
    of failing.
    """
    templates = CATEGORY_TEMPLATES.get(category)
    if templates is None:
        logger.warning(
            "No templates for category %r, falling back to %r",
            category,
            FALLBACK_CATEGORY,
        )
        return CATEGORY_TEMPLATES[FALLBACK_CATEGORY]
    return templates
