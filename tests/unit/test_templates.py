"""Tests for the static suggestion tables."""

from __future__ import annotations

import logging

import pytest

from smartcal.models.event import CATEGORIES
from smartcal.templates import (
    CATEGORY_TEMPLATES,
    FALLBACK_CATEGORY,
    PERSONALIZED_TEMPLATES,
    templates_for,
)


class TestCategoryTemplates:
    """Shape of the per-category table."""

    def test_every_category_has_a_table(self) -> None:
        assert set(CATEGORY_TEMPLATES) == set(CATEGORIES)

    @pytest.mark.parametrize("category", CATEGORIES)
    def test_three_templates_each(self, category: str) -> None:
        assert len(CATEGORY_TEMPLATES[category]) == 3

    @pytest.mark.parametrize("category", CATEGORIES)
    def test_template_categories_are_valid(self, category: str) -> None:
        for template in CATEGORY_TEMPLATES[category]:
            assert template.category in CATEGORIES
            assert template.reason
            assert template.confidence is None

    def test_cross_category_suggestions(self) -> None:
        """A suggestion's category may differ from the table it sits in."""
        titles = {t.title: t.category for t in CATEGORY_TEMPLATES["work"]}

        assert titles["Professional development"] == "education"

    def test_table_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            CATEGORY_TEMPLATES["work"] = ()  # type: ignore[index]


class TestPersonalizedTemplates:
    def test_every_entry_has_confidence_and_description(self) -> None:
        for template in PERSONALIZED_TEMPLATES:
            assert template.confidence is not None
            assert 0.0 <= template.confidence <= 1.0
            assert template.description

    def test_pool_size(self) -> None:
        assert len(PERSONALIZED_TEMPLATES) == 5


class TestTemplatesFor:
    def test_known_category(self) -> None:
        assert templates_for("health") is CATEGORY_TEMPLATES["health"]

    @pytest.mark.parametrize("category", ["unknown", "", "Work"])
    def test_unknown_category_falls_back(
        self, category: str, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="smartcal.templates"):
            templates = templates_for(category)

        assert templates is CATEGORY_TEMPLATES[FALLBACK_CATEGORY]
        assert "falling back" in caplog.text
