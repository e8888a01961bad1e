"""
Candidate-name extraction: text -> validated NameSpans for one category.

Two stages, kept apart so each can be tested alone:
  find_spans()  runs every pattern template, no filtering
  extract()     keeps spans whose canonical name passes the category's
                validity predicate, one span per distinct name
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

from services.mining.extraction.patterns import CATEGORY_TEMPLATES, NameSpan, PatternTemplate
from services.mining.extraction.validators import CATEGORY_RULES, ValidityRules, check_name
from services.mining.models.category import Category, parse_category

logger = logging.getLogger(__name__)


class EntityExtractor:
    """Pattern templates plus a validity gate for one category."""

    def __init__(
        self,
        category: Category,
        templates: Sequence[PatternTemplate],
        rules: ValidityRules,
    ) -> None:
        self.category = category
        self.templates = tuple(templates)
        self.rules = rules

    def __repr__(self) -> str:
        return f"EntityExtractor({self.category.value}, templates={len(self.templates)})"

    def find_spans(self, text: Optional[str]) -> list[NameSpan]:
        """All template matches in text, in template order."""
        if not text:
            return []
        spans: list[NameSpan] = []
        for template in self.templates:
            spans.extend(template.finditer(text))
        return spans

    def extract(
        self,
        text: Optional[str],
        exclude: Callable[[NameSpan], bool] | None = None,
    ) -> list[NameSpan]:
        """
        Valid candidate names in text, ordered by position.

        A name matched by several templates (or several times) is returned
        once, at its earliest position. A span lying inside a longer kept
        span ("Playa" inside "Playa del Carmen") is dropped. `exclude` drops
        spans before the validity check, e.g. the destination itself for areas.
        """
        seen: set[str] = set()
        kept: list[NameSpan] = []
        covered: list[tuple[int, int]] = []
        for span in sorted(self.find_spans(text), key=lambda s: (s.start, -len(s.raw))):
            key = span.name.lower()
            if key in seen:
                continue
            end = span.start + len(span.raw)
            if any(start <= span.start and end <= stop for start, stop in covered):
                continue
            if exclude is not None and exclude(span):
                continue
            reason = check_name(span.name, self.rules)
            if reason is not None:
                logger.debug("Rejected %s candidate %r: %s", self.category.value, span.name, reason)
                continue
            seen.add(key)
            covered.append((span.start, end))
            kept.append(span)
        return kept


EXTRACTORS: dict[Category, EntityExtractor] = {
    category: EntityExtractor(category, CATEGORY_TEMPLATES[category], CATEGORY_RULES[category])
    for category in Category
}


def get_extractor(category: Category | str) -> EntityExtractor:
    """Shared extractor for a category. Raises UnsupportedCategoryError."""
    return EXTRACTORS[parse_category(category)]
