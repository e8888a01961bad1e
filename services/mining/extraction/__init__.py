"""
Candidate-name extraction for lodging properties, sub-areas and eateries.
"""

from services.mining.extraction.extractor import EXTRACTORS, EntityExtractor, get_extractor
from services.mining.extraction.gazetteer import Gazetteer, GazetteerEntry
from services.mining.extraction.patterns import (
    CATEGORY_TEMPLATES,
    KNOWN_SINGLE_WORD_BRANDS,
    NameSpan,
    PatternTemplate,
)
from services.mining.extraction.validators import (
    VALIDATORS,
    ValidityRules,
    check_name,
    is_valid_area_name,
    is_valid_eatery_name,
    is_valid_lodging_name,
)

__all__ = [
    "EntityExtractor",
    "EXTRACTORS",
    "get_extractor",
    "Gazetteer",
    "GazetteerEntry",
    "NameSpan",
    "PatternTemplate",
    "CATEGORY_TEMPLATES",
    "KNOWN_SINGLE_WORD_BRANDS",
    "ValidityRules",
    "check_name",
    "is_valid_lodging_name",
    "is_valid_area_name",
    "is_valid_eatery_name",
    "VALIDATORS",
]
