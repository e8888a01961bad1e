"""
Per-category validity predicates for candidate names.

Template matching is deliberately loose; these predicates decide whether a
matched span looks like a real, specific entity name rather than a sentence
fragment ("We stayed at the Hotel") or a generic phrase ("beach resort").
Each predicate is pure and can be exercised without running extraction.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Optional

from services.mining.extraction.patterns import (
    FAST_FOOD_CHAINS,
    GENERIC_AREA_TERMS,
    GENERIC_EATERY_TERMS,
    GENERIC_LODGING_TERMS,
    GENERIC_NON_ENTITIES,
)
from services.mining.models.category import Category

# First tokens that start a sentence, never a name
SENTENCE_OPENERS: frozenset[str] = frozenset({
    "you", "i", "we", "they", "he", "she", "the", "this", "that", "these",
    "those", "it", "my", "our", "your", "their", "if", "when", "where", "how",
    "why", "what", "staying", "stay", "an", "all", "a", "also", "then", "so",
    "but", "and", "just", "there", "here", "definitely", "highly", "maybe",
    "probably", "really", "honestly", "any", "some", "every", "most",
})


@dataclass(frozen=True)
class ValidityRules:
    max_words: int
    min_length: int
    max_length: int
    clause_pattern: re.Pattern[str]  # sentence-structure words
    denylist: frozenset[str]         # lowercase names and name prefixes


LODGING_RULES = ValidityRules(
    max_words=6,
    min_length=4,
    max_length=50,
    clause_pattern=re.compile(
        r"\b(?:have to|need to|should|from|going to|want to|will be|would be)\b",
        re.IGNORECASE,
    ),
    denylist=frozenset(GENERIC_LODGING_TERMS + GENERIC_NON_ENTITIES),
)

AREA_RULES = ValidityRules(
    max_words=4,
    min_length=4,
    max_length=25,
    clause_pattern=re.compile(
        r"\b(?:have|need|should|from|going|want|will|would|could|might|it|is|was"
        r"|be|been|being|a|an|the|this|that|on|in|at|to|for|with|and|or|but|if"
        r"|when|then|than|i|we|you|they|he|she|my|our|your|their)\b",
        re.IGNORECASE,
    ),
    denylist=frozenset(GENERIC_AREA_TERMS + GENERIC_NON_ENTITIES),
)

EATERY_RULES = ValidityRules(
    max_words=7,
    min_length=4,
    max_length=50,
    clause_pattern=re.compile(
        r"\b(?:i|we|you|they|have|need|want|will|would|should)\b",
        re.IGNORECASE,
    ),
    denylist=frozenset(GENERIC_EATERY_TERMS + GENERIC_NON_ENTITIES + FAST_FOOD_CHAINS),
)


def _is_proper_noun(token: str) -> bool:
    return token[:1].isupper() and any(c.isalpha() for c in token[1:])


def check_name(name: str, rules: ValidityRules) -> Optional[str]:
    """
    Return the reason a name is rejected under rules, or None if it is valid.
    """
    trimmed = " ".join(name.split())
    if not trimmed:
        return "empty"

    words = trimmed.split(" ")
    if len(words) > rules.max_words:
        return "too_many_words"
    if not rules.min_length <= len(trimmed) <= rules.max_length:
        return "length"
    if not trimmed[0].isupper():
        return "not_capitalised"
    if words[0].lower() in SENTENCE_OPENERS:
        return "sentence_opener"
    if rules.clause_pattern.search(trimmed):
        return "clause_word"

    lower = trimmed.lower()
    for term in rules.denylist:
        if lower == term or lower.startswith(term + " "):
            return "denylisted"

    if not any(_is_proper_noun(w) for w in words):
        return "no_proper_noun"
    return None


def is_valid_lodging_name(name: str) -> bool:
    return check_name(name, LODGING_RULES) is None


def is_valid_area_name(name: str) -> bool:
    return check_name(name, AREA_RULES) is None


def is_valid_eatery_name(name: str) -> bool:
    return check_name(name, EATERY_RULES) is None


CATEGORY_RULES: dict[Category, ValidityRules] = {
    Category.LODGING: LODGING_RULES,
    Category.AREA: AREA_RULES,
    Category.EATERY: EATERY_RULES,
}

VALIDATORS: dict[Category, Callable[[str], bool]] = {
    Category.LODGING: is_valid_lodging_name,
    Category.AREA: is_valid_area_name,
    Category.EATERY: is_valid_eatery_name,
}
