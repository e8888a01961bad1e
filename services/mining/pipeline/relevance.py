"""
Destination relevance gate.

A post that mentions both "Cancun" and "the Four Seasons" may be talking
about the Four Seasons in a different city. A mention is accepted only when
the candidate is tied to the destination by one of, in order:

  1. containment   "Hilton Cancun" contains "cancun"
  2. co-paragraph  both appear in the same paragraph (the title counts as one)
  3. proximity     some occurrence of each lies within PROXIMITY_WINDOW_CHARS
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Optional

from services.mining.models.social import Post

PROXIMITY_WINDOW_CHARS = 200
PRIMARY_KEYWORD_MIN_LEN = 5  # words of 4 chars or fewer are too ambiguous

# Blank lines, or a newline followed by a list marker ("- ", "* ", "• ", "1.")
_PARAGRAPH_BREAK = re.compile(r"\n\s*\n+|\n(?=\s*(?:[-*•]|\d+\.))")


@dataclass(frozen=True)
class DestinationKeywords:
    """Lowercase destination name plus its fallback primary keyword."""
    full: str
    primary: Optional[str] = None

    @classmethod
    def from_destination(cls, destination: str) -> "DestinationKeywords":
        full = " ".join(destination.lower().split())
        if not full:
            raise ValueError("destination must be a non-empty string")
        words = full.split(" ")
        primary = None
        if len(words) > 1:
            candidates = [w for w in words if len(w) >= PRIMARY_KEYWORD_MIN_LEN]
            if candidates:
                # max() keeps the first of equally long words
                primary = max(candidates, key=len)
        return cls(full=full, primary=primary)

    @property
    def terms(self) -> tuple[str, ...]:
        return (self.full,) if self.primary is None else (self.full, self.primary)

    def active_keyword(self, lower_text: str) -> Optional[str]:
        """The full name if it appears in lower_text, else the primary keyword if that does."""
        for term in self.terms:
            if term in lower_text:
                return term
        return None

    def mentioned_in(self, text: str) -> bool:
        return self.active_keyword(text.lower()) is not None


def split_paragraphs(text: str) -> list[str]:
    if not text:
        return []
    return [p for p in _PARAGRAPH_BREAK.split(text) if p.strip()]


def _offsets(haystack: str, needle: str) -> list[int]:
    found = []
    i = haystack.find(needle)
    while i >= 0:
        found.append(i)
        i = haystack.find(needle, i + 1)
    return found


def min_distance(text: str, a: str, b: str) -> Optional[int]:
    """Smallest |offset(a) - offset(b)| over all occurrences, or None if either is absent."""
    a_offsets = _offsets(text, a)
    b_offsets = _offsets(text, b)
    if not a_offsets or not b_offsets:
        return None
    return min(abs(i - j) for i in a_offsets for j in b_offsets)


def is_relevant(candidate_name: str, post: Post, keywords: DestinationKeywords) -> bool:
    """True when candidate_name is contextually about the destination in post."""
    candidate = " ".join(candidate_name.lower().split())
    if not candidate:
        return False

    # 1. containment
    for term in keywords.terms:
        if term in candidate or candidate in term:
            return True

    text = post.full_text.lower()
    keyword = keywords.active_keyword(text)
    if keyword is None:
        return False

    # 2. co-paragraph
    paragraphs: Iterable[str] = [post.title, *split_paragraphs(post.body)]
    for paragraph in paragraphs:
        lower = paragraph.lower()
        if candidate in lower and keyword in lower:
            return True

    # 3. proximity
    distance = min_distance(text, candidate, keyword)
    return distance is not None and distance <= PROXIMITY_WINDOW_CHARS


def is_relevant_to_any(
    candidate_name: str,
    post: Post,
    keyword_sets: Iterable[DestinationKeywords],
) -> bool:
    return any(is_relevant(candidate_name, post, k) for k in keyword_sets)
