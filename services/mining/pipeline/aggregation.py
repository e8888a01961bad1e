"""
Cross-post evidence aggregation.

Every accepted mention is folded into one EvidenceRecord per normalized
name. A post contributes to a given record at most once, however many
templates (or repeated occurrences) matched the name in it.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Optional

from services.mining.extraction.patterns import NameSpan
from services.mining.models.category import Category
from services.mining.models.social import Post
from services.mining.nlp.lexicon import AREA_CHARACTERISTIC_PATTERNS, CUISINE_PATTERNS
from services.mining.nlp.sentiment import score_sentiment
from services.mining.nlp.tags import detect_keyword_groups

logger = logging.getLogger(__name__)

MAX_QUOTES = 3
MIN_QUOTE_LEN = 21  # quotes of 20 chars or fewer carry no context
QUOTE_CHARS_BEFORE = 30
QUOTE_CHARS_AFTER: dict[Category, int] = {
    Category.LODGING: 100,
    Category.AREA: 100,
    Category.EATERY: 80,
}

KEYWORD_GROUPS: dict[Category, dict[str, tuple[re.Pattern[str], ...]]] = {
    Category.LODGING: {},
    Category.AREA: AREA_CHARACTERISTIC_PATTERNS,
    Category.EATERY: CUISINE_PATTERNS,
}


def normalize_key(name: str) -> str:
    """Trim, collapse internal whitespace, lowercase."""
    return " ".join(name.split()).lower()


@dataclass
class CandidateMention:
    """One extracted name in one post, before it is folded."""
    span: NameSpan
    post: Post


@dataclass
class EvidenceRecord:
    normalized_key: str
    display_name: str
    mention_count: int = 0
    sentiment_sum: float = 0.0
    quotes: list[str] = field(default_factory=list)
    subreddits: list[str] = field(default_factory=list)      # first-seen order
    total_upvotes: int = 0
    category_extras: list[str] = field(default_factory=list)  # first-seen order
    post_keys: set[str] = field(default_factory=set, repr=False)

    @property
    def sentiment_score(self) -> float:
        if self.mention_count == 0:
            return 0.0
        return self.sentiment_sum / self.mention_count

    @property
    def word_count(self) -> int:
        return len(self.normalized_key.split())


def extract_quote(text: str, raw_name: str, chars_after: int = 100) -> Optional[str]:
    """
    Context window around the first occurrence of raw_name in text.

    Exact-case match is preferred; falls back to a case-insensitive search.
    Returns None when the name is absent or the window is too short.
    """
    if not text or not raw_name:
        return None
    index = text.find(raw_name)
    if index < 0:
        index = text.lower().find(raw_name.lower())
    if index < 0:
        return None
    start = max(0, index - QUOTE_CHARS_BEFORE)
    end = min(len(text), index + len(raw_name) + chars_after)
    quote = text[start:end].strip()
    if len(quote) < MIN_QUOTE_LEN:
        return None
    return quote


def _add_unique(items: list[str], values) -> None:
    for value in values:
        if value and value not in items:
            items.append(value)


def merge(
    records: dict[str, EvidenceRecord],
    mention: CandidateMention,
    category: Category,
    sentiment: Callable[[Post], float] | None = None,
) -> bool:
    """
    Fold one accepted mention into records (mutated in place).

    Returns False when the mention's post already contributed this key.
    `sentiment` lets a caller memoise per-post scoring; by default the
    post's full text is scored directly.
    """
    post = mention.post
    key = normalize_key(mention.span.name)
    if not key:
        return False

    record = records.get(key)
    if record is None:
        record = EvidenceRecord(normalized_key=key, display_name=mention.span.name)
        records[key] = record

    post_key = post.dedup_key
    if post_key in record.post_keys:
        return False
    record.post_keys.add(post_key)

    text = post.full_text
    record.mention_count += 1
    _add_unique(record.subreddits, [post.subreddit])
    record.sentiment_sum += sentiment(post) if sentiment is not None else score_sentiment(text)
    record.total_upvotes += post.score

    if len(record.quotes) < MAX_QUOTES:
        quote = extract_quote(text, mention.span.raw, QUOTE_CHARS_AFTER[category])
        if quote is not None and quote not in record.quotes:
            record.quotes.append(quote)

    groups = KEYWORD_GROUPS[category]
    if groups:
        _add_unique(record.category_extras, detect_keyword_groups(text, groups))
    return True


class EvidenceAggregator:
    """
    Owns the evidence map for one engine call.

    Sentiment is scored once per post and reused for every name the post
    mentions.
    """

    def __init__(self, category: Category) -> None:
        self.category = category
        self.records: dict[str, EvidenceRecord] = {}
        self._sentiment_cache: dict[str, float] = {}

    def __len__(self) -> int:
        return len(self.records)

    def _post_sentiment(self, post: Post) -> float:
        key = post.dedup_key
        if key not in self._sentiment_cache:
            self._sentiment_cache[key] = score_sentiment(post.full_text)
        return self._sentiment_cache[key]

    def merge(self, mention: CandidateMention) -> bool:
        merged = merge(self.records, mention, self.category, self._post_sentiment)
        if not merged:
            logger.debug(
                "Skipped repeat mention of %r in post %s",
                mention.span.name, mention.post.dedup_key,
            )
        return merged
