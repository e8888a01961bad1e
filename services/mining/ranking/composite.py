"""
Composite-score ranking of evidence records into Recommendations.

Pure and deterministic: Python's sort is stable, so records with equal
composite scores keep their first-seen order.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Mapping, Optional, Union

from services.mining.models.category import Category, parse_category
from services.mining.models.recommendation import RECOMMENDATION_TYPES, Recommendation
from services.mining.pipeline.aggregation import EvidenceRecord
from services.mining.ranking.configs import RankingConfig, get_ranking_config

logger = logging.getLogger(__name__)

Records = Union[Mapping[str, EvidenceRecord], Iterable[EvidenceRecord]]


def title_case(key: str) -> str:
    """Upper-case the first letter of each space-separated word; leave the rest."""
    return " ".join(w[:1].upper() + w[1:] for w in key.split(" "))


def composite_score(record: EvidenceRecord, config: RankingConfig) -> float:
    return (
        record.mention_count * config.mention_weight
        + record.total_upvotes * config.upvote_weight
        + record.sentiment_score * config.sentiment_weight
    )


def passes_minimum_evidence(record: EvidenceRecord, config: RankingConfig) -> bool:
    if record.mention_count < config.min_mentions:
        return False

    sentiment = record.sentiment_score
    if config.strict_sentiment:
        if sentiment <= config.min_sentiment:
            return False
    elif sentiment < config.min_sentiment:
        return False

    if record.total_upvotes < config.min_upvotes:
        return False

    if config.single_word_brands is not None and record.word_count < 2:
        tokens = re.split(r"[\s-]+", record.normalized_key)
        if not any(t in config.single_word_brands for t in tokens):
            return False
    return True


def rank(
    records: Records,
    category: Category | str,
    limit: Optional[int] = None,
) -> list[Recommendation]:
    """
    Filter, score, sort and truncate evidence records.

    Args:
        records: evidence map (insertion order = first-seen order) or records.
        category: category whose RankingConfig applies.
        limit: optional caller limit; can only lower the category cap.

    Raises:
        UnsupportedCategoryError: unknown category.
        ValueError: negative limit.
    """
    category = parse_category(category)
    if limit is not None and limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")

    config = get_ranking_config(category)
    items = list(records.values()) if isinstance(records, Mapping) else list(records)

    survivors = [r for r in items if passes_minimum_evidence(r, config)]
    survivors.sort(key=lambda r: composite_score(r, config), reverse=True)

    cap = config.cap if limit is None else min(config.cap, limit)
    shape = RECOMMENDATION_TYPES[category]
    results = [
        shape(
            name=title_case(r.normalized_key),
            mention_count=r.mention_count,
            sentiment_score=r.sentiment_score,
            quotes=list(r.quotes),
            subreddits=list(r.subreddits),
            upvotes=r.total_upvotes,
            category_extras=[] if category is Category.LODGING else list(r.category_extras),
        )
        for r in survivors[:cap]
    ]

    logger.debug(
        "Ranked %s: %d records, %d passed filters, %d returned",
        category.value, len(items), len(survivors), len(results),
    )
    return results
