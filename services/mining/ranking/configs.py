"""
Per-category ranking configuration.

composite = mentions * mention_weight
          + upvotes  * upvote_weight
          + sentiment * sentiment_weight

Minimum-evidence filters run before scoring; survivors are sorted by
composite (stable) and truncated to `cap`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from services.mining.extraction.patterns import KNOWN_SINGLE_WORD_BRANDS
from services.mining.models.category import Category, parse_category

MIN_UPVOTES = 5


@dataclass(frozen=True)
class RankingConfig:
    mention_weight: float
    upvote_weight: float
    sentiment_weight: float
    cap: int
    min_mentions: int = 1
    min_sentiment: float = 0.0
    # True: sentiment must be strictly above min_sentiment
    strict_sentiment: bool = False
    min_upvotes: int = 0
    # Single-word names must be a recognised brand token (lowercase)
    single_word_brands: Optional[frozenset[str]] = None


LODGING_RANKING = RankingConfig(
    mention_weight=10,
    upvote_weight=0.1,
    sentiment_weight=20,
    cap=10,
    strict_sentiment=True,
    min_upvotes=MIN_UPVOTES,
    single_word_brands=KNOWN_SINGLE_WORD_BRANDS,
)

AREA_RANKING = RankingConfig(
    mention_weight=15,
    upvote_weight=0.1,
    sentiment_weight=10,
    cap=15,
)

EATERY_RANKING = RankingConfig(
    mention_weight=10,
    upvote_weight=0.1,
    sentiment_weight=15,
    cap=10,
)

RANKING_CONFIGS: dict[Category, RankingConfig] = {
    Category.LODGING: LODGING_RANKING,
    Category.AREA: AREA_RANKING,
    Category.EATERY: EATERY_RANKING,
}


def get_ranking_config(category: Category | str) -> RankingConfig:
    return RANKING_CONFIGS[parse_category(category)]
