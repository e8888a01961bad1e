"""Output shapes returned to the presentation/API layer."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from .category import Category
from .social import Comment

SentimentLabel = Literal["positive", "neutral", "negative"]


class SentimentSummary(BaseModel):
    """Destination- or entity-level sentiment built from a post batch."""

    score: float = Field(0.0, ge=-1.0, le=1.0)
    label: SentimentLabel = "neutral"
    mention_count: int = 0
    top_comments: list[Comment] = Field(default_factory=list, max_length=5)
    subreddits: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class LodgingStatus(BaseModel):
    """Whether a specific lodging property is talked about positively."""

    is_recommended: bool
    mention_count: int
    sentiment_score: float
    top_quote: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class Recommendation(BaseModel):
    """A ranked entity mined from community posts."""

    category: Category
    name: str
    mention_count: int
    sentiment_score: float
    quotes: list[str] = Field(default_factory=list, max_length=3)
    subreddits: list[str] = Field(default_factory=list)
    upvotes: int = 0
    category_extras: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class LodgingRecommendation(Recommendation):
    category: Literal[Category.LODGING] = Category.LODGING


class AreaRecommendation(Recommendation):
    """category_extras holds characteristic tags (beach, nightlife, ...)."""

    category: Literal[Category.AREA] = Category.AREA

    @property
    def characteristics(self) -> list[str]:
        return list(self.category_extras)

    @property
    def best_for(self) -> list[str]:
        return list(self.category_extras[:3])


class EateryRecommendation(Recommendation):
    """category_extras holds cuisine tags (seafood, local, ...)."""

    category: Literal[Category.EATERY] = Category.EATERY

    @property
    def cuisine(self) -> list[str]:
        return list(self.category_extras)


RECOMMENDATION_TYPES: dict[Category, type[Recommendation]] = {
    Category.LODGING: LodgingRecommendation,
    Category.AREA: AreaRecommendation,
    Category.EATERY: EateryRecommendation,
}
