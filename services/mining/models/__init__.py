"""
Data models for the mining engine.

Inputs (Post, Comment, PostBatch) come from the retrieval layer;
outputs (Recommendation shapes, SentimentSummary, LodgingStatus) go to
the API layer. Internal evidence types live next to the code that
builds them.
"""

from .category import Category, UnsupportedCategoryError, parse_category
from .recommendation import (
    AreaRecommendation,
    EateryRecommendation,
    LodgingRecommendation,
    LodgingStatus,
    Recommendation,
    RECOMMENDATION_TYPES,
    SentimentSummary,
)
from .social import Comment, Post, PostBatch, PostContext, as_batch

__all__ = [
    # Category
    "Category",
    "UnsupportedCategoryError",
    "parse_category",
    # Inputs
    "Post",
    "Comment",
    "PostBatch",
    "PostContext",
    "as_batch",
    # Outputs
    "Recommendation",
    "LodgingRecommendation",
    "AreaRecommendation",
    "EateryRecommendation",
    "RECOMMENDATION_TYPES",
    "SentimentSummary",
    "LodgingStatus",
]
