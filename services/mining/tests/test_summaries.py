"""
Unit tests for the display helpers in summaries.py.
"""

from __future__ import annotations

import pytest

from services.mining.models.recommendation import SentimentSummary
from services.mining.summaries import (
    aggregate_sentiment,
    describe_sentiment,
    format_mention_count,
    lodging_status,
    top_tip,
    truncate_comment,
)
from services.mining.tests.helpers.factories import make_comment


def summary(score: float = 0.0, mentions: int = 1, comments=None, subreddits=None) -> SentimentSummary:
    return SentimentSummary(
        score=score,
        label="neutral",
        mention_count=mentions,
        top_comments=comments or [],
        subreddits=subreddits or [],
    )


class TestAggregateSentiment:

    def test_mention_weighted_mean(self):
        merged = aggregate_sentiment([summary(1.0, 3), summary(-1.0, 1)])
        assert merged.score == pytest.approx(0.5)
        assert merged.mention_count == 4
        assert merged.label == "positive"

    def test_none_and_empty(self):
        assert aggregate_sentiment([]) == SentimentSummary()
        assert aggregate_sentiment([None, None]) == SentimentSummary()

    def test_zero_mentions_is_neutral(self):
        merged = aggregate_sentiment([summary(0.9, 0), summary(-0.9, 0)])
        assert merged.score == 0.0
        assert merged.label == "neutral"

    def test_comments_pooled_and_subreddits_unioned(self):
        a = summary(0.5, 1, [make_comment("a", score=0), make_comment("b", score=9)], ["travel", "japan"])
        b = summary(0.5, 1, [make_comment(c, score=i) for i, c in enumerate("cdefg")], ["japan", "tokyo"])
        merged = aggregate_sentiment([a, None, b])
        assert [c.text for c in merged.top_comments] == ["b", "g", "f", "e", "d"]
        assert merged.subreddits == ["travel", "japan", "tokyo"]


class TestDescribeSentiment:

    @pytest.mark.parametrize("score,expected", [
        (0.9, "Highly Recommended"),
        (0.5, "Highly Recommended"),
        (0.3, "Positive"),
        (0.0, "Mixed Reviews"),
        (-0.2, "Mixed Reviews"),
        (-0.4, "Some Concerns"),
        (-0.8, "Not Recommended"),
    ])
    def test_thresholds(self, score, expected):
        assert describe_sentiment(summary(score)) == expected

    def test_no_reviews(self):
        assert describe_sentiment(None) == "No reviews"
        assert describe_sentiment(summary(0.9, 0)) == "No reviews"


class TestFormatting:

    @pytest.mark.parametrize("count,expected", [
        (0, "No mentions"),
        (1, "1 mention"),
        (7, "7 mentions"),
        (47, "40+ mentions"),
        (312, "300+ mentions"),
    ])
    def test_mention_count(self, count, expected):
        assert format_mention_count(count) == expected

    def test_truncate_comment(self):
        assert truncate_comment("short") == "short"
        assert truncate_comment("x" * 200) == "x" * 150 + "..."
        assert truncate_comment("abc def", max_length=4) == "abc..."

    def test_top_tip(self):
        s = summary(0.5, 2, [make_comment("y" * 300, score=5), make_comment("z", score=1)])
        assert top_tip(s) == "y" * 200 + "..."
        assert top_tip(summary()) is None
        assert top_tip(None) is None


class TestLodgingStatus:

    def test_recommended_when_clearly_positive(self):
        status = lodging_status(summary(0.6, 4, [make_comment("Great pool", score=3)]))
        assert status.is_recommended
        assert status.mention_count == 4
        assert status.top_quote == "Great pool"

    @pytest.mark.parametrize("score,mentions", [(0.2, 3), (0.9, 0), (-0.5, 2)])
    def test_not_recommended(self, score, mentions):
        status = lodging_status(summary(score, mentions))
        assert not status.is_recommended
        assert status.top_quote is None
