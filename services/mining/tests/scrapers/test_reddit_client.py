"""
Tests for the Reddit JSON client (scrapers/reddit.py) over httpx.MockTransport.

Covers:
- Search URL/params, per-subreddit fan-out capped at three, score ordering
- Retry on 429 / 5xx / transport errors, RedditFetchError once exhausted
- Non-retryable statuses, invalid JSON and malformed listings -> no posts
- Comment fetching: top-level only, sorted, limited, input validation
"""

from __future__ import annotations

import json
from typing import Callable

import httpx
import pytest

from services.mining.scrapers.reddit import (
    RedditClient,
    RedditFetchError,
    parse_comment_listing,
    parse_search_listing,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _post_data(post_id: str, score: int, subreddit: str = "travel", title: str = "") -> dict:
    return {
        "kind": "t3",
        "data": {
            "id": post_id,
            "title": title or f"Post {post_id}",
            "selftext": "body",
            "subreddit": subreddit,
            "score": score,
            "num_comments": 3,
            "created_utc": 1700000000,
            "permalink": f"/r/{subreddit}/comments/{post_id}",
        },
    }


def _listing(*children: dict) -> dict:
    return {"kind": "Listing", "data": {"children": list(children)}}


def _comment_data(body: str, score: int, kind: str = "t1") -> dict:
    return {"kind": kind, "data": {"body": body, "score": score, "created_utc": 1700000000}}


def _client(handler: Callable[[httpx.Request], httpx.Response], fast_settings) -> RedditClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url=fast_settings.reddit_base_url)
    return RedditClient(http, config=fast_settings)


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
class TestSearch:

    async def test_queries_each_subreddit_and_sorts_by_score(self, fast_settings):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            sub = request.url.path.split("/")[2]
            scores = {"travel": [5, 40], "solotravel": [12]}[sub]
            return httpx.Response(200, json=_listing(*(_post_data(f"{sub}{s}", s, sub) for s in scores)))

        client = _client(handler, fast_settings)
        posts = await client.search("cancun hotel", ["travel", "solotravel"], 10)

        assert [p.score for p in posts] == [40, 12, 5]
        assert [r.url.path for r in seen] == ["/r/travel/search.json", "/r/solotravel/search.json"]
        params = seen[0].url.params
        assert params["q"] == "cancun hotel"
        assert params["sort"] == "relevance"
        assert params["limit"] == "10"
        assert params["restrict_sr"] == "true"
        assert posts[0].body == "body"

    async def test_at_most_three_subreddits(self, fast_settings):
        paths = []

        def handler(request):
            paths.append(request.url.path)
            return httpx.Response(200, json=_listing())

        client = _client(handler, fast_settings)
        await client.search("tulum", ["a1", "b2", "c3", "d4"], 5)
        assert len(paths) == 3

    async def test_invalid_subreddit_skipped(self, fast_settings):
        paths = []

        def handler(request):
            paths.append(request.url.path)
            return httpx.Response(200, json=_listing(_post_data("x", 1)))

        client = _client(handler, fast_settings)
        posts = await client.search("tulum", ["bad/name", "travel"], 5)
        assert paths == ["/r/travel/search.json"]
        assert len(posts) == 1

    async def test_blank_query_or_zero_limit(self, fast_settings):
        def handler(request):
            raise AssertionError("no request expected")

        client = _client(handler, fast_settings)
        assert await client.search("  ", ["travel"], 5) == []
        assert await client.search("tulum", ["travel"], 0) == []


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
class TestFailures:

    async def test_rate_limit_retried(self, fast_settings):
        statuses = iter([429, 503, 200])
        calls = []

        def handler(request):
            calls.append(request)
            status = next(statuses)
            if status != 200:
                return httpx.Response(status)
            return httpx.Response(200, json=_listing(_post_data("ok", 7)))

        client = _client(handler, fast_settings)
        posts = await client.search("tokyo", ["travel"], 5)
        assert len(calls) == 3
        assert [p.id for p in posts] == ["ok"]

    async def test_retries_exhausted_raise(self, fast_settings):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(500)

        client = _client(handler, fast_settings)
        with pytest.raises(RedditFetchError):
            await client.search("tokyo", ["travel"], 5)
        assert len(calls) == fast_settings.reddit_max_retries + 1

    async def test_transport_error_retried_then_raised(self, fast_settings):
        calls = []

        def handler(request):
            calls.append(request)
            raise httpx.ConnectError("connection refused", request=request)

        client = _client(handler, fast_settings)
        with pytest.raises(RedditFetchError):
            await client.search("tokyo", ["travel"], 5)
        assert len(calls) == 3

    async def test_not_found_is_empty_without_retry(self, fast_settings):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(404)

        client = _client(handler, fast_settings)
        assert await client.search("tokyo", ["travel"], 5) == []
        assert len(calls) == 1

    async def test_invalid_json_is_empty(self, fast_settings):
        client = _client(lambda request: httpx.Response(200, content=b"<html>"), fast_settings)
        assert await client.search("tokyo", ["travel"], 5) == []

    async def test_malformed_listing_is_empty(self, fast_settings):
        client = _client(lambda request: httpx.Response(200, json={"data": {}}), fast_settings)
        assert await client.search("tokyo", ["travel"], 5) == []


# ---------------------------------------------------------------------------
# Comments
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
class TestComments:

    async def test_top_level_comments_sorted_and_limited(self, fast_settings):
        seen = []

        def handler(request):
            seen.append(request)
            payload = [
                _listing(_post_data("abc", 10)),
                _listing(
                    _comment_data("meh", 1),
                    _comment_data("Go to Pujol", 30),
                    _comment_data("", 99),
                    _comment_data("load more", 50, kind="more"),
                    _comment_data("Contramar too", 12),
                ),
            ]
            return httpx.Response(200, content=json.dumps(payload).encode())

        client = _client(handler, fast_settings)
        comments = await client.fetch_comments("MexicoCity", "abc", 2)

        assert [c.text for c in comments] == ["Go to Pujol", "Contramar too"]
        assert comments[0].subreddit == "MexicoCity"
        assert comments[0].date.startswith("2023-11-14")
        assert seen[0].url.path == "/r/MexicoCity/comments/abc.json"
        assert seen[0].url.params["depth"] == "1"

    @pytest.mark.parametrize("subreddit,post_id", [("bad name", "abc"), ("travel", "../x"), ("travel", "")])
    async def test_invalid_source_skipped(self, fast_settings, subreddit, post_id):
        def handler(request):
            raise AssertionError("no request expected")

        client = _client(handler, fast_settings)
        assert await client.fetch_comments(subreddit, post_id, 3) == []


# ---------------------------------------------------------------------------
# Listing parsers (sync)
# ---------------------------------------------------------------------------

class TestParsers:

    def test_search_listing_skips_bad_children(self):
        payload = _listing(_post_data("a", 1), {"kind": "t3"}, "junk", {"data": {"score": "not a number"}})
        assert [p.id for p in parse_search_listing(payload, "r/travel")] == ["a"]

    def test_search_listing_wrong_type(self):
        assert parse_search_listing([1, 2], "r/travel") == []

    def test_comment_listing_wrong_shape(self):
        assert parse_comment_listing({"data": {}}, "travel") == []
        assert parse_comment_listing([_listing()], "travel") == []
        assert parse_comment_listing([_listing(), {"data": None}], "travel") == []
