"""
Shared test fixtures for the mining test suite.

Provides:
- post_factory: Post builder with unique ids
- fast_settings: Settings with no politeness delay or retry backoff
"""

from __future__ import annotations

import os
from typing import Callable

import pytest

# Ensure test env vars before any config import
os.environ.setdefault("REDDIT_BASE_URL", "https://reddit.test")
os.environ.setdefault("REDDIT_REQUEST_DELAY_S", "0")

from services.mining.config import Settings  # noqa: E402
from services.mining.models.social import Post  # noqa: E402
from services.mining.tests.helpers.factories import make_post  # noqa: E402


@pytest.fixture
def post_factory() -> Callable[..., Post]:
    return make_post


@pytest.fixture
def fast_settings() -> Settings:
    return Settings(
        reddit_base_url="https://reddit.test",
        reddit_request_delay_s=0.0,
        reddit_retry_base_delay_s=0.0,
        reddit_max_retries=2,
        reddit_max_concurrency=3,
        _env_file=None,
    )
