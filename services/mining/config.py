"""
Mining service configuration via pydantic-settings.
All config read from environment variables with sensible defaults for local dev.

Engine tuning (ranking weights, caps, negation window) is code-level config
in ranking/configs.py and nlp/lexicon.py, not environment.
"""

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    # App
    app_name: str = "community-mining"
    app_version: str = "0.1.0"

    # Reddit public JSON API
    reddit_base_url: str = "https://www.reddit.com"
    reddit_user_agent: str = "community-mining/0.1 (travel recommendation research)"
    reddit_timeout_s: float = Field(default=10.0, gt=0)
    # Politeness delay before each request; keeps us well under the public rate limit
    reddit_request_delay_s: float = Field(default=0.2, ge=0.0)
    reddit_max_concurrency: int = Field(default=3, ge=1)
    reddit_max_retries: int = Field(default=2, ge=0)
    reddit_retry_base_delay_s: float = Field(default=1.0, ge=0.0)

    # Retrieval sizes
    search_limit: int = Field(default=15, ge=1, le=100)
    destination_search_limit: int = Field(default=30, ge=1, le=100)
    comment_limit: int = Field(default=3, ge=0)

    model_config = {"env_prefix": "", "env_file": ".env", "extra": "ignore"}


settings = Settings()
