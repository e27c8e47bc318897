from __future__ import annotations

import os

import redis

DEFAULT_REDIS_URL = "redis://localhost:6379/0"


def get_redis_url() -> str:
    # FISHBOWL_REDIS_URL takes precedence over the generic REDIS_URL.
    return os.environ.get("FISHBOWL_REDIS_URL") or os.environ.get("REDIS_URL") or DEFAULT_REDIS_URL


def create_redis(url: str | None = None) -> redis.Redis:
    """Client for the player mailboxes. Strings in and out, since mailbox fields are all text."""

    return redis.Redis.from_url(url or get_redis_url(), decode_responses=True)
