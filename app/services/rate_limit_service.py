# /app/services/rate_limit_service.py

"""
Sliding-window rate limiting on Redis sorted sets.

Three independent windows guard the generation endpoint: per user, per client
IP and one global ceiling. Without REDIS_URL the limiter runs in an explicit
disabled mode that admits everything and says so in the log.
"""

import logging
import time
import uuid
from dataclasses import dataclass
from typing import Optional

import redis.asyncio as redis

from ..core.config import (
    RATE_LIMIT_GLOBAL_PER_WINDOW,
    RATE_LIMIT_IP_PER_WINDOW,
    RATE_LIMIT_USER_PER_WINDOW,
    RATE_LIMIT_WINDOW_SECONDS,
    Settings,
    get_settings,
)

logger = logging.getLogger(__name__)

DISABLED_LIMIT = 999999


@dataclass(frozen=True)
class RateLimitResult:
    allowed: bool
    limit: int
    remaining: int
    reset: int  # epoch milliseconds at which the window frees a slot


class RateLimiter:
    def __init__(self, client: Optional["redis.Redis"] = None, window_seconds: int = RATE_LIMIT_WINDOW_SECONDS):
        self._client = client
        self.window_ms = window_seconds * 1000
        self._warned = False

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "RateLimiter":
        settings = settings or get_settings()
        if not settings.redis_url:
            return cls(client=None)
        client = redis.from_url(
            settings.redis_url,
            encoding="utf-8",
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
        )
        return cls(client=client)

    @property
    def enabled(self) -> bool:
        return self._client is not None

    async def allow(self, key: str, limit: int) -> RateLimitResult:
        now_ms = int(time.time() * 1000)
        member = f"{now_ms}-{uuid.uuid4().hex}"

        async with self._client.pipeline(transaction=True) as pipe:
            pipe.zremrangebyscore(key, 0, now_ms - self.window_ms)
            pipe.zadd(key, {member: now_ms})
            pipe.zcard(key)
            pipe.pexpire(key, self.window_ms)
            _, _, count, _ = await pipe.execute()

        if count <= limit:
            return RateLimitResult(allowed=True, limit=limit, remaining=limit - count, reset=now_ms + self.window_ms)

        # Denied requests do not occupy a slot.
        await self._client.zrem(key, member)
        oldest = await self._client.zrange(key, 0, 0, withscores=True)
        reset = int(oldest[0][1]) + self.window_ms if oldest else now_ms + self.window_ms
        return RateLimitResult(allowed=False, limit=limit, remaining=0, reset=reset)

    async def check_rate_limit(self, user_id: str, ip: str) -> RateLimitResult:
        """User window first, then IP, then global. The first denial wins."""
        if not self.enabled:
            if not self._warned:
                logger.warning("Rate limiting disabled: REDIS_URL is not configured.")
                self._warned = True
            now_ms = int(time.time() * 1000)
            return RateLimitResult(allowed=True, limit=DISABLED_LIMIT, remaining=DISABLED_LIMIT, reset=now_ms + self.window_ms)

        user_result = await self.allow(f"ratelimit:user:{user_id}", RATE_LIMIT_USER_PER_WINDOW)
        if not user_result.allowed:
            logger.info("Rate limit hit for user %s", user_id)
            return user_result

        ip_result = await self.allow(f"ratelimit:ip:{ip}", RATE_LIMIT_IP_PER_WINDOW)
        if not ip_result.allowed:
            logger.info("Rate limit hit for ip %s", ip)
            return ip_result

        global_result = await self.allow("ratelimit:global", RATE_LIMIT_GLOBAL_PER_WINDOW)
        if not global_result.allowed:
            logger.warning("Global rate limit reached")
            return global_result

        return user_result

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
