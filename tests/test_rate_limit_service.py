# /tests/test_rate_limit_service.py

import time

import fakeredis
import pytest

from app.core.config import RATE_LIMIT_GLOBAL_PER_WINDOW, Settings
from app.services.rate_limit_service import DISABLED_LIMIT, RateLimiter


@pytest.fixture
def fake_redis():
    """An in-process Redis with real sorted-set semantics."""
    return fakeredis.FakeAsyncRedis(decode_responses=True)


@pytest.fixture
def limiter(fake_redis):
    return RateLimiter(client=fake_redis)


@pytest.mark.asyncio
async def test_disabled_mode_admits_everything():
    limiter = RateLimiter.from_settings(Settings(redis_url=None))

    result = await limiter.check_rate_limit("user-1", "10.0.0.1")

    assert not limiter.enabled
    assert result.allowed
    assert result.limit == DISABLED_LIMIT
    assert result.remaining == DISABLED_LIMIT


@pytest.mark.asyncio
async def test_user_window_denies_the_eleventh_request(limiter, fake_redis):
    # Act
    results = [await limiter.check_rate_limit("user-1", "10.0.0.1") for _ in range(11)]

    # Assert
    assert all(r.allowed for r in results[:10])
    assert results[9].remaining == 0
    denied = results[10]
    assert not denied.allowed
    assert denied.limit == 10
    assert denied.remaining == 0
    # Denied attempts do not occupy a slot.
    assert await fake_redis.zcard("ratelimit:user:user-1") == 10


@pytest.mark.asyncio
async def test_denied_reset_is_oldest_entry_plus_window(limiter, fake_redis):
    for _ in range(10):
        await limiter.check_rate_limit("user-1", "10.0.0.1")
    [(_, oldest_score)] = await fake_redis.zrange("ratelimit:user:user-1", 0, 0, withscores=True)

    denied = await limiter.check_rate_limit("user-1", "10.0.0.1")

    assert denied.reset == int(oldest_score) + 60_000


@pytest.mark.asyncio
async def test_ip_window_applies_across_users(limiter):
    for i in range(20):
        result = await limiter.check_rate_limit(f"user-{i}", "10.0.0.9")
        assert result.allowed

    result = await limiter.check_rate_limit("user-new", "10.0.0.9")

    assert not result.allowed
    assert result.limit == 20


@pytest.mark.asyncio
async def test_global_ceiling_applies_across_users_and_ips(limiter, fake_redis, mocker):
    # Arrange: a small ceiling so distinct users and IPs can fill it.
    mocker.patch("app.services.rate_limit_service.RATE_LIMIT_GLOBAL_PER_WINDOW", 5)
    for i in range(5):
        assert (await limiter.check_rate_limit(f"user-{i}", f"10.0.1.{i}")).allowed
    [(_, oldest_score)] = await fake_redis.zrange("ratelimit:global", 0, 0, withscores=True)

    # Act
    denied = await limiter.check_rate_limit("user-fresh", "10.0.2.1")

    # Assert
    assert not denied.allowed
    assert denied.limit == 5
    assert denied.remaining == 0
    assert denied.reset == int(oldest_score) + 60_000
    assert await fake_redis.zcard("ratelimit:global") == 5


@pytest.mark.asyncio
async def test_global_ceiling_uses_configured_limit(limiter, fake_redis):
    now_ms = int(time.time() * 1000)
    await fake_redis.zadd(
        "ratelimit:global",
        {f"seed-{i}": now_ms - 5_000 + i for i in range(RATE_LIMIT_GLOBAL_PER_WINDOW)},
    )

    denied = await limiter.check_rate_limit("user-1", "10.0.0.1")

    assert not denied.allowed
    assert denied.limit == RATE_LIMIT_GLOBAL_PER_WINDOW == 1000
    assert denied.reset == now_ms - 5_000 + 60_000


@pytest.mark.asyncio
async def test_expired_entries_leave_the_window(limiter, fake_redis):
    stale_ms = int(time.time() * 1000) - 61_000
    await fake_redis.zadd("ratelimit:user:user-1", {f"old-{i}": stale_ms for i in range(10)})

    result = await limiter.check_rate_limit("user-1", "10.0.0.1")

    assert result.allowed
    assert await fake_redis.zcard("ratelimit:user:user-1") == 1


@pytest.mark.asyncio
async def test_window_keys_expire_with_the_window(limiter, fake_redis):
    await limiter.check_rate_limit("user-1", "10.0.0.1")

    for key in ("ratelimit:user:user-1", "ratelimit:ip:10.0.0.1", "ratelimit:global"):
        assert 0 < await fake_redis.pttl(key) <= 60_000


@pytest.mark.asyncio
async def test_close_releases_the_client(limiter, fake_redis, mocker):
    aclose = mocker.spy(fake_redis, "aclose")

    await limiter.close()

    aclose.assert_called_once()
