"""
Tests for hit/miss counters.
"""

import pytest

from prompt_cache.errors import StoreUnavailableError
from prompt_cache.protocols import StatsCounter
from prompt_cache.repositories import InMemoryStatsCounter, RedisStatsCounter


@pytest.fixture(params=["memory", "redis"])
def counter(request, fake_redis):
    if request.param == "memory":
        return InMemoryStatsCounter()
    return RedisStatsCounter(redis_client=fake_redis, key_prefix="cache_stats:")


def test_implements_protocol(counter):
    assert isinstance(counter, StatsCounter)


@pytest.mark.asyncio
async def test_counts_start_at_zero(counter):
    assert await counter.counts() == (0, 0)


@pytest.mark.asyncio
async def test_record_hits_and_misses(counter):
    await counter.record_hit()
    await counter.record_hit()
    await counter.record_miss()

    assert await counter.counts() == (2, 1)


@pytest.mark.asyncio
async def test_redis_counter_keys(fake_redis):
    counter = RedisStatsCounter(redis_client=fake_redis, key_prefix="cache_stats:")

    await counter.record_miss()

    assert fake_redis.data == {"cache_stats:misses": "1"}


@pytest.mark.asyncio
async def test_redis_counter_unavailable(fake_redis):
    counter = RedisStatsCounter(redis_client=fake_redis)
    fake_redis.down = True

    with pytest.raises(StoreUnavailableError):
        await counter.record_hit()
    with pytest.raises(StoreUnavailableError):
        await counter.counts()


@pytest.mark.asyncio
async def test_redis_counter_reads_raw_bytes(fake_redis):
    fake_redis.data["cache_stats:hits"] = b"3"
    fake_redis.data["cache_stats:misses"] = b"5"
    counter = RedisStatsCounter(redis_client=fake_redis, key_prefix="cache_stats:")

    assert await counter.counts() == (3, 5)
