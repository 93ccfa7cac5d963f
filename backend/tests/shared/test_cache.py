"""Tests for shared/cache.py."""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from redis.exceptions import ConnectionError as RedisConnectionError

from shared.cache import (
    DEBATE_LIST_KEY,
    ICache,
    InMemoryCache,
    NullCache,
    RedisCache,
    debate_arguments_key,
    debate_key,
    get_cache,
    invalidate_debate,
)


class TestInMemoryCache:
    @pytest.mark.asyncio
    async def test_set_and_get(self):
        cache = InMemoryCache()
        await cache.set("key", {"a": 1}, 60)

        assert await cache.get("key") == {"a": 1}
        assert await cache.get("other") is None

    @pytest.mark.asyncio
    async def test_reads_return_copies(self):
        cache = InMemoryCache()
        await cache.set("key", {"items": [1]}, 60)

        value = await cache.get("key")
        value["items"].append(2)

        assert await cache.get("key") == {"items": [1]}

    @pytest.mark.asyncio
    async def test_expired_entry_is_a_miss(self):
        cache = InMemoryCache()
        with patch("shared.cache.time.monotonic", return_value=100.0):
            await cache.set("key", "value", 10)
        with patch("shared.cache.time.monotonic", return_value=111.0):
            assert await cache.get("key") is None
        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_delete_pattern(self):
        cache = InMemoryCache()
        await cache.set(DEBATE_LIST_KEY, [], 60)
        await cache.set(debate_key("d1"), {}, 60)
        await cache.set(debate_arguments_key("d1"), [], 60)

        await cache.delete_pattern("debates:*")

        assert await cache.get(DEBATE_LIST_KEY) is None
        assert await cache.get(debate_key("d1")) == {}


class TestInvalidateDebate:
    @pytest.mark.asyncio
    async def test_drops_debate_arguments_and_lists(self):
        cache = InMemoryCache()
        await cache.set(DEBATE_LIST_KEY, [], 60)
        await cache.set(debate_key("d1"), {}, 60)
        await cache.set(debate_arguments_key("d1"), [], 60)
        await cache.set(debate_key("d2"), {}, 60)

        await invalidate_debate(cache, "d1")

        assert len(cache) == 1
        assert await cache.get(debate_key("d2")) == {}

    @pytest.mark.asyncio
    async def test_can_keep_arguments(self):
        cache = InMemoryCache()
        await cache.set(debate_arguments_key("d1"), [], 60)

        await invalidate_debate(cache, "d1", include_arguments=False)

        assert await cache.get(debate_arguments_key("d1")) == []


class TestNullCache:
    @pytest.mark.asyncio
    async def test_always_misses(self):
        cache = NullCache()
        await cache.set("key", "value", 60)
        assert await cache.get("key") is None
        assert isinstance(cache, ICache)


class TestRedisCache:
    @pytest.mark.asyncio
    async def test_round_trips_json(self):
        client = MagicMock()
        client.setex = AsyncMock()
        client.get = AsyncMock(return_value='{"a": 1}')
        cache = RedisCache(client)

        await cache.set("key", {"a": 1}, 30)

        client.setex.assert_awaited_once_with("key", 30, '{"a": 1}')
        assert await cache.get("key") == {"a": 1}

    @pytest.mark.asyncio
    async def test_errors_degrade_to_miss(self):
        client = MagicMock()
        client.get = AsyncMock(side_effect=RedisConnectionError("down"))
        client.setex = AsyncMock(side_effect=RedisConnectionError("down"))
        client.delete = AsyncMock(side_effect=RedisConnectionError("down"))
        cache = RedisCache(client)

        assert await cache.get("key") is None
        await cache.set("key", "value", 30)
        await cache.delete("key")


class TestGetCache:
    @patch("shared.cache.get_settings")
    def test_in_memory_without_redis_url(self, mock_settings):
        mock_settings.return_value.redis_url = ""

        cache = get_cache()

        assert isinstance(cache, InMemoryCache)
        assert get_cache() is cache

    @patch("shared.cache.RedisCache.from_url")
    @patch("shared.cache.get_settings")
    def test_redis_when_configured(self, mock_settings, mock_from_url):
        mock_settings.return_value.redis_url = "redis://localhost:6379/0"
        mock_from_url.return_value = MagicMock(name="redis_cache")

        assert get_cache() is mock_from_url.return_value
        mock_from_url.assert_called_once_with("redis://localhost:6379/0")
