"""Tests for shared/cache.py."""

import pytest
from unittest.mock import patch, MagicMock, AsyncMock

from shared.cache import get_redis_client, close_redis_client, reset_redis_client


class TestRedisClient:
    def setup_method(self):
        reset_redis_client()

    @patch("shared.cache.Redis")
    @patch("shared.cache.get_settings")
    def test_creates_client_from_url(self, mock_settings, mock_redis):
        mock_settings.return_value.redis_url = "redis://cache:6379/1"
        mock_settings.return_value.redis_socket_timeout = 1.5

        get_redis_client()

        mock_redis.from_url.assert_called_once_with(
            "redis://cache:6379/1",
            decode_responses=True,
            socket_timeout=1.5,
            socket_connect_timeout=1.5,
        )

    @patch("shared.cache.Redis")
    @patch("shared.cache.get_settings")
    def test_caches_client(self, mock_settings, mock_redis):
        mock_settings.return_value.redis_url = "redis://localhost:6379/0"
        mock_settings.return_value.redis_socket_timeout = 2.0
        mock_redis.from_url.return_value = MagicMock()

        assert get_redis_client() is get_redis_client()
        mock_redis.from_url.assert_called_once()

    @pytest.mark.asyncio
    @patch("shared.cache.Redis")
    @patch("shared.cache.get_settings")
    async def test_close_redis_client(self, mock_settings, mock_redis):
        mock_settings.return_value.redis_url = "redis://localhost:6379/0"
        mock_settings.return_value.redis_socket_timeout = 2.0
        client = AsyncMock()
        mock_redis.from_url.side_effect = [client, AsyncMock()]

        get_redis_client()
        await close_redis_client()

        client.aclose.assert_awaited_once()
        assert get_redis_client() is not client

    @pytest.mark.asyncio
    async def test_close_without_client_is_noop(self):
        await close_redis_client()
