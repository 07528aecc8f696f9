"""Tests for Redis state store with mocked Redis client.

These tests verify the RedisStateStore wrapper logic without requiring a real Redis instance.
"""

import pytest
from unittest.mock import AsyncMock, patch
import json
import time

pytest.importorskip("redis")

from payprocess import InvalidSavedStateError, SavedState, UnifiedPaymentProcess
from payprocess.state.redis import RedisStateStore


def create_mock_redis_client():
    """Helper to create a properly configured mock Redis client."""
    mock_client = AsyncMock()
    mock_client.setex = AsyncMock()
    mock_client.get = AsyncMock()
    mock_client.delete = AsyncMock()
    mock_client.aclose = AsyncMock()
    return mock_client


@pytest.fixture
def mock_client():
    client = create_mock_redis_client()

    async def mock_from_url(*args, **kwargs):
        return client

    with patch('payprocess.state.redis.aioredis') as mock_aioredis:
        mock_aioredis.from_url = mock_from_url
        yield client


@pytest.fixture
def saved_state(client, provider):
    process = UnifiedPaymentProcess(client, provider)
    client.queue("request-payment", {"status": "success", "request_id": "w-req"})
    process.proceed()
    return process.get_saved_state()


def test_redis_initialization():
    """Test RedisStateStore initialization with custom parameters."""
    store = RedisStateStore(
        redis_url="redis://localhost:6379/1",
        key_prefix="test:prefix:",
        ttl=7200
    )
    assert store.redis_url == "redis://localhost:6379/1"
    assert store.key_prefix == "test:prefix:"
    assert store.ttl == 7200
    assert store._client is None  # Lazy initialization


def test_redis_make_key():
    """Test key formatting with prefix."""
    store = RedisStateStore(key_prefix="payprocess:test:")
    assert store._make_key("payment123") == "payprocess:test:payment123"


@pytest.mark.asyncio
async def test_redis_set(mock_client, saved_state):
    """Test set() stores the flat record with a TTL."""
    store = RedisStateStore(ttl=3600)

    await store.set('payment_id_123', saved_state)

    key, ttl, payload = mock_client.setex.call_args[0]
    assert key == "payprocess:saved:payment_id_123"
    assert ttl == 3600
    data = json.loads(payload)
    assert data['state'] == saved_state.to_record()
    assert 'ts' in data


@pytest.mark.asyncio
async def test_redis_get_existing(mock_client, saved_state):
    """Test get() restores the saved state."""
    mock_client.get.return_value = json.dumps({
        'state': saved_state.to_record(),
        'ts': time.time()
    })
    store = RedisStateStore()

    result = await store.get('payment_id_123')

    mock_client.get.assert_called_once_with("payprocess:saved:payment_id_123")
    assert isinstance(result, SavedState)
    assert result == saved_state


@pytest.mark.asyncio
async def test_redis_get_nonexistent(mock_client):
    """Test get() returns None for nonexistent key."""
    mock_client.get.return_value = None
    store = RedisStateStore()

    assert await store.get('nonexistent_key') is None


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [
    "not json",
    json.dumps(["state"]),
    json.dumps({"ts": 1}),
    json.dumps({"state": {"wallet": "{}", "external": "{}", "flags": 25}}),
])
async def test_redis_get_corrupted(mock_client, payload):
    """Test get() refuses records it can not decode."""
    mock_client.get.return_value = payload
    store = RedisStateStore()

    with pytest.raises(InvalidSavedStateError):
        await store.get('payment_id_123')


@pytest.mark.asyncio
async def test_redis_delete(mock_client):
    """Test delete() method calls Redis delete."""
    mock_client.delete.return_value = 1
    store = RedisStateStore()

    await store.delete('payment_id_123')

    mock_client.delete.assert_called_once_with("payprocess:saved:payment_id_123")


@pytest.mark.asyncio
async def test_redis_delete_nonexistent(mock_client):
    """Test delete() works even if key doesn't exist."""
    mock_client.delete.return_value = 0
    store = RedisStateStore()

    await store.delete('nonexistent_key')

    assert mock_client.delete.called


@pytest.mark.asyncio
async def test_redis_close(mock_client):
    """Test close() method properly closes the Redis client."""
    store = RedisStateStore()
    await store._get_client()
    assert store._client is mock_client

    await store.close()

    mock_client.aclose.assert_called_once()
    assert store._client is None


@pytest.mark.asyncio
async def test_redis_client_reused(mock_client, saved_state):
    """Test the connection is created once and reused."""
    store = RedisStateStore()

    await store.set('a', saved_state)
    await store.delete('a')

    assert store._client is mock_client
    assert mock_client.setex.call_count == 1
