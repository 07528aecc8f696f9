# payprocess/state/__init__.py
"""Stores for saved payment process state."""

from .base import StateStore
from .config import StateStoreConfig, create_state_store
from .in_memory import InMemoryStateStore

__all__ = [
    'StateStore',
    'StateStoreConfig',
    'create_state_store',
    'InMemoryStateStore',
]

# Conditionally export RedisStateStore if redis is available
try:
    from .redis import RedisStateStore
    __all__.append('RedisStateStore')
except ImportError:  # pragma: no cover
    # redis extra not installed
    pass
