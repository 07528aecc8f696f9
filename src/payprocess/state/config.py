# payprocess/state/config.py
from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional

from .in_memory import InMemoryStateStore


@dataclass
class StateStoreConfig:
    type: Literal["memory", "redis", "custom"] = "memory"
    options: Optional[Dict[str, Any]] = None


def create_state_store(config: Optional[StateStoreConfig] = None):
    """Build the saved-state store described by ``config`` (memory by default).

    Redis options are passed to :class:`RedisStateStore` as keyword arguments
    (``redis_url``, ``key_prefix``, ``ttl``).
    """
    store_config = config or StateStoreConfig()
    options = dict(store_config.options or {})

    if store_config.type == "memory":
        return InMemoryStateStore()

    elif store_config.type == "redis":
        from .redis import RedisStateStore
        return RedisStateStore(**options)

    elif store_config.type == "custom":
        if "implementation" in options:
            return options["implementation"]
        raise ValueError(
            'Custom store requires an implementation in options["implementation"]'
        )

    else:
        raise ValueError(f"Unknown state store type: {store_config.type}")
