# tenant_directory/coordination/__init__.py
"""
Coordination store module initialization.

This module provides the hierarchical, path-addressed tree that tenant
records are kept in, with a Redis backend shared between service processes
and an in-memory backend for tests and local development.
"""

import logging
from typing import Optional

from ..settings import settings as directory_settings
from .errors import (
    CoordinationStoreError,
    CoordinationConnectionError,
    InvalidPathError,
    NoNodeError,
    NodeExistsError,
    NotEmptyError,
)
from .storage_interfaces import AbstractCoordinationStore
from .memory_store import InMemoryCoordinationStore
from .redis_store import RedisCoordinationStore

logger = logging.getLogger(__name__)

_coordination_store_instance: Optional[AbstractCoordinationStore] = None


async def get_coordination_store() -> AbstractCoordinationStore:
    """
    Factory function to get the configured coordination store instance.

    Returns a singleton instance based on the coordination_backend setting.
    """
    global _coordination_store_instance

    if _coordination_store_instance is None:
        backend = directory_settings.coordination_backend
        if backend == "redis":
            logger.info("Using RedisCoordinationStore for the coordination tree.")
            store: AbstractCoordinationStore = RedisCoordinationStore()
        elif backend == "memory":
            logger.info("Using InMemoryCoordinationStore for the coordination tree.")
            store = InMemoryCoordinationStore()
        else:
            raise ValueError(f"Unsupported coordination_backend: {backend}")
        await store.initialize()
        _coordination_store_instance = store

    return _coordination_store_instance


async def close_coordination_store() -> None:
    """Tear down the singleton store, if one was created."""
    global _coordination_store_instance
    if _coordination_store_instance is not None:
        await _coordination_store_instance.teardown()
        _coordination_store_instance = None


# Export public API for the coordination tree
__all__ = [
    "AbstractCoordinationStore",
    "InMemoryCoordinationStore",
    "RedisCoordinationStore",
    "CoordinationStoreError",
    "CoordinationConnectionError",
    "InvalidPathError",
    "NoNodeError",
    "NodeExistsError",
    "NotEmptyError",
    "get_coordination_store",
    "close_coordination_store",
]
