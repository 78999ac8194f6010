# tenant_directory/coordination/memory_store.py
import asyncio
import logging
from typing import Dict, List, Set

from .errors import NoNodeError, NodeExistsError, NotEmptyError
from .paths import ROOT, ancestors, normalize_path, split_path
from .storage_interfaces import AbstractCoordinationStore

logger = logging.getLogger(__name__)


class _Node:
    __slots__ = ("data", "children")

    def __init__(self, data: bytes = b""):
        self.data = data
        self.children: Set[str] = set()


class InMemoryCoordinationStore(AbstractCoordinationStore):
    """
    Process-local coordination tree.

    Only shares state between coroutines of a single process, so it is meant
    for tests and local development rather than multi-instance deployments.
    """

    def __init__(self):
        self._nodes: Dict[str, _Node] = {ROOT: _Node()}
        self._lock = asyncio.Lock()

    async def initialize(self) -> None:
        logger.info("InMemoryCoordinationStore initialized.")

    async def teardown(self) -> None:
        logger.info("InMemoryCoordinationStore teardown (state discarded with the instance).")

    async def exists(self, path: str) -> bool:
        path = normalize_path(path)
        async with self._lock:
            return path in self._nodes

    async def get_data(self, path: str) -> bytes:
        path = normalize_path(path)
        async with self._lock:
            node = self._nodes.get(path)
            if node is None:
                raise NoNodeError(path, operation="get_data")
            return node.data

    async def create(self, path: str, data: bytes = b"", make_parents: bool = False) -> str:
        path = normalize_path(path)
        async with self._lock:
            if path in self._nodes:
                raise NodeExistsError(path)
            parent, _ = split_path(path)
            if parent not in self._nodes:
                if not make_parents:
                    raise NoNodeError(parent, operation="create")
                for ancestor in ancestors(path):
                    if ancestor not in self._nodes:
                        self._add_node(ancestor, b"")
            self._add_node(path, data)
        logger.debug(f"Store: Created node '{path}' ({len(data)} bytes).")
        return path

    def _add_node(self, path: str, data: bytes) -> None:
        parent, name = split_path(path)
        self._nodes[path] = _Node(data)
        self._nodes[parent].children.add(name)

    async def set_data(self, path: str, data: bytes) -> None:
        path = normalize_path(path)
        async with self._lock:
            node = self._nodes.get(path)
            if node is None:
                raise NoNodeError(path, operation="set_data")
            node.data = data

    async def delete(self, path: str, recursive: bool = False) -> None:
        path = normalize_path(path)
        async with self._lock:
            node = self._nodes.get(path)
            if node is None:
                raise NoNodeError(path, operation="delete")
            if node.children and not recursive:
                raise NotEmptyError(path)
            prefix = path.rstrip("/") + "/"
            for candidate in [p for p in self._nodes if p != path and p.startswith(prefix)]:
                del self._nodes[candidate]
            if path == ROOT:
                # The root itself is never removed, only emptied
                node.children.clear()
                node.data = b""
                return
            del self._nodes[path]
            parent, name = split_path(path)
            self._nodes[parent].children.discard(name)
        logger.debug(f"Store: Deleted node '{path}' (recursive={recursive}).")

    async def get_children(self, path: str) -> List[str]:
        path = normalize_path(path)
        async with self._lock:
            node = self._nodes.get(path)
            if node is None:
                raise NoNodeError(path, operation="get_children")
            return sorted(node.children)
