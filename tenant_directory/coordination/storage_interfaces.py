# tenant_directory/coordination/storage_interfaces.py
from abc import ABC, abstractmethod
from typing import List


class AbstractCoordinationStore(ABC):
    """
    Abstract base class for a hierarchical, path-addressed coordination tree.

    Nodes are addressed by absolute slash-delimited paths, hold an opaque
    byte payload and may have children. Implementations must make each
    single-node operation atomic; no guarantee is made across nodes.
    """

    @abstractmethod
    async def initialize(self) -> None:
        """Connect to the backend and verify it is reachable."""
        pass

    @abstractmethod
    async def teardown(self) -> None:
        """Release backend resources."""
        pass

    @abstractmethod
    async def exists(self, path: str) -> bool:
        """Return True if a node exists at the path."""
        pass

    @abstractmethod
    async def get_data(self, path: str) -> bytes:
        """
        Read the payload stored at a node.

        Raises:
            NoNodeError: If the node does not exist
        """
        pass

    @abstractmethod
    async def create(self, path: str, data: bytes = b"", make_parents: bool = False) -> str:
        """
        Atomically create a node if, and only if, it is absent.

        Args:
            path: Absolute node path
            data: Initial payload
            make_parents: Create missing ancestors (with empty payloads)

        Returns:
            The path of the created node

        Raises:
            NodeExistsError: If a node is already present at the path
            NoNodeError: If the parent is missing and make_parents is False
        """
        pass

    @abstractmethod
    async def set_data(self, path: str, data: bytes) -> None:
        """
        Overwrite the payload of an existing node.

        Raises:
            NoNodeError: If the node does not exist
        """
        pass

    @abstractmethod
    async def delete(self, path: str, recursive: bool = False) -> None:
        """
        Remove a node, and its whole subtree when recursive is True.

        Raises:
            NoNodeError: If the node does not exist
            NotEmptyError: If the node has children and recursive is False
        """
        pass

    @abstractmethod
    async def get_children(self, path: str) -> List[str]:
        """
        List the child segment names of a node.

        Raises:
            NoNodeError: If the node does not exist
        """
        pass
