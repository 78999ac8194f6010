# tenant_directory/coordination/errors.py
from typing import Optional


class CoordinationStoreError(Exception):
    """Base class for failures raised by a coordination store backend.

    Carries the store operation and the node path involved so callers can
    report where in the tree the failure happened.
    """

    def __init__(self, message: str, path: Optional[str] = None, operation: Optional[str] = None):
        self.path = path
        self.operation = operation
        super().__init__(message)


class InvalidPathError(CoordinationStoreError):
    """Raised when a path is not an absolute, slash-delimited node path."""

    def __init__(self, path: str, reason: str = "Path must be absolute and non-empty."):
        super().__init__(f"Invalid node path '{path}': {reason}", path=path)


class NoNodeError(CoordinationStoreError):
    """Raised when an operation requires a node (or its parent) that does not exist."""

    def __init__(self, path: str, operation: Optional[str] = None):
        super().__init__(f"No node exists at '{path}'.", path=path, operation=operation)


class NodeExistsError(CoordinationStoreError):
    """Raised by create when a node is already present at the target path."""

    def __init__(self, path: str, operation: Optional[str] = "create"):
        super().__init__(f"Node already exists at '{path}'.", path=path, operation=operation)


class NotEmptyError(CoordinationStoreError):
    """Raised by a non-recursive delete of a node that still has children."""

    def __init__(self, path: str, operation: Optional[str] = "delete"):
        super().__init__(f"Node at '{path}' has children.", path=path, operation=operation)


class CoordinationConnectionError(CoordinationStoreError):
    """Raised when the backend cannot be reached or the connection drops mid-call."""
    pass
