# tenant_directory/tenants/errors.py
from typing import Optional


class TenantDirectoryError(Exception):
    """Base exception class for tenant directory failures.

    Every directory error records the operation that failed and, where one
    was involved, the coordination store path it was working on.
    """

    def __init__(self, detail: str, operation: Optional[str] = None, path: Optional[str] = None):
        self.detail = detail
        self.operation = operation
        self.path = path
        super().__init__(detail)

    def __str__(self) -> str:
        context = []
        if self.operation:
            context.append(f"operation={self.operation}")
        if self.path:
            context.append(f"path={self.path}")
        if not context:
            return self.detail
        return f"{self.detail} ({', '.join(context)})"


class DuplicateTenantError(TenantDirectoryError):
    """Raised when a create targets a path that already holds a tenant node."""

    def __init__(self, detail: str = "Tenant already exists.", operation: Optional[str] = "create_tenant",
                 path: Optional[str] = None):
        super().__init__(detail, operation=operation, path=path)


class TenantNotFoundError(TenantDirectoryError):
    """Raised when an update or delete targets a tenant that does not exist."""

    def __init__(self, detail: str = "Tenant not found.", operation: Optional[str] = None,
                 path: Optional[str] = None):
        super().__init__(detail, operation=operation, path=path)


class StoreUnavailableError(TenantDirectoryError):
    """Raised when a coordination store call fails.

    The original store exception is chained as __cause__.
    """

    def __init__(self, detail: str = "Coordination store unavailable.", operation: Optional[str] = None,
                 path: Optional[str] = None):
        super().__init__(detail, operation=operation, path=path)


class TenantDecodeError(TenantDirectoryError):
    """Raised when a stored payload (or tree segment) cannot be parsed back into a tenant."""

    def __init__(self, detail: str = "Unable to decode tenant.", operation: Optional[str] = None,
                 path: Optional[str] = None):
        super().__init__(detail, operation=operation, path=path)


class InvalidTenantRequestError(TenantDirectoryError):
    """Raised when a request or search criteria fails validation."""

    def __init__(self, detail: str = "Invalid tenant request.", operation: Optional[str] = None,
                 path: Optional[str] = None):
        super().__init__(detail, operation=operation, path=path)
