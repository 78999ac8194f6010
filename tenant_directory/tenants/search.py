# tenant_directory/tenants/search.py
from typing import Generic, Iterable, List, TypeVar

from pydantic import BaseModel, Field

from .errors import InvalidTenantRequestError

T = TypeVar("T")


class TenantSearchCriteria(BaseModel):
    """Paging request. page_size of 0 returns everything from the page offset."""
    page_number: int = Field(default=1, description="1-based page index.")
    page_size: int = Field(default=100, description="Results per page, 0 for unbounded.")


class SearchResults(BaseModel, Generic[T]):
    """One page of results plus the size of the full result set."""
    results: List[T]
    num_results: int


class Pager(Generic[T]):
    """
    Collects the slice of a sorted stream that falls on the requested page
    while counting every element seen.
    """

    def __init__(self, criteria: TenantSearchCriteria):
        if criteria.page_number < 1:
            raise InvalidTenantRequestError(
                f"page_number must be >= 1, got {criteria.page_number}.", operation="list_tenants"
            )
        if criteria.page_size < 0:
            raise InvalidTenantRequestError(
                f"page_size must be >= 0, got {criteria.page_size}.", operation="list_tenants"
            )
        self.page_size = criteria.page_size
        self.page_start = (criteria.page_number - 1) * criteria.page_size
        self.page_end = self.page_start + criteria.page_size
        self.total = 0
        self.results: List[T] = []

    def process(self, item: T) -> None:
        if self.total >= self.page_start and (self.page_size == 0 or self.total < self.page_end):
            self.results.append(item)
        self.total += 1

    def process_all(self, items: Iterable[T]) -> "Pager[T]":
        for item in items:
            self.process(item)
        return self
