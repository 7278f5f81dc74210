"""
Response envelopes and query parameter schemas shared by every endpoint.
"""

from typing import Dict, Generic, List, Literal, Optional, TypeVar, Union

from pydantic import Field

from app.schemas.base import CamelModel


T = TypeVar("T")


class ApiResponse(CamelModel, Generic[T]):
    """Standard success/failure envelope."""
    success: bool
    data: Optional[T] = None
    message: Optional[str] = None
    errors: Optional[List[str]] = None

    @classmethod
    def ok(cls, data: T, message: Optional[str] = None) -> "ApiResponse[T]":
        return cls(success=True, data=data, message=message)


class PaginationInfo(CamelModel):
    """Pagination block of a paginated response."""
    page: int
    limit: int
    total: int
    total_pages: int


class PaginatedResponse(CamelModel, Generic[T]):
    """Envelope for a page of items."""
    success: bool
    data: Optional[List[T]] = None
    message: Optional[str] = None
    errors: Optional[List[str]] = None
    pagination: PaginationInfo


class PaginationParams(CamelModel):
    """Query parameters for paginated listings."""
    page: Optional[int] = None
    limit: Optional[int] = None
    sort_by: Optional[str] = None
    sort_order: Optional[Literal["asc", "desc"]] = None


class SearchParams(PaginationParams):
    """Pagination plus free-text search and field filters."""
    search: Optional[str] = None
    filters: Optional[Dict[str, Union[bool, int, float, str]]] = None

    def to_query(self) -> Dict[str, Union[bool, int, float, str]]:
        """Flatten into query-string parameters; filters are merged in."""
        query = self.model_dump(by_alias=True, exclude_none=True, exclude={"filters"})
        if self.filters:
            query.update(self.filters)
        return query


class ApiError(CamelModel):
    """Error envelope returned for every failed request."""
    success: Literal[False] = False
    message: str
    code: Optional[str] = None
    errors: Optional[List[str]] = Field(None, description="Individual error messages")
