from typing import Any, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class LinkResponse(BaseModel):
    """A navigable link embedded in a HATEOAS representation."""

    href: str
    rel: str
    method: str


class PaginationMetadata(BaseModel):
    """Paging position, serialized into the X-Pagination header."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_count: int
    page_size: int
    current_page: int
    total_pages: int


class ProblemDetails(BaseModel):
    """RFC 7807 problem document."""

    type: Optional[str] = None
    title: str
    status: int
    detail: Optional[str] = None
    instance: Optional[str] = None
    errors: dict[str, list[str]] = {}


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: dict

    @classmethod
    def create(cls, code: str, message: str, details: Optional[dict[str, Any]] = None):
        """Create error response with standard format."""
        return cls(
            error={"code": code, "message": message, "details": details or {}}
        )
