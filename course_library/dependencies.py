from functools import lru_cache
from typing import Optional

from fastapi import Depends, Query
from sqlmodel.ext.asyncio.session import AsyncSession

from course_library.config import settings
from course_library.database import get_session
from course_library.helpers.property_mapping import PropertyMappingService
from course_library.services.author_service import AuthorService
from course_library.services.course_service import CourseService


class AuthorsResourceParameters:
    """Query parameters for the author collection."""

    def __init__(
        self,
        main_category: Optional[str] = Query(
            None, alias="mainCategory", description="Filter by exact main category"
        ),
        search_query: Optional[str] = Query(
            None, alias="searchQuery", description="Substring search over names and category"
        ),
        order_by: Optional[str] = Query(
            None, alias="orderBy", description="Comma-separated fields, each optionally followed by ' desc'"
        ),
        page_number: int = Query(1, alias="pageNumber", ge=1, description="1-based page number"),
        page_size: int = Query(
            settings.DEFAULT_PAGE_SIZE,
            alias="pageSize",
            ge=1,
            description=f"Items per page (capped at {settings.MAX_PAGE_SIZE})",
        ),
        fields: Optional[str] = Query(None, description="Comma-separated fields to return"),
    ):
        self.main_category = main_category
        self.search_query = search_query
        self.order_by = order_by
        self.page_number = page_number
        self.page_size = min(page_size, settings.MAX_PAGE_SIZE)
        self.fields = fields


@lru_cache()
def get_property_mapping_service() -> PropertyMappingService:
    return PropertyMappingService()


def get_author_service(
    session: AsyncSession = Depends(get_session),
    property_mapping_service: PropertyMappingService = Depends(get_property_mapping_service),
) -> AuthorService:
    return AuthorService(session, property_mapping_service)


def get_course_service(session: AsyncSession = Depends(get_session)) -> CourseService:
    return CourseService(session)
