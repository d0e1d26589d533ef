import math
from typing import Generic, List, TypeVar

from sqlalchemy import Select, func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from course_library.schemas.common import PaginationMetadata

T = TypeVar("T")


class PagedList(Generic[T]):
    """One page of a larger collection plus its position metadata."""

    def __init__(self, items: List[T], total_count: int, page_number: int, page_size: int):
        self.items = items
        self.total_count = total_count
        self.page_size = page_size
        self.current_page = page_number
        self.total_pages = math.ceil(total_count / page_size)

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    def __iter__(self):
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def pagination_metadata(self) -> PaginationMetadata:
        return PaginationMetadata(
            total_count=self.total_count,
            page_size=self.page_size,
            current_page=self.current_page,
            total_pages=self.total_pages,
        )

    @classmethod
    async def create(
        cls,
        session: AsyncSession,
        statement: Select,
        page_number: int,
        page_size: int,
    ) -> "PagedList":
        """Count ``statement`` and fetch the requested page of it.

        Args:
            session: Database session
            statement: Filtered and ordered select
            page_number: 1-based page number
            page_size: Number of items per page

        Returns:
            PagedList with the page items and metadata
        """
        count_query = select(func.count()).select_from(statement.order_by(None).subquery())
        total_result = await session.execute(count_query)
        total_count = total_result.scalar_one()

        page_query = statement.offset((page_number - 1) * page_size).limit(page_size)
        result = await session.execute(page_query)
        items = list(result.scalars().all())

        return cls(items, total_count, page_number, page_size)

