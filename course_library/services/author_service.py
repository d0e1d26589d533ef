import logging
import uuid
from typing import Iterable, List, Optional

from sqlmodel import or_, select
from sqlmodel.ext.asyncio.session import AsyncSession

from course_library.helpers.paging import PagedList
from course_library.helpers.property_mapping import PropertyMappingService
from course_library.helpers.sorting import apply_sort
from course_library.models import Author
from course_library.schemas.responses import AuthorResponse
from course_library.services.base import BaseCRUDService

logger = logging.getLogger(__name__)

DEFAULT_ORDER_BY = "name"


class AuthorService(BaseCRUDService[Author]):
    """Author queries and mutations."""

    def __init__(self, session: AsyncSession, property_mapping_service: PropertyMappingService):
        super().__init__(session, Author)
        self.property_mapping_service = property_mapping_service

    async def get_authors(self, params) -> PagedList[Author]:
        """Get one page of authors, filtered, searched and sorted.

        Args:
            params: AuthorsResourceParameters (main_category, search_query,
                order_by, page_number, page_size)

        Returns:
            PagedList of authors
        """
        query = select(Author)

        if params.main_category and params.main_category.strip():
            main_category = params.main_category.strip()
            query = query.where(Author.main_category == main_category)

        if params.search_query and params.search_query.strip():
            search_query = params.search_query.strip()
            query = query.where(
                or_(
                    Author.main_category.contains(search_query, autoescape=True),
                    Author.first_name.contains(search_query, autoescape=True),
                    Author.last_name.contains(search_query, autoescape=True),
                )
            )

        order_by = params.order_by or DEFAULT_ORDER_BY
        mapping = self.property_mapping_service.get_mapping(AuthorResponse, Author)
        query = apply_sort(query, order_by, mapping, Author)

        return await PagedList.create(
            self.session, query, params.page_number, params.page_size
        )

    async def get_authors_by_ids(self, author_ids: Iterable[uuid.UUID]) -> List[Author]:
        """Get the authors with the given ids, ordered by first then last name."""
        if author_ids is None:
            raise ValueError("author_ids must not be None")

        query = (
            select(Author)
            .where(Author.id.in_(list(author_ids)))
            .order_by(Author.first_name, Author.last_name)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_author(self, author_id: uuid.UUID) -> Optional[Author]:
        return await self.get_by_id(author_id)

    async def author_exists(self, author_id: uuid.UUID) -> bool:
        return await self.exists(author_id)

    def add_author(self, author: Author) -> Author:
        """Stage an author and its nested courses under fresh identifiers."""
        if author is None:
            raise ValueError("author must not be None")

        author.id = uuid.uuid4()
        for course in author.courses:
            course.id = uuid.uuid4()
            course.author_id = author.id

        logger.info(f"Adding author {author.id} with {len(author.courses)} course(s)")
        return self.add(author)

    async def delete_author(self, author: Author) -> None:
        if author is None:
            raise ValueError("author must not be None")

        logger.info(f"Deleting author {author.id} and their courses")
        await self.delete(author)
