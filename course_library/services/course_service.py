import logging
import uuid
from typing import List, Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from course_library.models import Course
from course_library.services.base import BaseCRUDService

logger = logging.getLogger(__name__)


class CourseService(BaseCRUDService[Course]):
    """Course queries and mutations, always scoped to an author."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, Course)

    async def get_courses(self, author_id: uuid.UUID) -> List[Course]:
        """Get all courses of an author ordered by title."""
        query = (
            select(Course)
            .where(Course.author_id == author_id)
            .order_by(Course.title)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_course(self, author_id: uuid.UUID, course_id: uuid.UUID) -> Optional[Course]:
        query = select(Course).where(
            Course.author_id == author_id, Course.id == course_id
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    def add_course(self, author_id: uuid.UUID, course: Course) -> Course:
        """Stage a course for an author.

        A course that already carries an id (upsert through PUT/PATCH) keeps
        it; otherwise a fresh one is assigned.
        """
        if course is None:
            raise ValueError("course must not be None")

        course.author_id = author_id
        if course.id is None:
            course.id = uuid.uuid4()

        logger.info(f"Adding course {course.id} for author {author_id}")
        return self.add(course)

    def update_course(self, course: Course) -> Course:
        """Stage changes made to a tracked course; ``save`` writes them."""
        self.session.add(course)
        return course

    async def delete_course(self, course: Course) -> None:
        logger.info(f"Deleting course {course.id} of author {course.author_id}")
        await self.delete(course)
