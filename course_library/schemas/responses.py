import uuid
from datetime import date, datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict

from course_library.models import Author


def utc_date(value: datetime) -> date:
    """Calendar date in UTC; naive values are taken to be UTC already."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.date()


def get_current_age(date_of_birth: datetime, date_of_death: Optional[datetime] = None) -> int:
    """Whole years between birth and death, or between birth and today."""
    born = utc_date(date_of_birth)
    until = utc_date(date_of_death or datetime.now(timezone.utc))

    age = until.year - born.year
    if (until.month, until.day) < (born.month, born.day):
        age -= 1
    return age


# ===== Author Responses =====
class AuthorResponse(BaseModel):
    """Friendly author representation."""

    id: uuid.UUID
    name: str
    age: int
    main_category: str

    @classmethod
    def from_entity(cls, author: Author) -> "AuthorResponse":
        return cls(
            id=author.id,
            name=f"{author.first_name} {author.last_name}",
            age=get_current_age(author.date_of_birth, author.date_of_death),
            main_category=author.main_category,
        )


class AuthorFullResponse(BaseModel):
    """Full author representation."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    first_name: str
    last_name: str
    date_of_birth: datetime
    date_of_death: Optional[datetime] = None
    main_category: str


# ===== Course Response =====
class CourseResponse(BaseModel):
    """Course response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    description: Optional[str] = None
    author_id: uuid.UUID
