from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# ===== Course Request Schemas =====


class CourseManipulation(BaseModel):
    """Fields shared by course creation and update payloads."""

    title: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=1500)

    @model_validator(mode="after")
    def title_differs_from_description(self):
        if self.description is not None and self.title == self.description:
            raise ValueError("The provided description should be different from the title.")
        return self


class CourseCreate(CourseManipulation):
    """Request schema for creating a course."""


class CourseUpdate(CourseManipulation):
    """Request schema for a full course update (PUT, and the target of PATCH)."""

    description: str = Field(..., max_length=1500)


class CoursePatchResult(CourseUpdate):
    """A course update produced by applying a JSON Patch; unknown fields are rejected."""

    model_config = ConfigDict(extra="forbid")


# ===== Author Request Schemas =====


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes as UTC and normalize aware ones to UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class AuthorCreate(BaseModel):
    """Request schema for creating an author, optionally with courses."""

    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    date_of_birth: datetime
    main_category: str = Field(..., min_length=1, max_length=50)
    courses: List[CourseCreate] = []

    @field_validator("date_of_birth")
    @classmethod
    def date_of_birth_in_utc(cls, v: datetime) -> datetime:
        return as_utc(v)


class AuthorCreateWithDateOfDeath(AuthorCreate):
    """Creation payload that also accepts a date of death."""

    date_of_death: Optional[datetime] = None

    @field_validator("date_of_death")
    @classmethod
    def date_of_death_in_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return as_utc(v)
