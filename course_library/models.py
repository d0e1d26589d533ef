import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field, Relationship, SQLModel


# ===== Author =====
class Author(SQLModel, table=True):
    __tablename__ = "authors"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    first_name: str = Field(max_length=50)
    last_name: str = Field(max_length=50)
    date_of_birth: datetime = Field(sa_type=DateTime(timezone=True))
    date_of_death: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))
    main_category: str = Field(max_length=50)

    # Relationships
    courses: list["Course"] = Relationship(
        back_populates="author",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )


# ===== Course =====
class Course(SQLModel, table=True):
    __tablename__ = "courses"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    title: str = Field(max_length=100)
    description: Optional[str] = Field(default=None, max_length=1500)
    author_id: uuid.UUID = Field(foreign_key="authors.id", ondelete="CASCADE", index=True)

    # Relationships
    author: Optional[Author] = Relationship(back_populates="courses")
