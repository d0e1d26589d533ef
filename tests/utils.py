"""
Test utility functions and assertions.

This module provides helper functions for common testing patterns:
- Response assertions (status codes, problem documents, pagination header)
- Database query helpers (counting, existence checks)
- Data comparison utilities
"""

import json
import uuid
from typing import Optional, Type

from httpx import Response
from sqlalchemy import func, select
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession


# =============================================================================
# Response assertion helpers
# =============================================================================


def assert_status_code(response: Response, expected: int):
    """
    Assert that the response has the expected status code.

    Args:
        response: The HTTP response
        expected: Expected status code

    Raises:
        AssertionError: If status code doesn't match
    """
    assert response.status_code == expected, (
        f"Expected status code {expected}, got {response.status_code}. "
        f"Response body: {response.text}"
    )


def assert_validation_problem(response: Response):
    """
    Assert that the response is a 422 validation problem document.

    Args:
        response: The HTTP response

    Raises:
        AssertionError: If not a validation problem
    """
    assert_status_code(response, 422)
    assert response.headers["content-type"].startswith("application/problem+json")
    data = response.json()
    assert data["type"] == "https://courselibrary.com/modelvalidationproblem"
    assert data["title"] == "One or more validation errors occurred."
    assert data["detail"] == "See the errors field for details."
    assert data["errors"], "Problem document should list the errors"


def assert_input_problem(response: Response):
    """Assert that the response is a 400 problem document for unreadable input."""
    assert_status_code(response, 400)
    assert response.headers["content-type"].startswith("application/problem+json")
    data = response.json()
    assert data["title"] == "One or more errors on input occurred."


def get_pagination_header(response: Response) -> dict:
    """
    Decode the X-Pagination header.

    Args:
        response: The HTTP response

    Returns:
        Pagination metadata with totalCount, pageSize, currentPage, totalPages
    """
    assert "x-pagination" in response.headers, "Response missing X-Pagination header"
    metadata = json.loads(response.headers["x-pagination"])
    for key in ("totalCount", "pageSize", "currentPage", "totalPages"):
        assert key in metadata, f"Pagination header missing '{key}'"
    return metadata


def link_rels(links: list[dict]) -> list[str]:
    return [link["rel"] for link in links]


# =============================================================================
# Database query helpers
# =============================================================================


async def count_records(session: AsyncSession, model_class: Type[SQLModel]) -> int:
    """
    Count the number of records for a given model.

    Args:
        session: Database session
        model_class: SQLModel class to count

    Returns:
        Number of records
    """
    result = await session.execute(select(func.count()).select_from(model_class))
    count = result.scalar_one()
    return count


async def get_record_by_id(
    session: AsyncSession, model_class: Type[SQLModel], record_id: uuid.UUID
) -> Optional[SQLModel]:
    """
    Get a record by its ID.

    Args:
        session: Database session
        model_class: SQLModel class
        record_id: ID of the record

    Returns:
        The record if found, None otherwise
    """
    result = await session.execute(
        select(model_class).where(model_class.id == record_id)
    )
    return result.scalar_one_or_none()


async def record_exists(
    session: AsyncSession, model_class: Type[SQLModel], record_id: uuid.UUID
) -> bool:
    """
    Check if a record exists by its ID.

    Args:
        session: Database session
        model_class: SQLModel class
        record_id: ID of the record

    Returns:
        True if record exists, False otherwise
    """
    record = await get_record_by_id(session, model_class, record_id)
    return record is not None


# =============================================================================
# Data comparison utilities
# =============================================================================


def assert_sorted_by(items: list[dict], field: str, descending: bool = False):
    """
    Assert that a list of items is sorted by a specific field.

    Args:
        items: List of dictionaries
        field: Field name to check sorting
        descending: If True, check descending order

    Raises:
        AssertionError: If list is not properly sorted
    """
    if len(items) < 2:
        return  # Nothing to check

    values = [item[field] for item in items]
    expected = sorted(values, reverse=descending)
    direction = "descending" if descending else "ascending"
    assert values == expected, (
        f"Items not sorted by '{field}' ({direction}). "
        f"Expected order: {expected}, got: {values}"
    )
