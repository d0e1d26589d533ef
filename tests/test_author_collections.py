"""
Tests for Author Collections API endpoints.

Endpoints tested:
- GET /api/authors/({ids}) - Get several authors by a comma-separated id list
- POST /api/authorcollections - Create several authors at once
- OPTIONS /api/authorcollections - Allowed methods
"""

import uuid

from httpx import AsyncClient
from sqlmodel.ext.asyncio.session import AsyncSession

from course_library.models import Author, Course
from tests.utils import assert_status_code, assert_validation_problem, count_records


class TestGetAuthorCollection:
    """Test GET /api/authors/({ids})."""

    async def test_get_author_collection(self, client: AsyncClient, author_factory):
        # Arrange
        first = await author_factory(first_name="Nancy")
        second = await author_factory(first_name="Eli")
        await author_factory(first_name="Unrequested")

        # Act
        response = await client.get(f"/api/authors/({first.id},{second.id})")

        # Assert
        assert_status_code(response, 200)
        data = response.json()
        assert [a["id"] for a in data] == [str(second.id), str(first.id)]
        assert data[0]["name"] == "Eli Griffin Beak Eldritch"

    async def test_duplicate_ids_are_returned_once(self, client: AsyncClient, author_factory):
        author = await author_factory()

        response = await client.get(f"/api/authors/({author.id}, {author.id})")

        assert_status_code(response, 200)
        assert len(response.json()) == 1

    async def test_unknown_id_is_not_found(self, client: AsyncClient, author_factory):
        author = await author_factory()

        response = await client.get(f"/api/authors/({author.id},{uuid.uuid4()})")

        assert_status_code(response, 404)

    async def test_malformed_id_list(self, client: AsyncClient):
        response = await client.get("/api/authors/(not-a-guid,also-not)")

        assert_status_code(response, 400)

    async def test_empty_id_list(self, client: AsyncClient):
        for path in ["/api/authors/()", "/api/authors/(,)"]:
            response = await client.get(path)
            assert_status_code(response, 400)


class TestCreateAuthorCollection:
    """Test POST and OPTIONS /api/authorcollections."""

    async def test_create_author_collection(
        self, client: AsyncClient, test_session: AsyncSession
    ):
        # Arrange
        payload = [
            {
                "first_name": "Anne",
                "last_name": "Bonny",
                "date_of_birth": "1697-03-08T00:00:00",
                "main_category": "Ships",
                "courses": [{"title": "Disguises at Sea"}],
            },
            {
                "first_name": "Mary",
                "last_name": "Read",
                "date_of_birth": "1685-01-01T00:00:00",
                "main_category": "Rum",
            },
        ]

        # Act
        response = await client.post("/api/authorcollections", json=payload)

        # Assert
        assert_status_code(response, 201)
        created = response.json()
        assert [a["name"] for a in created] == ["Anne Bonny", "Mary Read"]
        assert await count_records(test_session, Author) == 2
        assert await count_records(test_session, Course) == 1

        location = response.headers["location"]
        ids = ",".join(a["id"] for a in created)
        assert location == f"http://test/api/authors/({ids})"

        fetched = await client.get(location)
        assert_status_code(fetched, 200)
        assert {a["id"] for a in fetched.json()} == {a["id"] for a in created}

    async def test_create_author_collection_invalid_item(
        self, client: AsyncClient, test_session: AsyncSession
    ):
        payload = [
            {
                "first_name": "Anne",
                "last_name": "Bonny",
                "date_of_birth": "1697-03-08T00:00:00",
                "main_category": "Ships",
            },
            {"first_name": "Mary"},
        ]

        response = await client.post("/api/authorcollections", json=payload)

        assert_validation_problem(response)
        assert "1.last_name" in response.json()["errors"]
        assert await count_records(test_session, Author) == 0

    async def test_options(self, client: AsyncClient):
        response = await client.options("/api/authorcollections")

        assert_status_code(response, 200)
        assert response.headers["allow"] == "GET,OPTIONS,POST"
