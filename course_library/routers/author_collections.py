import uuid
from typing import List

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from course_library.dependencies import get_author_service
from course_library.exceptions import BadRequestException, NotFoundException
from course_library.models import Author, Course
from course_library.schemas.requests import AuthorCreate
from course_library.schemas.responses import AuthorResponse
from course_library.services.author_service import AuthorService

router = APIRouter()


def parse_id_list(ids: str) -> List[uuid.UUID]:
    """Parse ``"id1,id2"`` into UUIDs, rejecting empty or malformed lists."""
    parts = [part.strip() for part in ids.split(",") if part.strip()]
    if not parts:
        raise BadRequestException("At least one author id is required")
    try:
        return [uuid.UUID(part) for part in parts]
    except ValueError:
        raise BadRequestException(f"'{ids}' is not a list of author ids") from None


@router.get(
    "/api/authors/({ids})",
    response_model=List[AuthorResponse],
    name="get_author_collection",
)
async def get_author_collection(
    ids: str,
    service: AuthorService = Depends(get_author_service),
):
    """Get several authors at once; 404 unless every id resolves."""
    author_ids = list(dict.fromkeys(parse_id_list(ids)))

    authors = await service.get_authors_by_ids(author_ids)
    if len(authors) != len(author_ids):
        raise NotFoundException("One or more authors were not found")

    return [AuthorResponse.from_entity(author) for author in authors]


@router.post("/api/authorcollections", name="create_author_collection")
async def create_author_collection(
    request: Request,
    author_collection: List[AuthorCreate],
    service: AuthorService = Depends(get_author_service),
):
    """Create several authors in one request."""
    authors = []
    for author_create in author_collection:
        author = Author(**author_create.model_dump(exclude={"courses"}))
        author.courses = [Course(**course.model_dump()) for course in author_create.courses]
        authors.append(service.add_author(author))
    await service.save()

    ids = ",".join(str(author.id) for author in authors)
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=jsonable_encoder([AuthorResponse.from_entity(author) for author in authors]),
        headers={"Location": str(request.url_for("get_author_collection", ids=ids))},
    )


@router.options("/api/authorcollections")
async def get_author_collection_options():
    """List the methods the author collection resource supports."""
    return Response(headers={"Allow": "GET,OPTIONS,POST"})
