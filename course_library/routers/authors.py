import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Header, Query, Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from course_library.dependencies import (
    AuthorsResourceParameters,
    get_author_service,
    get_property_mapping_service,
)
from course_library.exceptions import (
    BadRequestException,
    NotAcceptableException,
    NotFoundException,
    UnsupportedMediaTypeException,
)
from course_library.helpers.links import create_links_for_author, create_links_for_authors
from course_library.helpers.media_types import parse_media_type
from course_library.helpers.property_mapping import PropertyMappingService
from course_library.helpers.shaping import author_fields, author_full_fields
from course_library.helpers.validation import body_error, validate_body
from course_library.models import Author, Course
from course_library.schemas.requests import AuthorCreate, AuthorCreateWithDateOfDeath
from course_library.schemas.responses import AuthorFullResponse, AuthorResponse
from course_library.services.author_service import AuthorService

logger = logging.getLogger(__name__)

router = APIRouter()

AUTHOR_FULL_SUBTYPE = "vnd.marvin.author.full"

PRODUCED_MEDIA_TYPES = {
    "application/json",
    "application/vnd.marvin.hateoas+json",
    "application/vnd.marvin.author.full+json",
    "application/vnd.marvin.author.full.hateoas+json",
    "application/vnd.marvin.author.friendly+json",
    "application/vnd.marvin.author.friendly.hateoas+json",
}
WILDCARD_MEDIA_TYPES = {"*/*", "application/*"}

CREATION_MEDIA_TYPES = {
    "application/json": AuthorCreate,
    "application/vnd.marvin.authorforcreation+json": AuthorCreate,
    "application/vnd.marvin.authorforcreationwithdateofdeath+json": AuthorCreateWithDateOfDeath,
}


@router.api_route("", methods=["GET", "HEAD"], name="get_authors")
async def get_authors(
    request: Request,
    response: Response,
    params: AuthorsResourceParameters = Depends(),
    service: AuthorService = Depends(get_author_service),
    property_mapping_service: PropertyMappingService = Depends(get_property_mapping_service),
):
    """Get a page of authors with filtering, searching, sorting and data shaping."""
    if not property_mapping_service.mapping_is_valid(AuthorResponse, Author, params.order_by):
        logger.warning(f"Rejected author orderBy '{params.order_by}'")
        raise BadRequestException(f"Cannot sort authors by '{params.order_by}'")
    if not author_fields.has_fields(params.fields):
        logger.warning(f"Rejected author fields '{params.fields}'")
        raise BadRequestException(f"Unknown author fields in '{params.fields}'")

    authors = await service.get_authors(params)

    response.headers["X-Pagination"] = authors.pagination_metadata().model_dump_json(by_alias=True)

    shaped_authors = []
    for author in authors:
        shaped = author_fields.shape(AuthorResponse.from_entity(author), params.fields)
        shaped["links"] = create_links_for_author(request, author.id)
        shaped_authors.append(shaped)

    return {
        "value": shaped_authors,
        "links": create_links_for_authors(
            request, params, has_next=authors.has_next, has_previous=authors.has_previous
        ),
    }


@router.get("/{author_id}", name="get_author")
async def get_author(
    request: Request,
    author_id: uuid.UUID,
    fields: Optional[str] = Query(None, description="Comma-separated fields to return"),
    accept: Optional[str] = Header(None),
    service: AuthorService = Depends(get_author_service),
):
    """Get an author in the representation selected by the Accept header."""
    media_type = parse_media_type(accept or "application/json")
    if media_type is None:
        raise BadRequestException(f"Accept header '{accept}' is not a valid media type")
    if media_type.essence not in PRODUCED_MEDIA_TYPES | WILDCARD_MEDIA_TYPES:
        raise NotAcceptableException(f"Cannot produce '{media_type.essence}'")

    full = media_type.primary_subtype == AUTHOR_FULL_SUBTYPE
    registry = author_full_fields if full else author_fields
    if not registry.has_fields(fields):
        raise BadRequestException(f"Unknown author fields in '{fields}'")

    author = await service.get_author(author_id)
    if author is None:
        raise NotFoundException(f"Author with id {author_id} not found")

    representation = (
        AuthorFullResponse.model_validate(author) if full else AuthorResponse.from_entity(author)
    )
    body = registry.shape(representation, fields)
    if media_type.includes_links:
        body["links"] = create_links_for_author(request, author_id, fields)

    return JSONResponse(
        content=jsonable_encoder(body),
        media_type=media_type.essence if media_type.essence in PRODUCED_MEDIA_TYPES else "application/json",
    )


@router.post("", status_code=status.HTTP_201_CREATED, name="create_author")
async def create_author(
    request: Request,
    service: AuthorService = Depends(get_author_service),
):
    """Create an author (and nested courses).

    The Content-Type selects the payload: the date-of-death vendor type also
    accepts ``date_of_death``.
    """
    content_type = parse_media_type(request.headers.get("content-type"))
    if content_type is None or content_type.essence not in CREATION_MEDIA_TYPES:
        raise UnsupportedMediaTypeException(
            f"Unsupported Content-Type '{request.headers.get('content-type')}'"
        )
    schema = CREATION_MEDIA_TYPES[content_type.essence]

    try:
        payload = await request.json()
    except ValueError:
        raise body_error("json_invalid", "JSON decode error")
    author_create = validate_body(schema, payload)

    author = Author(**author_create.model_dump(exclude={"courses"}))
    author.courses = [Course(**course.model_dump()) for course in author_create.courses]
    service.add_author(author)
    await service.save()

    body = author_fields.shape(AuthorResponse.from_entity(author))
    body["links"] = create_links_for_author(request, author.id)

    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=jsonable_encoder(body),
        headers={"Location": str(request.url_for("get_author", author_id=str(author.id)))},
    )


@router.options("")
async def get_authors_options():
    """List the methods the author collection supports."""
    return Response(headers={"Allow": "GET,OPTIONS,POST"})


@router.delete("/{author_id}", status_code=status.HTTP_204_NO_CONTENT, name="delete_author")
async def delete_author(
    author_id: uuid.UUID,
    service: AuthorService = Depends(get_author_service),
):
    """Delete an author together with their courses."""
    author = await service.get_author(author_id)
    if author is None:
        raise NotFoundException(f"Author with id {author_id} not found")

    await service.delete_author(author)
    await service.save()
