import uuid
from typing import Any, Dict, List

import jsonpatch
from fastapi import APIRouter, Body, Depends, Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from course_library.config import settings
from course_library.dependencies import get_author_service, get_course_service
from course_library.exceptions import NotFoundException
from course_library.helpers.validation import body_error, validate_body
from course_library.models import Course
from course_library.schemas.requests import CourseCreate, CoursePatchResult, CourseUpdate
from course_library.schemas.responses import CourseResponse
from course_library.services.author_service import AuthorService
from course_library.services.course_service import CourseService

router = APIRouter()


async def ensure_author_exists(author_id: uuid.UUID, author_service: AuthorService) -> None:
    if not await author_service.author_exists(author_id):
        raise NotFoundException(f"Author with id {author_id} not found")


def created_course_response(request: Request, course: Course) -> JSONResponse:
    location = request.url_for(
        "get_course_for_author", author_id=str(course.author_id), course_id=str(course.id)
    )
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=jsonable_encoder(CourseResponse.model_validate(course)),
        headers={"Location": str(location)},
    )


@router.get("", response_model=List[CourseResponse], name="get_courses_for_author")
async def get_courses_for_author(
    author_id: uuid.UUID,
    response: Response,
    author_service: AuthorService = Depends(get_author_service),
    course_service: CourseService = Depends(get_course_service),
):
    """Get all courses of an author."""
    await ensure_author_exists(author_id, author_service)

    courses = await course_service.get_courses(author_id)
    response.headers["Cache-Control"] = f"public, max-age={settings.COURSES_CACHE_MAX_AGE}"
    return courses


@router.get("/{course_id}", response_model=CourseResponse, name="get_course_for_author")
async def get_course_for_author(
    author_id: uuid.UUID,
    course_id: uuid.UUID,
    response: Response,
    author_service: AuthorService = Depends(get_author_service),
    course_service: CourseService = Depends(get_course_service),
):
    """Get a single course of an author."""
    await ensure_author_exists(author_id, author_service)

    course = await course_service.get_course(author_id, course_id)
    if course is None:
        raise NotFoundException(f"Course with id {course_id} not found")

    response.headers["Cache-Control"] = f"public, max-age={settings.COURSE_CACHE_MAX_AGE}"
    return course


@router.post(
    "",
    response_model=CourseResponse,
    status_code=status.HTTP_201_CREATED,
    name="create_course_for_author",
)
async def create_course_for_author(
    request: Request,
    author_id: uuid.UUID,
    course_create: CourseCreate,
    author_service: AuthorService = Depends(get_author_service),
    course_service: CourseService = Depends(get_course_service),
):
    """Create a course for an author."""
    await ensure_author_exists(author_id, author_service)

    course = course_service.add_course(author_id, Course(**course_create.model_dump()))
    await course_service.save()

    return created_course_response(request, course)


@router.put("/{course_id}", name="update_course_for_author")
async def update_course_for_author(
    request: Request,
    author_id: uuid.UUID,
    course_id: uuid.UUID,
    course_update: CourseUpdate,
    author_service: AuthorService = Depends(get_author_service),
    course_service: CourseService = Depends(get_course_service),
):
    """Replace a course, or create it under the given id (upsert)."""
    await ensure_author_exists(author_id, author_service)

    course = await course_service.get_course(author_id, course_id)
    if course is None:
        course = course_service.add_course(author_id, Course(id=course_id, **course_update.model_dump()))
        await course_service.save()
        return created_course_response(request, course)

    for field, value in course_update.model_dump().items():
        setattr(course, field, value)
    course_service.update_course(course)
    await course_service.save()

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{course_id}", name="partially_update_course_for_author")
async def partially_update_course_for_author(
    request: Request,
    author_id: uuid.UUID,
    course_id: uuid.UUID,
    patch_document: List[Dict[str, Any]] = Body(
        ..., description="RFC 6902 JSON Patch operations against the course update representation"
    ),
    author_service: AuthorService = Depends(get_author_service),
    course_service: CourseService = Depends(get_course_service),
):
    """Apply a JSON Patch to a course, or create it from the patch (upsert)."""
    await ensure_author_exists(author_id, author_service)

    course = await course_service.get_course(author_id, course_id)
    if course is None:
        document = {name: None for name in CourseUpdate.model_fields}
    else:
        document = {name: getattr(course, name) for name in CourseUpdate.model_fields}

    try:
        patched = jsonpatch.apply_patch(document, patch_document)
    except (jsonpatch.JsonPatchException, jsonpatch.JsonPointerException) as e:
        raise body_error("json_patch", str(e), patch_document) from e
    course_to_patch = validate_body(CoursePatchResult, patched)

    if course is None:
        course = course_service.add_course(author_id, Course(id=course_id, **course_to_patch.model_dump()))
        await course_service.save()
        return created_course_response(request, course)

    for field, value in course_to_patch.model_dump().items():
        setattr(course, field, value)
    course_service.update_course(course)
    await course_service.save()

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{course_id}", status_code=status.HTTP_204_NO_CONTENT, name="delete_course_for_author")
async def delete_course_for_author(
    author_id: uuid.UUID,
    course_id: uuid.UUID,
    author_service: AuthorService = Depends(get_author_service),
    course_service: CourseService = Depends(get_course_service),
):
    """Delete a course of an author."""
    await ensure_author_exists(author_id, author_service)

    course = await course_service.get_course(author_id, course_id)
    if course is None:
        raise NotFoundException(f"Course with id {course_id} not found")

    await course_service.delete_course(course)
    await course_service.save()
