import uuid
from enum import Enum
from typing import List, Optional

from fastapi import Request

from course_library.schemas.common import LinkResponse


class ResourceUriType(Enum):
    PREVIOUS_PAGE = "previous_page"
    NEXT_PAGE = "next_page"
    CURRENT = "current"


def create_authors_resource_uri(request: Request, params, uri_type: ResourceUriType) -> str:
    """URL of a page of the author collection, keeping the other query params."""
    page_number = params.page_number
    if uri_type is ResourceUriType.PREVIOUS_PAGE:
        page_number -= 1
    elif uri_type is ResourceUriType.NEXT_PAGE:
        page_number += 1

    query = {
        "fields": params.fields,
        "orderBy": params.order_by,
        "pageNumber": page_number,
        "pageSize": params.page_size,
        "mainCategory": params.main_category,
        "searchQuery": params.search_query,
    }
    url = request.url_for("get_authors")
    return str(url.include_query_params(**{k: v for k, v in query.items() if v is not None}))


def create_links_for_author(
    request: Request, author_id: uuid.UUID, fields: Optional[str] = None
) -> List[LinkResponse]:
    self_url = request.url_for("get_author", author_id=str(author_id))
    if fields and fields.strip():
        self_url = self_url.include_query_params(fields=fields)

    return [
        LinkResponse(href=str(self_url), rel="self", method="GET"),
        LinkResponse(
            href=str(request.url_for("delete_author", author_id=str(author_id))),
            rel="delete_author",
            method="DELETE",
        ),
        LinkResponse(
            href=str(request.url_for("create_course_for_author", author_id=str(author_id))),
            rel="create_course_for_author",
            method="POST",
        ),
        LinkResponse(
            href=str(request.url_for("get_courses_for_author", author_id=str(author_id))),
            rel="courses",
            method="GET",
        ),
    ]


def create_links_for_authors(
    request: Request, params, has_next: bool, has_previous: bool
) -> List[LinkResponse]:
    links = [
        LinkResponse(
            href=create_authors_resource_uri(request, params, ResourceUriType.CURRENT),
            rel="self",
            method="GET",
        )
    ]
    if has_next:
        links.append(
            LinkResponse(
                href=create_authors_resource_uri(request, params, ResourceUriType.NEXT_PAGE),
                rel="nextPage",
                method="GET",
            )
        )
    if has_previous:
        links.append(
            LinkResponse(
                href=create_authors_resource_uri(request, params, ResourceUriType.PREVIOUS_PAGE),
                rel="previousPage",
                method="GET",
            )
        )
    return links


def create_links_for_root(request: Request) -> List[LinkResponse]:
    return [
        LinkResponse(href=str(request.url_for("get_root")), rel="self", method="GET"),
        LinkResponse(href=str(request.url_for("get_authors")), rel="authors", method="GET"),
        LinkResponse(href=str(request.url_for("create_author")), rel="create_author", method="POST"),
    ]
