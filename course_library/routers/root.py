from typing import List

from fastapi import APIRouter, Request

from course_library.helpers.links import create_links_for_root
from course_library.schemas.common import LinkResponse

router = APIRouter()


@router.get("/api", response_model=List[LinkResponse], name="get_root")
async def get_root(request: Request):
    """Entry point listing the top-level resources."""
    return create_links_for_root(request)
