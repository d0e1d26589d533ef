import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError

from course_library.config import settings
from course_library.routers import author_collections, authors, courses, health, root
from course_library.schemas.common import ErrorResponse, ProblemDetails

logger = logging.getLogger(__name__)

VALIDATION_PROBLEM_TYPE = "https://courselibrary.com/modelvalidationproblem"
UNEXPECTED_FAULT_MESSAGE = "An unexpected fault happened. Try again later."

# Errors where the input could not be read at all, as opposed to a
# well-formed request whose content fails validation.
INPUT_ERROR_LOCATIONS = {"path", "query", "header", "cookie"}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    logging.basicConfig(level=settings.LOG_LEVEL.upper())
    logger.info(f"Starting {settings.API_TITLE} {settings.API_VERSION} ({settings.ENV})")
    yield
    logger.info(f"Stopping {settings.API_TITLE}")


app = FastAPI(
    title=settings.API_TITLE,
    version=settings.API_VERSION,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Pagination", "Location"],
)


def _error_key(loc) -> str:
    parts = [str(part) for part in loc if part != "body"]
    return ".".join(parts) or "body"


# Global exception handlers
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Turn binding and validation failures into a problem document."""
    errors: dict[str, list[str]] = {}
    unreadable_input = False
    for error in exc.errors():
        loc = error.get("loc", ())
        if error.get("type") == "json_invalid" or (loc and loc[0] in INPUT_ERROR_LOCATIONS):
            unreadable_input = True
        errors.setdefault(_error_key(loc), []).append(error.get("msg", ""))

    if unreadable_input:
        problem = ProblemDetails(
            title="One or more errors on input occurred.",
            status=status.HTTP_400_BAD_REQUEST,
            detail="See the errors field for details.",
            instance=request.url.path,
            errors=errors,
        )
    else:
        problem = ProblemDetails(
            type=VALIDATION_PROBLEM_TYPE,
            title="One or more validation errors occurred.",
            status=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="See the errors field for details.",
            instance=request.url.path,
            errors=errors,
        )

    return JSONResponse(
        status_code=problem.status,
        content=problem.model_dump(exclude_none=True),
        media_type="application/problem+json",
    )


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    """Handle database integrity errors (FK violations, unique constraints, etc.)."""
    error_msg = str(exc.orig) if exc.orig else str(exc)

    # Check for foreign key violation
    if "foreign key" in error_msg.lower() or "ForeignKeyViolation" in error_msg:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=ErrorResponse.create(
                code="FOREIGN_KEY_VIOLATION",
                message="Referenced resource does not exist",
                details={"error": error_msg},
            ).model_dump(),
        )

    # Check for unique constraint violation
    if "unique" in error_msg.lower() or "UniqueViolation" in error_msg:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content=ErrorResponse.create(
                code="UNIQUE_VIOLATION",
                message="Resource already exists",
                details={"error": error_msg},
            ).model_dump(),
        )

    # Other integrity errors
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=ErrorResponse.create(
            code="INTEGRITY_ERROR",
            message="Database integrity constraint violated",
            details={"error": error_msg},
        ).model_dump(),
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle uncaught exceptions with a static message."""
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    details = {"error": str(exc)} if settings.ENV == "development" else None
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse.create(
            code="INTERNAL_SERVER_ERROR",
            message=UNEXPECTED_FAULT_MESSAGE,
            details=details,
        ).model_dump(),
    )


# Routers
app.include_router(health.router, tags=["Health"])
app.include_router(root.router, tags=["Root"])
# Registered before the authors router so "/api/authors/(ids)" is not
# captured by "/api/authors/{author_id}".
app.include_router(author_collections.router, tags=["Author Collections"])
app.include_router(authors.router, prefix="/api/authors", tags=["Authors"])
app.include_router(
    courses.router, prefix="/api/authors/{author_id}/courses", tags=["Courses"]
)
