from typing import Any, Type, TypeVar

from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

SchemaType = TypeVar("SchemaType", bound=BaseModel)


def validate_body(schema: Type[SchemaType], payload: Any) -> SchemaType:
    """Validate a request payload that was not bound by FastAPI itself.

    Failures are re-raised as ``RequestValidationError`` located under
    ``body`` so they reach the same problem-document handler as bound
    bodies.
    """
    try:
        return schema.model_validate(payload)
    except ValidationError as exc:
        errors = [{**error, "loc": ("body", *error["loc"])} for error in exc.errors()]
        raise RequestValidationError(errors, body=payload) from exc


def body_error(error_type: str, message: str, payload: Any = None) -> RequestValidationError:
    return RequestValidationError(
        [{"type": error_type, "loc": ("body",), "msg": message, "input": payload}],
        body=payload,
    )
