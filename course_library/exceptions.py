from fastapi import HTTPException, status


class BadRequestException(HTTPException):
    """Malformed or unmapped client input (400)."""

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
        )


class NotFoundException(HTTPException):
    """Resource not found exception (404)."""

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
        )


class NotAcceptableException(HTTPException):
    """Requested representation cannot be produced (406)."""

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_406_NOT_ACCEPTABLE,
            detail=detail,
        )


class UnsupportedMediaTypeException(HTTPException):
    """Request body media type is not accepted by the endpoint (415)."""

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail=detail,
        )


# ===== Query-shaping errors =====
# Raised by the helpers; routers validate input first and translate
# client mistakes into BadRequestException.


class PropertyMappingNotFoundError(LookupError):
    """No property mapping registered for a (source, destination) pair."""

    def __init__(self, source: type, destination: type):
        super().__init__(
            f"Cannot find exact property mapping instance for "
            f"<{source.__name__},{destination.__name__}>"
        )
        self.source = source
        self.destination = destination


class InvalidSortFieldError(ValueError):
    """An orderBy clause names a field that has no mapping."""

    def __init__(self, field: str):
        super().__init__(f"Key mapping for {field} is missing")
        self.field = field


class FieldNotFoundError(LookupError):
    """A requested shaping field does not exist on the representation."""

    def __init__(self, field: str, model_name: str):
        super().__init__(f"Property {field} wasn't found on {model_name}")
        self.field = field
        self.model_name = model_name
