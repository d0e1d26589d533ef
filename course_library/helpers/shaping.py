"""
Data shaping: return only the client-requested fields of a representation.

Each representation gets a ``FieldRegistry`` built once at import time, so
shaping is a lookup in an explicit name -> accessor table.
"""

from operator import attrgetter
from typing import Any, Callable, Dict, Optional, Type

from pydantic import BaseModel

from course_library.exceptions import FieldNotFoundError
from course_library.helpers.property_mapping import normalize_field_name
from course_library.schemas.responses import AuthorFullResponse, AuthorResponse


class FieldRegistry:
    """Canonical field names of one representation and how to read them."""

    def __init__(self, model_name: str, accessors: Dict[str, Callable[[Any], Any]]):
        self.model_name = model_name
        self._accessors = dict(accessors)
        self._canonical = {normalize_field_name(name): name for name in self._accessors}

    @classmethod
    def for_model(cls, model: Type[BaseModel]) -> "FieldRegistry":
        return cls(
            model.__name__,
            {name: attrgetter(name) for name in model.model_fields},
        )

    @property
    def field_names(self) -> list[str]:
        return list(self._accessors)

    def resolve(self, name: str) -> Optional[str]:
        """Canonical name for a field given in any case, snake_case or camelCase."""
        return self._canonical.get(normalize_field_name(name))

    def has_fields(self, fields: Optional[str]) -> bool:
        if fields is None or not fields.strip():
            return True
        return all(self.resolve(name) is not None for name in fields.split(","))

    def shape(self, source: Any, fields: Optional[str] = None) -> Dict[str, Any]:
        """Extract the requested fields of ``source`` into an ordered dict.

        Raises:
            FieldNotFoundError: If a requested field is not declared
        """
        if fields is None or not fields.strip():
            return {name: accessor(source) for name, accessor in self._accessors.items()}

        shaped: Dict[str, Any] = {}
        for requested in fields.split(","):
            name = self.resolve(requested)
            if name is None:
                raise FieldNotFoundError(requested.strip(), self.model_name)
            shaped[name] = self._accessors[name](source)
        return shaped


author_fields = FieldRegistry.for_model(AuthorResponse)
author_full_fields = FieldRegistry.for_model(AuthorFullResponse)
