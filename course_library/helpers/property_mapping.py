"""
Property mapping registry.

Translates the field names a client sees on a representation (and uses in
``orderBy`` query strings) into the storage fields of the entity behind it.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from course_library.exceptions import PropertyMappingNotFoundError
from course_library.models import Author
from course_library.schemas.responses import AuthorResponse


def normalize_field_name(name: str) -> str:
    """Lookup key matching a field name regardless of case or snake/camel spelling."""
    return name.strip().replace("_", "").lower()


@dataclass(frozen=True)
class PropertyMappingValue:
    """Storage fields backing one exposed field.

    ``revert`` flips the requested sort direction, e.g. ascending age is
    descending date of birth.
    """

    destination_properties: List[str]
    revert: bool = False


@dataclass
class PropertyMapping:
    """Lookup table for one (source, destination) pair.

    Names match case-insensitively and in either snake_case or camelCase,
    so ``main_category`` and ``mainCategory`` are the same field.
    """

    source: type
    destination: type
    mapping: Dict[str, PropertyMappingValue] = field(default_factory=dict)

    def __post_init__(self):
        self._entries = {normalize_field_name(name): value for name, value in self.mapping.items()}

    def __contains__(self, name: str) -> bool:
        return normalize_field_name(name) in self._entries

    def __getitem__(self, name: str) -> PropertyMappingValue:
        return self._entries[normalize_field_name(name)]

    def get(self, name: str) -> Optional[PropertyMappingValue]:
        return self._entries.get(normalize_field_name(name))

    def __iter__(self) -> Iterator[str]:
        return iter(self.mapping)


def field_name_from_clause(clause: str) -> str:
    """Trim a comma-separated token and drop everything from its first space."""
    trimmed = clause.strip()
    index_of_first_space = trimmed.find(" ")
    return trimmed if index_of_first_space == -1 else trimmed[:index_of_first_space]


AUTHOR_PROPERTY_MAPPING = {
    "id": PropertyMappingValue(["id"]),
    "main_category": PropertyMappingValue(["main_category"]),
    "age": PropertyMappingValue(["date_of_birth"], revert=True),
    "name": PropertyMappingValue(["first_name", "last_name"]),
}


class PropertyMappingService:
    """Registry of property mappings keyed by (exposed type, storage type)."""

    def __init__(self, mappings: Optional[List[PropertyMapping]] = None):
        if mappings is None:
            mappings = [PropertyMapping(AuthorResponse, Author, AUTHOR_PROPERTY_MAPPING)]
        self._mappings: Dict[Tuple[type, type], PropertyMapping] = {
            (m.source, m.destination): m for m in mappings
        }

    def get_mapping(self, source: type, destination: type) -> PropertyMapping:
        """Return the mapping for the pair.

        Raises:
            PropertyMappingNotFoundError: If no mapping was registered
        """
        try:
            return self._mappings[(source, destination)]
        except KeyError:
            raise PropertyMappingNotFoundError(source, destination) from None

    def mapping_is_valid(self, source: type, destination: type, fields: Optional[str]) -> bool:
        """Check every name in a fields or orderBy string exists in the mapping."""
        mapping = self.get_mapping(source, destination)
        if fields is None or not fields.strip():
            return True

        return all(field_name_from_clause(clause) in mapping for clause in fields.split(","))
