"""
Dynamic sorting driven by an ``orderBy`` query string.

``build_sort_instructions`` turns ``"name, age desc"`` into typed
instructions against storage fields and ``apply_sort`` renders them as SQL
``ORDER BY`` columns.
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Type

from sqlalchemy import Select

from course_library.exceptions import InvalidSortFieldError
from course_library.helpers.property_mapping import PropertyMapping, field_name_from_clause


@dataclass(frozen=True)
class SortInstruction:
    field: str
    descending: bool = False


def build_sort_instructions(order_by: Optional[str], mapping: PropertyMapping) -> List[SortInstruction]:
    """Translate an orderBy string into storage-level sort instructions.

    The returned list is in priority order: the first clause of ``order_by``
    becomes the primary key. Clauses are walked last-to-first and each
    clause's keys are put in front of what was collected so far.

    Raises:
        InvalidSortFieldError: If a clause names an unmapped field
    """
    if order_by is None or not order_by.strip():
        return []

    instructions: List[SortInstruction] = []
    for clause in reversed(order_by.split(",")):
        trimmed = clause.strip()
        descending = trimmed.endswith(" desc")
        property_name = field_name_from_clause(trimmed)

        value = mapping.get(property_name)
        if value is None:
            raise InvalidSortFieldError(property_name)

        if value.revert:
            descending = not descending

        instructions = [
            SortInstruction(destination, descending)
            for destination in value.destination_properties
        ] + instructions

    return instructions


def apply_sort(
    statement: Select,
    order_by: Optional[str],
    mapping: PropertyMapping,
    model: Type[Any],
) -> Select:
    """Add ORDER BY columns for ``order_by`` to a select on ``model``."""
    instructions = build_sort_instructions(order_by, mapping)
    if not instructions:
        return statement

    columns = []
    for instruction in instructions:
        column = getattr(model, instruction.field)
        columns.append(column.desc() if instruction.descending else column.asc())
    return statement.order_by(*columns)
