"""
Header-to-schema column mapping for txtdata.

A table schema is a closed ``enum.Enum`` of the columns a loader needs.
The first row of a data file names the physical columns; this module
reduces that header to a list of ``ColumnDefinition`` entries, one per
schema column, in physical order. Each entry records how many irrelevant
cells sit between it and the previous schema column (its skip length), so
a row cursor can jump straight from one required cell to the next.

The caller's mapping function is pure and returns a tagged result:
``Mapped(column)`` for a recognised name, ``UNKNOWN`` otherwise. Whether
an unknown name is skipped or fatal is decided here, by ``closed``.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Generic, TypeVar

from txtdata.exceptions import (
    DuplicateColumnError,
    MissingColumnError,
    UnknownColumnError,
)

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=enum.Enum)


@dataclass(frozen=True)
class Mapped(Generic[E]):
    """A header name recognised as schema column ``column``."""

    column: E


class Unknown:
    """A header name the schema does not recognise."""

    _instance: Unknown | None = None

    def __new__(cls) -> Unknown:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNKNOWN"


UNKNOWN = Unknown()

ColumnMapping = Mapped | Unknown
NameToColumn = Callable[[str], ColumnMapping]


@dataclass(frozen=True)
class ColumnDefinition(Generic[E]):
    """Where one schema column sits in a specific file.

    Attributes:
        column: The schema enumerator.
        skip_length: Unmapped cells between the previous schema column (or
            the start of the row) and this one.
        index: Physical cell index of this column in every row.
    """

    column: E
    skip_length: int
    index: int


def column_mapper(names: Mapping[str, E]) -> NameToColumn:
    """Build a pure name-to-column function from a lookup table."""

    def _map(name: str) -> ColumnMapping:
        column = names.get(name)
        if column is None:
            return UNKNOWN
        return Mapped(column)

    return _map


def build_columns(
    header: Iterable[str],
    name_to_column: NameToColumn,
    column_type: type[E],
    *,
    closed: bool = True,
    resource: str = "<unnamed>",
) -> list[ColumnDefinition[E]]:
    """Reduce a header row to column definitions.

    Walks the header left to right keeping a count of unmapped cells seen
    since the last mapped one. A mapped cell records that count as its
    skip length and resets it.

    Args:
        header: Header cell names in physical order.
        name_to_column: Pure mapping from header name to ``Mapped`` or
            ``UNKNOWN``.
        column_type: The schema enum; every member must appear exactly once.
        closed: If True, an unknown header name is fatal. If False, it is
            counted as a skippable cell.
        resource: Resource name used in diagnostics.

    Returns:
        Column definitions in physical header order.

    Raises:
        UnknownColumnError: A header name is not recognised by a closed schema.
        DuplicateColumnError: A schema column appears twice.
        MissingColumnError: A schema column never appears.
    """
    columns: list[ColumnDefinition[E]] = []
    seen: set[E] = set()
    unmapped = 0

    for index, name in enumerate(header):
        mapping = name_to_column(name)
        if isinstance(mapping, Unknown):
            if closed:
                raise UnknownColumnError(
                    f"Unknown column {name!r} in header of {resource} at column {index}",
                    resource,
                    name,
                )
            logger.debug("%s: skipping unmapped column %r at %d", resource, name, index)
            unmapped += 1
            continue

        column = mapping.column
        if column in seen:
            raise DuplicateColumnError(
                f"Duplicate column {name!r} in header of {resource} at column {index}",
                resource,
                name,
            )
        seen.add(column)
        columns.append(ColumnDefinition(column, unmapped, index))
        unmapped = 0

    missing = [member for member in column_type if member not in seen]
    if missing:
        names = ", ".join(member.name for member in missing)
        raise MissingColumnError(
            f"Missing column(s) {names} in header of {resource}",
            resource,
            missing[0].name,
        )

    logger.debug(
        "%s: mapped %d schema columns (%s)",
        resource,
        len(columns),
        ", ".join(f"{c.column.name}+{c.skip_length}" for c in columns),
    )
    return columns


def skip_lengths_by_column(columns: Iterable[ColumnDefinition[E]]) -> dict[E, int]:
    """Skip lengths keyed by schema column, in the enum's declaration order."""
    by_column = {definition.column: definition.skip_length for definition in columns}
    if not by_column:
        return {}
    column_type = type(next(iter(by_column)))
    return {member: by_column[member] for member in column_type if member in by_column}
