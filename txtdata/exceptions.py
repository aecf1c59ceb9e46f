"""
Custom exception hierarchy for txtdata.

Three families mirror the three places a game data load can break:

- Resource errors: the named resource is missing or unreadable.
- Schema errors: the header or a row does not have the shape the table
  schema requires (unknown, missing or duplicate columns, short rows).
- Field errors: a single cell cannot be converted to the requested type.

The low-level parsers in ``txtdata.parsers.numbers`` never raise; they
return result objects. Only the loading layer turns a failed result into
one of these exceptions, so every load either completes or aborts with a
diagnostic naming the resource, the column and the offending cell text.
"""

from __future__ import annotations

import enum


class TxtDataError(Exception):
    """Base exception for all txtdata errors."""


class ConfigValidationError(TxtDataError):
    """Raised when a txtdata YAML config is empty or inconsistent."""


# ---------------------------------------------------------------------------
# Resource errors
# ---------------------------------------------------------------------------

class ResourceError(TxtDataError):
    """Raised when a resource cannot be opened."""

    def __init__(self, message: str, resource: str) -> None:
        super().__init__(message)
        self.resource = resource


class ResourceNotFoundError(ResourceError):
    """The resource loader has no resource with the requested name."""


class ResourceReadError(ResourceError):
    """The resource exists but could not be read or decoded."""


class InvalidResourceNameError(ResourceError):
    """The resource name climbs out of the resource root (``..``)."""


# ---------------------------------------------------------------------------
# Schema errors
# ---------------------------------------------------------------------------

class SchemaError(TxtDataError):
    """Raised when a table's structure does not match its schema.

    Attributes:
        resource: Name of the resource being loaded.
        column: Header name (or schema column name) involved, if any.
    """

    def __init__(self, message: str, resource: str, column: str | None = None) -> None:
        super().__init__(message)
        self.resource = resource
        self.column = column


class UnknownColumnError(SchemaError):
    """A header cell is not recognised by a closed schema."""


class MissingColumnError(SchemaError):
    """A schema column never appears in the header."""


class DuplicateColumnError(SchemaError):
    """A schema column appears more than once in the header."""


class NotEnoughColumnsError(SchemaError):
    """A data row ends before a cell the schema requires."""


# ---------------------------------------------------------------------------
# Field errors
# ---------------------------------------------------------------------------

class FieldErrorKind(enum.Enum):
    """Why a single cell failed to convert."""

    PARSE_FAILURE = "parse_failure"
    OUT_OF_RANGE = "out_of_range"
    INVALID_VALUE = "invalid_value"


_FIELD_ERROR_TEMPLATES = {
    FieldErrorKind.PARSE_FAILURE: "Non-numeric value {text!r} for {column}",
    FieldErrorKind.OUT_OF_RANGE: "Out of range value {text!r} for {column}",
    FieldErrorKind.INVALID_VALUE: "Invalid value {text!r} for {column}",
}


class FieldError(TxtDataError):
    """Raised when a cell of trusted build-time data is malformed.

    Attributes:
        kind: The ``FieldErrorKind`` describing the failure.
        resource: Name of the resource being loaded.
        column: Schema column name the cell belongs to.
        text: The raw cell text.
        row: Row index in the file (the header is row 0).
        column_index: Physical cell index within the row.
    """

    def __init__(
        self,
        kind: FieldErrorKind,
        resource: str,
        column: str,
        text: str,
        row: int,
        column_index: int,
    ) -> None:
        message = _FIELD_ERROR_TEMPLATES[kind].format(text=text, column=column)
        super().__init__(
            f"{message} in {resource} at row {row} and column {column_index}"
        )
        self.kind = kind
        self.resource = resource
        self.column = column
        self.text = text
        self.row = row
        self.column_index = column_index
