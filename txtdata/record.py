"""
Record and field access for txtdata.

A ``DataFileRecord`` is one data row: an ordered list of cell spans over
the text buffer owned by its ``DataFile``. A ``FieldCursor`` walks those
cells left to right and can jump ahead by a column's skip length. Each cell
is exposed as a ``DataFileField`` offering typed extraction.

``DataFileField.parse_int`` / ``parse_fixed6`` return result objects and
never raise. ``to_int`` / ``to_fixed6`` / ``invalid`` are the policy layer
used by table loaders: any failure becomes a ``FieldError`` naming the
resource, column, cell text and position.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import TypeVar

from txtdata.exceptions import FieldError, FieldErrorKind, NotEnoughColumnsError
from txtdata.parsers.header import ColumnDefinition
from txtdata.parsers.numbers import (
    FIXED6_SCALE,
    INT32,
    Fixed6,
    IntType,
    ParseIntError,
    ParseIntResult,
    parse_fixed6_fraction,
    parse_int,
)

E = TypeVar("E", bound=enum.Enum)

Span = tuple[int, int]

_FIELD_ERROR_KINDS = {
    ParseIntError.PARSE_FAILURE: FieldErrorKind.PARSE_FAILURE,
    ParseIntError.OUT_OF_RANGE: FieldErrorKind.OUT_OF_RANGE,
}


@dataclass(frozen=True)
class ParseFixed6Result:
    """Outcome of ``DataFileField.parse_fixed6``."""

    value: Fixed6 | None
    error: ParseIntError | None

    @property
    def ok(self) -> bool:
        return self.error is None


class DataFileField:
    """One cell of a data file, as a view into the file's text."""

    __slots__ = ("_text", "_start", "_end", "row", "column", "resource")

    def __init__(
        self,
        text: str,
        start: int,
        end: int,
        row: int,
        column: int,
        resource: str = "<unnamed>",
    ) -> None:
        self._text = text
        self._start = start
        self._end = end
        self.row = row
        self.column = column
        self.resource = resource

    def raw(self) -> str:
        """The unmodified cell text."""
        return self._text[self._start:self._end]

    def __str__(self) -> str:
        return self.raw()

    def __repr__(self) -> str:
        return f"DataFileField({self.raw()!r}, row={self.row}, column={self.column})"

    # -- Pure extraction ----------------------------------------------------

    def parse_int(
        self,
        int_type: IntType = INT32,
        min_value: int | None = None,
        max_value: int | None = None,
    ) -> ParseIntResult:
        """Parse the whole cell as an integer of ``int_type``.

        Trailing characters after the numeric prefix are a parse failure.
        """
        result = parse_int(
            self._text,
            min_value,
            max_value,
            int_type=int_type,
            start=self._start,
            end=self._end,
        )
        if result.ok and result.end != self._end:
            return ParseIntResult(None, ParseIntError.PARSE_FAILURE, result.end)
        return result

    def parse_fixed6(self) -> ParseFixed6Result:
        """Parse the whole cell as a signed decimal into a ``Fixed6``.

        The integer part must be present. A ``.`` introduces an optional
        fraction; without one the fraction is zero. The sign of the text
        applies to the fraction too, so ``-0.5`` is -32/64.
        """
        int_result = parse_int(self._text, int_type=INT32, start=self._start, end=self._end)
        if not int_result.ok:
            return ParseFixed6Result(None, int_result.error)

        pos = int_result.end
        fraction = 0
        if pos < self._end and self._text[pos] == ".":
            fraction, pos = parse_fixed6_fraction(self._text, pos + 1, self._end)

        if pos != self._end:
            return ParseFixed6Result(None, ParseIntError.PARSE_FAILURE)

        if self._text[self._start] == "-":
            fraction = -fraction
        raw = int_result.value * FIXED6_SCALE + fraction
        if raw < INT32.min or raw > INT32.max:
            return ParseFixed6Result(None, ParseIntError.OUT_OF_RANGE)
        return ParseFixed6Result(Fixed6(raw), None)

    # -- Fatal extraction ---------------------------------------------------

    def to_int(
        self,
        column_name: str,
        int_type: IntType = INT32,
        min_value: int | None = None,
        max_value: int | None = None,
    ) -> int:
        """Like ``parse_int`` but raises ``FieldError`` on failure."""
        result = self.parse_int(int_type, min_value, max_value)
        if not result.ok:
            raise self._error(_FIELD_ERROR_KINDS[result.error], column_name)
        return result.value

    def to_fixed6(self, column_name: str) -> Fixed6:
        """Like ``parse_fixed6`` but raises ``FieldError`` on failure."""
        result = self.parse_fixed6()
        if not result.ok:
            raise self._error(_FIELD_ERROR_KINDS[result.error], column_name)
        return result.value

    def parse_error(self, error: ParseIntError, column_name: str) -> FieldError:
        """Build the error for a failed ``parse_int`` or ``parse_fixed6`` result."""
        return self._error(_FIELD_ERROR_KINDS[error], column_name)

    def invalid(self, column_name: str) -> FieldError:
        """Build the error for a cell outside a closed set of literals."""
        return self._error(FieldErrorKind.INVALID_VALUE, column_name)

    def _error(self, kind: FieldErrorKind, column_name: str) -> FieldError:
        return FieldError(kind, self.resource, column_name, self.raw(), self.row, self.column)


class FieldCursor:
    """Position within a record; equal to ``record.end()`` once exhausted."""

    __slots__ = ("_record", "_index")

    def __init__(self, record: DataFileRecord, index: int) -> None:
        self._record = record
        self._index = index

    @property
    def index(self) -> int:
        return self._index

    @property
    def at_end(self) -> bool:
        return self._index >= len(self._record)

    @property
    def field(self) -> DataFileField:
        if self.at_end:
            raise IndexError(f"cursor is past the last cell of row {self._record.row}")
        return self._record[self._index]

    def advance(self, count: int = 1) -> FieldCursor:
        """Move ``count`` cells to the right, stopping at the end."""
        if count < 0:
            raise ValueError("a field cursor only moves forward")
        if count and self.at_end:
            raise IndexError(f"cannot advance past the end of row {self._record.row}")
        self._index = min(self._index + count, len(self._record))
        return self

    def __iadd__(self, count: int) -> FieldCursor:
        return self.advance(count)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldCursor):
            return NotImplemented
        return self._record is other._record and self._index == other._index

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"FieldCursor(row={self._record.row}, index={self._index})"


class DataFileRecord:
    """One row of a data file."""

    __slots__ = ("_text", "_spans", "row", "resource")

    def __init__(
        self,
        text: str,
        spans: Sequence[Span],
        row: int,
        resource: str = "<unnamed>",
    ) -> None:
        self._text = text
        self._spans = spans
        self.row = row
        self.resource = resource

    def __len__(self) -> int:
        return len(self._spans)

    def __getitem__(self, index: int) -> DataFileField:
        start, end = self._spans[index]
        if index < 0:
            index += len(self._spans)
        return DataFileField(self._text, start, end, self.row, index, self.resource)

    def __iter__(self) -> Iterator[DataFileField]:
        for index in range(len(self._spans)):
            yield self[index]

    def begin(self) -> FieldCursor:
        return FieldCursor(self, 0)

    def end(self) -> FieldCursor:
        return FieldCursor(self, len(self._spans))

    def cells(self) -> list[str]:
        """Raw text of every cell, in physical order."""
        return [self._text[start:end] for start, end in self._spans]

    def walk(
        self, columns: Sequence[ColumnDefinition[E]]
    ) -> Iterator[tuple[E, DataFileField]]:
        """Yield ``(column, field)`` for each schema column, left to right.

        The cursor jumps each column's skip length, so no cell is read twice
        and no required cell is skipped. Stopping the iteration early (e.g.
        on a sentinel row) is allowed.

        Raises:
            NotEnoughColumnsError: The row ends before a required cell.
        """
        cursor = self.begin()
        for definition in columns:
            if not cursor.at_end:
                cursor += definition.skip_length
            if cursor.at_end:
                raise NotEnoughColumnsError(
                    f"Not enough columns in {self.resource} at row {self.row}: "
                    f"{definition.column.name} expected at column {cursor.index}, "
                    f"row has {len(self)} cell(s)",
                    self.resource,
                    definition.column.name,
                )
            yield definition.column, cursor.field
            cursor += 1
