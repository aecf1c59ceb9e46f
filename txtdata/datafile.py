"""
Tab-separated data files for txtdata.

A ``DataFile`` owns the text of one resource. At load it indexes the text
into rows of cell spans (no cell text is copied); the first row is the
header, every following row is a data record.

Typical loader flow::

    data_file = DataFile.load("txtdata\\Experience.tsv", resources)
    columns = data_file.parse_header(ExperienceColumn, map_experience_column)
    for record in data_file:
        for column, field in record.walk(columns):
            ...

Format: cells separated by ``\\t``, rows by ``\\n``, ``\\r\\n`` or ``\\r``.
There is no quoting; tabs and line breaks cannot appear inside a cell.
A single trailing line terminator does not produce an empty last row.
"""

from __future__ import annotations

import enum
import logging
import re
from collections.abc import Iterator
from typing import TypeVar

from txtdata.parsers.header import ColumnDefinition, NameToColumn, build_columns
from txtdata.record import DataFileRecord, Span
from txtdata.resources import DirectoryResourceLoader, ResourceLoader

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=enum.Enum)

_LINE_TERMINATOR = re.compile(r"\r\n|\r|\n")


def _split_cells(text: str, start: int, end: int) -> list[Span]:
    spans: list[Span] = []
    while True:
        tab = text.find("\t", start, end)
        if tab < 0:
            spans.append((start, end))
            return spans
        spans.append((start, tab))
        start = tab + 1


def split_rows(text: str) -> list[list[Span]]:
    """Index ``text`` into rows of ``(start, end)`` cell spans."""
    rows: list[list[Span]] = []
    start = 0
    for match in _LINE_TERMINATOR.finditer(text):
        rows.append(_split_cells(text, start, match.start()))
        start = match.end()
    if start < len(text):
        rows.append(_split_cells(text, start, len(text)))
    return rows


class DataFile:
    """An indexed tab-separated table.

    Attributes:
        name: Resource name, used in every diagnostic.
        columns: Column definitions from the last ``parse_header`` call, or
            ``None`` before the header has been parsed.
    """

    def __init__(self, text: str, name: str = "<unnamed>") -> None:
        self.name = name
        self._text = text
        self._rows = split_rows(text)
        self.columns: list[ColumnDefinition] | None = None

    @classmethod
    def load(cls, name: str, resources: ResourceLoader | None = None) -> DataFile:
        """Read resource ``name`` and index it.

        Args:
            name: Resource name, e.g. ``txtdata\\CharStats.tsv``.
            resources: Resource loader. Defaults to the bundled tables.

        Raises:
            ResourceNotFoundError: The resource does not exist.
            ResourceReadError: The resource could not be read.
        """
        if resources is None:
            resources = DirectoryResourceLoader()
        text = resources.open(name)
        data_file = cls(text, name)
        logger.info("Loaded %s: %d data row(s)", name, len(data_file))
        return data_file

    def __repr__(self) -> str:
        return f"DataFile(name={self.name!r}, rows={len(self)})"

    def __len__(self) -> int:
        """Number of data rows (the header is not counted)."""
        return max(len(self._rows) - 1, 0)

    @property
    def header(self) -> DataFileRecord:
        """The header row. Empty when the file has no rows at all."""
        spans = self._rows[0] if self._rows else []
        return DataFileRecord(self._text, spans, 0, self.name)

    def parse_header(
        self,
        column_type: type[E],
        name_to_column: NameToColumn,
        *,
        closed: bool = True,
    ) -> list[ColumnDefinition[E]]:
        """Map the header row onto ``column_type`` and remember the result.

        Raises:
            UnknownColumnError: Unrecognised header name in a closed schema.
            DuplicateColumnError: A schema column appears twice.
            MissingColumnError: A schema column is absent from the header.
        """
        self.columns = build_columns(
            self.header.cells(),
            name_to_column,
            column_type,
            closed=closed,
            resource=self.name,
        )
        return self.columns

    def __iter__(self) -> Iterator[DataFileRecord]:
        """Yield every data row; each call starts over from the first row."""
        for row in range(1, len(self._rows)):
            yield DataFileRecord(self._text, self._rows[row], row, self.name)
