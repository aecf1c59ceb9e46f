"""
Unit tests for DataFile (txtdata.datafile).

Tests row/cell indexing, header parsing and record iteration using inline
TSV strings served by a MemoryResourceLoader.
"""

from __future__ import annotations

import enum

import pytest

from txtdata.datafile import DataFile, split_rows
from txtdata.exceptions import (
    MissingColumnError,
    NotEnoughColumnsError,
    ResourceNotFoundError,
    UnknownColumnError,
)
from txtdata.parsers.header import column_mapper
from txtdata.parsers.numbers import UINT8, UINT32
from txtdata.resources import MemoryResourceLoader

EXPERIENCE_SAMPLE = "Level\tExperience\n1\t0\n2\t100\nMaxLevel\t0\n"


class Column(enum.Enum):
    LEVEL = "Level"
    EXPERIENCE = "Experience"


map_column = column_mapper({c.value: c for c in Column})


def _cells(text: str) -> list[list[str]]:
    """Helper: materialise split_rows() output as strings."""
    return [[text[s:e] for s, e in row] for row in split_rows(text)]


class TestSplitRows:
    """Tests for split_rows()."""

    def test_lf(self):
        assert _cells("a\tb\nc\td\n") == [["a", "b"], ["c", "d"]]

    def test_crlf(self):
        assert _cells("a\tb\r\nc\td\r\n") == [["a", "b"], ["c", "d"]]

    def test_lone_cr(self):
        assert _cells("a\rb") == [["a"], ["b"]]

    def test_no_trailing_newline(self):
        assert _cells("a\nb") == [["a"], ["b"]]

    def test_blank_line_in_middle_is_a_row(self):
        assert _cells("a\n\nb\n") == [["a"], [""], ["b"]]

    def test_empty_cells_kept(self):
        assert _cells("\t\tx\t\n") == [["", "", "x", ""]]

    def test_empty_text(self):
        assert split_rows("") == []


class TestDataFile:
    """Tests for DataFile construction, header and iteration."""

    def test_load_from_resources(self):
        resources = MemoryResourceLoader({"txtdata/Experience.tsv": EXPERIENCE_SAMPLE})
        data_file = DataFile.load("txtdata\\Experience.tsv", resources)
        assert data_file.name == "txtdata\\Experience.tsv"
        assert len(data_file) == 3

    def test_load_missing_resource(self):
        with pytest.raises(ResourceNotFoundError, match="Nope.tsv"):
            DataFile.load("txtdata\\Nope.tsv", MemoryResourceLoader({}))

    def test_header_excluded_from_records(self):
        data_file = DataFile(EXPERIENCE_SAMPLE, "Experience.tsv")
        assert data_file.header.cells() == ["Level", "Experience"]
        assert [r.cells()[0] for r in data_file] == ["1", "2", "MaxLevel"]

    def test_record_rows_count_from_header(self):
        rows = [record.row for record in DataFile(EXPERIENCE_SAMPLE)]
        assert rows == [1, 2, 3]

    def test_iteration_is_restartable(self):
        data_file = DataFile(EXPERIENCE_SAMPLE)
        first = [r.cells() for r in data_file]
        second = [r.cells() for r in data_file]
        assert first == second

    def test_empty_file(self):
        data_file = DataFile("")
        assert len(data_file) == 0
        assert data_file.header.cells() == []
        assert list(data_file) == []

    def test_header_only(self):
        data_file = DataFile("Level\tExperience\n")
        assert len(data_file) == 0
        assert list(data_file) == []

    def test_repr(self):
        assert repr(DataFile(EXPERIENCE_SAMPLE, "x.tsv")) == "DataFile(name='x.tsv', rows=3)"


class TestParseHeader:
    """Tests for DataFile.parse_header()."""

    def test_columns_cached(self):
        data_file = DataFile(EXPERIENCE_SAMPLE)
        assert data_file.columns is None
        columns = data_file.parse_header(Column, map_column)
        assert data_file.columns is columns
        assert [c.column for c in columns] == [Column.LEVEL, Column.EXPERIENCE]

    def test_unknown_column_names_resource(self):
        data_file = DataFile("Level\tNotes\tExperience\n1\tx\t0\n", "Experience.tsv")
        with pytest.raises(UnknownColumnError, match="Experience.tsv"):
            data_file.parse_header(Column, map_column)

    def test_open_schema_skips_unknown(self):
        data_file = DataFile("Level\tNotes\tExperience\n1\tx\t0\n")
        columns = data_file.parse_header(Column, map_column, closed=False)
        record = next(iter(data_file))
        assert [f.raw() for _, f in record.walk(columns)] == ["1", "0"]

    def test_missing_column(self):
        with pytest.raises(MissingColumnError):
            DataFile("Level\n1\n").parse_header(Column, map_column)


class TestRowExtraction:
    """End-to-end extraction through header -> walk -> typed fields."""

    def _extract(self, text: str) -> list[dict[Column, int]]:
        data_file = DataFile(text, "Experience.tsv")
        columns = data_file.parse_header(Column, map_column)
        rows = []
        for record in data_file:
            values = {}
            for column, field in record.walk(columns):
                int_type = UINT8 if column is Column.LEVEL else UINT32
                values[column] = field.to_int(column.value, int_type)
            rows.append(values)
        return rows

    def test_physical_order_does_not_matter(self):
        in_order = self._extract("Level\tExperience\n1\t0\n2\t100\n")
        reversed_ = self._extract("Experience\tLevel\n0\t1\n100\t2\n")
        assert in_order == reversed_
        assert in_order[1] == {Column.LEVEL: 2, Column.EXPERIENCE: 100}

    def test_short_row(self):
        with pytest.raises(NotEnoughColumnsError, match="row 2"):
            self._extract("Level\tExperience\n1\t0\n2\n")
