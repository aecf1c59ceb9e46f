"""
Experience threshold table.

``Experience.tsv`` lists, per character level, the experience total needed
to reach the next level::

    Level   Experience
    1       2000
    2       4620
    ...
    MaxLevel    50

The ``MaxLevel`` row is a sentinel carried over from the original data
files and is skipped; the maximum level is the number of threshold rows.
"""

from __future__ import annotations

import enum
import logging

from txtdata.datafile import DataFile
from txtdata.parsers.header import column_mapper
from txtdata.parsers.numbers import UINT8, UINT32
from txtdata.resources import ResourceLoader

logger = logging.getLogger(__name__)

EXPERIENCE_RESOURCE = "txtdata\\Experience.tsv"

_MAX_LEVEL_SENTINEL = "MaxLevel"


class ExperienceColumn(enum.Enum):
    LEVEL = "Level"
    EXPERIENCE = "Experience"


map_experience_column = column_mapper({column.value: column for column in ExperienceColumn})


class ExperienceData:
    """Experience needed to advance past each level."""

    def __init__(self) -> None:
        self._thresholds: list[int] = []

    def __len__(self) -> int:
        return len(self._thresholds)

    def __repr__(self) -> str:
        return f"ExperienceData(max_level={self.max_level})"

    @property
    def max_level(self) -> int:
        return min(len(self._thresholds), UINT8.max)

    @property
    def thresholds(self) -> list[int]:
        """Thresholds indexed by ``level - 1``."""
        return list(self._thresholds)

    def clear(self) -> None:
        self._thresholds.clear()

    def threshold_for_level(self, level: int) -> int:
        """Experience total at which ``level`` is completed.

        Level 0 has no threshold. Levels past the end of the table clamp to
        the highest known level.
        """
        if level <= 0 or not self._thresholds:
            return 0
        return self._thresholds[min(level, self.max_level) - 1]

    def set_threshold_for_level(self, level: int, experience: int) -> None:
        if level <= 0:
            return
        if level > len(self._thresholds):
            # gaps keep the maximum so a character is never demoted to 0 experience
            self._thresholds.extend([UINT32.max] * (level - len(self._thresholds)))
        self._thresholds[level - 1] = experience


def load_experience_data(
    resources: ResourceLoader | None = None,
    resource_name: str = EXPERIENCE_RESOURCE,
    closed: bool = True,
) -> ExperienceData:
    """Load the experience table into a fresh ``ExperienceData``.

    Raises:
        ResourceError: The table cannot be opened.
        SchemaError: The header or a row has the wrong shape.
        FieldError: A level or experience cell is malformed.
    """
    data_file = DataFile.load(resource_name, resources)
    columns = data_file.parse_header(ExperienceColumn, map_experience_column, closed=closed)

    data = ExperienceData()
    for record in data_file:
        level = 0
        experience = 0
        skip_record = False

        for column, field in record.walk(columns):
            if column is ExperienceColumn.LEVEL:
                result = field.parse_int(UINT8)
                if result.ok:
                    level = result.value
                elif field.raw() == _MAX_LEVEL_SENTINEL:
                    skip_record = True
                else:
                    raise field.parse_error(result.error, column.value)
            elif column is ExperienceColumn.EXPERIENCE:
                experience = field.to_int(column.value, UINT32)

            if skip_record:
                break

        if skip_record:
            logger.debug("%s: skipping sentinel row %d", resource_name, record.row)
            continue
        data.set_threshold_for_level(level, experience)

    logger.info("Loaded experience table: max level %d", data.max_level)
    return data
