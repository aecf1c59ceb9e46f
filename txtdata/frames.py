"""
pandas views of txtdata tables.

Read-only conversions for inspection, notebooks and debugging:

- ``datafile_to_frame``: raw cell text of a ``DataFile`` (all strings),
  optionally restricted to the columns of a parsed schema.
- ``experience_to_frame``: one row per level.
- ``player_data_to_frame``: one row per hero class; ``Fixed6`` values are
  shown as floats, which is exact since every value is a multiple of 1/64.

Nothing here feeds back into loading; the typed tables stay the source of
truth.
"""

from __future__ import annotations

from dataclasses import fields

import pandas as pd

from txtdata.datafile import DataFile
from txtdata.parsers.header import ColumnDefinition
from txtdata.parsers.numbers import Fixed6
from txtdata.tables.experience import ExperienceData
from txtdata.tables.playerdata import HeroClass, PlayerData


def datafile_to_frame(
    data_file: DataFile,
    columns: list[ColumnDefinition] | None = None,
) -> pd.DataFrame:
    """Raw cells of ``data_file`` as a string DataFrame.

    Without ``columns`` every physical column is included, named by the
    header. Rows shorter than the widest row are padded with empty strings;
    cells beyond the header get positional names (``column_5``).

    With ``columns`` (from ``DataFile.parse_header``) only the schema
    columns are kept, named by their enumerator and in physical order.
    """
    header = data_file.header.cells()
    rows = [record.cells() for record in data_file]
    width = max([len(header), *(len(row) for row in rows)])
    names = header + [f"column_{index}" for index in range(len(header), width)]
    padded = [row + [""] * (width - len(row)) for row in rows]

    df = pd.DataFrame(padded, columns=names, dtype=str)
    if columns is None:
        return df

    selected = df.iloc[:, [definition.index for definition in columns]]
    selected.columns = [definition.column.name for definition in columns]
    return selected.reset_index(drop=True)


def experience_to_frame(experience: ExperienceData) -> pd.DataFrame:
    """Levels and thresholds, one row per level starting at 1."""
    thresholds = experience.thresholds
    return pd.DataFrame(
        {
            "level": pd.Series(range(1, len(thresholds) + 1), dtype="uint8"),
            "experience": pd.Series(thresholds, dtype="uint32"),
        }
    )


def player_data_to_frame(players: dict[HeroClass, PlayerData]) -> pd.DataFrame:
    """Character stats indexed by hero class name."""
    names = [f.name for f in fields(PlayerData)]
    records = []
    for player in players.values():
        row = {}
        for name in names:
            value = getattr(player, name)
            row[name] = float(value) if isinstance(value, Fixed6) else value
        records.append(row)

    df = pd.DataFrame(records, columns=names)
    return df.set_index("class_name")
