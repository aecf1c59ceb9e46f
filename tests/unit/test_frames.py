"""
Unit tests for pandas views (txtdata.frames).
"""

from __future__ import annotations

import enum

import pandas as pd

from txtdata.datafile import DataFile
from txtdata.frames import datafile_to_frame, experience_to_frame, player_data_to_frame
from txtdata.parsers.header import column_mapper
from txtdata.parsers.numbers import Fixed6
from txtdata.tables.experience import ExperienceData
from txtdata.tables.playerdata import HeroClass, PlayerData


class Column(enum.Enum):
    LEVEL = "Level"
    EXPERIENCE = "Experience"


def _player(name: str, strength: int, life: Fixed6) -> PlayerData:
    """Helper: PlayerData with everything else zeroed."""
    zero = Fixed6(0)
    return PlayerData(
        class_name=name,
        base_strength=strength,
        base_magic=0,
        base_dexterity=0,
        base_vitality=0,
        maximum_strength=0,
        maximum_magic=0,
        maximum_dexterity=0,
        maximum_vitality=0,
        life_adjustment=life,
        mana_adjustment=zero,
        life_per_level=zero,
        mana_per_level=zero,
        life_per_stat=zero,
        mana_per_stat=zero,
        life_item_bonus=zero,
        mana_item_bonus=zero,
    )


class TestDatafileToFrame:
    """Tests for datafile_to_frame()."""

    def test_all_columns_as_strings(self):
        df = datafile_to_frame(DataFile("Level\tExperience\n1\t0\n2\t100\n"))
        assert list(df.columns) == ["Level", "Experience"]
        assert df["Experience"].tolist() == ["0", "100"]

    def test_ragged_rows_padded(self):
        df = datafile_to_frame(DataFile("A\tB\n1\n2\t3\t4\n"))
        assert list(df.columns) == ["A", "B", "column_2"]
        assert df.iloc[0].tolist() == ["1", "", ""]
        assert df.iloc[1].tolist() == ["2", "3", "4"]

    def test_schema_columns_only(self):
        data_file = DataFile("Notes\tExperience\tLevel\nx\t100\t2\n")
        columns = data_file.parse_header(
            Column, column_mapper({c.value: c for c in Column}), closed=False
        )
        df = datafile_to_frame(data_file, columns)
        assert list(df.columns) == ["EXPERIENCE", "LEVEL"]
        assert df.iloc[0].tolist() == ["100", "2"]

    def test_header_only(self):
        df = datafile_to_frame(DataFile("Level\tExperience\n"))
        assert len(df) == 0
        assert list(df.columns) == ["Level", "Experience"]


class TestExperienceToFrame:
    """Tests for experience_to_frame()."""

    def test_levels_and_thresholds(self):
        data = ExperienceData()
        data.set_threshold_for_level(1, 2000)
        data.set_threshold_for_level(2, 4620)
        df = experience_to_frame(data)
        assert df["level"].tolist() == [1, 2]
        assert df["experience"].tolist() == [2000, 4620]
        assert df["experience"].dtype == "uint32"

    def test_empty(self):
        df = experience_to_frame(ExperienceData())
        assert len(df) == 0
        assert list(df.columns) == ["level", "experience"]


class TestPlayerDataToFrame:
    """Tests for player_data_to_frame()."""

    def test_indexed_by_class_with_float_growth(self):
        players = {
            HeroClass.WARRIOR: _player("Warrior", 30, Fixed6.from_int(18)),
            HeroClass.ROGUE: _player("Rogue", 20, Fixed6(1504)),
        }
        df = player_data_to_frame(players)
        assert df.index.tolist() == ["Warrior", "Rogue"]
        assert df.loc["Rogue", "base_strength"] == 20
        assert df.loc["Rogue", "life_adjustment"] == 23.5
        assert df.loc["Warrior", "life_adjustment"] == 18.0

    def test_empty(self):
        df = player_data_to_frame({})
        assert isinstance(df, pd.DataFrame)
        assert len(df) == 0
        assert "base_strength" in df.columns
