"""
Per-class character stats table.

``CharStats.tsv`` has one row per hero class with starting and maximum
attributes (whole numbers) and life/mana growth factors (decimals stored as
``Fixed6``). A row whose Class cell is ``Expansion`` separates base-game
classes from expansion classes and carries no data.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from txtdata.datafile import DataFile
from txtdata.parsers.header import column_mapper
from txtdata.parsers.numbers import UINT8, Fixed6
from txtdata.resources import ResourceLoader

logger = logging.getLogger(__name__)

PLAYER_DATA_RESOURCE = "txtdata\\CharStats.tsv"

_EXPANSION_SEPARATOR = "Expansion"


class HeroClass(enum.Enum):
    WARRIOR = "Warrior"
    ROGUE = "Rogue"
    SORCERER = "Sorcerer"
    MONK = "Monk"
    BARD = "Bard"
    BARBARIAN = "Barbarian"


class PlayerDataColumn(enum.Enum):
    CLASS = "Class"
    BASE_STRENGTH = "Base Strength"
    BASE_MAGIC = "Base Magic"
    BASE_DEXTERITY = "Base Dexterity"
    BASE_VITALITY = "Base Vitality"
    MAXIMUM_STRENGTH = "Maximum Strength"
    MAXIMUM_MAGIC = "Maximum Magic"
    MAXIMUM_DEXTERITY = "Maximum Dexterity"
    MAXIMUM_VITALITY = "Maximum Vitality"
    LIFE_ADJUSTMENT = "Base Life"
    MANA_ADJUSTMENT = "Base Mana"
    LIFE_PER_LEVEL = "Life Per Level"
    MANA_PER_LEVEL = "Mana Per Level"
    LIFE_PER_STAT = "Life Per Player Stat"
    MANA_PER_STAT = "Mana Per Player Stat"
    LIFE_ITEM_BONUS = "Life Per Item Stat"
    MANA_ITEM_BONUS = "Mana Per Item Stat"


map_player_data_column = column_mapper({column.value: column for column in PlayerDataColumn})


@dataclass(frozen=True)
class PlayerData:
    """Attributes of one hero class as loaded from the stats table."""

    class_name: str
    base_strength: int
    base_magic: int
    base_dexterity: int
    base_vitality: int
    maximum_strength: int
    maximum_magic: int
    maximum_dexterity: int
    maximum_vitality: int
    life_adjustment: Fixed6
    mana_adjustment: Fixed6
    life_per_level: Fixed6
    mana_per_level: Fixed6
    life_per_stat: Fixed6
    mana_per_stat: Fixed6
    life_item_bonus: Fixed6
    mana_item_bonus: Fixed6


# whole-number attribute columns -> PlayerData field
_ATTRIBUTE_FIELDS = {
    PlayerDataColumn.BASE_STRENGTH: "base_strength",
    PlayerDataColumn.BASE_MAGIC: "base_magic",
    PlayerDataColumn.BASE_DEXTERITY: "base_dexterity",
    PlayerDataColumn.BASE_VITALITY: "base_vitality",
    PlayerDataColumn.MAXIMUM_STRENGTH: "maximum_strength",
    PlayerDataColumn.MAXIMUM_MAGIC: "maximum_magic",
    PlayerDataColumn.MAXIMUM_DEXTERITY: "maximum_dexterity",
    PlayerDataColumn.MAXIMUM_VITALITY: "maximum_vitality",
}

# fixed-point growth columns -> PlayerData field
_FIXED6_FIELDS = {
    PlayerDataColumn.LIFE_ADJUSTMENT: "life_adjustment",
    PlayerDataColumn.MANA_ADJUSTMENT: "mana_adjustment",
    PlayerDataColumn.LIFE_PER_LEVEL: "life_per_level",
    PlayerDataColumn.MANA_PER_LEVEL: "mana_per_level",
    PlayerDataColumn.LIFE_PER_STAT: "life_per_stat",
    PlayerDataColumn.MANA_PER_STAT: "mana_per_stat",
    PlayerDataColumn.LIFE_ITEM_BONUS: "life_item_bonus",
    PlayerDataColumn.MANA_ITEM_BONUS: "mana_item_bonus",
}

_HERO_CLASSES_BY_NAME = {hero_class.value: hero_class for hero_class in HeroClass}


def load_player_data(
    resources: ResourceLoader | None = None,
    resource_name: str = PLAYER_DATA_RESOURCE,
    closed: bool = True,
) -> dict[HeroClass, PlayerData]:
    """Load the character stats table.

    Returns:
        ``PlayerData`` keyed by ``HeroClass``, in table order. A class listed
        twice keeps its last row.

    Raises:
        ResourceError: The table cannot be opened.
        SchemaError: The header or a row has the wrong shape.
        FieldError: A cell is malformed or names an unknown class.
    """
    data_file = DataFile.load(resource_name, resources)
    columns = data_file.parse_header(PlayerDataColumn, map_player_data_column, closed=closed)

    players: dict[HeroClass, PlayerData] = {}
    for record in data_file:
        hero_class: HeroClass | None = None
        values: dict[str, object] = {}

        for column, field in record.walk(columns):
            if column is PlayerDataColumn.CLASS:
                name = field.raw()
                if name == _EXPANSION_SEPARATOR:
                    break
                hero_class = _HERO_CLASSES_BY_NAME.get(name)
                if hero_class is None:
                    raise field.invalid(column.value)
                values["class_name"] = hero_class.value
            elif column in _ATTRIBUTE_FIELDS:
                values[_ATTRIBUTE_FIELDS[column]] = field.to_int(column.value, UINT8)
            else:
                values[_FIXED6_FIELDS[column]] = field.to_fixed6(column.value)

        if hero_class is None:
            logger.debug("%s: skipping separator row %d", resource_name, record.row)
            continue
        players[hero_class] = PlayerData(**values)

    missing = [hero_class.value for hero_class in HeroClass if hero_class not in players]
    if missing:
        logger.warning("%s: no stats for class(es) %s", resource_name, ", ".join(missing))
    logger.info("Loaded character stats for %d class(es)", len(players))
    return players
