"""
GameData handle for txtdata.

``GameData`` owns every loaded table together with the resource loader and
config it was built from, so gameplay code asks one object for balance data
and can rebuild it with ``reload()``. There is no module-level table
state: two ``GameData`` instances never share anything.

``reload()`` is all-or-nothing. Every table is loaded into fresh objects
first; the handle's contents are only replaced once all of them succeeded,
so a broken data file never leaves a half-updated handle behind.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import pandas as pd

from txtdata.config import TxtDataConfig, build_resource_loader
from txtdata.frames import experience_to_frame, player_data_to_frame
from txtdata.resources import ResourceLoader
from txtdata.tables.experience import ExperienceData, load_experience_data
from txtdata.tables.playerdata import HeroClass, PlayerData, load_player_data

logger = logging.getLogger(__name__)


@dataclass
class GameDataInfo:
    """Summary returned by ``GameData.describe()``.

    Attributes:
        resources: ``repr`` of the resource loader.
        tables: Table key -> resource name.
        max_level: Highest character level in the experience table.
        classes: Names of the hero classes with loaded stats.
    """

    resources: str
    tables: dict[str, str] = field(default_factory=dict)
    max_level: int = 0
    classes: list[str] = field(default_factory=list)


class GameData:
    """Handle object for the loaded game balance tables.

    Attributes:
        config: The ``TxtDataConfig`` naming the tables.
        resources: Resource loader the tables are read from.
        experience: Loaded ``ExperienceData``.
        players: ``PlayerData`` keyed by ``HeroClass``.
    """

    def __init__(
        self,
        config: TxtDataConfig | None = None,
        resources: ResourceLoader | None = None,
    ) -> None:
        self.config = config if config is not None else TxtDataConfig()
        self.resources = resources if resources is not None else build_resource_loader(self.config)
        self.experience = ExperienceData()
        self.players: dict[HeroClass, PlayerData] = {}

    @classmethod
    def load(
        cls,
        config: TxtDataConfig | None = None,
        resources: ResourceLoader | None = None,
    ) -> GameData:
        """Build a handle and load every table into it."""
        game_data = cls(config, resources)
        game_data.reload()
        return game_data

    def __repr__(self) -> str:
        return (
            f"GameData(max_level={self.max_level}, "
            f"classes={[c.value for c in self.players]}, resources={self.resources!r})"
        )

    # -- Lifecycle ----------------------------------------------------------

    def reload(self) -> None:
        """Re-read all tables; keep the current contents if any load fails."""
        tables = self.config.tables
        logger.info("GameData.reload() -- resources=%r", self.resources)

        experience = load_experience_data(
            self.resources, tables.experience, closed=tables.closed_schema
        )
        players = load_player_data(
            self.resources, tables.player_data, closed=tables.closed_schema
        )

        self.experience = experience
        self.players = players

    # -- Lookups ------------------------------------------------------------

    @property
    def max_level(self) -> int:
        return self.experience.max_level

    def threshold_for_level(self, level: int) -> int:
        return self.experience.threshold_for_level(level)

    def player_data(self, hero_class: HeroClass) -> PlayerData:
        """Stats for ``hero_class``.

        Raises:
            KeyError: If the stats table has no row for the class.
        """
        try:
            return self.players[hero_class]
        except KeyError:
            raise KeyError(
                f"No character stats loaded for {hero_class.value}. "
                f"Loaded classes: {[c.value for c in self.players]}"
            ) from None

    # -- Inspection ---------------------------------------------------------

    def describe(self) -> GameDataInfo:
        return GameDataInfo(
            resources=repr(self.resources),
            tables=self.config.tables.resource_names(),
            max_level=self.max_level,
            classes=[hero_class.value for hero_class in self.players],
        )

    def experience_frame(self) -> pd.DataFrame:
        return experience_to_frame(self.experience)

    def player_frame(self) -> pd.DataFrame:
        return player_data_to_frame(self.players)
