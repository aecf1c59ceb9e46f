"""
Table loaders built on the txtdata engine.

Each module defines a closed column schema (an ``enum.Enum`` whose values
are the header names), a pure mapping from header name to column, and a
``load_*`` function that walks every row and returns caller-owned data:

- experience.py: per-level experience thresholds (``ExperienceData``).
- playerdata.py: per-class character stats (``PlayerData`` by ``HeroClass``).
"""

from txtdata.tables.experience import ExperienceData, load_experience_data
from txtdata.tables.playerdata import HeroClass, PlayerData, load_player_data

__all__ = [
    "ExperienceData",
    "HeroClass",
    "PlayerData",
    "load_experience_data",
    "load_player_data",
]
