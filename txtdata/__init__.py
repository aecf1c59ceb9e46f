"""
txtdata: loader for tab-separated game balance tables.

Public API surface:

- ``open(path=None, ...)`` -- **recommended entry point**. Polymorphic:
  accepts a ``txtdata.yaml`` config, a directory of resources, or nothing
  (the tables bundled with the package) and returns a loaded ``GameData``.

- ``GameData`` -- caller-owned handle holding the experience table and the
  per-class character stats, with ``reload()`` to re-read them.

- ``DataFile`` -- the generic engine for new tables: load a resource,
  ``parse_header()`` against an ``enum.Enum`` schema, then ``walk()`` each
  record.
"""

from __future__ import annotations

import logging
from pathlib import Path

from txtdata.config import (
    TxtDataConfig,
    build_resource_loader,
    load_config,
    validate_resources,
)
from txtdata.datafile import DataFile
from txtdata.gamedata import GameData
from txtdata.parsers.numbers import Fixed6
from txtdata.tables.playerdata import HeroClass

__all__ = ["open", "DataFile", "Fixed6", "GameData", "HeroClass"]

logger = logging.getLogger(__name__)


def open(path: str | Path | None = None, closed_schema: bool = True) -> GameData:
    """Single entry point: load every table and return a ``GameData``.

    Polymorphic behaviour based on *path*:

    - ``None``: load the tables bundled with the package.
    - **YAML file** (``.yaml`` / ``.yml``): load the config; a relative
      ``resources.root_dir`` is resolved against the YAML file's directory.
      Every configured table resource is checked before loading.
    - **Directory**: load the default table names from that directory.

    Args:
        path: Config file, resource directory, or ``None``.
        closed_schema: For directories and ``None`` only: if True, an
            unrecognised header column aborts the load. A YAML config
            carries its own ``tables.closed_schema``.

    Returns:
        A loaded ``GameData`` handle.

    Raises:
        FileNotFoundError: If *path* does not exist.
        ConfigValidationError: If a configured table resource is missing.
        TxtDataError: If any table fails to load.

    Examples::

        game_data = txtdata.open()
        game_data.threshold_for_level(1)

        game_data = txtdata.open("mods/hardcore/txtdata.yaml")
        game_data.player_data(txtdata.HeroClass.WARRIOR).base_strength
    """
    if path is None:
        config = TxtDataConfig.model_validate({"tables": {"closed_schema": closed_schema}})
        logger.info("open() -- bundled tables")
        return GameData.load(config)

    p = Path(path)
    if p.suffix.lower() in (".yaml", ".yml"):
        logger.info("open() -- loading config from %s", p)
        config = load_config(p)
        resources = build_resource_loader(config, base_dir=p.parent)
        validate_resources(config, resources)
        return GameData.load(config, resources)

    if not p.is_dir():
        raise FileNotFoundError(f"Not a config file or resource directory: {p}")

    logger.info("open() -- resource directory %s", p)
    config = TxtDataConfig.model_validate(
        {"resources": {"root_dir": str(p)}, "tables": {"closed_schema": closed_schema}}
    )
    return GameData.load(config)
