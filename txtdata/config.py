"""
Configuration models and YAML I/O for txtdata.

The config says where the tab-separated tables live and which resource
names to load. It maps 1:1 to a ``txtdata.yaml`` file::

    resources:
      root_dir: data            # relative to the YAML file; omit for bundled tables
      encoding: utf-8-sig
    tables:
      experience: txtdata\\Experience.tsv
      player_data: txtdata\\CharStats.tsv
      closed_schema: true

Key functions:
- load_config(path) -> TxtDataConfig: Load and validate from YAML.
- save_config(config, path): Serialize to YAML.
- build_resource_loader(config, base_dir): Resource loader for the config.
- validate_resources(config, resources): Check every table resource exists.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, model_validator

from txtdata.exceptions import ConfigValidationError, InvalidResourceNameError
from txtdata.resources import DirectoryResourceLoader, ResourceLoader, normalize_resource_name
from txtdata.tables.experience import EXPERIENCE_RESOURCE
from txtdata.tables.playerdata import PLAYER_DATA_RESOURCE

logger = logging.getLogger(__name__)


class ResourceConfig(BaseModel):
    """Where resources are read from."""

    root_dir: str | None = Field(
        None,
        description="Directory holding the resources; None for the bundled tables",
    )
    encoding: str = Field("utf-8-sig", description="Text encoding of the resources")


class TablesConfig(BaseModel):
    """Resource names of the tables to load."""

    experience: str = Field(EXPERIENCE_RESOURCE, min_length=1)
    player_data: str = Field(PLAYER_DATA_RESOURCE, min_length=1)
    closed_schema: bool = Field(
        True,
        description="If True, an unrecognised header column aborts the load",
    )

    @model_validator(mode="after")
    def _check_distinct_resources(self) -> TablesConfig:
        try:
            experience = normalize_resource_name(self.experience)
            player_data = normalize_resource_name(self.player_data)
        except InvalidResourceNameError as exc:
            raise ValueError(str(exc)) from exc
        if experience == player_data:
            raise ValueError(
                f"experience and player_data both point at '{self.experience}'. "
                "Each table needs its own resource."
            )
        return self

    def resource_names(self) -> dict[str, str]:
        return {"experience": self.experience, "player_data": self.player_data}


class TxtDataConfig(BaseModel):
    """Top-level configuration for txtdata."""

    resources: ResourceConfig = Field(default_factory=ResourceConfig)
    tables: TablesConfig = Field(default_factory=TablesConfig)


def load_config(path: str | Path) -> TxtDataConfig:
    """Load and validate a txtdata YAML config.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ConfigValidationError: If the file is empty.
        pydantic.ValidationError: If the YAML content fails schema validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if raw is None:
        raise ConfigValidationError(f"Config file is empty: {path}")
    logger.info("Loaded config from %s", path)
    return TxtDataConfig.model_validate(raw)


def save_config(config: TxtDataConfig, path: str | Path) -> None:
    """Serialize a TxtDataConfig to YAML."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = config.model_dump(mode="json")
    with open(path, "w", encoding="utf-8") as f:
        f.write("# txtdata configuration\n\n")
        yaml.dump(
            data,
            f,
            allow_unicode=True,
            default_flow_style=False,
            sort_keys=False,
        )
    logger.info("Saved config to %s", path)


def build_resource_loader(
    config: TxtDataConfig, base_dir: str | Path | None = None
) -> DirectoryResourceLoader:
    """Create the resource loader described by ``config.resources``.

    A relative ``root_dir`` is resolved against ``base_dir`` (usually the
    directory of the YAML file) when given.
    """
    root_dir = config.resources.root_dir
    if root_dir is None:
        return DirectoryResourceLoader(encoding=config.resources.encoding)
    root = Path(root_dir)
    if not root.is_absolute() and base_dir is not None:
        root = Path(base_dir) / root
    return DirectoryResourceLoader(root, encoding=config.resources.encoding)


def validate_resources(config: TxtDataConfig, resources: ResourceLoader) -> None:
    """Check that every table named in the config exists.

    Called before loading so a stale or mistyped resource name is reported
    once, listing every missing table.

    Raises:
        ConfigValidationError: If any table resource does not exist.
    """
    missing = {
        table: name
        for table, name in config.tables.resource_names().items()
        if not resources.exists(name)
    }

    if missing:
        details = "\n".join(f"  {table}: {name}" for table, name in missing.items())
        raise ConfigValidationError(
            f"The following table resources do not exist:\n{details}"
        )
    logger.info(
        "Config validation passed: all %d table resources found",
        len(config.tables.resource_names()),
    )
