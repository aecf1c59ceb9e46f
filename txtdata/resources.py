"""
Resource loading for txtdata.

Data files are addressed by resource name (e.g. ``txtdata\\Experience.tsv``),
not by filesystem path. A resource loader turns a name into text and is the
only place txtdata performs I/O. Both ``/`` and ``\\`` are accepted as
separators in resource names.

- ``DirectoryResourceLoader`` resolves names under a root directory.
  The default root is the set of tables bundled with the package.
- ``MemoryResourceLoader`` serves text from a dict; handy for tests and for
  embedding tables generated at build time.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path, PurePosixPath
from typing import Protocol

from txtdata.exceptions import (
    InvalidResourceNameError,
    ResourceNotFoundError,
    ResourceReadError,
)

logger = logging.getLogger(__name__)

# Tables shipped with the package (sibling directory)
ASSETS_DIR = Path(__file__).parent / "assets"


def normalize_resource_name(name: str) -> str:
    """Canonical form of a resource name: ``/`` separators, no leading slash.

    Raises:
        InvalidResourceNameError: The name contains a ``..`` segment.
    """
    path = PurePosixPath(name.replace("\\", "/"))
    if ".." in path.parts:
        raise InvalidResourceNameError(
            f"Resource name must stay inside the resource root: {name}", name
        )
    return str(path).lstrip("/")


class ResourceLoader(Protocol):
    """Anything that can open a named text resource."""

    def exists(self, name: str) -> bool:
        """True if resource ``name`` can be opened. Reads nothing."""
        ...

    def open(self, name: str) -> str:
        """Return the full text of resource ``name``.

        Raises:
            ResourceNotFoundError: No resource has this name.
            ResourceReadError: The resource exists but cannot be read.
        """
        ...


class DirectoryResourceLoader:
    """Serves resources from files under ``root``."""

    def __init__(self, root: str | Path | None = None, encoding: str = "utf-8-sig") -> None:
        self.root = Path(root) if root is not None else ASSETS_DIR
        self.encoding = encoding

    def __repr__(self) -> str:
        return f"DirectoryResourceLoader(root={str(self.root)!r})"

    def resolve(self, name: str) -> Path:
        return self.root / normalize_resource_name(name)

    def exists(self, name: str) -> bool:
        return self.resolve(name).is_file()

    def open(self, name: str) -> str:
        path = self.resolve(name)
        if not path.is_file():
            raise ResourceNotFoundError(
                f"Resource not found: {name} (looked for {path})", name
            )
        try:
            with open(path, "r", encoding=self.encoding, newline="") as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise ResourceReadError(f"Failed to read resource {name}: {exc}", name) from exc
        logger.debug("Read resource %s from %s (%d chars)", name, path, len(text))
        return text


class MemoryResourceLoader:
    """Serves resources from an in-memory mapping of name -> text."""

    def __init__(self, resources: Mapping[str, str]) -> None:
        self._resources = {
            normalize_resource_name(name): text for name, text in resources.items()
        }

    def __repr__(self) -> str:
        return f"MemoryResourceLoader({sorted(self._resources)!r})"

    def exists(self, name: str) -> bool:
        return normalize_resource_name(name) in self._resources

    def open(self, name: str) -> str:
        try:
            return self._resources[normalize_resource_name(name)]
        except KeyError:
            raise ResourceNotFoundError(f"Resource not found: {name}", name) from None
