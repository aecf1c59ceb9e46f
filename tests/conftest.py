"""
Shared test fixtures for txtdata tests.

Unit tests build their own tiny tables in ``tmp_path`` or in a
``MemoryResourceLoader``; integration tests read the bundled tables.
"""

from pathlib import Path

import pytest

_CHARSTATS_HEADER = (
    "Class\tBase Strength\tBase Magic\tBase Dexterity\tBase Vitality\t"
    "Maximum Strength\tMaximum Magic\tMaximum Dexterity\tMaximum Vitality\t"
    "Base Life\tBase Mana\tLife Per Level\tMana Per Level\t"
    "Life Per Player Stat\tMana Per Player Stat\tLife Per Item Stat\tMana Per Item Stat"
)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def charstats_header() -> str:
    """Header row of the character stats table, in file order."""
    return _CHARSTATS_HEADER


@pytest.fixture()
def write_resources(tmp_path: Path):
    """Write ``{resource_name: text}`` under ``tmp_path`` and return the root."""

    def _write(resources: dict[str, str]) -> Path:
        for name, text in resources.items():
            path = tmp_path / name.replace("\\", "/")
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        return tmp_path

    return _write


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------
def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (loads full table resources)",
    )
