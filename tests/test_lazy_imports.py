"""Tests for fieldcheck.__init__ — every public name resolves lazily."""

import tomllib
from pathlib import Path

import pytest

import fieldcheck


@pytest.mark.parametrize("name", fieldcheck.__all__)
def test_all_names_resolve(name: str) -> None:
    """Every name in __all__ must resolve via __getattr__ without error."""
    obj = getattr(fieldcheck, name)
    assert obj is not None, f"fieldcheck.{name} resolved to None"


def test_unknown_name_raises_attribute_error() -> None:
    """Accessing an unregistered name raises AttributeError."""
    with pytest.raises(AttributeError, match="no attribute"):
        fieldcheck.__getattr__("ThisDoesNotExist")


def test_version_matches_project_metadata() -> None:
    """__version__ uses the same spelling as pyproject.toml."""
    pyproject = Path(__file__).parent.parent / "pyproject.toml"
    with pyproject.open("rb") as f:
        project = tomllib.load(f)["project"]
    assert fieldcheck.__version__ == project["version"]
