"""Tests for roost.__init__ — lazy imports cover all public names."""

import pytest

import roost


@pytest.mark.parametrize("name", roost.__all__)
def test_all_names_resolve(name: str) -> None:
    """Every name in __all__ must resolve via __getattr__ without error."""
    obj = getattr(roost, name)
    assert obj is not None, f"roost.{name} resolved to None"


def test_adapters_resolve_to_functions() -> None:
    from roost.components import materialize, routes

    assert roost.materialize is materialize
    assert roost.routes is routes


def test_hooks_resolve_to_recorders() -> None:
    from roost.hooks import get, use

    assert roost.get is get
    assert roost.use is use


def test_unknown_name_raises_attribute_error() -> None:
    with pytest.raises(AttributeError, match="no attribute"):
        roost.__getattr__("ThisDoesNotExist")
