"""Tests for Recipe, can_craft and craft."""
from __future__ import annotations

import pytest

from caravan import Inventory, Recipe, ResourceKind
from caravan.recipe import can_craft, craft

RAW = ResourceKind.STONE_RAW
BLOCK = ResourceKind.STONE_BLOCK


def test_recipe_validation() -> None:
    with pytest.raises(ValueError):
        Recipe(name="")
    with pytest.raises(ValueError):
        Recipe(name="x", duration=-1)


def test_craft_in_place() -> None:
    recipe = Recipe("mason", inputs={RAW: 2}, outputs={BLOCK: 1}, duration=10)
    inv = Inventory(slots={RAW: 3})
    assert craft(inv, recipe)
    assert inv.slots == {RAW: 1, BLOCK: 1}


def test_craft_into_separate_target() -> None:
    recipe = Recipe("mason", inputs={RAW: 1}, outputs={BLOCK: 1}, duration=10)
    src = Inventory(slots={RAW: 1})
    dst = Inventory()
    assert craft(src, recipe, dst)
    assert src.slots == {}
    assert dst.slots == {BLOCK: 1}


def test_craft_insufficient_changes_nothing() -> None:
    recipe = Recipe("mason", inputs={RAW: 2}, outputs={BLOCK: 1})
    inv = Inventory(slots={RAW: 1})
    assert not can_craft(inv, recipe)
    assert not craft(inv, recipe)
    assert inv.slots == {RAW: 1}


def test_no_inputs_always_craftable() -> None:
    recipe = Recipe("quarry", outputs={RAW: 1}, duration=2000)
    inv = Inventory()
    assert can_craft(inv, recipe)
    assert craft(inv, recipe)
    assert inv.slots == {RAW: 1}
