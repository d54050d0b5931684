import pytest

from fridge_hack.schema import IngredientList


def test_add_trims_and_keeps_display_casing():
    ingredients = IngredientList()
    assert ingredients.add("  Egg ")
    assert ingredients.items == ["Egg"]


@pytest.mark.parametrize("attempt", ["", "   ", "egg", "EGG", "  eGg  "])
def test_blank_or_duplicate_add_leaves_length_unchanged(attempt):
    ingredients = IngredientList(items=["Egg", "Milk"])
    assert not ingredients.add(attempt)
    assert len(ingredients) == 2


def test_add_many_splits_on_commas():
    ingredients = IngredientList(items=["milk"])
    added = ingredients.add_many("egg, Milk ,, rice")
    assert added == ["egg", "rice"]
    assert list(ingredients) == ["milk", "egg", "rice"]


def test_remove_by_index():
    ingredients = IngredientList(items=["egg", "milk", "rice"])
    ingredients.remove(1)
    ingredients.remove(10)
    assert ingredients.items == ["egg", "rice"]


def test_instances_do_not_share_items():
    first, second = IngredientList(), IngredientList()
    first.add("egg")
    assert len(second) == 0
