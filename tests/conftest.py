"""Shared test fixtures."""

import pytest

from craftcalc.data.recipe_book import RecipeBook
from craftcalc.models.recipe import RecipeDefinition


@pytest.fixture
def diamond_book() -> RecipeBook:
    """T needs 2 A + 3 B; A and B each need 1 C."""
    return RecipeBook(
        [
            RecipeDefinition.create("T", {"A": 2, "B": 3}),
            RecipeDefinition.create("A", {"C": 1}),
            RecipeDefinition.create("B", {"C": 1}),
        ]
    )


@pytest.fixture
def minecraft_book() -> RecipeBook:
    return RecipeBook(
        [
            RecipeDefinition.create("plank", {"log": 1}, output_yield=4),
            RecipeDefinition.create("stick", {"plank": 2}, output_yield=4),
            RecipeDefinition.create("torch", {"stick": 1, "coal": 1}, output_yield=4),
            RecipeDefinition.create("diamond pickaxe", {"stick": 2, "diamond": 3}),
        ]
    )


@pytest.fixture
def cyclic_book() -> RecipeBook:
    """A and B need each other; D sits on top of the cycle."""
    return RecipeBook(
        [
            RecipeDefinition.create("A", {"B": 1}),
            RecipeDefinition.create("B", {"A": 1}),
            RecipeDefinition.create("D", {"A": 2}),
            RecipeDefinition.create("E", {"F": 1}),
        ]
    )
