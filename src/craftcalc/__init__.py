"""Crafting calculator: expand recipes into the materials a target needs."""

from craftcalc.data.recipe_book import RecipeBook
from craftcalc.engine.calculator import RecipeResolver, resolve, resolve_many, resolve_plan
from craftcalc.errors import (
    CraftCalcError,
    CyclicRecipeError,
    DuplicateRecipeError,
    InvalidQuantityError,
    MissingOutputError,
    MultiOutputError,
    ParseError,
)
from craftcalc.models.recipe import RecipeDefinition

__all__ = [
    "RecipeBook",
    "RecipeDefinition",
    "RecipeResolver",
    "resolve",
    "resolve_many",
    "resolve_plan",
    "CraftCalcError",
    "CyclicRecipeError",
    "DuplicateRecipeError",
    "InvalidQuantityError",
    "MissingOutputError",
    "MultiOutputError",
    "ParseError",
]
