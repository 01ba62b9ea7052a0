"""Validated recipe book: at most one recipe per item."""

import logging
from fractions import Fraction
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

from craftcalc.errors import (
    DuplicateRecipeError,
    InvalidQuantityError,
    MissingOutputError,
    MultiOutputError,
)
from craftcalc.models.recipe import ItemStack, Recipe, RecipeDefinition

logger = logging.getLogger(__name__)


def _merge_stacks(stacks: Iterable[ItemStack]) -> dict[str, Fraction]:
    """Sum repeated items, keeping first-seen order."""
    merged: dict[str, Fraction] = {}
    for stack in stacks:
        merged[stack.item] = merged.get(stack.item, Fraction(0)) + stack.count
    return merged


class RecipeBook:
    """Loads and indexes recipe definitions by the item they produce."""

    def __init__(self, definitions: Iterable[RecipeDefinition] = ()):
        self._recipes: dict[str, Recipe] = {}  # output item -> Recipe
        self._load_recipes(definitions)

    def _load_recipes(self, definitions: Iterable[RecipeDefinition]) -> None:
        """Validate each definition's shape and index it."""
        for index, definition in enumerate(definitions):
            outputs = _merge_stacks(definition.outputs)

            if not outputs:
                raise MissingOutputError(index)
            if len(outputs) > 1:
                raise MultiOutputError(index, tuple(outputs))

            # Check every stack before merging so "-1 x + 2 x" is still rejected
            for stack in (*definition.outputs, *definition.inputs):
                if stack.count <= 0:
                    raise InvalidQuantityError(stack.item, stack.count)

            (output_item, output_yield), = outputs.items()
            inputs = tuple(
                ItemStack(item, count)
                for item, count in _merge_stacks(definition.inputs).items()
            )

            if output_item in self._recipes:
                raise DuplicateRecipeError(output_item)

            self._recipes[output_item] = Recipe(
                output_item=output_item,
                output_yield=output_yield,
                inputs=inputs,
            )

        logger.debug("Recipe book built with %d recipes", len(self._recipes))

    @property
    def recipes(self) -> Mapping[str, Recipe]:
        """Read-only view of item -> recipe."""
        return MappingProxyType(self._recipes)

    def get_recipe(self, item: str) -> Recipe | None:
        """Recipe producing ``item``, or None for a base material."""
        return self._recipes.get(item)

    def has_recipe(self, item: str) -> bool:
        return item in self._recipes

    def __contains__(self, item: object) -> bool:
        return item in self._recipes

    def __iter__(self) -> Iterator[Recipe]:
        return iter(self._recipes.values())

    def __len__(self) -> int:
        return len(self._recipes)

    def get_base_resources(self) -> set[str]:
        """Items that are consumed but never produced."""
        consumed_items = set()
        for recipe in self._recipes.values():
            consumed_items.update(recipe.input_items)
        return consumed_items - set(self._recipes)

    def get_producible_items(self) -> set[str]:
        """All items that can be crafted."""
        return set(self._recipes)

    def get_consumers(self, item: str) -> list[str]:
        """Items whose recipe uses ``item`` as an input."""
        return [
            recipe.output_item
            for recipe in self._recipes.values()
            if item in recipe.input_items
        ]
