"""Error types raised by the crafting calculator."""

from typing import Any, Optional


class CraftCalcError(Exception):
    """Base class for every error surfaced to the user."""


class RecipeBookError(CraftCalcError):
    """Recipe definitions could not be turned into a recipe book."""


class DuplicateRecipeError(RecipeBookError):
    """Two recipe definitions produce the same item."""

    def __init__(self, item: str):
        self.item = item
        super().__init__(f"More than one recipe produces '{item}'")


class MultiOutputError(RecipeBookError):
    """A single recipe definition lists several distinct output items."""

    def __init__(self, recipe_index: int, items: tuple[str, ...] = ()):
        self.recipe_index = recipe_index
        self.items = items
        detail = f" ({', '.join(items)})" if items else ""
        super().__init__(
            f"Recipe #{recipe_index + 1} crafts more than one type of item{detail}"
        )


class MissingOutputError(RecipeBookError):
    """A recipe definition has no output item at all."""

    def __init__(self, recipe_index: int):
        self.recipe_index = recipe_index
        super().__init__(f"Recipe #{recipe_index + 1} has no output item")


class ResolveError(CraftCalcError):
    """A resolution request could not be completed."""


class CyclicRecipeError(ResolveError):
    """The recipes reachable from a target depend on themselves."""

    def __init__(self, cycle_path: tuple[str, ...]):
        self.cycle_path = tuple(cycle_path)
        super().__init__(f"Recipe cycle detected: {' -> '.join(self.cycle_path)}")


class InvalidQuantityError(CraftCalcError, ValueError):
    """A requested or recipe quantity is not a positive number."""

    def __init__(self, item: Optional[str], quantity: Any):
        self.item = item
        self.quantity = quantity
        where = f" for '{item}'" if item else ""
        super().__init__(f"Invalid quantity {quantity!r}{where}")


class ParseError(CraftCalcError):
    """Plan text does not follow the need/have/recipes format."""

    def __init__(self, line_number: int, line: str, reason: str):
        self.line_number = line_number
        self.line = line
        self.reason = reason
        super().__init__(f"Line {line_number}: {reason}: {line.strip()!r}")


class ConfigError(CraftCalcError):
    """Configuration file could not be read."""
