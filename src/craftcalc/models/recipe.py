"""Recipe and item stack data models."""

import math
from dataclasses import dataclass
from fractions import Fraction
from typing import Iterable, Mapping, Union

from craftcalc.errors import InvalidQuantityError

QuantityLike = Union[int, float, str, Fraction]


def to_quantity(value: QuantityLike, item: str | None = None) -> Fraction:
    """Convert user input to an exact quantity (no sign check)."""
    if isinstance(value, bool):
        raise InvalidQuantityError(item, value)
    try:
        if isinstance(value, float):
            # Go through str so 0.1 stays 1/10
            return Fraction(str(value))
        return Fraction(value)
    except (TypeError, ValueError, ZeroDivisionError):
        raise InvalidQuantityError(item, value) from None


def to_positive_quantity(value: QuantityLike, item: str | None = None) -> Fraction:
    """Convert user input to a quantity that must be greater than zero."""
    quantity = to_quantity(value, item)
    if quantity <= 0:
        raise InvalidQuantityError(item, value)
    return quantity


def format_quantity(quantity: Fraction, decimal_places: int = 2) -> str:
    """Render whole quantities as ints, others rounded."""
    if quantity.denominator == 1:
        return str(quantity.numerator)
    return f"{float(quantity):.{decimal_places}f}"


@dataclass(frozen=True)
class ItemStack:
    """A quantity of one item, e.g. ``3 diamond``."""

    item: str
    count: Fraction

    @classmethod
    def of(cls, item: str, count: QuantityLike) -> "ItemStack":
        return cls(item.strip(), to_quantity(count, item))

    def __str__(self) -> str:
        # Exact form ("3", "1/3") so plan text round-trips through the parser
        return f"{self.count} {self.item}"


def _stacks(pairs: Union[Mapping[str, QuantityLike], Iterable]) -> tuple[ItemStack, ...]:
    if isinstance(pairs, Mapping):
        pairs = pairs.items()
    stacks = []
    for pair in pairs:
        if isinstance(pair, ItemStack):
            stacks.append(pair)
        else:
            item, count = pair
            stacks.append(ItemStack.of(item, count))
    return tuple(stacks)


@dataclass(frozen=True)
class RecipeDefinition:
    """A recipe as the user wrote it, before the recipe book validates it."""

    outputs: tuple[ItemStack, ...]
    inputs: tuple[ItemStack, ...] = ()

    @classmethod
    def create(
        cls,
        output: str,
        inputs: Union[Mapping[str, QuantityLike], Iterable] = (),
        output_yield: QuantityLike = 1,
    ) -> "RecipeDefinition":
        """Build a single-output definition from plain names and numbers."""
        return cls(
            outputs=(ItemStack.of(output, output_yield),),
            inputs=_stacks(inputs),
        )

    @classmethod
    def from_stacks(
        cls,
        outputs: Union[Mapping[str, QuantityLike], Iterable],
        inputs: Union[Mapping[str, QuantityLike], Iterable] = (),
    ) -> "RecipeDefinition":
        return cls(outputs=_stacks(outputs), inputs=_stacks(inputs))

    def to_text(self) -> str:
        """Render as ``1 out = 2 a + 1 b``."""
        left = " + ".join(str(s) for s in self.outputs)
        right = " + ".join(str(s) for s in self.inputs)
        return f"{left} = {right}" if right else f"{left} ="


@dataclass(frozen=True)
class Recipe:
    """Validated recipe: one output item, positive yield and inputs."""

    output_item: str
    output_yield: Fraction
    inputs: tuple[ItemStack, ...]  # Merged, one entry per item

    @property
    def input_items(self) -> tuple[str, ...]:
        return tuple(stack.item for stack in self.inputs)

    def get_input_amount(self, item: str) -> Fraction:
        """Quantity of an input consumed per craft (0 if not an input)."""
        for stack in self.inputs:
            if stack.item == item:
                return stack.count
        return Fraction(0)

    def crafts_needed(self, quantity: Fraction) -> int:
        """Whole crafts required to produce at least ``quantity``."""
        if quantity <= 0:
            return 0
        return math.ceil(quantity / self.output_yield)
