"""Parser for the need/have/recipes plan text format.

Example::

    need:
    - 1 diamond pickaxe
    have:
    - 2 stick
    recipes:
    - 4 stick = 2 plank
    - 1 diamond pickaxe = 2 stick + 3 diamond
"""

import logging
import re

from craftcalc.errors import ParseError
from craftcalc.models.plan import CraftingPlan
from craftcalc.models.recipe import ItemStack, RecipeDefinition

logger = logging.getLogger(__name__)

SECTIONS = ("need", "have", "recipes")

_HEADER_RE = re.compile(r"^(\w+):\s*$")
_LIST_ITEM_RE = re.compile(r"^-\s*(.*?)\s*$")
# Count, at least one space, then a name free of '+' and '='
_STACK_RE = re.compile(r"^(\d+(?:[./]\d+)?) +([^+=]+)$")


def parse_stack(text: str, line_number: int = 0, line: str = "") -> ItemStack:
    """Parse ``3 diamond`` or ``1/2 bucket of water``."""
    match = _STACK_RE.match(text.strip())
    if not match:
        raise ParseError(line_number, line or text, "expected '<count> <item>'")
    count, item = match.groups()
    item = item.strip()
    if not item:
        raise ParseError(line_number, line or text, "missing item name")
    return ItemStack.of(item, count)


def _parse_stacks(text: str, line_number: int, line: str) -> tuple[ItemStack, ...]:
    return tuple(parse_stack(part, line_number, line) for part in text.split("+"))


def parse_recipe(text: str, line_number: int = 0, line: str = "") -> RecipeDefinition:
    """Parse ``1 output = 2 input1 + 1 input2``.

    An empty right-hand side is a recipe with no inputs.
    """
    if text.count("=") != 1:
        raise ParseError(line_number, line or text, "expected exactly one '='")
    left, right = text.split("=")
    outputs = _parse_stacks(left, line_number, line or text)
    inputs = _parse_stacks(right, line_number, line or text) if right.strip() else ()
    return RecipeDefinition(outputs=outputs, inputs=inputs)


def parse_plan(text: str, name: str = "") -> CraftingPlan:
    """Parse plan text into a CraftingPlan.

    Sections may come in any order and may be omitted, but not repeated.
    Blank lines and ``#`` comments are skipped.
    """
    plan = CraftingPlan(name=name)
    seen: set[str] = set()
    section = None

    for line_number, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue

        header = _HEADER_RE.match(stripped)
        if header:
            section = header.group(1)
            if section not in SECTIONS:
                raise ParseError(line_number, line, f"unknown section '{section}'")
            if section in seen:
                raise ParseError(line_number, line, f"section '{section}' repeated")
            seen.add(section)
            continue

        entry = _LIST_ITEM_RE.match(stripped)
        if not entry:
            raise ParseError(line_number, line, "expected '- ' list item")
        if section is None:
            raise ParseError(line_number, line, "list item outside of a section")

        body = entry.group(1)
        if section == "need":
            plan.needs.append(parse_stack(body, line_number, line))
        elif section == "have":
            plan.have.append(parse_stack(body, line_number, line))
        else:
            plan.recipes.append(parse_recipe(body, line_number, line))

    logger.debug(
        "Parsed plan: %d needs, %d have, %d recipes",
        len(plan.needs),
        len(plan.have),
        len(plan.recipes),
    )
    return plan
