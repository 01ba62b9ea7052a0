"""Load crafting plans from text or YAML files."""

import logging
from pathlib import Path
from typing import Any

import yaml

from craftcalc.data.parser import parse_plan
from craftcalc.data.recipe_book import RecipeBook
from craftcalc.errors import ParseError
from craftcalc.models.plan import CraftingPlan
from craftcalc.models.recipe import ItemStack, RecipeDefinition

logger = logging.getLogger(__name__)

EXAMPLE_PLAN_PATH = Path(__file__).parent / "example_plan.txt"


def load_example_text() -> str:
    """Bundled example plan shown when the editor starts empty."""
    return EXAMPLE_PLAN_PATH.read_text(encoding="utf-8")


def _stacks_from_mapping(data: Any, what: str) -> list[ItemStack]:
    if data is None:
        return []
    if not isinstance(data, dict):
        raise ParseError(0, str(data), f"'{what}' must map item names to counts")
    return [ItemStack.of(str(item), count) for item, count in data.items()]


def _recipe_from_yaml(entry: Any) -> RecipeDefinition:
    """
    Accepts either form:

        {output: plank, yield: 4, inputs: {log: 1}}
        {outputs: {plank: 4}, inputs: {log: 1}}
    """
    if not isinstance(entry, dict):
        raise ParseError(0, str(entry), "recipe entries must be mappings")

    inputs = _stacks_from_mapping(entry.get("inputs"), "inputs")
    if "outputs" in entry:
        outputs = _stacks_from_mapping(entry["outputs"], "outputs")
        return RecipeDefinition(outputs=tuple(outputs), inputs=tuple(inputs))

    if "output" not in entry:
        raise ParseError(0, str(entry), "recipe needs 'output' or 'outputs'")
    return RecipeDefinition.create(
        str(entry["output"]), inputs, entry.get("yield", 1)
    )


def plan_from_yaml(text: str, name: str = "") -> CraftingPlan:
    """Parse the YAML rendition of a plan."""
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ParseError(0, "", f"invalid YAML: {e}") from e
    if not isinstance(data, dict):
        raise ParseError(0, str(data), "plan must be a mapping")

    return CraftingPlan(
        name=name or str(data.get("name", "")),
        description=str(data.get("description", "")),
        needs=_stacks_from_mapping(data.get("need"), "need"),
        have=_stacks_from_mapping(data.get("have"), "have"),
        recipes=[_recipe_from_yaml(e) for e in data.get("recipes") or []],
    )


def load_plan(path: Path) -> CraftingPlan:
    """Load a plan, picking the format from the file suffix."""
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()

    if path.suffix.lower() in (".yaml", ".yml"):
        plan = plan_from_yaml(text, name=path.stem)
    else:
        plan = parse_plan(text, name=path.stem)

    logger.info("Loaded plan '%s' from %s", plan.name, path)
    return plan


def load_recipe_book(path: Path) -> RecipeBook:
    """Recipe book from the recipes section of a plan file."""
    return RecipeBook(load_plan(path).recipes)
