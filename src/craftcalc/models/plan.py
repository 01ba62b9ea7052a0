"""Crafting plan model: what the user needs, has, and knows how to craft."""

from dataclasses import dataclass, field
from fractions import Fraction
from uuid import UUID, uuid4

from craftcalc.models.recipe import ItemStack, RecipeDefinition


def _stack_to_dict(stack: ItemStack) -> dict:
    return {"item": stack.item, "count": str(stack.count)}


def _stack_from_dict(data: dict) -> ItemStack:
    return ItemStack.of(data["item"], data["count"])


@dataclass
class CraftingPlan:
    """Complete plan configuration as edited in the UI."""

    id: UUID = field(default_factory=uuid4)
    name: str = ""
    description: str = ""

    # Targets to craft (the "need" section)
    needs: list[ItemStack] = field(default_factory=list)

    # Items already owned (the "have" section)
    have: list[ItemStack] = field(default_factory=list)

    # Recipe definitions in the order they were written
    recipes: list[RecipeDefinition] = field(default_factory=list)

    # Metadata
    created_at: str = ""
    updated_at: str = ""

    @property
    def first_target(self) -> str:
        return self.needs[0].item if self.needs else ""

    def available_items(self) -> dict[str, Fraction]:
        """Stock on hand, summed per item."""
        stock: dict[str, Fraction] = {}
        for stack in self.have:
            stock[stack.item] = stock.get(stack.item, Fraction(0)) + stack.count
        return stock

    def to_text(self) -> str:
        """Render the plan in the need/have/recipes text format."""
        lines = ["need:"]
        lines += [f"- {stack}" for stack in self.needs]
        lines.append("have:")
        lines += [f"- {stack}" for stack in self.have]
        lines.append("recipes:")
        lines += [f"- {recipe.to_text()}" for recipe in self.recipes]
        return "\n".join(lines) + "\n"

    def to_dict(self) -> dict:
        """Serialize for JSON storage."""
        return {
            "id": str(self.id),
            "name": self.name,
            "description": self.description,
            "needs": [_stack_to_dict(s) for s in self.needs],
            "have": [_stack_to_dict(s) for s in self.have],
            "recipes": [
                {
                    "outputs": [_stack_to_dict(s) for s in r.outputs],
                    "inputs": [_stack_to_dict(s) for s in r.inputs],
                }
                for r in self.recipes
            ],
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CraftingPlan":
        """Deserialize from JSON."""
        return cls(
            id=UUID(data["id"]),
            name=data["name"],
            description=data.get("description", ""),
            needs=[_stack_from_dict(s) for s in data.get("needs", [])],
            have=[_stack_from_dict(s) for s in data.get("have", [])],
            recipes=[
                RecipeDefinition(
                    outputs=tuple(_stack_from_dict(s) for s in r.get("outputs", [])),
                    inputs=tuple(_stack_from_dict(s) for s in r.get("inputs", [])),
                )
                for r in data.get("recipes", [])
            ],
            created_at=data.get("created_at", ""),
            updated_at=data.get("updated_at", ""),
        )
