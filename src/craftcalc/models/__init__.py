"""Data models for recipes, plans and resolution results."""

from .recipe import ItemStack, Recipe, RecipeDefinition, format_quantity, to_quantity
from .plan import CraftingPlan
from .result import (
    ResolutionOutput,
    ResolutionRequest,
    ResultNode,
    TotalsRow,
    TreeNode,
)

__all__ = [
    "ItemStack",
    "Recipe",
    "RecipeDefinition",
    "format_quantity",
    "to_quantity",
    "CraftingPlan",
    "ResolutionOutput",
    "ResolutionRequest",
    "ResultNode",
    "TotalsRow",
    "TreeNode",
]
