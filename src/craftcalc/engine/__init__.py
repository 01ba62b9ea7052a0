"""Calculation engine for recipe resolution."""

from .validator import GraphValidator
from .calculator import RecipeResolver, resolve, resolve_many, resolve_plan
from .aggregator import ResultAggregator

__all__ = [
    "GraphValidator",
    "RecipeResolver",
    "ResultAggregator",
    "resolve",
    "resolve_many",
    "resolve_plan",
]
