"""Recipe resolution: turns targets into total material requirements."""

import logging
from fractions import Fraction
from typing import Iterable, Mapping, Optional

from craftcalc.data.recipe_book import RecipeBook
from craftcalc.engine.validator import GraphValidator
from craftcalc.errors import InvalidQuantityError
from craftcalc.models.plan import CraftingPlan
from craftcalc.models.recipe import QuantityLike, to_positive_quantity, to_quantity
from craftcalc.models.result import ResolutionOutput, ResolutionRequest, ResultNode

logger = logging.getLogger(__name__)


class RecipeResolver:
    """Calculates crafting requirements against one recipe book.

    Holds no state between calls; the book is only read.
    """

    def __init__(self, book: RecipeBook):
        self.book = book
        self.validator = GraphValidator(book)

    def resolve(
        self,
        target: str,
        quantity: QuantityLike,
        available: Optional[Mapping[str, QuantityLike]] = None,
    ) -> ResolutionOutput:
        """Requirements for ``quantity`` of ``target``."""
        return self.resolve_many([(target, quantity)], available)

    def resolve_many(
        self,
        requests: Iterable,
        available: Optional[Mapping[str, QuantityLike]] = None,
    ) -> ResolutionOutput:
        """
        Requirements for several targets at once.

        Args:
            requests: ResolutionRequests or (item, quantity) pairs
            available: Items already owned (item -> count), used before crafting

        Demand from every consumer is summed before an item's crafts are
        rounded up, so shared ingredients never get rounded twice.
        """
        normalized = self._normalize_requests(requests)
        stock = self._normalize_stock(available or {})

        # Pass 1: consumers-first order (also rejects cycles)
        order = self.validator.topological_order(r.item for r in normalized)
        index = {item: i for i, item in enumerate(order)}

        demand = [Fraction(0)] * len(order)
        for request in normalized:
            demand[index[request.item]] += request.quantity

        # Pass 2: each item's demand is final by the time it is reached
        nodes = []
        for i, item in enumerate(order):
            needed = demand[i]
            from_stock = min(needed, stock.get(item, Fraction(0)))
            recipe = self.book.get_recipe(item)

            if recipe is None:
                nodes.append(
                    ResultNode(
                        item=item,
                        total_quantity_needed=needed,
                        is_base=True,
                        from_stock=from_stock,
                    )
                )
                continue

            craft_count = recipe.crafts_needed(needed - from_stock)
            children = {}
            for stack in recipe.inputs:
                consumed = stack.count * craft_count
                children[stack.item] = consumed
                demand[index[stack.item]] += consumed

            logger.debug("%s: need %s, %d crafts", item, needed, craft_count)
            nodes.append(
                ResultNode(
                    item=item,
                    total_quantity_needed=needed,
                    is_base=False,
                    craft_count=craft_count,
                    output_yield=recipe.output_yield,
                    children=children,
                    from_stock=from_stock,
                )
            )

        logger.info(
            "Resolved %s: %d items",
            ", ".join(f"{r.quantity} {r.item}" for r in normalized),
            len(nodes),
        )
        return ResolutionOutput(requests=tuple(normalized), nodes=tuple(nodes))

    def _normalize_requests(self, requests: Iterable) -> list[ResolutionRequest]:
        normalized = []
        for request in requests:
            if isinstance(request, ResolutionRequest):
                item, quantity = request.item, request.quantity
            else:
                item, quantity = request
            normalized.append(
                ResolutionRequest(item, to_positive_quantity(quantity, item))
            )
        return normalized

    def _normalize_stock(
        self, available: Mapping[str, QuantityLike]
    ) -> dict[str, Fraction]:
        stock = {}
        for item, count in available.items():
            quantity = to_quantity(count, item)
            if quantity < 0:
                raise InvalidQuantityError(item, count)
            stock[item] = quantity
        return stock


def resolve(
    book: RecipeBook,
    target: str,
    quantity: QuantityLike,
    available: Optional[Mapping[str, QuantityLike]] = None,
) -> ResolutionOutput:
    """Resolve a single target against ``book``."""
    return RecipeResolver(book).resolve(target, quantity, available)


def resolve_many(
    book: RecipeBook,
    requests: Iterable,
    available: Optional[Mapping[str, QuantityLike]] = None,
) -> ResolutionOutput:
    """Resolve several targets in one pass against ``book``."""
    return RecipeResolver(book).resolve_many(requests, available)


def resolve_plan(plan: CraftingPlan) -> ResolutionOutput:
    """Build the plan's recipe book and resolve its needs against its stock."""
    book = RecipeBook(plan.recipes)
    return resolve_many(
        book,
        [(stack.item, stack.count) for stack in plan.needs],
        plan.available_items(),
    )
