"""Cycle detection and topological ordering over the recipe graph."""

import logging
from typing import Iterable, Iterator

from craftcalc.data.recipe_book import RecipeBook
from craftcalc.errors import CyclicRecipeError

logger = logging.getLogger(__name__)

# Visit states (items absent from the state map are unvisited)
_IN_PROGRESS = 1
_DONE = 2


class GraphValidator:
    """Walks item -> input edges of a recipe book.

    Traversal uses an explicit stack so deep or accidentally cyclic books
    cannot exhaust the interpreter's recursion limit.
    """

    def __init__(self, book: RecipeBook):
        self.book = book

    def _inputs_of(self, item: str) -> Iterator[str]:
        recipe = self.book.get_recipe(item)
        return iter(recipe.input_items if recipe else ())

    def topological_order(self, targets: Iterable[str]) -> list[str]:
        """Every item reachable from ``targets``, consumers before inputs.

        Raises CyclicRecipeError naming the first cycle found, e.g.
        ``("A", "B", "A")``.
        """
        state: dict[str, int] = {}
        post_order: list[str] = []

        for root in targets:
            if root in state:
                continue

            # Active path and the pending inputs of each item on it
            path: list[str] = [root]
            pending: list[Iterator[str]] = [self._inputs_of(root)]
            state[root] = _IN_PROGRESS

            while path:
                child = next(pending[-1], None)
                if child is None:
                    done = path.pop()
                    pending.pop()
                    state[done] = _DONE
                    post_order.append(done)
                    continue

                child_state = state.get(child)
                if child_state == _DONE:
                    continue
                if child_state == _IN_PROGRESS:
                    cycle = tuple(path[path.index(child):]) + (child,)
                    logger.warning("Cycle detected: %s", " -> ".join(cycle))
                    raise CyclicRecipeError(cycle)

                state[child] = _IN_PROGRESS
                path.append(child)
                pending.append(self._inputs_of(child))

        post_order.reverse()
        logger.debug("Topological order: %s", post_order)
        return post_order

    def validate(self, targets: Iterable[str]) -> None:
        """Raise CyclicRecipeError if any target reaches a cycle."""
        self.topological_order(targets)

    def validate_book(self) -> None:
        """Eagerly check the whole book, not just one target's subgraph."""
        self.topological_order(recipe.output_item for recipe in self.book)
