"""Resolution request and result models."""

from dataclasses import dataclass, field
from fractions import Fraction
from types import MappingProxyType
from typing import Iterator, Mapping, Optional

from craftcalc.models.recipe import format_quantity


@dataclass(frozen=True)
class ResolutionRequest:
    """Target item and how many of it are wanted."""

    item: str
    quantity: Fraction


@dataclass(frozen=True)
class ResultNode:
    """Requirements for one distinct item touched by a resolution."""

    item: str
    total_quantity_needed: Fraction  # Gross demand from every consumer
    is_base: bool
    craft_count: int = 0  # Only meaningful when not base
    output_yield: Fraction = Fraction(1)
    # Input item -> amount this node's crafts consume; read-only once built
    children: Mapping[str, Fraction] = field(default_factory=dict, hash=False)
    from_stock: Fraction = Fraction(0)  # Covered by items already owned

    def __post_init__(self):
        object.__setattr__(self, "children", MappingProxyType(dict(self.children)))

    @property
    def still_needed(self) -> Fraction:
        """Demand left after stock is used up."""
        return self.total_quantity_needed - self.from_stock

    @property
    def leftover(self) -> Fraction:
        """Production wasted by rounding crafts up."""
        if self.is_base:
            return Fraction(0)
        return self.craft_count * self.output_yield - self.still_needed

    def to_dict(self) -> dict:
        """Serialize with quantities as strings so fractions survive JSON."""
        return {
            "item_name": self.item,
            "total_quantity_needed": str(self.total_quantity_needed),
            "craft_count": None if self.is_base else self.craft_count,
            "is_base": self.is_base,
            "output_yield": str(self.output_yield),
            "from_stock": str(self.from_stock),
            "children": {k: str(v) for k, v in self.children.items()},
        }


@dataclass(frozen=True)
class ResolutionOutput:
    """Everything a resolution produced, in processing (topological) order.

    Consumers always come before the items they consume, so the first
    entries are the requested targets and base materials trail behind.
    """

    requests: tuple[ResolutionRequest, ...]
    nodes: tuple[ResultNode, ...]
    _index: Mapping[str, ResultNode] = field(
        init=False, repr=False, compare=False, hash=False
    )

    def __post_init__(self):
        object.__setattr__(
            self, "_index", MappingProxyType({n.item: n for n in self.nodes})
        )

    def __iter__(self) -> Iterator[ResultNode]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, item: str) -> bool:
        return self.get(item) is not None

    def __getitem__(self, item: str) -> ResultNode:
        node = self.get(item)
        if node is None:
            raise KeyError(item)
        return node

    def get(self, item: str) -> Optional[ResultNode]:
        return self._index.get(item)

    @property
    def demand(self) -> dict[str, Fraction]:
        """Item -> total quantity needed."""
        return {n.item: n.total_quantity_needed for n in self.nodes}

    @property
    def craft_counts(self) -> dict[str, int]:
        """Craftable item -> number of crafts."""
        return {n.item: n.craft_count for n in self.nodes if not n.is_base}

    @property
    def base_materials(self) -> list[ResultNode]:
        return [n for n in self.nodes if n.is_base]

    @property
    def intermediates(self) -> list[ResultNode]:
        return [n for n in self.nodes if not n.is_base]

    def to_dict(self) -> dict:
        return {
            "requests": [
                {"item": r.item, "quantity": str(r.quantity)} for r in self.requests
            ],
            "nodes": [n.to_dict() for n in self.nodes],
        }


@dataclass
class TreeNode:
    """One line of the breakdown tree shown to the user."""

    item: str
    quantity: Fraction  # Amount the parent consumes (or the request for roots)
    is_base: bool
    craft_count: int = 0
    children: list["TreeNode"] = field(default_factory=list)
    shared: bool = False  # Expanded at an earlier line of the tree

    def label(self, decimal_places: int = 2) -> str:
        text = f"{format_quantity(self.quantity, decimal_places)} {self.item}"
        if self.shared:
            text += " (see above)"
        elif not self.is_base:
            text += f" ({self.craft_count}x craft)"
        return text


@dataclass(frozen=True)
class TotalsRow:
    """Flat 'shopping list' row for a single item."""

    item_name: str
    total_quantity_needed: Fraction
    craft_count: Optional[int]  # None for base materials
    is_base: bool
    from_stock: Fraction = Fraction(0)

    @property
    def still_needed(self) -> Fraction:
        return self.total_quantity_needed - self.from_stock
