"""Presentation-friendly views of a resolution: totals, shopping list, tree."""

from fractions import Fraction

import pandas as pd

from craftcalc.models.recipe import format_quantity
from craftcalc.models.result import ResolutionOutput, TotalsRow, TreeNode

TABLE_COLUMNS = [
    "item_name",
    "total_quantity_needed",
    "from_stock",
    "still_needed",
    "craft_count",
    "is_base",
]


class ResultAggregator:
    """Derives tables and trees from a resolution output without recomputing."""

    def __init__(self, decimal_places: int = 2):
        self.decimal_places = decimal_places

    def totals_table(
        self, output: ResolutionOutput, sort_by_name: bool = False
    ) -> list[TotalsRow]:
        """One row per item, in processing order unless sorted by name."""
        rows = [
            TotalsRow(
                item_name=node.item,
                total_quantity_needed=node.total_quantity_needed,
                craft_count=None if node.is_base else node.craft_count,
                is_base=node.is_base,
                from_stock=node.from_stock,
            )
            for node in output
        ]
        if sort_by_name:
            rows.sort(key=lambda r: r.item_name)
        return rows

    def shopping_list(self, output: ResolutionOutput) -> dict[str, Fraction]:
        """Base materials still to gather, sorted by name."""
        return {
            node.item: node.still_needed
            for node in sorted(output.base_materials, key=lambda n: n.item)
            if node.still_needed > 0
        }

    def build_tree(self, output: ResolutionOutput) -> list[TreeNode]:
        """Nest each craftable item's consumed inputs under it, one root per target.

        Child quantities are what the parent consumes. A craftable item is
        expanded only where it first appears in display order; later
        occurrences are ``shared`` leaves, so the tree grows with the number
        of recipe edges rather than the number of paths.
        """
        roots = [
            self._tree_node(output, request.item, request.quantity)
            for request in output.requests
        ]
        expanded = set()
        stack = list(reversed(roots))

        while stack:
            tree_node = stack.pop()
            if tree_node.is_base:
                continue
            if tree_node.item in expanded:
                tree_node.shared = True
                continue
            expanded.add(tree_node.item)

            result = output[tree_node.item]
            for item, quantity in result.children.items():
                tree_node.children.append(self._tree_node(output, item, quantity))
            stack.extend(reversed(tree_node.children))

        return roots

    def _tree_node(
        self, output: ResolutionOutput, item: str, quantity: Fraction
    ) -> TreeNode:
        result = output[item]
        return TreeNode(
            item=item,
            quantity=quantity,
            is_base=result.is_base,
            craft_count=result.craft_count,
        )

    def to_dataframe(self, output: ResolutionOutput) -> pd.DataFrame:
        """Totals table as a DataFrame (quantities as floats for display)."""
        records = [
            {
                "item_name": row.item_name,
                "total_quantity_needed": float(row.total_quantity_needed),
                "from_stock": float(row.from_stock),
                "still_needed": float(row.still_needed),
                "craft_count": row.craft_count,
                "is_base": row.is_base,
            }
            for row in self.totals_table(output)
        ]
        df = pd.DataFrame.from_records(records, columns=TABLE_COLUMNS)
        df["craft_count"] = df["craft_count"].astype("Int64")
        return df

    def format_shopping_list(self, output: ResolutionOutput) -> str:
        """Render as ``- 3 diamond`` lines."""
        return "".join(
            f"- {format_quantity(count, self.decimal_places)} {item}\n"
            for item, count in self.shopping_list(output).items()
        )

    def format_tree(self, roots: list[TreeNode]) -> str:
        """Indented text rendering of a breakdown tree."""
        lines = []
        stack = [(root, 0) for root in reversed(roots)]
        while stack:
            node, depth = stack.pop()
            lines.append(f"{'  ' * depth}- {node.label(self.decimal_places)}")
            stack.extend((child, depth + 1) for child in reversed(node.children))
        return "\n".join(lines) + ("\n" if lines else "")

    def format_table(self, output: ResolutionOutput) -> str:
        """Fixed-width totals table for terminals."""
        rows = self.totals_table(output)
        if not rows:
            return ""
        width = max(len("Item"), *(len(r.item_name) for r in rows))
        lines = [f"{'Item':<{width}}  {'Needed':>10}  {'To get':>10}  {'Crafts':>6}  Base"]
        for row in rows:
            crafts = "" if row.craft_count is None else str(row.craft_count)
            needed = format_quantity(row.total_quantity_needed, self.decimal_places)
            to_get = format_quantity(row.still_needed, self.decimal_places)
            base = "yes" if row.is_base else "no"
            lines.append(
                f"{row.item_name:<{width}}  {needed:>10}  {to_get:>10}  {crafts:>6}  {base}"
            )
        return "\n".join(lines) + "\n"
