"""Tests for recipe resolution."""

from fractions import Fraction

import pytest

from craftcalc.data.recipe_book import RecipeBook
from craftcalc.engine.calculator import RecipeResolver, resolve, resolve_many, resolve_plan
from craftcalc.errors import CyclicRecipeError, InvalidQuantityError
from craftcalc.models.plan import CraftingPlan
from craftcalc.models.recipe import ItemStack, RecipeDefinition
from craftcalc.models.result import ResolutionRequest


def _recompute_demand(book, output):
    """Rebuild every demand from the request and the returned craft counts."""
    demand = {node.item: Fraction(0) for node in output}
    for request in output.requests:
        demand[request.item] += request.quantity
    for node in output:
        if node.is_base:
            continue
        for stack in book.get_recipe(node.item).inputs:
            demand[stack.item] += stack.count * node.craft_count
    return demand


class TestBasics:
    def test_base_target_yields_single_entry(self, diamond_book):
        output = resolve(diamond_book, "Emerald", 7)
        assert len(output) == 1
        node = output["Emerald"]
        assert node.total_quantity_needed == 7
        assert node.is_base
        assert node.children == {}

    def test_lookup_by_item(self, diamond_book):
        output = resolve(diamond_book, "T", 1)
        assert output.get("C") is output.nodes[-1]
        assert "A" in output
        assert output.get("Emerald") is None
        with pytest.raises(KeyError):
            output["Emerald"]

    def test_empty_book(self):
        output = resolve(RecipeBook(), "dirt", 3)
        assert [(n.item, n.total_quantity_needed, n.is_base) for n in output] == [
            ("dirt", 3, True)
        ]

    def test_diamond_aggregation(self, diamond_book):
        output = resolve(diamond_book, "T", 1)
        assert output["C"].total_quantity_needed == 5
        assert output["A"].craft_count == 2
        assert output["B"].craft_count == 3
        assert output["T"].children == {"A": 2, "B": 3}

    def test_diamond_aggregation_on_craftable_shared_item(self):
        book = RecipeBook(
            [
                RecipeDefinition.create("T", {"A": 2, "B": 3}),
                RecipeDefinition.create("A", {"C": 1}),
                RecipeDefinition.create("B", {"C": 1}),
                RecipeDefinition.create("C", {"ore": 1}),
            ]
        )
        output = resolve(book, "T", 1)
        assert output["C"].total_quantity_needed == 5
        assert output["C"].craft_count == 5
        assert output["ore"].total_quantity_needed == 5

    def test_yield_scaling(self):
        book = RecipeBook([RecipeDefinition.create("X", {"Y": 1}, output_yield=4)])
        output = resolve(book, "X", 10)
        assert output["X"].craft_count == 3
        assert output["Y"].total_quantity_needed == 3
        assert output["X"].leftover == 2

    def test_rounding_happens_once_per_shared_item(self):
        # Rounded per consumer this would be two plank crafts
        book = RecipeBook(
            [
                RecipeDefinition.create("chest", {"plank": 1, "latch": 1}),
                RecipeDefinition.create("latch", {"plank": 1}),
                RecipeDefinition.create("plank", {"log": 1}, output_yield=4),
            ]
        )
        output = resolve(book, "chest", 1)
        assert output["plank"].total_quantity_needed == 2
        assert output["plank"].craft_count == 1
        assert output["log"].total_quantity_needed == 1

    def test_nested_yields(self, minecraft_book):
        output = resolve(minecraft_book, "diamond pickaxe", 10)
        assert output["stick"].total_quantity_needed == 20
        assert output["stick"].craft_count == 5
        assert output["plank"].total_quantity_needed == 10
        assert output["plank"].craft_count == 3
        assert output["log"].total_quantity_needed == 3
        assert output["diamond"].total_quantity_needed == 30

    def test_free_recipe_has_craft_count_and_no_children(self):
        book = RecipeBook([RecipeDefinition.create("water", output_yield=3)])
        node = resolve(book, "water", 7)["water"]
        assert not node.is_base
        assert node.craft_count == 3
        assert node.children == {}

    def test_fractional_quantities(self):
        book = RecipeBook([RecipeDefinition.create("cake", {"milk": "1/2"})])
        output = resolve(book, "cake", 3)
        assert output["milk"].total_quantity_needed == Fraction(3, 2)

    def test_craft_count_is_int(self, minecraft_book):
        output = resolve(minecraft_book, "torch", 5)
        assert isinstance(output["torch"].craft_count, int)
        assert output["torch"].craft_count == 2


class TestProperties:
    @pytest.mark.parametrize("quantity", [1, 3, 7, 64])
    def test_round_trip_consistency(self, minecraft_book, quantity):
        output = resolve_many(
            minecraft_book, [("diamond pickaxe", quantity), ("torch", quantity)]
        )
        assert _recompute_demand(minecraft_book, output) == output.demand

    def test_craft_count_is_ceiling_of_demand(self, minecraft_book):
        output = resolve(minecraft_book, "torch", 13)
        for node in output.intermediates:
            recipe = minecraft_book.get_recipe(node.item)
            crafts = node.craft_count
            assert crafts * recipe.output_yield >= node.total_quantity_needed
            assert (crafts - 1) * recipe.output_yield < node.total_quantity_needed

    def test_idempotent(self, minecraft_book):
        first = resolve(minecraft_book, "diamond pickaxe", 5)
        second = resolve(minecraft_book, "diamond pickaxe", 5)
        assert first == second
        assert first.to_dict() == second.to_dict()

    def test_resolver_keeps_no_state_between_calls(self, minecraft_book):
        resolver = RecipeResolver(minecraft_book)
        resolver.resolve("torch", 100)
        output = resolver.resolve("torch", 1)
        assert output["coal"].total_quantity_needed == 1


class TestErrors:
    @pytest.mark.parametrize("target", ["A", "B", "D"])
    def test_cycle_reachable_from_target(self, cyclic_book, target):
        with pytest.raises(CyclicRecipeError):
            resolve(cyclic_book, target, 1)

    def test_target_outside_cycle_resolves(self, cyclic_book):
        output = resolve(cyclic_book, "E", 2)
        assert output["F"].total_quantity_needed == 2

    @pytest.mark.parametrize("quantity", [0, -3, "0"])
    def test_non_positive_request(self, diamond_book, quantity):
        with pytest.raises(InvalidQuantityError) as exc:
            resolve(diamond_book, "T", quantity)
        assert exc.value.item == "T"

    def test_unparseable_request_quantity(self, diamond_book):
        with pytest.raises(InvalidQuantityError):
            resolve(diamond_book, "T", "lots")

    def test_negative_stock(self, diamond_book):
        with pytest.raises(InvalidQuantityError):
            resolve(diamond_book, "T", 1, available={"C": -1})


class TestMultipleTargetsAndStock:
    def test_targets_share_demand_before_rounding(self, minecraft_book):
        output = resolve_many(minecraft_book, [("diamond pickaxe", 1), ("torch", 2)])
        assert output["stick"].total_quantity_needed == 3
        assert output["stick"].craft_count == 1
        assert output["coal"].total_quantity_needed == 1
        assert [r.item for r in output.requests] == ["diamond pickaxe", "torch"]

    def test_requests_accept_request_objects(self, diamond_book):
        output = resolve_many(diamond_book, [ResolutionRequest("A", Fraction(4))])
        assert output["C"].total_quantity_needed == 4

    def test_same_target_twice_is_summed(self, diamond_book):
        output = resolve_many(diamond_book, [("A", 1), ("A", 2)])
        assert output["A"].total_quantity_needed == 3

    def test_stock_reduces_crafts(self, minecraft_book):
        output = resolve(minecraft_book, "diamond pickaxe", 1, available={"stick": 2})
        stick = output["stick"]
        assert stick.total_quantity_needed == 2
        assert stick.from_stock == 2
        assert stick.still_needed == 0
        assert stick.craft_count == 0
        assert output["plank"].total_quantity_needed == 0
        assert output["log"].total_quantity_needed == 0

    def test_stock_covers_part_of_base_item(self, diamond_book):
        output = resolve(diamond_book, "T", 1, available={"C": 2})
        assert output["C"].total_quantity_needed == 5
        assert output["C"].from_stock == 2
        assert output["C"].still_needed == 3

    def test_stock_larger_than_demand(self, diamond_book):
        output = resolve(diamond_book, "A", 1, available={"C": 10})
        assert output["C"].from_stock == 1
        assert output["C"].still_needed == 0

    def test_resolve_plan_uses_needs_and_have(self):
        plan = CraftingPlan(
            needs=[ItemStack.of("diamond pickaxe", 1), ItemStack.of("torch", 2)],
            have=[ItemStack.of("stick", 1), ItemStack.of("stick", 1), ItemStack.of("coal", 1)],
            recipes=[
                RecipeDefinition.create("plank", {"log": 1}, 4),
                RecipeDefinition.create("stick", {"plank": 2}, 4),
                RecipeDefinition.create("torch", {"stick": 1, "coal": 1}, 4),
                RecipeDefinition.create("diamond pickaxe", {"stick": 2, "diamond": 3}),
            ],
        )
        output = resolve_plan(plan)
        assert output["stick"].from_stock == 2
        assert output["stick"].craft_count == 1
        assert output["coal"].still_needed == 0
        assert output["log"].still_needed == 1
        assert output["diamond"].still_needed == 3
