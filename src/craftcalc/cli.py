"""Command line front end: print what a plan file needs."""

import argparse
import logging
import sys
from pathlib import Path

from craftcalc.config import ConfigManager
from craftcalc.data.loader import load_plan
from craftcalc.data.recipe_book import RecipeBook
from craftcalc.engine.aggregator import ResultAggregator
from craftcalc.engine.calculator import resolve_many
from craftcalc.errors import CraftCalcError
from craftcalc.logging_config import configure_logging

logger = logging.getLogger(__name__)


def parse_args(argv):
    parser = argparse.ArgumentParser(
        prog="craftcalc",
        description="Calculate the base materials needed to craft items.",
    )
    parser.add_argument("plan", type=Path, help="Plan file (.txt or .yaml)")
    parser.add_argument(
        "--target",
        help="Craft this item instead of the plan's 'need' section",
    )
    parser.add_argument(
        "--quantity",
        default="1",
        help="How many of --target to craft (default: 1)",
    )
    parser.add_argument(
        "--ignore-stock",
        action="store_true",
        help="Ignore the plan's 'have' section",
    )
    parser.add_argument("--tree", action="store_true", help="Print the breakdown tree")
    parser.add_argument("--table", action="store_true", help="Print every item")
    parser.add_argument("--config", help="Path to a craftcalc.yaml config file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)

    try:
        config = ConfigManager(args.config)
        # logging.level only applies to the app
        level = "DEBUG" if args.verbose else "WARNING"
        configure_logging(level, config.get("logging.file"))

        plan = load_plan(args.plan)
        if args.target:
            requests = [(args.target, args.quantity)]
        else:
            requests = [(stack.item, stack.count) for stack in plan.needs]
        available = {} if args.ignore_stock else plan.available_items()
        logger.debug("Resolving %s with %d recipes", requests, len(plan.recipes))

        output = resolve_many(RecipeBook(plan.recipes), requests, available)
    except (CraftCalcError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    aggregator = ResultAggregator(config.get("display.decimal_places", 2))
    if args.tree:
        sys.stdout.write(aggregator.format_tree(aggregator.build_tree(output)))
        sys.stdout.write("\n")
    if args.table:
        sys.stdout.write(aggregator.format_table(output))
        sys.stdout.write("\n")

    shopping = aggregator.format_shopping_list(output)
    sys.stdout.write(shopping or "Nothing to gather.\n")
    return 0
