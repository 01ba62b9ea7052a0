"""Saved crafting plans.

Each plan is stored twice under the same stem: ``<name>_<id>.json`` holds
the full record (exact quantities as strings, timestamps, id) and
``<name>_<id>.txt`` holds the need/have/recipes text, which can be opened
directly with ``craftcalc <file>.txt``.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from craftcalc.models.plan import CraftingPlan

logger = logging.getLogger(__name__)


def _safe_stem(plan: CraftingPlan) -> str:
    safe_name = "".join(c if c.isalnum() or c in "-_" else "_" for c in plan.name)
    return f"{safe_name or 'plan'}_{plan.id}"


class PlanStorage:
    """Keeps plans as JSON records with a plain-text copy beside each one."""

    def __init__(self, storage_dir: Path):
        self.storage_dir = Path(storage_dir)
        self.storage_dir.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def text_path(filepath: Path) -> Path:
        """Text rendition belonging to a saved JSON record."""
        return Path(filepath).with_suffix(".txt")

    def save(self, plan: CraftingPlan, filename: Optional[str] = None) -> Path:
        """Write the JSON record and its text copy; returns the JSON path."""
        plan.updated_at = datetime.now().isoformat()
        if not plan.created_at:
            plan.created_at = plan.updated_at

        filepath = self.storage_dir / (filename or f"{_safe_stem(plan)}.json")
        filepath.write_text(json.dumps(plan.to_dict(), indent=2), encoding="utf-8")
        self.text_path(filepath).write_text(plan.to_text(), encoding="utf-8")

        logger.info("Saved plan '%s' to %s", plan.name, filepath)
        return filepath

    def load(self, filepath: Path) -> CraftingPlan:
        data = json.loads(Path(filepath).read_text(encoding="utf-8"))
        return CraftingPlan.from_dict(data)

    def list_plans(self) -> list[tuple[Path, str, str, int]]:
        """List saved plans as (path, name, first target, recipe count)."""
        plans = []
        for filepath in sorted(self.storage_dir.glob("*.json")):
            try:
                data = json.loads(filepath.read_text(encoding="utf-8"))
                needs = data.get("needs", [])
                plans.append(
                    (
                        filepath,
                        data.get("name", "Unnamed"),
                        needs[0]["item"] if needs else "",
                        len(data.get("recipes", [])),
                    )
                )
            except (json.JSONDecodeError, KeyError, TypeError, AttributeError):
                logger.warning("Skipping unreadable plan file %s", filepath)
        return plans

    def delete(self, filepath: Path) -> bool:
        """Remove a saved plan and its text copy; False if it was not there."""
        filepath = Path(filepath)
        if not filepath.exists():
            return False
        filepath.unlink()
        self.text_path(filepath).unlink(missing_ok=True)
        logger.info("Deleted plan %s", filepath)
        return True
