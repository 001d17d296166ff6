from typing import Final

COST_DECIMALS: Final[int] = 2
LIST_STATUSES: Final[tuple[str, ...]] = ("active", "completed", "archived")
ITEM_PRIORITIES: Final[tuple[str, ...]] = ("low", "medium", "high")
DEFAULT_STATUS: Final[str] = "active"
DEFAULT_PRIORITY: Final[str] = "medium"
REPRICE_ZERO_LIMIT: Final[int] = 5
RECIPE_NOTE_TEMPLATE: Final[str] = "{notes} (Recipe calls for: {original})"
