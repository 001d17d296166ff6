from household.utilities.config import DATA_DIR

# Centralized paths for data files (single source of truth)
SHOPPING_LISTS_FILE = DATA_DIR / 'shopping_lists.json'

__all__ = ['DATA_DIR', 'SHOPPING_LISTS_FILE']
