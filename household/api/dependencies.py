"""Shared FastAPI dependencies; tests swap them through app.dependency_overrides."""
from functools import lru_cache

from household.infra.Shopping_List_Repository import ShoppingListRepository
from household.logic.shopping.catalog import PackageCatalog, load_catalog
from household.utilities.config import PACKAGE_CATALOG_FILE


def get_repository() -> ShoppingListRepository:
    return ShoppingListRepository()


@lru_cache(maxsize=1)
def get_catalog() -> PackageCatalog:
    return load_catalog(PACKAGE_CATALOG_FILE)
