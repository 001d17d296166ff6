"""Shopping-list cost aggregation and total reconciliation.

A list's ``total_estimated_cost`` is a cached copy of the sum of its items'
``estimated_cost``. Nothing keeps the two in sync when items change, so the
functions here recompute the sum and write it back (reconciliation), check it
without writing (audit), or re-price every item from the package catalog
first (repricing).

Reconciliation of a list id that does not exist raises
ShoppingListNotFoundError; a list with no items reconciles to 0.
"""
from __future__ import annotations
import logging
from decimal import Decimal
from typing import Any, Dict, Iterable, NamedTuple, Optional

from household.domain.errors import ShoppingListNotFoundError
from household.events.event_helpers import publish_reconciled, publish_repriced
from household.infra.Shopping_List_Repository import ShoppingListRepository, StoreSession
from household.logic.shopping.catalog import DEFAULT_CATALOG, PackageCatalog
from household.logic.shopping.money import round_cost, to_decimal
from household.logic.shopping.package_sizes import estimate_package_cost, parse_quantity, resolve_package
from household.utilities.constants import RECIPE_NOTE_TEMPLATE, REPRICE_ZERO_LIMIT

logger = logging.getLogger(__name__)

__all__ = [
    "ReconcileResult", "TotalAudit", "compute_total", "reconcile_list_total", "reconcile_latest",
    "reconcile_all", "audit_list_total", "reprice_list", "reprice_zero_total_lists",
]


class ReconcileResult(NamedTuple):
    previous_total: float
    new_total: float
    updated: bool
    changed: bool

    def to_dict(self):
        return self._asdict()


class TotalAudit(NamedTuple):
    list_id: int
    stored_total: float
    computed_total: float
    matches: bool
    item_count: int

    def to_dict(self):
        return self._asdict()


def _item_cost(item: Any) -> Decimal:
    if isinstance(item, dict):
        value = item.get("estimated_cost")
    else:
        value = getattr(item, "estimated_cost", None)
    return to_decimal(value)


def compute_total(items: Optional[Iterable[Any]]) -> float:
    """Sum of the items' estimated costs, rounded to cents.

    Items may be dicts or ShoppingListItem objects. Missing, None or
    unparseable costs count as 0; numeric strings ("1.50") are parsed.
    """
    total = sum((_item_cost(item) for item in items or ()), Decimal(0))
    return round_cost(total)


def _differs(stored: float, total: float) -> bool:
    # Unrounded stored values such as 3.754 count as drift
    return to_decimal(stored) != to_decimal(total)


def _reconcile_in(session: StoreSession, list_id: int) -> ReconcileResult:
    shopping_list = session.get_list(list_id, with_items=False)
    previous = shopping_list.total_estimated_cost
    new_total = compute_total(session.get_items(list_id))
    # Written unconditionally, even when nothing changed
    session.set_total(list_id, new_total)
    return ReconcileResult(previous, new_total, True, _differs(previous, new_total))


def _announce(list_id: int, result: ReconcileResult):
    if result.changed:
        logger.warning("Shopping list %s total drifted: %.2f -> %.2f",
                       list_id, result.previous_total, result.new_total)
    else:
        logger.info("Shopping list %s total confirmed at %.2f", list_id, result.new_total)
    publish_reconciled(list_id, result.previous_total, result.new_total)


def reconcile_list_total(repository: ShoppingListRepository, list_id: int) -> ReconcileResult:
    """Recompute a list's total from its items and overwrite the stored value.

    Runs inside one repository transaction. Raises ShoppingListNotFoundError
    for an unknown list; data-store errors propagate unchanged and leave the
    stored file untouched.
    """
    with repository.transaction() as session:
        result = _reconcile_in(session, list_id)
    _announce(list_id, result)
    return result


def reconcile_latest(repository: ShoppingListRepository) -> tuple[int, ReconcileResult]:
    """Reconcile the most recently created list; returns (list_id, result)."""
    with repository.transaction() as session:
        latest = session.latest_list()
        if latest is None:
            raise ShoppingListNotFoundError("latest")
        result = _reconcile_in(session, latest.id)
    _announce(latest.id, result)
    return latest.id, result


def reconcile_all(repository: ShoppingListRepository) -> Dict[int, ReconcileResult]:
    results: Dict[int, ReconcileResult] = {}
    with repository.transaction() as session:
        for shopping_list in session.list_lists():
            results[shopping_list.id] = _reconcile_in(session, shopping_list.id)
    for list_id, result in results.items():
        _announce(list_id, result)
    logger.info("Reconciled %d shopping lists (%d drifted)",
                len(results), sum(1 for r in results.values() if r.changed))
    return results


def audit_list_total(repository: ShoppingListRepository, list_id: int) -> TotalAudit:
    """Compare the stored total with the item sum without writing anything."""
    with repository.snapshot() as session:
        shopping_list = session.get_list(list_id)
    stored = shopping_list.total_estimated_cost
    computed = compute_total(shopping_list.items)
    return TotalAudit(list_id, stored, computed, not _differs(stored, computed), len(shopping_list.items))


def reprice_list(repository: ShoppingListRepository, list_id: int,
                 catalog: PackageCatalog = DEFAULT_CATALOG) -> ReconcileResult:
    """Convert every item to its store package, re-estimate its cost and rewrite the total."""
    with repository.transaction() as session:
        shopping_list = session.get_list(list_id)
        previous = shopping_list.total_estimated_cost
        for item in shopping_list.items:
            package = resolve_package(item.item_name, item.quantity, item.unit, catalog)
            cost = estimate_package_cost(item.item_name, catalog)
            try:
                quantity = parse_quantity(package.package_size)
            except ValueError:
                logger.warning("Keeping quantity of '%s': package size %r is not numeric",
                               item.item_name, package.package_size)
                quantity = item.quantity
            notes = RECIPE_NOTE_TEMPLATE.format(notes=package.notes or "",
                                                original=package.original_quantity).strip()
            logger.debug("  %s: %s -> %.2f", item.item_name, item.estimated_cost, cost)
            session.update_item(list_id, item.id, {
                "estimated_cost": cost,
                "quantity": quantity,
                "unit": package.package_unit,
                "notes": notes,
            })
        new_total = compute_total(session.get_items(list_id))
        session.set_total(list_id, new_total)
    logger.info("Repriced shopping list %s (%d items): %.2f -> %.2f",
                list_id, len(shopping_list.items), previous, new_total)
    publish_repriced(list_id, len(shopping_list.items), previous, new_total)
    return ReconcileResult(previous, new_total, True, _differs(previous, new_total))


def reprice_zero_total_lists(repository: ShoppingListRepository,
                             catalog: PackageCatalog = DEFAULT_CATALOG,
                             limit: int = REPRICE_ZERO_LIMIT) -> Dict[int, ReconcileResult]:
    """Reprice the most recent lists whose stored total is still 0.00."""
    with repository.snapshot() as session:
        list_ids = session.list_ids_with_total(0.0, limit=limit)
    logger.info("Found %d shopping lists with a zero total", len(list_ids))
    return {list_id: reprice_list(repository, list_id, catalog) for list_id in list_ids}
