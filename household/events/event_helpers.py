"""Event helper utilities.

Quick import:
    from household.events.event_helpers import (
        publish_reconciled, publish_repriced,
        SHOPPING_LIST_RECONCILED, SHOPPING_LIST_TOTAL_DRIFT, SHOPPING_LIST_REPRICED
    )
"""
from __future__ import annotations
from .Event_Bus import (
    publish,
    SHOPPING_LIST_RECONCILED, SHOPPING_LIST_TOTAL_DRIFT, SHOPPING_LIST_REPRICED,
)
from household.logic.shopping.money import round_cost, to_decimal

__all__ = [
    'publish_reconciled', 'publish_repriced',
    'SHOPPING_LIST_RECONCILED', 'SHOPPING_LIST_TOTAL_DRIFT', 'SHOPPING_LIST_REPRICED',
]


def publish_reconciled(list_id: int, previous_total: float, new_total: float):
    """Publish shopping_list.reconciled, plus shopping_list.total_drift when the stored total was wrong."""
    changed = previous_total != new_total
    publish(SHOPPING_LIST_RECONCILED, {
        'list_id': list_id,
        'previous_total': previous_total,
        'new_total': new_total,
        'changed': changed,
    })
    if changed:
        publish(SHOPPING_LIST_TOTAL_DRIFT, {
            'list_id': list_id,
            'previous_total': previous_total,
            'new_total': new_total,
            'difference': round_cost(to_decimal(new_total) - to_decimal(previous_total)),
        })


def publish_repriced(list_id: int, item_count: int, previous_total: float, new_total: float):
    """Publish a shopping_list.repriced event."""
    publish(SHOPPING_LIST_REPRICED, {
        'list_id': list_id,
        'item_count': item_count,
        'previous_total': previous_total,
        'new_total': new_total,
    })
