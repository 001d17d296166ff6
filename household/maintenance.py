"""Shopping-list maintenance commands.

Usage:
    python -m household.maintenance check [--list-id N]
    python -m household.maintenance fix [--list-id N]
    python -m household.maintenance fix-all
    python -m household.maintenance reprice-zero [--limit 5]

Without --list-id, check and fix act on the most recently created list.
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from household.domain.errors import ShoppingListNotFoundError
from household.infra.Shopping_List_Repository import ShoppingListRepository
from household.logic.shopping.catalog import load_catalog
from household.logic.shopping.costs import (
    audit_list_total, reconcile_all, reconcile_latest, reconcile_list_total, reprice_zero_total_lists
)
from household.utilities.config import LOG_LEVEL, PACKAGE_CATALOG_FILE
from household.utilities.constants import REPRICE_ZERO_LIMIT

logger = logging.getLogger(__name__)


def _latest_id(repo: ShoppingListRepository) -> int:
    latest = repo.latest_list()
    if latest is None:
        raise ShoppingListNotFoundError("latest")
    return latest.id


def cmd_check(repo: ShoppingListRepository, args) -> bool:
    list_id = args.list_id if args.list_id is not None else _latest_id(repo)
    shopping_list = repo.get_list(list_id)
    print(f"Shopping list {shopping_list.id}: {shopping_list.name}")
    for item in sorted(shopping_list.items, key=lambda i: i.item_name.lower()):
        print(f"  {item}")
    audit = audit_list_total(repo, list_id)
    print(f"Stored total:     ${audit.stored_total:.2f}")
    print(f"Calculated total: ${audit.computed_total:.2f}")
    print(f"Match: {'yes' if audit.matches else 'NO'}")
    return audit.matches


def cmd_fix(repo: ShoppingListRepository, args) -> bool:
    if args.list_id is not None:
        list_id, result = args.list_id, reconcile_list_total(repo, args.list_id)
    else:
        list_id, result = reconcile_latest(repo)
    print(f"Shopping list {list_id}: ${result.previous_total:.2f} -> ${result.new_total:.2f}")
    return True


def cmd_fix_all(repo: ShoppingListRepository, args) -> bool:
    results = reconcile_all(repo)
    for list_id, result in results.items():
        flag = " (corrected)" if result.changed else ""
        print(f"Shopping list {list_id}: ${result.new_total:.2f}{flag}")
    print(f"{len(results)} lists reconciled")
    return True


def cmd_reprice_zero(repo: ShoppingListRepository, args) -> bool:
    catalog = load_catalog(args.catalog or PACKAGE_CATALOG_FILE)
    results = reprice_zero_total_lists(repo, catalog, limit=args.limit)
    for list_id, result in results.items():
        print(f"Shopping list {list_id}: ${result.previous_total:.2f} -> ${result.new_total:.2f}")
    print(f"{len(results)} lists repriced")
    return True


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m household.maintenance",
        description="Check and repair cached shopping-list totals",
    )
    parser.add_argument('--data-file', type=Path, dest='data_file',
                        help='Shopping lists JSON file (default: configured data directory)')
    # Also accepted after the command; SUPPRESS keeps a top-level value from being reset
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('--data-file', type=Path, dest='data_file', default=argparse.SUPPRESS,
                        help='Shopping lists JSON file')
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    parser_check = subparsers.add_parser('check', parents=[common], help='Compare stored total with the item sum')
    parser_check.add_argument('--list-id', type=int, dest='list_id')
    parser_check.set_defaults(func=cmd_check)

    parser_fix = subparsers.add_parser('fix', parents=[common], help='Overwrite the stored total with the item sum')
    parser_fix.add_argument('--list-id', type=int, dest='list_id')
    parser_fix.set_defaults(func=cmd_fix)

    parser_fix_all = subparsers.add_parser('fix-all', parents=[common], help='Reconcile every shopping list')
    parser_fix_all.set_defaults(func=cmd_fix_all)

    parser_reprice = subparsers.add_parser('reprice-zero', parents=[common], help='Reprice recent lists whose total is 0.00')
    parser_reprice.add_argument('--limit', type=int, default=REPRICE_ZERO_LIMIT)
    parser_reprice.add_argument('--catalog', type=Path, help='Package catalog JSON file')
    parser_reprice.set_defaults(func=cmd_reprice_zero)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 0
    logging.basicConfig(level=LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")
    repo = ShoppingListRepository(args.data_file)
    try:
        return 0 if args.func(repo, args) else 1
    except ShoppingListNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
