"""Store shopping list builder.

Provides build_store_list(ingredients, servings_multiplier=1, catalog=...):
recipe ingredient lines in, priced store-package items out.
"""
from typing import Any, Dict, Iterable, List, Tuple

from household.logic.shopping.catalog import DEFAULT_CATALOG, PackageCatalog, normalize_name
from household.logic.shopping.package_sizes import estimate_package_cost, parse_quantity, resolve_package
from household.utilities.constants import RECIPE_NOTE_TEMPLATE


def _to_number(value) -> float:
    try:
        return parse_quantity(value)
    except ValueError:
        return 0.0


def build_store_list(ingredients: Iterable[Dict[str, Any]], *, servings_multiplier: float = 1,
                     catalog: PackageCatalog = DEFAULT_CATALOG) -> List[Dict[str, Any]]:
    """Turn recipe ingredient lines into shopping-list items sized for the store.

    Args:
        ingredients: dicts with name, quantity, unit and optional category.
        servings_multiplier: scales every recipe quantity before merging.
        catalog: package and price tables used for the conversion.

    Returns:
        Item dicts (item_name, quantity, unit, category, estimated_cost, notes)
        sorted by name. Lines with the same normalized name and unit are
        merged; the first spelling seen is kept. Blank names are skipped.
    """
    required: Dict[Tuple[str, str], Dict[str, Any]] = {}
    for ing in ingredients or []:
        name = (ing.get('name') or '').strip()
        if not name:
            continue
        unit = ing.get('unit', '') or ''
        qty = _to_number(ing.get('quantity', 0) or 0) * servings_multiplier
        k = (normalize_name(name), unit)
        if k not in required:
            required[k] = {'display_name': name, 'unit': unit, 'quantity': 0.0,
                           'category': ing.get('category')}
        required[k]['quantity'] += qty
        if not required[k]['category']:
            required[k]['category'] = ing.get('category')

    store_list: List[Dict[str, Any]] = []
    for data in required.values():
        name = data['display_name']
        package = resolve_package(name, round(data['quantity'], 3), data['unit'], catalog)
        try:
            quantity = parse_quantity(package.package_size)
        except ValueError:
            quantity = data['quantity']
        store_list.append({
            'item_name': name,
            'quantity': quantity,
            'unit': package.package_unit,
            'category': data['category'],
            'estimated_cost': estimate_package_cost(name, catalog),
            'notes': RECIPE_NOTE_TEMPLATE.format(notes=package.notes or '',
                                                 original=package.original_quantity).strip(),
        })

    store_list.sort(key=lambda x: (x['item_name'].lower(), x['unit']))
    return store_list


__all__ = ['build_store_list']
