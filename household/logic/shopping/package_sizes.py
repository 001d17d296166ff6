"""Convert recipe quantities to realistic store package sizes.

"1/32 cup brown sugar" is not something you can buy; "1 lb bag" is. The
resolver looks an ingredient up in a PackageCatalog and returns the default
package for it, or the recipe quantity unchanged when nothing matches.

Matching precedence (deterministic, independent of table order):
  1. exact match on the normalized name;
  2. table keys contained in the name (``"whole wheat flour"`` -> ``flour``),
     longest key first so ``"dark brown sugar"`` prefers ``brown sugar``;
  3. table keys containing the name (``"pecan"`` -> ``pecans``), shortest key
     first so the closest spelling wins over longer compounds;
ties inside a group are broken alphabetically. A blank name never matches.
"""
from __future__ import annotations
from fractions import Fraction
from typing import Mapping, Optional

from household.domain.PackageRule import PackageResolution, PriceRange
from household.logic.shopping.catalog import DEFAULT_CATALOG, PackageCatalog, normalize_name
from household.logic.shopping.money import round_cost, to_decimal

__all__ = [
    "match_key", "resolve_package", "estimated_price_range", "estimate_package_cost",
    "format_quantity", "parse_quantity",
]


def match_key(ingredient_name: str, table: Mapping[str, object]) -> Optional[str]:
    """Return the table key that best matches ``ingredient_name``, or None."""
    name = normalize_name(ingredient_name)
    if not name:
        return None
    if name in table:
        return name
    contained = [k for k in table if k and k in name]
    if contained:
        return min(contained, key=lambda k: (-len(k), k))
    containing = [k for k in table if name in k]
    if containing:
        return min(containing, key=lambda k: (len(k), k))
    return None


def format_quantity(quantity) -> str:
    """Render a number the way it reads on a label: 0.5 -> '0.5', 3.0 -> '3'."""
    if isinstance(quantity, str):
        return quantity.strip()
    if isinstance(quantity, Fraction):
        quantity = float(quantity)
    if isinstance(quantity, float) and quantity.is_integer():
        return str(int(quantity))
    return str(quantity)


def parse_quantity(text) -> float:
    """Parse a package size such as '2', '2.37', '1/2' or '1 1/2'.

    Raises ValueError when the text is not a quantity.
    """
    if isinstance(text, (int, float)) and not isinstance(text, bool):
        return float(text)
    parts = str(text or '').split()
    if not parts or len(parts) > 2:
        raise ValueError(f"Not a quantity: {text!r}")
    try:
        total = sum(Fraction(p) for p in parts)
    except (ValueError, ZeroDivisionError) as e:
        raise ValueError(f"Not a quantity: {text!r}") from e
    return float(total)


def resolve_package(ingredient_name: str, recipe_quantity, recipe_unit: str,
                    catalog: PackageCatalog = DEFAULT_CATALOG) -> PackageResolution:
    """Map an ingredient + recipe quantity to the package a shopper would buy.

    Args:
        ingredient_name: free-text name, matched case-insensitively.
        recipe_quantity: amount the recipe calls for.
        recipe_unit: unit of that amount; returned untouched on fallback.
        catalog: lookup tables to use.

    Returns:
        PackageResolution with the first (most common) package option of the
        matched rule, or the recipe quantity/unit and no notes when nothing
        matches. ``original_quantity`` is always "<quantity> <unit>".
    """
    original = f"{format_quantity(recipe_quantity)} {recipe_unit}"
    key = match_key(ingredient_name, catalog.packages)
    if key is not None:
        selected = catalog.packages[key][0]
        return PackageResolution(
            package_size=selected.package_size,
            package_unit=selected.package_unit,
            notes=selected.notes,
            original_quantity=original,
            matched_key=key,
        )
    return PackageResolution(
        package_size=format_quantity(recipe_quantity),
        package_unit=recipe_unit,
        original_quantity=original,
    )


def estimated_price_range(ingredient_name: str, catalog: PackageCatalog = DEFAULT_CATALOG) -> PriceRange:
    """Price range for one package of the ingredient; catalog default when unknown."""
    key = match_key(ingredient_name, catalog.prices)
    if key is None:
        return catalog.default_price
    return catalog.prices[key]


def estimate_package_cost(ingredient_name: str, catalog: PackageCatalog = DEFAULT_CATALOG) -> float:
    """Point estimate for one package: midpoint of the price range, in cents."""
    price = estimated_price_range(ingredient_name, catalog)
    return round_cost((to_decimal(price.min) + to_decimal(price.max)) / 2)
