"""Static grocery catalog: common store package sizes and rough price ranges.

The tables are wrapped in a read-only PackageCatalog built once at import time
(DEFAULT_CATALOG). Callers pass a catalog into the resolver functions; a
different catalog can be loaded from JSON with load_catalog().

JSON layout accepted by load_catalog():

    {
      "packages": {"brown sugar": [{"package_size": "1", "package_unit": "lb bag", "notes": "..."}]},
      "prices": {"brown sugar": {"min": 1.99, "max": 2.49}},
      "default_price": {"min": 1.0, "max": 3.0}
    }
"""
from __future__ import annotations
import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple

from household.domain.PackageRule import PackageOption, PriceRange
from household.utilities.config import DEFAULT_PRICE_MIN, DEFAULT_PRICE_MAX

logger = logging.getLogger(__name__)

__all__ = ["PackageCatalog", "DEFAULT_CATALOG", "load_catalog", "normalize_name"]


def normalize_name(name) -> str:
    return (name or '').strip().lower()


class PackageCatalog:
    """Immutable pair of lookup tables keyed by normalized ingredient name."""

    __slots__ = ("_packages", "_prices", "_default_price")

    def __init__(self, packages: Mapping[str, Iterable[PackageOption]],
                 prices: Mapping[str, PriceRange], default_price: PriceRange):
        frozen_packages: Dict[str, Tuple[PackageOption, ...]] = {}
        for key, options in packages.items():
            options = tuple(options)
            if not options:
                raise ValueError(f"Package rule '{key}' has no options")
            frozen_packages[normalize_name(key)] = options
        object.__setattr__(self, "_packages", MappingProxyType(frozen_packages))
        object.__setattr__(self, "_prices", MappingProxyType(
            {normalize_name(k): v for k, v in prices.items()}))
        object.__setattr__(self, "_default_price", default_price)

    def __setattr__(self, name, value):
        raise AttributeError("PackageCatalog is immutable")

    @property
    def packages(self) -> Mapping[str, Tuple[PackageOption, ...]]:
        return self._packages

    @property
    def prices(self) -> Mapping[str, PriceRange]:
        return self._prices

    @property
    def default_price(self) -> PriceRange:
        return self._default_price

    def __repr__(self) -> str:
        return f"PackageCatalog(packages={len(self._packages)}, prices={len(self._prices)})"


_STORE_PACKAGE_SIZES = {
    # Sugars and sweeteners
    'brown sugar': (
        PackageOption('1', 'lb bag', 'Light or dark brown sugar'),
        PackageOption('2', 'lb bag', 'Light or dark brown sugar'),
    ),
    'sugar': (
        PackageOption('4', 'lb bag', 'Granulated white sugar'),
        PackageOption('1', 'lb bag', 'Granulated white sugar'),
    ),
    'powdered sugar': (PackageOption('1', 'lb box', "Confectioner's sugar"),),

    # Flour and baking
    'flour': (
        PackageOption('5', 'lb bag', 'All-purpose flour'),
        PackageOption('2', 'lb bag', 'All-purpose flour'),
    ),
    'baking powder': (PackageOption('10', 'oz container', 'Double-acting baking powder'),),
    'baking soda': (PackageOption('1', 'lb box', 'Arm & Hammer or store brand'),),
    'vanilla extract': (
        PackageOption('2', 'oz bottle', 'Pure vanilla extract'),
        PackageOption('4', 'oz bottle', 'Pure vanilla extract'),
    ),

    # Dairy and eggs
    'butter': (
        PackageOption('1', 'lb (4 sticks)', 'Unsalted butter'),
        PackageOption('1/2', 'lb (2 sticks)', 'Unsalted butter'),
    ),
    'unsalted butter': (PackageOption('1', 'lb (4 sticks)', 'Unsalted butter'),),
    'eggs': (
        PackageOption('12', 'count carton', 'Large eggs'),
        PackageOption('18', 'count carton', 'Large eggs'),
    ),
    'egg': (PackageOption('12', 'count carton', 'Large eggs'),),

    # Syrups and liquids
    'corn syrup': (PackageOption('16', 'oz bottle', 'Light corn syrup (Karo)'),),
    'light corn syrup': (PackageOption('16', 'oz bottle', 'Light corn syrup (Karo)'),),
    'maple syrup': (PackageOption('12', 'oz bottle', 'Pure maple syrup'),),

    # Nuts and seeds
    'pecans': (
        PackageOption('8', 'oz bag', 'Chopped or halves'),
        PackageOption('1', 'lb bag', 'Chopped or halves'),
    ),
    'chopped pecans': (PackageOption('8', 'oz bag', 'Pre-chopped pecans'),),
    'walnuts': (PackageOption('8', 'oz bag', 'Chopped or halves'),),
    'almonds': (PackageOption('1', 'lb bag', 'Whole or sliced'),),

    # Pie components
    'pie crust': (PackageOption('1', 'package (2 crusts)', 'Refrigerated pie crusts (Pillsbury)'),),
    'pie crusts': (PackageOption('1', 'package (2 crusts)', 'Refrigerated pie crusts (Pillsbury)'),),

    # Spices
    'cinnamon': (PackageOption('2.37', 'oz container', 'Ground cinnamon'),),
    'nutmeg': (PackageOption('1.1', 'oz container', 'Ground nutmeg'),),
    'salt': (PackageOption('26', 'oz container', 'Table salt'),),
}

_PRICE_RANGES = {
    'brown sugar': PriceRange(1.99, 2.49),
    'sugar': PriceRange(2.99, 3.99),
    'flour': PriceRange(2.49, 3.99),
    'butter': PriceRange(3.49, 4.99),
    'eggs': PriceRange(0.25, 0.40),  # per egg, sold by the dozen
    'vanilla extract': PriceRange(3.99, 6.99),
    'corn syrup': PriceRange(2.99, 3.49),
    'pecans': PriceRange(4.99, 6.99),
    'pie crust': PriceRange(2.49, 3.99),
}

DEFAULT_CATALOG = PackageCatalog(
    _STORE_PACKAGE_SIZES,
    _PRICE_RANGES,
    PriceRange(DEFAULT_PRICE_MIN, DEFAULT_PRICE_MAX),
)


def load_catalog(path: Optional[Path] = None) -> PackageCatalog:
    """Return the catalog stored at ``path``, or DEFAULT_CATALOG when no path is given.

    Missing sections fall back to the built-in tables. Read and parse errors
    propagate to the caller.
    """
    if path is None:
        return DEFAULT_CATALOG
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f) or {}
    packages = {
        key: [PackageOption.from_dict(opt) for opt in options]
        for key, options in (data.get('packages') or {}).items()
    } or dict(DEFAULT_CATALOG.packages)
    prices = {
        key: PriceRange.from_dict(rng) for key, rng in (data.get('prices') or {}).items()
    } or dict(DEFAULT_CATALOG.prices)
    default_price = (PriceRange.from_dict(data['default_price'])
                     if data.get('default_price') else DEFAULT_CATALOG.default_price)
    catalog = PackageCatalog(packages, prices, default_price)
    logger.info("Loaded package catalog from %s: %r", path, catalog)
    return catalog
