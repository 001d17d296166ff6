from fastapi import APIRouter, Depends, Query

from household.api.dependencies import get_catalog
from household.logic.shopping.catalog import PackageCatalog
from household.logic.shopping.package_sizes import (
    estimate_package_cost, estimated_price_range, resolve_package
)

router = APIRouter(prefix="/api/packages", tags=["packages"])


@router.get("/resolve")
def api_resolve_package(name: str = Query(...),
                        quantity: float = Query(..., ge=0),
                        unit: str = Query(""),
                        catalog: PackageCatalog = Depends(get_catalog)):
    resolution = resolve_package(name, quantity, unit, catalog)
    return {**resolution.to_dict(), "matched_key": resolution.matched_key}


@router.get("/price")
def api_price_range(name: str = Query(...), catalog: PackageCatalog = Depends(get_catalog)):
    price = estimated_price_range(name, catalog)
    return {**price.to_dict(), "estimated_cost": estimate_package_cost(name, catalog)}
