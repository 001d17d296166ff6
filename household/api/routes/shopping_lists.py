import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from household.api.dependencies import get_catalog, get_repository
from household.events.web_observers import get_events as get_web_events
from household.infra.Shopping_List_Repository import ShoppingListRepository
from household.logic.shopping.catalog import PackageCatalog
from household.logic.shopping.costs import (
    audit_list_total, compute_total, reconcile_all, reconcile_list_total, reprice_list
)
from household.logic.shopping.list_builder import build_store_list
from household.utilities.validators import (
    GenerateListInput, ShoppingListInput, ShoppingListItemInput, ShoppingListItemUpdate
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/shopping-lists", tags=["shopping-lists"])


def _summary(shopping_list):
    d = shopping_list.to_dict(include_items=False)
    d["item_count"] = len(shopping_list.items)
    d["progress"] = shopping_list.progress()
    return d


# -------------------- Collection --------------------
@router.get("")
def api_list_shopping_lists(repo: ShoppingListRepository = Depends(get_repository)):
    return [_summary(sl) for sl in repo.list_lists()]


@router.post("", status_code=201)
def api_create_shopping_list(payload: ShoppingListInput,
                             repo: ShoppingListRepository = Depends(get_repository)):
    items = [item.model_dump() for item in payload.items]
    data = payload.model_dump(exclude={"items"})
    if items:
        data["total_estimated_cost"] = compute_total(items)
    created = repo.create_list(data, items)
    return created.to_dict()


@router.post("/generate", status_code=201)
def api_generate_shopping_list(payload: GenerateListInput,
                               repo: ShoppingListRepository = Depends(get_repository),
                               catalog: PackageCatalog = Depends(get_catalog)):
    ingredients = [ing.model_dump() for ing in payload.ingredients]
    items = build_store_list(ingredients, servings_multiplier=payload.servings_multiplier, catalog=catalog)
    logger.info("Generating shopping list '%s' from %d ingredients -> %d items",
                payload.list_name, len(ingredients), len(items))
    created = repo.create_list({
        "name": payload.list_name,
        "description": payload.description,
        "total_estimated_cost": compute_total(items),
    }, items)
    return created.to_dict()


@router.post("/reconcile-all")
def api_reconcile_all(repo: ShoppingListRepository = Depends(get_repository)):
    results = reconcile_all(repo)
    return {
        "count": len(results),
        "changed": sum(1 for r in results.values() if r.changed),
        "results": [{"list_id": list_id, **r.to_dict()} for list_id, r in results.items()],
    }


@router.get("/events")
def api_shopping_list_events(since: Optional[int] = Query(default=None, ge=0)):
    return get_web_events(since)


# -------------------- Single list --------------------
@router.get("/{list_id}")
def api_get_shopping_list(list_id: int, repo: ShoppingListRepository = Depends(get_repository)):
    return repo.get_list(list_id).to_dict()


@router.delete("/{list_id}")
def api_delete_shopping_list(list_id: int, repo: ShoppingListRepository = Depends(get_repository)):
    removed = repo.delete_list(list_id)
    return {"deleted": True, "list_id": list_id, "items_removed": removed}


@router.get("/{list_id}/audit")
def api_audit_shopping_list(list_id: int, repo: ShoppingListRepository = Depends(get_repository)):
    return audit_list_total(repo, list_id).to_dict()


@router.post("/{list_id}/reconcile")
def api_reconcile_shopping_list(list_id: int, repo: ShoppingListRepository = Depends(get_repository)):
    return {"list_id": list_id, **reconcile_list_total(repo, list_id).to_dict()}


@router.post("/{list_id}/reprice")
def api_reprice_shopping_list(list_id: int,
                              repo: ShoppingListRepository = Depends(get_repository),
                              catalog: PackageCatalog = Depends(get_catalog)):
    return {"list_id": list_id, **reprice_list(repo, list_id, catalog).to_dict()}


# -------------------- Items --------------------
@router.post("/{list_id}/items", status_code=201)
def api_add_item(list_id: int, payload: ShoppingListItemInput,
                 repo: ShoppingListRepository = Depends(get_repository)):
    return repo.add_item(list_id, payload.model_dump()).to_dict()


@router.patch("/{list_id}/items/{item_id}")
def api_update_item(list_id: int, item_id: int, payload: ShoppingListItemUpdate,
                    repo: ShoppingListRepository = Depends(get_repository)):
    changes = payload.model_dump(exclude_unset=True)
    return repo.update_item(list_id, item_id, changes).to_dict()


@router.delete("/{list_id}/items/{item_id}")
def api_delete_item(list_id: int, item_id: int, repo: ShoppingListRepository = Depends(get_repository)):
    repo.delete_item(list_id, item_id)
    return {"deleted": True, "list_id": list_id, "item_id": item_id}
