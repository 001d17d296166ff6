"""Shopping list persistence (single JSON file).

File layout:
    {
      "next_list_id": int,
      "next_item_id": int,
      "lists": [ {id, name, description, status, total_estimated_cost, created_at, updated_at} ],
      "items": [ {id, shopping_list_id, item_name, quantity, unit, ...} ]
    }

Every read-modify-write goes through ``ShoppingListRepository.transaction()``,
which holds a per-file lock, hands out a StoreSession over the loaded data and
writes it back atomically only if the block finishes without raising. Read and
parse errors propagate to the caller untouched.
"""
import json
import logging
import os
import shutil
import tempfile
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from threading import Lock, RLock
from typing import Any, Dict, Iterable, Iterator, List, Optional

from household.domain.ShoppingList import ShoppingList
from household.domain.ShoppingListItem import ShoppingListItem
from household.domain.errors import ShoppingListNotFoundError, ShoppingListItemNotFoundError
from household.infra.paths import SHOPPING_LISTS_FILE
from household.utilities.constants import DEFAULT_STATUS

logger = logging.getLogger(__name__)

_ITEM_FIELDS = ("item_name", "quantity", "unit", "category", "estimated_cost",
                "actual_cost", "is_purchased", "priority", "notes")

_registry_lock = Lock()
_file_locks: Dict[str, RLock] = {}


def _lock_for(path: Path) -> RLock:
    key = str(path.resolve())
    with _registry_lock:
        return _file_locks.setdefault(key, RLock())


def _empty_store() -> Dict[str, Any]:
    return {"next_list_id": 1, "next_item_id": 1, "lists": [], "items": []}


def _now() -> str:
    return datetime.now().isoformat(timespec="seconds")


class StoreSession:
    """Typed accessors over the raw store dict for the duration of one transaction."""

    def __init__(self, data: Dict[str, Any]):
        self.data = data

    # --- lists ------------------------------------------------------------
    def _list_record(self, list_id: int) -> Dict[str, Any]:
        for rec in self.data["lists"]:
            if rec.get("id") == list_id:
                return rec
        raise ShoppingListNotFoundError(list_id)

    def _item_records(self, list_id: int) -> List[Dict[str, Any]]:
        return [rec for rec in self.data["items"] if rec.get("shopping_list_id") == list_id]

    def list_lists(self) -> List[ShoppingList]:
        return [ShoppingList.from_dict(rec, items=self._item_records(rec["id"]))
                for rec in sorted(self.data["lists"], key=lambda r: r["id"], reverse=True)]

    def get_list(self, list_id: int, with_items: bool = True) -> ShoppingList:
        rec = self._list_record(list_id)
        return ShoppingList.from_dict(rec, items=self._item_records(list_id) if with_items else [])

    def latest_list(self) -> Optional[ShoppingList]:
        if not self.data["lists"]:
            return None
        return self.get_list(max(rec["id"] for rec in self.data["lists"]))

    def get_items(self, list_id: int) -> List[ShoppingListItem]:
        return [ShoppingListItem.from_dict(rec) for rec in self._item_records(list_id)]

    def create_list(self, data: Dict[str, Any], items: Iterable[Dict[str, Any]] = ()) -> ShoppingList:
        list_id = self.data["next_list_id"]
        self.data["next_list_id"] = list_id + 1
        stamp = _now()
        rec = {
            "id": list_id,
            "name": data.get("name", ""),
            "description": data.get("description", "") or "",
            "status": data.get("status") or DEFAULT_STATUS,
            "total_estimated_cost": data.get("total_estimated_cost", 0) or 0,
            "created_at": stamp,
            "updated_at": stamp,
        }
        self.data["lists"].append(rec)
        for item in items:
            self.add_item(list_id, item)
        return self.get_list(list_id)

    def delete_list(self, list_id: int) -> int:
        """Remove the list and its items; returns how many items went with it."""
        rec = self._list_record(list_id)
        self.data["lists"].remove(rec)
        before = len(self.data["items"])
        self.data["items"] = [i for i in self.data["items"] if i.get("shopping_list_id") != list_id]
        return before - len(self.data["items"])

    def set_total(self, list_id: int, total: float) -> ShoppingList:
        rec = self._list_record(list_id)
        rec["total_estimated_cost"] = total
        rec["updated_at"] = _now()
        return self.get_list(list_id, with_items=False)

    def list_ids_with_total(self, total: float, limit: Optional[int] = None) -> List[int]:
        """Ids of lists whose stored total equals ``total``, newest first."""
        ids = []
        for rec in sorted(self.data["lists"], key=lambda r: r["id"], reverse=True):
            try:
                stored = float(rec.get("total_estimated_cost") or 0)
            except (TypeError, ValueError):
                stored = 0.0
            if stored == total:
                ids.append(rec["id"])
        return ids[:limit] if limit is not None else ids

    # --- items ------------------------------------------------------------
    def _item_record(self, list_id: int, item_id: int) -> Dict[str, Any]:
        self._list_record(list_id)
        for rec in self._item_records(list_id):
            if rec.get("id") == item_id:
                return rec
        raise ShoppingListItemNotFoundError(list_id, item_id)

    def add_item(self, list_id: int, data: Dict[str, Any]) -> ShoppingListItem:
        self._list_record(list_id)
        item_id = self.data["next_item_id"]
        self.data["next_item_id"] = item_id + 1
        item = ShoppingListItem.from_dict({**data, "id": item_id, "shopping_list_id": list_id})
        self.data["items"].append(item.to_dict())
        return item

    def update_item(self, list_id: int, item_id: int, changes: Dict[str, Any]) -> ShoppingListItem:
        rec = self._item_record(list_id, item_id)
        for key, value in changes.items():
            if key in _ITEM_FIELDS:
                rec[key] = value
        # Re-normalize types through the entity
        normalized = ShoppingListItem.from_dict(rec).to_dict()
        rec.clear()
        rec.update(normalized)
        return ShoppingListItem.from_dict(rec)

    def delete_item(self, list_id: int, item_id: int) -> None:
        rec = self._item_record(list_id, item_id)
        self.data["items"].remove(rec)


class ShoppingListRepository:
    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else SHOPPING_LISTS_FILE
        self._lock = _lock_for(self.path)

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return _empty_store()
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        store = _empty_store()
        store.update(data or {})
        return store

    def _atomic_write(self, data: Dict[str, Any]):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=str(self.path.parent), prefix=".shopping_lists_", suffix=".json"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(data, tmp, indent=2, ensure_ascii=False)
            shutil.move(tmp_path, str(self.path))
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)

    @contextmanager
    def transaction(self) -> Iterator[StoreSession]:
        """Scoped read-modify-write: commit on success, discard on exception."""
        with self._lock:
            session = StoreSession(self._read())
            yield session
            self._atomic_write(session.data)

    @contextmanager
    def snapshot(self) -> Iterator[StoreSession]:
        """Read-only view; nothing is written back."""
        with self._lock:
            yield StoreSession(self._read())

    # --- convenience wrappers (one transaction each) ------------------------
    def list_lists(self) -> List[ShoppingList]:
        with self.snapshot() as s:
            return s.list_lists()

    def get_list(self, list_id: int, with_items: bool = True) -> ShoppingList:
        with self.snapshot() as s:
            return s.get_list(list_id, with_items=with_items)

    def get_items(self, list_id: int) -> List[ShoppingListItem]:
        with self.snapshot() as s:
            return s.get_items(list_id)

    def latest_list(self) -> Optional[ShoppingList]:
        with self.snapshot() as s:
            return s.latest_list()

    def create_list(self, data: Dict[str, Any], items: Iterable[Dict[str, Any]] = ()) -> ShoppingList:
        with self.transaction() as s:
            created = s.create_list(data, items)
        logger.info("Created shopping list %s '%s' with %d items", created.id, created.name, len(created.items))
        return created

    def delete_list(self, list_id: int) -> int:
        with self.transaction() as s:
            removed = s.delete_list(list_id)
        logger.info("Deleted shopping list %s (%d items)", list_id, removed)
        return removed

    def set_total(self, list_id: int, total: float) -> ShoppingList:
        with self.transaction() as s:
            return s.set_total(list_id, total)

    def add_item(self, list_id: int, data: Dict[str, Any]) -> ShoppingListItem:
        with self.transaction() as s:
            return s.add_item(list_id, data)

    def update_item(self, list_id: int, item_id: int, changes: Dict[str, Any]) -> ShoppingListItem:
        with self.transaction() as s:
            return s.update_item(list_id, item_id, changes)

    def delete_item(self, list_id: int, item_id: int) -> None:
        with self.transaction() as s:
            s.delete_item(list_id, item_id)
