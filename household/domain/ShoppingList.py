"""ShoppingList aggregate: named list of items with a cached estimated total."""
from typing import List, Optional
from household.domain.ShoppingListItem import ShoppingListItem
from household.utilities.constants import DEFAULT_STATUS


class ShoppingList:
    def __init__(self, name: str = "", id: Optional[int] = None, description: str = "",
                 status: str = DEFAULT_STATUS, total_estimated_cost: float = 0.0,
                 created_at: Optional[str] = None, updated_at: Optional[str] = None,
                 items: Optional[List[ShoppingListItem]] = None):
        self.id = id
        self.name = name
        self.description = description
        self.status = status
        # Denormalized; only reconciliation keeps it equal to the item sum
        self.total_estimated_cost = total_estimated_cost
        self.created_at = created_at
        self.updated_at = updated_at
        self.items: List[ShoppingListItem] = items[:] if items else []

    def add_item(self, item: ShoppingListItem):
        '''Attaches an item to this list and points its foreign key here.'''
        item.shopping_list_id = self.id
        self.items.append(item)

    def progress(self) -> int:
        '''Percentage of items already purchased, rounded to a whole number.'''
        if not self.items:
            return 0
        purchased = sum(1 for item in self.items if item.is_purchased)
        return round(purchased / len(self.items) * 100)

    def __str__(self) -> str:
        items_str = ",\n\t".join(str(item) for item in self.items)
        return f"Shopping List {self.name} (${self.total_estimated_cost:.2f}):\n\t{items_str}"

    def __repr__(self) -> str:
        return self.__str__()

    @staticmethod
    def from_dict(data, items=None):
        d = dict(data) if isinstance(data, dict) else {}
        try:
            total = float(d.get("total_estimated_cost") or 0)
        except (TypeError, ValueError):
            total = 0.0
        raw_items = items if items is not None else d.get("items", [])
        shopping_list = ShoppingList(
            id=d.get("id"),
            name=d.get("name", "") or "",
            description=d.get("description", "") or "",
            status=d.get("status") or DEFAULT_STATUS,
            total_estimated_cost=total,
            created_at=d.get("created_at"),
            updated_at=d.get("updated_at"),
        )
        for raw in raw_items or []:
            shopping_list.add_item(raw if isinstance(raw, ShoppingListItem) else ShoppingListItem.from_dict(raw))
        return shopping_list

    def to_dict(self, include_items: bool = True):
        d = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "status": self.status,
            "total_estimated_cost": self.total_estimated_cost,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
        if include_items:
            d["items"] = [item.to_dict() for item in self.items]
            d["progress"] = self.progress()
        return d
