"""ShoppingListItem domain entity: one purchasable line belonging to a shopping list."""
from typing import Optional
from household.utilities.constants import DEFAULT_PRIORITY


def _optional_float(value) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


class ShoppingListItem:
    def __init__(self, item_name: str = "", quantity: float = 0, unit: str = "",
                 estimated_cost: Optional[float] = None, id: Optional[int] = None,
                 shopping_list_id: Optional[int] = None, category: Optional[str] = None,
                 actual_cost: Optional[float] = None, is_purchased: bool = False,
                 priority: str = DEFAULT_PRIORITY, notes: str = ""):
        self.id = id
        self.shopping_list_id = shopping_list_id
        self.item_name = item_name
        self.quantity = quantity
        self.unit = unit
        self.category = category
        self.estimated_cost = estimated_cost
        self.actual_cost = actual_cost
        self.is_purchased = is_purchased
        self.priority = priority
        self.notes = notes

    def __str__(self) -> str:
        cost = f"${self.estimated_cost:.2f}" if self.estimated_cost is not None else "no estimate"
        mark = "x" if self.is_purchased else " "
        return f"[{mark}] {self.item_name} - {self.quantity} {self.unit} - {cost}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Creates an item from a stored record. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        quantity = _optional_float(d.get("quantity"))
        return ShoppingListItem(
            id=d.get("id"),
            shopping_list_id=d.get("shopping_list_id"),
            item_name=d.get("item_name", "") or "",
            quantity=quantity if quantity is not None else 0,
            unit=d.get("unit", "") or "",
            category=d.get("category"),
            estimated_cost=_optional_float(d.get("estimated_cost")),
            actual_cost=_optional_float(d.get("actual_cost")),
            is_purchased=bool(d.get("is_purchased", False)),
            priority=d.get("priority") or DEFAULT_PRIORITY,
            notes=d.get("notes", "") or "",
        )

    def to_dict(self):
        return {
            "id": self.id,
            "shopping_list_id": self.shopping_list_id,
            "item_name": self.item_name,
            "quantity": self.quantity,
            "unit": self.unit,
            "category": self.category,
            "estimated_cost": self.estimated_cost,
            "actual_cost": self.actual_cost,
            "is_purchased": self.is_purchased,
            "priority": self.priority,
            "notes": self.notes,
        }
