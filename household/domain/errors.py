"""Lookup errors raised by the shopping-list store and the services built on it."""


class ShoppingListNotFoundError(LookupError):
    def __init__(self, list_id):
        super().__init__(f"Shopping list {list_id} not found")
        self.list_id = list_id


class ShoppingListItemNotFoundError(LookupError):
    def __init__(self, list_id, item_id):
        super().__init__(f"Item {item_id} not found in shopping list {list_id}")
        self.list_id = list_id
        self.item_id = item_id
