import unittest
from household.domain.ShoppingList import ShoppingList
from household.domain.ShoppingListItem import ShoppingListItem


class TestShoppingList(unittest.TestCase):

    def setUp(self):
        self.shopping_list = ShoppingList("Weekly", id=7)

    def test_add_item_sets_foreign_key(self):
        item = ShoppingListItem("Milk", 1, "gal", 3.49)
        self.shopping_list.add_item(item)
        self.assertIn(item, self.shopping_list.items)
        self.assertEqual(item.shopping_list_id, 7)

    def test_from_dict_points_items_at_the_list(self):
        sl = ShoppingList.from_dict({"id": 9, "name": "Pie"}, items=[{"id": 1, "item_name": "pecans"}])
        self.assertEqual(sl.items[0].shopping_list_id, 9)

    def test_progress(self):
        self.assertEqual(self.shopping_list.progress(), 0)
        self.shopping_list.add_item(ShoppingListItem("Milk", 1, "gal", is_purchased=True))
        self.shopping_list.add_item(ShoppingListItem("Bread", 1, "loaf"))
        self.shopping_list.add_item(ShoppingListItem("Eggs", 12, "count"))
        self.assertEqual(self.shopping_list.progress(), 33)

    def test_from_dict_tolerates_database_strings(self):
        sl = ShoppingList.from_dict({"id": 3, "name": "Pie", "total_estimated_cost": "12.40"}, items=[
            {"id": 1, "item_name": "pecans", "quantity": "8.000", "unit": "oz", "estimated_cost": "5.99"},
            {"id": 2, "item_name": "butter", "quantity": "x", "unit": "lb", "estimated_cost": ""},
        ])
        self.assertEqual(sl.total_estimated_cost, 12.40)
        self.assertEqual(sl.items[0].quantity, 8.0)
        self.assertEqual(sl.items[0].estimated_cost, 5.99)
        self.assertEqual(sl.items[1].quantity, 0)
        self.assertIsNone(sl.items[1].estimated_cost)
        self.assertEqual(sl.items[1].priority, "medium")

    def test_to_dict(self):
        self.shopping_list.add_item(ShoppingListItem("Milk", 1, "gal", 3.49, id=1))
        d = self.shopping_list.to_dict()
        self.assertEqual(d["name"], "Weekly")
        self.assertEqual(d["items"][0]["item_name"], "Milk")
        self.assertEqual(d["progress"], 0)
        self.assertNotIn("items", self.shopping_list.to_dict(include_items=False))
