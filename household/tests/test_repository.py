import json
import tempfile
import unittest
from pathlib import Path
from household.domain.errors import ShoppingListNotFoundError, ShoppingListItemNotFoundError
from household.infra.Shopping_List_Repository import ShoppingListRepository


class TestShoppingListRepository(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "data" / "shopping_lists.json"
        self.repo = ShoppingListRepository(self.path)

    def tearDown(self):
        self._tmp.cleanup()

    def test_missing_file_reads_as_empty(self):
        self.assertEqual(self.repo.list_lists(), [])
        self.assertIsNone(self.repo.latest_list())

    def test_create_list_assigns_ids_and_persists(self):
        sl = self.repo.create_list({"name": "Weekly"}, [
            {"item_name": "milk", "quantity": 1, "unit": "gal", "estimated_cost": 3.49},
            {"item_name": "eggs", "quantity": 12, "unit": "count"},
        ])
        self.assertEqual(sl.id, 1)
        self.assertEqual([i.id for i in sl.items], [1, 2])
        self.assertTrue(all(i.shopping_list_id == 1 for i in sl.items))
        with open(self.path, encoding="utf-8") as f:
            stored = json.load(f)
        self.assertEqual(stored["next_list_id"], 2)
        self.assertEqual(len(stored["items"]), 2)

    def test_latest_list_is_highest_id(self):
        self.repo.create_list({"name": "First"})
        second = self.repo.create_list({"name": "Second"})
        self.assertEqual(self.repo.latest_list().id, second.id)
        self.assertEqual([sl.name for sl in self.repo.list_lists()], ["Second", "First"])

    def test_item_changes_do_not_touch_total(self):
        sl = self.repo.create_list({"name": "Weekly", "total_estimated_cost": 3.49},
                                   [{"item_name": "milk", "quantity": 1, "estimated_cost": 3.49}])
        self.repo.add_item(sl.id, {"item_name": "bread", "quantity": 1, "estimated_cost": 2.99})
        self.assertEqual(self.repo.get_list(sl.id).total_estimated_cost, 3.49)

    def test_update_item_ignores_unknown_fields(self):
        sl = self.repo.create_list({"name": "Weekly"}, [{"item_name": "milk", "quantity": 1}])
        item = self.repo.update_item(sl.id, sl.items[0].id,
                                     {"is_purchased": True, "estimated_cost": "3.10", "id": 99})
        self.assertTrue(item.is_purchased)
        self.assertEqual(item.estimated_cost, 3.10)
        self.assertEqual(item.id, sl.items[0].id)

    def test_delete_list_cascades_items(self):
        keep = self.repo.create_list({"name": "Keep"}, [{"item_name": "milk", "quantity": 1}])
        drop = self.repo.create_list({"name": "Drop"}, [{"item_name": "a", "quantity": 1},
                                                        {"item_name": "b", "quantity": 1}])
        self.assertEqual(self.repo.delete_list(drop.id), 2)
        with self.assertRaises(ShoppingListNotFoundError):
            self.repo.get_list(drop.id)
        self.assertEqual(len(self.repo.get_items(keep.id)), 1)

    def test_not_found_errors(self):
        sl = self.repo.create_list({"name": "Weekly"})
        with self.assertRaises(ShoppingListNotFoundError):
            self.repo.add_item(999, {"item_name": "milk", "quantity": 1})
        with self.assertRaises(ShoppingListItemNotFoundError):
            self.repo.update_item(sl.id, 999, {"is_purchased": True})
        with self.assertRaises(ShoppingListItemNotFoundError):
            self.repo.delete_item(sl.id, 999)

    def test_transaction_rolls_back_on_error(self):
        sl = self.repo.create_list({"name": "Weekly", "total_estimated_cost": 4.0})
        with self.assertRaises(RuntimeError):
            with self.repo.transaction() as session:
                session.set_total(sl.id, 99.0)
                session.add_item(sl.id, {"item_name": "caviar", "quantity": 1})
                raise RuntimeError("boom")
        reloaded = self.repo.get_list(sl.id)
        self.assertEqual(reloaded.total_estimated_cost, 4.0)
        self.assertEqual(reloaded.items, [])

    def test_no_temp_files_left_behind(self):
        self.repo.create_list({"name": "Weekly"})
        leftovers = [p.name for p in self.path.parent.iterdir() if p.name.startswith(".shopping_lists_")]
        self.assertEqual(leftovers, [])

    def test_list_ids_with_total(self):
        zero = self.repo.create_list({"name": "Zero"})
        self.repo.create_list({"name": "Priced", "total_estimated_cost": 2.5})
        newer_zero = self.repo.create_list({"name": "Zero again", "total_estimated_cost": "0.00"})
        with self.repo.snapshot() as session:
            self.assertEqual(session.list_ids_with_total(0.0), [newer_zero.id, zero.id])
            self.assertEqual(session.list_ids_with_total(0.0, limit=1), [newer_zero.id])
