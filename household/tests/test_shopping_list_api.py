import tempfile
import unittest
from pathlib import Path
from fastapi.testclient import TestClient
from household.api.api_run import app
from household.api.dependencies import get_repository
from household.events import web_observers
from household.infra.Shopping_List_Repository import ShoppingListRepository


class TestShoppingListAPI(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.repo = ShoppingListRepository(Path(self._tmp.name) / "shopping_lists.json")
        app.dependency_overrides[get_repository] = lambda: self.repo

    def tearDown(self):
        app.dependency_overrides.pop(get_repository, None)
        self._tmp.cleanup()

    def _create(self, **overrides):
        body = {
            "name": "Weekly",
            "items": [
                {"item_name": "milk", "quantity": 1, "unit": "gal", "estimated_cost": 3.5},
                {"item_name": "bread", "quantity": 1, "unit": "loaf", "estimated_cost": 2.25},
            ],
        }
        body.update(overrides)
        resp = self.client.post('/api/shopping-lists', json=body)
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()

    def test_create_and_fetch(self):
        created = self._create()
        self.assertEqual(created['total_estimated_cost'], 5.75)
        self.assertEqual(len(created['items']), 2)

        resp = self.client.get(f"/api/shopping-lists/{created['id']}")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()['name'], 'Weekly')

        listing = self.client.get('/api/shopping-lists').json()
        self.assertEqual(len(listing), 1)
        self.assertEqual(listing[0]['item_count'], 2)
        self.assertNotIn('items', listing[0])

    def test_validation_errors(self):
        resp = self.client.post('/api/shopping-lists', json={"name": "   "})
        self.assertEqual(resp.status_code, 422)
        resp = self.client.post('/api/shopping-lists/generate', json={"list_name": "Pie", "ingredients": []})
        self.assertEqual(resp.status_code, 422)

    def test_unknown_list_is_404(self):
        for method, url in [('get', '/api/shopping-lists/999'),
                            ('delete', '/api/shopping-lists/999'),
                            ('post', '/api/shopping-lists/999/reconcile'),
                            ('get', '/api/shopping-lists/999/audit')]:
            resp = getattr(self.client, method)(url)
            self.assertEqual(resp.status_code, 404, url)

    def test_generate_from_ingredients(self):
        resp = self.client.post('/api/shopping-lists/generate', json={
            "list_name": "Pecan pie",
            "servings_multiplier": 2,
            "ingredients": [
                {"name": "brown sugar", "quantity": 0.5, "unit": "cup"},
                {"name": "pecans", "quantity": 1, "unit": "cup"},
            ],
        })
        self.assertEqual(resp.status_code, 201, resp.text)
        data = resp.json()
        self.assertEqual(data['name'], 'Pecan pie')
        self.assertEqual(data['total_estimated_cost'], 8.23)
        sugar = [i for i in data['items'] if i['item_name'] == 'brown sugar'][0]
        self.assertEqual(sugar['unit'], 'lb bag')
        self.assertEqual(sugar['notes'], 'Light or dark brown sugar (Recipe calls for: 1 cup)')

    def test_item_edits_then_reconcile(self):
        created = self._create()
        list_id = created['id']
        resp = self.client.post(f'/api/shopping-lists/{list_id}/items',
                                json={"item_name": "eggs", "quantity": 12, "unit": "count", "estimated_cost": 3.99})
        self.assertEqual(resp.status_code, 201)

        audit = self.client.get(f'/api/shopping-lists/{list_id}/audit').json()
        self.assertFalse(audit['matches'])
        self.assertEqual((audit['stored_total'], audit['computed_total']), (5.75, 9.74))

        result = self.client.post(f'/api/shopping-lists/{list_id}/reconcile').json()
        self.assertEqual(result, {"list_id": list_id, "previous_total": 5.75, "new_total": 9.74,
                                  "updated": True, "changed": True})
        self.assertTrue(self.client.get(f'/api/shopping-lists/{list_id}/audit').json()['matches'])

    def test_patch_and_delete_item(self):
        created = self._create()
        list_id, item_id = created['id'], created['items'][0]['id']
        resp = self.client.patch(f'/api/shopping-lists/{list_id}/items/{item_id}', json={"is_purchased": True})
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.json()['is_purchased'])
        self.assertEqual(resp.json()['estimated_cost'], 3.5)
        self.assertEqual(self.client.get(f'/api/shopping-lists/{list_id}').json()['progress'], 50)

        resp = self.client.delete(f'/api/shopping-lists/{list_id}/items/{item_id}')
        self.assertEqual(resp.status_code, 200)
        resp = self.client.patch(f'/api/shopping-lists/{list_id}/items/{item_id}', json={"is_purchased": False})
        self.assertEqual(resp.status_code, 404)

    def test_patch_rejects_null_and_blank_values(self):
        created = self._create()
        list_id, item_id = created['id'], created['items'][0]['id']
        url = f'/api/shopping-lists/{list_id}/items/{item_id}'
        for body in ({"item_name": None}, {"quantity": None}, {"priority": None},
                     {"unit": None}, {"is_purchased": None}, {"item_name": "   "}):
            resp = self.client.patch(url, json=body)
            self.assertEqual(resp.status_code, 422, body)

        item = self.client.get(f'/api/shopping-lists/{list_id}').json()['items'][0]
        self.assertEqual((item['item_name'], item['quantity'], item['priority']), ('milk', 1.0, 'medium'))

        resp = self.client.patch(url, json={"item_name": "  oat milk ", "notes": None})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()['item_name'], 'oat milk')

    def test_delete_list(self):
        created = self._create()
        resp = self.client.delete(f"/api/shopping-lists/{created['id']}")
        self.assertEqual(resp.json()['items_removed'], 2)
        self.assertEqual(self.client.get(f"/api/shopping-lists/{created['id']}").status_code, 404)

    def test_reprice_and_reconcile_all(self):
        created = self._create(total_estimated_cost=0)
        resp = self.client.post(f"/api/shopping-lists/{created['id']}/reprice")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()['new_total'], 4.0)
        resp = self.client.post('/api/shopping-lists/reconcile-all')
        self.assertEqual(resp.json()['count'], 1)
        self.assertEqual(resp.json()['changed'], 0)

    def test_events_endpoint(self):
        web_observers.start()
        cursor = self.client.get('/api/shopping-lists/events').json()['next_cursor']
        created = self._create(total_estimated_cost=1)
        self.client.post(f"/api/shopping-lists/{created['id']}/reconcile")
        events = self.client.get(f'/api/shopping-lists/events?since={cursor}').json()['events']
        self.assertIn('shopping_list.reconciled', [e['type'] for e in events])


class TestPackagesAPI(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def test_resolve(self):
        resp = self.client.get('/api/packages/resolve', params={"name": "brown sugar", "quantity": 0.5, "unit": "cup"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {
            "package_size": "1", "package_unit": "lb bag", "notes": "Light or dark brown sugar",
            "original_quantity": "0.5 cup", "matched_key": "brown sugar",
        })

    def test_resolve_fallback(self):
        data = self.client.get('/api/packages/resolve', params={"name": "UNKNOWN_XYZ", "quantity": 3, "unit": "tbsp"}).json()
        self.assertEqual((data['package_size'], data['package_unit'], data['original_quantity']), ("3", "tbsp", "3 tbsp"))
        self.assertNotIn('notes', data)

    def test_price(self):
        self.assertEqual(self.client.get('/api/packages/price', params={"name": "pecans"}).json(),
                         {"min": 4.99, "max": 6.99, "estimated_cost": 5.99})
        data = self.client.get('/api/packages/price', params={"name": "unobtainium"}).json()
        self.assertEqual((data['min'], data['max']), (1.0, 3.0))

    def test_health(self):
        self.assertEqual(self.client.get('/health').json(), {"status": "ok"})
