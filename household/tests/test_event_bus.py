import unittest
from household.events import web_observers
from household.events.Event_Bus import EventBus, SHOPPING_LIST_RECONCILED, SHOPPING_LIST_TOTAL_DRIFT
from household.events.event_helpers import publish_reconciled


class TestEventBus(unittest.TestCase):

    def test_subscribe_publish_unsubscribe(self):
        bus = EventBus()
        received = []
        listener = lambda name, payload: received.append((name, payload))
        bus.subscribe("x", listener)
        bus.subscribe("x", listener)
        bus.publish("x", 1)
        self.assertEqual(received, [("x", 1)])
        self.assertTrue(bus.unsubscribe("x", listener))
        self.assertFalse(bus.unsubscribe("x", listener))
        bus.publish("x", 2)
        self.assertEqual(received, [("x", 1)])

    def test_subscribe_returns_remover(self):
        bus = EventBus()
        received = []
        remove = bus.subscribe("x", lambda name, payload: received.append(payload))
        bus.publish("x", 1)
        self.assertTrue(remove())
        bus.publish("x", 2)
        self.assertEqual(received, [1])
        self.assertFalse(remove())

    def test_failing_subscriber_does_not_stop_delivery(self):
        bus = EventBus()
        received = []

        def broken(name, payload):
            raise RuntimeError("boom")

        bus.subscribe("x", broken)
        bus.subscribe("x", lambda name, payload: received.append(payload))
        with self.assertLogs("household.events.Event_Bus", level="ERROR"):
            bus.publish("x", "ok")
        self.assertEqual(received, ["ok"])


class TestWebObservers(unittest.TestCase):

    def test_records_reconcile_and_drift_events(self):
        web_observers.start()
        web_observers.start()
        cursor = web_observers.get_events()["next_cursor"]
        publish_reconciled(5, 1.0, 3.75)
        data = web_observers.get_events(since=cursor)
        types = [e["type"] for e in data["events"]]
        self.assertEqual(types, [SHOPPING_LIST_RECONCILED, SHOPPING_LIST_TOTAL_DRIFT])
        drift = data["events"][1]
        self.assertEqual((drift["list_id"], drift["difference"]), (5, 2.75))
        self.assertEqual(data["next_cursor"], data["events"][-1]["id"])
        self.assertEqual(web_observers.get_events(since=data["next_cursor"])["events"], [])
