import unittest

from mealrota.events import save_observers
from mealrota.events.Event_Bus import EventBus, GLOBAL_EVENT_BUS, STATE_SAVED


class TestEventBus(unittest.TestCase):
    def test_failing_listener_does_not_stop_delivery(self):
        bus = EventBus()
        seen = []

        def broken(name, payload):
            raise RuntimeError("boom")

        bus.subscribe(STATE_SAVED, broken)
        bus.subscribe(STATE_SAVED, lambda name, payload: seen.append(payload))
        self.assertEqual(bus.publish(STATE_SAVED, {"ok": True}), 1)
        self.assertEqual(seen, [{"ok": True}])

    def test_subscribe_once_and_unsubscribe(self):
        bus = EventBus()
        listener = lambda name, payload: None  # noqa: E731
        bus.subscribe("x", listener)
        bus.subscribe("x", listener)
        self.assertEqual(len(bus.listeners("x")), 1)
        bus.unsubscribe("x", listener)
        bus.unsubscribe("x", listener)
        self.assertEqual(bus.publish("x"), 0)


class TestSaveObservers(unittest.TestCase):
    def setUp(self):
        save_observers.start()
        save_observers.reset()

    def tearDown(self):
        save_observers.reset()

    def test_start_is_idempotent(self):
        save_observers.start()
        self.assertEqual(GLOBAL_EVENT_BUS.listeners(STATE_SAVED).count(save_observers._record), 1)

    def test_last_successful_save(self):
        self.assertIsNone(save_observers.last_saved_at())
        GLOBAL_EVENT_BUS.publish(STATE_SAVED, {"ok": True, "at": 100.0})
        GLOBAL_EVENT_BUS.publish(STATE_SAVED, {"ok": False, "at": 200.0})
        self.assertEqual(save_observers.last_saved_at(), 100.0)

    def test_events_since_cursor(self):
        GLOBAL_EVENT_BUS.publish(STATE_SAVED, {"ok": True, "at": 1.0})
        first = save_observers.get_events()
        self.assertEqual(first["next_cursor"], 1)
        GLOBAL_EVENT_BUS.publish(STATE_SAVED, {"ok": True, "at": 2.0})
        newer = save_observers.get_events(since=first["next_cursor"])
        self.assertEqual([e["at"] for e in newer["events"]], [2.0])

    def test_saved_label(self):
        self.assertEqual(save_observers.saved_label(None), "")
        self.assertEqual(save_observers.saved_label(100.0, now=105.0), "just now")
        self.assertEqual(save_observers.saved_label(100.0, now=145.0), "45s ago")
        self.assertEqual(save_observers.saved_label(100.0, now=400.0), "5m ago")
        self.assertEqual(save_observers.saved_label(100.0, now=100.0 + 7300), "2h ago")


if __name__ == '__main__':
    unittest.main()
