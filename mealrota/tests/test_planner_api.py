import tempfile
import unittest
from pathlib import Path

from fastapi.testclient import TestClient

from mealrota.api.api_run import app, get_session
from mealrota.events.Event_Bus import EventBus
from mealrota.infra.Autosave import Autosave
from mealrota.infra.Local_Store import LocalStore
from mealrota.infra.State_Repository import StateRepository
from mealrota.logic.planner.session import PlannerSession
from mealrota.utilities.constants import AUTOSAVE_KEY


class TestPlannerAPI(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.local = LocalStore(Path(self._tmp.name) / "local_store.json")
        repo = StateRepository(local=self.local)
        bus = EventBus()
        self.session = PlannerSession(repository=repo, autosave=Autosave(repo, delay=5.0, bus=bus), bus=bus)
        self.session.restore()
        self.session.update_settings(start_date="2024-03-04")
        app.dependency_overrides[get_session] = lambda: self.session
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()
        self.session.autosave.cancel()
        self._tmp.cleanup()

    def test_plan_has_four_weeks(self):
        resp = self.client.get("/api/plan")
        self.assertEqual(resp.status_code, 200)
        weeks = resp.json()["weeks"]
        self.assertEqual(len(weeks), 4)
        self.assertTrue(all(day["meals"]["dinner"]["name"] for week in weeks for day in week))
        self.assertTrue(weeks[0][0]["date"].startswith("2024-03-04T"))

    def test_fill_is_deterministic_for_seed(self):
        self.client.post("/api/settings", json={"seed": "abc"})
        first = self.client.post("/api/plan/fill").json()["weeks"]
        second = self.client.post("/api/plan/fill").json()["weeks"]
        self.assertEqual(first, second)

    def test_add_dish_validation(self):
        resp = self.client.post("/api/dishes", json={"name": ""})
        self.assertEqual(resp.status_code, 400)
        self.assertIn("detail", resp.json())
        resp = self.client.post("/api/dishes", json={"name": "Shrimp scampi", "score": 8.5})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["dishes"][-1]["name"], "Shrimp scampi")

    def test_edit_and_commit_dish(self):
        dish_id = self.client.get("/api/plan").json()["weeks"][0][0]["meals"]["dinner"]["id"]
        resp = self.client.patch(f"/api/dishes/{dish_id}", json={"field": "name", "value": "House special"})
        self.assertEqual(resp.json()["name"], "House special")
        plan = self.client.post("/api/dishes/commit").json()
        self.assertEqual(plan["weeks"][0][0]["meals"]["dinner"]["name"], "House special")
        self.assertEqual(self.client.patch(f"/api/dishes/{dish_id}",
                                           json={"field": "colour", "value": 1}).status_code, 400)

    def test_slot_rating_and_link(self):
        resp = self.client.post("/api/plan/slot/rating", json={"week_index": 0, "day_index": 1, "rating": 4})
        self.assertEqual(resp.json()["weeks"][0][1]["meals"]["dinner"]["rating"], 4)
        resp = self.client.post("/api/plan/slot/recipe-link",
                                json={"week_index": 0, "day_index": 1, "recipe_url": "ftp://nope"})
        self.assertEqual(resp.status_code, 400)
        resp = self.client.post("/api/plan/slot/rating", json={"week_index": 5, "day_index": 1, "rating": 4})
        self.assertEqual(resp.status_code, 400)

    def test_grocery(self):
        resp = self.client.get("/api/grocery", params={"week": 0, "cook": "A"})
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["count"], len(body["items"]))
        self.assertTrue(body["items"])

    def test_cook_roster(self):
        resp = self.client.post("/api/cooks/B/availability",
                                json={"weekday": "mon", "available": False, "week_index": 0})
        self.assertEqual(resp.json()["weeks"][0][0]["cook"], "A")
        self.assertEqual(self.client.post("/api/cooks", json={"name": "Dana"}).json()["cooks"][-1]["code"], "C")
        self.assertEqual(self.client.patch("/api/cooks/C", json={"name": "Dee"}).json()["cooks"][-1]["name"], "Dee")
        self.client.delete("/api/cooks/C")
        self.client.delete("/api/cooks/B")
        self.assertEqual(self.client.delete("/api/cooks/A").status_code, 400)

    def test_settings_clamped(self):
        plan = self.client.post("/api/settings", json={"repeat_cap": 99, "mode": "all"}).json()
        self.assertEqual(plan["repeat_cap"], 7)
        self.assertEqual(plan["mode"], "all")
        self.assertEqual(self.client.post("/api/settings", json={"mode": "brunch"}).status_code, 400)

    def test_csv_import(self):
        csv_bytes = b"Meal Name,Average Score\nTacos,8\nChili,7\n"
        resp = self.client.post("/api/import/csv", files={"file": ("dishes.csv", csv_bytes, "text/csv")})
        self.assertEqual(resp.json(), {"imported": 2})
        names = [d["name"] for d in self.client.get("/api/plan").json()["dishes"]]
        self.assertEqual(names, ["Tacos", "Chili"])
        resp = self.client.post("/api/import/csv", files={"file": ("empty.csv", b"Meal Name\n", "text/csv")})
        self.assertEqual(resp.status_code, 400)

    def test_save_now_writes_local_store(self):
        self.assertEqual(self.client.post("/api/save").json(), {"saved": True})
        self.assertIsNotNone(self.local.get_item(AUTOSAVE_KEY))
        status = self.client.get("/api/save-status").json()
        self.assertFalse(status["remote"])

    def test_exports(self):
        csv_resp = self.client.get("/export/week.csv", params={"week": 1})
        self.assertTrue(csv_resp.text.startswith("Day,Breakfast,Lunch,Dinner,Cook,Recipe\r\n"))
        ics = self.client.get("/export/calendar.ics", params={"weeks": [0, 1]}).text
        self.assertEqual(ics.count("BEGIN:VEVENT"), 14)
        grocery = self.client.get("/export/grocery.csv", params={"week": 0, "cook": "B"})
        self.assertIn("week-1-grocery-cook-b.csv", grocery.headers["content-disposition"])
        pdf = self.client.get("/export_pdf", params={"week": 0})
        self.assertEqual(pdf.headers["content-type"], "application/pdf")
        self.assertTrue(pdf.content.startswith(b"%PDF"))
        self.assertEqual(self.client.get("/export_pdf", params={"week": 9}).status_code, 422)


if __name__ == '__main__':
    unittest.main()
