import unittest
from mealrota.domain.Cook import Cook, full_week, next_cook_code
from mealrota.logic.scheduling.availability import assign_cook, eligible_cooks


class TestAvailability(unittest.TestCase):
    def setUp(self):
        self.a = Cook("A", "Stacey", full_week(True))
        self.b = Cook("B", "Sharon", full_week(True), week_overrides={0: {"mon": False}})
        self.cooks = [self.a, self.b]

    def test_override_applies_only_to_its_week(self):
        self.assertEqual(eligible_cooks(self.cooks, 0, "mon"), ["A"])
        self.assertEqual(eligible_cooks(self.cooks, 1, "mon"), ["A", "B"])

    def test_weekday_missing_from_override_uses_default(self):
        self.assertEqual(eligible_cooks(self.cooks, 0, "tue"), ["A", "B"])
        self.b.availability["tue"] = False
        self.assertEqual(eligible_cooks(self.cooks, 0, "tue"), ["A"])

    def test_nobody_available_falls_back_to_roster(self):
        self.a.availability["sun"] = False
        self.b.availability["sun"] = False
        self.assertEqual(eligible_cooks(self.cooks, 2, "sun"), ["A", "B"])

    def test_assign_cook_rotates(self):
        self.assertEqual(assign_cook(self.cooks, 0, 0), "A")  # only A on week 0 Monday
        self.assertEqual(assign_cook(self.cooks, 0, 1), "B")
        self.assertEqual(assign_cook(self.cooks, 0, 2), "A")
        self.assertEqual(assign_cook(self.cooks, 1, 0), "B")  # index 7 % 2
        self.assertIsNone(assign_cook([], 0, 0))

    def test_cook_serialization_keeps_overrides(self):
        data = self.b.to_dict()
        self.assertEqual(data["week_overrides"], {"0": {"mon": False}})
        again = Cook.from_dict(data)
        self.assertFalse(again.is_available(0, "mon"))
        self.assertTrue(again.is_available(1, "mon"))

    def test_next_cook_code(self):
        self.assertEqual(next_cook_code(self.cooks), "C")
        self.assertEqual(next_cook_code([Cook("B")]), "A")


if __name__ == '__main__':
    unittest.main()
