import unittest
from mealrota.domain.Dish import Dish
from mealrota.domain.Schedule import DayCell
from mealrota.logic.shopping.list_builder import build_grocery_list, categorize


def _day(label, ingredients, cook):
    return DayCell(label, label[:3].lower(), meals={"dinner": Dish(name=label, ingredients=ingredients)}, cook=cook)


class TestGroceryList(unittest.TestCase):
    def setUp(self):
        self.days = [
            _day("Monday", "chicken breast, rice, onion", "A"),
            _day("Tuesday", "Chicken Breast ,  onion, olive oil,,", "B"),
            _day("Wednesday", "milk", "A"),
        ]

    def test_counts_categories_and_order(self):
        items = build_grocery_list(self.days)
        self.assertEqual(items, [
            {"category": "Dairy & Eggs", "item": "Milk", "count": 1},
            {"category": "Grains & Staples", "item": "Rice", "count": 1},
            {"category": "Pantry", "item": "Olive Oil", "count": 1},
            {"category": "Proteins", "item": "Chicken Breast", "count": 2},
            {"category": "Vegetables & Fruits", "item": "Onion", "count": 2},
        ])

    def test_order_independent(self):
        self.assertEqual(build_grocery_list(self.days), build_grocery_list(list(reversed(self.days))))

    def test_cook_filter(self):
        items = build_grocery_list(self.days, cook="B")
        self.assertEqual({i["item"]: i["count"] for i in items},
                         {"Chicken Breast": 1, "Onion": 1, "Olive Oil": 1})
        self.assertEqual(build_grocery_list(self.days, cook="Z"), [])

    def test_higher_count_first_within_category(self):
        days = [
            _day("Monday", "tomato, onion", "A"),
            _day("Tuesday", "onion", "A"),
        ]
        items = build_grocery_list(days)
        self.assertEqual([i["item"] for i in items], ["Onion", "Tomato"])

    def test_empty_cells_ignored(self):
        self.assertEqual(build_grocery_list([DayCell("Monday", "mon")]), [])

    def test_categorize_first_match_wins(self):
        self.assertEqual(categorize("Eggs"), "Proteins")
        self.assertEqual(categorize("tomato sauce"), "Vegetables & Fruits")
        self.assertEqual(categorize("dill"), "Other")


if __name__ == '__main__':
    unittest.main()
