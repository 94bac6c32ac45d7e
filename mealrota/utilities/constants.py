from typing import Final

DATE_FORMAT: Final[str] = "%Y-%m-%d"

WEEKS_IN_ROTATION: Final[int] = 4
DAY_LABELS: Final[list[str]] = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
WEEKDAYS: Final[list[str]] = ["mon", "tue", "wed", "thu", "fri", "sat", "sun"]

MEAL_CLASSES: Final[list[str]] = ["Breakfast", "Lunch", "Dinner"]
# slot key -> meal class it is filled from
SLOT_CLASSES: Final[dict[str, str]] = {"breakfast": "Breakfast", "lunch": "Lunch", "dinner": "Dinner"}
MODE_DINNERS: Final[str] = "dinners"
MODE_ALL: Final[str] = "all"

DEFAULT_REPEAT_CAP: Final[int] = 2
MIN_REPEAT_CAP: Final[int] = 1
MAX_REPEAT_CAP: Final[int] = 7
DEFAULT_THRESHOLD: Final[float] = 3
RECENT_WINDOW: Final[int] = 8
TOP_CANDIDATES: Final[int] = 6
RECENT_PENALTY: Final[int] = 100
ADJACENT_PENALTY: Final[int] = 50

AUTOSAVE_KEY: Final[str] = "mealRotationAutosave"
CACHE_CONTROL_NO_STORE: Final[str] = "no-store, no-cache, must-revalidate, max-age=0"

DEFAULT_COOKS: Final[list[dict]] = [
    {"code": "A", "name": "Stacey", "availability": {d: True for d in WEEKDAYS}, "week_overrides": {}},
    {"code": "B", "name": "Sharon", "availability": {d: True for d in WEEKDAYS}, "week_overrides": {}},
]

# Order matters: the first category whose keyword occurs in the item wins.
INGREDIENT_CATEGORIES: Final[list[tuple[str, list[str]]]] = [
    ("Proteins", ["chicken", "turkey", "beef", "pork", "salmon", "shrimp", "tuna", "ham", "egg"]),
    ("Grains & Staples", ["rice", "quinoa", "pasta", "tortilla", "bread", "bun", "oat", "couscous", "farro",
                          "lasagna", "noodle"]),
    ("Vegetables & Fruits", ["lettuce", "tomato", "onion", "garlic", "pepper", "broccoli", "spinach", "kale",
                             "zucchini", "carrot", "apple", "lemon", "lime", "berry", "asparagus", "potato",
                             "sweet"]),
    ("Dairy & Eggs", ["milk", "yogurt", "cheese", "mozzarella", "ricotta", "egg"]),
    ("Pantry", ["oil", "olive", "spice", "oregano", "basil", "cumin", "chili", "salsa", "sauce", "tomato",
                "broth", "beans", "flour"]),
]
OTHER_CATEGORY: Final[str] = "Other"

BREAKFAST_KEYWORDS: Final[list[str]] = ["egg", "pancake", "waffle", "muffin", "oatmeal", "parfait", "yogurt"]
LUNCH_KEYWORDS: Final[list[str]] = ["salad", "sandwich", "wrap", "soup", "bowl"]

# (keywords, ingredients); checked in order against the lower-cased dish name
INGREDIENT_HEURISTICS: Final[list[tuple[tuple[str, ...], str]]] = [
    (("taco",), "lean ground turkey, low-sodium taco seasoning, whole-wheat tortillas, lettuce, tomato, onion, "
                "cilantro, plain Greek yogurt, lime"),
    (("chili",), "lean ground turkey, no-salt-added beans, no-salt-added tomato sauce, onion, bell pepper, "
                 "chili powder, cumin, garlic"),
    (("salmon",), "salmon fillets, lemon, garlic, olive oil, pepper, parsley"),
    (("meatloaf",), "lean ground turkey, egg, onion, rolled oats, no-salt-added tomato sauce"),
    (("stir-fry", "stir fry"), "chicken breast, broccoli, bell pepper, snap peas, garlic, ginger, "
                               "low-sodium soy (or coconut aminos), olive oil"),
    (("pasta", "spaghetti", "zoodles"), "whole-wheat pasta, low-sodium marinara, turkey meatballs, basil"),
    (("lasagna",), "whole-wheat lasagna, low-fat ricotta, turkey, low-sodium marinara, spinach"),
    (("burger",), "lean ground turkey, whole-grain buns, lettuce, tomato, onion, avocado"),
    (("wrap",), "whole-wheat wraps, turkey breast, lettuce, tomato, hummus"),
    (("lentil",), "lentils, low-sodium broth, onion, carrot, celery, garlic, tomatoes"),
    (("quinoa",), "quinoa, low-sodium broth, mixed vegetables, lemon"),
    (("casserole",), "brown rice or whole-wheat pasta, chicken breast, broccoli, low-fat yogurt, herbs"),
    (("pizza",), "whole-wheat crust, low-sodium marinara, part-skim mozzarella, mushrooms, peppers"),
    (("mac",), "whole-wheat pasta, low-fat milk, reduced-fat cheese, cauliflower puree (optional)"),
    (("burrito",), "brown rice, black beans (rinsed), turkey, corn, tomato, lettuce, salsa (no-salt-added)"),
    (("tuna",), "canned tuna in water, Greek yogurt, celery, dill, lemon, whole-wheat wraps"),
    (("pancake",), "whole-wheat flour, baking powder, egg, low-fat milk, fruit topping"),
    (("egg",), "eggs, spinach, tomato, olive oil, pepper"),
    (("pork",), "pork tenderloin, ginger, garlic, low-sodium soy (or coconut aminos), sesame oil"),
    (("shrimp",), "shrimp, garlic, lemon, olive oil, parsley"),
    (("soup",), "low-sodium broth, onion, carrot, celery, garlic, herbs, vegetables"),
    (("salad",), "mixed greens, tomato, cucumber, carrot, red onion, balsamic vinegar, olive oil"),
    (("beef",), "extra-lean beef, garlic, onion, pepper, mixed vegetables"),
    (("chicken",), "boneless skinless chicken breast, olive oil, garlic, pepper, dried herbs, lemon"),
]
GENERIC_INGREDIENTS: Final[str] = "lean protein, vegetables, olive oil, garlic, pepper, herbs"

SAMPLE_DISHES: Final[list[tuple[str, float]]] = [
    ("Veggie pizza (whole-wheat crust, low-fat cheese)", 7.1),
    ("Pot roast (lean) with whole-grain rolls and greens", 7.4),
    ("Turkey burgers with baked sweet potato fries and salad", 7.9),
    ("Burrito bowls (turkey, black beans, brown rice)", 7.1),
    ("Grilled salmon with quinoa and asparagus", 8.0),
    ("Whole-wheat pasta with turkey meatballs, zucchini", 7.6),
    ("Turkey chili (low-sodium), brown rice, corn", 7.6),
    ("Caprese salad with grilled chicken, whole-grain pasta", 7.2),
    ("Chicken and wild rice casserole, green beans", 7.1),
    ("Minestrone soup (low-sodium), whole-grain bread", 7.1),
]

# Import: number of voters a "Total Score" column is divided by
IMPORT_VOTER_COUNT: Final[int] = 6
IMPORT_DEFAULT_SCORE: Final[float] = 3
