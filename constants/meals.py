"""
Meal Allocation Constants

Slot order, the daily split across slots, scoring weights and scale bounds
used by the meal allocator.
"""

# Order in which slots are allocated and returned
MEAL_ORDER = ('breakfast', 'lunch', 'dinner', 'snack')

# Share of the daily target given to each slot (applied to every macro)
DEFAULT_SPLIT = {
    'breakfast': 0.25,
    'lunch': 0.35,
    'dinner': 0.30,
    'snack': 0.10,
}

# Weights for the absolute deviation score (lower total wins).
# Protein adherence counts most, calories least since scaling corrects kcal.
SCORE_WEIGHTS = {
    'kcal': 0.5,
    'protein': 3.0,
    'carbs': 2.0,
    'fats': 2.0,
}

# Portion scale bounds
MIN_SCALE = 0.7
MAX_SCALE = 1.5
